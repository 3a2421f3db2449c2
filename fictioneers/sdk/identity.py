"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Client-side user identifiers.
"""

import uuid


def generate_user_id() -> str:
    """Return a random version-4 UUID string for use as a default user id."""
    return str(uuid.uuid4())


def is_valid_user_id(value: str) -> bool:
    """Whether ``value`` is a canonical version-4 UUID string."""
    try:
        parsed = uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return parsed.version == 4 and str(parsed) == value.lower()
