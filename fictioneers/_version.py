"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Version information for the Fictioneers SDK.

The version is read from the VERSION file at the repository root.
"""

from pathlib import Path

def get_version() -> str:
    """
    Read version from VERSION file.

    Returns:
        str: The version string (e.g., "0.1.0")
    """
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "unknown"

__version__ = get_version()
