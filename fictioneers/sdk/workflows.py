"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Multi-call workflows built on the endpoint methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from fictioneers.logging_config import get_logger
from fictioneers.sdk.models import InitialisedUser

if TYPE_CHECKING:
    from fictioneers.sdk.client import FictioneersClient

logger = get_logger(__name__)


async def initialise_and_progress_user(
    client: FictioneersClient,
    timeline_id: str,
    disable_time_guards: bool = False,
    pause_at_beats: bool = False,
    max_steps: Optional[Union[int, str]] = None,
    attach_existing_user: bool = False,
) -> InitialisedUser:
    """
    Get or create the session user, then load their timeline events.

    The user is created on ``timeline_id`` only when ``GET /users/me``
    returns no data. ``InitialisedUser.user`` holds the created user's
    data; when the user already existed it stays None unless
    ``attach_existing_user`` is set, in which case the fetched user's data
    is returned instead.

    Errors from any step propagate unchanged; a failed creation aborts the
    workflow before timeline events are requested.

    Args:
        client: Client whose session user is initialised.
        timeline_id: Published timeline to place a new user on.
        disable_time_guards: Passed to user creation.
        pause_at_beats: Passed to user creation.
        max_steps: Passed to user creation.
        attach_existing_user: Populate ``user`` for an existing user too.

    Returns:
        InitialisedUser with the user (see above) and their timeline events.
    """
    user = None

    get_user_response = await client.get_user()
    existing = get_user_response.get("data") if isinstance(get_user_response, dict) else None

    if existing is None:
        logger.info(f"User {client.get_user_id()} not found, creating on timeline {timeline_id}")
        create_user_response = await client.create_user(
            timeline_id=timeline_id,
            disable_time_guards=disable_time_guards,
            pause_at_beats=pause_at_beats,
            max_steps=max_steps,
        )
        user = create_user_response.get("data")
    elif attach_existing_user:
        user = existing

    events_response = await client.get_user_timeline_events()
    user_timeline_events = (
        events_response.get("data") if isinstance(events_response, dict) else None
    ) or []

    return InitialisedUser(user=user, user_timeline_events=user_timeline_events)
