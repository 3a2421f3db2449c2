"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

SDK User Operations.

Audience endpoints acting on the session's current user. The user is
identified by the access token (public keys) or by the explicit user id
header (secret keys).
"""

from __future__ import annotations

from typing import Optional, Union

from fictioneers.exceptions import InvalidArgumentError
from fictioneers.logging_config import get_logger
from fictioneers.sdk.dispatcher import RequestDispatcher
from fictioneers.sdk.models import DeleteResponse, ResponseEnvelope

logger = get_logger(__name__)


DEFAULT_TIMEZONE = "Europe/London"


def _coerce_max_steps(max_steps: Optional[Union[int, str]]) -> Optional[int]:
    if max_steps is None or isinstance(max_steps, int):
        return max_steps
    try:
        return int(max_steps)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"max_steps must be an integer, got {max_steps!r}") from e


class UserOperations:
    """Current-user operations."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher

    async def get(self) -> ResponseEnvelope:
        """Retrieve detailed representation of the current user."""
        return await self._dispatcher.request("/users/me")

    async def delete(self) -> DeleteResponse:
        """Delete the user and any associated objects from the current timeline."""
        logger.info("Deleting current user")
        return await self._dispatcher.request("/users/me", method="DELETE")

    async def create(
        self,
        timeline_id: str,
        disable_time_guards: bool = False,
        pause_at_beats: bool = False,
        max_steps: Optional[Union[int, str]] = None,
    ) -> ResponseEnvelope:
        """Create a new audience user on a published timeline."""
        body = {
            "published_timeline_id": timeline_id,
            "timezone": DEFAULT_TIMEZONE,
            "disable_time_guards": disable_time_guards,
            "pause_at_beats": pause_at_beats,
            "max_steps": _coerce_max_steps(max_steps),
        }
        logger.info(f"Creating user on timeline {timeline_id}")
        return await self._dispatcher.request("/users", method="POST", body=body)

    async def progress_step(
        self,
        max_steps: Optional[Union[int, str]] = None,
        pause_at_beats: bool = True,
    ) -> ResponseEnvelope:
        """Progress the user's step position along the timeline.

        ``max_steps`` may be given as a numeric string.
        """
        body = {
            "max_steps": _coerce_max_steps(max_steps),
            "pause_at_beats": pause_at_beats,
        }
        return await self._dispatcher.request(
            "/users/me/progress-step", method="POST", body=body
        )
