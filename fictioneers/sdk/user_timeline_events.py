"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

SDK User Timeline Event Operations.
"""

from __future__ import annotations

from fictioneers.sdk.dispatcher import RequestDispatcher
from fictioneers.sdk.models import ResponseEnvelope


class UserTimelineEventOperations:
    """Per-user timeline event state."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher

    async def list(self) -> ResponseEnvelope:
        """All of the current user's timeline events."""
        return await self._dispatcher.request("/user-timeline-events")

    async def follow_link(self, timeline_event_id: str, link_id: str) -> ResponseEnvelope:
        """Mark the "from" event VISITED and the linked "to" event ACTIVE."""
        return await self._dispatcher.request(
            f"/user-timeline-events/{timeline_event_id}/follow-link",
            method="POST",
            body={"link_id": link_id},
        )
