"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

SDK Timeline Operations.

Admin endpoints to manage published timelines and the users placed on
them. All calls authenticate with the raw secret API key.
"""

from __future__ import annotations

from typing import Optional

from fictioneers.logging_config import get_logger
from fictioneers.sdk.credentials import CredentialStore
from fictioneers.sdk.dispatcher import RequestDispatcher
from fictioneers.sdk.headers import AuthMode
from fictioneers.sdk.models import DeleteResponse, ListResponse, ResponseEnvelope

logger = get_logger(__name__)


class TimelineOperations:
    """Timeline administration (requires a secret API key)."""

    def __init__(self, dispatcher: RequestDispatcher, store: CredentialStore) -> None:
        self._dispatcher = dispatcher
        self._store = store

    async def list(self) -> ListResponse:
        """List all published timelines which users can be placed on."""
        return await self._dispatcher.request("/timelines", auth=AuthMode.KEY)

    async def get(self, timeline_id: str) -> ResponseEnvelope:
        """Representation of a single timeline."""
        return await self._dispatcher.request(f"/timelines/{timeline_id}", auth=AuthMode.KEY)

    async def events(self, timeline_id: str) -> ListResponse:
        """A single timeline's events and metadata."""
        return await self._dispatcher.request(
            f"/timelines/{timeline_id}/timeline-events", auth=AuthMode.KEY
        )

    async def users(self, timeline_id: str) -> ListResponse:
        """List all users on a timeline."""
        return await self._dispatcher.request(
            f"/timelines/{timeline_id}/users", auth=AuthMode.KEY
        )

    async def delete_users(self, timeline_id: str) -> DeleteResponse:
        """Delete all users on a timeline."""
        logger.info(f"Deleting all users on timeline {timeline_id}")
        return await self._dispatcher.request(
            f"/timelines/{timeline_id}/users", method="DELETE", auth=AuthMode.KEY
        )

    async def get_user(self, timeline_id: str, user_id: Optional[str] = None) -> ResponseEnvelope:
        """Retrieve a timeline user; defaults to the session's user."""
        if user_id is None:
            user_id = self._store.user_id
        return await self._dispatcher.request(
            f"/timelines/{timeline_id}/users/{user_id}", auth=AuthMode.KEY
        )

    async def delete_user(self, timeline_id: str, user_id: Optional[str] = None) -> DeleteResponse:
        """Delete a timeline user; defaults to the session's user."""
        if user_id is None:
            user_id = self._store.user_id
        logger.info(f"Deleting user {user_id} from timeline {timeline_id}")
        return await self._dispatcher.request(
            f"/timelines/{timeline_id}/users/{user_id}", method="DELETE", auth=AuthMode.KEY
        )

    async def event_state_changes(self, timeline_id: str) -> ListResponse:
        """All event state changes for a timeline."""
        return await self._dispatcher.request(
            f"/timelines/{timeline_id}/event-state-changes/", auth=AuthMode.KEY
        )
