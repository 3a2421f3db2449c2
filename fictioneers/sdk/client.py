"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Fictioneers SDK Client & Builder.

Provides two entry points to initialize the SDK:
    - ``FictioneersClient(api_key=...)``: quick start with sensible defaults
    - ``FictioneersBuilder().set_api_key(...).build()``: advanced config
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional, Union

from fictioneers.config.settings import DEFAULT_API_VERSION, FictioneersConfig
from fictioneers.exceptions import SDKConfigurationError
from fictioneers.logging_config import get_logger, mask_api_key
from fictioneers.sdk.adapters.base import BaseAdapter
from fictioneers.sdk.adapters.http import HttpAdapter
from fictioneers.sdk.credentials import (
    TOKEN_EXPIRY_MARGIN_SECONDS,
    ApiKeyKind,
    CredentialStore,
)
from fictioneers.sdk.dispatcher import RequestDispatcher
from fictioneers.sdk.headers import HeaderComposer
from fictioneers.sdk.hooks import (
    AfterResponseCallback,
    BeforeRequestCallback,
    ErrorCallback,
    HookRegistry,
    UserChangeCallback,
)
from fictioneers.sdk.models import (
    AccessTokenInfo,
    DeleteResponse,
    InitialisedUser,
    ListResponse,
    ResponseEnvelope,
)
from fictioneers.sdk.timelines import TimelineOperations
from fictioneers.sdk.token_authority import TokenAuthorityClient
from fictioneers.sdk.user_timeline_events import UserTimelineEventOperations
from fictioneers.sdk.users import UserOperations
from fictioneers.sdk.workflows import initialise_and_progress_user

logger = get_logger(__name__)


DEFAULT_TIMEOUT_SECONDS = 30.0


def build_base_url(api_version: str = DEFAULT_API_VERSION) -> str:
    """Versioned root URL of the Fictioneers API."""
    return f"https://api.fictioneers.co.uk/v{api_version}"


class FictioneersClient:
    """Async SDK client for the Fictioneers API.

    Quick start::

        async with FictioneersClient(api_key="pk_...") as client:
            result = await client.initialise_and_progress_user(timeline_id="t1")

    Secret keys (``s_`` prefix) may call the timeline administration
    endpoints and act as any user on the audience endpoints. Public keys
    are exchanged for short-lived access tokens, refreshed transparently.

    Args:
        api_key: Secret or public API key.
        user_id: User the session acts for; a random v4 UUID when omitted.
        api_version: API version used to build the default base URL.
        base_url: Override for the versioned API root URL.
        timeout: Transport timeout in seconds for the default adapter.
        adapter: Optional custom transport adapter.
        hooks: Optional pre-populated hook registry.
        clock: Wall-clock source for token expiry (epoch seconds).
    """

    def __init__(
        self,
        api_key: str,
        user_id: Optional[str] = None,
        api_version: str = DEFAULT_API_VERSION,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        adapter: Optional[BaseAdapter] = None,
        hooks: Optional[HookRegistry] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not api_key:
            raise SDKConfigurationError(
                "FictioneersClient requires an api_key."
            )

        self.base_url = (base_url or build_base_url(api_version)).rstrip("/")
        self._store = CredentialStore(api_key=api_key, user_id=user_id, clock=clock)
        self._hooks = hooks or HookRegistry()
        self._adapter = adapter or HttpAdapter(base_url=self.base_url, timeout=timeout)
        self._token_authority = TokenAuthorityClient(self._adapter, self._hooks)
        self._headers = HeaderComposer(self._store, self._token_authority)
        self._dispatcher = RequestDispatcher(self._adapter, self._headers, self._hooks)

        self._timelines = TimelineOperations(self._dispatcher, self._store)
        self._users = UserOperations(self._dispatcher)
        self._user_timeline_events = UserTimelineEventOperations(self._dispatcher)

        logger.info(
            f"FictioneersClient initialized for {self.base_url} with "
            f"{self._store.key_kind.value} key {mask_api_key(api_key)}"
        )

    @classmethod
    def from_config(cls, config: FictioneersConfig, **kwargs: Any) -> FictioneersClient:
        """Build a client from a loaded :class:`FictioneersConfig`.

        Raises:
            SDKConfigurationError: If the configuration has no API key.
        """
        if not config.api.api_key:
            raise SDKConfigurationError(
                "No API key configured. Set FICTIONEERS_API_KEY or api.api_key in the config file."
            )
        return cls(
            api_key=config.api.api_key,
            user_id=config.api.user_id,
            api_version=config.api.api_version,
            base_url=config.api.base_url,
            timeout=config.api.timeout,
            **kwargs,
        )

    # -- Lifecycle ---------------------------------------------------------

    async def __aenter__(self) -> FictioneersClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release transport resources."""
        await self._adapter.aclose()
        logger.debug("FictioneersClient closed")

    # -- Session -------------------------------------------------------------

    @property
    def key_kind(self) -> ApiKeyKind:
        return self._store.key_kind

    @property
    def credentials(self) -> CredentialStore:
        return self._store

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def user_id(self) -> str:
        return self._store.user_id

    def get_user_id(self) -> str:
        """The user id supplied at construction, set later, or auto-generated."""
        return self._store.user_id

    async def set_user_id(self, user_id: str) -> None:
        """
        Act as another user from now on.

        Setting the current id again is a no-op. Otherwise the cached access
        token is discarded and a new one is requested straight away.

        Raises:
            InvalidArgumentError: If ``user_id`` is empty.
            AuthenticationError: If the eager token exchange is rejected.
        """
        previous = self._store.user_id
        if not self._store.replace_user_id(user_id):
            return
        logger.info(f"User id changed from {previous} to {self._store.user_id}")
        self._hooks.fire_user_change(previous, self._store.user_id)
        await self._token_authority.refresh(self._store)

    async def get_access_token(self) -> AccessTokenInfo:
        """Exchange a new access token unconditionally and cache it."""
        grant = await self._token_authority.refresh(self._store)
        return AccessTokenInfo(access_token=grant.access_token, expires_in=grant.expires_in)

    async def ensure_access_token(self) -> AccessTokenInfo:
        """
        Return the cached access token, exchanging a new one if it is missing
        or expired.

        ``expires_in`` is the server-side lifetime remaining, i.e. the local
        remaining lifetime plus the expiry margin.
        """
        access_token = await self._token_authority.ensure_access_token(self._store)
        remaining = self._store.seconds_until_expiry() or 0.0
        return AccessTokenInfo(
            access_token=access_token,
            expires_in=remaining + TOKEN_EXPIRY_MARGIN_SECONDS,
        )

    # -- Resource accessors --------------------------------------------------

    @property
    def timelines(self) -> TimelineOperations:
        return self._timelines

    @property
    def users(self) -> UserOperations:
        return self._users

    @property
    def user_timeline_events(self) -> UserTimelineEventOperations:
        return self._user_timeline_events

    # -- Admin: timelines ----------------------------------------------------

    async def get_timelines(self) -> ListResponse:
        return await self._timelines.list()

    async def get_timeline(self, timeline_id: str) -> ResponseEnvelope:
        return await self._timelines.get(timeline_id)

    async def get_timeline_events(self, timeline_id: str) -> ListResponse:
        return await self._timelines.events(timeline_id)

    async def get_timeline_users(self, timeline_id: str) -> ListResponse:
        return await self._timelines.users(timeline_id)

    async def delete_timeline_users(self, timeline_id: str) -> DeleteResponse:
        return await self._timelines.delete_users(timeline_id)

    async def get_timeline_user(
        self, timeline_id: str, user_id: Optional[str] = None
    ) -> ResponseEnvelope:
        return await self._timelines.get_user(timeline_id, user_id)

    async def delete_timeline_user(
        self, timeline_id: str, user_id: Optional[str] = None
    ) -> DeleteResponse:
        return await self._timelines.delete_user(timeline_id, user_id)

    async def get_timeline_event_state_changes(self, timeline_id: str) -> ListResponse:
        return await self._timelines.event_state_changes(timeline_id)

    # -- Audience: users -----------------------------------------------------

    async def get_user(self) -> ResponseEnvelope:
        return await self._users.get()

    async def delete_user(self) -> DeleteResponse:
        return await self._users.delete()

    async def create_user(
        self,
        timeline_id: str,
        disable_time_guards: bool = False,
        pause_at_beats: bool = False,
        max_steps: Optional[Union[int, str]] = None,
    ) -> ResponseEnvelope:
        return await self._users.create(
            timeline_id=timeline_id,
            disable_time_guards=disable_time_guards,
            pause_at_beats=pause_at_beats,
            max_steps=max_steps,
        )

    async def progress_user_step(
        self,
        max_steps: Optional[Union[int, str]] = None,
        pause_at_beats: bool = True,
    ) -> ResponseEnvelope:
        return await self._users.progress_step(max_steps=max_steps, pause_at_beats=pause_at_beats)

    # -- Audience: user timeline events -------------------------------------

    async def get_user_timeline_events(self) -> ResponseEnvelope:
        return await self._user_timeline_events.list()

    async def follow_link_user_timeline_event(
        self, timeline_event_id: str, link_id: str
    ) -> ResponseEnvelope:
        return await self._user_timeline_events.follow_link(timeline_event_id, link_id)

    # -- Workflows -------------------------------------------------------------

    async def initialise_and_progress_user(
        self,
        timeline_id: str,
        disable_time_guards: bool = False,
        pause_at_beats: bool = False,
        max_steps: Optional[Union[int, str]] = None,
        attach_existing_user: bool = False,
    ) -> InitialisedUser:
        """Get or create the user, then fetch their timeline events.

        See :func:`fictioneers.sdk.workflows.initialise_and_progress_user`.
        """
        return await initialise_and_progress_user(
            self,
            timeline_id=timeline_id,
            disable_time_guards=disable_time_guards,
            pause_at_beats=pause_at_beats,
            max_steps=max_steps,
            attach_existing_user=attach_existing_user,
        )


# ---------------------------------------------------------------------------
# FictioneersBuilder (advanced initialization)
# ---------------------------------------------------------------------------

class FictioneersBuilder:
    """Fluent builder for advanced FictioneersClient configuration.

    Example::

        client = (
            FictioneersBuilder()
            .set_api_key("s_live_123")
            .set_user_id("player-42")
            .set_api_version("1")
            .on_after_response(record_latency)
            .build()
        )
    """

    def __init__(self) -> None:
        self._api_key: Optional[str] = None
        self._user_id: Optional[str] = None
        self._api_version: str = DEFAULT_API_VERSION
        self._base_url: Optional[str] = None
        self._timeout: float = DEFAULT_TIMEOUT_SECONDS
        self._adapter: Optional[BaseAdapter] = None
        self._hooks = HookRegistry()
        self._hook_count = 0

    def set_api_key(self, key: str) -> FictioneersBuilder:
        """Set the API key."""
        self._api_key = key
        return self

    def set_user_id(self, user_id: str) -> FictioneersBuilder:
        """Set the initial user id."""
        self._user_id = user_id
        return self

    def set_api_version(self, version: str) -> FictioneersBuilder:
        self._api_version = version
        return self

    def set_base_url(self, url: str) -> FictioneersBuilder:
        """Override the versioned API root URL."""
        self._base_url = url
        return self

    def set_timeout(self, timeout: float) -> FictioneersBuilder:
        self._timeout = timeout
        return self

    def set_transport(self, adapter: BaseAdapter) -> FictioneersBuilder:
        """Override the default HTTP adapter with a custom transport."""
        self._adapter = adapter
        return self

    def on_before_request(self, callback: BeforeRequestCallback) -> FictioneersBuilder:
        self._hooks.on_before_request(callback)
        self._hook_count += 1
        return self

    def on_after_response(self, callback: AfterResponseCallback) -> FictioneersBuilder:
        self._hooks.on_after_response(callback)
        self._hook_count += 1
        return self

    def on_error(self, callback: ErrorCallback) -> FictioneersBuilder:
        self._hooks.on_error(callback)
        self._hook_count += 1
        return self

    def on_user_change(self, callback: UserChangeCallback) -> FictioneersBuilder:
        self._hooks.on_user_change(callback)
        self._hook_count += 1
        return self

    def build(self) -> FictioneersClient:
        """Construct the FictioneersClient.

        Raises:
            SDKConfigurationError: If no API key was set.
        """
        if not self._api_key:
            raise SDKConfigurationError(
                "FictioneersBuilder.build() requires set_api_key()."
            )

        client = FictioneersClient(
            api_key=self._api_key,
            user_id=self._user_id,
            api_version=self._api_version,
            base_url=self._base_url,
            timeout=self._timeout,
            adapter=self._adapter,
            hooks=self._hooks,
        )
        logger.info(f"FictioneersBuilder: built client with {self._hook_count} hook(s)")
        return client
