"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Access token exchange.

Trades the session's API key and user id for a short-lived access token
via ``POST /auth/token``. Exchanges are never retried; a rejection
surfaces as AuthenticationError to whoever needed the token.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from fictioneers.exceptions import AuthenticationError, NetworkError
from fictioneers.logging_config import get_logger, log_authentication_failure
from fictioneers.sdk.adapters.base import BaseAdapter, SDKRequest
from fictioneers.sdk.credentials import AccessTokenGrant, CredentialStore
from fictioneers.sdk.headers import COMMON_HEADERS, key_auth_headers
from fictioneers.sdk.hooks import HookRegistry

logger = get_logger(__name__)


TOKEN_PATH = "/auth/token"


class TokenAuthorityClient:
    """
    Exchanges API keys for access tokens.

    Args:
        adapter: Transport used for the exchange call.
        hooks: Optional hook registry; exchange requests fire the same
            request/response hooks as endpoint calls.
    """

    def __init__(self, adapter: BaseAdapter, hooks: Optional[HookRegistry] = None) -> None:
        self._adapter = adapter
        self._hooks = hooks or HookRegistry()

    async def exchange(self, store: CredentialStore) -> AccessTokenGrant:
        """
        Request a new access token for the store's current user.

        Does not modify the store.

        Raises:
            AuthenticationError: If the service rejects the exchange or
                returns a malformed grant.
            NetworkError: On transport failure.
        """
        request = SDKRequest(
            method="POST",
            path=TOKEN_PATH,
            headers={**COMMON_HEADERS, **key_auth_headers(store)},
            body={"user_id": store.user_id},
        )
        request = self._hooks.fire_before_request(request)

        try:
            response = await self._adapter.send(request)
        except (httpx.HTTPError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Token exchange failed: {e}", exc_info=True)
            error = NetworkError(f"Token exchange failed: {e}")
            self._hooks.fire_error(error)
            raise error from e

        self._hooks.fire_after_response(request, response)

        if not response.ok:
            log_authentication_failure(
                logger,
                auth_method="token_exchange",
                user_id=store.user_id,
                reason=response.reason or "rejected",
                status_code=response.status_code,
            )
            error = AuthenticationError(
                f"Access token exchange rejected with status {response.status_code}"
                + (f": {response.reason}" if response.reason else ""),
                status_code=response.status_code,
            )
            self._hooks.fire_error(error)
            raise error

        body = response.body if isinstance(response.body, dict) else {}
        access_token = body.get("access_token")
        expires_in = body.get("expires_in")
        if not access_token or expires_in is None:
            error = AuthenticationError(
                "Access token exchange returned no access_token/expires_in",
                status_code=response.status_code,
            )
            self._hooks.fire_error(error)
            raise error

        try:
            expires_in = int(expires_in)
        except (TypeError, ValueError) as e:
            error = AuthenticationError(
                f"Access token exchange returned invalid expires_in: {expires_in!r}",
                status_code=response.status_code,
            )
            self._hooks.fire_error(error)
            raise error from e

        logger.info(f"Obtained access token for user {store.user_id} (expires in {expires_in}s)")
        return AccessTokenGrant(access_token=access_token, expires_in=expires_in)

    async def refresh(self, store: CredentialStore) -> AccessTokenGrant:
        """Exchange a new token and cache it in ``store``."""
        now = store.now()
        grant = await self.exchange(store)
        store.store_grant(grant, now=now)
        return grant

    async def ensure_access_token(self, store: CredentialStore) -> Optional[str]:
        """
        Return a valid cached token, refreshing it first when missing or expired.

        Concurrent callers on one store are not serialized; each may trigger
        its own exchange and the last one to finish wins the cache.
        """
        if not store.has_valid_token():
            logger.debug(f"Access token missing or expired for user {store.user_id}, refreshing")
            await self.refresh(store)
        return store.access_token
