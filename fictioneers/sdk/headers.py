"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

HTTP header composition for the two API auth families.

``key`` endpoints (timeline administration) authenticate with the raw
secret key. ``bearer`` endpoints (the audience API) act on behalf of the
session user: a secret key is sent with an explicit user id header, a
public key is exchanged for a short-lived access token first.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict

from fictioneers.exceptions import InternalError
from fictioneers.logging_config import get_logger
from fictioneers.sdk.credentials import ApiKeyKind, CredentialStore

if TYPE_CHECKING:
    from fictioneers.sdk.token_authority import TokenAuthorityClient

logger = get_logger(__name__)


USER_ID_HEADER = "Fictioneers-User-ID"

COMMON_HEADERS: Dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class AuthMode(str, Enum):
    """Which credentials an endpoint expects."""

    KEY = "key"
    BEARER = "bearer"


def key_auth_headers(store: CredentialStore) -> Dict[str, str]:
    """Authorization header carrying the raw API key."""
    return {"Authorization": store.api_key}


class HeaderComposer:
    """
    Builds the header set for a request in a given auth mode.

    Args:
        store: Session credentials.
        token_authority: Used to obtain an access token for public keys.
    """

    def __init__(self, store: CredentialStore, token_authority: TokenAuthorityClient) -> None:
        self._store = store
        self._token_authority = token_authority

    async def auth_headers(self, mode: AuthMode) -> Dict[str, str]:
        """Return only the authentication headers for ``mode``."""
        if mode is AuthMode.KEY:
            return key_auth_headers(self._store)

        if self._store.key_kind is ApiKeyKind.SECRET:
            return {
                "Authorization": self._store.api_key,
                USER_ID_HEADER: self._store.user_id,
            }

        access_token = await self._token_authority.ensure_access_token(self._store)
        if not access_token:
            raise InternalError(
                "Could not assemble auth headers with bearer - no access token"
            )
        return {"Authorization": f"Bearer {access_token}"}

    async def compose(self, mode: AuthMode) -> Dict[str, str]:
        """Return the common JSON headers merged with the auth headers for ``mode``."""
        return {**COMMON_HEADERS, **await self.auth_headers(mode)}
