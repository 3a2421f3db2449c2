"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Credential store for one SDK client session.

Holds the long-lived API key, the current user id and the short-lived
access token together with its absolute expiry. The token and its expiry
are always set and cleared together.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from fictioneers.exceptions import InvalidArgumentError, SDKConfigurationError
from fictioneers.logging_config import get_logger, mask_api_key
from fictioneers.sdk.identity import generate_user_id

logger = get_logger(__name__)


SECRET_API_KEY_PREFIX = "s_"

# Tokens are treated as expired this many seconds before the server says so.
TOKEN_EXPIRY_MARGIN_SECONDS = 10


class ApiKeyKind(Enum):
    """Kind of API key, decided by its prefix."""

    SECRET = "secret"
    PUBLIC = "public"

    @classmethod
    def from_api_key(cls, api_key: str) -> ApiKeyKind:
        if api_key.startswith(SECRET_API_KEY_PREFIX):
            return cls.SECRET
        return cls.PUBLIC


@dataclass(frozen=True)
class AccessTokenGrant:
    """Access token returned by a token exchange."""

    access_token: str
    expires_in: int


class CredentialStore:
    """
    Mutable credential state owned by a single client.

    Args:
        api_key: Secret (``s_`` prefixed) or public API key.
        user_id: User the session acts for. A random v4 UUID when omitted.
        clock: Wall-clock source returning epoch seconds.

    Raises:
        SDKConfigurationError: If ``api_key`` is empty.
    """

    def __init__(
        self,
        api_key: str,
        user_id: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not api_key:
            raise SDKConfigurationError("api_key is required")

        self._api_key = api_key
        self._key_kind = ApiKeyKind.from_api_key(api_key)
        self._user_id = str(user_id) if user_id else generate_user_id()
        self._clock = clock
        self._access_token: Optional[str] = None
        self._access_token_expiry: Optional[float] = None

        logger.debug(
            f"Credential store created for key {mask_api_key(api_key)} "
            f"({self._key_kind.value}), user {self._user_id}"
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def key_kind(self) -> ApiKeyKind:
        return self._key_kind

    @property
    def is_secret_key(self) -> bool:
        return self._key_kind is ApiKeyKind.SECRET

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def access_token_expiry(self) -> Optional[float]:
        return self._access_token_expiry

    def now(self) -> float:
        return self._clock()

    def has_valid_token(self, now: Optional[float] = None) -> bool:
        """A token is valid only if present and its expiry is strictly in the future."""
        if not self._access_token or self._access_token_expiry is None:
            return False
        if now is None:
            now = self._clock()
        return self._access_token_expiry > now

    def seconds_until_expiry(self, now: Optional[float] = None) -> Optional[float]:
        """Remaining lifetime of the cached token, or None when there is none."""
        if self._access_token_expiry is None:
            return None
        if now is None:
            now = self._clock()
        return self._access_token_expiry - now

    def store_grant(self, grant: AccessTokenGrant, now: Optional[float] = None) -> float:
        """
        Cache a freshly exchanged token.

        The absolute expiry is ``now + expires_in - TOKEN_EXPIRY_MARGIN_SECONDS``.

        Returns:
            The computed expiry timestamp.
        """
        if now is None:
            now = self._clock()
        if grant.expires_in <= TOKEN_EXPIRY_MARGIN_SECONDS:
            logger.warning(
                f"Access token lifetime of {grant.expires_in}s is within the "
                f"{TOKEN_EXPIRY_MARGIN_SECONDS}s expiry margin; it will be refreshed on next use"
            )
        expiry = now + (grant.expires_in - TOKEN_EXPIRY_MARGIN_SECONDS)
        self._access_token = grant.access_token
        self._access_token_expiry = expiry
        return expiry

    def clear_token(self) -> None:
        self._access_token = None
        self._access_token_expiry = None

    def replace_user_id(self, user_id: str) -> bool:
        """
        Switch the session to another user.

        Returns False without touching any state when ``user_id`` is the
        current user. Otherwise the cached token is dropped and True is
        returned; the caller is responsible for re-authenticating.

        Raises:
            InvalidArgumentError: If ``user_id`` is empty.
        """
        if user_id == self._user_id:
            return False
        if user_id is None or not str(user_id):
            raise InvalidArgumentError("The parameter user_id must have length")

        self._user_id = str(user_id)
        self.clear_token()
        return True
