"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

SDK Lifecycle Hook Registry.

Lets callers observe and augment SDK execution without subclassing the
client.

Available hooks:
- on_before_request: Fired before every outbound request (may rewrite it)
- on_after_response: Fired after every response is received
- on_error: Fired on any transport or SDK error raised during a request
- on_user_change: Fired when the session user id is replaced
"""

from __future__ import annotations

from typing import Callable, List

from fictioneers.logging_config import get_logger
from fictioneers.sdk.adapters.base import SDKRequest, SDKResponse

logger = get_logger(__name__)


BeforeRequestCallback = Callable[[SDKRequest], SDKRequest]
AfterResponseCallback = Callable[[SDKRequest, SDKResponse], None]
ErrorCallback = Callable[[Exception], None]
UserChangeCallback = Callable[[str, str], None]


class HookRegistry:
    """
    Manages lifecycle hooks for the Fictioneers SDK.

    Multiple callbacks per hook are supported and executed in registration
    order. A failing callback is logged and reported to ``on_error``
    callbacks; it never aborts the request being made.
    """

    def __init__(self) -> None:
        self._before_request_callbacks: List[BeforeRequestCallback] = []
        self._after_response_callbacks: List[AfterResponseCallback] = []
        self._error_callbacks: List[ErrorCallback] = []
        self._user_change_callbacks: List[UserChangeCallback] = []

    # -- Registration methods ------------------------------------------------

    def on_before_request(self, callback: BeforeRequestCallback) -> None:
        """Register a callback fired before every outbound request.

        The callback receives the request and **must** return an
        ``SDKRequest`` (possibly modified).
        """
        self._before_request_callbacks.append(callback)
        logger.debug("Registered on_before_request hook")

    def on_after_response(self, callback: AfterResponseCallback) -> None:
        """Register a callback fired after every response."""
        self._after_response_callbacks.append(callback)
        logger.debug("Registered on_after_response hook")

    def on_error(self, callback: ErrorCallback) -> None:
        """Register a callback fired on any SDK error."""
        self._error_callbacks.append(callback)
        logger.debug("Registered on_error hook")

    def on_user_change(self, callback: UserChangeCallback) -> None:
        """Register a callback fired with ``(old_user_id, new_user_id)``."""
        self._user_change_callbacks.append(callback)
        logger.debug("Registered on_user_change hook")

    # -- Firing methods (called by the SDK engine) ---------------------------

    def fire_before_request(self, request: SDKRequest) -> SDKRequest:
        """Fire all on_before_request callbacks in order.

        Each callback receives the (possibly rewritten) request from the
        previous callback, forming a pipeline.
        """
        current = request
        for cb in self._before_request_callbacks:
            try:
                current = cb(current)
            except Exception as exc:
                logger.error(f"on_before_request hook error: {exc}", exc_info=True)
                self.fire_error(exc)
        return current

    def fire_after_response(self, request: SDKRequest, response: SDKResponse) -> None:
        """Fire all on_after_response callbacks."""
        for cb in self._after_response_callbacks:
            try:
                cb(request, response)
            except Exception as exc:
                logger.error(f"on_after_response hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_error(self, error: Exception) -> None:
        """Fire all on_error callbacks."""
        for cb in self._error_callbacks:
            try:
                cb(error)
            except Exception:
                # No re-dispatch, to avoid recursion
                logger.error("on_error hook itself raised an exception", exc_info=True)

    def fire_user_change(self, old_user_id: str, new_user_id: str) -> None:
        """Fire all on_user_change callbacks."""
        for cb in self._user_change_callbacks:
            try:
                cb(old_user_id, new_user_id)
            except Exception as exc:
                logger.error(f"on_user_change hook error: {exc}", exc_info=True)
                self.fire_error(exc)
