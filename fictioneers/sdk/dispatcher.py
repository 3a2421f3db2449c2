"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Request dispatch.

Every endpoint call goes through :class:`RequestDispatcher`, which attaches
headers for the endpoint's auth mode, sends the request through the
transport adapter and normalizes the response:

- DELETE calls return a synthesized ``DeleteResponse`` envelope because the
  API answers them without a body.
- Calls flagged as deprecated get a notice appended to the body's ``error``
  field (array bodies are left alone).
- Transport failures and unexpected non-2xx statuses raise NetworkError.
"""

from __future__ import annotations

import asyncio
from http import HTTPStatus
from typing import Any, Dict, Optional

import httpx

from fictioneers.exceptions import InvalidArgumentError, NetworkError
from fictioneers.logging_config import get_logger, log_api_request
from fictioneers.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse
from fictioneers.sdk.headers import AuthMode, HeaderComposer
from fictioneers.sdk.hooks import HookRegistry
from fictioneers.sdk.models import ApiResponse, delete_response

logger = get_logger(__name__)


DEPRECATION_NOTICE = (
    " Notice: this API endpoint has been deprecated and will be removed in a "
    "future version of this SDK."
)

BODY_METHODS = ("POST", "PATCH")
SUPPORTED_METHODS = ("GET", "POST", "PATCH", "DELETE")


def _reason_phrase(response: SDKResponse) -> str:
    """Reason phrase of ``response``, falling back to the standard one for its status."""
    if response.reason:
        return response.reason
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return str(response.status_code)


def apply_deprecation_notice(body: Any) -> Any:
    """Append the deprecation notice to an envelope's ``error`` field in place."""
    if isinstance(body, dict):
        body["error"] = f"{body.get('error') or ''}{DEPRECATION_NOTICE}"
    return body


class RequestDispatcher:
    """
    Sends endpoint requests and shapes their responses.

    Args:
        adapter: Transport adapter.
        headers: Header composer bound to the session credentials.
        hooks: Lifecycle hook registry.
    """

    def __init__(
        self,
        adapter: BaseAdapter,
        headers: HeaderComposer,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        self._adapter = adapter
        self._headers = headers
        self._hooks = hooks or HookRegistry()

    async def request(
        self,
        path: str,
        method: str = "GET",
        auth: AuthMode = AuthMode.BEARER,
        body: Optional[Dict[str, Any]] = None,
        deprecated: bool = False,
    ) -> ApiResponse:
        """
        Perform one API call.

        Args:
            path: Path relative to the versioned base URL.
            method: One of GET, POST, PATCH, DELETE.
            auth: Auth mode the endpoint expects.
            body: JSON body for POST/PATCH (``{}`` when None). Ignored for
                GET/DELETE.
            deprecated: Decorate the response with a deprecation notice.

        Returns:
            The response body as returned by the API, or a DeleteResponse.

        Raises:
            InvalidArgumentError: If ``method`` is not supported.
            NetworkError: On transport failure or a non-2xx status (except
                for DELETE, whose status is reported in the envelope).
            AuthenticationError: If a required token exchange is rejected.
            InternalError: If bearer headers cannot be assembled.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise InvalidArgumentError(
                f"Unsupported HTTP method '{method}', expected one of {SUPPORTED_METHODS}"
            )

        headers = await self._headers.compose(auth)
        request = SDKRequest(
            method=method,
            path=path,
            headers=headers,
            body=(body or {}) if method in BODY_METHODS else None,
        )
        request = self._hooks.fire_before_request(request)

        logger.debug(f"Making {method} request to {path} ({auth.value} auth)")
        response = await self._send(request)
        self._hooks.fire_after_response(request, response)

        log_api_request(
            logger,
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=response.elapsed_ms,
        )

        if method == "DELETE":
            return delete_response(
                error=_reason_phrase(response) if response.status_code >= 400 else None
            )

        if not response.ok:
            error = NetworkError(
                f"Request failed: {method} {path} - status {response.status_code}"
                + (f" {response.reason}" if response.reason else ""),
                status_code=response.status_code,
            )
            self._hooks.fire_error(error)
            raise error

        response_body = response.body
        if deprecated and not isinstance(response_body, list):
            logger.warning(f"Called deprecated endpoint {method} {path}")
            response_body = apply_deprecation_notice(response_body)
        return response_body

    async def _send(self, request: SDKRequest) -> SDKResponse:
        try:
            return await self._adapter.send(request)
        except (httpx.HTTPError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Request failed: {request.method} {request.path}", exc_info=True)
            error = NetworkError(f"Request failed: {request.method} {request.path}: {e}")
            self._hooks.fire_error(error)
            raise error from e
