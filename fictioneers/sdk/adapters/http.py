"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

HTTP/REST transport adapter (default).
"""

from __future__ import annotations

import time
from typing import Optional

import httpx

from fictioneers.logging_config import get_logger
from fictioneers.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse

logger = get_logger(__name__)


class HttpAdapter(BaseAdapter):
    """Default HTTP transport using ``httpx.AsyncClient``.

    Authentication headers are supplied per request by the caller; the
    adapter itself holds no credentials.

    Args:
        base_url: Versioned root URL of the API
            (e.g. ``https://api.fictioneers.co.uk/v1``).
        timeout: Request timeout in seconds, applied by httpx.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def send(self, request: SDKRequest) -> SDKResponse:
        client = self._ensure_client()
        start = time.monotonic()

        resp = await client.request(
            method=request.method,
            url=f"{self._base_url}{request.path}",
            headers=request.headers,
            json=request.body,
        )
        elapsed = (time.monotonic() - start) * 1000

        body = None
        if resp.content:
            try:
                body = resp.json()
            except ValueError:
                logger.debug(
                    f"Non-JSON response body for {request.method} {request.path}"
                )
                body = resp.text

        return SDKResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            body=body,
            reason=resp.reason_phrase,
            elapsed_ms=round(elapsed, 2),
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None and not self._client.is_closed
