"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Mock transport adapter for local testing.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Dict, List, Optional, Tuple, Union

from fictioneers.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse

MockedResponse = Union[SDKResponse, List[SDKResponse], Exception]


def _copy_mocked(response: MockedResponse) -> MockedResponse:
    # Response lists are consumed in place
    return list(response) if isinstance(response, list) else response


class MockAdapter(BaseAdapter):
    """In-memory mock adapter for unit tests.

    Args:
        responses: Mapping from ``(method, path)`` tuples to an
            ``SDKResponse``, a list of responses returned in order (the last
            one repeats), or an exception instance to raise.

    Example::

        adapter = MockAdapter({
            ("GET", "/timelines"): SDKResponse(status_code=200, body=[]),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], MockedResponse]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], MockedResponse] = {
            key: _copy_mocked(value) for key, value in (responses or {}).items()
        }
        self._sent: list[SDKRequest] = []
        self._closed = False

    def add_response(self, method: str, path: str, response: MockedResponse) -> None:
        """Register (or replace) the response for ``(method, path)``."""
        self._responses[(method.upper(), path)] = _copy_mocked(response)

    async def send(self, request: SDKRequest) -> SDKResponse:
        self._sent.append(request)
        key = (request.method.upper(), request.path)
        mocked = self._responses.get(key)
        if mocked is None:
            return SDKResponse(
                status_code=404,
                headers={},
                body={"detail": "not mocked"},
                reason=HTTPStatus.NOT_FOUND.phrase,
            )
        if isinstance(mocked, Exception):
            raise mocked
        if isinstance(mocked, list):
            if len(mocked) > 1:
                return mocked.pop(0)
            return mocked[0]
        return mocked

    async def aclose(self) -> None:
        self._closed = True

    @property
    def is_connected(self) -> bool:
        return not self._closed

    @property
    def sent_requests(self) -> list[SDKRequest]:
        """All requests that have been sent through this adapter."""
        return list(self._sent)

    def requests_to(self, method: str, path: str) -> list[SDKRequest]:
        """Requests sent to one ``(method, path)`` pair, in order."""
        return [
            r for r in self._sent
            if r.method.upper() == method.upper() and r.path == path
        ]
