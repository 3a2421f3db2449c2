"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Unit tests for SDK transport adapters.
"""

import json

import httpx
import pytest

from fictioneers.sdk.adapters.base import SDKRequest, SDKResponse
from fictioneers.sdk.adapters.http import HttpAdapter
from fictioneers.sdk.adapters.mock import MockAdapter


class TestSDKResponse:
    """Test SDKResponse helpers."""

    @pytest.mark.parametrize("status_code, expected", [
        (200, True), (201, True), (204, True), (299, True),
        (301, False), (400, False), (404, False), (500, False),
    ])
    def test_ok(self, status_code, expected):
        assert SDKResponse(status_code=status_code).ok is expected


class TestMockAdapter:
    """Test MockAdapter."""

    @pytest.mark.asyncio
    async def test_returns_registered_response(self):
        adapter = MockAdapter({("GET", "/timelines"): SDKResponse(status_code=200, body=[1])})

        response = await adapter.send(SDKRequest(method="GET", path="/timelines"))

        assert response.body == [1]
        assert len(adapter.sent_requests) == 1

    @pytest.mark.asyncio
    async def test_unmocked_is_not_found(self):
        adapter = MockAdapter()

        response = await adapter.send(SDKRequest(method="GET", path="/nowhere"))

        assert response.status_code == 404
        assert response.reason == "Not Found"

    @pytest.mark.asyncio
    async def test_list_responses_are_consumed_in_order(self):
        adapter = MockAdapter()
        adapter.add_response("post", "/auth/token", [
            SDKResponse(status_code=200, body="first"),
            SDKResponse(status_code=200, body="second"),
        ])
        request = SDKRequest(method="POST", path="/auth/token")

        bodies = [(await adapter.send(request)).body for _ in range(3)]

        assert bodies == ["first", "second", "second"]

    @pytest.mark.asyncio
    async def test_response_lists_are_copied(self):
        responses = [
            SDKResponse(status_code=200, body="first"),
            SDKResponse(status_code=200, body="second"),
        ]
        first = MockAdapter({("GET", "/x"): responses})
        second = MockAdapter()
        second.add_response("GET", "/x", responses)
        request = SDKRequest(method="GET", path="/x")

        await first.send(request)

        assert len(responses) == 2
        assert (await second.send(request)).body == "first"

    @pytest.mark.asyncio
    async def test_exception_is_raised(self):
        adapter = MockAdapter({("GET", "/x"): httpx.ConnectError("refused")})
        with pytest.raises(httpx.ConnectError):
            await adapter.send(SDKRequest(method="GET", path="/x"))

    @pytest.mark.asyncio
    async def test_requests_to_filters(self):
        adapter = MockAdapter()
        await adapter.send(SDKRequest(method="GET", path="/a"))
        await adapter.send(SDKRequest(method="POST", path="/a"))
        await adapter.send(SDKRequest(method="GET", path="/b"))

        assert len(adapter.requests_to("get", "/a")) == 1

    @pytest.mark.asyncio
    async def test_close(self):
        adapter = MockAdapter()
        assert adapter.is_connected is True
        await adapter.aclose()
        assert adapter.is_connected is False


class TestHttpAdapter:
    """Test HttpAdapter against an in-process httpx transport."""

    @pytest.mark.asyncio
    async def test_sends_json_and_parses_json(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["method"] = request.method
            captured["auth"] = request.headers.get("Authorization")
            captured["body"] = json.loads(request.content)
            return httpx.Response(201, json={"data": {"id": "u1"}})

        adapter = HttpAdapter(
            base_url="https://api.example.test/v1/",
            transport=httpx.MockTransport(handler),
        )

        response = await adapter.send(SDKRequest(
            method="POST",
            path="/users",
            headers={"Authorization": "Bearer tok"},
            body={"published_timeline_id": "t1"},
        ))
        await adapter.aclose()

        assert captured == {
            "url": "https://api.example.test/v1/users",
            "method": "POST",
            "auth": "Bearer tok",
            "body": {"published_timeline_id": "t1"},
        }
        assert response.status_code == 201
        assert response.body == {"data": {"id": "u1"}}
        assert response.reason == "Created"
        assert response.elapsed_ms >= 0

    @pytest.mark.asyncio
    async def test_empty_body(self):
        adapter = HttpAdapter(
            base_url="https://api.example.test/v1",
            transport=httpx.MockTransport(lambda request: httpx.Response(204)),
        )

        response = await adapter.send(SDKRequest(method="DELETE", path="/users/me"))
        await adapter.aclose()

        assert response.body is None
        assert response.ok

    @pytest.mark.asyncio
    async def test_text_body_fallback(self):
        adapter = HttpAdapter(
            base_url="https://api.example.test/v1",
            transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad gateway")),
        )

        response = await adapter.send(SDKRequest(method="GET", path="/users/me"))
        await adapter.aclose()

        assert response.body == "Bad gateway"
        assert response.reason == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        adapter = HttpAdapter(
            base_url="https://api.example.test/v1",
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(httpx.ConnectError):
            await adapter.send(SDKRequest(method="GET", path="/users/me"))
        await adapter.aclose()

    @pytest.mark.asyncio
    async def test_connection_state(self):
        adapter = HttpAdapter(
            base_url="https://api.example.test/v1",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
        )
        assert adapter.is_connected is False

        await adapter.send(SDKRequest(method="GET", path="/timelines"))
        assert adapter.is_connected is True

        await adapter.aclose()
        assert adapter.is_connected is False
        assert adapter.base_url == "https://api.example.test/v1"
