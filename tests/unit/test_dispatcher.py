"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Unit tests for request dispatch and response normalization.
"""

import httpx
import pytest

from fictioneers.exceptions import InvalidArgumentError, NetworkError
from fictioneers.sdk.adapters.base import SDKResponse
from fictioneers.sdk.adapters.mock import MockAdapter
from fictioneers.sdk.credentials import CredentialStore
from fictioneers.sdk.dispatcher import DEPRECATION_NOTICE, RequestDispatcher
from fictioneers.sdk.headers import AuthMode, HeaderComposer
from fictioneers.sdk.hooks import HookRegistry
from fictioneers.sdk.token_authority import TokenAuthorityClient


@pytest.fixture
def setup(secret_key, clock):
    adapter = MockAdapter()
    hooks = HookRegistry()
    store = CredentialStore(api_key=secret_key, user_id="player-1", clock=clock)
    composer = HeaderComposer(store, TokenAuthorityClient(adapter, hooks))
    dispatcher = RequestDispatcher(adapter, composer, hooks)
    return dispatcher, adapter, hooks


class TestRequestBodies:
    """Test which verbs carry a body."""

    @pytest.mark.asyncio
    async def test_get_sends_no_body(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/timelines", SDKResponse(status_code=200, body=[]))

        await dispatcher.request("/timelines", auth=AuthMode.KEY, body={"ignored": True})

        assert adapter.sent_requests[0].body is None

    @pytest.mark.asyncio
    async def test_post_defaults_to_empty_object(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("POST", "/users", SDKResponse(status_code=201, body={"data": {}}))

        await dispatcher.request("/users", method="POST")

        assert adapter.sent_requests[0].body == {}

    @pytest.mark.asyncio
    async def test_patch_sends_body(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("PATCH", "/users/me", SDKResponse(status_code=200, body={"data": {}}))

        await dispatcher.request("/users/me", method="patch", body={"a": 1})

        sent = adapter.sent_requests[0]
        assert sent.method == "PATCH"
        assert sent.body == {"a": 1}

    @pytest.mark.asyncio
    async def test_unsupported_method(self, setup):
        dispatcher, adapter, _ = setup
        with pytest.raises(InvalidArgumentError):
            await dispatcher.request("/users", method="PUT")
        assert adapter.sent_requests == []

    @pytest.mark.asyncio
    async def test_headers_follow_auth_mode(self, setup, secret_key):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/users/me", SDKResponse(status_code=200, body={"data": None}))

        await dispatcher.request("/users/me")

        headers = adapter.sent_requests[0].headers
        assert headers["Authorization"] == secret_key
        assert headers["Fictioneers-User-ID"] == "player-1"
        assert headers["Accept"] == "application/json"


class TestDeleteNormalization:
    """Test the synthesized DELETE envelope."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [200, 202, 204])
    async def test_success(self, setup, status_code):
        dispatcher, adapter, _ = setup
        adapter.add_response("DELETE", "/users/me", SDKResponse(status_code=status_code, reason="No Content"))

        result = await dispatcher.request("/users/me", method="DELETE")

        assert result == {"data": None, "error": None, "meta": None, "status": 204}

    @pytest.mark.asyncio
    async def test_not_found(self, setup):
        dispatcher, _, _ = setup

        # Unmocked paths answer 404 Not Found
        result = await dispatcher.request("/users/me", method="DELETE")

        assert result == {"data": None, "error": "Not Found", "meta": None, "status": 204}

    @pytest.mark.asyncio
    async def test_empty_reason_uses_standard_phrase(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("DELETE", "/users/me", SDKResponse(status_code=403, reason=""))

        result = await dispatcher.request("/users/me", method="DELETE")

        assert result["error"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_unknown_status_uses_code(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("DELETE", "/users/me", SDKResponse(status_code=599))

        result = await dispatcher.request("/users/me", method="DELETE")

        assert result["error"] == "599"

    @pytest.mark.asyncio
    async def test_body_is_ignored(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("DELETE", "/users/me", SDKResponse(
            status_code=200, body={"data": {"id": "x"}}, reason="OK",
        ))

        result = await dispatcher.request("/users/me", method="DELETE")

        assert result["data"] is None
        assert adapter.sent_requests[0].body is None


class TestDeprecationNotice:
    """Test deprecated endpoint decoration."""

    @pytest.mark.asyncio
    async def test_envelope_error_is_populated(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/old", SDKResponse(
            status_code=200, body={"data": [1, 2], "error": None},
        ))

        result = await dispatcher.request("/old", deprecated=True)

        assert "deprecated" in result["error"]
        assert result["data"] == [1, 2]

    @pytest.mark.asyncio
    async def test_existing_error_is_extended(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/old", SDKResponse(
            status_code=200, body={"data": None, "error": "Partial result."},
        ))

        result = await dispatcher.request("/old", deprecated=True)

        assert result["error"] == "Partial result." + DEPRECATION_NOTICE

    @pytest.mark.asyncio
    async def test_missing_error_field_is_created(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/old", SDKResponse(status_code=200, body={"data": {}}))

        result = await dispatcher.request("/old", deprecated=True)

        assert result["error"] == DEPRECATION_NOTICE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [{"code": "x"}, ["first", "second"], 0])
    async def test_non_string_error_is_stringified(self, setup, error):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/old", SDKResponse(
            status_code=200, body={"data": [1], "error": error},
        ))

        result = await dispatcher.request("/old", deprecated=True)

        assert result["error"].endswith(DEPRECATION_NOTICE)
        assert result["data"] == [1]

    @pytest.mark.asyncio
    async def test_array_body_untouched(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/old", SDKResponse(status_code=200, body=[{"id": "t1"}]))

        result = await dispatcher.request("/old", deprecated=True)

        assert result == [{"id": "t1"}]

    @pytest.mark.asyncio
    async def test_not_deprecated_untouched(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/new", SDKResponse(
            status_code=200, body={"data": [], "error": None},
        ))

        result = await dispatcher.request("/new")

        assert result["error"] is None


class TestErrors:
    """Test failure propagation."""

    @pytest.mark.asyncio
    async def test_non_2xx_raises_network_error(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/users/me", SDKResponse(status_code=500, reason="Internal Server Error"))

        with pytest.raises(NetworkError) as exc_info:
            await dispatcher.request("/users/me")

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_failure_raises_network_error(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/users/me", httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError):
            await dispatcher.request("/users/me")

    @pytest.mark.asyncio
    async def test_no_retry(self, setup):
        dispatcher, adapter, _ = setup
        adapter.add_response("GET", "/users/me", SDKResponse(status_code=503, reason="Service Unavailable"))

        with pytest.raises(NetworkError):
            await dispatcher.request("/users/me")
        assert len(adapter.sent_requests) == 1


class TestHooks:
    """Test that dispatch fires lifecycle hooks."""

    @pytest.mark.asyncio
    async def test_before_request_can_rewrite(self, setup):
        dispatcher, adapter, hooks = setup
        adapter.add_response("GET", "/timelines", SDKResponse(status_code=200, body=[]))

        def tag(request):
            request.headers["X-Trace"] = "abc"
            return request

        hooks.on_before_request(tag)
        await dispatcher.request("/timelines", auth=AuthMode.KEY)

        assert adapter.sent_requests[0].headers["X-Trace"] == "abc"

    @pytest.mark.asyncio
    async def test_after_response_and_error_hooks(self, setup):
        dispatcher, adapter, hooks = setup
        adapter.add_response("GET", "/users/me", SDKResponse(status_code=404, reason="Not Found"))
        responses, errors = [], []
        hooks.on_after_response(lambda req, resp: responses.append(resp.status_code))
        hooks.on_error(errors.append)

        with pytest.raises(NetworkError):
            await dispatcher.request("/users/me")

        assert responses == [404]
        assert len(errors) == 1
