"""
Pytest configuration and shared fixtures for Fictioneers SDK tests.
"""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any, Generator, Optional

import pytest

from fictioneers.sdk.adapters.base import SDKResponse
from fictioneers.sdk.adapters.mock import MockAdapter
from fictioneers.sdk.client import FictioneersClient


SECRET_KEY = "s_test_secret_key_123"
PUBLIC_KEY = "p_test_public_key_456"


class FakeClock:
    """Controllable wall clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def ok(body: Any = None, status_code: int = 200) -> SDKResponse:
    """Successful mocked response."""
    return SDKResponse(status_code=status_code, body=body, reason="OK", elapsed_ms=1.0)


def token_response(access_token: str = "token-1", expires_in: int = 3600) -> SDKResponse:
    return ok({"access_token": access_token, "expires_in": expires_in})


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def secret_key() -> str:
    return SECRET_KEY


@pytest.fixture
def public_key() -> str:
    return PUBLIC_KEY


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """Adapter that answers token exchanges; endpoint responses are added per test."""
    return MockAdapter(responses={("POST", "/auth/token"): token_response()})


@pytest.fixture
def make_client(mock_adapter: MockAdapter, clock: FakeClock):
    """
    Factory fixture building clients wired to ``mock_adapter`` and ``clock``.

    Example:
        def test_something(make_client):
            client = make_client(api_key=PUBLIC_KEY)
    """
    def _make_client(api_key: str = PUBLIC_KEY, user_id: Optional[str] = None, **kwargs):
        return FictioneersClient(
            api_key=api_key,
            user_id=user_id,
            adapter=mock_adapter,
            clock=clock,
            **kwargs,
        )

    return _make_client


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Keep tests independent from the developer's environment and home directory."""
    for var in (
        "FICTIONEERS_API_KEY",
        "FICTIONEERS_USER_ID",
        "FICTIONEERS_API_VERSION",
        "FICTIONEERS_BASE_URL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    # Handlers may point at streams a CliRunner has already closed
    logging.getLogger().handlers.clear()
