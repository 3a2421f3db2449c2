"""
Unit tests for the exception hierarchy.
"""

import pytest

from fictioneers.exceptions import (
    AuthenticationError,
    ConfigurationError,
    FictioneersError,
    InternalError,
    InvalidArgumentError,
    InvalidConfigurationError,
    NetworkError,
    SDKConfigurationError,
    SDKError,
)


class TestExceptionHierarchy:
    """Test that exceptions inherit correctly."""

    @pytest.mark.parametrize("exc_class, parent", [
        (ConfigurationError, FictioneersError),
        (InvalidConfigurationError, ConfigurationError),
        (SDKError, FictioneersError),
        (SDKConfigurationError, SDKError),
        (InvalidArgumentError, SDKError),
        (InternalError, SDKError),
        (AuthenticationError, SDKError),
        (NetworkError, SDKError),
    ])
    def test_inheritance(self, exc_class, parent):
        assert issubclass(exc_class, parent)

    def test_http_errors_are_distinct(self):
        assert not issubclass(NetworkError, AuthenticationError)
        assert not issubclass(AuthenticationError, NetworkError)


class TestStatusCode:
    """Test status codes carried by HTTP-backed errors."""

    def test_status_code(self):
        error = NetworkError("Request failed", status_code=404)
        assert error.status_code == 404
        assert str(error) == "Request failed"

    def test_status_code_optional(self):
        assert AuthenticationError("rejected").status_code is None
