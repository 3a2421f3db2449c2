"""
Exception hierarchy for the Fictioneers SDK.

All custom exceptions inherit from FictioneersError base class.
"""

from typing import Optional


class FictioneersError(Exception):
    """Base exception for all Fictioneers SDK errors."""
    pass


# Configuration Errors
class ConfigurationError(FictioneersError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


# SDK Errors
class SDKError(FictioneersError):
    """Base exception for SDK client errors."""
    pass


class SDKConfigurationError(SDKError):
    """Raised when the SDK client is constructed with invalid settings."""
    pass


class InvalidArgumentError(SDKError):
    """Raised when a caller supplies an empty or malformed argument."""
    pass


class InternalError(SDKError):
    """Raised when the SDK cannot assemble a request it should be able to build."""
    pass


class _HTTPStatusError(SDKError):
    """SDK error that may carry the HTTP status code of the failed call."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(_HTTPStatusError):
    """Raised when the remote service rejects an access token exchange."""
    pass


class NetworkError(_HTTPStatusError):
    """Raised on transport failures or unexpected non-2xx responses."""
    pass
