"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Server-side SDK for the Fictioneers narrative-timeline API.
"""

from fictioneers._version import __version__
from fictioneers.exceptions import (
    AuthenticationError,
    FictioneersError,
    InternalError,
    InvalidArgumentError,
    NetworkError,
    SDKConfigurationError,
)
from fictioneers.sdk import FictioneersBuilder, FictioneersClient

__all__ = [
    "__version__",
    "FictioneersClient",
    "FictioneersBuilder",
    "FictioneersError",
    "AuthenticationError",
    "InternalError",
    "InvalidArgumentError",
    "NetworkError",
    "SDKConfigurationError",
]
