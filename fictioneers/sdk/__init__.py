"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Async client for the Fictioneers narrative-timeline API.
"""

from fictioneers.sdk.client import FictioneersBuilder, FictioneersClient, build_base_url
from fictioneers.sdk.credentials import AccessTokenGrant, ApiKeyKind, CredentialStore
from fictioneers.sdk.headers import AuthMode
from fictioneers.sdk.hooks import HookRegistry
from fictioneers.sdk.models import (
    AccessTokenInfo,
    ApiResponse,
    DeleteResponse,
    InitialisedUser,
    ListResponse,
    ResponseEnvelope,
)
from fictioneers.sdk.workflows import initialise_and_progress_user

__all__ = [
    "FictioneersClient",
    "FictioneersBuilder",
    "build_base_url",
    "AccessTokenGrant",
    "ApiKeyKind",
    "CredentialStore",
    "AuthMode",
    "HookRegistry",
    "AccessTokenInfo",
    "ApiResponse",
    "DeleteResponse",
    "InitialisedUser",
    "ListResponse",
    "ResponseEnvelope",
    "initialise_and_progress_user",
]
