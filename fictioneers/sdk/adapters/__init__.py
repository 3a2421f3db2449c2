"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

SDK Transport Adapters.
"""

from fictioneers.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse
from fictioneers.sdk.adapters.http import HttpAdapter
from fictioneers.sdk.adapters.mock import MockAdapter

__all__ = [
    "BaseAdapter",
    "SDKRequest",
    "SDKResponse",
    "HttpAdapter",
    "MockAdapter",
]
