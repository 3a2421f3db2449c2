"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

Response shapes returned by the SDK.

Endpoints answer either with a ``{data, error, meta, status}`` envelope or
with a bare JSON array. Delete calls always yield a synthesized
``DeleteResponse`` envelope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict, Union


class ResponseEnvelope(TypedDict, total=False):
    """Standard envelope returned by most endpoints."""
    data: Any
    error: Optional[str]
    meta: Optional[Dict[str, Any]]
    status: Optional[int]


class DeleteResponse(TypedDict):
    """Envelope synthesized for DELETE calls, which return no body."""
    data: None
    error: Optional[str]
    meta: None
    status: int


ListResponse = List[Dict[str, Any]]

ApiResponse = Union[ResponseEnvelope, DeleteResponse, ListResponse]


def delete_response(error: Optional[str] = None) -> DeleteResponse:
    """Build the uniform envelope returned for every DELETE call."""
    return {"data": None, "error": error, "meta": None, "status": 204}


@dataclass
class AccessTokenInfo:
    """Access token together with its lifetime in seconds."""
    access_token: str
    expires_in: float


@dataclass
class InitialisedUser:
    """Result of :func:`fictioneers.sdk.workflows.initialise_and_progress_user`."""
    user: Optional[Dict[str, Any]] = None
    user_timeline_events: List[Dict[str, Any]] = field(default_factory=list)
