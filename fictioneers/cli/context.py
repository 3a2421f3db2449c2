"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

CLI context for the Fictioneers SDK.

Provides the shared context object, the client factory used by every
command, and output helpers.
"""

import asyncio
import json
import sys
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import click
from rich.console import Console
from rich.table import Table

from fictioneers.exceptions import FictioneersError
from fictioneers.sdk.adapters.base import BaseAdapter
from fictioneers.sdk.client import FictioneersClient


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config = None
        self.config_path = None
        self.verbose = False
        # Set by tests to route requests away from the network
        self.adapter: Optional[BaseAdapter] = None

    def create_client(self) -> FictioneersClient:
        """Build a client from the loaded configuration."""
        return FictioneersClient.from_config(self.config, adapter=self.adapter)

    def run(self, operation: Callable[[FictioneersClient], Awaitable[Any]]) -> Any:
        """Run ``operation`` against a fresh client and close it afterwards."""
        async def _run():
            async with self.create_client() as client:
                return await operation(client)

        return asyncio.run(_run())


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


def handle_sdk_error(func):
    """
    Decorator to turn SDK exceptions into CLI error messages.

    Catches FictioneersError exceptions, prints them to stderr and exits
    with status 1.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FictioneersError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


def echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def echo_table(rows: List[Dict[str, Any]], columns: Sequence[str], title: Optional[str] = None) -> None:
    """Render ``rows`` as a rich table showing only ``columns``."""
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))
    Console().print(table)


def unwrap_list(payload: Any) -> List[Dict[str, Any]]:
    """Rows of a list response, whether bare or inside a ``data`` envelope."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return []
