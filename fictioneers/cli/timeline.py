"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

CLI commands for timeline administration.

These commands call the admin endpoints and need a secret API key.
"""

from typing import Optional

import click

from fictioneers.cli.context import (
    echo_json,
    echo_table,
    handle_sdk_error,
    pass_context,
    unwrap_list,
)

format_option = click.option(
    '--format',
    '-f',
    'output_format',
    type=click.Choice(['table', 'json'], case_sensitive=False),
    default='table',
    help='Output format (default: table)',
)


@click.command('list')
@format_option
@pass_context
@handle_sdk_error
def list_timelines(ctx, output_format: str):
    """
    List all published timelines.

    Examples:

        fictioneers timeline list

        fictioneers timeline list --format json
    """
    timelines = ctx.run(lambda client: client.get_timelines())

    if output_format.lower() == 'json':
        echo_json(timelines)
        return

    rows = unwrap_list(timelines)
    if not rows:
        click.echo("No timelines found.")
        return
    echo_table(rows, ["id", "name", "status"], title="Timelines")


@click.command('get')
@click.argument('timeline_id')
@pass_context
@handle_sdk_error
def get_timeline(ctx, timeline_id: str):
    """Show a single timeline."""
    echo_json(ctx.run(lambda client: client.get_timeline(timeline_id)))


@click.command('events')
@click.argument('timeline_id')
@format_option
@pass_context
@handle_sdk_error
def list_timeline_events(ctx, timeline_id: str, output_format: str):
    """List a timeline's events."""
    events = ctx.run(lambda client: client.get_timeline_events(timeline_id))

    if output_format.lower() == 'json':
        echo_json(events)
        return

    rows = unwrap_list(events)
    if not rows:
        click.echo("No timeline events found.")
        return
    echo_table(rows, ["id", "title", "narrative_event_type"], title=f"Events of {timeline_id}")


@click.command('users')
@click.argument('timeline_id')
@format_option
@pass_context
@handle_sdk_error
def list_timeline_users(ctx, timeline_id: str, output_format: str):
    """List the users placed on a timeline."""
    users = ctx.run(lambda client: client.get_timeline_users(timeline_id))

    if output_format.lower() == 'json':
        echo_json(users)
        return

    rows = unwrap_list(users)
    if not rows:
        click.echo("No users found.")
        return
    echo_table(rows, ["id", "current_step", "paused_at_beat"], title=f"Users on {timeline_id}")


@click.command('user')
@click.argument('timeline_id')
@click.option('--user-id', '-u', default=None, help='User to show (default: session user)')
@pass_context
@handle_sdk_error
def get_timeline_user(ctx, timeline_id: str, user_id: Optional[str]):
    """Show one user on a timeline."""
    echo_json(ctx.run(lambda client: client.get_timeline_user(timeline_id, user_id)))


@click.command('delete-user')
@click.argument('timeline_id')
@click.option('--user-id', '-u', default=None, help='User to delete (default: session user)')
@click.confirmation_option(prompt='Delete this timeline user?')
@pass_context
@handle_sdk_error
def delete_timeline_user(ctx, timeline_id: str, user_id: Optional[str]):
    """Delete one user from a timeline."""
    echo_json(ctx.run(lambda client: client.delete_timeline_user(timeline_id, user_id)))


@click.command('delete-users')
@click.argument('timeline_id')
@click.confirmation_option(prompt='Delete ALL users on this timeline?')
@pass_context
@handle_sdk_error
def delete_timeline_users(ctx, timeline_id: str):
    """Delete every user on a timeline."""
    echo_json(ctx.run(lambda client: client.delete_timeline_users(timeline_id)))


@click.command('state-changes')
@click.argument('timeline_id')
@pass_context
@handle_sdk_error
def state_changes(ctx, timeline_id: str):
    """List event state changes for a timeline."""
    echo_json(ctx.run(lambda client: client.get_timeline_event_state_changes(timeline_id)))
