"""
Copyright (C) 2026 Fictioneers Ltd.  All Rights Reserved.
Fictioneers Python SDK

CLI commands for the current audience user.

The user is chosen with the global ``--user-id`` option (or the configured
user id); without one a random user id is generated for the invocation.
"""

from dataclasses import asdict
from typing import Optional

import click

from fictioneers.cli.context import echo_json, handle_sdk_error, pass_context


@click.command('whoami')
@pass_context
@handle_sdk_error
def whoami(ctx):
    """Print the user id and key kind this invocation acts with."""
    client = ctx.create_client()
    echo_json({"user_id": client.get_user_id(), "key_kind": client.key_kind.value})


@click.command('get')
@pass_context
@handle_sdk_error
def get(ctx):
    """Show the current user."""
    echo_json(ctx.run(lambda client: client.get_user()))


@click.command('create')
@click.argument('timeline_id')
@click.option('--disable-time-guards', is_flag=True, help='Ignore time guards on timeline events')
@click.option('--pause-at-beats', is_flag=True, help='Stop automatic progression at beats')
@click.option('--max-steps', type=int, default=None, help='Maximum steps to progress on creation')
@pass_context
@handle_sdk_error
def create(ctx, timeline_id: str, disable_time_guards: bool, pause_at_beats: bool,
           max_steps: Optional[int]):
    """
    Create the current user on a published timeline.

    Examples:

        fictioneers -u player-1 user create 7f3c... --pause-at-beats
    """
    echo_json(ctx.run(lambda client: client.create_user(
        timeline_id=timeline_id,
        disable_time_guards=disable_time_guards,
        pause_at_beats=pause_at_beats,
        max_steps=max_steps,
    )))


@click.command('progress')
@click.option('--max-steps', type=int, default=None, help='Maximum steps to progress')
@click.option('--pause-at-beats/--no-pause-at-beats', default=True,
              help='Stop at beats (default: pause)')
@pass_context
@handle_sdk_error
def progress(ctx, max_steps: Optional[int], pause_at_beats: bool):
    """Progress the current user along their timeline."""
    echo_json(ctx.run(lambda client: client.progress_user_step(
        max_steps=max_steps, pause_at_beats=pause_at_beats,
    )))


@click.command('events')
@pass_context
@handle_sdk_error
def events(ctx):
    """List the current user's timeline events."""
    echo_json(ctx.run(lambda client: client.get_user_timeline_events()))


@click.command('follow-link')
@click.argument('timeline_event_id')
@click.argument('link_id')
@pass_context
@handle_sdk_error
def follow_link(ctx, timeline_event_id: str, link_id: str):
    """Follow a link from one of the user's timeline events."""
    echo_json(ctx.run(
        lambda client: client.follow_link_user_timeline_event(timeline_event_id, link_id)
    ))


@click.command('init')
@click.argument('timeline_id')
@click.option('--disable-time-guards', is_flag=True, help='Ignore time guards on timeline events')
@click.option('--pause-at-beats', is_flag=True, help='Stop automatic progression at beats')
@click.option('--max-steps', type=int, default=None, help='Maximum steps to progress on creation')
@click.option('--attach-existing-user', is_flag=True,
              help='Include the user payload when the user already exists')
@pass_context
@handle_sdk_error
def init(ctx, timeline_id: str, disable_time_guards: bool, pause_at_beats: bool,
         max_steps: Optional[int], attach_existing_user: bool):
    """Get or create the current user, then list their timeline events."""
    result = ctx.run(lambda client: client.initialise_and_progress_user(
        timeline_id=timeline_id,
        disable_time_guards=disable_time_guards,
        pause_at_beats=pause_at_beats,
        max_steps=max_steps,
        attach_existing_user=attach_existing_user,
    ))
    echo_json(asdict(result))


@click.command('delete')
@click.confirmation_option(prompt='Delete the current user?')
@pass_context
@handle_sdk_error
def delete(ctx):
    """Delete the current user and their story state."""
    echo_json(ctx.run(lambda client: client.delete_user()))
