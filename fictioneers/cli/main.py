"""
CLI entry point for the Fictioneers SDK.

Provides command-line access to timeline administration and to the
audience endpoints for a single user.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from fictioneers._version import __version__
from fictioneers.cli.context import CLIContext, pass_context
from fictioneers.config.settings import get_default_config_path, load_config
from fictioneers.exceptions import InvalidConfigurationError
from fictioneers.logging_config import setup_logging


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Set logging level (default: WARNING, INFO with --verbose)',
)
@click.option(
    '--api-key',
    envvar='FICTIONEERS_API_KEY',
    default=None,
    help='API key (overrides configuration; also read from FICTIONEERS_API_KEY)',
)
@click.option(
    '--user-id',
    '-u',
    default=None,
    help='User id to act as on audience endpoints',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='fictioneers')
@pass_context
def cli(
    ctx: CLIContext,
    config: Optional[Path],
    log_level: Optional[str],
    api_key: Optional[str],
    user_id: Optional[str],
    verbose: bool,
):
    """
    Fictioneers - command-line client for the Fictioneers narrative-timeline API.

    Manage timelines and timeline users with a secret key, or drive a single
    audience user through a story.
    """
    ctx.verbose = verbose
    ctx.config_path = str(config) if config else None

    effective_log_level = (log_level or ('INFO' if verbose else 'WARNING')).upper()
    # Keep stdout clean for command output while the configuration loads
    setup_logging(level=effective_log_level, json_format=False)

    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    if api_key:
        ctx.config.api.api_key = api_key
    if user_id:
        ctx.config.api.user_id = user_id

    log_file = Path(ctx.config.logging.file) if ctx.config.logging.file else None
    setup_logging(
        level=effective_log_level,
        log_file=log_file,
        json_format=ctx.config.logging.format == "json",
    )

    if verbose:
        logger = logging.getLogger("fictioneers")
        logger.info(f"Loaded configuration from: {ctx.config_path or 'defaults'}")
        logger.info(f"Log level: {effective_log_level}")


@cli.group()
def timeline():
    """Administer published timelines (secret key required)."""
    pass


from fictioneers.cli.timeline import (  # noqa: E402
    delete_timeline_user,
    delete_timeline_users,
    get_timeline,
    get_timeline_user,
    list_timeline_events,
    list_timeline_users,
    list_timelines,
    state_changes,
)
timeline.add_command(list_timelines, name='list')
timeline.add_command(get_timeline, name='get')
timeline.add_command(list_timeline_events, name='events')
timeline.add_command(list_timeline_users, name='users')
timeline.add_command(get_timeline_user, name='user')
timeline.add_command(delete_timeline_user, name='delete-user')
timeline.add_command(delete_timeline_users, name='delete-users')
timeline.add_command(state_changes, name='state-changes')


@cli.group()
def user():
    """Drive the current audience user."""
    pass


from fictioneers.cli.user import (  # noqa: E402
    create,
    delete,
    events,
    follow_link,
    get,
    init,
    progress,
    whoami,
)
user.add_command(whoami)
user.add_command(get)
user.add_command(create)
user.add_command(progress)
user.add_command(events)
user.add_command(follow_link, name='follow-link')
user.add_command(init)
user.add_command(delete)


if __name__ == '__main__':
    cli()
