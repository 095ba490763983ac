"""
GitHub Activity CLI entry point.

Usage:
    github-activity <username> [--type=<EventType>] [--limit=<N>] [--json]
    github-activity --help

Control flow is resolve → fetch → format. Usage errors are reported before
any network access; every failure prints one red line to stderr and exits 1.
"""

import asyncio
import locale
import sys
from typing import NoReturn

import click
import structlog
from rich.console import Console
from rich.text import Text

from github_activity.cli.client import fetch_activity
from github_activity.cli.formatter import ActivityFormatter
from github_activity.cli.options import ActivityOptions, resolve_options
from github_activity.core.config import get_app_config
from github_activity.core.exceptions import ApplicationError, ConfigurationError, UsageError
from github_activity.core.logging import get_logger, setup_logging

USAGE_LINE = "Usage: github-activity <username> [--type=<EventType>] [--limit=<N>] [--json]"


def _make_console(stderr: bool = False) -> Console:
    """Console honouring output.color from application.yaml."""
    color = get_app_config().application.output.color
    return Console(stderr=stderr, color_system="auto" if color else None)


def print_help(console: Console) -> None:
    """Print the usage screen."""
    console.print("[cyan]📦 GitHub Activity CLI[/cyan]")
    console.print()
    console.print("[yellow]Usage:[/yellow]")
    console.print("  github-activity <username> [options]", markup=False)
    console.print()
    console.print("[yellow]Examples:[/yellow]")
    console.print("  github-activity torvalds")
    console.print("  github-activity torvalds --type=PushEvent --limit=5")
    console.print("  github-activity torvalds --json")
    console.print()
    console.print("[yellow]Description:[/yellow]")
    console.print(
        "  Fetch and display recent public GitHub activity (commits, issues, stars, etc.)\n"
        "  for the specified user using the GitHub API."
    )
    console.print()
    console.print("[yellow]Options:[/yellow]")
    console.print(
        "  --type=<EventType>  Only show events of this type (e.g. PushEvent, WatchEvent)\n"
        "  --limit=<N>         Show at most N events\n"
        "  --json              Print the raw JSON returned by the API\n"
        "  --verbose, -v       Log progress to stderr\n"
        "  --debug             Log debug details to stderr\n"
        "  --help, -h          Show this help message",
        markup=False,
        highlight=False,
    )


def _fail(message: str, hint: str | None = None) -> NoReturn:
    """Report a fatal error on stderr and exit 1."""
    try:
        err_console = _make_console(stderr=True)
    except ConfigurationError:
        # The settings themselves are what failed to load.
        err_console = Console(stderr=True)
    err_console.print(Text(f"❌ {message}", style="red"), soft_wrap=True)
    if hint:
        err_console.print(Text(hint, style="blue"), soft_wrap=True)
    sys.exit(1)


def _use_system_locale(logger) -> None:
    """Let %c timestamps follow the user's locale."""
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        logger.warning("Could not apply system locale", error=str(e))


def run(options: ActivityOptions, logger) -> int:
    """Fetch and render activity for resolved options. Returns lines written."""
    logger.info(
        "Fetching activity",
        username=options.username,
        event_type=options.event_type,
        limit=options.limit,
        raw_output=options.raw_output,
    )
    events = asyncio.run(fetch_activity(options.username))

    formatter = ActivityFormatter(
        _make_console(),
        json_indent=get_app_config().application.output.json_indent,
    )
    return formatter.render(events, options)


@click.command(
    context_settings={"ignore_unknown_options": True},
    add_help_option=False,
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def main(tokens: tuple[str, ...], verbose: bool, debug: bool) -> None:
    """Fetch and display recent public GitHub activity for a user."""
    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = None

    try:
        setup_logging(level=log_level)
    except ApplicationError as e:
        _fail(e.message)

    structlog.contextvars.bind_contextvars(source="cli")
    logger = get_logger(__name__)
    logger.debug("CLI invoked", tokens=list(tokens))

    try:
        options = resolve_options(tokens)
    except UsageError as e:
        logger.info("Usage error", error=e.message)
        _fail(e.message, USAGE_LINE)

    if options.help_requested:
        print_help(_make_console())
        return

    _use_system_locale(logger)

    try:
        run(options, logger)
    except ApplicationError as e:
        logger.warning("Activity fetch failed", code=e.code, error=e.message)
        _fail(e.message)


if __name__ == "__main__":
    main()
