"""
Activity Formatting.

Renders fetched events to the console, either as one decorated line per
event or, in raw mode, as the fetched JSON array.

Line rendering applies the --type filter first, then --limit, then drops
events that have nothing to say (issue and pull request actions other than
opened/closed). Icons and colors come from EVENT_STYLES; styling is
attached to rich Text objects so the words are the same whether or not the
terminal shows color.
"""

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.text import Text

from github_activity.cli.options import ActivityOptions
from github_activity.core.logging import get_logger
from github_activity.schemas.event import ActivityEvent, parse_events

logger = get_logger(__name__)

# style_key -> (icon, rich style)
EVENT_STYLES: dict[str, tuple[str, str]] = {
    "PushEvent": ("🔄", "green"),
    "IssuesEvent.opened": ("📖", "yellow"),
    "IssuesEvent.closed": ("🔒", "red"),
    "PullRequestEvent.opened": ("🔍", "cyan"),
    "PullRequestEvent.closed": ("✅", "magenta"),
    "WatchEvent": ("👀", "blue"),
    "ForkEvent": ("🍴", "bright_black"),
    "CreateEvent": ("✨", "blue"),
    "other": ("🔔", "bold"),
}


def format_timestamp(value: str) -> str:
    """Render an ISO 8601 timestamp in local time using the locale's format.

    Values that do not parse are returned unchanged.
    """
    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone().strftime("%c")


def select_events(
    events: Sequence[ActivityEvent], options: ActivityOptions,
) -> list[ActivityEvent]:
    """Apply the exact-match type filter, then keep the first ``limit`` events."""
    selected = list(events)
    if options.event_type is not None:
        selected = [event for event in selected if event.type == options.event_type]
    if options.limit is not None:
        selected = selected[:options.limit]
    return selected


def describe_event(event: ActivityEvent) -> Text | None:
    """Build the styled line for one event, or None if it is not reported."""
    message = event.describe(format_timestamp(event.created_at))
    if message is None:
        return None
    icon, style = EVENT_STYLES.get(event.style_key, EVENT_STYLES["other"])
    return Text(f"{icon} {message}", style=style)


class ActivityFormatter:
    """
    Writes fetched activity to a rich Console.

    Usage:
        formatter = ActivityFormatter(Console())
        formatter.render(raw_events, options)
    """

    def __init__(self, console: Console, json_indent: int = 2) -> None:
        self.console = console
        self.json_indent = json_indent

    def render(self, raw_events: list[Any], options: ActivityOptions) -> int:
        """
        Render the events for ``options``.

        Args:
            raw_events: The decoded array exactly as the API returned it
            options: Resolved invocation settings

        Returns:
            Number of lines written; the JSON document and the
            informational messages count as one

        Raises:
            ResponseParseError: If a record cannot be read as an event
        """
        if options.raw_output:
            # Raw mode prints everything fetched; --type and --limit only
            # shape the line view.
            self.render_json(raw_events)
            return 1

        events = parse_events(raw_events)
        if not events:
            self._info(f"No recent activity found for user: {options.username}", "red")
            return 1

        selected = select_events(events, options)
        if not selected:
            self._info(
                f"No {options.event_type} events found for user: {options.username}",
                "yellow",
            )
            return 1

        written = 0
        for event in selected:
            line = describe_event(event)
            if line is None:
                logger.debug("Skipped event", type=event.type, style_key=event.style_key)
                continue
            self.console.print(line, soft_wrap=True)
            written += 1

        logger.debug(
            "Rendered activity",
            fetched=len(events),
            selected=len(selected),
            written=written,
        )
        return written

    def render_json(self, raw_events: list[Any]) -> None:
        """Print the fetched array as indented JSON, unstyled."""
        self.console.out(
            json.dumps(raw_events, indent=self.json_indent, ensure_ascii=False),
            highlight=False,
        )

    def _info(self, message: str, style: str) -> None:
        self.console.print(Text(message, style=style), soft_wrap=True)
