"""
Argument Resolution.

Turns the raw command-line tokens into an immutable ActivityOptions.
Resolution never touches the network; every usage error is raised here,
before the fetch starts.

Recognised tokens:
    <username>          first token not starting with "--"
    --help, -h          show usage (anywhere; also when no tokens are given)
    --type=<EventType>  exact, case-sensitive filter on the event tag
    --limit=<N>         render at most N events after filtering
    --json              print the fetched array as indented JSON

Anything else starting with "--" is ignored.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from github_activity.core.exceptions import UsageError

HELP_FLAGS = frozenset({"--help", "-h"})
JSON_FLAG = "--json"
TYPE_PREFIX = "--type="
LIMIT_PREFIX = "--limit="


@dataclass(frozen=True)
class ActivityOptions:
    """Resolved invocation settings."""

    username: str | None = None
    event_type: str | None = None
    limit: int | None = None
    raw_output: bool = False
    help_requested: bool = False


def parse_limit(value: str) -> int:
    """
    Parse a --limit value.

    Raises:
        UsageError: If value is not a strictly positive integer
    """
    if not value.isdecimal() or int(value) <= 0:
        raise UsageError(
            f"Invalid --limit value: {value!r}. Expected a positive integer."
        )
    return int(value)


def resolve_options(tokens: Sequence[str]) -> ActivityOptions:
    """
    Resolve command-line tokens into ActivityOptions.

    Args:
        tokens: Arguments after the program name

    Returns:
        ActivityOptions; ``help_requested`` is set and nothing else is
        resolved when help was asked for or no tokens were given.

    Raises:
        UsageError: If no username is present or --limit is invalid
    """
    if not tokens or any(token in HELP_FLAGS for token in tokens):
        return ActivityOptions(help_requested=True)

    username = next((token for token in tokens if not token.startswith("--")), None)
    if username is None:
        raise UsageError("Please provide a GitHub username.")

    event_type = None
    limit = None
    raw_output = False

    for token in tokens:
        if token == JSON_FLAG:
            raw_output = True
        elif token.startswith(TYPE_PREFIX):
            event_type = token[len(TYPE_PREFIX):] or None
        elif token.startswith(LIMIT_PREFIX):
            limit = parse_limit(token[len(LIMIT_PREFIX):])

    return ActivityOptions(
        username=username,
        event_type=event_type,
        limit=limit,
        raw_output=raw_output,
    )
