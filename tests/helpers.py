"""Shared builders for raw GitHub event records used across tests."""

from typing import Any

USERNAME = "octocat"
CREATED_AT = "2024-03-05T14:30:00Z"


def make_event(
    event_type: Any,
    payload: dict[str, Any] | None = None,
    repo: str = "octo/hello-world",
    login: str = USERNAME,
    created_at: str = CREATED_AT,
) -> dict[str, Any]:
    """Build one raw event record as the API returns it."""
    return {
        "id": "1234567890",
        "type": event_type,
        "actor": {"id": 1, "login": login, "url": f"https://api.github.com/users/{login}"},
        "repo": {"id": 2, "name": repo, "url": f"https://api.github.com/repos/{repo}"},
        "payload": payload if payload is not None else {},
        "public": True,
        "created_at": created_at,
    }
