"""
Root Pytest Fixtures.

Shared fixtures available to all test types: raw event records shaped like
the GitHub ``/users/{username}/events`` response, and cache resets so each
test sees a fresh configuration load.
"""

from collections.abc import Callable, Generator
from typing import Any

import pytest

from github_activity.core import logging as logging_module
from github_activity.core.config import get_app_config, get_settings
from tests.helpers import make_event


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_config_cache() -> Generator[None, None, None]:
    """Clear cached settings between tests so env and YAML changes apply."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop GITHUB_ACTIVITY_* overrides inherited from the developer's shell."""
    for name in ("GITHUB_ACTIVITY_CONFIG_DIR", "GITHUB_ACTIVITY_API_BASE_URL", "GITHUB_ACTIVITY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Event Record Fixtures
# =============================================================================


@pytest.fixture
def event_factory() -> Callable[..., dict[str, Any]]:
    """Provide make_event for tests that need custom records."""
    return make_event


@pytest.fixture
def raw_events() -> list[dict[str, Any]]:
    """One record per rendered kind, newest first."""
    return [
        make_event("PushEvent", {"commits": [{"sha": "a"}, {"sha": "b"}]}),
        make_event("IssuesEvent", {"action": "opened", "issue": {"title": "Bug report"}}),
        make_event("IssuesEvent", {"action": "closed", "issue": {"title": "Old bug"}}),
        make_event(
            "PullRequestEvent",
            {"action": "opened", "pull_request": {"title": "Add feature"}},
        ),
        make_event(
            "PullRequestEvent",
            {"action": "closed", "pull_request": {"title": "Fix typo"}},
        ),
        make_event("WatchEvent", {"action": "started"}),
        make_event("ForkEvent", {"forkee": {"full_name": "someone/hello-world"}}),
        make_event("CreateEvent", {"ref_type": "branch", "ref": "feature-x"}),
        make_event("GollumEvent", {"pages": []}),
    ]
