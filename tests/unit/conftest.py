"""
Unit Test Fixtures.

Fixtures for unit tests - the network is always mocked.
Unit tests should be fast and isolated, never touching api.github.com.
"""

import io
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from rich.console import Console

from github_activity.cli.client import GitHubClient


# =============================================================================
# Console Fixtures
# =============================================================================


class CapturedConsole:
    """A rich Console writing plain text into a buffer."""

    def __init__(self) -> None:
        self.buffer = io.StringIO()
        self.console = Console(file=self.buffer, color_system=None, width=120)

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


@pytest.fixture
def captured_console() -> CapturedConsole:
    """
    Console whose output can be asserted on.

    Usage:
        def test_render(captured_console):
            ActivityFormatter(captured_console.console).render(events, options)
            assert captured_console.lines == [...]
    """
    return CapturedConsole()


# =============================================================================
# HTTP Mock Fixtures
# =============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def github_client_factory() -> Callable[..., tuple[GitHubClient, RecordingTransport]]:
    """
    Build a GitHubClient backed by a canned response.

    Usage:
        client, transport = github_client_factory(status_code=200, json_body=[])
        client, transport = github_client_factory(raises=httpx.ConnectError("boom"))
    """

    def _factory(
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
        raises: Exception | None = None,
    ) -> tuple[GitHubClient, RecordingTransport]:
        def handler(request: httpx.Request) -> httpx.Response:
            if raises is not None:
                raise raises
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(
                status_code,
                content=json.dumps(json_body if json_body is not None else []).encode(),
                headers={"Content-Type": "application/json"},
            )

        transport = RecordingTransport(handler)
        client = GitHubClient(
            base_url="https://api.test",
            timeout=5.0,
            user_agent="github-activity-tests",
            accept="application/vnd.github.v3+json",
            transport=transport,
        )
        return client, transport

    return _factory
