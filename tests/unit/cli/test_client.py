"""Unit tests for the GitHub HTTP client."""

import httpx
import pytest

from github_activity.cli.client import GitHubClient, fetch_activity
from github_activity.core.exceptions import (
    ResponseParseError,
    TransportError,
    UpstreamStatusError,
    UserNotFoundError,
)


class TestGitHubClientInit:
    """Tests for client construction."""

    def test_explicit_arguments_win(self) -> None:
        """Test client uses the given URL, timeout and headers."""
        client = GitHubClient(
            base_url="https://ghe.example/api/v3/",
            timeout=2.5,
            user_agent="agent",
            accept="application/json",
        )
        assert client.base_url == "https://ghe.example/api/v3"
        assert client.timeout == 2.5
        assert client.headers == {"User-Agent": "agent", "Accept": "application/json"}

    def test_defaults_come_from_application_yaml(self) -> None:
        """Test client initializes from application.yaml."""
        client = GitHubClient()
        assert client.base_url == "https://api.github.com"
        assert client.timeout == 30.0
        assert client.headers["User-Agent"] == "github-activity-cli"
        assert client.headers["Accept"] == "application/vnd.github.v3+json"

    def test_env_overrides_base_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test GITHUB_ACTIVITY_API_BASE_URL replaces the configured URL."""
        monkeypatch.setenv("GITHUB_ACTIVITY_API_BASE_URL", "https://ghe.example/api/v3/")
        client = GitHubClient()
        assert client.base_url == "https://ghe.example/api/v3"


class TestFetchEvents:
    """Tests for GitHubClient.fetch_events."""

    @pytest.mark.asyncio
    async def test_returns_decoded_array_unchanged(self, github_client_factory, raw_events) -> None:
        """Test a 200 response yields the decoded array as-is."""
        client, _ = github_client_factory(json_body=raw_events)

        events = await client.fetch_events("octocat")

        assert events == raw_events
        await client.close()

    @pytest.mark.asyncio
    async def test_issues_single_get_with_required_headers(self, github_client_factory) -> None:
        """Test exactly one GET is sent with User-Agent and Accept."""
        client, transport = github_client_factory(json_body=[])

        await client.fetch_events("octocat")

        assert len(transport.requests) == 1
        request = transport.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://api.test/users/octocat/events"
        assert request.headers["User-Agent"] == "github-activity-tests"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        await client.close()

    @pytest.mark.asyncio
    async def test_username_is_quoted_into_path(self, github_client_factory) -> None:
        """Test slashes and spaces in the username are percent-encoded."""
        client, transport = github_client_factory(json_body=[])

        await client.fetch_events("a/b c")

        assert transport.requests[0].url.raw_path == b"/users/a%2Fb%20c/events"
        await client.close()

    @pytest.mark.asyncio
    async def test_404_raises_user_not_found(self, github_client_factory) -> None:
        """Test a 404 maps to UserNotFoundError."""
        client, _ = github_client_factory(status_code=404, json_body={"message": "Not Found"})

        with pytest.raises(UserNotFoundError) as exc_info:
            await client.fetch_events("ghost")

        assert exc_info.value.message == "User not found."
        assert exc_info.value.username == "ghost"
        assert exc_info.value.code == "RES_NOT_FOUND"
        await client.close()

    @pytest.mark.asyncio
    async def test_500_message_contains_status(self, github_client_factory) -> None:
        """Test other statuses are reported with the code."""
        client, _ = github_client_factory(status_code=500, text="oops")

        with pytest.raises(UpstreamStatusError) as exc_info:
            await client.fetch_events("octocat")

        assert exc_info.value.status_code == 500
        assert "500" in exc_info.value.message
        await client.close()

    @pytest.mark.asyncio
    async def test_rate_limited_status_is_reported_verbatim(self, github_client_factory) -> None:
        """Test a 403 is not retried and shows its status."""
        client, _ = github_client_factory(status_code=403, json_body={"message": "rate limit"})

        with pytest.raises(UpstreamStatusError, match="Status: 403"):
            await client.fetch_events("octocat")
        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_json_raises_parse_error(self, github_client_factory) -> None:
        """Test a 200 with a non-JSON body raises ResponseParseError."""
        client, _ = github_client_factory(status_code=200, text="<html>not json</html>")

        with pytest.raises(ResponseParseError) as exc_info:
            await client.fetch_events("octocat")

        assert exc_info.value.message == "Error parsing response JSON."
        await client.close()

    @pytest.mark.asyncio
    async def test_non_array_json_raises_parse_error(self, github_client_factory) -> None:
        """Test a JSON object body is rejected."""
        client, _ = github_client_factory(json_body={"message": "hello"})

        with pytest.raises(ResponseParseError, match="expected a JSON array"):
            await client.fetch_events("octocat")
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_failure_raises_transport_error(self, github_client_factory) -> None:
        """Test connection failures carry the underlying message."""
        client, _ = github_client_factory(raises=httpx.ConnectError("Name or service not known"))

        with pytest.raises(TransportError) as exc_info:
            await client.fetch_events("octocat")

        assert exc_info.value.reason == "Name or service not known"
        assert exc_info.value.message == "Request error: Name or service not known"
        await client.close()


class TestClientLifecycle:
    """Tests for opening and closing the underlying httpx client."""

    @pytest.mark.asyncio
    async def test_close_client(self, github_client_factory) -> None:
        """Test client closes properly."""
        client, _ = github_client_factory()
        await client._get_client()
        assert client._client is not None

        await client.close()

        assert client._client is None

    @pytest.mark.asyncio
    async def test_fetch_activity_closes_client_on_success(self, github_client_factory, raw_events) -> None:
        """Test fetch_activity closes the client after a successful fetch."""
        client, _ = github_client_factory(json_body=raw_events)

        events = await fetch_activity("octocat", client=client)

        assert events == raw_events
        assert client._client is None

    @pytest.mark.asyncio
    async def test_fetch_activity_closes_client_on_error(self, github_client_factory) -> None:
        """Test fetch_activity closes the client when the fetch fails."""
        client, _ = github_client_factory(status_code=404)

        with pytest.raises(UserNotFoundError):
            await fetch_activity("ghost", client=client)

        assert client._client is None
