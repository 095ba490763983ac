"""
GitHub API Client.

Async HTTP client for the public events endpoint. One invocation makes one
GET request; there are no retries and no pagination.

Every request carries a User-Agent (GitHub rejects requests without one)
and an explicit Accept header for the v3 JSON media type.
"""

from typing import Any
from urllib.parse import quote

import httpx

from github_activity.core.config import get_api_base_url, get_app_config
from github_activity.core.exceptions import (
    ResponseParseError,
    TransportError,
    UpstreamStatusError,
    UserNotFoundError,
)
from github_activity.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class GitHubClient:
    """
    HTTP client for the GitHub REST API.

    Features:
    - Base URL and timeout from application.yaml (env override for the URL)
    - User-Agent and Accept headers on every request
    - Structured logging of requests/responses
    - Upstream failures mapped to application exceptions

    Usage:
        client = GitHubClient()
        try:
            events = await client.fetch_events("torvalds")
        finally:
            await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        accept: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            base_url: API root. If None, reads api.base_url from application.yaml.
            timeout: Request timeout in seconds. If None, reads api.timeout.
            user_agent: User-Agent header. If None, reads api.user_agent.
            accept: Accept header. If None, reads api.accept.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        if None in (base_url, timeout, user_agent, accept):
            api = get_app_config().application.api
            config_base_url, config_timeout = get_api_base_url()
            base_url = base_url or config_base_url
            timeout = timeout if timeout is not None else config_timeout
            user_agent = user_agent or api.user_agent
            accept = accept or api.accept

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent, "Accept": accept}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method
            path: API path (e.g., /users/torvalds/events)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response, whatever its status code

        Raises:
            TransportError: If no response was received
        """
        client = await self._get_client()

        log_with_source(logger, "api", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            reason = str(e) or type(e).__name__
            log_with_source(
                logger,
                "api",
                "warning",
                "API request failed",
                method=method,
                path=path,
                error=reason,
            )
            raise TransportError(reason) from e

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
            bytes=len(response.content),
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def fetch_events(self, username: str) -> list[Any]:
        """
        Fetch the public events of a user, newest first.

        Args:
            username: GitHub login

        Returns:
            The decoded JSON array, unmodified

        Raises:
            UserNotFoundError: On HTTP 404
            UpstreamStatusError: On any other non-200 status
            ResponseParseError: If the body is not a JSON array
            TransportError: If no response was received
        """
        response = await self.get(f"/users/{quote(username, safe='')}/events")

        if response.status_code == 404:
            raise UserNotFoundError(username)
        if response.status_code != 200:
            raise UpstreamStatusError(response.status_code)

        try:
            events = response.json()
        except ValueError as e:
            log_with_source(
                logger, "api", "warning", "Invalid JSON body", username=username, error=str(e),
            )
            raise ResponseParseError() from e

        if not isinstance(events, list):
            raise ResponseParseError(
                f"Unexpected response: expected a JSON array, got {type(events).__name__}"
            )

        log_with_source(logger, "api", "info", "Fetched events", username=username, count=len(events))
        return events


async def fetch_activity(username: str, client: GitHubClient | None = None) -> list[Any]:
    """Fetch a user's events with a short-lived client that is always closed."""
    client = client or GitHubClient()
    try:
        return await client.fetch_events(username)
    finally:
        await client.close()
