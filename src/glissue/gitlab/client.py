"""GitLab API client using httpx for issue retrieval.

This module provides an async HTTP client for the read-only GitLab v4
endpoints the viewer needs: a single issue and its notes.
Requests are made once; failures are raised to the caller without retry.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from glissue.gitlab.models import Issue, Note

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://gitlab.com"
DEFAULT_TIMEOUT = 30.0


class GitLabClientError(Exception):
    """Base exception for GitLab client errors."""


class GitLabAuthError(GitLabClientError):
    """Authentication with GitLab failed."""


class GitLabNotFoundError(GitLabClientError):
    """Requested resource not found."""


def project_path(repo: str) -> str:
    """Encode a ``namespace/project`` path for use as a project id."""
    return quote(repo.strip("/"), safe="")


class GitLabClient:
    """Async GitLab API client for viewing issues.

    Sends the ``PRIVATE-TOKEN`` header when a token is configured;
    public projects can be read anonymously.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the GitLab client.

        Args:
            host: Base URL of the GitLab instance.
            token: Personal access token, or None for anonymous access.
            timeout: Request timeout in seconds.
        """
        self.host = host.rstrip("/")
        self.timeout = timeout
        self._token = token

        # Never log the token
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["PRIVATE-TOKEN"] = token

        self._client: httpx.AsyncClient | None = None

    @property
    def api_url(self) -> str:
        return f"{self.host}/api/v4"

    async def __aenter__(self) -> GitLabClient:
        """Enter async context manager."""
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            headers=self._headers,
            timeout=self.timeout,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, ensuring it's initialized."""
        if self._client is None:
            raise RuntimeError("GitLabClient must be used as async context manager")
        return self._client

    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a single HTTP request and map error responses.

        Args:
            method: HTTP method.
            endpoint: API endpoint relative to ``/api/v4``.
            **kwargs: Additional arguments passed to httpx request.

        Returns:
            httpx.Response object.

        Raises:
            GitLabAuthError: If authentication fails.
            GitLabNotFoundError: If resource is not found.
            GitLabClientError: For other API and transport errors.
        """
        logger.debug(f"{method} {self.api_url}{endpoint} params={kwargs.get('params')}")

        try:
            response = await self.client.request(method, endpoint, **kwargs)
        except httpx.TimeoutException as e:
            raise GitLabClientError(f"Request timeout after {self.timeout:.0f}s: {endpoint}") from e
        except httpx.HTTPError as e:
            raise GitLabClientError(f"HTTP error: {e}") from e

        if response.status_code in (401, 403):
            raise GitLabAuthError(f"GitLab authentication failed ({response.status_code}). Check your token.")

        if response.status_code == 404:
            raise GitLabNotFoundError(f"Resource not found: {endpoint}")

        if response.status_code >= 400:
            error_body = response.text
            logger.error(f"GitLab API error {response.status_code}: {error_body}")
            raise GitLabClientError(f"GitLab API error {response.status_code}: {error_body[:200]}")

        return response

    # =========================================================================
    # Issue Operations
    # =========================================================================

    async def get_issue(self, repo: str, issue_id: int) -> Issue:
        """Get a single issue by its project-scoped number.

        Args:
            repo: Project path, e.g. ``group/subgroup/project``.
            issue_id: The issue IID.

        Returns:
            Issue object.

        Raises:
            GitLabClientError: On a failed request or an unparseable payload.
        """
        endpoint = f"/projects/{project_path(repo)}/issues/{issue_id}"
        response = await self._request("GET", endpoint)
        try:
            return Issue.from_api(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise GitLabClientError(f"Invalid response from GitLab: {e}") from e

    async def list_issue_notes(
        self,
        repo: str,
        issue_id: int,
        page: int | None = None,
        per_page: int | None = None,
    ) -> list[Note]:
        """List one page of notes on an issue.

        Args:
            repo: Project path, e.g. ``group/subgroup/project``.
            issue_id: The issue IID.
            page: Page number; omitted from the query when None.
            per_page: Page size; omitted from the query when None.

        Returns:
            Notes in the order returned by the API, system notes included.
        """
        params: dict[str, int] = {}
        if page:
            params["page"] = page
        if per_page:
            params["per_page"] = per_page

        endpoint = f"/projects/{project_path(repo)}/issues/{issue_id}/notes"
        response = await self._request("GET", endpoint, params=params)
        try:
            return [Note.from_api(item) for item in response.json()]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise GitLabClientError(f"Invalid response from GitLab: {e}") from e
