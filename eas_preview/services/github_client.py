"""
GitHub API Client Module

This module provides a small client for the GitHub issue comments API.
It is used to create the preview comment, or update it on later runs.

Design Decisions:
- Use httpx for async HTTP requests
- Identify our comment with a hidden HTML marker, so re-runs update it
- Fail fast without a token, before any request is made
- Support pagination when searching for an existing comment
"""

from typing import Any, Dict, List, Optional

import httpx

from eas_preview.logging_config import get_logger
from eas_preview.models import IssueContext

logger = get_logger(__name__)


class GitHubAPIError(Exception):
    """Custom exception for GitHub API errors."""
    def __init__(self, message: str, status_code: int = None, response_body: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubAuthError(Exception):
    """Raised when no token is available to authenticate with GitHub."""
    pass


def comment_marker(comment_id: str) -> str:
    """Get the hidden marker that identifies a comment."""
    return f"<!-- {comment_id} -->"


class GitHubClient:
    """
    Async GitHub API client for issue comments.

    Usage:
        client = GitHubClient(token="...")
        comment_id = await client.upsert_issue_comment(context, body, "app:@project")
    """

    GITHUB_API_BASE = "https://api.github.com"
    COMMENTS_PER_PAGE = 100

    def __init__(
        self,
        token: Optional[str],
        api_url: str = GITHUB_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the GitHub client.

        Args:
            token: Token used to authenticate every request
            api_url: Base URL of the GitHub REST API
            transport: Custom httpx transport, used by tests

        Raises:
            GitHubAuthError: If no token is given
        """
        if not token:
            raise GitHubAuthError(
                "GitHub token is not available. Set GITHUB_TOKEN to post preview comments"
            )
        self._token = token
        self.api_url = api_url.rstrip("/")
        self._transport = transport

    def _get_headers(self) -> Dict[str, str]:
        """Get authenticated headers for API requests."""
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> httpx.Response:
        """
        Make an authenticated request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments to pass to httpx

        Returns:
            httpx.Response object

        Raises:
            GitHubAPIError: If the request fails
        """
        url = f"{self.api_url}{endpoint}"

        async with httpx.AsyncClient(timeout=30.0, transport=self._transport) as client:
            response = await client.request(
                method,
                url,
                headers=self._get_headers(),
                **kwargs
            )

        if response.status_code >= 400:
            error_body = response.text
            logger.error(
                "GitHub API error",
                status_code=response.status_code,
                endpoint=endpoint,
                error=error_body[:500]
            )
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body
            )

        return response

    async def list_issue_comments(self, context: IssueContext) -> List[Dict[str, Any]]:
        """Fetch every comment of an issue or pull request."""
        endpoint = f"/repos/{context.owner}/{context.repo}/issues/{context.number}/comments"
        comments: List[Dict[str, Any]] = []
        page = 1

        while True:
            response = await self._request(
                "GET",
                endpoint,
                params={"page": page, "per_page": self.COMMENTS_PER_PAGE}
            )
            page_data = response.json()
            comments.extend(page_data)

            if len(page_data) < self.COMMENTS_PER_PAGE:
                break
            page += 1

        return comments

    async def find_comment(self, context: IssueContext, marker: str) -> Optional[Dict[str, Any]]:
        """Find the first comment whose body contains the marker."""
        for comment in await self.list_issue_comments(context):
            if marker in (comment.get("body") or ""):
                return comment
        return None

    async def create_issue_comment(self, context: IssueContext, body: str) -> int:
        """Create a new comment and return its id."""
        endpoint = f"/repos/{context.owner}/{context.repo}/issues/{context.number}/comments"
        response = await self._request("POST", endpoint, json={"body": body})
        return response.json()["id"]

    async def update_issue_comment(self, context: IssueContext, comment_id: int, body: str) -> int:
        """Replace the body of an existing comment and return its id."""
        endpoint = f"/repos/{context.owner}/{context.repo}/issues/comments/{comment_id}"
        response = await self._request("PATCH", endpoint, json={"body": body})
        return response.json()["id"]

    async def upsert_issue_comment(
        self,
        context: IssueContext,
        body: str,
        comment_id: str
    ) -> int:
        """
        Create the comment identified by `comment_id`, or update it if it exists.

        The marker is appended to the body so the next run can find it again.

        Returns:
            Id of the created or updated comment
        """
        marker = comment_marker(comment_id)
        marked_body = f"{body}\n\n{marker}"

        existing = await self.find_comment(context, marker)
        if existing is not None:
            github_id = await self.update_issue_comment(context, existing["id"], marked_body)
            logger.info(
                "Updated preview comment",
                repo=context.full_repo_name,
                issue=context.number,
                comment_id=github_id
            )
            return github_id

        github_id = await self.create_issue_comment(context, marked_body)
        logger.info(
            "Created preview comment",
            repo=context.full_repo_name,
            issue=context.number,
            comment_id=github_id
        )
        return github_id
