"""
Tests for the GitHub Client

Requests are answered by an httpx.MockTransport, no network is used.
"""

import json
from typing import List

import httpx
import pytest

from eas_preview.models import IssueContext
from eas_preview.services.github_client import (
    GitHubAPIError,
    GitHubAuthError,
    GitHubClient,
    comment_marker,
)

API_URL = "https://api.github.test"
CONTEXT = IssueContext(owner="owner", repo="repo", number=42)


class RecordingGitHub:
    """Fake GitHub issue comments API that records every request."""

    def __init__(self, comments: List[dict] = None, status_code: int = 200):
        self.comments = comments or []
        self.status_code = status_code
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.status_code >= 400:
            return httpx.Response(self.status_code, text="Resource not accessible by integration")

        if request.method == "GET":
            page = int(request.url.params["page"])
            per_page = int(request.url.params["per_page"])
            start = (page - 1) * per_page
            return httpx.Response(200, json=self.comments[start:start + per_page])

        body = json.loads(request.content)["body"]
        if request.method == "POST":
            return httpx.Response(201, json={"id": 1001, "body": body})
        comment_id = int(request.url.path.rsplit("/", 1)[-1])
        return httpx.Response(200, json={"id": comment_id, "body": body})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class TestGitHubClient:
    """Test suite for GitHubClient."""

    def test_requires_token(self):
        """Test that a missing token fails before any request."""
        with pytest.raises(GitHubAuthError):
            GitHubClient(None)

        with pytest.raises(GitHubAuthError):
            GitHubClient("")

    @pytest.mark.asyncio
    async def test_creates_comment(self):
        """Test that a new comment is created when none carries the marker."""
        github = RecordingGitHub(comments=[{"id": 1, "body": "Looks good!"}])
        client = GitHubClient("test-token", api_url=API_URL, transport=github.transport)

        comment_id = await client.upsert_issue_comment(CONTEXT, "preview", "app:@fake-project-id")

        assert comment_id == 1001
        post = github.requests[-1]
        assert post.method == "POST"
        assert post.url.path == "/repos/owner/repo/issues/42/comments"
        assert json.loads(post.content)["body"] == "preview\n\n<!-- app:@fake-project-id -->"

    @pytest.mark.asyncio
    async def test_updates_existing_comment(self):
        """Test that the comment carrying the marker is updated in place."""
        github = RecordingGitHub(comments=[
            {"id": 1, "body": "Looks good!"},
            {"id": 7, "body": f"old preview\n\n{comment_marker('app:@fake-project-id')}"},
        ])
        client = GitHubClient("test-token", api_url=API_URL, transport=github.transport)

        comment_id = await client.upsert_issue_comment(CONTEXT, "new preview", "app:@fake-project-id")

        assert comment_id == 7
        patch = github.requests[-1]
        assert patch.method == "PATCH"
        assert patch.url.path == "/repos/owner/repo/issues/comments/7"
        assert [r.method for r in github.requests].count("POST") == 0

    @pytest.mark.asyncio
    async def test_searches_every_page(self):
        """Test that comments beyond the first page are found."""
        comments = [{"id": i, "body": f"comment {i}"} for i in range(1, 101)]
        comments.append({"id": 150, "body": comment_marker("preview")})
        github = RecordingGitHub(comments=comments)
        client = GitHubClient("test-token", api_url=API_URL, transport=github.transport)

        comment_id = await client.upsert_issue_comment(CONTEXT, "body", "preview")

        assert comment_id == 150
        pages = [r.url.params["page"] for r in github.requests if r.method == "GET"]
        assert pages == ["1", "2"]

    @pytest.mark.asyncio
    async def test_sends_auth_headers(self):
        """Test that requests are authenticated."""
        github = RecordingGitHub()
        client = GitHubClient("test-token", api_url=API_URL, transport=github.transport)

        await client.list_issue_comments(CONTEXT)

        request = github.requests[0]
        assert request.headers["Authorization"] == "token test-token"
        assert request.headers["Accept"] == "application/vnd.github+json"

    @pytest.mark.asyncio
    async def test_api_error(self):
        """Test that failed requests raise GitHubAPIError."""
        github = RecordingGitHub(status_code=403)
        client = GitHubClient("test-token", api_url=API_URL, transport=github.transport)

        with pytest.raises(GitHubAPIError) as exc_info:
            await client.upsert_issue_comment(CONTEXT, "body", "preview")

        assert exc_info.value.status_code == 403
        assert "not accessible" in exc_info.value.response_body
        assert len(github.requests) == 1
