"""Test configuration and shared fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from octostream import ClientConfig
from octostream.utils.http import HTTPClient, HTTPResponse

PAGE_2_URL = "https://example.com/page/2"
PAGE_3_URL = "https://example.com/page/3"


def make_response(
    data: Any,
    *,
    next_url: str | None = None,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    url: str = "https://api.github.com/",
) -> HTTPResponse:
    """Build an HTTPResponse the way the transport would."""
    all_headers = dict(headers or {})
    if next_url:
        all_headers["link"] = f'<{next_url}>; rel="next"'
    return HTTPResponse(data=data, status_code=status_code, headers=all_headers, url=url)


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def config() -> ClientConfig:
    """Config with retries off and example.com trusted for pagination links."""
    return ClientConfig(
        base_url="https://api.github.com",
        token="test_token",
        timeout=5.0,
        max_retries=0,
        allowed_hosts=("example.com",),
    )


@pytest.fixture
def fake_http(config: ClientConfig) -> MagicMock:
    """Transport double: ``get`` and friends are AsyncMocks."""
    http = MagicMock(spec=HTTPClient)
    http.config = config
    http.get = AsyncMock()
    http.post = AsyncMock()
    http.put = AsyncMock()
    http.patch = AsyncMock()
    http.delete = AsyncMock()
    return http


# =============================================================================
# Paged responses
# =============================================================================


@pytest.fixture
def three_pages() -> list[HTTPResponse]:
    """Three pages holding items 1-3, 4-6 and 7."""
    return [
        make_response([{"id": 1}, {"id": 2}, {"id": 3}], next_url=PAGE_2_URL),
        make_response([{"id": 4}, {"id": 5}, {"id": 6}], next_url=PAGE_3_URL),
        make_response([{"id": 7}]),
    ]


# =============================================================================
# Sample API Responses
# =============================================================================


@pytest.fixture
def sample_user_response() -> dict[str, Any]:
    """Sample GitHub user as it appears in collaborator lists."""
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "url": "https://api.github.com/users/octocat",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "site_admin": False,
        "permissions": {"pull": True, "push": True, "admin": False},
    }


@pytest.fixture
def sample_pull_response(sample_user_response: dict[str, Any]) -> dict[str, Any]:
    """Sample GitHub pull request API response."""
    return {
        "id": 1,
        "node_id": "MDExOlB1bGxSZXF1ZXN0MQ==",
        "url": "https://api.github.com/repos/octocat/Hello-World/pulls/1347",
        "html_url": "https://github.com/octocat/Hello-World/pull/1347",
        "number": 1347,
        "state": "open",
        "locked": False,
        "title": "Amazing new feature",
        "user": sample_user_response,
        "body": "Please pull these awesome changes in!",
        "labels": [],
        "milestone": None,
        "head": {"label": "octocat:new-topic", "ref": "new-topic", "sha": "6dcb09b"},
        "base": {"label": "octocat:master", "ref": "master", "sha": "6dcb09b"},
        "draft": False,
        "created_at": "2011-01-26T19:01:12Z",
        "updated_at": "2011-01-26T19:01:12Z",
        "closed_at": None,
        "merged_at": None,
    }


@pytest.fixture
def sample_milestone_response() -> dict[str, Any]:
    """Sample GitHub milestone API response."""
    return {
        "url": "https://api.github.com/repos/octocat/Hello-World/milestones/1",
        "html_url": "https://github.com/octocat/Hello-World/milestones/v1.0",
        "id": 1002604,
        "node_id": "MDk6TWlsZXN0b25lMTAwMjYwNA==",
        "number": 1,
        "state": "open",
        "title": "v1.0",
        "description": "Tracking milestone for version 1.0",
        "open_issues": 4,
        "closed_issues": 8,
        "created_at": "2011-04-10T20:09:31Z",
        "updated_at": "2014-03-03T18:58:10Z",
        "closed_at": None,
        "due_on": "2012-10-09T23:39:01Z",
    }


@pytest.fixture
def sample_issue_response(sample_user_response: dict[str, Any]) -> dict[str, Any]:
    """Sample GitHub issue API response."""
    return {
        "id": 1,
        "number": 1347,
        "state": "open",
        "title": "Found a bug",
        "body": "I'm having a problem with this.",
        "user": sample_user_response,
        "labels": [{"id": 208045946, "name": "bug", "color": "f29513", "default": True}],
        "assignee": sample_user_response,
        "assignees": [sample_user_response],
        "comments": 0,
        "created_at": "2011-04-22T13:33:48Z",
        "updated_at": "2011-04-22T13:33:48Z",
    }
