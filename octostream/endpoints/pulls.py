"""Pull Requests endpoint implementation.

This module provides methods for interacting with GitHub's Pull Requests API:
- Stream pull requests for a repository
- Get, create and update a pull request
- Merge, and check whether it has been merged
- Stream its commits and changed files

API Reference: https://docs.github.com/en/rest/pulls

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import (
    MergePullRequest,
    NewPullRequest,
    PullRequest,
    PullRequestCommit,
    PullRequestFile,
    PullRequestMerge,
    PullRequestRequest,
    PullRequestUpdate,
)
from octostream.urls import AcceptHeaders
from octostream.utils.ensure import argument_not_null
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream


class PullsEndpoint(BaseEndpoint):
    """Endpoint for pull request-related API calls.

    Repository arguments are either ``owner, name`` or a numeric
    repository id followed by ``None``.

    Example:
        >>> stream = client.pulls.get_all_for_repository(
        ...     "python", "cpython", PullRequestRequest(state="all"), options=ApiOptions(page_size=100)
        ... )
        >>> async for pr in stream:
        ...     print(f"#{pr.number}: {pr.title}")

    """

    async def get(self, owner: str | int, name: str | None, number: int) -> PullRequest:
        """Get a specific pull request.

        Raises:
            NotFoundError: If the pull request doesn't exist.

        """
        self._ensure_repository(owner, name)
        return await self._connection.get(urls.pull(owner, name, number), PullRequest)

    def get_all_for_repository(
        self,
        owner: str | int,
        name: str | None = None,
        request: PullRequestRequest | None = None,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[PullRequest]:
        """Stream the pull requests of a repository.

        Args:
            owner: Repository owner, or the numeric repository id.
            name: Repository name; None with a repository id.
            request: Filters; open pull requests, newest first, by default.
            options: Pagination window.

        Returns:
            ItemStream of PullRequest, fetched page by page as it is consumed.

        Raises:
            InvalidArgumentError: Before any request, for blank arguments.

        """
        self._ensure_repository(owner, name)
        request = request if request is not None else PullRequestRequest()
        return self._connection.get_and_flatten_all_pages(
            urls.pulls(owner, name), PullRequest, request.to_params(), options=options
        )

    async def create(
        self, owner: str | int, name: str | None, new_pull_request: NewPullRequest
    ) -> PullRequest:
        self._ensure_repository(owner, name)
        argument_not_null(new_pull_request, "new_pull_request")
        return await self._connection.post(urls.pulls(owner, name), PullRequest, new_pull_request)

    async def update(
        self,
        owner: str | int,
        name: str | None,
        number: int,
        pull_request_update: PullRequestUpdate,
    ) -> PullRequest:
        self._ensure_repository(owner, name)
        argument_not_null(pull_request_update, "pull_request_update")
        return await self._connection.patch(
            urls.pull(owner, name, number), PullRequest, pull_request_update
        )

    async def merge(
        self,
        owner: str | int,
        name: str | None,
        number: int,
        merge_pull_request: MergePullRequest,
    ) -> PullRequestMerge:
        """Merge a pull request.

        Raises:
            GitHubError: 405 when the pull request is not mergeable, 409 when
                ``sha`` does not match the head.

        """
        self._ensure_repository(owner, name)
        argument_not_null(merge_pull_request, "merge_pull_request")
        return await self._connection.put(
            urls.pull_merge(owner, name, number),
            PullRequestMerge,
            merge_pull_request,
            accept=AcceptHeaders.SQUASH_PREVIEW,
        )

    async def merged(self, owner: str | int, name: str | None, number: int) -> bool:
        """True if the pull request has been merged (204), False on 404."""
        self._ensure_repository(owner, name)
        return await self._connection.is_success(urls.pull_merge(owner, name, number))

    def commits(
        self,
        owner: str | int,
        name: str | None,
        number: int,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[PullRequestCommit]:
        self._ensure_repository(owner, name)
        return self._connection.get_and_flatten_all_pages(
            urls.pull_commits(owner, name, number), PullRequestCommit, options=options
        )

    def files(
        self,
        owner: str | int,
        name: str | None,
        number: int,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[PullRequestFile]:
        self._ensure_repository(owner, name)
        return self._connection.get_and_flatten_all_pages(
            urls.pull_files(owner, name, number), PullRequestFile, options=options
        )
