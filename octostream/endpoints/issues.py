"""Issues and issue assignees.

Note: the issues list includes pull requests; check ``issue.is_pull_request``.

API Reference: https://docs.github.com/en/rest/issues

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import AssigneesUpdate, Issue, IssueRequest, User
from octostream.utils.ensure import argument_not_null, argument_not_null_or_empty_string
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream


class IssuesEndpoint(BaseEndpoint):
    """Endpoint for issue-related API calls.

    Example:
        >>> issues = await client.issues.get_all_for_repository("python", "cpython").collect()
        >>> print(len(issues))

    """

    async def get(self, owner: str | int, name: str | None, number: int) -> Issue:
        """Get a specific issue.

        Raises:
            NotFoundError: If the issue doesn't exist.

        """
        self._ensure_repository(owner, name)
        return await self._connection.get(urls.issue(owner, name, number), Issue)

    def get_all_for_repository(
        self,
        owner: str | int,
        name: str | None = None,
        request: IssueRequest | None = None,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[Issue]:
        self._ensure_repository(owner, name)
        request = request if request is not None else IssueRequest()
        return self._connection.get_and_flatten_all_pages(
            urls.issues(owner, name), Issue, request.to_params(), options=options
        )


class AssigneesEndpoint(BaseEndpoint):
    """Endpoint for issue assignee API calls."""

    def get_all_for_repository(
        self,
        owner: str | int,
        name: str | None = None,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[User]:
        """Stream the users issues in the repository can be assigned to."""
        self._ensure_repository(owner, name)
        return self._connection.get_and_flatten_all_pages(
            urls.assignees(owner, name), User, options=options
        )

    async def check_assignee(self, owner: str | int, name: str | None, assignee: str) -> bool:
        self._ensure_repository(owner, name)
        argument_not_null_or_empty_string(assignee, "assignee")
        return await self._connection.is_success(urls.assignee(owner, name, assignee))

    async def add_assignees(
        self,
        owner: str | int,
        name: str | None,
        number: int,
        assignees: AssigneesUpdate,
    ) -> Issue:
        """Add assignees to an issue; returns the updated issue."""
        self._ensure_repository(owner, name)
        argument_not_null(assignees, "assignees")
        return await self._connection.post(
            urls.issue_assignees(owner, name, number), Issue, assignees
        )

    async def remove_assignees(
        self,
        owner: str | int,
        name: str | None,
        number: int,
        assignees: AssigneesUpdate,
    ) -> Issue:
        """Remove assignees from an issue; returns the updated issue."""
        self._ensure_repository(owner, name)
        argument_not_null(assignees, "assignees")
        return await self._connection.delete(
            urls.issue_assignees(owner, name, number), assignees, model=Issue
        )
