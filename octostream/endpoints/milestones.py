"""Milestones endpoint implementation.

API Reference: https://docs.github.com/en/rest/issues/milestones

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import Milestone, MilestoneRequest, MilestoneUpdate, NewMilestone
from octostream.utils.ensure import argument_not_null
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream


class MilestonesEndpoint(BaseEndpoint):
    """Endpoint for milestone API calls."""

    async def get(self, owner: str | int, name: str | None, number: int) -> Milestone:
        self._ensure_repository(owner, name)
        return await self._connection.get(urls.milestone(owner, name, number), Milestone)

    def get_all_for_repository(
        self,
        owner: str | int,
        name: str | None = None,
        request: MilestoneRequest | None = None,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[Milestone]:
        """Stream a repository's milestones.

        Without ``request`` this lists open milestones by due date,
        earliest first.
        """
        self._ensure_repository(owner, name)
        request = request if request is not None else MilestoneRequest()
        return self._connection.get_and_flatten_all_pages(
            urls.milestones(owner, name), Milestone, request.to_params(), options=options
        )

    async def create(
        self, owner: str | int, name: str | None, new_milestone: NewMilestone
    ) -> Milestone:
        self._ensure_repository(owner, name)
        argument_not_null(new_milestone, "new_milestone")
        return await self._connection.post(urls.milestones(owner, name), Milestone, new_milestone)

    async def update(
        self,
        owner: str | int,
        name: str | None,
        number: int,
        milestone_update: MilestoneUpdate,
    ) -> Milestone:
        self._ensure_repository(owner, name)
        argument_not_null(milestone_update, "milestone_update")
        return await self._connection.patch(
            urls.milestone(owner, name, number), Milestone, milestone_update
        )

    async def delete(self, owner: str | int, name: str | None, number: int) -> None:
        self._ensure_repository(owner, name)
        await self._connection.delete(urls.milestone(owner, name, number))
