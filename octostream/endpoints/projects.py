"""Columns of classic project boards.

API Reference: https://docs.github.com/en/rest/projects/columns

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import NewProjectColumn, ProjectColumn, ProjectColumnMove, ProjectColumnUpdate
from octostream.urls import AcceptHeaders
from octostream.utils.ensure import argument_not_null
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream


class ProjectColumnsEndpoint(BaseEndpoint):
    """Endpoint for project column API calls.

    All calls send the projects preview media type.

    Example:
        >>> columns = await client.project_columns.get_all(1002604).collect()
        >>> await client.project_columns.move(columns[-1].id, ProjectColumnMove(position="first"))

    """

    def get_all(
        self, project_id: int, *, options: ApiOptions | None = None
    ) -> ItemStream[ProjectColumn]:
        return self._connection.get_and_flatten_all_pages(
            urls.project_columns(project_id),
            ProjectColumn,
            accept=AcceptHeaders.PROJECTS_PREVIEW,
            options=options,
        )

    async def get(self, column_id: int) -> ProjectColumn:
        return await self._connection.get(
            urls.project_column(column_id), ProjectColumn, accept=AcceptHeaders.PROJECTS_PREVIEW
        )

    async def create(self, project_id: int, new_column: NewProjectColumn) -> ProjectColumn:
        argument_not_null(new_column, "new_column")
        return await self._connection.post(
            urls.project_columns(project_id),
            ProjectColumn,
            new_column,
            accept=AcceptHeaders.PROJECTS_PREVIEW,
        )

    async def update(self, column_id: int, column_update: ProjectColumnUpdate) -> ProjectColumn:
        argument_not_null(column_update, "column_update")
        return await self._connection.patch(
            urls.project_column(column_id),
            ProjectColumn,
            column_update,
            accept=AcceptHeaders.PROJECTS_PREVIEW,
        )

    async def delete(self, column_id: int) -> None:
        await self._connection.delete(
            urls.project_column(column_id), accept=AcceptHeaders.PROJECTS_PREVIEW
        )

    async def move(self, column_id: int, position: ProjectColumnMove) -> None:
        """Move a column to the first or last place, or after another column."""
        argument_not_null(position, "position")
        await self._connection.post(
            urls.project_column_move(column_id),
            body=position,
            accept=AcceptHeaders.PROJECTS_PREVIEW,
        )
