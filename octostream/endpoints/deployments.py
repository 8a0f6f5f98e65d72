"""Deployment statuses.

API Reference: https://docs.github.com/en/rest/deployments/statuses

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import DeploymentStatus, NewDeploymentStatus
from octostream.urls import AcceptHeaders
from octostream.utils.ensure import argument_not_null
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream


class DeploymentStatusesEndpoint(BaseEndpoint):
    """Endpoint for deployment status API calls."""

    def get_all(
        self,
        owner: str | int,
        name: str | None,
        deployment_id: int,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[DeploymentStatus]:
        """Stream the statuses of a deployment, newest first."""
        self._ensure_repository(owner, name)
        return self._connection.get_and_flatten_all_pages(
            urls.deployment_statuses(owner, name, deployment_id),
            DeploymentStatus,
            accept=AcceptHeaders.DEPLOYMENT_STATUSES_PREVIEW,
            options=options,
        )

    async def create(
        self,
        owner: str | int,
        name: str | None,
        deployment_id: int,
        new_status: NewDeploymentStatus,
    ) -> DeploymentStatus:
        self._ensure_repository(owner, name)
        argument_not_null(new_status, "new_status")
        return await self._connection.post(
            urls.deployment_statuses(owner, name, deployment_id),
            DeploymentStatus,
            new_status,
            accept=AcceptHeaders.DEPLOYMENT_STATUSES_PREVIEW,
        )
