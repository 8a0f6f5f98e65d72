"""Repository traffic statistics (last 14 days).

API Reference: https://docs.github.com/en/rest/metrics/traffic

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import (
    TrafficClones,
    TrafficPath,
    TrafficReferrer,
    TrafficRequest,
    TrafficViews,
)
from octostream.urls import AcceptHeaders
from octostream.utils.ensure import argument_not_null


class TrafficEndpoint(BaseEndpoint):
    """Endpoint for traffic API calls. Requires push access to the repository.

    Example:
        >>> views = await client.traffic.get_views("octocat", "Hello-World", TrafficRequest(per="week"))
        >>> print(views.count, views.uniques)

    """

    async def get_all_paths(self, owner: str | int, name: str | None = None) -> list[TrafficPath]:
        """Top 10 popular content paths."""
        self._ensure_repository(owner, name)
        return await self._connection.get_all(
            urls.traffic_paths(owner, name), TrafficPath, accept=AcceptHeaders.TRAFFIC_PREVIEW
        )

    async def get_all_referrers(
        self, owner: str | int, name: str | None = None
    ) -> list[TrafficReferrer]:
        """Top 10 referring sites."""
        self._ensure_repository(owner, name)
        return await self._connection.get_all(
            urls.traffic_referrers(owner, name),
            TrafficReferrer,
            accept=AcceptHeaders.TRAFFIC_PREVIEW,
        )

    async def get_clones(
        self, owner: str | int, name: str | None, per: TrafficRequest
    ) -> TrafficClones:
        self._ensure_repository(owner, name)
        argument_not_null(per, "per")
        return await self._connection.get(
            urls.traffic_clones(owner, name),
            TrafficClones,
            per.to_params(),
            accept=AcceptHeaders.TRAFFIC_PREVIEW,
        )

    async def get_views(
        self, owner: str | int, name: str | None, per: TrafficRequest
    ) -> TrafficViews:
        self._ensure_repository(owner, name)
        argument_not_null(per, "per")
        return await self._connection.get(
            urls.traffic_views(owner, name),
            TrafficViews,
            per.to_params(),
            accept=AcceptHeaders.TRAFFIC_PREVIEW,
        )
