"""Main GitHub client class.

``GitHubClient`` wires configuration, authentication, the async transport
and the shared connection together, and exposes one property per group of
endpoints.

Example:
    >>> from octostream import GitHubClient
    >>>
    >>> async with GitHubClient(token="ghp_xxx") as client:
    ...     async for pull in client.pulls.get_all_for_repository("octocat", "Hello-World"):
    ...         print(pull.number, pull.title)

"""

from __future__ import annotations

import httpx

from octostream.auth import create_auth
from octostream.config import ClientConfig
from octostream.connection import ApiConnection
from octostream.endpoints.collaborators import CollaboratorsEndpoint
from octostream.endpoints.deployments import DeploymentStatusesEndpoint
from octostream.endpoints.invitations import InvitationsEndpoint
from octostream.endpoints.issues import AssigneesEndpoint, IssuesEndpoint
from octostream.endpoints.milestones import MilestonesEndpoint
from octostream.endpoints.projects import ProjectColumnsEndpoint
from octostream.endpoints.pulls import PullsEndpoint
from octostream.endpoints.traffic import TrafficEndpoint
from octostream.utils.http import HTTPClient
from octostream.utils.rate_limiter import RateLimiter


class GitHubClient:
    """GitHub API client with typed, streaming endpoints.

    Every "get all" method returns an ``ItemStream`` that fetches pages
    lazily while it is consumed.

    Context Manager:
        >>> async with GitHubClient() as client:
        ...     users = await client.collaborators.get_all("octocat", "Hello-World").collect()

    """

    __slots__ = (
        "_assignees",
        "_collaborators",
        "_config",
        "_connection",
        "_deployment_statuses",
        "_http",
        "_invitations",
        "_issues",
        "_milestones",
        "_project_columns",
        "_pulls",
        "_traffic",
    )

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        allowed_hosts: tuple[str, ...] | None = None,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: Personal access token. Falls back to GITHUB_TOKEN, then
                anonymous access.
            base_url: API root; override for GitHub Enterprise.
            timeout: Request timeout in seconds.
            max_retries: Transport retry attempts.
            allowed_hosts: Extra hosts pagination links may point at.
            config: A complete ClientConfig; the keyword overrides above
                are applied on top of it.
            transport: Optional httpx transport (tests use MockTransport).

        """
        config_kwargs: dict[str, object] = {}
        if token is not None:
            config_kwargs["token"] = token
        if base_url is not None:
            config_kwargs["base_url"] = base_url
        if timeout is not None:
            config_kwargs["timeout"] = timeout
        if max_retries is not None:
            config_kwargs["max_retries"] = max_retries
        if allowed_hosts is not None:
            config_kwargs["allowed_hosts"] = tuple(allowed_hosts)

        if config is None:
            self._config = ClientConfig(**config_kwargs)  # type: ignore[arg-type]
        else:
            self._config = config.with_overrides(**config_kwargs) if config_kwargs else config

        self._http = HTTPClient(self._config, create_auth(self._config.token), transport=transport)
        self._connection = ApiConnection(self._http)

        self._collaborators = CollaboratorsEndpoint(self._connection)
        self._invitations = InvitationsEndpoint(self._connection)
        self._traffic = TrafficEndpoint(self._connection)
        self._pulls = PullsEndpoint(self._connection)
        self._milestones = MilestonesEndpoint(self._connection)
        self._issues = IssuesEndpoint(self._connection)
        self._assignees = AssigneesEndpoint(self._connection)
        self._project_columns = ProjectColumnsEndpoint(self._connection)
        self._deployment_statuses = DeploymentStatusesEndpoint(self._connection)

    # =========================================================================
    # Endpoint Properties
    # =========================================================================

    @property
    def collaborators(self) -> CollaboratorsEndpoint:
        return self._collaborators

    @property
    def invitations(self) -> InvitationsEndpoint:
        return self._invitations

    @property
    def traffic(self) -> TrafficEndpoint:
        return self._traffic

    @property
    def pulls(self) -> PullsEndpoint:
        return self._pulls

    @property
    def milestones(self) -> MilestonesEndpoint:
        return self._milestones

    @property
    def issues(self) -> IssuesEndpoint:
        return self._issues

    @property
    def assignees(self) -> AssigneesEndpoint:
        return self._assignees

    @property
    def project_columns(self) -> ProjectColumnsEndpoint:
        return self._project_columns

    @property
    def deployment_statuses(self) -> DeploymentStatusesEndpoint:
        return self._deployment_statuses

    # =========================================================================
    # Client Properties
    # =========================================================================

    @property
    def connection(self) -> ApiConnection:
        """The shared connection, for endpoints without a resource client."""
        return self._connection

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def is_authenticated(self) -> bool:
        return self._config.is_authenticated

    @property
    def rate_limiter(self) -> RateLimiter:
        """The RateLimiter tracking GitHub's rate limits.

        Example:
            >>> remaining = client.rate_limiter.get_remaining("core")

        """
        return self._http.rate_limiter

    # =========================================================================
    # Lifecycle Methods
    # =========================================================================

    async def aclose(self) -> None:
        """Close the client and release its connections."""
        await self._http.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        auth_status = "authenticated" if self.is_authenticated else "anonymous"
        return f"GitHubClient(base_url={self._config.base_url!r}, {auth_status})"
