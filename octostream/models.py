"""Pydantic models for GitHub API requests and responses.

Response models ignore fields they do not know about, so new fields from
GitHub never break decoding. Request models know how to render themselves
as a query string (``to_params``) or a JSON body (``to_body``).

Example:
    >>> from octostream.models import MilestoneRequest
    >>> MilestoneRequest().to_params()
    {'state': 'open', 'sort': 'due_date', 'direction': 'asc'}

"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GitHubModel(BaseModel):
    """Base model for all GitHub API payloads.

    - Ignores unknown fields (GitHub adds new ones regularly)
    - Stores enum values directly
    - Accepts both alias and field name

    """

    model_config = ConfigDict(
        extra="ignore",
        use_enum_values=True,
        populate_by_name=True,
    )


# =============================================================================
# Enums
# =============================================================================


class ItemStateFilter(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class ItemState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class MilestoneSort(str, Enum):
    DUE_DATE = "due_date"
    COMPLETENESS = "completeness"


class PullRequestSort(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    POPULARITY = "popularity"
    LONG_RUNNING = "long-running"


class IssueSort(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    COMMENTS = "comments"


class TrafficDayOrWeek(str, Enum):
    DAY = "day"
    WEEK = "week"


class InvitationPermission(str, Enum):
    READ = "read"
    WRITE = "write"
    ADMIN = "admin"


class DeploymentState(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
    FAILURE = "failure"
    INACTIVE = "inactive"
    IN_PROGRESS = "in_progress"
    QUEUED = "queued"


class ProjectColumnPosition(str, Enum):
    FIRST = "first"
    LAST = "last"
    AFTER = "after"


class MergeMethod(str, Enum):
    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


# =============================================================================
# Users and repositories
# =============================================================================


class User(GitHubModel):
    """GitHub user, as it appears in lists and on other resources.

    Attributes:
        id: Unique identifier.
        login: Username (handle).
        type: Account type ("User", "Organization" or "Bot").
        site_admin: Whether the user is GitHub staff.
        permissions: Repository permissions; present on collaborator lists.

    """

    id: int
    login: str
    node_id: str | None = None
    avatar_url: str | None = None
    url: str | None = None
    html_url: str | None = None
    type: str = "User"
    site_admin: bool = False
    name: str | None = None
    email: str | None = None
    permissions: dict[str, bool] | None = None

    def __str__(self) -> str:
        return f"User({self.login})"


class Repository(GitHubModel):
    """GitHub repository (summary fields)."""

    id: int
    name: str
    full_name: str
    owner: User | None = None
    private: bool = False
    html_url: str | None = None
    description: str | None = None
    fork: bool = False
    url: str | None = None
    default_branch: str = "main"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __str__(self) -> str:
        return f"Repository({self.full_name})"


# =============================================================================
# Issues, milestones and labels
# =============================================================================


class Label(GitHubModel):
    """Issue/PR label."""

    id: int
    name: str
    color: str = ""
    url: str | None = None
    default: bool = False
    description: str | None = None


class Milestone(GitHubModel):
    """Issue/PR milestone."""

    id: int
    number: int
    title: str
    description: str | None = None
    url: str | None = None
    html_url: str | None = None
    state: str = "open"
    creator: User | None = None
    open_issues: int = 0
    closed_issues: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    due_on: datetime | None = None
    closed_at: datetime | None = None

    def __str__(self) -> str:
        return f"Milestone(#{self.number}: {self.title})"


class Issue(GitHubModel):
    """GitHub issue.

    Pull requests are issues too; ``is_pull_request`` tells them apart.
    """

    id: int
    number: int
    title: str
    state: str = "open"
    url: str | None = None
    html_url: str | None = None
    body: str | None = None
    user: User | None = None
    labels: list[Label] = Field(default_factory=list)
    assignee: User | None = None
    assignees: list[User] = Field(default_factory=list)
    milestone: Milestone | None = None
    locked: bool = False
    comments: int = 0
    pull_request: dict[str, str | None] | None = None
    closed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __str__(self) -> str:
        return f"Issue(#{self.number}: {self.title})"

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None


# =============================================================================
# Pull requests
# =============================================================================


class PullRequest(GitHubModel):
    """GitHub pull request.

    Attributes:
        id: Unique identifier.
        number: PR number within the repository.
        title: PR title.
        state: "open" or "closed".
        head: Source branch information.
        base: Target branch information.
        merged: Whether the PR has been merged.
        mergeable: Whether GitHub thinks the PR can be merged.

    """

    id: int
    number: int
    title: str
    state: str = "open"
    url: str | None = None
    html_url: str | None = None
    body: str | None = None
    user: User | None = None
    labels: list[Label] = Field(default_factory=list)
    assignees: list[User] = Field(default_factory=list)
    milestone: Milestone | None = None
    head: dict[str, Any] = Field(default_factory=dict)
    base: dict[str, Any] = Field(default_factory=dict)
    merged: bool = False
    mergeable: bool | None = None
    merged_by: User | None = None
    merge_commit_sha: str | None = None
    commits: int | None = None
    additions: int | None = None
    deletions: int | None = None
    changed_files: int | None = None
    draft: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    merged_at: datetime | None = None

    def __str__(self) -> str:
        return f"PullRequest(#{self.number}: {self.title})"


class PullRequestMerge(GitHubModel):
    """Result of merging a pull request."""

    sha: str | None = None
    merged: bool = False
    message: str = ""


class PullRequestCommit(GitHubModel):
    """Commit listed on a pull request."""

    sha: str
    url: str | None = None
    html_url: str | None = None
    commit: dict[str, Any] = Field(default_factory=dict)
    author: User | None = None
    committer: User | None = None
    parents: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return str(self.commit.get("message", ""))


class PullRequestFile(GitHubModel):
    """File changed by a pull request."""

    sha: str | None = None
    filename: str
    status: str
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    blob_url: str | None = None
    raw_url: str | None = None
    contents_url: str | None = None
    patch: str | None = None


# =============================================================================
# Projects, deployments and invitations
# =============================================================================


class ProjectColumn(GitHubModel):
    """Column of a classic project board."""

    id: int
    name: str
    url: str | None = None
    project_url: str | None = None
    cards_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DeploymentStatus(GitHubModel):
    """Status reported for a deployment."""

    id: int
    state: str
    url: str | None = None
    creator: User | None = None
    description: str | None = None
    environment: str | None = None
    target_url: str | None = None
    log_url: str | None = None
    environment_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RepositoryInvitation(GitHubModel):
    """Invitation to collaborate on a repository."""

    id: int
    repository: Repository | None = None
    invitee: User | None = None
    inviter: User | None = None
    permissions: str = "write"
    url: str | None = None
    html_url: str | None = None
    created_at: datetime | None = None


# =============================================================================
# Traffic
# =============================================================================


class TrafficPath(GitHubModel):
    path: str
    title: str = ""
    count: int = 0
    uniques: int = 0


class TrafficReferrer(GitHubModel):
    referrer: str
    count: int = 0
    uniques: int = 0


class TrafficCount(GitHubModel):
    timestamp: datetime
    count: int = 0
    uniques: int = 0


class TrafficClones(GitHubModel):
    """Clone counts for the last 14 days."""

    count: int = 0
    uniques: int = 0
    clones: list[TrafficCount] = Field(default_factory=list)


class TrafficViews(GitHubModel):
    """Page view counts for the last 14 days."""

    count: int = 0
    uniques: int = 0
    views: list[TrafficCount] = Field(default_factory=list)


# =============================================================================
# Request models
# =============================================================================


class RequestModel(GitHubModel):
    """Base for objects sent to GitHub as a query string or a JSON body."""

    def to_body(self) -> dict[str, Any]:
        """JSON body with unset fields left out."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_params(self) -> dict[str, Any]:
        """Query parameters with unset fields left out."""
        return {
            key: ",".join(value) if isinstance(value, list) else value
            for key, value in self.model_dump(mode="json", by_alias=True, exclude_none=True).items()
        }


class PullRequestRequest(RequestModel):
    """Filters for listing pull requests.

    Defaults to open pull requests, newest first.
    """

    state: ItemStateFilter = ItemStateFilter.OPEN
    head: str | None = None
    base: str | None = None
    sort: PullRequestSort = PullRequestSort.CREATED
    direction: SortDirection = SortDirection.DESCENDING


class MilestoneRequest(RequestModel):
    """Filters for listing milestones. Defaults to open, by due date, ascending."""

    state: ItemStateFilter = ItemStateFilter.OPEN
    sort: MilestoneSort = MilestoneSort.DUE_DATE
    direction: SortDirection = SortDirection.ASCENDING


class IssueRequest(RequestModel):
    """Filters for listing a repository's issues."""

    state: ItemStateFilter = ItemStateFilter.OPEN
    labels: list[str] | None = None
    sort: IssueSort = IssueSort.CREATED
    direction: SortDirection = SortDirection.DESCENDING
    since: datetime | None = None
    milestone: str | None = None
    assignee: str | None = None
    creator: str | None = None
    mentioned: str | None = None


class TrafficRequest(RequestModel):
    per: TrafficDayOrWeek = TrafficDayOrWeek.DAY


class NewPullRequest(RequestModel):
    title: str = Field(min_length=1)
    head: str = Field(min_length=1)
    base: str = Field(min_length=1)
    body: str | None = None
    draft: bool | None = None
    maintainer_can_modify: bool | None = None


class PullRequestUpdate(RequestModel):
    title: str | None = None
    body: str | None = None
    state: ItemState | None = None
    base: str | None = None


class MergePullRequest(RequestModel):
    commit_title: str | None = None
    commit_message: str | None = None
    sha: str | None = None
    merge_method: MergeMethod | None = None


class NewMilestone(RequestModel):
    title: str = Field(min_length=1)
    state: ItemState | None = None
    description: str | None = None
    due_on: datetime | None = None


class MilestoneUpdate(RequestModel):
    title: str | None = None
    state: ItemState | None = None
    description: str | None = None
    due_on: datetime | None = None


class NewProjectColumn(RequestModel):
    name: str = Field(min_length=1)


class ProjectColumnUpdate(RequestModel):
    name: str = Field(min_length=1)


class ProjectColumnMove(RequestModel):
    """Where to move a project column.

    ``AFTER`` needs the id of the column to move after.

    Example:
        >>> ProjectColumnMove(position="after", column_id=42).to_body()
        {'position': 'after:42'}

    """

    position: ProjectColumnPosition
    column_id: int | None = None

    @model_validator(mode="after")
    def _check_column_id(self) -> ProjectColumnMove:
        if self.position == ProjectColumnPosition.AFTER and self.column_id is None:
            raise ValueError("column_id is required when position is 'after'")
        return self

    def to_body(self) -> dict[str, Any]:
        if self.position == ProjectColumnPosition.AFTER:
            return {"position": f"after:{self.column_id}"}
        return {"position": str(self.position)}


class NewDeploymentStatus(RequestModel):
    state: DeploymentState
    target_url: str | None = None
    log_url: str | None = None
    description: str | None = None
    environment: str | None = None
    environment_url: str | None = None
    auto_inactive: bool | None = None


class InvitationUpdate(RequestModel):
    permissions: InvitationPermission


class AssigneesUpdate(RequestModel):
    assignees: list[str] = Field(min_length=1)
