"""Relative API locations and preview Accept headers.

Every resource client builds its locations here so the URL shapes live in
one place. Repository-scoped helpers take either ``(owner, name)`` or a
numeric repository id:

    >>> pulls("octocat", "Hello-World")
    '/repos/octocat/Hello-World/pulls'
    >>> pulls(1296269)
    '/repositories/1296269/pulls'

"""

from __future__ import annotations


class AcceptHeaders:
    """Preview media types some endpoints still require."""

    STABLE = "application/vnd.github+json"
    TRAFFIC_PREVIEW = "application/vnd.github.spiderman-preview"
    INVITATIONS_PREVIEW = "application/vnd.github.swamp-thing-preview+json"
    PROJECTS_PREVIEW = "application/vnd.github.inertia-preview+json"
    DEPLOYMENT_STATUSES_PREVIEW = "application/vnd.github.ant-man-preview+json"
    SQUASH_PREVIEW = "application/vnd.github.polaris-preview+json"


def repository(owner: str | int, name: str | None = None) -> str:
    if isinstance(owner, int):
        return f"/repositories/{owner}"
    return f"/repos/{owner}/{name}"


# Collaborators


def collaborators(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/collaborators"


def collaborator(owner: str | int, name: str | None, user: str) -> str:
    return f"{collaborators(owner, name)}/{user}"


# Invitations


def user_invitations() -> str:
    return "/user/repository_invitations"


def user_invitation(invitation_id: int) -> str:
    return f"{user_invitations()}/{invitation_id}"


def repository_invitations(repository_id: int) -> str:
    return f"{repository(repository_id)}/invitations"


def repository_invitation(repository_id: int, invitation_id: int) -> str:
    return f"{repository_invitations(repository_id)}/{invitation_id}"


# Traffic


def traffic_paths(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/traffic/popular/paths"


def traffic_referrers(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/traffic/popular/referrers"


def traffic_clones(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/traffic/clones"


def traffic_views(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/traffic/views"


# Pull requests


def pulls(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/pulls"


def pull(owner: str | int, name: str | None, number: int) -> str:
    return f"{pulls(owner, name)}/{number}"


def pull_merge(owner: str | int, name: str | None, number: int) -> str:
    return f"{pull(owner, name, number)}/merge"


def pull_commits(owner: str | int, name: str | None, number: int) -> str:
    return f"{pull(owner, name, number)}/commits"


def pull_files(owner: str | int, name: str | None, number: int) -> str:
    return f"{pull(owner, name, number)}/files"


# Milestones


def milestones(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/milestones"


def milestone(owner: str | int, name: str | None, number: int) -> str:
    return f"{milestones(owner, name)}/{number}"


# Issues and assignees


def issues(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/issues"


def issue(owner: str | int, name: str | None, number: int) -> str:
    return f"{issues(owner, name)}/{number}"


def issue_assignees(owner: str | int, name: str | None, number: int) -> str:
    return f"{issue(owner, name, number)}/assignees"


def assignees(owner: str | int, name: str | None = None) -> str:
    return f"{repository(owner, name)}/assignees"


def assignee(owner: str | int, name: str | None, login: str) -> str:
    return f"{assignees(owner, name)}/{login}"


# Project columns


def project_columns(project_id: int) -> str:
    return f"/projects/{project_id}/columns"


def project_column(column_id: int) -> str:
    return f"/projects/columns/{column_id}"


def project_column_move(column_id: int) -> str:
    return f"{project_column(column_id)}/moves"


# Deployments


def deployment_statuses(owner: str | int, name: str | None, deployment_id: int) -> str:
    return f"{repository(owner, name)}/deployments/{deployment_id}/statuses"
