"""Resource clients for the GitHub API.

Each module implements a group of related endpoints on top of the shared
ApiConnection.

Available endpoint groups:
    - collaborators: repository collaborators
    - invitations: repository invitations
    - traffic: repository traffic statistics
    - pulls: pull requests, their commits and files
    - milestones: milestones
    - issues: issues and assignees
    - projects: project board columns
    - deployments: deployment statuses

"""

from octostream.endpoints.base import BaseEndpoint
from octostream.endpoints.collaborators import CollaboratorsEndpoint
from octostream.endpoints.deployments import DeploymentStatusesEndpoint
from octostream.endpoints.invitations import InvitationsEndpoint
from octostream.endpoints.issues import AssigneesEndpoint, IssuesEndpoint
from octostream.endpoints.milestones import MilestonesEndpoint
from octostream.endpoints.projects import ProjectColumnsEndpoint
from octostream.endpoints.pulls import PullsEndpoint
from octostream.endpoints.traffic import TrafficEndpoint

__all__ = [
    "AssigneesEndpoint",
    "BaseEndpoint",
    "CollaboratorsEndpoint",
    "DeploymentStatusesEndpoint",
    "InvitationsEndpoint",
    "IssuesEndpoint",
    "MilestonesEndpoint",
    "ProjectColumnsEndpoint",
    "PullsEndpoint",
    "TrafficEndpoint",
]
