"""Repository invitations, for both the invitee and the repository admin.

API Reference: https://docs.github.com/en/rest/collaborators/invitations

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import InvitationUpdate, RepositoryInvitation
from octostream.urls import AcceptHeaders
from octostream.utils.ensure import argument_not_null
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream


class InvitationsEndpoint(BaseEndpoint):
    """Endpoint for repository invitation API calls.

    All calls send the invitations preview media type.
    """

    async def accept(self, invitation_id: int) -> None:
        """Accept an invitation addressed to the authenticated user."""
        await self._connection.patch(
            urls.user_invitation(invitation_id), accept=AcceptHeaders.INVITATIONS_PREVIEW
        )

    async def decline(self, invitation_id: int) -> None:
        await self._connection.delete(
            urls.user_invitation(invitation_id), accept=AcceptHeaders.INVITATIONS_PREVIEW
        )

    async def delete(self, repository_id: int, invitation_id: int) -> None:
        """Revoke an invitation sent from a repository."""
        await self._connection.delete(
            urls.repository_invitation(repository_id, invitation_id),
            accept=AcceptHeaders.INVITATIONS_PREVIEW,
        )

    def get_all_for_current(
        self, *, options: ApiOptions | None = None
    ) -> ItemStream[RepositoryInvitation]:
        """Stream the pending invitations of the authenticated user."""
        return self._connection.get_and_flatten_all_pages(
            urls.user_invitations(),
            RepositoryInvitation,
            accept=AcceptHeaders.INVITATIONS_PREVIEW,
            options=options,
        )

    def get_all_for_repository(
        self, repository_id: int, *, options: ApiOptions | None = None
    ) -> ItemStream[RepositoryInvitation]:
        """Stream the pending invitations of a repository."""
        return self._connection.get_and_flatten_all_pages(
            urls.repository_invitations(repository_id),
            RepositoryInvitation,
            accept=AcceptHeaders.INVITATIONS_PREVIEW,
            options=options,
        )

    async def edit(
        self, repository_id: int, invitation_id: int, update: InvitationUpdate
    ) -> RepositoryInvitation:
        """Change the permissions an invitation grants."""
        argument_not_null(update, "update")
        return await self._connection.patch(
            urls.repository_invitation(repository_id, invitation_id),
            RepositoryInvitation,
            update,
            accept=AcceptHeaders.INVITATIONS_PREVIEW,
        )
