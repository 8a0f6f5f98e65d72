"""Repository collaborators.

API Reference: https://docs.github.com/en/rest/collaborators/collaborators

"""

from __future__ import annotations

from octostream import urls
from octostream.endpoints.base import BaseEndpoint
from octostream.models import RepositoryInvitation, User
from octostream.utils.ensure import argument_not_null_or_empty_string
from octostream.utils.pagination import ApiOptions
from octostream.utils.streams import ItemStream


class CollaboratorsEndpoint(BaseEndpoint):
    """Endpoint for collaborator-related API calls.

    Example:
        >>> async for user in client.collaborators.get_all("octocat", "Hello-World"):
        ...     print(user.login)

    """

    def get_all(
        self,
        owner: str | int,
        name: str | None = None,
        *,
        options: ApiOptions | None = None,
    ) -> ItemStream[User]:
        """Stream the collaborators of a repository.

        Args:
            owner: Repository owner, or the numeric repository id.
            name: Repository name; omitted with a repository id.
            options: Pagination window.

        Raises:
            InvalidArgumentError: Before any request, for blank arguments.

        """
        self._ensure_repository(owner, name)
        return self._connection.get_and_flatten_all_pages(
            urls.collaborators(owner, name), User, options=options
        )

    async def is_collaborator(self, owner: str | int, name: str | None, user: str) -> bool:
        """True if ``user`` collaborates on the repository (204), False on 404."""
        self._ensure_repository(owner, name)
        argument_not_null_or_empty_string(user, "user")
        return await self._connection.is_success(urls.collaborator(owner, name, user))

    async def add(
        self, owner: str | int, name: str | None, user: str
    ) -> RepositoryInvitation | None:
        """Add ``user`` as a collaborator.

        Returns:
            The invitation GitHub created, or None when the user already
            had access.

        """
        self._ensure_repository(owner, name)
        argument_not_null_or_empty_string(user, "user")
        return await self._connection.put(
            urls.collaborator(owner, name, user), RepositoryInvitation
        )

    async def delete(self, owner: str | int, name: str | None, user: str) -> None:
        self._ensure_repository(owner, name)
        argument_not_null_or_empty_string(user, "user")
        await self._connection.delete(urls.collaborator(owner, name, user))
