"""Base class for resource clients.

Every client validates its arguments before touching the connection, so a
bad call fails with InvalidArgumentError and sends nothing.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from octostream.exceptions import InvalidArgumentError
from octostream.utils.ensure import argument_not_null_or_empty_string

if TYPE_CHECKING:
    from octostream.connection import ApiConnection


class BaseEndpoint:
    """Base class for API endpoint groups.

    Attributes:
        _connection: The shared ApiConnection.

    """

    __slots__ = ("_connection",)

    def __init__(self, connection: ApiConnection) -> None:
        self._connection = connection

    @staticmethod
    def _ensure_repository(owner: str | int, name: str | None) -> None:
        """Validate a repository given as ``(owner, name)`` or a numeric id.

        Raises:
            InvalidArgumentError: For a blank owner or name, or a name
                passed together with a repository id.

        """
        if isinstance(owner, int) and not isinstance(owner, bool):
            if name is not None:
                raise InvalidArgumentError(
                    "name must be omitted when a repository id is given", argument="name"
                )
            return
        argument_not_null_or_empty_string(owner, "owner")  # type: ignore[arg-type]
        argument_not_null_or_empty_string(name, "name")
