"""Credentials for outgoing requests, as ``httpx.Auth`` flows.

The transport hands the strategy to ``httpx.AsyncClient.send(auth=...)``
so credentials are stamped once per logical request. httpx drops the
Authorization header itself when a redirect leaves the origin.

Example:
    >>> auth = create_auth(os.environ.get("GITHUB_TOKEN"))
    >>> response = await client.send(request, auth=auth)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Generator

import httpx

from octostream.exceptions import InvalidArgumentError


class AuthStrategy(httpx.Auth, ABC):
    """An httpx auth flow that knows whether it carries credentials."""

    @property
    @abstractmethod
    def is_authenticated(self) -> bool: ...


class TokenAuth(AuthStrategy):
    """Personal access token sent as ``Authorization: Bearer <token>``."""

    def __init__(self, token: str) -> None:
        if not token or not token.strip():
            raise InvalidArgumentError("Token cannot be empty", argument="token")
        self._token = token.strip()

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request

    @property
    def is_authenticated(self) -> bool:
        return True

    def __repr__(self) -> str:
        hint = self._token[:4] + "..." if len(self._token) > 4 else "***"
        return f"TokenAuth(token={hint!r})"


class NoAuth(AuthStrategy):
    """Anonymous access, limited to 60 requests an hour."""

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        yield request

    @property
    def is_authenticated(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoAuth()"


def create_auth(token: str | None) -> AuthStrategy:
    return TokenAuth(token) if token else NoAuth()
