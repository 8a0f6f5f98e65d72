"""octostream - an async GitHub API client with streamed pagination.

Every list endpoint comes back as one ordered stream of items that is
fetched page by page, following GitHub's ``Link: rel="next"`` chain.

Example:
    >>> from octostream import ApiOptions, GitHubClient
    >>> async with GitHubClient(token="ghp_xxx") as client:
    ...     stream = client.pulls.get_all_for_repository(
    ...         "octocat", "Hello-World", options=ApiOptions(page_size=50, page_count=2)
    ...     )
    ...     async for pull in stream:
    ...         print(pull.number, pull.title)

"""

from octostream.client import GitHubClient
from octostream.config import ClientConfig
from octostream.connection import ApiConnection
from octostream.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DecodeError,
    GitHubError,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UntrustedLinkError,
    ValidationError,
)
from octostream.utils.pagination import ApiOptions, Page
from octostream.utils.streams import ItemStream, Subscription

__version__ = "0.1.0"
__author__ = "Bhanu Prasanna"

__all__ = [
    "ApiConnection",
    "ApiOptions",
    "AuthenticationError",
    "AuthorizationError",
    "ClientConfig",
    "ConfigurationError",
    "DecodeError",
    "GitHubClient",
    "GitHubError",
    "InvalidArgumentError",
    "ItemStream",
    "NetworkError",
    "NotFoundError",
    "Page",
    "RateLimitError",
    "ServerError",
    "Subscription",
    "UntrustedLinkError",
    "ValidationError",
]
