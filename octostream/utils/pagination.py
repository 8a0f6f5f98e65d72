"""Link-header pagination for GitHub API responses.

GitHub splits list results into pages and points at the following page
with a ``Link`` header:

    Link: <url>; rel="next", <url>; rel="last", <url>; rel="first", <url>; rel="prev"

``PagedFetcher`` walks that chain one request at a time. It never guesses
page numbers; the server's ``next`` link is the only way forward, so the
caller's query survives intact across pages.

Pagination Window:
    ApiOptions(start_page=2, page_size=50, page_count=3) sends
    ``page=2&per_page=50`` on the first request and stops after three
    pages even if GitHub offers more.

"""

from __future__ import annotations

import logging
import re
from collections.abc import AsyncIterator, Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from octostream.exceptions import DecodeError, InvalidArgumentError, UntrustedLinkError
from octostream.utils.ensure import argument_in_range, argument_not_null_or_empty_string

if TYPE_CHECKING:
    from octostream.utils.http import ApiInfo, HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Matches: <url>; rel="relation"
LINK_PATTERN = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


@dataclass
class LinkInfo:
    """Parsed pagination links from GitHub's Link header.

    Attributes:
        next_url: URL for next page.
        prev_url: URL for previous page.
        first_url: URL for first page.
        last_url: URL for last page.

    """

    next_url: str | None = None
    prev_url: str | None = None
    first_url: str | None = None
    last_url: str | None = None

    @property
    def has_next(self) -> bool:
        return self.next_url is not None

    def as_dict(self) -> dict[str, str]:
        """Relation name to URL, for the relations that are present."""
        pairs = {
            "next": self.next_url,
            "prev": self.prev_url,
            "first": self.first_url,
            "last": self.last_url,
        }
        return {rel: url for rel, url in pairs.items() if url}


def parse_link_header(link_header: str | None) -> LinkInfo:
    """Parse GitHub's Link header into structured data.

    Args:
        link_header: The Link header value.

    Returns:
        LinkInfo with parsed URLs; unknown relations are ignored.

    Example:
        >>> header = '<https://api.github.com/repos?page=2>; rel="next"'
        >>> parse_link_header(header).next_url
        'https://api.github.com/repos?page=2'

    """
    links = LinkInfo()
    if not link_header:
        return links

    for match in LINK_PATTERN.finditer(link_header):
        url, rel = match.groups()
        if rel == "next":
            links.next_url = url
        elif rel == "prev":
            links.prev_url = url
        elif rel == "first":
            links.first_url = url
        elif rel == "last":
            links.last_url = url

    return links


def extract_page_from_url(url: str) -> int | None:
    """Extract the ``page`` query value from a pagination URL."""
    match = re.search(r"[?&]page=(\d+)", url)
    if match:
        return int(match.group(1))
    return None


# =============================================================================
# Request shapes
# =============================================================================


@dataclass(frozen=True, slots=True)
class ApiOptions:
    """Pagination window requested by the caller.

    All fields are optional; when set they must be >= 1.

    Attributes:
        start_page: First page to request, sent as ``page``.
        page_size: Items per page, sent as ``per_page``.
        page_count: Maximum number of pages to fetch.

    """

    NONE: ClassVar[ApiOptions]

    start_page: int | None = None
    page_size: int | None = None
    page_count: int | None = None

    def __post_init__(self) -> None:
        argument_in_range(self.start_page, "start_page")
        argument_in_range(self.page_size, "page_size")
        argument_in_range(self.page_count, "page_count")

    def to_params(self) -> dict[str, int]:
        params: dict[str, int] = {}
        if self.start_page is not None:
            params["page"] = self.start_page
        if self.page_size is not None:
            params["per_page"] = self.page_size
        return params


ApiOptions.NONE = ApiOptions()


@dataclass(frozen=True)
class PageRequest:
    """One fetch in a page chain.

    Attributes:
        location: Path relative to the base URL, or an absolute URL.
        params: Caller's query parameters; never mutated.
        accept: Accept header override, kept across the whole chain.
        options: Pagination window.
        initial: False for requests built from a ``next`` link.

    """

    location: str
    params: Mapping[str, Any] | None = None
    accept: str | None = None
    options: ApiOptions = ApiOptions.NONE
    initial: bool = True

    def validate(self) -> None:
        """Raise InvalidArgumentError for a blank location or non-mapping params."""
        argument_not_null_or_empty_string(self.location, "location")
        if self.params is not None and not isinstance(self.params, Mapping):
            raise InvalidArgumentError("params must be a mapping", argument="params")
        if not isinstance(self.options, ApiOptions):
            raise InvalidArgumentError("options must be ApiOptions", argument="options")

    def query(self) -> dict[str, Any] | None:
        """Outgoing query: a copy of ``params`` plus the window fields.

        Requests built from a ``next`` link send no query of their own
        because the link already carries it.
        """
        if not self.initial:
            return None

        query = dict(self.params) if self.params else {}
        query.update(self.options.to_params())
        return query or None

    def follow(self, url: str) -> PageRequest:
        return replace(self, location=url, params=None, initial=False)


@dataclass
class Page(Generic[T]):
    """One decoded page of a list endpoint.

    Attributes:
        items: Decoded items, in server order.
        next_url: The page's ``next`` link, if any.
        info: Response metadata, passed through untouched.

    """

    items: list[T]
    next_url: str | None = None
    info: ApiInfo | None = field(default=None, repr=False)

    @property
    def has_next(self) -> bool:
        return self.next_url is not None

    @property
    def next_page(self) -> int | None:
        if self.next_url:
            return extract_page_from_url(self.next_url)
        return None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)


# =============================================================================
# Decoding
# =============================================================================


def decode_items(data: Any, model: type[T] | None, location: str) -> list[T]:
    """Turn a list response body into a list of items.

    Args:
        data: Decoded JSON body.
        model: Pydantic model for each element, or None to keep raw dicts.
        location: Where the body came from, for error messages.

    Raises:
        DecodeError: If the body is not a JSON array or an element fails
            model validation.

    """
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(
            f"Expected a JSON array from {location}, got {type(data).__name__}",
            location=location,
            response_data=data if isinstance(data, dict) else None,
        )
    if model is None:
        return list(data)

    try:
        if isinstance(model, type) and issubclass(model, BaseModel):
            return [model.model_validate(element) for element in data]
        return [model(element) for element in data]  # type: ignore[call-arg]
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise DecodeError(f"Could not decode items from {location}: {e}", location=location) from e


# =============================================================================
# Fetcher
# =============================================================================


class PagedFetcher(Generic[T]):
    """Retrieves a result set page by page along the ``next`` link chain.

    Pages are fetched strictly one after another. The chain stops when a
    page has no ``next`` link, when ``options.page_count`` pages have been
    fetched, or at the first error, which propagates to the consumer after
    any pages already yielded.

    Example:
        >>> fetcher = PagedFetcher(http, PullRequest)
        >>> async for page in fetcher.pages(PageRequest("/repos/o/n/pulls")):
        ...     print(len(page))

    """

    __slots__ = ("_http", "_model")

    def __init__(self, http: HTTPClient, model: type[T] | None = None) -> None:
        self._http = http
        self._model = model

    def pages(self, request: PageRequest) -> AsyncIterator[Page[T]]:
        """Validate ``request`` and return an iterator over its pages.

        Raises:
            InvalidArgumentError: Immediately, before any request is sent.

        """
        request.validate()
        return self._iterate(request)

    async def _iterate(self, request: PageRequest) -> AsyncIterator[Page[T]]:
        current: PageRequest | None = request
        fetched = 0

        while current is not None:
            response = await self._http.get(current.location, current.query(), current.accept)
            page = self._to_page(response, current.location)
            fetched += 1

            logger.debug(
                "Fetched page %d of %s (%d items, next: %s)",
                fetched,
                request.location,
                len(page),
                page.next_url or "none",
            )

            yield page

            if not page.has_next:
                return

            page_count = request.options.page_count
            if page_count is not None and fetched >= page_count:
                logger.debug("Stopping %s after %d pages (page_count)", request.location, fetched)
                return

            current = current.follow(self._check_link(page.next_url))  # type: ignore[arg-type]

    def _to_page(self, response: HTTPResponse, location: str) -> Page[T]:
        items = decode_items(response.data, self._model, response.url or location)
        return Page(items=items, next_url=response.info.next_url, info=response.info)

    def _check_link(self, url: str) -> str:
        """Return ``url`` if it may be followed, else raise UntrustedLinkError.

        Relative links are resolved by the transport against the base URL.
        """
        if not self._http.config.is_trusted_url(url):
            raise UntrustedLinkError(url)
        return url
