"""Connection layer shared by every resource client.

``ApiConnection`` turns a location, an optional model and a few request
details into decoded results. List endpoints go through the pagination
engine and come back either as pages, as a flattened ``ItemStream`` or as
a plain list.

Example:
    >>> connection = ApiConnection(http)
    >>> stream = connection.get_and_flatten_all_pages(
    ...     "/repos/octocat/Hello-World/pulls",
    ...     PullRequest,
    ...     params={"state": "all"},
    ...     options=ApiOptions(page_size=50),
    ... )
    >>> async for pull in stream:
    ...     print(pull.number)

"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from octostream.exceptions import DecodeError, NotFoundError
from octostream.utils.ensure import argument_not_null_or_empty_string
from octostream.utils.pagination import ApiOptions, Page, PagedFetcher, PageRequest
from octostream.utils.streams import ItemStream, flatten

if TYPE_CHECKING:
    from octostream.utils.http import HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ApiConnection:
    """Single and paged requests, decoded into models.

    Attributes:
        http: The transport every request goes through.

    """

    __slots__ = ("_http",)

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    @property
    def http(self) -> HTTPClient:
        return self._http

    # -------------------------------------------------------------------------
    # Single resources
    # -------------------------------------------------------------------------

    async def get(
        self,
        location: str,
        model: type[T] | None = None,
        params: Mapping[str, Any] | None = None,
        accept: str | None = None,
    ) -> T | Any:
        """GET one resource and decode it with ``model``."""
        argument_not_null_or_empty_string(location, "location")
        response = await self._http.get(location, params, accept)
        return self._decode(response, model)

    async def post(
        self,
        location: str,
        model: type[T] | None = None,
        body: Any = None,
        accept: str | None = None,
    ) -> T | Any:
        argument_not_null_or_empty_string(location, "location")
        response = await self._http.post(location, json_data=_body(body), accept=accept)
        return self._decode(response, model)

    async def put(
        self,
        location: str,
        model: type[T] | None = None,
        body: Any = None,
        accept: str | None = None,
    ) -> T | Any:
        argument_not_null_or_empty_string(location, "location")
        response = await self._http.put(location, json_data=_body(body), accept=accept)
        return self._decode(response, model)

    async def patch(
        self,
        location: str,
        model: type[T] | None = None,
        body: Any = None,
        accept: str | None = None,
    ) -> T | Any:
        argument_not_null_or_empty_string(location, "location")
        response = await self._http.patch(location, json_data=_body(body), accept=accept)
        return self._decode(response, model)

    async def delete(
        self,
        location: str,
        body: Any = None,
        accept: str | None = None,
        *,
        model: type[T] | None = None,
    ) -> T | Any:
        """DELETE a resource; most endpoints answer 204 and this returns None."""
        argument_not_null_or_empty_string(location, "location")
        response = await self._http.delete(location, json_data=_body(body), accept=accept)
        return self._decode(response, model)

    async def is_success(self, location: str, accept: str | None = None) -> bool:
        """Probe an endpoint that answers 204 for yes and 404 for no.

        Used for membership checks like "is this user a collaborator".
        Any other error propagates.
        """
        argument_not_null_or_empty_string(location, "location")
        try:
            response = await self._http.get(location, accept=accept)
        except NotFoundError:
            logger.debug("%s answered 404", location)
            return False
        return response.status_code == 204

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def get_all_pages(
        self,
        location: str,
        model: type[T] | None = None,
        params: Mapping[str, Any] | None = None,
        accept: str | None = None,
        options: ApiOptions | None = None,
    ) -> AsyncIterator[Page[T]]:
        """Iterate over the pages of a list endpoint.

        Raises:
            InvalidArgumentError: Immediately, for a blank location or
                non-mapping params.

        """
        request = PageRequest(
            location=location,
            params=params,
            accept=accept,
            options=ApiOptions.NONE if options is None else options,
        )
        return PagedFetcher(self._http, model).pages(request)

    def get_and_flatten_all_pages(
        self,
        location: str,
        model: type[T] | None = None,
        params: Mapping[str, Any] | None = None,
        accept: str | None = None,
        options: ApiOptions | None = None,
    ) -> ItemStream[T]:
        """Stream every item of a list endpoint, in order, across pages.

        Pages are fetched lazily: the next page is requested only after
        every item of the current one has been delivered.

        Raises:
            InvalidArgumentError: Immediately, for a blank location or
                non-mapping params.

        """
        return flatten(self.get_all_pages(location, model, params, accept, options))

    async def get_all(
        self,
        location: str,
        model: type[T] | None = None,
        params: Mapping[str, Any] | None = None,
        accept: str | None = None,
        options: ApiOptions | None = None,
    ) -> list[T]:
        """Collect every item of a list endpoint into a list."""
        stream = self.get_and_flatten_all_pages(location, model, params, accept, options)
        return await stream.collect()

    @staticmethod
    def _decode(response: HTTPResponse, model: type[T] | None) -> T | Any:
        if model is None or response.data is None:
            return response.data
        try:
            return model.model_validate(response.data)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Could not decode {model.__name__} from {response.url}: {e}",
                location=response.url,
            ) from e


def _body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        to_body = getattr(body, "to_body", None)
        if to_body is not None:
            return to_body()
        return body.model_dump(mode="json", exclude_none=True)
    return body
