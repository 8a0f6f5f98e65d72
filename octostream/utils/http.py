"""Async HTTP transport for the GitHub API.

A thin layer over ``httpx.AsyncClient`` that handles:
- Base URL, default headers and a per-call Accept override
- Authentication injection
- Mapping error statuses to typed exceptions
- Retry with exponential backoff and proactive rate-limit throttling
- Parsing response metadata (links, etag, scopes, rate limit) into ApiInfo

Callers normally go through ``ApiConnection``; this module only knows how
to perform one request at a time.

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from octostream.exceptions import (
    DecodeError,
    NetworkError,
    UntrustedLinkError,
    exception_from_response,
)
from octostream.utils.pagination import parse_link_header
from octostream.utils.rate_limiter import RateLimiter, RateLimitInfo
from octostream.utils.retry import RetryPolicy, call_with_retry

if TYPE_CHECKING:
    from octostream.auth import AuthStrategy
    from octostream.config import ClientConfig

logger = logging.getLogger(__name__)


def _split_scopes(value: str | None) -> list[str]:
    if not value:
        return []
    return [scope.strip() for scope in value.split(",") if scope.strip()]


@dataclass(frozen=True)
class ApiInfo:
    """Metadata GitHub attaches to every response.

    None of it is interpreted by the pagination engine except ``next_url``.

    Attributes:
        links: Link relations (``next``, ``prev``, ``first``, ``last``) to URLs.
        oauth_scopes: Scopes the token has.
        accepted_oauth_scopes: Scopes the endpoint accepts.
        etag: Entity tag of the response.
        rate_limit: Rate-limit snapshot, if the headers were present.

    """

    links: dict[str, str] = field(default_factory=dict)
    oauth_scopes: list[str] = field(default_factory=list)
    accepted_oauth_scopes: list[str] = field(default_factory=list)
    etag: str | None = None
    rate_limit: RateLimitInfo | None = None

    @property
    def next_url(self) -> str | None:
        return self.links.get("next")

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> ApiInfo:
        lowered = {key.lower(): value for key, value in headers.items()}
        return cls(
            links=parse_link_header(lowered.get("link")).as_dict(),
            oauth_scopes=_split_scopes(lowered.get("x-oauth-scopes")),
            accepted_oauth_scopes=_split_scopes(lowered.get("x-accepted-oauth-scopes")),
            etag=lowered.get("etag"),
            rate_limit=RateLimitInfo.from_headers(lowered),
        )


class HTTPResponse:
    """Decoded body plus status and metadata of one response.

    Attributes:
        data: Parsed JSON body; ``None`` for empty bodies (204 etc).
        status_code: HTTP status code.
        headers: Response headers.
        url: Final request URL.
        info: Parsed ApiInfo.

    """

    __slots__ = ("data", "headers", "info", "status_code", "url")

    def __init__(
        self,
        data: Any,
        status_code: int,
        headers: dict[str, str],
        url: str = "",
    ) -> None:
        self.data = data
        self.status_code = status_code
        self.headers = headers
        self.url = url
        self.info = ApiInfo.from_headers(headers)

    def __repr__(self) -> str:
        return f"HTTPResponse(status={self.status_code}, data_type={type(self.data).__name__})"


class HTTPClient:
    """Performs single requests against the GitHub API.

    Safe to share between concurrent page chains: per-request state lives
    on the stack, and the only shared mutable piece (the rate limiter)
    locks internally.

    Note:
        Internal. Use GitHubClient or ApiConnection.

    """

    __slots__ = ("_auth", "_client", "_config", "_rate_limiter", "_retry_policy")

    DEFAULT_ACCEPT = "application/vnd.github+json"
    API_VERSION = "2022-11-28"

    def __init__(
        self,
        config: ClientConfig,
        auth: AuthStrategy,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create the transport.

        Args:
            config: Client configuration.
            auth: Authentication strategy.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
                in tests.

        """
        self._config = config
        self._auth = auth
        self._rate_limiter = RateLimiter(buffer=config.rate_limit_buffer)
        self._retry_policy = RetryPolicy.from_client_config(config)
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout),
            headers={
                "Accept": self.DEFAULT_ACCEPT,
                "X-GitHub-Api-Version": self.API_VERSION,
                "User-Agent": config.user_agent,
            },
            follow_redirects=True,
            event_hooks={"request": [self._check_destination]},
            transport=transport,
        )

    async def _check_destination(self, request: httpx.Request) -> None:
        # Runs for every hop, redirects included
        if not self._config.is_trusted_url(str(request.url)):
            raise UntrustedLinkError(str(request.url))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    async def request(
        self,
        method: str,
        location: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_data: Any = None,
        accept: str | None = None,
    ) -> HTTPResponse:
        """Send one request, retrying transient failures.

        Args:
            method: HTTP verb.
            location: Path relative to the base URL, or an absolute URL.
            params: Query parameters.
            json_data: JSON body.
            accept: Accept header for this call only.

        Returns:
            HTTPResponse for a 2xx/3xx answer.

        Raises:
            GitHubError: Mapped from 4xx/5xx responses.
            NetworkError: Connection failure or timeout.
            DecodeError: Body claims to be JSON but is not.

        """
        resource = "search" if "/search/" in location else "core"

        async def attempt() -> HTTPResponse:
            await self._rate_limiter.wait_if_needed(resource)
            return await self._send(method, location, params, json_data, accept)

        return await call_with_retry(attempt, self._retry_policy, f"{method} {location}")

    async def _send(
        self,
        method: str,
        location: str,
        params: Mapping[str, Any] | None,
        json_data: Any,
        accept: str | None,
    ) -> HTTPResponse:
        request = self._client.build_request(
            method=method,
            url=location,
            params=dict(params) if params else None,
            json=json_data,
        )
        if accept:
            request.headers["Accept"] = accept

        logger.debug("Request: %s %s", method, request.url)

        try:
            response = await self._client.send(request, auth=self._auth)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {e}", original_error=e) from e
        except httpx.ConnectError as e:
            raise NetworkError(f"Connection failed: {e}", original_error=e) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"HTTP error: {e}", original_error=e) from e

        return self._process_response(response)

    def _process_response(self, response: httpx.Response) -> HTTPResponse:
        headers = dict(response.headers)
        url = str(response.request.url)

        data: Any = None
        if response.status_code != 204 and response.content:
            content_type = response.headers.get("content-type", "")
            if "json" in content_type:
                try:
                    data = response.json()
                except ValueError as e:
                    if response.status_code < 400:
                        raise DecodeError(f"Malformed JSON from {url}: {e}", location=url) from e
                    data = {"message": response.text}
            elif response.status_code >= 400:
                data = {"message": response.text or response.reason_phrase}

        result = HTTPResponse(data=data, status_code=response.status_code, headers=headers, url=url)
        self._rate_limiter.update(result.info.rate_limit)

        logger.debug(
            "Response: %d %s (remaining: %s)",
            response.status_code,
            response.reason_phrase,
            headers.get("x-ratelimit-remaining", "N/A"),
        )

        if response.status_code >= 400:
            error_data = data if isinstance(data, dict) else {"message": str(data)}
            raise exception_from_response(
                status_code=response.status_code,
                response_data=error_data,
                headers=headers,
            )

        return result

    async def get(
        self,
        location: str,
        params: Mapping[str, Any] | None = None,
        accept: str | None = None,
    ) -> HTTPResponse:
        """Single GET; the primitive the pagination engine is built on."""
        return await self.request("GET", location, params=params, accept=accept)

    async def post(self, location: str, json_data: Any = None, accept: str | None = None) -> HTTPResponse:
        return await self.request("POST", location, json_data=json_data, accept=accept)

    async def put(self, location: str, json_data: Any = None, accept: str | None = None) -> HTTPResponse:
        return await self.request("PUT", location, json_data=json_data, accept=accept)

    async def patch(self, location: str, json_data: Any = None, accept: str | None = None) -> HTTPResponse:
        return await self.request("PATCH", location, json_data=json_data, accept=accept)

    async def delete(self, location: str, json_data: Any = None, accept: str | None = None) -> HTTPResponse:
        return await self.request("DELETE", location, json_data=json_data, accept=accept)

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
