"""Unit tests for the async HTTP transport, driven through httpx.MockTransport."""

from __future__ import annotations

import json
import time
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from octostream.auth import NoAuth, TokenAuth
from octostream.config import ClientConfig
from octostream.exceptions import (
    DecodeError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UntrustedLinkError,
    ValidationError,
)
from octostream.utils.http import ApiInfo, HTTPClient


def _client(config: ClientConfig, handler, auth=None) -> HTTPClient:
    return HTTPClient(config, auth or TokenAuth("test_token"), transport=httpx.MockTransport(handler))


class TestRequests:
    """Tests for request construction."""

    @pytest.mark.asyncio
    async def test_default_headers_and_auth(self, config):
        """Requests carry the API version, user agent, accept and token."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with _client(config, handler) as http:
            await http.get("/repos/octocat/Hello-World/pulls")

        request = seen[0]
        assert str(request.url) == "https://api.github.com/repos/octocat/Hello-World/pulls"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.headers["X-GitHub-Api-Version"] == "2022-11-28"
        assert request.headers["User-Agent"] == config.user_agent
        assert request.headers["Authorization"] == "Bearer test_token"

    @pytest.mark.asyncio
    async def test_accept_override_and_params(self, config):
        """A per-call accept header replaces the default; params become the query."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with _client(config, handler) as http:
            await http.get(
                "/projects/1/columns",
                {"page": 2, "per_page": 10},
                "application/vnd.github.inertia-preview+json",
            )

        assert seen[0].headers["Accept"] == "application/vnd.github.inertia-preview+json"
        assert seen[0].url.params["page"] == "2"
        assert seen[0].url.params["per_page"] == "10"

    @pytest.mark.asyncio
    async def test_anonymous_requests(self, config):
        """NoAuth sends no Authorization header."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with _client(config, handler, auth=NoAuth()) as http:
            await http.get("/meta")

        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_enterprise_base_path(self, config):
        """Relative locations keep the base URL path."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        enterprise = config.with_overrides(base_url="https://ghe.example.com/api/v3/")
        async with _client(enterprise, handler) as http:
            await http.get("/repos/o/n/pulls")

        assert str(seen[0].url) == "https://ghe.example.com/api/v3/repos/o/n/pulls"

    @pytest.mark.asyncio
    async def test_json_body_sent(self, config):
        """json_data is serialized into the request body."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": 1, "number": 1, "title": "v1"})

        async with _client(config, handler) as http:
            response = await http.post("/repos/o/n/milestones", json_data={"title": "v1"})

        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"title": "v1"}
        assert response.status_code == 201


class TestResponses:
    """Tests for response processing."""

    @pytest.mark.asyncio
    async def test_api_info_parsed(self, config):
        """Links, scopes, etag and rate limit end up on ApiInfo."""
        reset = str(int(time.time()) + 3600)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[],
                headers={
                    "Link": '<https://api.github.com/repositories/1/pulls?page=2>; rel="next"',
                    "X-OAuth-Scopes": "repo, user",
                    "X-Accepted-OAuth-Scopes": "repo",
                    "ETag": 'W/"abc"',
                    "X-RateLimit-Limit": "5000",
                    "X-RateLimit-Remaining": "4999",
                    "X-RateLimit-Reset": reset,
                },
            )

        async with _client(config, handler) as http:
            response = await http.get("/repos/o/n/pulls")

        info = response.info
        assert info.next_url == "https://api.github.com/repositories/1/pulls?page=2"
        assert info.oauth_scopes == ["repo", "user"]
        assert info.accepted_oauth_scopes == ["repo"]
        assert info.etag == 'W/"abc"'
        assert info.rate_limit.remaining == 4999
        assert http.rate_limiter.get_remaining("core") == 4999

    @pytest.mark.asyncio
    async def test_no_content(self, config):
        """204 responses have no data."""
        async with _client(config, lambda request: httpx.Response(204)) as http:
            response = await http.get("/repos/o/n/collaborators/octocat")

        assert response.status_code == 204
        assert response.data is None

    @pytest.mark.asyncio
    async def test_malformed_json(self, config):
        """A success body that claims JSON but is not raises DecodeError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, content=b"[{not json", headers={"Content-Type": "application/json"}
            )

        async with _client(config, handler) as http:
            with pytest.raises(DecodeError):
                await http.get("/repos/o/n/pulls")

    @pytest.mark.asyncio
    async def test_json_body_not_utf8(self, config):
        """A JSON body with invalid UTF-8 bytes raises DecodeError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, content=b'["\xff\xfe"]', headers={"Content-Type": "application/json"}
            )

        async with _client(config, handler) as http:
            with pytest.raises(DecodeError):
                await http.get("/repos/o/n/pulls")

    @pytest.mark.asyncio
    async def test_not_found(self, config):
        """404 maps to NotFoundError with the message from the body."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        async with _client(config, handler) as http:
            with pytest.raises(NotFoundError) as exc_info:
                await http.get("/repos/o/missing")

        assert exc_info.value.message == "Not Found"

    @pytest.mark.asyncio
    async def test_validation_failed(self, config):
        """422 carries GitHub's field errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                422,
                json={
                    "message": "Validation Failed",
                    "errors": [{"resource": "Milestone", "field": "title", "code": "missing"}],
                },
            )

        async with _client(config, handler) as http:
            with pytest.raises(ValidationError) as exc_info:
                await http.post("/repos/o/n/milestones", json_data={})

        assert exc_info.value.field_errors == {"title": "missing"}

    @pytest.mark.asyncio
    async def test_rate_limited(self, config):
        """403 with an exhausted limit is a RateLimitError."""
        reset = str(int(time.time()) + 60)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                403,
                json={"message": "API rate limit exceeded"},
                headers={
                    "X-RateLimit-Limit": "60",
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": reset,
                },
            )

        async with _client(config, handler) as http:
            with pytest.raises(RateLimitError) as exc_info:
                await http.get("/repos/o/n/pulls")

        assert exc_info.value.limit == 60
        assert exc_info.value.remaining == 0

    @pytest.mark.asyncio
    async def test_connection_error(self, config):
        """httpx transport errors become NetworkError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with _client(config, handler) as http:
            with pytest.raises(NetworkError) as exc_info:
                await http.get("/repos/o/n/pulls")

        assert exc_info.value.is_retryable is True
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)


class TestRedirects:
    """Every hop, redirects included, must stay on a trusted URL."""

    @pytest.mark.asyncio
    async def test_redirect_within_api_host_followed(self, config):
        """A redirect to another path on the API host is followed."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            if request.url.path == "/repos/old/name/pulls":
                return httpx.Response(301, headers={"Location": "/repositories/1/pulls"})
            return httpx.Response(200, json=[{"id": 1}])

        async with _client(config, handler) as http:
            response = await http.get("/repos/old/name/pulls")

        assert response.data == [{"id": 1}]
        assert seen == [
            "https://api.github.com/repos/old/name/pulls",
            "https://api.github.com/repositories/1/pulls",
        ]

    @pytest.mark.asyncio
    async def test_redirect_to_untrusted_host_rejected(self, config):
        """A redirect off the trusted hosts raises before it is sent."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            if request.url.host == "evil.example":
                return httpx.Response(200, json=[{"id": 666}])
            return httpx.Response(302, headers={"Location": "https://evil.example/steal"})

        async with _client(config, handler) as http:
            with pytest.raises(UntrustedLinkError) as exc_info:
                await http.get("/x2")

        assert seen == ["https://api.github.com/x2"]
        assert exc_info.value.url == "https://evil.example/steal"

    @pytest.mark.asyncio
    async def test_token_not_forwarded_to_allowed_host(self, config):
        """Following a redirect to another trusted host drops the token."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.host == "example.com":
                return httpx.Response(200, json=[])
            return httpx.Response(302, headers={"Location": "https://example.com/page/2"})

        async with _client(config, handler) as http:
            await http.get("/x")

        assert seen[0].headers["Authorization"] == "Bearer test_token"
        assert "Authorization" not in seen[1].headers

    @pytest.mark.asyncio
    async def test_redirect_downgrade_to_http_rejected(self, config):
        """A redirect from https to http on the same host is not followed."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(302, headers={"Location": "http://api.github.com/x3"})

        async with _client(config, handler) as http:
            with pytest.raises(UntrustedLinkError):
                await http.get("/x2")

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_untrusted_absolute_location_not_sent(self, config):
        """An absolute location off the trusted hosts never reaches the transport."""
        handler = MagicMock(return_value=httpx.Response(200, json={}))

        async with _client(config, handler) as http:
            with pytest.raises(UntrustedLinkError):
                await http.get("https://evil.example/steal")

        handler.assert_not_called()


class TestRetries:
    """Tests for transport retries."""

    @pytest.mark.asyncio
    async def test_server_error_retried(self, config):
        """A 502 followed by a 200 succeeds when retries are allowed."""
        responses = iter(
            [httpx.Response(502, json={"message": "Bad Gateway"}), httpx.Response(200, json=[])]
        )
        retrying = config.with_overrides(max_retries=1)

        with patch("octostream.utils.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            async with _client(retrying, lambda request: next(responses)) as http:
                response = await http.get("/repos/o/n/pulls")

        assert response.status_code == 200
        sleep.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, config):
        """The last error propagates once retries are used up."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, json={"message": "Service Unavailable"})

        with patch("octostream.utils.retry.asyncio.sleep", new_callable=AsyncMock):
            async with _client(config.with_overrides(max_retries=2), handler) as http:
                with pytest.raises(ServerError):
                    await http.get("/repos/o/n/pulls")

        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_client_errors_not_retried(self, config):
        """404 is returned to the caller on the first attempt."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(404, json={"message": "Not Found"})

        async with _client(config.with_overrides(max_retries=3), handler) as http:
            with pytest.raises(NotFoundError):
                await http.get("/repos/o/n/pulls")

        assert len(calls) == 1


class TestApiInfo:
    """Tests for ApiInfo.from_headers."""

    def test_empty_headers(self):
        """Missing headers give empty metadata."""
        info = ApiInfo.from_headers({})
        assert info.links == {}
        assert info.next_url is None
        assert info.rate_limit is None
        assert info.oauth_scopes == []
