"""Unit tests for the exceptions module."""

from __future__ import annotations

import pytest
from octostream.exceptions import (
    AuthenticationError,
    AuthorizationError,
    GitHubError,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UntrustedLinkError,
    ValidationError,
    exception_from_response,
)


class TestExceptionFromResponse:
    """Tests for exception_from_response."""

    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (401, AuthenticationError),
            (403, AuthorizationError),
            (404, NotFoundError),
            (422, ValidationError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_status_mapping(self, status_code, expected):
        error = exception_from_response(status_code, {"message": "boom"})
        assert isinstance(error, expected)
        assert error.message == "boom"

    def test_forbidden_rate_limit_message(self):
        """403 mentioning the rate limit is a RateLimitError."""
        error = exception_from_response(403, {"message": "API rate limit exceeded for 1.2.3.4"})
        assert isinstance(error, RateLimitError)

    def test_secondary_rate_limit(self):
        error = exception_from_response(
            403,
            {"message": "You have exceeded a secondary rate limit"},
            {"Retry-After": "60"},
        )
        assert isinstance(error, RateLimitError)
        assert error.is_secondary is True
        assert error.retry_after == 60

    def test_forbidden_scopes(self):
        """Accepted scopes are attached to AuthorizationError."""
        error = exception_from_response(
            403, {"message": "Must have admin rights"}, {"X-Accepted-OAuth-Scopes": "repo, admin:org"}
        )
        assert isinstance(error, AuthorizationError)
        assert error.required_scopes == ["repo", "admin:org"]

    def test_server_error_status_kept(self):
        error = exception_from_response(502, {"message": "Bad Gateway"})
        assert error.status_code == 502

    def test_unknown_status(self):
        """Other statuses fall back to GitHubError."""
        error = exception_from_response(409, {"message": "Conflict"})
        assert type(error) is GitHubError
        assert "409" in error.message

    def test_missing_message(self):
        error = exception_from_response(404, {})
        assert error.message == "HTTP 404"


class TestExceptionTypes:
    """Tests for individual exception classes."""

    def test_all_derive_from_github_error(self):
        for error in (
            InvalidArgumentError("x"),
            NetworkError(),
            UntrustedLinkError("https://evil.example.org/"),
            RateLimitError(),
        ):
            assert isinstance(error, GitHubError)

    def test_invalid_argument_is_value_error(self):
        error = InvalidArgumentError("owner cannot be empty", argument="owner")
        assert isinstance(error, ValueError)
        assert error.argument == "owner"

    def test_untrusted_link_is_network_error(self):
        error = UntrustedLinkError("https://evil.example.org/page/2")
        assert isinstance(error, NetworkError)
        assert error.is_retryable is False
        assert "evil.example.org" in str(error)

    def test_rate_limit_str(self):
        error = RateLimitError("Rate limit exceeded", retry_after=30)
        assert str(error) == "Rate limit exceeded (retry after 30s)"

    def test_validation_field_errors(self):
        error = ValidationError(errors=[{"field": "title", "code": "missing_field"}])
        assert error.field_errors == {"title": "missing_field"}
