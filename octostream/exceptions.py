"""Exception hierarchy for octostream.

Every error raised by the library derives from ``GitHubError`` so callers
can catch the whole family at once, or pick out the precise failure.

Exception Hierarchy:
    GitHubError
    ├── ConfigurationError     - bad ClientConfig values
    ├── InvalidArgumentError   - empty/None required argument, raised before any I/O
    ├── DecodeError            - page body is not the expected JSON shape
    ├── AuthenticationError    - 401
    ├── AuthorizationError     - 403
    ├── NotFoundError          - 404
    ├── ValidationError        - 422
    ├── RateLimitError         - 429, or 403 with the limit exhausted
    ├── ServerError            - 5xx
    └── NetworkError           - connection failure, timeout
        └── UntrustedLinkError - "next" link or redirect outside the allowed hosts

Example:
    >>> try:
    ...     users = await client.collaborators.get_all("octocat", "Hello-World").collect()
    ... except NotFoundError:
    ...     print("no such repository")

"""

from __future__ import annotations

from datetime import datetime
from typing import Any


class GitHubError(Exception):
    """Base class for all octostream errors.

    Attributes:
        message: Human-readable description.
        response_data: Decoded error body, empty when there was none.

    """

    def __init__(
        self,
        message: str,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.response_data = response_data or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class ConfigurationError(GitHubError):
    """Raised when a ClientConfig value is invalid."""


class InvalidArgumentError(GitHubError, ValueError):
    """Raised when a required argument is missing, empty or blank.

    This is always raised synchronously, before a request is built, so a
    failing call never reaches the network.

    Attributes:
        argument: Name of the offending parameter.

    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        self.argument = argument
        super().__init__(message)


class DecodeError(GitHubError):
    """Raised when a response body cannot be decoded into the expected model.

    Attributes:
        location: The URL whose body failed to decode.

    """

    def __init__(
        self,
        message: str,
        location: str | None = None,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        self.location = location
        super().__init__(message, response_data)


class AuthenticationError(GitHubError):
    """Raised on HTTP 401 (bad, expired or revoked token)."""

    status_code: int = 401

    def __init__(
        self,
        message: str = "Authentication failed",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, response_data)


class AuthorizationError(GitHubError):
    """Raised on HTTP 403 when the token lacks access.

    Attributes:
        required_scopes: Scopes GitHub reported as accepted for the call.

    """

    status_code: int = 403

    def __init__(
        self,
        message: str = "Permission denied",
        response_data: dict[str, Any] | None = None,
        required_scopes: list[str] | None = None,
    ) -> None:
        self.required_scopes = required_scopes or []
        super().__init__(message, response_data)


class NotFoundError(GitHubError):
    """Raised on HTTP 404.

    GitHub also answers 404 for private resources the caller cannot see.
    """

    status_code: int = 404

    def __init__(
        self,
        message: str = "Resource not found",
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, response_data)


class ValidationError(GitHubError):
    """Raised on HTTP 422 with GitHub's field-level errors attached."""

    status_code: int = 422

    def __init__(
        self,
        message: str = "Validation failed",
        response_data: dict[str, Any] | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(message, response_data)

    @property
    def field_errors(self) -> dict[str, str]:
        """Map of field name to GitHub's error code or message."""
        return {
            error.get("field", "unknown"): error.get("message") or error.get("code", "invalid")
            for error in self.errors
        }


class RateLimitError(GitHubError):
    """Raised when the primary or secondary rate limit is hit.

    Attributes:
        limit: Requests allowed in the window, if reported.
        remaining: Requests left (normally 0).
        reset_at: When the window resets.
        retry_after: Seconds to wait, from ``Retry-After``.
        is_secondary: True for abuse/secondary limits.

    """

    status_code: int = 429

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        response_data: dict[str, Any] | None = None,
        limit: int | None = None,
        remaining: int = 0,
        reset_at: datetime | None = None,
        retry_after: int | None = None,
        is_secondary: bool = False,
    ) -> None:
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at
        self.retry_after = retry_after
        self.is_secondary = is_secondary
        super().__init__(message, response_data)

    def __str__(self) -> str:
        text = self.message
        if self.reset_at:
            text += f" (resets at {self.reset_at.isoformat()})"
        if self.retry_after:
            text += f" (retry after {self.retry_after}s)"
        return text


class ServerError(GitHubError):
    """Raised on HTTP 5xx. Usually transient."""

    def __init__(
        self,
        message: str = "GitHub server error",
        response_data: dict[str, Any] | None = None,
        status_code: int = 500,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, response_data)


class NetworkError(GitHubError):
    """Raised when the request never produced an HTTP response.

    Attributes:
        original_error: The httpx exception underneath, if any.
        is_retryable: Whether retrying could plausibly succeed.

    """

    def __init__(
        self,
        message: str = "Network error",
        original_error: Exception | None = None,
    ) -> None:
        self.original_error = original_error
        self.is_retryable = self._classify_retryable(original_error)
        super().__init__(message)

    @staticmethod
    def _classify_retryable(error: Exception | None) -> bool:
        if error is None:
            return True

        text = str(error).lower()

        # DNS failures are configuration problems
        if any(
            marker in text
            for marker in (
                "failed to resolve",
                "name or service not known",
                "nodename nor servname",
                "getaddrinfo failed",
            )
        ):
            return False

        return any(
            marker in text
            for marker in (
                "connection refused",
                "connection reset",
                "broken pipe",
                "timed out",
                "timeout",
            )
        )


class UntrustedLinkError(NetworkError):
    """Raised instead of following a "next" link or redirect we do not trust.

    Attributes:
        url: The rejected link.

    """

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Refusing to follow link to untrusted location: {url}")
        self.is_retryable = False


# =============================================================================
# Response -> exception mapping
# =============================================================================


def exception_from_response(
    status_code: int,
    response_data: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> GitHubError:
    """Build the exception matching an error response.

    Args:
        status_code: HTTP status code (>= 400).
        response_data: Decoded JSON error body.
        headers: Response headers, used for rate-limit details.

    Returns:
        The GitHubError subclass for the status.

    """
    headers = {key.lower(): value for key, value in (headers or {}).items()}
    message = response_data.get("message", f"HTTP {status_code}")

    if status_code == 429 or (
        status_code == 403
        and ("rate limit" in message.lower() or headers.get("x-ratelimit-remaining") == "0")
    ):
        return _rate_limit_error(message, response_data, headers)

    if 500 <= status_code < 600:
        return ServerError(message=message, response_data=response_data, status_code=status_code)

    if status_code == 401:
        return AuthenticationError(message=message, response_data=response_data)

    if status_code == 403:
        accepted = headers.get("x-accepted-oauth-scopes", "")
        return AuthorizationError(
            message=message,
            response_data=response_data,
            required_scopes=[scope.strip() for scope in accepted.split(",") if scope.strip()],
        )

    if status_code == 404:
        return NotFoundError(message=message, response_data=response_data)

    if status_code == 422:
        return ValidationError(
            message=message,
            response_data=response_data,
            errors=response_data.get("errors", []),
        )

    return GitHubError(message=f"HTTP {status_code}: {message}", response_data=response_data)


def _rate_limit_error(
    message: str,
    response_data: dict[str, Any],
    headers: dict[str, str],
) -> RateLimitError:
    limit = int(headers.get("x-ratelimit-limit", 0)) or None
    remaining = int(headers.get("x-ratelimit-remaining", 0))

    reset = headers.get("x-ratelimit-reset")
    reset_at = datetime.fromtimestamp(int(reset)) if reset else None

    retry_after = headers.get("retry-after")

    return RateLimitError(
        message=message,
        response_data=response_data,
        limit=limit,
        remaining=remaining,
        reset_at=reset_at,
        retry_after=int(retry_after) if retry_after else None,
        is_secondary="secondary" in message.lower() or "abuse" in message.lower(),
    )
