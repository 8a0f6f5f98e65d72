"""Configuration for the octostream client.

Precedence (highest first):
    1. Constructor arguments
    2. Environment variables (a ``.env`` file is loaded if present)
    3. Defaults

Environment Variables:
    GITHUB_TOKEN: Personal access token
    GITHUB_BASE_URL: API root (default: https://api.github.com)
    GITHUB_TIMEOUT: Per-request timeout in seconds (default: 30)
    GITHUB_MAX_RETRIES: Transport retry attempts (default: 3)
    GITHUB_ALLOWED_HOSTS: Comma separated extra hosts that pagination
        links may point at, besides the base URL host

Example:
    >>> config = ClientConfig(token="ghp_xxx", timeout=10.0)
    >>> enterprise = config.with_overrides(base_url="https://ghe.example.com/api/v3")

"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import ClassVar
from urllib.parse import urlsplit

from dotenv import load_dotenv

from octostream.exceptions import ConfigurationError

_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv()


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable settings shared by the transport and the pagination engine.

    Attributes:
        base_url: API root; relative locations and relative "next" links
            are resolved against it.
        token: Personal access token, or None for anonymous access.
        timeout: Per-request timeout in seconds, handed to httpx.
        max_retries: Retries the transport makes for transient failures.
        retry_backoff_factor: Exponential backoff multiplier.
        rate_limit_buffer: Fraction of the rate limit kept in reserve.
        allowed_hosts: Hosts, besides the base URL host, that "next"
            links may point at.
        user_agent: Value of the User-Agent header.

    """

    DEFAULT_BASE_URL: ClassVar[str] = "https://api.github.com"
    DEFAULT_TIMEOUT: ClassVar[float] = 30.0
    DEFAULT_MAX_RETRIES: ClassVar[int] = 3

    base_url: str = field(
        default_factory=lambda: _get_env("GITHUB_BASE_URL", ClientConfig.DEFAULT_BASE_URL)
    )
    token: str | None = field(default_factory=lambda: _get_env_optional("GITHUB_TOKEN"))
    timeout: float = field(
        default_factory=lambda: float(_get_env("GITHUB_TIMEOUT", str(ClientConfig.DEFAULT_TIMEOUT)))
    )
    max_retries: int = field(
        default_factory=lambda: int(
            _get_env("GITHUB_MAX_RETRIES", str(ClientConfig.DEFAULT_MAX_RETRIES))
        )
    )
    retry_backoff_factor: float = 1.5
    rate_limit_buffer: float = 0.1
    allowed_hosts: tuple[str, ...] = field(
        default_factory=lambda: _split_hosts(_get_env("GITHUB_ALLOWED_HOSTS", ""))
    )
    user_agent: str = "octostream/0.1"

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Invalid base_url: {self.base_url} (must start with http:// or https://)"
            )
        if self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

        if self.max_retries < 0:
            raise ConfigurationError(f"max_retries cannot be negative, got {self.max_retries}")

        if self.retry_backoff_factor < 1.0:
            raise ConfigurationError(
                f"retry_backoff_factor must be >= 1.0, got {self.retry_backoff_factor}"
            )

        if not 0.0 <= self.rate_limit_buffer < 1.0:
            raise ConfigurationError(
                f"rate_limit_buffer must be between 0.0 and 1.0, got {self.rate_limit_buffer}"
            )

        # Lists and sets are accepted for convenience, stored as a lowercase tuple
        hosts = tuple(host.strip().lower() for host in self.allowed_hosts if host.strip())
        object.__setattr__(self, "allowed_hosts", hosts)

    @property
    def is_authenticated(self) -> bool:
        """True when a non-empty token is configured."""
        return bool(self.token)

    @property
    def base_host(self) -> str:
        """Lowercased host of ``base_url``."""
        return (urlsplit(self.base_url).hostname or "").lower()

    @property
    def trusted_hosts(self) -> frozenset[str]:
        """Every host a pagination link or redirect may point at."""
        return frozenset((self.base_host, *self.allowed_hosts))

    def is_trusted_url(self, url: str) -> bool:
        """True if requests (and credentials) may be sent to ``url``.

        Relative URLs resolve against ``base_url`` and are always trusted.
        Absolute URLs must keep the base URL's scheme and point at one of
        ``trusted_hosts``; an https base never trusts plain http.
        """
        parts = urlsplit(url)
        if not parts.scheme and not parts.netloc:
            return True
        if parts.scheme.lower() != urlsplit(self.base_url).scheme.lower():
            return False
        return (parts.hostname or "").lower() in self.trusted_hosts

    def with_overrides(self, **kwargs: object) -> ClientConfig:
        """Return a copy of this config with some fields replaced.

        Raises:
            ConfigurationError: If a name is not a config field or a new
                value fails validation.

        """
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        unknown = set(kwargs) - set(current)
        if unknown:
            raise ConfigurationError(f"Unknown configuration fields: {sorted(unknown)}")
        current.update(kwargs)
        return ClientConfig(**current)  # type: ignore[arg-type]


def _get_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    if value is None or value == "":
        return default
    return value


def _get_env_optional(key: str) -> str | None:
    value = os.environ.get(key)
    if value is None or value == "":
        return None
    return value


def _split_hosts(value: str) -> tuple[str, ...]:
    return tuple(host.strip() for host in value.split(",") if host.strip())
