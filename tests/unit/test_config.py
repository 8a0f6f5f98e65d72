"""Unit tests for the configuration module."""

from __future__ import annotations

import os
from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest
from octostream.config import ClientConfig
from octostream.exceptions import ConfigurationError


class TestClientConfig:
    """Tests for the ClientConfig class."""

    def test_default_values(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            config = ClientConfig()

        assert config.base_url == "https://api.github.com"
        assert config.token is None
        assert config.timeout == 30.0
        assert config.max_retries == 3
        assert config.allowed_hosts == ()

    def test_environment_variables(self):
        """Environment variables fill unset fields."""
        env = {
            "GITHUB_TOKEN": "env_token",
            "GITHUB_BASE_URL": "https://ghe.example.com/api/v3",
            "GITHUB_TIMEOUT": "12.5",
            "GITHUB_MAX_RETRIES": "1",
            "GITHUB_ALLOWED_HOSTS": "Example.com, uploads.example.com ,",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ClientConfig()

        assert config.token == "env_token"
        assert config.base_url == "https://ghe.example.com/api/v3"
        assert config.timeout == 12.5
        assert config.max_retries == 1
        assert config.allowed_hosts == ("example.com", "uploads.example.com")

    def test_constructor_overrides_env_var(self):
        """Constructor value overrides environment variable."""
        with patch.dict(os.environ, {"GITHUB_TOKEN": "env_token"}):
            config = ClientConfig(token="constructor_token")

        assert config.token == "constructor_token"

    def test_is_authenticated(self):
        """is_authenticated follows the token."""
        assert ClientConfig(token="test_token").is_authenticated is True
        with patch.dict(os.environ, {}, clear=True):
            assert ClientConfig().is_authenticated is False

    def test_trailing_slash_stripped(self):
        """base_url is stored without a trailing slash."""
        config = ClientConfig(base_url="https://api.github.com/")
        assert config.base_url == "https://api.github.com"

    def test_trusted_hosts(self):
        """The base host is always trusted alongside allowed_hosts."""
        config = ClientConfig(
            base_url="https://ghe.example.com/api/v3", allowed_hosts=["Uploads.Example.com"]
        )
        assert config.base_host == "ghe.example.com"
        assert config.trusted_hosts == frozenset({"ghe.example.com", "uploads.example.com"})

    @pytest.mark.parametrize(
        ("url", "trusted"),
        [
            ("/repos/o/n/pulls?page=2", True),
            ("https://API.github.com/repos?page=2", True),
            ("https://example.com/page/2", True),
            ("http://api.github.com/repos?page=2", False),
            ("https://evil.example.org/page/2", False),
            ("file:///etc/passwd", False),
        ],
    )
    def test_is_trusted_url(self, url, trusted):
        """Absolute URLs need the base scheme and a trusted host."""
        config = ClientConfig(base_url="https://api.github.com", allowed_hosts=("example.com",))
        assert config.is_trusted_url(url) is trusted

    def test_immutable(self):
        """Config cannot be modified after creation."""
        config = ClientConfig(token="test_token")
        with pytest.raises(FrozenInstanceError):
            config.token = "other"  # type: ignore[misc]

    def test_with_overrides(self):
        """with_overrides returns a new config."""
        config = ClientConfig(token="test_token", timeout=10.0)
        changed = config.with_overrides(timeout=20.0)

        assert changed.timeout == 20.0
        assert changed.token == "test_token"
        assert config.timeout == 10.0

    def test_with_overrides_unknown_field(self):
        """Unknown fields are rejected."""
        with pytest.raises(ConfigurationError):
            ClientConfig().with_overrides(per_page=50)


class TestClientConfigValidation:
    """Tests for ClientConfig validation."""

    @pytest.mark.parametrize("base_url", ["", "ftp://api.github.com", "api.github.com"])
    def test_invalid_base_url(self, base_url):
        with pytest.raises(ConfigurationError):
            ClientConfig(base_url=base_url)

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(timeout=0)

    def test_negative_max_retries(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(max_retries=-1)

    def test_backoff_factor_below_one(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(retry_backoff_factor=0.5)

    def test_rate_limit_buffer_out_of_range(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(rate_limit_buffer=1.0)
