"""Unit tests for the rate limiter module."""

from __future__ import annotations

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from octostream.utils.rate_limiter import RateLimiter, RateLimitInfo


def _info(remaining: int, limit: int = 5000, seconds: int = 3600, resource: str = "core"):
    return RateLimitInfo(
        limit=limit,
        remaining=remaining,
        reset_at=datetime.now() + timedelta(seconds=seconds),
        resource=resource,
    )


class TestRateLimitInfo:
    """Tests for RateLimitInfo dataclass."""

    def test_is_exceeded(self):
        assert _info(0).is_exceeded is True
        assert _info(100).is_exceeded is False

    def test_from_headers(self):
        """Headers are read case-insensitively."""
        reset = int(datetime.now().timestamp()) + 3600
        info = RateLimitInfo.from_headers(
            {
                "X-RateLimit-Limit": "5000",
                "X-RateLimit-Remaining": "4999",
                "X-RateLimit-Reset": str(reset),
                "X-RateLimit-Resource": "search",
            }
        )

        assert info.limit == 5000
        assert info.remaining == 4999
        assert int(info.reset_timestamp) == reset
        assert info.resource == "search"

    def test_from_headers_missing(self):
        assert RateLimitInfo.from_headers({"X-RateLimit-Limit": "5000"}) is None

    def test_from_headers_malformed(self):
        headers = {
            "X-RateLimit-Limit": "lots",
            "X-RateLimit-Remaining": "1",
            "X-RateLimit-Reset": "0",
        }
        assert RateLimitInfo.from_headers(headers) is None


class TestRateLimiter:
    """Tests for RateLimiter class."""

    def test_update_and_remaining(self):
        limiter = RateLimiter()
        limiter.update(_info(4000))
        assert limiter.get_remaining("core") == 4000
        assert limiter.get_remaining("search") is None

    def test_update_none_ignored(self):
        limiter = RateLimiter()
        limiter.update(None)
        assert limiter.get_limit_info() is None

    def test_should_throttle_inside_buffer(self):
        """Throttle once remaining drops to the reserved fraction."""
        limiter = RateLimiter(buffer=0.1)
        limiter.update(_info(400))
        assert limiter.should_throttle() is True

    def test_should_not_throttle_above_buffer(self):
        limiter = RateLimiter(buffer=0.1)
        limiter.update(_info(600))
        assert limiter.should_throttle() is False
        assert limiter.get_wait_time() == 0.0

    def test_should_not_throttle_after_reset(self):
        limiter = RateLimiter(buffer=0.1)
        limiter.update(_info(0, seconds=-10))
        assert limiter.should_throttle() is False

    @pytest.mark.asyncio
    async def test_wait_if_needed_sleeps(self):
        limiter = RateLimiter(buffer=0.1)
        limiter.update(_info(0, seconds=30))

        with patch("octostream.utils.rate_limiter.asyncio.sleep", new_callable=AsyncMock) as sleep:
            waited = await limiter.wait_if_needed()

        assert 0 < waited <= 30
        sleep.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_wait_if_needed_no_wait(self):
        limiter = RateLimiter()
        assert await limiter.wait_if_needed() == 0.0

    def test_clear(self):
        limiter = RateLimiter()
        limiter.update(_info(10))
        limiter.clear()
        assert limiter.get_remaining() is None
