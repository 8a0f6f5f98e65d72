"""Rate-limit tracking from GitHub's response headers.

Headers Used:
    - X-RateLimit-Limit: requests allowed in the window
    - X-RateLimit-Remaining: requests left
    - X-RateLimit-Reset: Unix timestamp of the reset
    - X-RateLimit-Resource: bucket name (core, search, ...)

The limiter is the only shared mutable state in a client. Every page chain
reports through it, so updates happen under a lock.

"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitInfo:
    """Snapshot of one rate-limit bucket.

    Attributes:
        limit: Requests allowed in the window.
        remaining: Requests left in the window.
        reset_at: When the window resets.
        resource: Bucket name.

    """

    limit: int
    remaining: int
    reset_at: datetime
    resource: str = "core"

    @property
    def reset_timestamp(self) -> float:
        return self.reset_at.timestamp()

    @property
    def is_exceeded(self) -> bool:
        return self.remaining <= 0

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo | None:
        """Parse the X-RateLimit-* headers; None if absent or malformed."""
        lowered = {key.lower(): value for key, value in headers.items()}

        limit = lowered.get("x-ratelimit-limit")
        remaining = lowered.get("x-ratelimit-remaining")
        reset = lowered.get("x-ratelimit-reset")
        if not (limit and remaining and reset):
            return None

        try:
            return cls(
                limit=int(limit),
                remaining=int(remaining),
                reset_at=datetime.fromtimestamp(int(reset)),
                resource=lowered.get("x-ratelimit-resource") or "core",
            )
        except ValueError:
            logger.warning("Failed to parse rate limit headers")
            return None


@dataclass
class RateLimiter:
    """Throttles requests before the rate limit is actually hit.

    Attributes:
        buffer: Fraction of the limit kept in reserve (0.0-1.0).

    Example:
        >>> limiter = RateLimiter(buffer=0.1)
        >>> limiter.update(RateLimitInfo.from_headers(response.headers))
        >>> await limiter.wait_if_needed("core")

    """

    buffer: float = 0.1
    _limits: dict[str, RateLimitInfo] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def update(self, info: RateLimitInfo | None) -> None:
        """Record the latest snapshot for its bucket; None is ignored."""
        if info is None:
            return

        with self._lock:
            self._limits[info.resource] = info

        logger.debug(
            "Rate limit for %s: %d/%d (resets at %s)",
            info.resource,
            info.remaining,
            info.limit,
            info.reset_at.isoformat(),
        )

    def get_limit_info(self, resource: str = "core") -> RateLimitInfo | None:
        with self._lock:
            return self._limits.get(resource)

    def get_remaining(self, resource: str = "core") -> int | None:
        info = self.get_limit_info(resource)
        return info.remaining if info else None

    def should_throttle(self, resource: str = "core") -> bool:
        """True while the bucket is at or below the reserve threshold."""
        info = self.get_limit_info(resource)
        if not info:
            return False

        if time.time() > info.reset_timestamp:
            return False

        return info.remaining <= int(info.limit * self.buffer)

    def get_wait_time(self, resource: str = "core") -> float:
        info = self.get_limit_info(resource)
        if not info or not self.should_throttle(resource):
            return 0.0
        return max(0.0, info.reset_timestamp - time.time())

    async def wait_if_needed(self, resource: str = "core") -> float:
        """Sleep until the bucket resets if we are inside the reserve.

        Returns:
            Seconds waited.

        """
        wait_time = self.get_wait_time(resource)

        if wait_time > 0:
            logger.info(
                "Rate limit buffer reached for %s, waiting %.2fs",
                resource,
                wait_time,
            )
            await asyncio.sleep(wait_time)

        return wait_time

    def clear(self) -> None:
        with self._lock:
            self._limits.clear()

    def __repr__(self) -> str:
        with self._lock:
            resources = list(self._limits)
        return f"RateLimiter(buffer={self.buffer}, resources={resources})"
