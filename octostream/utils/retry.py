"""Retry with exponential backoff for the async transport.

Retried:
    - RateLimitError (honours Retry-After / reset time)
    - ServerError 500, 502, 503, 504
    - NetworkError classified as retryable

Never retried: other 4xx errors, DNS failures, untrusted links or redirects,
and decode failures. The pagination engine itself never retries; a page
either comes back from the transport or the chain stops.

"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from octostream.exceptions import NetworkError, RateLimitError, ServerError

if TYPE_CHECKING:
    from octostream.config import ClientConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504})


def is_retryable_error(error: Exception) -> bool:
    """Whether ``error`` is transient enough to try again."""
    if isinstance(error, RateLimitError):
        return True

    if isinstance(error, ServerError):
        return error.status_code in RETRYABLE_STATUS_CODES

    if isinstance(error, NetworkError):
        return error.is_retryable

    return False


def calculate_backoff(
    attempt: int,
    base_delay: float = 1.0,
    factor: float = 2.0,
    max_delay: float = 60.0,
    jitter: bool = True,
) -> float:
    """Delay before retry number ``attempt`` (0-indexed), capped at ``max_delay``.

    Jitter spreads the delay by +/-25%.
    """
    delay = min(base_delay * (factor**attempt), max_delay)

    if jitter:
        delay = delay * (0.75 + random.random() * 0.5)  # nosec B311

    return delay


def get_retry_after(error: RateLimitError) -> float | None:
    """Seconds GitHub asked us to wait, or None if it did not say."""
    if error.retry_after:
        return float(error.retry_after)

    if error.reset_at:
        return max(0.0, error.reset_at.timestamp() - time.time())

    return None


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How many times and how patiently the transport retries.

    Attributes:
        max_retries: Retries after the first attempt; 0 disables retrying.
        base_delay: First backoff delay in seconds.
        backoff_factor: Exponential multiplier.
        max_delay: Cap for any single delay.

    """

    max_retries: int = 3
    base_delay: float = 1.0
    backoff_factor: float = 2.0
    max_delay: float = 60.0

    @classmethod
    def from_client_config(cls, config: ClientConfig) -> RetryPolicy:
        return cls(max_retries=config.max_retries, backoff_factor=config.retry_backoff_factor)

    def delay_for(self, error: Exception, attempt: int) -> float:
        """Delay before retrying after ``error`` on attempt ``attempt``."""
        if isinstance(error, RateLimitError):
            retry_after = get_retry_after(error)
            if retry_after:
                return retry_after
        return calculate_backoff(attempt, self.base_delay, self.backoff_factor, self.max_delay)


async def call_with_retry(
    func: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    description: str,
) -> T:
    """Await ``func()`` and retry transient failures per ``policy``.

    Args:
        func: Zero-argument coroutine factory; called once per attempt.
        policy: Retry limits and backoff.
        description: What is being attempted, for log messages.

    Returns:
        Whatever ``func`` returns on its first successful attempt.

    Raises:
        GitHubError: The last error, once it is not retryable or the
            retries are used up.

    """
    attempt = 0
    while True:
        try:
            return await func()
        except (RateLimitError, ServerError, NetworkError) as e:
            if not is_retryable_error(e):
                raise

            if attempt >= policy.max_retries:
                if policy.max_retries:
                    logger.warning(
                        "Max retries (%d) exhausted for %s",
                        policy.max_retries,
                        description,
                    )
                raise

            delay = policy.delay_for(e, attempt)
            logger.info(
                "Retry %d/%d for %s after %.2fs: %s",
                attempt + 1,
                policy.max_retries,
                description,
                delay,
                str(e),
            )
            await asyncio.sleep(delay)
            attempt += 1
