"""Utility modules for octostream.

This package contains the transport and the pagination engine:
- http: async HTTP transport and response metadata
- pagination: Link-header parsing, ApiOptions and the PagedFetcher
- streams: ItemStream and Subscription over paged results
- ensure: argument guards
- logger: package logging setup
- retry: retry with exponential backoff
- rate_limiter: proactive rate limiting

"""

from octostream.utils.http import ApiInfo, HTTPClient, HTTPResponse
from octostream.utils.pagination import (
    ApiOptions,
    LinkInfo,
    Page,
    PagedFetcher,
    PageRequest,
    parse_link_header,
)
from octostream.utils.rate_limiter import RateLimiter, RateLimitInfo
from octostream.utils.retry import RetryPolicy, call_with_retry
from octostream.utils.streams import ItemStream, Subscription, flatten

__all__ = [
    "ApiInfo",
    "ApiOptions",
    "HTTPClient",
    "HTTPResponse",
    "ItemStream",
    "LinkInfo",
    "Page",
    "PageRequest",
    "PagedFetcher",
    "RateLimitInfo",
    "RateLimiter",
    "RetryPolicy",
    "Subscription",
    "call_with_retry",
    "flatten",
    "parse_link_header",
]
