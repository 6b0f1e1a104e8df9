"""Proxy Package - the CLI's completion client and the proxy service it talks to."""

from commitcoach.proxy.client import CoachClient, BackendError, COMMIT_PATH, extract_message
from commitcoach.proxy.ratelimit import RateLimiter, RateLimitResult

__all__ = [
    "CoachClient",
    "BackendError",
    "COMMIT_PATH",
    "extract_message",
    "RateLimiter",
    "RateLimitResult",
]
