"""Governance module - rate limit suppression."""

from .rate_limits import UNIVERSAL, RateLimitRegistry

__all__ = [
    "UNIVERSAL",
    "RateLimitRegistry",
]
