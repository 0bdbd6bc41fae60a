"""Rate limit registry for suppressing sends to the upstream service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..clock import Clock, ensure_utc, utc_now
from ..envelope.types import normalize_category


logger = logging.getLogger(__name__)


class _Universal:
    """Key for limits that apply to every category."""
    _instance: _Universal | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNIVERSAL"


UNIVERSAL = _Universal()


@dataclass
class RateLimitRegistry:
    """
    Suppression deadlines per category plus one universal deadline.

    Entries are populated by the outer HTTP layer after it inspects an
    upstream response. Expired entries stay in place and are simply inert.
    Not thread-safe: callers serialize access per transport instance.
    """
    clock: Clock = utc_now

    _limits: dict[str | _Universal, datetime] = field(default_factory=dict, init=False)

    def record_limit(self, key: str | _Universal, until: datetime) -> None:
        """Install or overwrite the expiry for a category or UNIVERSAL."""
        until = ensure_utc(until)
        self._limits[key] = until
        logger.debug(f"Rate limit recorded for {key!r} until {until.isoformat()}")

    def expiry_for(self, category: str | None) -> datetime | None:
        """
        Governing expiry for a category.

        The category-specific and universal limits are independent; the one
        further in the future wins.
        """
        category_delay = self._limits.get(normalize_category(category))
        universal_delay = self._limits.get(UNIVERSAL)

        if category_delay and universal_delay:
            return max(category_delay, universal_delay)
        return category_delay or universal_delay

    def is_limited(self, category: str | None) -> bool:
        """True iff the governing expiry is strictly after now."""
        delay = self.expiry_for(category)
        return delay is not None and delay > ensure_utc(self.clock())

    def clear(self) -> None:
        self._limits.clear()

    @property
    def stats(self) -> dict:
        """Rate limit statistics."""
        now = ensure_utc(self.clock())
        return {
            "total_entries": len(self._limits),
            "active_entries": sum(1 for until in self._limits.values() if until > now),
            "universal_active": (
                UNIVERSAL in self._limits and self._limits[UNIVERSAL] > now
            ),
        }
