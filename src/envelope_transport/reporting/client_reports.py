"""Client reports - aggregated counts of events discarded by the client itself."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from ..clock import Clock, ensure_utc, format_timestamp, utc_now
from ..envelope.types import CLIENT_REPORT_ITEM_TYPE, normalize_category


logger = logging.getLogger(__name__)

DEFAULT_FLUSH_INTERVAL_SECONDS = 30.0


class DiscardReason(str, Enum):
    """Why an event was discarded before delivery."""
    RATELIMIT_BACKOFF = "ratelimit_backoff"
    QUEUE_OVERFLOW = "queue_overflow"
    CACHE_OVERFLOW = "cache_overflow"  # reserved, never produced internally
    NETWORK_ERROR = "network_error"
    SAMPLE_RATE = "sample_rate"
    BEFORE_SEND = "before_send"
    EVENT_PROCESSOR = "event_processor"


class RecordOutcome(str, Enum):
    """Result of a record_loss call."""
    RECORDED = "recorded"
    IGNORED = "ignored"    # unrecognized reason
    DISABLED = "disabled"  # client reports turned off


@dataclass(frozen=True)
class ClientReport:
    """A flushed client report ready to be attached as an envelope item."""
    headers: dict[str, Any]
    payload: dict[str, Any]

    @property
    def discarded_events(self) -> list[dict[str, Any]]:
        return self.payload["discarded_events"]


def _coerce_reason(reason: DiscardReason | str) -> DiscardReason | None:
    if isinstance(reason, DiscardReason):
        return reason
    try:
        return DiscardReason(reason)
    except ValueError:
        return None


@dataclass
class ClientReportAggregator:
    """
    Accumulates discard counts keyed by (reason, category) and flushes them
    as a client report at most once per interval. Categories are collapsed
    to transaction or error when recorded.

    Recording never raises: reporting must not interfere with delivery of
    the events that do get sent.
    """
    enabled: bool = True
    flush_interval_seconds: float = DEFAULT_FLUSH_INTERVAL_SECONDS
    clock: Clock = utc_now

    _discarded: dict[tuple[DiscardReason, str], int] = field(default_factory=dict, init=False)
    _last_flush: datetime = field(init=False)
    _stats: dict = field(default_factory=dict, init=False)

    def __post_init__(self):
        self._last_flush = ensure_utc(self.clock())
        self._stats = {
            "recorded": 0,
            "ignored": 0,
            "reports_flushed": 0,
        }

    def record_loss(self, reason: DiscardReason | str, category: str | None = None) -> RecordOutcome:
        """Count one discarded event."""
        if not self.enabled:
            return RecordOutcome.DISABLED

        known = _coerce_reason(reason)
        if known is None:
            logger.debug(f"Ignoring discard with unrecognized reason {reason!r}")
            self._stats["ignored"] += 1
            return RecordOutcome.IGNORED

        key = (known, normalize_category(category))
        self._discarded[key] = self._discarded.get(key, 0) + 1
        self._stats["recorded"] += 1
        return RecordOutcome.RECORDED

    def take_pending_report(self, now: datetime | None = None) -> ClientReport | None:
        """
        Flush pending counts into a client report.

        Returns None when disabled, when the flush interval has not elapsed
        since the last flush or when nothing was recorded. A returned report
        is the only copy of that data; callers must forward it.
        """
        if not self.enabled:
            return None

        now = ensure_utc(now or self.clock())
        if self._last_flush > now - timedelta(seconds=self.flush_interval_seconds):
            return None
        if not self._discarded:
            return None

        discarded_events = [
            {
                "reason": reason.value,
                "category": category,
                "quantity": quantity,
            }
            for (reason, category), quantity in self._discarded.items()
        ]

        self._discarded = {}
        self._last_flush = now
        self._stats["reports_flushed"] += 1

        return ClientReport(
            headers={"type": CLIENT_REPORT_ITEM_TYPE},
            payload={
                "timestamp": format_timestamp(now),
                "discarded_events": discarded_events,
            },
        )

    @property
    def pending(self) -> dict[tuple[DiscardReason, str], int]:
        """Copy of the counts recorded since the last flush."""
        return dict(self._discarded)

    @property
    def last_flush(self) -> datetime:
        return self._last_flush

    @property
    def stats(self) -> dict:
        """Aggregator statistics."""
        return {
            **self._stats,
            "enabled": self.enabled,
            "pending_keys": len(self._discarded),
            "pending_events": sum(self._discarded.values()),
        }
