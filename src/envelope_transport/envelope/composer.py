"""Envelope composition for outgoing events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..clock import Clock, format_timestamp, utc_now
from ..config import Dsn, SdkInfo
from .types import JSON_CONTENT_TYPE, Envelope, normalize_category

if TYPE_CHECKING:
    from ..reporting.client_reports import ClientReport


logger = logging.getLogger(__name__)


def category_of(payload: dict[str, Any]) -> str:
    """Category derived from the payload's ``type`` field, defaulting to error."""
    return normalize_category(payload.get("type"))


@dataclass
class EnvelopeComposer:
    """
    Builds envelopes for single events.

    The event item always comes first; a pending client report, when given,
    is attached as the second item.
    """
    sdk: SdkInfo = field(default_factory=SdkInfo)
    clock: Clock = utc_now

    def build(
        self,
        payload: dict[str, Any],
        dsn: Dsn,
        pending_report: ClientReport | None = None,
    ) -> Envelope:
        """Build the envelope without serializing it."""
        event_id = payload.get("event_id")
        item_type = category_of(payload)

        envelope = Envelope(
            headers={
                "event_id": event_id,
                "dsn": str(dsn),
                "sdk": self.sdk.to_dict(),
                "sent_at": format_timestamp(self.clock()),
            }
        )
        envelope.add_item(
            {"type": item_type, "content_type": JSON_CONTENT_TYPE},
            payload,
        )

        if pending_report is not None:
            self.attach_report(envelope, pending_report)

        logger.debug(f"Composed envelope [{item_type}] {event_id}")
        return envelope

    def attach_report(self, envelope: Envelope, report: ClientReport) -> None:
        """Append a client report item after the event item."""
        envelope.add_item(report.headers, report.payload)

    def compose(
        self,
        payload: dict[str, Any],
        dsn: Dsn,
        pending_report: ClientReport | None = None,
    ) -> bytes:
        """Build and serialize the envelope."""
        return self.build(payload, dsn, pending_report).serialize()
