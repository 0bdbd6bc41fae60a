"""Transport core - decides what gets sent, when, and why it is suppressed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .clock import Clock, ensure_utc, utc_now
from .config import TransportConfig
from .envelope.composer import EnvelopeComposer, category_of
from .envelope.types import Envelope, normalize_payload
from .errors import EncodingError, SinkNotImplemented
from .governance.rate_limits import RateLimitRegistry
from .reporting.client_reports import ClientReportAggregator, DiscardReason, RecordOutcome
from .sinks import TransportSink, create_sink


logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "7"


@dataclass
class Transport:
    """
    Outbound transport for events.

    Checks rate limits, records locally discarded events, composes envelopes
    (merging any pending client report) and hands the serialized bytes to a
    sink. Network delivery is entirely the sink's concern.

    Not thread-safe: the client report flush and the rate limit check are
    read-then-act sequences, so callers dispatching from several workers
    must serialize access to one instance.

    Usage:
        transport = Transport(config=config, sink=DummySink())
        transport.send_event({"event_id": "abc", "message": "boom"})
    """
    config: TransportConfig
    sink: TransportSink | None = None
    clock: Clock = utc_now

    rate_limits: RateLimitRegistry = field(init=False)
    client_reports: ClientReportAggregator | None = field(default=None, init=False)
    _composer: EnvelopeComposer = field(init=False)

    def __post_init__(self):
        self.rate_limits = RateLimitRegistry(clock=self.clock)
        self._composer = EnvelopeComposer(sdk=self.config.sdk, clock=self.clock)

        if self.config.send_client_reports:
            self.client_reports = ClientReportAggregator(
                flush_interval_seconds=self.config.client_report_interval_seconds,
                clock=self.clock,
            )

    @classmethod
    def from_config(cls, config: TransportConfig, clock: Clock = utc_now) -> Transport:
        """Create a transport with the sink named in the config."""
        sink = create_sink(config.sink_type, config.sink_config)
        return cls(config=config, sink=sink, clock=clock)

    def start(self) -> None:
        """Start the sink (call on startup)."""
        if self.sink is not None:
            self.sink.start()

    def stop(self) -> None:
        """Stop the sink (call on shutdown)."""
        if self.sink is not None:
            self.sink.stop()
        logger.info(f"Transport stopped. Stats: {self.stats}")

    @property
    def dsn(self):
        return self.config.dsn

    def send_data(self, data: bytes) -> None:
        """Hand a serialized payload to the sink."""
        if self.sink is None:
            raise SinkNotImplemented()
        self.sink.send(data)

    def send_event(self, event: Any) -> Any | None:
        """
        Send a single event.

        Returns the event when it was handed to the sink, None when it was
        suppressed by a rate limit or could not be encoded.
        """
        try:
            payload = normalize_payload(event)
        except EncodingError as e:
            logger.warning(f"Event not sent: {e}")
            return None

        item_type = category_of(payload)

        if self.rate_limits.is_limited(item_type):
            logger.info(f"Envelope [{item_type}] not sent: rate limiting")
            self.record_lost_event(DiscardReason.RATELIMIT_BACKOFF, item_type)
            return None

        envelope = self._composer.build(payload, self.dsn)
        try:
            data = envelope.serialize()
        except EncodingError as e:
            logger.warning(f"Event not sent: {e}")
            return None

        if self.sink is None:
            raise SinkNotImplemented()

        # A flushed report cannot be restored, so take it only once the event encodes
        report = self._take_pending_report()
        if report is not None:
            self._composer.attach_report(envelope, report)
            data = envelope.serialize()

        logger.info(f"Sending envelope [{item_type}] {payload.get('event_id')}")
        self.send_data(data)

        return event

    def send_envelope(self, envelope: Envelope) -> None:
        """
        Forward an already assembled envelope to the sink.

        No rate limit filtering or client report injection happens here.
        """
        # TODO: drop rate limited items before sending, as send_event does
        item_types = ", ".join(str(t) for t in envelope.item_types)
        logger.info(f"Sending envelope with items [{item_types}]")
        self.send_data(envelope.serialize())

    def record_lost_event(self, reason: DiscardReason | str, category: str | None = None) -> RecordOutcome:
        """Count an event the client chose not to send."""
        if self.client_reports is None:
            return RecordOutcome.DISABLED
        return self.client_reports.record_loss(reason, category)

    def generate_auth_header(self, now: datetime | None = None) -> str:
        """Build the authentication header for upstream requests."""
        now = ensure_utc(now) if now else self.clock()
        fields = {
            "sentry_version": PROTOCOL_VERSION,
            "sentry_client": self.config.sdk.user_agent,
            "sentry_timestamp": int(now.timestamp()),
            "sentry_key": self.dsn.public_key,
        }
        if self.dsn.secret_key:
            fields["sentry_secret"] = self.dsn.secret_key
        return "Sentry " + ", ".join(f"{key}={value}" for key, value in fields.items())

    def _take_pending_report(self):
        if self.client_reports is None:
            return None
        return self.client_reports.take_pending_report()

    @property
    def stats(self) -> dict:
        """Transport statistics."""
        return {
            "rate_limits": self.rate_limits.stats,
            "client_reports": self.client_reports.stats if self.client_reports else None,
        }
