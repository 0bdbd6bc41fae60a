"""In-memory sink that never leaves the process."""

from __future__ import annotations

from dataclasses import dataclass, field

from .base import TransportSink


@dataclass
class DummySink(TransportSink):
    """
    Sink that keeps every payload in memory.

    Used to disable delivery and as the recording sink in tests.
    """
    payloads: list[bytes] = field(default_factory=list)

    def send(self, payload: bytes) -> None:
        self.payloads.append(payload)

    @property
    def last_payload(self) -> bytes | None:
        return self.payloads[-1] if self.payloads else None
