"""Base sink interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TransportSink(ABC):
    """
    Abstract base class for transport sinks.

    Sinks receive fully serialized envelopes and deliver them to a
    destination. Retries, backoff and HTTP semantics belong to the sink.
    """

    @abstractmethod
    def send(self, payload: bytes) -> None:
        """Deliver one serialized envelope. May raise on failure."""
        ...

    def start(self) -> None:
        """Initialize the sink (called on startup)."""
        pass

    def stop(self) -> None:
        """Clean up the sink (called on shutdown)."""
        pass
