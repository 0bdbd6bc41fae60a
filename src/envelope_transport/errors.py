"""Transport exceptions."""

from __future__ import annotations


class TransportError(Exception):
    """Base exception for transport errors."""
    pass


class EncodingError(TransportError):
    """Event could not be converted into an envelope payload."""
    pass


class SinkNotImplemented(TransportError, NotImplementedError):
    """Raised when a transport without a concrete sink is asked to send."""
    def __init__(self, message: str = "Transport has no sink to send data to"):
        super().__init__(message)
