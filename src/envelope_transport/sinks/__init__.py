"""Transport sinks - destinations for serialized envelopes."""

from __future__ import annotations

from typing import Any

from .base import TransportSink
from .console import ConsoleSink
from .dummy import DummySink
from .file import FileSink

__all__ = [
    "TransportSink",
    "ConsoleSink",
    "DummySink",
    "FileSink",
    "create_sink",
]


def create_sink(sink_type: str, sink_config: dict[str, Any] | None = None) -> TransportSink:
    """Create a sink from its configured type name."""
    sink_config = sink_config or {}

    if sink_type == "dummy":
        return DummySink(**sink_config)
    elif sink_type == "console":
        return ConsoleSink(**sink_config)
    elif sink_type == "file":
        return FileSink(**sink_config)
    raise ValueError(f"Unknown sink type: {sink_type!r}")
