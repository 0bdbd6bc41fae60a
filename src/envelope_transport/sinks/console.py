"""Console sink for development/debugging."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from .base import TransportSink


@dataclass
class ConsoleSink(TransportSink):
    """
    Sink that writes envelopes to console (stdout/stderr).

    Useful for development and debugging.
    """
    # Output destination
    stream: str = "stdout"  # stdout | stderr

    # Prefix for each envelope
    prefix: str = "[ENVELOPE] "

    def send(self, payload: bytes) -> None:
        out = sys.stdout if self.stream == "stdout" else sys.stderr
        print(f"{self.prefix}{payload.decode('utf-8')}", file=out)
