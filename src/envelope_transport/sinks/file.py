"""File-based sink for envelopes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from .base import TransportSink


logger = logging.getLogger(__name__)


@dataclass
class FileSink(TransportSink):
    """
    Sink that appends envelopes to a file.

    Envelopes are multi-line, so each one is followed by a blank line.
    """
    path: str
    encoding: str = "utf-8"

    # Internal state
    _file: IO[str] | None = field(default=None, init=False)

    def start(self) -> None:
        # Ensure directory exists
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "a", encoding=self.encoding)
        logger.info(f"File sink writing to {self.path}")

    def stop(self) -> None:
        if self._file:
            self._file.close()
            self._file = None

    def send(self, payload: bytes) -> None:
        if not self._file:
            self.start()

        self._file.write(payload.decode(self.encoding) + "\n\n")
        self._file.flush()
