"""Shared test fixtures for transport tests."""

from datetime import datetime, timedelta, timezone

import pytest

from envelope_transport.config import Dsn, SdkInfo, TransportConfig
from envelope_transport.sinks import DummySink
from envelope_transport.transport import Transport


class FrozenClock:
    """Controllable clock; call it to read the current instant."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def dsn() -> Dsn:
    return Dsn(
        public_key="abc123",
        secret_key=None,
        value="https://abc123@ingest.example.com/42",
    )


@pytest.fixture
def config(dsn) -> TransportConfig:
    return TransportConfig(dsn=dsn, sdk=SdkInfo(name="test-sdk", version="1.2.3"))


@pytest.fixture
def sink() -> DummySink:
    return DummySink()


@pytest.fixture
def transport(config, sink, clock) -> Transport:
    return Transport(config=config, sink=sink, clock=clock)
