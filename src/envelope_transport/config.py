"""Configuration for the envelope transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Dsn:
    """
    Identity context for the destination project.

    Parsing DSN strings is handled upstream; the transport only reads
    the key material and the string form.
    """
    public_key: str
    secret_key: str | None = None

    # Original DSN string, passed through in envelope headers
    value: str = ""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_dict(cls, data: dict) -> Dsn:
        return cls(
            public_key=data["public_key"],
            secret_key=data.get("secret_key"),
            value=data.get("value", ""),
        )


@dataclass(frozen=True)
class SdkInfo:
    """SDK metadata attached to every envelope header."""
    name: str = "envelope-transport"
    version: str = ""

    def __post_init__(self):
        if not self.version:
            from . import __version__
            object.__setattr__(self, "version", __version__)

    @property
    def user_agent(self) -> str:
        return f"{self.name}/{self.version}"

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "version": self.version}


@dataclass
class TransportConfig:
    """Main configuration container."""
    dsn: Dsn
    sdk: SdkInfo = field(default_factory=SdkInfo)

    # Client reports
    send_client_reports: bool = True
    client_report_interval_seconds: float = 30.0

    # Sink
    sink_type: str = "dummy"  # dummy | console | file
    sink_config: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> TransportConfig:
        """Create config from dictionary."""
        data = dict(data)
        dsn_data = data.pop("dsn", None)
        if not dsn_data:
            raise ValueError("Transport config is missing the dsn section")
        dsn = Dsn.from_dict(dsn_data)
        sdk_data = data.pop("sdk", None)
        sdk = SdkInfo(**sdk_data) if sdk_data else SdkInfo()
        return cls(dsn=dsn, sdk=sdk, **data)

    @classmethod
    def from_yaml(cls, path: str) -> TransportConfig:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str) -> TransportConfig:
        """Load config from JSON file."""
        import json
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)
