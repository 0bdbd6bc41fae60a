"""Envelope wire types."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..errors import EncodingError


class Category(str, Enum):
    """Event category used for rate limits and client reports."""
    ERROR = "error"
    TRANSACTION = "transaction"


CLIENT_REPORT_ITEM_TYPE = "client_report"
JSON_CONTENT_TYPE = "application/json"


def normalize_category(value: str | None) -> str:
    """Collapse anything that is not a transaction to the error category."""
    if value == Category.TRANSACTION.value:
        return Category.TRANSACTION.value
    return Category.ERROR.value


def normalize_payload(event: Any) -> dict[str, Any]:
    """
    Convert an event into a payload dict with string keys only.

    Accepts mappings or objects exposing ``to_dict()``. Top-level keys that are
    enums use their value; anything else is converted with ``str``.
    """
    try:
        data = event.to_dict() if hasattr(event, "to_dict") else event
    except Exception as e:
        raise EncodingError(f"Failed to convert event to payload: {e}") from e

    if not isinstance(data, Mapping):
        raise EncodingError(f"Event payload must be a mapping, got {type(data).__name__}")

    payload = {}
    for key, value in data.items():
        if isinstance(key, Enum):
            key = key.value
        payload[str(key)] = value
    return payload


def _dump(obj: Any) -> str:
    try:
        return json.dumps(obj, separators=(",", ":"), default=str)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Failed to serialize envelope: {e}") from e


@dataclass(frozen=True)
class EnvelopeItem:
    """A single (header, payload) unit inside an envelope."""
    headers: dict[str, Any]
    payload: Any

    @property
    def type(self) -> str | None:
        return self.headers.get("type")

    def to_string(self) -> str:
        return f"{_dump(self.headers)}\n{_dump(self.payload)}"


@dataclass(frozen=True)
class Envelope:
    """
    Container bundling typed items under a shared header.

    Wire format: the header JSON line, then for each item its header JSON
    line followed by its payload JSON line, all joined by newlines.
    """
    headers: Mapping[str, Any]
    items: list[EnvelopeItem] = field(default_factory=list)

    def __post_init__(self):
        # Header is fixed once the envelope exists
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def add_item(self, headers: dict[str, Any], payload: Any) -> None:
        self.items.append(EnvelopeItem(headers=dict(headers), payload=payload))

    @property
    def item_types(self) -> list[str | None]:
        return [item.type for item in self.items]

    def to_string(self) -> str:
        return "\n".join([_dump(dict(self.headers)), *(item.to_string() for item in self.items)])

    def serialize(self) -> bytes:
        return self.to_string().encode("utf-8")
