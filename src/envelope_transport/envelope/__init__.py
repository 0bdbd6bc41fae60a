"""Envelope wire types and composition."""

from .types import (
    CLIENT_REPORT_ITEM_TYPE,
    Category,
    Envelope,
    EnvelopeItem,
    normalize_category,
    normalize_payload,
)

__all__ = [
    "CLIENT_REPORT_ITEM_TYPE",
    "Category",
    "Envelope",
    "EnvelopeItem",
    "normalize_category",
    "normalize_payload",
]
