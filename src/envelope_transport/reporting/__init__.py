"""Client reports - self-reported summaries of discarded events."""

from .client_reports import (
    ClientReport,
    ClientReportAggregator,
    DiscardReason,
    RecordOutcome,
)

__all__ = [
    "ClientReport",
    "ClientReportAggregator",
    "DiscardReason",
    "RecordOutcome",
]
