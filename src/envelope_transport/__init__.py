"""
Envelope Transport - outbound transport core for event reporting

Decides whether an event may be sent, packages it into an envelope with
delivery metadata, tracks events dropped locally and periodically piggybacks
a client report summarizing those drops onto outgoing traffic.
"""

__version__ = "0.1.0"

from .config import Dsn, SdkInfo, TransportConfig
from .errors import EncodingError, SinkNotImplemented, TransportError
from .transport import Transport

__all__ = [
    "Dsn",
    "SdkInfo",
    "TransportConfig",
    "Transport",
    "TransportError",
    "EncodingError",
    "SinkNotImplemented",
]
