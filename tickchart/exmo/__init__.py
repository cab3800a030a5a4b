"""
EXMO exchange integration.

Public (no auth needed):
- PriceSource: recent trade prices for a pair as a PriceSeries
- parse_trades_response(): decode a /trades body

Errors:
- PriceSourceError and its subclasses, one per failure kind
"""

from tickchart.exmo.public_data import (
    BadStatusError,
    MalformedPayloadError,
    PriceDecodeError,
    PriceSource,
    PriceSourceError,
    TransportError,
    UnknownSymbolError,
    parse_trade,
    parse_trades_response,
)

__all__ = [
    "BadStatusError",
    "MalformedPayloadError",
    "PriceDecodeError",
    "PriceSource",
    "PriceSourceError",
    "TransportError",
    "UnknownSymbolError",
    "parse_trade",
    "parse_trades_response",
]
