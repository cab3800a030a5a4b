"""
Public Market Data from EXMO.

Fetches recent trades for a trading pair WITHOUT authentication and turns
them into a PriceSeries. One call = one outbound request; retrying is the
caller's business (the acquisition task simply tries again next tick).
"""

import logging
import math

import httpx

from tickchart.core.config import DEFAULT_CONFIG
from tickchart.core.models import PriceSeries, Symbol, Trade

logger = logging.getLogger(__name__)

# EXMO's public API endpoint (no auth required)
API_URL = DEFAULT_CONFIG.api_url


class PriceSourceError(Exception):
    """Base class for a failed fetch."""

    def __init__(self, symbol: Symbol | str, message: str):
        self.symbol = symbol
        super().__init__(f"{symbol}: {message}")


class TransportError(PriceSourceError):
    """Request never produced a usable response (connect, timeout, reset, redirect loop)."""


class BadStatusError(PriceSourceError):
    """API answered with a non-200 status."""

    def __init__(self, symbol: Symbol | str, status_code: int):
        self.status_code = status_code
        super().__init__(symbol, f"API request failed with status code: {status_code}")


class MalformedPayloadError(PriceSourceError):
    """Response body does not have the expected shape."""


class UnknownSymbolError(PriceSourceError):
    """Response has no trades for the requested pair."""


class PriceDecodeError(PriceSourceError):
    """A trade's price field is not a finite number."""


def _decode_price(symbol: Symbol, raw: object) -> float:
    if not isinstance(raw, str):
        raise MalformedPayloadError(symbol, f"price field must be a string, got {type(raw).__name__}")
    try:
        price = float(raw)
    except ValueError:
        raise PriceDecodeError(symbol, f"failed to convert price {raw!r} to float") from None
    if not math.isfinite(price):
        raise PriceDecodeError(symbol, f"price {raw!r} is not finite")
    return price


def parse_trade(symbol: Symbol, record: object) -> Trade:
    """
    Decode one raw trade record.

    Args:
        symbol: Pair the record was returned for (used in error messages)
        record: JSON object like {"trade_id": 1, "type": "buy", "price": "97500.1", ...}

    Raises:
        MalformedPayloadError: record is not an object or lacks required fields
        PriceDecodeError: price is non-numeric
    """
    if not isinstance(record, dict):
        raise MalformedPayloadError(symbol, "trade record is not an object")
    if "price" not in record:
        raise MalformedPayloadError(symbol, "trade record has no price field")

    price = _decode_price(symbol, record["price"])

    # EXMO names the time field "date"; older payloads used "timestamp"
    try:
        trade_id = int(record.get("trade_id", 0))
        timestamp = int(record.get("date", record.get("timestamp", 0)))
        amount = float(record.get("amount", record.get("quantity", 0)))
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedPayloadError(symbol, f"bad trade record field: {e}") from None

    return Trade(
        trade_id=trade_id,
        type=str(record.get("type", "unknown")),
        pair=str(record.get("pair", symbol.code)),
        price=price,
        amount=amount,
        timestamp=timestamp,
    )


def parse_trades_response(symbol: Symbol, payload: object) -> PriceSeries:
    """
    Turn a decoded /trades body into a PriceSeries for `symbol`.

    All-or-nothing: any bad record fails the whole response.
    Trades are ordered oldest first by (timestamp, trade_id).
    """
    if not isinstance(payload, dict):
        raise MalformedPayloadError(symbol, "response is not a JSON object")

    records = payload.get(symbol.code)
    if records is None:
        raise UnknownSymbolError(symbol, f"API returned empty response for pair: {symbol.code}")
    if not isinstance(records, list):
        raise MalformedPayloadError(symbol, "trades for pair are not a list")
    if not records:
        raise UnknownSymbolError(symbol, f"API returned no trades for pair: {symbol.code}")

    trades = [parse_trade(symbol, record) for record in records]
    trades.sort(key=lambda t: (t.timestamp, t.trade_id))
    return PriceSeries.from_trades(symbol, trades)


class PriceSource:
    """
    Fetches recent trade prices for a pair from EXMO.

    Usage:
        async with PriceSource() as source:
            series = await source.fetch(Symbol("BTC_USD"))
            print(f"{series.symbol}: {series.last_price:.2f}")
    """

    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = DEFAULT_CONFIG.request_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the source.

        Args:
            base_url: API root, e.g. "https://api.exmo.com/v1.1"
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PriceSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def fetch(self, symbol: Symbol) -> PriceSeries:
        """
        Fetch the recent price series for a pair.

        Args:
            symbol: Trading pair like Symbol("BTC_USD")

        Returns:
            Non-empty PriceSeries tagged with `symbol`, oldest price first

        Raises:
            ValueError: symbol is empty
            PriceSourceError: any transport, status or decode failure
        """
        if not isinstance(symbol, Symbol):
            symbol = Symbol(symbol)

        client = await self._get_client()
        url = f"{self.base_url}/trades"

        try:
            response = await client.get(url, params={"pair": symbol.code})
        except httpx.DecodingError as e:
            raise MalformedPayloadError(symbol, f"failed to decode response body: {e}") from e
        except httpx.RequestError as e:
            # Connect, timeout, reset, redirect loops
            raise TransportError(symbol, f"request failed: {e}") from e

        if response.status_code != 200:
            raise BadStatusError(symbol, response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedPayloadError(symbol, f"failed to decode response: {e}") from None

        series = parse_trades_response(symbol, payload)
        logger.debug(f"Fetched {len(series)} prices for {symbol}")
        return series
