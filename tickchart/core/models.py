"""
Core data models for the chart terminal.

Contains dataclasses for:
- Trading pair symbols and decoded trades
- Price series handed from acquisition to display
- Display modes and the events that switch them
- Key events and process termination results
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class Symbol:
    """Identifier for a tradable pair, e.g. "BTC_USD"."""

    code: str

    def __post_init__(self):
        if not self.code or not self.code.strip():
            raise ValueError("Symbol code must be non-empty")

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class Trade:
    """
    Single trade record from the EXMO /trades endpoint.

    Price and amount arrive string-encoded and are decoded by the price source.
    """

    trade_id: int
    type: str  # "buy" or "sell"
    pair: str
    price: float
    amount: float
    timestamp: int  # Unix seconds


@dataclass(frozen=True)
class PriceSeries:
    """
    Prices for one symbol from one fetch.

    Prices are ordered oldest first, so the last element is the most recent.
    A new instance is built on every successful fetch; instances are never mutated.
    """

    symbol: Symbol
    prices: tuple[float, ...]
    fetched_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_trades(cls, symbol: Symbol, trades: list[Trade]) -> "PriceSeries":
        """Build a series from trades already sorted oldest first."""
        return cls(symbol=symbol, prices=tuple(t.price for t in trades))

    @property
    def is_empty(self) -> bool:
        return not self.prices

    @property
    def last_price(self) -> float | None:
        """Most recent price, or None for an empty series."""
        return self.prices[-1] if self.prices else None

    def __len__(self) -> int:
        return len(self.prices)


class DisplayMode(Enum):
    """What the terminal is showing."""

    MENU = "MENU"
    CHART = "CHART"


@dataclass(frozen=True)
class SelectionChange:
    """User picked a new symbol to chart."""

    symbol: Symbol


@dataclass(frozen=True)
class ModeChange:
    """User requested a switch of display mode."""

    mode: DisplayMode


@dataclass(frozen=True)
class KeyEvent:
    """
    One key read from the keyboard capability.

    Exactly one of `key` or `error` is set. Keys use normalized names
    such as "1", "q", "backspace", "ctrl+h".
    """

    key: str | None = None
    error: Exception | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class Termination:
    """
    Request to end the process, returned to the supervisor.

    exit_code 0 is a normal quit; anything else is a fatal condition.
    """

    exit_code: int
    reason: str
    error: BaseException | None = None

    @property
    def is_fatal(self) -> bool:
        return self.exit_code != 0

    @property
    def message(self) -> str:
        """Diagnostic line shown to the user on exit."""
        if self.error is not None:
            return f"{self.reason}: {self.error}"
        return self.reason
