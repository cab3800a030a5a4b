"""
Chart configuration and timing constants.

Centralizes the API endpoint, menu symbols and chart dimensions.
Polling intervals are fixed module constants, not configuration.
"""

from dataclasses import dataclass, field

# =========================================================
# Fixed Polling Cadence
# =========================================================

# Seconds between price fetches
FETCH_INTERVAL_SECONDS = 1.0

# Seconds between keyboard polls
KEY_POLL_INTERVAL_SECONDS = 0.1

# Seconds between display state machine ticks
DISPLAY_POLL_INTERVAL_SECONDS = 0.1


@dataclass
class ChartConfig:
    """Configuration for the market data source and chart display.

    The menu lists `symbols` in order; key '1' selects the first entry,
    '2' the second, and so on.
    """

    # =========================================================
    # Market Data Source
    # =========================================================

    # EXMO public API root (no auth required)
    api_url: str = "https://api.exmo.com/v1.1"

    # Timeout for a single /trades request
    request_timeout_seconds: float = 10.0

    # =========================================================
    # Menu
    # =========================================================

    # Selectable trading pairs, bound to keys 1..N
    symbols: tuple[str, ...] = field(default_factory=lambda: ("BTC_USD", "LTC_USD", "ETH_USD"))

    # =========================================================
    # Chart Display
    # =========================================================

    # Chart dimensions in terminal cells
    chart_width: int = 100
    chart_height: int = 10

    # =========================================================
    # Logging
    # =========================================================

    # File-only logging so output never interferes with the TUI
    log_file: str = "tickchart.log"


# Default configuration instance
DEFAULT_CONFIG = ChartConfig()
