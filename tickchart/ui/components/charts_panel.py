"""
Charts Panel - Price chart and menu frames for the terminal.

Uses Unicode block characters for reliable terminal rendering.
Frames are plain lists of lines; ChartView redraws them as a whole.
"""

from datetime import datetime

from rich.text import Text
from textual.widgets import Static

from tickchart.core.config import DEFAULT_CONFIG
from tickchart.core.models import PriceSeries, Symbol

# Unicode block characters for vertical bar chart (8 levels)
BLOCKS = " ▁▂▃▄▅▆▇█"

MENU_HINT = "Press 1-{count} to change symbol, press q to exit"


def _fit_to_width(prices: list[float], width: int) -> list[float]:
    """Downsample evenly so the whole series fits in `width` columns, keeping both ends."""
    n = len(prices)
    if n <= width:
        return prices
    if width <= 1:
        return prices[-1:]
    return [prices[round(i * (n - 1) / (width - 1))] for i in range(width)]


def _cell(level: float, floor: float, ceiling: float) -> str:
    """Block for one column in the band [floor, ceiling); a zero-height band is all or nothing."""
    if level >= ceiling:
        return BLOCKS[-1]
    if level < floor:
        return BLOCKS[0]
    eighths = int((level - floor) / (ceiling - floor) * 8)
    return BLOCKS[min(eighths + 1, 8)]


def _band(row: int, height: int) -> tuple[float, float]:
    """Normalized [floor, ceiling) covered by `row`, counted from the bottom."""
    if height <= 1:
        return 0.0, 0.0
    floor = row / (height - 1)
    if row == height - 1:
        return floor, floor
    return floor, (row + 1) / (height - 1)


def build_chart(
    prices: list[float] | tuple[float, ...],
    width: int = DEFAULT_CONFIG.chart_width,
    height: int = DEFAULT_CONFIG.chart_height,
) -> list[str]:
    """
    Build the Unicode block chart for a price series.

    Args:
        prices: Prices oldest first
        width: Maximum columns used by the bars
        height: Rows in the chart

    Returns:
        `height` lines, top row first, with max/min price labels
    """
    points = _fit_to_width(list(prices), width)

    if not points:
        return ["No data"]

    min_price = min(points)
    max_price = max(points)
    price_range = max_price - min_price

    if price_range == 0:
        # Flat line - show middle
        normalized = [0.5] * len(points)
    else:
        normalized = [(p - min_price) / price_range for p in points]

    labels = {0: f" {min_price:,.2f}", height - 1: f" {max_price:,.2f}"}
    lines = []
    for row in reversed(range(height)):
        floor, ceiling = _band(row, height)
        bars = "".join(_cell(level, floor, ceiling) for level in normalized)
        lines.append(bars + labels.get(row, ""))

    return lines


def render_chart_frame(
    series: PriceSeries,
    now: datetime | None = None,
    width: int = DEFAULT_CONFIG.chart_width,
    height: int = DEFAULT_CONFIG.chart_height,
) -> list[str]:
    """
    Lines for a chart frame: last price header, chart, date and time.

    The header is "{SYMBOL}: {last_price:.2f}".
    """
    if series.is_empty:
        raise ValueError(f"cannot render empty series for {series.symbol}")

    now = now or datetime.now()
    header = f"{series.symbol}: {series.last_price:.2f}"
    return [
        header,
        *build_chart(series.prices, width, height),
        f"Current date: {now:%Y-%m-%d}",
        f"Current time: {now:%H:%M:%S}",
    ]


def render_menu(symbols: list[Symbol] | tuple[Symbol, ...]) -> list[str]:
    """Lines for the static symbol menu."""
    lines = [f"{i}. {symbol}" for i, symbol in enumerate(symbols, start=1)]
    lines.append("")
    lines.append(MENU_HINT.format(count=len(symbols)))
    return lines


class ChartView(Static):
    """
    Full-screen text surface the display task draws into.

    Every draw replaces the whole content (clear and redraw).
    """

    DEFAULT_CSS = """
    ChartView {
        height: 1fr;
        background: #0a0a0a;
        padding: 1 2;
    }
    """

    def __init__(self, **kwargs):
        super().__init__("", **kwargs)
        self.draw_count = 0
        self.last_frame: list[str] = []

    def draw(self, lines: list[str]) -> None:
        """Clear the surface and draw `lines`."""
        self.last_frame = list(lines)
        self.draw_count += 1
        # Text, not markup: chart lines may contain '[' characters
        self.update(Text("\n".join(lines)))
