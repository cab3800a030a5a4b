"""
Display task - the menu/chart state machine.

The only writer of the terminal surface. Every 100ms it applies at most one
selection and one mode change, then draws whatever the new state calls for.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from tickchart.core.channels import SingleSlotChannel
from tickchart.core.config import DEFAULT_CONFIG, DISPLAY_POLL_INTERVAL_SECONDS, ChartConfig
from tickchart.core.models import DisplayMode, ModeChange, PriceSeries, SelectionChange, Symbol
from tickchart.ui.components.charts_panel import render_chart_frame, render_menu

logger = logging.getLogger(__name__)


class RenderSink(Protocol):
    def draw(self, lines: list[str]) -> None:
        """Clear the surface and draw `lines`."""
        ...


class DisplayTask:
    """
    Owns the current DisplayMode and decides what to draw.

    States:
    - MENU: static symbol list, drawn once on entry
    - CHART: latest series for the selected symbol, redrawn when a new one arrives

    A repeated ModeChange for the current mode does nothing. Series that are
    empty or belong to a previously selected symbol are never drawn.
    """

    def __init__(
        self,
        sink: RenderSink,
        symbols: list[Symbol] | tuple[Symbol, ...],
        selections: SingleSlotChannel[SelectionChange],
        modes: SingleSlotChannel[ModeChange],
        data: SingleSlotChannel[PriceSeries],
        config: ChartConfig = DEFAULT_CONFIG,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.sink = sink
        self.symbols = tuple(symbols)
        self.selections = selections
        self.modes = modes
        self.data = data
        self.config = config
        self.clock = clock

        self._mode: DisplayMode | None = None
        self.selected: Symbol | None = None
        self.last_rendered: PriceSeries | None = None
        self.render_count = 0

    @property
    def mode(self) -> DisplayMode | None:
        """Current mode; None until the initial ModeChange is applied."""
        return self._mode

    def tick(self) -> None:
        """Run one step of the state machine."""
        selection = self.selections.try_receive()
        if selection is not None:
            self.selected = selection.symbol

        change = self.modes.try_receive()
        if change is not None:
            self._apply_mode(change.mode)
        elif self._mode is DisplayMode.CHART:
            self._draw_latest_series()

    def _apply_mode(self, mode: DisplayMode) -> None:
        if mode is self._mode:
            return

        logger.debug(f"Display mode: {self._mode.value if self._mode else None} → {mode.value}")
        self._mode = mode
        if mode is DisplayMode.MENU:
            self._draw(render_menu(self.symbols))
        else:
            self._draw_latest_series()

    def _draw_latest_series(self) -> None:
        series = self.data.try_receive()
        if series is None:
            return

        if series.is_empty:
            logger.debug(f"Skipped empty series for {series.symbol}")
            return

        if self.selected is not None and series.symbol != self.selected:
            logger.debug(f"Dropped stale series for {series.symbol} (selected {self.selected})")
            return

        lines = render_chart_frame(
            series,
            now=self.clock(),
            width=self.config.chart_width,
            height=self.config.chart_height,
        )
        self._draw(lines)
        self.last_rendered = series

    def _draw(self, lines: list[str]) -> None:
        self.sink.draw(lines)
        self.render_count += 1

    async def run(self) -> None:
        """Tick forever at the fixed display cadence."""
        logger.info("Display started")
        while True:
            self.tick()
            await asyncio.sleep(DISPLAY_POLL_INTERVAL_SECONDS)
