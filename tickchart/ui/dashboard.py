#!/usr/bin/env python3
"""
Terminal Chart Dashboard for EXMO trading pairs.

A dark-themed, single-surface UI showing either:
- A menu of selectable trading pairs
- A live price chart of the selected pair, refreshed every second

Keys:
    1-3        chart a pair
    backspace  back to the menu
    q          quit

Run with:
    python -m tickchart
"""

import logging

from textual import events, work
from textual.app import App, ComposeResult

from tickchart.core.channels import SingleSlotChannel, SlotPolicy
from tickchart.core.config import DEFAULT_CONFIG, ChartConfig
from tickchart.core.models import ModeChange, PriceSeries, SelectionChange, Symbol, Termination
from tickchart.exmo.public_data import PriceSource
from tickchart.tasks import DataAcquisitionTask, DisplayTask, InputTask, supervise
from tickchart.ui.components import ChartView
from tickchart.ui.keyboard import KeyboardCapture

logger = logging.getLogger("dashboard")


def configure_logging(log_file: str = DEFAULT_CONFIG.log_file) -> None:
    """Configure logging - file only to avoid interfering with TUI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file),
        ],
    )


# ============================================================
# Main Dashboard App
# ============================================================
class ChartDashboard(App):
    """Terminal price chart with a symbol menu."""

    TITLE = "TICKCHART"
    CSS = """
    Screen {
        background: #0a0a0a;
    }
    """

    def __init__(
        self,
        config: ChartConfig = DEFAULT_CONFIG,
        source: PriceSource | None = None,
    ):
        super().__init__()
        self.config = config
        self.symbols = tuple(Symbol(code) for code in config.symbols)
        self.source = source or PriceSource(
            base_url=config.api_url,
            timeout=config.request_timeout_seconds,
        )
        self.keyboard = KeyboardCapture()
        self.termination: Termination | None = None

    def compose(self) -> ComposeResult:
        yield ChartView(id="chart-view")

    def on_mount(self) -> None:
        """Start the tasks once the chart surface exists."""
        logger.info(f"Dashboard started: {', '.join(str(s) for s in self.symbols)}")
        self.run_tasks()

    @work(exclusive=True)
    async def run_tasks(self) -> None:
        """Wire the channels, run the tasks and exit with their verdict."""
        view = self.query_one("#chart-view", ChartView)

        acquisition_selections: SingleSlotChannel[SelectionChange] = SingleSlotChannel(
            "acquisition-selection", SlotPolicy.OVERWRITE
        )
        display_selections: SingleSlotChannel[SelectionChange] = SingleSlotChannel(
            "display-selection", SlotPolicy.OVERWRITE
        )
        modes: SingleSlotChannel[ModeChange] = SingleSlotChannel("mode", SlotPolicy.OVERWRITE)
        data: SingleSlotChannel[PriceSeries] = SingleSlotChannel("data", SlotPolicy.BLOCK)

        try:
            termination = await supervise(
                input_task=InputTask(
                    self.keyboard,
                    self.symbols,
                    acquisition_selections,
                    display_selections,
                    modes,
                ),
                acquisition_task=DataAcquisitionTask(self.source, acquisition_selections, data),
                display_task=DisplayTask(
                    view, self.symbols, display_selections, modes, data, self.config
                ),
                modes=modes,
            )
        finally:
            # Release on every exit path, including cancellation by the host
            self.keyboard.close()
            await self.source.close()
            logger.info("Dashboard tasks stopped")
        self.finish(termination)

    def finish(self, termination: Termination) -> None:
        """The single place the app ends."""
        self.termination = termination
        message = termination.message if termination.is_fatal else None
        self.exit(result=termination, return_code=termination.exit_code, message=message)

    def on_key(self, event: events.Key) -> None:
        """Forward every key to the input task."""
        event.stop()
        self.keyboard.push(event.key)

