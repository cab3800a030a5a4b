"""
Data acquisition task.

Once per second: pick up the latest symbol selection, fetch its prices,
and hand the new series to the display task. Fetch failures are logged
and skipped; the next tick simply tries again.
"""

import asyncio
import logging
from typing import Protocol

from tickchart.core.channels import SingleSlotChannel
from tickchart.core.config import FETCH_INTERVAL_SECONDS
from tickchart.core.models import PriceSeries, SelectionChange, Symbol
from tickchart.exmo.public_data import PriceSourceError

logger = logging.getLogger(__name__)


class SeriesFetcher(Protocol):
    async def fetch(self, symbol: Symbol) -> PriceSeries: ...


class DataAcquisitionTask:
    """
    Serialized fetch loop feeding the display.

    At most one fetch is in flight; a selection that arrives during a fetch
    is applied on the following tick.
    """

    def __init__(
        self,
        source: SeriesFetcher,
        selections: SingleSlotChannel[SelectionChange],
        data: SingleSlotChannel[PriceSeries],
    ):
        self.source = source
        self.selections = selections
        self.data = data

        self.last_selected: Symbol | None = None

        # Diagnostics
        self.fetch_count = 0
        self.error_count = 0
        self.published_count = 0

    async def tick(self) -> PriceSeries | None:
        """
        Run one acquisition step.

        Returns:
            The published series, or None if nothing was published this tick
        """
        change = self.selections.try_receive()
        if change is not None:
            if change.symbol != self.last_selected:
                logger.info(f"Selected symbol: {change.symbol}")
            self.last_selected = change.symbol

        if self.last_selected is None:
            return None

        symbol = self.last_selected
        self.fetch_count += 1
        try:
            series = await self.source.fetch(symbol)
        except PriceSourceError as e:
            self.error_count += 1
            logger.warning(f"Error fetching data: {e}")
            return None

        # Blocks while the display still holds the previous series
        await self.data.send(series)
        self.published_count += 1
        logger.debug(f"Published {len(series)} prices for {symbol}")
        return series

    async def run(self) -> None:
        """Tick forever at the fixed fetch cadence."""
        loop = asyncio.get_running_loop()
        logger.info("Data acquisition started")
        while True:
            started = loop.time()
            await self.tick()
            elapsed = loop.time() - started
            await asyncio.sleep(max(0.0, FETCH_INTERVAL_SECONDS - elapsed))
