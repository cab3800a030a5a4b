"""
Keyboard input task.

Polls the keyboard capability every 100ms and turns keys into
selection and mode events. Quitting and fatal read errors are returned
to the supervisor as a Termination, never acted on here.
"""

import asyncio
import logging
from typing import Protocol

from tickchart.core.channels import SingleSlotChannel
from tickchart.core.config import KEY_POLL_INTERVAL_SECONDS
from tickchart.core.models import (
    DisplayMode,
    KeyEvent,
    ModeChange,
    SelectionChange,
    Symbol,
    Termination,
)

logger = logging.getLogger(__name__)

QUIT_KEY = "q"

# Terminals send either DEL (0x7f) or BS (0x08) for backspace
BACKSPACE_KEYS = frozenset({"backspace", "ctrl+h"})


class KeySource(Protocol):
    async def read(self) -> KeyEvent: ...


class InputTask:
    """
    Maps key presses to events.

    Keys "1".."N" select the N-th symbol and switch to the chart,
    backspace returns to the menu, "q" quits.
    """

    def __init__(
        self,
        keys: KeySource,
        symbols: list[Symbol] | tuple[Symbol, ...],
        acquisition_selections: SingleSlotChannel[SelectionChange],
        display_selections: SingleSlotChannel[SelectionChange],
        modes: SingleSlotChannel[ModeChange],
    ):
        self.keys = keys
        self.acquisition_selections = acquisition_selections
        self.display_selections = display_selections
        self.modes = modes
        self.symbol_keys: dict[str, Symbol] = {
            str(i): symbol for i, symbol in enumerate(symbols, start=1)
        }

    async def handle(self, event: KeyEvent) -> Termination | None:
        """
        Apply one key event.

        Returns:
            Termination if the process should end, otherwise None
        """
        if event.is_error:
            logger.error(f"Keyboard read failed: {event.error}")
            return Termination(exit_code=1, reason="keyboard read failed", error=event.error)

        key = event.key
        if key == QUIT_KEY:
            logger.info("Quit requested")
            return Termination(exit_code=0, reason="quit")

        if key in self.symbol_keys:
            change = SelectionChange(self.symbol_keys[key])
            await self.acquisition_selections.send(change)
            await self.display_selections.send(change)
            await self.modes.send(ModeChange(DisplayMode.CHART))
        elif key in BACKSPACE_KEYS:
            await self.modes.send(ModeChange(DisplayMode.MENU))
        else:
            logger.debug(f"Ignored key: {key!r}")

        return None

    async def run(self) -> Termination:
        """Read and apply keys until one ends the process."""
        logger.info("Input handler started")
        while True:
            event = await self.keys.read()
            termination = await self.handle(event)
            if termination is not None:
                return termination
            await asyncio.sleep(KEY_POLL_INTERVAL_SECONDS)
