"""
Single-slot channels between tasks.

Each channel holds at most one pending value. The send policy is chosen
per channel:

- OVERWRITE: a new value replaces an unconsumed one, send never waits.
  Used for selection and mode events, where only the latest matters.
- BLOCK: send waits until the consumer drains the slot.
  Used for price series, giving backpressure on the fetch path.
"""

import asyncio
import logging
from enum import Enum
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SlotPolicy(Enum):
    """What send() does when the slot is already occupied."""

    OVERWRITE = "OVERWRITE"
    BLOCK = "BLOCK"


class SingleSlotChannel(Generic[T]):
    """
    Hand-off holding at most one pending value.

    Usage:
        modes: SingleSlotChannel[ModeChange] = SingleSlotChannel("mode", SlotPolicy.OVERWRITE)
        await modes.send(ModeChange(DisplayMode.MENU))
        change = modes.try_receive()  # None if nothing pending
    """

    def __init__(self, name: str, policy: SlotPolicy):
        self.name = name
        self.policy = policy
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=1)
        self.dropped_count = 0

    @property
    def pending(self) -> bool:
        """True if a value is waiting to be received."""
        return not self._queue.empty()

    async def send(self, value: T) -> None:
        """
        Hand a value to the consumer.

        OVERWRITE discards an unconsumed value first. BLOCK waits for the slot.
        """
        if self.policy is SlotPolicy.BLOCK:
            await self._queue.put(value)
            return

        if self._queue.full():
            try:
                stale = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
            else:
                self.dropped_count += 1
                logger.debug(f"[{self.name}] overwrote unconsumed {stale!r}")
        self._queue.put_nowait(value)

    def try_receive(self) -> T | None:
        """Take the pending value without waiting, or None if the slot is empty."""
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    async def receive(self) -> T:
        """Wait for and take the next value."""
        return await self._queue.get()

    def __repr__(self) -> str:
        return f"SingleSlotChannel({self.name!r}, {self.policy.value}, pending={self.pending})"
