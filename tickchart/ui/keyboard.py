"""
Keyboard capture.

Buffers key presses delivered by the terminal app until the input task
reads them. Reading after the capture has been released yields an error
event, which the input task treats as fatal.

Textual's driver owns the raw terminal reads and handles their failures
itself, so the app never calls fail() directly. Inside the app the error
path is reached through close(), which runs after the tasks have stopped.
fail() is the hook for any host that reads keys itself: whatever it
passes in ends the input task with exit code 1.
"""

import asyncio
import logging

from tickchart.core.models import KeyEvent

logger = logging.getLogger(__name__)

# Keys buffered while the input task is between polls
KEY_BUFFER_SIZE = 16


class KeyReadError(Exception):
    """The keyboard can no longer be read."""


class KeyboardCapture:
    """
    Bounded buffer of key events between the terminal and the input task.

    Usage:
        capture = KeyboardCapture()
        capture.push("1")           # from the app's key handler
        event = await capture.read()
        capture.close()             # on shutdown; pending readers get an error event
    """

    def __init__(self, maxsize: int = KEY_BUFFER_SIZE):
        self._queue: asyncio.Queue[KeyEvent] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self.dropped_count = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, key: str) -> None:
        """Buffer a key press; drops it if the buffer is full or the capture is closed."""
        if self._closed:
            return
        try:
            self._queue.put_nowait(KeyEvent(key=key))
        except asyncio.QueueFull:
            self.dropped_count += 1
            logger.debug(f"Key buffer full, dropped {key!r}")

    def fail(self, error: Exception) -> None:
        """Report a read failure to the reader and stop accepting keys."""
        if self._closed:
            return
        self._closed = True
        # The error must reach the reader even if the buffer is full
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(KeyEvent(error=error))

    def close(self) -> None:
        """Release the capture."""
        self.fail(KeyReadError("keyboard capture released"))

    async def read(self) -> KeyEvent:
        """Wait for the next key event."""
        if self._closed and self._queue.empty():
            return KeyEvent(error=KeyReadError("keyboard capture released"))
        return await self._queue.get()
