#!/usr/bin/env python3
"""
Unit tests for single-slot channels.

Run with:
    python -m pytest tests/test_channels.py -v
"""

import asyncio
import sys
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from tickchart.core.channels import SingleSlotChannel, SlotPolicy


class TestOverwritePolicy:
    """Tests for latest-value-wins channels."""

    @pytest.mark.asyncio
    async def test_empty_receive(self):
        """Test try_receive on an empty channel."""
        channel: SingleSlotChannel[int] = SingleSlotChannel("test", SlotPolicy.OVERWRITE)
        assert channel.try_receive() is None
        assert not channel.pending

    @pytest.mark.asyncio
    async def test_latest_value_wins(self):
        """Test unconsumed values are replaced, never queued."""
        channel: SingleSlotChannel[int] = SingleSlotChannel("test", SlotPolicy.OVERWRITE)
        await channel.send(1)
        await channel.send(2)
        await channel.send(3)

        assert channel.pending
        assert channel.try_receive() == 3
        assert channel.try_receive() is None
        assert channel.dropped_count == 2

    @pytest.mark.asyncio
    async def test_send_never_waits(self):
        """Test send completes immediately even with a full slot."""
        channel: SingleSlotChannel[int] = SingleSlotChannel("test", SlotPolicy.OVERWRITE)
        await channel.send(1)
        await asyncio.wait_for(channel.send(2), timeout=0.1)
        assert channel.try_receive() == 2


class TestBlockPolicy:
    """Tests for backpressure channels."""

    @pytest.mark.asyncio
    async def test_send_waits_for_consumer(self):
        """Test a second send blocks until the first value is drained."""
        channel: SingleSlotChannel[str] = SingleSlotChannel("data", SlotPolicy.BLOCK)
        await channel.send("first")

        second = asyncio.create_task(channel.send("second"))
        await asyncio.sleep(0.01)
        assert not second.done()

        assert channel.try_receive() == "first"
        await asyncio.wait_for(second, timeout=0.1)
        assert channel.try_receive() == "second"
        assert channel.dropped_count == 0

    @pytest.mark.asyncio
    async def test_receive_waits_for_value(self):
        """Test receive() resumes when a value arrives."""
        channel: SingleSlotChannel[str] = SingleSlotChannel("data", SlotPolicy.BLOCK)
        waiter = asyncio.create_task(channel.receive())
        await asyncio.sleep(0.01)
        assert not waiter.done()

        await channel.send("value")
        assert await asyncio.wait_for(waiter, timeout=0.1) == "value"
