#!/usr/bin/env python3
"""
Tests for the keyboard capture, the Textual dashboard and the CLI.

Run with:
    python -m pytest tests/test_dashboard.py -v
"""

import asyncio
import io
import sys
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from tickchart.core.models import PriceSeries, Symbol
from tickchart.ui import cli
from tickchart.ui.components import ChartView
from tickchart.ui.dashboard import ChartDashboard
from tickchart.ui.keyboard import KeyboardCapture, KeyReadError


class StubSource:
    """Instant price source for dashboard tests."""

    def __init__(self):
        self.calls: list[Symbol] = []
        self.closed = False

    async def fetch(self, symbol: Symbol) -> PriceSeries:
        self.calls.append(symbol)
        return PriceSeries(symbol=symbol, prices=(10.0, 12.5))

    async def close(self) -> None:
        self.closed = True


class TerminalStream(io.StringIO):
    """In-memory stream that claims to be a terminal."""

    def isatty(self) -> bool:
        return True


class TestKeyboardCapture:
    """Tests for the key buffer."""

    @pytest.mark.asyncio
    async def test_push_then_read(self):
        """Test keys come out in order."""
        capture = KeyboardCapture()
        capture.push("1")
        capture.push("q")
        assert (await capture.read()).key == "1"
        assert (await capture.read()).key == "q"

    @pytest.mark.asyncio
    async def test_full_buffer_drops(self):
        """Test keys beyond the buffer size are dropped."""
        capture = KeyboardCapture(maxsize=2)
        for key in ("1", "2", "3"):
            capture.push(key)
        assert capture.dropped_count == 1

    @pytest.mark.asyncio
    async def test_close_wakes_reader_with_error(self):
        """Test a blocked reader receives an error event on release."""
        capture = KeyboardCapture()
        reader = asyncio.create_task(capture.read())
        await asyncio.sleep(0.01)
        capture.close()

        event = await asyncio.wait_for(reader, timeout=0.1)
        assert event.is_error
        assert isinstance(event.error, KeyReadError)

    @pytest.mark.asyncio
    async def test_read_after_close(self):
        """Test every read after release is an error and pushes are ignored."""
        capture = KeyboardCapture()
        capture.push("1")
        capture.close()
        capture.push("2")

        assert capture.closed
        assert (await capture.read()).is_error
        assert (await capture.read()).is_error

    @pytest.mark.asyncio
    async def test_fail_reports_given_error(self):
        """Test fail() passes its error to the reader."""
        capture = KeyboardCapture()
        error = OSError("input/output error")
        capture.fail(error)
        assert (await capture.read()).error is error


class TestChartDashboard:
    """Tests for the Textual host, driven through the pilot."""

    @pytest.mark.asyncio
    async def test_menu_chart_quit(self):
        """Test the menu shows first, '1' charts BTC, 'q' exits with code 0."""
        source = StubSource()
        app = ChartDashboard(source=source)

        async with app.run_test() as pilot:
            await pilot.pause(0.3)
            view = app.query_one("#chart-view", ChartView)
            assert view.last_frame[0] == "1. BTC_USD"

            await pilot.press("1")
            await pilot.pause(1.5)
            assert view.last_frame[0] == "BTC_USD: 12.50"

            await pilot.press("backspace")
            await pilot.pause(0.3)
            assert view.last_frame[0] == "1. BTC_USD"

            await pilot.press("q")
            await pilot.pause(0.3)

        assert app.termination is not None
        assert app.termination.exit_code == 0
        assert app.return_code == 0
        assert source.calls[0] == Symbol("BTC_USD")
        assert source.closed


class TestCli:
    """Tests for startup checks."""

    def test_no_terminal_is_startup_failure(self, monkeypatch, tmp_path):
        """Test running without a TTY exits with code 1 before the app starts."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(sys, "stdin", io.StringIO())

        started = []
        monkeypatch.setattr(ChartDashboard, "run", lambda self: started.append(self))

        assert cli.run_cli([]) == 1
        assert started == []

    def test_check_terminal_raises(self, monkeypatch):
        """Test check_terminal names the missing capability."""
        monkeypatch.setattr(sys, "stdin", TerminalStream())
        monkeypatch.setattr(sys, "stdout", io.StringIO())
        with pytest.raises(cli.StartupError, match="output"):
            cli.check_terminal()

    def test_version_flag(self, capsys):
        """Test --version prints and exits."""
        with pytest.raises(SystemExit) as exc_info:
            cli.create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "tickchart" in capsys.readouterr().out
