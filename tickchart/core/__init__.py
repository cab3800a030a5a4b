"""
Core building blocks for the chart terminal.

Modules:
- models: Symbols, price series, display modes and events
- config: Chart configuration and fixed polling cadence
- channels: Single-slot hand-off between tasks
"""

from tickchart.core.channels import SingleSlotChannel, SlotPolicy
from tickchart.core.config import DEFAULT_CONFIG, ChartConfig
from tickchart.core.models import (
    DisplayMode,
    KeyEvent,
    ModeChange,
    PriceSeries,
    SelectionChange,
    Symbol,
    Termination,
    Trade,
)

__all__ = [
    "ChartConfig",
    "DEFAULT_CONFIG",
    "DisplayMode",
    "KeyEvent",
    "ModeChange",
    "PriceSeries",
    "SelectionChange",
    "SingleSlotChannel",
    "SlotPolicy",
    "Symbol",
    "Termination",
    "Trade",
]
