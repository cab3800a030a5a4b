"""
Concurrent tasks of the chart terminal.

- InputTask: keys → selection and mode events
- DataAcquisitionTask: selection → fetched price series
- DisplayTask: mode and series → terminal frames
- supervise(): runs all three and returns how the process should end
"""

from tickchart.tasks.acquisition import DataAcquisitionTask
from tickchart.tasks.display import DisplayTask, RenderSink
from tickchart.tasks.input import BACKSPACE_KEYS, QUIT_KEY, InputTask, KeySource
from tickchart.tasks.supervisor import supervise

__all__ = [
    "BACKSPACE_KEYS",
    "DataAcquisitionTask",
    "DisplayTask",
    "InputTask",
    "KeySource",
    "QUIT_KEY",
    "RenderSink",
    "supervise",
]
