"""
UI components for the chart dashboard.

Frame builders and the Textual widget they are drawn into.
"""

from tickchart.ui.components.charts_panel import (
    ChartView,
    build_chart,
    render_chart_frame,
    render_menu,
)

__all__ = [
    "ChartView",
    "build_chart",
    "render_chart_frame",
    "render_menu",
]
