"""
Terminal UI for the price chart.

Textual app hosting the keyboard capture and the chart surface,
plus the command-line entry point.
"""
