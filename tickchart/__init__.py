"""
tickchart - live price charts for EXMO trading pairs in the terminal.
"""

__version__ = "0.1.0"
