"""
Command-line interface for the chart dashboard.

Checks that a terminal is available, launches the dashboard and turns
its outcome into the process exit code.
"""

import argparse
import logging
import sys

from tickchart import __version__

logger = logging.getLogger("cli")


class StartupError(Exception):
    """The keyboard or output surface cannot be acquired."""


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tickchart",
        description="Live EXMO price chart. Keys: 1-3 select a pair, backspace for menu, q to quit.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def check_terminal() -> None:
    """Fail fast when stdin or stdout is not an interactive terminal."""
    if not sys.stdin.isatty():
        raise StartupError("keyboard unavailable: stdin is not a terminal")
    if not sys.stdout.isatty():
        raise StartupError("output unavailable: stdout is not a terminal")


def run_cli(argv: list[str] | None = None) -> int:
    """
    Parse arguments and run the dashboard.

    Returns:
        Process exit code: 0 after 'q', 1 on any fatal condition
    """
    from tickchart.ui.dashboard import ChartDashboard, configure_logging

    create_parser().parse_args(argv)
    configure_logging()

    try:
        check_terminal()
    except StartupError as e:
        logger.error(f"Startup failed: {e}")
        print(f"\n❌ {e}", file=sys.stderr)
        return 1

    app = ChartDashboard()
    try:
        app.run()
    except Exception as e:
        logger.exception("Dashboard failed")
        print(f"\n❌ Dashboard failed: {e}", file=sys.stderr)
        return 1

    if app.termination is None:
        # Closed by the terminal host itself (e.g. ctrl+q) rather than the tasks
        return app.return_code or 0
    return app.termination.exit_code


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
