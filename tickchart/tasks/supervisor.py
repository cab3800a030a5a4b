"""
Task supervisor.

Starts the display, acquisition and input tasks in order, waits for the
first one to finish and turns that into a single Termination. Only the
supervisor's caller ends the process.
"""

import asyncio
import logging

from tickchart.core.channels import SingleSlotChannel
from tickchart.core.models import DisplayMode, ModeChange, Termination
from tickchart.tasks.acquisition import DataAcquisitionTask
from tickchart.tasks.display import DisplayTask
from tickchart.tasks.input import InputTask

logger = logging.getLogger(__name__)


async def supervise(
    input_task: InputTask,
    acquisition_task: DataAcquisitionTask,
    display_task: DisplayTask,
    modes: SingleSlotChannel[ModeChange],
) -> Termination:
    """
    Run all three tasks until the process should end.

    The menu is requested before the input task starts reading keys, so the
    first display tick always lands in MENU.

    Returns:
        The input task's Termination, or a fatal Termination if a background
        task stopped on its own
    """
    await modes.send(ModeChange(DisplayMode.MENU))

    display = asyncio.create_task(display_task.run(), name="display")
    acquisition = asyncio.create_task(acquisition_task.run(), name="acquisition")
    keys = asyncio.create_task(input_task.run(), name="input")
    tasks = [display, acquisition, keys]

    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)

        if keys in done and keys.exception() is None:
            termination = keys.result()
        else:
            failed = keys if keys in done else next(iter(done))
            error = failed.exception()
            logger.critical(f"{failed.get_name()} task stopped: {error!r}")
            termination = Termination(
                exit_code=1, reason=f"{failed.get_name()} task failed", error=error
            )
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    logger.info(f"Terminating: {termination.message} (exit code {termination.exit_code})")
    return termination
