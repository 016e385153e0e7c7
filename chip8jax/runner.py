"""Headless driver: runs a machine at fixed cadences without a window."""

from typing import List, Optional

import numpy as np

from chip8jax.logging import ConsoleLogger, progress_bar
from chip8jax.machine import Machine


def run_frame(machine: Machine, instructions_per_frame: int) -> bool:
    """Run one 60 Hz frame: the instruction batch, then one timer tick.

    Returns whether the tone event fired on this frame's timer tick.
    """
    for _ in range(instructions_per_frame):
        machine.step()
    return machine.tick_timers()


def run_headless(
    machine: Machine,
    frames: int,
    instructions_per_frame: int = 10,
    logger: Optional[ConsoleLogger] = None,
    show_progress: bool = False,
) -> List[np.ndarray]:
    """Run ``frames`` frames and capture the framebuffer after each one.

    Machine faults propagate to the caller; frames captured so far are lost
    with the exception.
    """
    captured = []
    tones = 0
    with progress_bar(frames, disable=not show_progress) as bar:
        for _ in range(frames):
            tones += run_frame(machine, instructions_per_frame)
            captured.append(np.asarray(machine.framebuffer))
            bar.update(1)

    if logger is not None:
        logger.info(
            f"Ran {frames} frames ({frames * instructions_per_frame} instructions), "
            f"PC=0x{machine.program_counter:03X}, {tones} tone event(s)"
        )
    return captured
