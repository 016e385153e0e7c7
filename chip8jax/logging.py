"""Console logging utilities for the CHIP-8 emulator.

Provides a small level-filtered console logger used by the drivers and the
machine facade, register dumps for debugging, and tqdm progress bars for long
headless runs.
"""

import sys
import time
from typing import Optional, TextIO

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConsoleLogger:
    """Console logger with level filtering, colors and elapsed-time stamps."""

    def __init__(
        self,
        name: str = "chip8jax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self.stream = stream
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        target = stream or sys.stdout
        self.use_colors = use_colors and hasattr(target, "isatty") and target.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in (*LEVELS, "RESET")}
        )

        self.level_order = {level: order for order, level in enumerate(LEVELS)}

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            level_str = f"{color}{level_str}{self.colors['RESET']}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            print(self._format_message(level.upper(), message), file=self.stream or sys.stdout, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


def format_registers(state) -> list[str]:
    """Render PC, I, timers, stack depth and V0-VF as printable lines."""
    lines = [
        f"PC: 0x{int(state.pc):03X}  I: 0x{int(state.I):03X}  SP: {state.stack.pointer}",
        f"Delay: {int(state.delay_timer)}  Sound: {int(state.sound_timer)}",
    ]
    for row in range(0, 16, 4):
        lines.append(" ".join(f"V{reg:X}:{int(state.V[reg]):02X}" for reg in range(row, row + 4)))
    return lines


def progress_bar(total: int, desc: Optional[str] = None, disable: bool = False, **kwargs) -> tqdm:
    """Build a tqdm progress bar counting emulated frames."""
    if desc is None:
        desc = f"Emulating ({total:,} frames)"
    return tqdm(total=total, desc=desc, unit="frame", disable=disable, **kwargs)
