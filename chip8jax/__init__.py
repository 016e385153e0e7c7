"""CHIP-8 emulator package."""

from chip8jax.state import EmulatorState, StackState, create_state
from chip8jax.emulator import execute, fetch, step, tick_timers, load_program, load_rom
from chip8jax.decode import DecodedInstruction, decode
from chip8jax.machine import Machine
from chip8jax.errors import (
    MachineFault, StackOverflowError, StackUnderflowError, UnknownOpcodeError,
    MemoryAccessError, ProgramTooLargeError
)
from chip8jax.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "Machine",
    "MachineFault",
    "StackOverflowError",
    "StackUnderflowError",
    "UnknownOpcodeError",
    "MemoryAccessError",
    "ProgramTooLargeError",
    "PROGRAM_START",
    "FONT_START",
    "FONT_DATA",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
