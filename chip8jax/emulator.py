"""Main CHIP-8 emulator execution engine."""

from typing import Union

import jax.numpy as jnp
from chip8jax.state import EmulatorState, check_memory_access
from chip8jax.decode import decode
from chip8jax.constants import PROGRAM_START, MAX_PROGRAM_SIZE, ADDRESS_MASK, INSTRUCTION_SIZE
from chip8jax.errors import MachineFault, ProgramTooLargeError
from chip8jax.instructions.system import execute_system_instruction
from chip8jax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8jax.instructions.alu import execute_alu_operation
from chip8jax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8jax.instructions.display import execute_display
from chip8jax.instructions.misc import execute_misc_instruction

# Indexed by the leading nibble; the grouped families select on their low bits
INSTRUCTION_TABLE = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return INSTRUCTION_TABLE[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    check_memory_access(pc, INSTRUCTION_SIZE, "Instruction fetch")
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    next_pc = jnp.asarray((pc + INSTRUCTION_SIZE) & ADDRESS_MASK, dtype=jnp.uint16)
    return state.replace(pc=next_pc), instruction


def step(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Run one fetch-decode-execute cycle.

    Faults raised while executing are tagged with the instruction and the
    address it was fetched from.
    """
    address = int(state.pc)
    try:
        state, instruction = fetch(state)
    except MachineFault as fault:
        fault.annotate(None, address)
        raise
    try:
        return execute(state, instruction), instruction
    except MachineFault as fault:
        fault.annotate(instruction, address)
        raise


def tick_timers(state: EmulatorState) -> tuple[EmulatorState, bool]:
    """Decrement delay and sound timers by one, stopping at zero.

    Returns the new state and whether a tone event fired, which happens on
    the tick where the sound timer goes from 1 to 0.
    """
    delay_timer = int(state.delay_timer)
    sound_timer = int(state.sound_timer)
    tone = sound_timer == 1
    return state.replace(
        delay_timer=jnp.asarray(max(delay_timer - 1, 0), dtype=jnp.uint8),
        sound_timer=jnp.asarray(max(sound_timer - 1, 0), dtype=jnp.uint8),
    ), tone


def load_program(state: EmulatorState, program: Union[bytes, bytearray]) -> EmulatorState:
    """Copy program bytes into CHIP-8 memory starting at 0x200."""
    if len(program) > MAX_PROGRAM_SIZE:
        raise ProgramTooLargeError(
            f"Program is {len(program)} bytes, at most {MAX_PROGRAM_SIZE} fit in memory"
        )
    if not program:
        return state
    rom_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)
