"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8jax.constants import FONT_START, FONT_GLYPH_SIZE, ADDRESS_MASK, INSTRUCTION_SIZE
from chip8jax.state import EmulatorState, check_memory_access
from chip8jax.decode import DecodedInstruction
from chip8jax.errors import UnknownOpcodeError
from chip8jax.instructions.control_flow import set_pc


def _set_index(state: EmulatorState, address: int) -> EmulatorState:
    return state.replace(I=jnp.asarray(address & ADDRESS_MASK, dtype=jnp.uint16))


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    return _set_index(state, int(state.I) + int(state.V[instruction.x]))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    With no key down the PC is rewound so the same instruction runs again on
    the next cycle. The lowest pressed key wins.
    """
    if not bool(jnp.any(state.keypad)):
        return set_pc(state, int(state.pc) - INSTRUCTION_SIZE)
    pressed_key = jnp.argmax(state.keypad)
    return state.replace(V=state.V.at[instruction.x].set(pressed_key.astype(jnp.uint8)))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    return _set_index(state, FONT_START + digit * FONT_GLYPH_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    address = int(state.I)
    check_memory_access(address, 3, "BCD store")

    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[address:address + 3].set(digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    address = int(state.I)
    check_memory_access(address, count, "Register store")
    state = state.replace(memory=state.memory.at[address:address + count].set(state.V[:count]))

    if state.modern_mode:
        return state
    return _set_index(state, address + count)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    address = int(state.I)
    check_memory_access(address, count, "Register load")
    state = state.replace(V=state.V.at[:count].set(state.memory[address:address + count]))

    if state.modern_mode:
        return state
    return _set_index(state, address + count)


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnknownOpcodeError(instruction.raw)
    return handler(state, instruction)
