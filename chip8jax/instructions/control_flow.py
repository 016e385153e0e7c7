"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chip8jax.constants import ADDRESS_MASK, NUM_KEYS, INSTRUCTION_SIZE
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction
from chip8jax.errors import UnknownOpcodeError
from chip8jax.stack import push


def set_pc(state: EmulatorState, address: int) -> EmulatorState:
    """Set PC, wrapping to 16 bits."""
    return state.replace(pc=jnp.asarray(address & ADDRESS_MASK, dtype=jnp.uint16))


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return set_pc(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def skip_next(state: EmulatorState) -> EmulatorState:
    """Advance PC past the next instruction."""
    return set_pc(state, int(state.pc) + INSTRUCTION_SIZE)


def make_skip_instruction(condition_fn, register_form: bool = False):
    """Factory for skip instructions.

    Register-register forms (5XY0, 9XY0) only exist with a zero low nibble.
    """
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if register_form and instruction.n != 0:
            raise UnknownOpcodeError(instruction.raw)
        if condition_fn(state, instruction):
            return skip_next(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y]),
    register_form=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y]),
    register_form=True,
)


def execute_jump_with_offset_modern(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BXNN - Jump to address XNN + VX (modern behavior)."""
    return set_pc(state, instruction.nnn + int(state.V[instruction.x]))


def execute_jump_with_offset_legacy(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0 (legacy behavior)."""
    return set_pc(state, instruction.nnn + int(state.V[0]))


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    if state.modern_mode:
        return execute_jump_with_offset_modern(state, instruction)
    return execute_jump_with_offset_legacy(state, instruction)


def is_key_pressed(state: EmulatorState, key: int) -> bool:
    """Keypad lookup where values past the last key never count as pressed."""
    return key < NUM_KEYS and bool(state.keypad[key])


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    if instruction.nn not in (0x9E, 0xA1):
        raise UnknownOpcodeError(instruction.raw)

    key_pressed = is_key_pressed(state, int(state.V[instruction.x]))
    is_not_instruction = instruction.nn == 0xA1

    if key_pressed ^ is_not_instruction:
        return skip_next(state)
    return state
