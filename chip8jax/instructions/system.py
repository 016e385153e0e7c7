"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction
from chip8jax.errors import UnknownOpcodeError
from chip8jax.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


SYSTEM_INSTRUCTIONS = {
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions.

    Machine code routines (0NNN) are not supported and fault like any other
    unknown opcode.
    """
    handler = SYSTEM_INSTRUCTIONS.get(instruction.raw)
    if handler is None:
        raise UnknownOpcodeError(instruction.raw)
    return handler(state, instruction)
