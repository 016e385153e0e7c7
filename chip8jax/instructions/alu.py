"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy)`` to ``(result, flag)``. A flag of ``None``
leaves VF alone. The result is written to VX before the flag goes to VF, so
a flag-producing operation on VF keeps the flag.
"""

from typing import Optional

from chip8jax.constants import BYTE_MASK, FLAG_REGISTER
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction
from chip8jax.errors import UnknownOpcodeError


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, int]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = int(result > BYTE_MASK)
    return result & BYTE_MASK, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    not_borrow = int(vx >= vy)
    return (vx - vy) & BYTE_MASK, not_borrow


def alu_shift_right(vx: int, vy: int) -> tuple[int, int]:
    """8XY6 - Shift right: VX >>= 1, VF = shifted out bit."""
    shifted_bit = vx & 1
    return vx >> 1, shifted_bit


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    not_borrow = int(vy >= vx)
    return (vy - vx) & BYTE_MASK, not_borrow


def alu_shift_left(vx: int, vy: int) -> tuple[int, int]:
    """8XYE - Shift left: VX <<= 1, VF = shifted out bit."""
    shifted_bit = (vx & 0x80) >> 7
    return (vx << 1) & BYTE_MASK, shifted_bit


ALU_OPERATIONS = {
    0x0: alu_set,
    0x1: alu_or,
    0x2: alu_and,
    0x3: alu_xor,
    0x4: alu_add,
    0x5: alu_sub_xy,
    0x6: alu_shift_right,
    0x7: alu_sub_yx,
    0xE: alu_shift_left,
}

SHIFT_OPERATIONS = (0x6, 0xE)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher.

    In the original interpreter the shifts read VY, so VX is loaded from VY
    before shifting. Modern mode shifts VX in place.
    """
    operation = ALU_OPERATIONS.get(instruction.n)
    if operation is None:
        raise UnknownOpcodeError(instruction.raw)

    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])
    if instruction.n in SHIFT_OPERATIONS and not state.modern_mode:
        vx = vy

    result, vf = operation(vx, vy)

    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
