"""Tests for ALU operations (8xxx)."""

import pytest
from chip8jax import execute, UnknownOpcodeError
from chip8jax.instructions.alu import alu_add, alu_sub_xy, alu_sub_yx, alu_shift_left, alu_shift_right
from conftest import set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xF1)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = set_registers(fresh_state, V1=0xFF, V2=0xF0)

        state = execute(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0x0F

    def test_alu_xor_same(self, fresh_state):
        """8XY3 - XOR with same value should be 0."""
        state = set_registers(fresh_state, V3=0xAA, V4=0xAA)

        state = execute(state, 0x8343)  # V3 ^= V4

        assert state.V[3] == 0x00

    @pytest.mark.parametrize("instruction", [0x8120, 0x8121, 0x8122, 0x8123])
    def test_logical_operations_leave_flag(self, fresh_state, instruction):
        state = set_registers(fresh_state, V1=0x0C, V2=0x0A, VF=0x77)

        state = execute(state, instruction)

        assert state.V[15] == 0x77


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = set_registers(fresh_state, V1=0x50, V2=0x30)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x80
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - Add with carry."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x01)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x00  # 256 wraps to 0
        assert state.V[15] == 1  # Carry set

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = set_registers(fresh_state, V1=0x70, V2=0x20)

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0x50
        assert state.V[15] == 1  # No borrow (VX >= VY)

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, with borrow."""
        state = set_registers(fresh_state, V3=0x10, V4=0x20)

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == 0xF0  # 16 - 32 = -16 → 240
        assert state.V[15] == 0  # Borrow (VX < VY)

    def test_alu_sub_xy_equal(self, fresh_state):
        """8XY5 - Equal operands do not borrow."""
        state = set_registers(fresh_state, V1=0x33, V2=0x33)

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = set_registers(fresh_state, V1=0x10, V2=0x30)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20  # 48 - 16 = 32
        assert state.V[15] == 1  # No borrow (VY >= VX)

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, with borrow."""
        state = set_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, 0x8127)

        assert state.V[1] == 0xE0
        assert state.V[15] == 0


class TestALUShifts:
    """Test shift operations with mode differences."""

    def test_shift_right_legacy_uses_vy(self, legacy_state):
        """8XY6 - VX is loaded from VY before shifting."""
        state = set_registers(legacy_state, V5=0x08, V6=0x03)  # V5 is ignored

        state = execute(state, 0x8566)  # V5 = V6 >> 1

        assert state.V[5] == 0x01  # V6 (3) >> 1 = 1
        assert state.V[6] == 0x03
        assert state.V[15] == 1  # LSB of V6 was 1

    def test_shift_left_legacy_uses_vy(self, legacy_state):
        """8XYE - VX is loaded from VY before shifting."""
        state = set_registers(legacy_state, V3=0x01, V4=0x81)

        state = execute(state, 0x834E)  # V3 = V4 << 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1  # MSB of V4 was 1

    def test_shift_left_legacy_no_carry(self, legacy_state):
        state = set_registers(legacy_state, V3=0xFF, V4=0x40)

        state = execute(state, 0x834E)

        assert state.V[3] == 0x80
        assert state.V[15] == 0

    def test_shift_right_modern_odd(self, modern_state):
        """8XY6 - Shift right, modern mode, odd number."""
        state = set_registers(modern_state, V3=0x05, V4=0xFF)  # V4 is ignored

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02  # 5 >> 1 = 2
        assert state.V[15] == 1  # LSB was 1

    def test_shift_left_modern_overflow(self, modern_state):
        """8XYE - Shift left, modern mode, with overflow."""
        state = set_registers(modern_state, V3=0x81, V4=0x00)  # V4 is ignored

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02  # 129 << 1 = 258 → 2
        assert state.V[15] == 1  # MSB was 1

    def test_shift_mode_comparison(self, legacy_state, modern_state):
        """Test that modern_mode correctly switches behaviors."""
        state_modern = execute(set_registers(modern_state, V1=0x08, V2=0x03), 0x8126)
        state_legacy = execute(set_registers(legacy_state, V1=0x08, V2=0x03), 0x8126)

        assert state_modern.V[1] == 0x04  # 8 >> 1 = 4 (used V1)
        assert state_legacy.V[1] == 0x01  # 3 >> 1 = 1 (used V2)


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_undefined_operations(self, fresh_state, op):
        """Undefined 8XYN sub-operations fault with the raw opcode."""
        instruction = 0x8120 | op

        with pytest.raises(UnknownOpcodeError) as excinfo:
            execute(fresh_state, instruction)

        assert excinfo.value.opcode == instruction

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = set_registers(fresh_state, V5=0xAA)

        # V5 ^= V5 (should become 0)
        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = set_registers(state, V5=0x80)
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_register_operations(self, fresh_state):
        """Test that operations on VF work correctly."""
        state = set_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"

    def test_flag_wins_when_vf_is_destination(self, fresh_state):
        """8FY4 - the carry flag overwrites the sum stored in VF."""
        state = set_registers(fresh_state, VF=0xFF, V1=0x02)

        state = execute(state, 0x8F14)

        assert state.V[15] == 1


class TestALUFunctions:
    """The pure (vx, vy) -> (result, flag) helpers."""

    @pytest.mark.parametrize("vx, vy, expected", [
        (0xFF, 0x01, (0x00, 1)),
        (0x50, 0x30, (0x80, 0)),
        (0xFF, 0xFF, (0xFE, 1)),
    ])
    def test_add(self, vx, vy, expected):
        assert alu_add(vx, vy) == expected

    @pytest.mark.parametrize("vx, vy, expected", [
        (0x10, 0x20, (0xF0, 0)),
        (0x70, 0x20, (0x50, 1)),
    ])
    def test_sub_xy(self, vx, vy, expected):
        assert alu_sub_xy(vx, vy) == expected

    def test_sub_yx(self):
        assert alu_sub_yx(0x20, 0x10) == (0xF0, 0)
        assert alu_sub_yx(0x20, 0x70) == (0x50, 1)

    def test_shifts(self):
        assert alu_shift_right(0x01, 0) == (0x00, 1)
        assert alu_shift_left(0x80, 0) == (0x00, 1)
        assert alu_shift_left(0x7F, 0) == (0xFE, 0)
