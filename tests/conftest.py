"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8jax import create_state, Machine


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state in modern mode."""
    return create_state(modern_mode=True)


@pytest.fixture
def legacy_state():
    """Provide a fresh state with the original interpreter's quirks."""
    return create_state(modern_mode=False)


@pytest.fixture
def machine():
    """Provide a freshly constructed machine."""
    return Machine()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10, VF=1)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def pixel(display, x, y):
    """Read pixel (x, y) from the flat framebuffer."""
    return bool(display[y * 64 + x])


def program(*instructions):
    """Assemble 16-bit instruction words into big-endian program bytes."""
    return b"".join(word.to_bytes(2, "big") for word in instructions)
