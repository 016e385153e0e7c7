"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8jax.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, DISPLAY_SIZE,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, NUM_REGISTERS, NUM_KEYS
)
from chip8jax.errors import MemoryAccessError


class StackState(PyTreeNode):
    """Return address stack for subroutine calls."""
    data: jnp.ndarray
    pointer: int = field(pytree_node=False, default=0)


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is stored flat, row-major: pixel (x, y) lives at
    ``y * SCREEN_WIDTH + x``.
    """
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray
    modern_mode: bool = field(pytree_node=False, default=False)


def create_state(rng: jax.Array = None, modern_mode: bool = False) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    memory = memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(jnp.array(FONT_DATA, dtype=jnp.uint8))
    return EmulatorState(
        rng=rng,
        memory=memory,
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        display=jnp.zeros(DISPLAY_SIZE, dtype=jnp.bool_),
        stack=StackState(data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16)),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        modern_mode=modern_mode,
    )


def check_memory_access(address: int, length: int, operation: str) -> None:
    """Raise if ``length`` bytes starting at ``address`` fall outside memory."""
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(
            f"{operation} of {length} byte(s) at 0x{address:04X} is outside memory"
        )


def display_grid(display: jnp.ndarray) -> jnp.ndarray:
    """View the flat framebuffer as a (SCREEN_HEIGHT, SCREEN_WIDTH) grid."""
    return jnp.reshape(display, (SCREEN_HEIGHT, SCREEN_WIDTH))
