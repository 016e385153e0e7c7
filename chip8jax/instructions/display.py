"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8jax.state import EmulatorState, check_memory_access
from chip8jax.decode import DecodedInstruction
from chip8jax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, FLAG_REGISTER

# Bit masks for the sprite columns, most significant bit first
COLUMN_SHIFTS = jnp.arange(SPRITE_WIDTH - 1, -1, -1, dtype=jnp.uint8)
COLUMN_OFFSETS = jnp.arange(SPRITE_WIDTH)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Sprite pixels are XORed onto the display, wrapping around both edges.
    VF is set to 1 if any lit pixel gets switched off, otherwise 0.
    """
    height = instruction.n
    if height == 0:
        return state.replace(V=state.V.at[FLAG_REGISTER].set(0))

    sprite_address = int(state.I)
    check_memory_access(sprite_address, height, "Sprite read")
    sprite_bytes = state.memory[sprite_address:sprite_address + height]
    sprite = ((sprite_bytes[:, None] >> COLUMN_SHIFTS) & 1).astype(jnp.bool_)

    screen_x = (int(state.V[instruction.x]) + COLUMN_OFFSETS) % SCREEN_WIDTH
    screen_y = (int(state.V[instruction.y]) + jnp.arange(height)) % SCREEN_HEIGHT
    cells = (screen_y[:, None] * SCREEN_WIDTH + screen_x[None, :]).ravel()
    sprite = sprite.ravel()

    # A sprite is at most 8x15, so wrapped cells never repeat within one draw
    current = state.display[cells]
    collision = jnp.any(current & sprite)

    return state.replace(
        display=state.display.at[cells].set(current ^ sprite),
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8))
    )
