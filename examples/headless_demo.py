"""
Draw the sixteen font glyphs without opening a window and save the result.

    python examples/headless_demo.py digits.png
"""

import sys

from chip8jax import Machine
from chip8jax.logging import ConsoleLogger, format_registers
from chip8jax.rendering import save_screenshot
from chip8jax.runner import run_headless


def glyph_program() -> bytes:
    """V2 counts digits 0-F; glyphs are drawn 6 pixels apart, eight per row."""
    words = [
        0x6200,  # 200: V2 = 0
        0x6000,  # 202: V0 = 0 (x)
        0x6100,  # 204: V1 = 0 (y)
        0xF229,  # 206: I = glyph(V2)
        0xD015,  # 208: draw at (V0, V1)
        0x7006,  # 20A: x += 6
        0x7201,  # 20C: digit += 1
        0x4208,  # 20E: skip unless 8 digits are done
        0x1214,  # 210: start the second row
        0x1218,  # 212: go to the end check
        0x6000,  # 214: x = 0
        0x7106,  # 216: y += 6
        0x3210,  # 218: skip when all 16 are drawn
        0x1206,  # 21A: next glyph
        0x121C,  # 21C: spin
    ]
    return b"".join(word.to_bytes(2, "big") for word in words)


if __name__ == "__main__":
    output = sys.argv[1] if len(sys.argv) > 1 else "digits.png"
    logger = ConsoleLogger(name="demo")

    machine = Machine(logger=logger)
    machine.load_program(glyph_program())
    frames = run_headless(machine, frames=30, instructions_per_frame=10, logger=logger)

    for line in format_registers(machine.state):
        logger.info(line)
    save_screenshot(frames[-1], output, scale=8, color_scheme="violet")
    logger.info(f"Saved {output}")
