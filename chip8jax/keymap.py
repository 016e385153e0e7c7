"""Physical keyboard to CHIP-8 keypad mapping.

The COSMAC VIP keypad::

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

is laid over the left-hand block of a QWERTY keyboard::

    1 2 3 4
    Q W E R
    A S D F
    Z X C V
"""

import pygame

KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


def keypad_index(key: int):
    """Keypad index for a pygame key code, or None when unmapped."""
    return KEY_MAP.get(key)
