"""Interactive pygame driver.

Paces the machine at ``instructions_per_frame`` instructions and one timer
tick per frame, maps the keyboard to the keypad, plays the tone and draws
the framebuffer with an optional register overlay.
"""

import time
from typing import Optional

import pygame
import pygame.surfarray

from chip8jax.audio import Tone
from chip8jax.config import EmulatorConfig
from chip8jax.errors import MachineFault
from chip8jax.keymap import keypad_index
from chip8jax.logging import ConsoleLogger, format_registers
from chip8jax.machine import Machine
from chip8jax.rendering import chip8_display_to_rgb, create_color_scheme
from chip8jax.constants import SCREEN_WIDTH, SCREEN_HEIGHT


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


class Driver:
    """Owns the window, the input and the two cadences of one session.

    Keys: ESC quits, P pauses, F5 resets and reloads the ROM, F1 toggles
    the register overlay, +/- change the instruction rate.
    """

    def __init__(self, config: EmulatorConfig, machine: Machine, logger: Optional[ConsoleLogger] = None):
        self.config = config
        self.machine = machine
        self.logger = logger or ConsoleLogger(log_level=config.log_level)
        self.instructions_per_frame = config.instructions_per_frame
        self.on_color, self.off_color = create_color_scheme(config.color_scheme)
        self.show_debug = config.show_debug
        self.paused = False
        self.running = False
        self.fault: Optional[Exception] = None
        self.instruction_count = 0

    def restart(self):
        self.machine.reset()
        try:
            self.machine.load_rom(self.config.rom)
        except (OSError, MachineFault) as e:
            self.fault = e
            self.paused = True
            self.logger.error(f"Cannot load {self.config.rom}: {e}")
            return
        self.fault = None
        self.paused = False
        self.instruction_count = 0
        self.logger.info("Reset")

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_p and self.fault is None:
                self.paused = not self.paused
            elif event.key == pygame.K_F1:
                self.show_debug = not self.show_debug
            elif event.key == pygame.K_F5:
                self.restart()
            elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
                self.instructions_per_frame = min(100, self.instructions_per_frame + 2)
                self.logger.info(f"Speed: {self.instructions_per_frame} instructions/frame")
            elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                self.instructions_per_frame = max(1, self.instructions_per_frame - 2)
                self.logger.info(f"Speed: {self.instructions_per_frame} instructions/frame")
            else:
                self._set_key(event.key, True)
        elif event.type == pygame.KEYUP:
            self._set_key(event.key, False)

    def _set_key(self, key, pressed):
        index = keypad_index(key)
        if index is not None:
            self.machine.set_key(index, pressed)

    def run_frame(self):
        """Run the instruction batch and the 60 Hz timer tick for one frame."""
        try:
            for _ in range(self.instructions_per_frame):
                self.machine.step()
                self.instruction_count += 1
        except MachineFault as fault:
            # The core cannot resume after a fault; wait for a reset
            self.fault = fault
            self.paused = True
            self.logger.error(f"Halted: {fault}. Press F5 to restart or ESC to quit.")
            for line in format_registers(self.machine.state):
                self.logger.error(f"  {line}")
            return
        self.machine.tick_timers()

    def draw(self, screen, font):
        frame = chip8_display_to_rgb(self.machine.framebuffer, self.config.scale, self.on_color, self.off_color)
        # surfarray is indexed (x, y)
        pygame.surfarray.blit_array(screen, frame.transpose(1, 0, 2))

        if self.show_debug:
            lines = format_registers(self.machine.state)
            lines.append(f"Instructions: {self.instruction_count}  IPF: {self.instructions_per_frame}")
            draw_overlay_text(screen, lines, (5, 5), font, alpha=100)
        if self.fault is not None:
            draw_overlay_text(screen, [f"FAULT: {self.fault}", "F5 restart, ESC quit"], (5, 5), font,
                              text_color=(255, 80, 80), alpha=180)
        elif self.paused:
            draw_overlay_text(screen, ["PAUSED - P to resume"], (5, 5), font, text_color=(255, 255, 0))

    def run(self):
        pygame.init()
        screen = pygame.display.set_mode((SCREEN_WIDTH * self.config.scale, SCREEN_HEIGHT * self.config.scale))
        pygame.display.set_caption(f"chip8jax - {self.config.rom}")
        clock = pygame.time.Clock()
        font = pygame.font.Font(None, 18)

        tone = None
        if self.config.sound:
            try:
                tone = Tone(self.config.tone_frequency, self.config.volume)
            except pygame.error as e:
                self.logger.warning(f"Sound disabled: {e}")

        self.logger.info("Controls: ESC=Quit, P=Pause, F5=Reset, F1=Debug, +/-=Speed")
        start_time = time.time()
        self.running = True
        try:
            while self.running:
                clock.tick(self.config.fps)
                for event in pygame.event.get():
                    self.handle_event(event)

                if not self.paused:
                    self.run_frame()
                if tone is not None:
                    tone.sync(0 if self.paused else self.machine.sound_timer)

                self.draw(screen, font)
                pygame.display.flip()
        finally:
            if tone is not None:
                tone.stop()
            pygame.quit()

        runtime = time.time() - start_time
        self.logger.info(f"Closed after {self.instruction_count} instructions in {runtime:.1f}s")
