"""Square-wave tone that follows the sound timer."""

import numpy as np
import pygame

SAMPLE_RATE = 44100


def square_wave(frequency: float, volume: float, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """One period of a signed 16-bit square wave, first half high."""
    period = max(2, int(round(sample_rate / frequency)))
    amplitude = int(volume * np.iinfo(np.int16).max)
    samples = np.full(period, -amplitude, dtype=np.int16)
    samples[:period // 2] = amplitude
    return samples


class Tone:
    """Continuous tone played through the pygame mixer while the sound timer runs."""

    def __init__(self, frequency: float = 440.0, volume: float = 0.1):
        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        sample_rate, _, channels = pygame.mixer.get_init()
        samples = square_wave(frequency, volume, sample_rate)
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        self.sound = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
        self.playing = False

    def start(self):
        if not self.playing:
            self.sound.play(loops=-1)
            self.playing = True

    def stop(self):
        if self.playing:
            self.sound.stop()
            self.playing = False

    def sync(self, sound_timer: int):
        """Play while the timer is nonzero, stay silent otherwise."""
        if sound_timer > 0:
            self.start()
        else:
            self.stop()
