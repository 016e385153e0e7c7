"""Emulator run configuration."""

from typing import Any, Dict, Optional

from flax.struct import dataclass

from chip8jax.rendering import COLOR_SCHEMES
from chip8jax.logging import LEVELS


@dataclass
class EmulatorConfig:
    """Settings for a driver session, usually built from the Hydra config.

    Attributes:
        rom: Path to the ROM file to run
        scale: Integer magnification of the 64x32 display
        instructions_per_frame: Instructions executed per 60 Hz frame (10 gives ~600 Hz)
        fps: Frame and timer rate
        color_scheme: Rendering color scheme name
        modern_mode: Use modern quirks instead of the original interpreter's
        seed: Seed of the PRNG key behind CXNN
        headless: Run without a window for a fixed number of frames
        frames: Number of frames for headless runs
        video: MP4 output path for headless runs
        screenshot: Image path for the last headless frame
        sound: Play a tone while the sound timer is active
        tone_frequency: Tone pitch in Hz
        volume: Tone volume in [0, 1]
        show_debug: Start with the register overlay visible
        log_level: Console log level
    """
    rom: str
    scale: int = 8
    instructions_per_frame: int = 10
    fps: int = 60
    color_scheme: str = "classic"
    modern_mode: bool = False
    seed: int = 0
    headless: bool = False
    frames: int = 600
    video: Optional[str] = None
    screenshot: Optional[str] = None
    sound: bool = True
    tone_frequency: float = 440.0
    volume: float = 0.1
    show_debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "EmulatorConfig":
        """Build and validate a config, ignoring keys it does not know."""
        known = {name: value for name, value in values.items() if name in cls.__dataclass_fields__}
        if not known.get("rom"):
            raise ValueError("A ROM path is required (rom=path/to/game.ch8)")
        config = cls(**known)
        config.validate()
        return config

    def validate(self) -> None:
        for name in ("scale", "instructions_per_frame", "fps", "frames"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be a positive integer, got {getattr(self, name)}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(
                f"Unknown color scheme '{self.color_scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
            )
        if self.log_level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level '{self.log_level}'. Available: {list(LEVELS)}")
        if not 0.0 <= self.volume <= 1.0:
            raise ValueError(f"volume must be in [0, 1], got {self.volume}")
