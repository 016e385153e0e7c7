"""Command line entry point.

    chip8jax rom=games/pong.ch8 scale=12 color_scheme=amber
    chip8jax rom=games/pong.ch8 headless=true frames=1200 video=pong.mp4
"""

import sys

import hydra
import jax
from omegaconf import DictConfig, OmegaConf

from chip8jax.config import EmulatorConfig
from chip8jax.errors import MachineFault
from chip8jax.logging import ConsoleLogger
from chip8jax.machine import Machine
from chip8jax.rendering import create_video, save_screenshot
from chip8jax.runner import run_headless


def run(config: EmulatorConfig, logger: ConsoleLogger) -> int:
    """Run one session and return the process exit status."""
    machine = Machine(jax.random.PRNGKey(config.seed), modern_mode=config.modern_mode, logger=logger)
    try:
        machine.load_rom(config.rom)
    except (OSError, MachineFault) as e:
        logger.error(f"Cannot load {config.rom}: {e}")
        return 1

    if not config.headless:
        # Imported here so headless runs never open the pygame display
        from chip8jax.driver import Driver
        Driver(config, machine, logger).run()
        return 0

    try:
        frames = run_headless(machine, config.frames, config.instructions_per_frame, logger, show_progress=True)
    except MachineFault as fault:
        logger.error(f"Halted: {fault}")
        return 1

    if config.video:
        create_video(frames, config.video, fps=config.fps, scale=config.scale, color_scheme=config.color_scheme)
        logger.info(f"Video saved: {config.video} ({len(frames)} frames)")
    if config.screenshot:
        save_screenshot(frames[-1], config.screenshot, config.scale, config.color_scheme)
        logger.info(f"Screenshot saved: {config.screenshot}")
    return 0


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    if OmegaConf.is_missing(cfg, "rom"):
        print("A ROM path is required: chip8jax rom=path/to/game.ch8", file=sys.stderr)
        sys.exit(2)
    logger = ConsoleLogger(log_level=cfg.log_level)
    try:
        config = EmulatorConfig.from_dict(OmegaConf.to_container(cfg, resolve=True))
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)
    logger.debug(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")
    sys.exit(run(config, logger))


if __name__ == "__main__":
    main()
