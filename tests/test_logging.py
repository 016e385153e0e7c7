"""Tests for console logging utilities."""

import io

import pytest

from chip8jax import create_state, execute
from chip8jax.logging import ConsoleLogger, format_registers, progress_bar


def make_logger(level="INFO"):
    stream = io.StringIO()
    return ConsoleLogger(name="test", log_level=level, stream=stream, show_timestamps=False), stream


def test_level_filtering():
    logger, stream = make_logger("WARNING")
    logger.info("hidden")
    logger.warning("shown")
    logger.critical("also shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "shown" in output
    assert "also shown" in output


def test_message_format():
    logger, stream = make_logger("DEBUG")
    logger.debug("hello")
    assert stream.getvalue() == "[   DEBUG][test] hello\n"


def test_no_colors_for_non_tty():
    logger, _ = make_logger()
    assert logger.use_colors is False


def test_unknown_level():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="VERBOSE")


def test_format_registers():
    state = execute(create_state(), 0x6A3C)
    lines = format_registers(state)
    assert lines[0].startswith("PC: 0x200")
    assert "VA:3C" in lines[-2]
    assert len(lines) == 6


def test_progress_bar_counts_frames():
    with progress_bar(3, file=io.StringIO()) as bar:
        bar.update(3)
    assert bar.n == 3
