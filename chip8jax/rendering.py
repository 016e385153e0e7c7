"""CHIP-8 rendering utilities for visualization."""
import time
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image

from chip8jax.constants import SCREEN_WIDTH, SCREEN_HEIGHT


def display_to_pixels(display) -> np.ndarray:
    """Convert a framebuffer to a boolean (height, width) numpy grid.

    Accepts the flat row-major framebuffer of 2048 cells or an already shaped
    (32, 64) grid.
    """
    pixels = np.asarray(display, dtype=np.bool_)
    if pixels.shape == (SCREEN_WIDTH * SCREEN_HEIGHT,):
        pixels = pixels.reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
    if pixels.shape != (SCREEN_HEIGHT, SCREEN_WIDTH):
        raise ValueError(
            f"Expected a framebuffer of {SCREEN_WIDTH * SCREEN_HEIGHT} cells or shape "
            f"({SCREEN_HEIGHT}, {SCREEN_WIDTH}), got {pixels.shape}"
        )
    return pixels


def chip8_display_to_rgb(
    display,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Flat framebuffer of 2048 cells, row-major
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"Scale must be a positive integer, got {scale}")
    pixels = display_to_pixels(display)

    rgb_frame = np.zeros((*pixels.shape, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "violet",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("violet", "classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )

    return COLOR_SCHEMES[scheme]


COLOR_SCHEMES = {
    "violet": ((179, 102, 184), (45, 25, 61)),
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
}


def save_screenshot(display, filename: str, scale: int = 8, color_scheme: str = "classic") -> None:
    """Write the framebuffer to an image file (format from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    Image.fromarray(chip8_display_to_rgb(display, scale, on_color, off_color)).save(filename)


def create_video(
        frames: Sequence,
        filename: Optional[str] = None,
        fps: float = 60.0,
        scale: int = 8,
        color_scheme: str = "classic",
        persistence: bool = True,
        display: bool = False
) -> None:
    """Display and/or save a sequence of framebuffers with optional phosphor persistence.

    Args:
        frames: Framebuffers, one per emulated frame
        filename: If provided, save video to this MP4 file
        fps: Video frame rate
        scale: Upscaling factor
        color_scheme: Color scheme for rendering
        persistence: Enable phosphor screen simulation (smooth fading)
        display: If True, show video in window (press 'q' to quit, space to pause)
    """
    if not filename and not display:
        return
    if len(frames) == 0:
        raise ValueError("No frames to render")

    height, width = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
    on_color, off_color = (np.array(color, dtype=np.float32) for color in create_color_scheme(color_scheme))

    writer = None
    if filename:
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        writer = cv2.VideoWriter(filename, fourcc, fps, (width, height))

    if display:
        window_name = "CHIP-8 Video (q=quit, space=pause)"
        cv2.namedWindow(window_name, cv2.WINDOW_AUTOSIZE)

    glow = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.float32) if persistence else None
    decay = 0.8

    frame_delay = 1.0 / fps if display else 0
    paused = False

    try:
        for i, framebuffer in enumerate(frames):
            start_time = time.time()
            pixels = display_to_pixels(framebuffer).astype(np.float32)

            if persistence:
                glow = np.clip(glow * decay + pixels, 0.0, 1.0)
                pixels = glow

            # Blend between the two scheme colors per pixel
            frame = (off_color + pixels[..., None] * (on_color - off_color)).astype(np.uint8)

            if scale > 1:
                frame = np.repeat(np.repeat(frame, scale, axis=0), scale, axis=1)
            frame_bgr = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

            if writer:
                writer.write(frame_bgr)

            if display:
                cv2.putText(frame_bgr, f"Frame {i + 1}/{len(frames)}",
                            (10, 25), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
                cv2.imshow(window_name, frame_bgr)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q') or key == 27:  # 'q' or ESC
                    break
                elif key == ord(' '):
                    paused = not paused

                while paused:
                    key = cv2.waitKey(30) & 0xFF
                    if key == ord(' '):
                        paused = False
                    elif key == ord('q') or key == 27:
                        return

                sleep_time = frame_delay - (time.time() - start_time)
                if sleep_time > 0:
                    time.sleep(sleep_time)

    finally:
        if writer:
            writer.release()
        if display:
            cv2.destroyAllWindows()
