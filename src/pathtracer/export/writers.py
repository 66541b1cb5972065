# export/writers.py
"""
Image sinks for a finished canvas.

Every writer consumes the canvas' 8-bit view: rows top to bottom, pixels left
to right, channels clamped to [0, 0.999] and scaled by 256.
"""
import logging
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

PPM_SUFFIXES = {".ppm"}


def write_ppm(canvas, path):
    """Write an ASCII P3 file, one ``r g b`` line per pixel."""
    path = Path(path)
    with open(path, "w") as f:
        f.write(f"P3\n{canvas.width} {canvas.height}\n255\n")
        for r, g, b in canvas.pixels():
            f.write(f"{r} {g} {b}\n")
    logger.info("Wrote %dx%d PPM to %s", canvas.width, canvas.height, path)


def to_pil_image(canvas) -> Image.Image:
    return Image.fromarray(canvas.to_rgb_bytes_array())


def write_image(canvas, path):
    """Encode with Pillow; the format follows the file extension."""
    path = Path(path)
    to_pil_image(canvas).save(path)
    logger.info("Wrote %dx%d image to %s", canvas.width, canvas.height, path)


def save_canvas(canvas, path):
    if Path(path).suffix.lower() in PPM_SUFFIXES:
        write_ppm(canvas, path)
    else:
        write_image(canvas, path)


def to_rgba_bytes(canvas) -> bytes:
    """Packed RGBA8 buffer with a fixed opaque alpha channel."""
    rgb = canvas.to_rgb_bytes_array()
    alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2).tobytes()
