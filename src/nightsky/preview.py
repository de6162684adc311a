"""Headless rendering of a frame to an image.

Each terminal cell becomes a ``cell_size`` block of pixels on a numpy RGB
canvas; Pillow turns the canvas into an image. Useful for checking the sky
without a terminal, e.g. from CI or a screenshot script.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

import numpy as np
from PIL import Image

from .scene import FrameSnapshot
from .starfield import Brightness, current_level

RGB = Tuple[int, int, int]

BACKGROUND: RGB = (10, 10, 30)
STAR_COLORS: Dict[Brightness, RGB] = {
    Brightness.DIM: (100, 100, 120),
    Brightness.MEDIUM: (200, 200, 220),
    Brightness.BRIGHT: (255, 255, 255),
}
HEAD_COLOR: RGB = (255, 200, 100)
TRAIL_COLOR: RGB = (200, 150, 50)
SATELLITE_COLOR: RGB = (230, 230, 255)


def _fade(color: RGB, age: int, max_age: int) -> RGB:
    weight = 1.0 - (max(age, 1) - 1) / float(max(max_age, 1))
    weight = max(min(weight, 1.0), 0.2)
    return tuple(int(b + (c - b) * weight) for c, b in zip(color, BACKGROUND))  # type: ignore[return-value]


def _paint(canvas: np.ndarray, x: float, y: float, color: RGB, cell_size: Tuple[int, int], radius: int) -> None:
    cell_w, cell_h = cell_size
    rows = canvas.shape[0] // cell_h
    cols = canvas.shape[1] // cell_w
    col, row = int(x), int(y)
    if not (0 <= col < cols and 0 <= row < rows):
        return
    cx = col * cell_w + cell_w // 2
    cy = row * cell_h + cell_h // 2
    canvas[max(cy - radius, 0) : cy + radius + 1, max(cx - radius, 0) : cx + radius + 1] = color


def render_frame_image(frame: FrameSnapshot, *, cell_size: Tuple[int, int] = (8, 16)) -> Image.Image:
    """Rasterise ``frame`` into an RGB image of ``width*cell_w`` x ``height*cell_h`` pixels."""

    cell_w, cell_h = cell_size
    if cell_w <= 0 or cell_h <= 0:
        raise ValueError("cell_size must be positive")

    canvas = np.empty((frame.height * cell_h, frame.width * cell_w, 3), dtype=np.uint8)
    canvas[:, :] = BACKGROUND

    for star in frame.stars:
        level = current_level(star)
        _paint(canvas, star.col, star.row, STAR_COLORS[level], cell_size, int(level) - 1)

    for meteor in frame.shooting_stars:
        max_age = max((particle.age for particle in meteor.trail), default=1)
        for particle in reversed(meteor.trail):
            _paint(canvas, particle.x, particle.y, _fade(TRAIL_COLOR, particle.age, max_age), cell_size, 1)
        if not meteor.head_spent(frame.width, frame.height):
            _paint(canvas, meteor.x, meteor.y, HEAD_COLOR, cell_size, 2)

    for satellite in frame.satellites:
        if satellite.blink_on:
            _paint(canvas, satellite.x, satellite.y, SATELLITE_COLOR, cell_size, 2)

    return Image.fromarray(canvas)


def save_frame_png(frame: FrameSnapshot, path: Path | str, *, cell_size: Tuple[int, int] = (8, 16)) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    render_frame_image(frame, cell_size=cell_size).save(output)
    return output


__all__ = ["render_frame_image", "save_frame_png"]
