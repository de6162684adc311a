from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from nightsky import Brightness, Satellite, ShootingStar, Star
from nightsky.preview import BACKGROUND, HEAD_COLOR, SATELLITE_COLOR, render_frame_image, save_frame_png
from nightsky.scene import FrameSnapshot


def _frame() -> FrameSnapshot:
    return FrameSnapshot(
        width=10,
        height=4,
        tick=7,
        stars=(Star(col=1, row=1, brightness=Brightness.BRIGHT, phase=1.5707963),),
        shooting_stars=(ShootingStar(x=5.0, y=2.0, vx=1.0, vy=0.0),),
        satellites=(Satellite(x=8.0, y=3.0, vx=1.0, blink_tick=0),),
    )


def test_render_frame_image_shape_and_colors() -> None:
    image = render_frame_image(_frame(), cell_size=(8, 16))
    arr = np.array(image)

    assert arr.shape == (4 * 16, 10 * 8, 3)
    assert tuple(arr[0, 0]) == BACKGROUND
    assert tuple(arr[2 * 16 + 8, 5 * 8 + 4]) == HEAD_COLOR
    assert tuple(arr[3 * 16 + 8, 8 * 8 + 4]) == SATELLITE_COLOR
    assert tuple(arr[1 * 16 + 8, 1 * 8 + 4]) == (255, 255, 255)


def test_hidden_satellite_not_drawn() -> None:
    frame = FrameSnapshot(
        width=4,
        height=2,
        tick=0,
        stars=(),
        shooting_stars=(),
        satellites=(Satellite(x=1.0, y=1.0, vx=1.0, blink_period=1.0, blink_tick=45),),
    )
    arr = np.array(render_frame_image(frame))
    unique = {tuple(pixel) for pixel in arr.reshape(-1, 3)}
    assert unique == {BACKGROUND}


def test_save_frame_png(tmp_path: Path) -> None:
    path = save_frame_png(_frame(), tmp_path / "out" / "sky.png")
    assert path.exists()
    with Image.open(path) as img:
        assert img.size == (80, 64)
