"""High-level entry points wiring the scene to a terminal or to an image."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Callable

from .config import DEFAULT_CONFIG, SkyConfig
from .loop import AnimationLoop
from .preview import save_frame_png
from .scene import Scene

logger = logging.getLogger(__name__)


def run(
    session,
    *,
    config: SkyConfig = DEFAULT_CONFIG,
    rng: random.Random | None = None,
    star_count: int | None = None,
    initial_satellites: int = 0,
    max_ticks: int | None = None,
    fixed_elapsed: float | None = None,
    sleep: Callable[[float], None] | None = None,
) -> int:
    """Animate the sky inside ``session`` until the user quits.

    ``session`` is entered before the scene exists and left on every exit
    path, including a ``RenderError`` raised mid-frame. Returns the number of
    frames drawn.
    """

    with session:
        width, height = session.size()
        scene = Scene(
            width,
            height,
            rng=rng,
            config=config,
            star_count=star_count,
            initial_satellites=initial_satellites,
        )
        loop_kwargs = {}
        if sleep is not None:
            loop_kwargs["sleep"] = sleep
        loop = AnimationLoop(
            scene,
            session.renderer,
            session.poller,
            frame_interval=config.frame_interval,
            max_elapsed=config.max_elapsed,
            fixed_elapsed=fixed_elapsed,
            **loop_kwargs,
        )
        frames = loop.run(max_ticks=max_ticks)
    logger.info("Stopped after %d frame(s)", frames)
    return frames


def run_headless(
    output: Path | str,
    *,
    size: tuple[int, int] = (80, 24),
    ticks: int = 120,
    config: SkyConfig = DEFAULT_CONFIG,
    rng: random.Random | None = None,
    star_count: int | None = None,
    initial_satellites: int = 0,
) -> Path:
    """Simulate ``ticks`` frames at the configured frame rate and save the last one as PNG."""

    if ticks < 0:
        raise ValueError("ticks must be non-negative")
    width, height = size
    scene = Scene(
        width,
        height,
        rng=rng,
        config=config,
        star_count=star_count,
        initial_satellites=initial_satellites,
    )
    for _ in range(ticks):
        scene.advance(config.frame_interval)
    path = save_frame_png(scene.snapshot(), output)
    logger.info("Wrote snapshot of tick %d to %s", scene.tick, path)
    return path


__all__ = ["run", "run_headless"]
