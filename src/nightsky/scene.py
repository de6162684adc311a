"""Scene: owns every sky population and advances them one tick at a time."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Tuple

from .config import DEFAULT_CONFIG, SkyConfig
from .satellites import Satellite, SatelliteManager
from .shooting_stars import ShootingStar, ShootingStarManager
from .starfield import Star, StarField

logger = logging.getLogger(__name__)

CELLS_PER_STAR = 20
MAX_STARS = 300


def default_star_count(width: int, height: int) -> int:
    """Star count used when none is requested: one star per 20 cells, at most 300."""

    return min((max(width, 0) * max(height, 0)) // CELLS_PER_STAR, MAX_STARS)


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of one tick, valid until the next ``Scene.advance``."""

    width: int
    height: int
    tick: int
    stars: Tuple[Star, ...]
    shooting_stars: Tuple[ShootingStar, ...]
    satellites: Tuple[Satellite, ...]


class Scene:
    def __init__(
        self,
        width: int,
        height: int,
        *,
        rng: random.Random | None = None,
        config: SkyConfig = DEFAULT_CONFIG,
        star_count: int | None = None,
        initial_satellites: int = 0,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.config = config
        self.star_count = star_count
        self.tick = 0
        self.clock = 0.0
        self._build(width, height)
        if initial_satellites:
            self.satellites.seed(self.rng, initial_satellites)

    def _build(self, width: int, height: int) -> None:
        count = self.star_count if self.star_count is not None else default_star_count(width, height)
        self.width = width
        self.height = height
        self.star_field = StarField(width, height, count, self.rng, config=self.config)
        self.shooting_stars = ShootingStarManager(width, height, config=self.config)
        self.satellites = SatelliteManager(width, height, config=self.config)

    def advance(self, elapsed: float) -> None:
        """Run one tick: stars, then shooting stars, then satellites."""

        self.star_field.update(elapsed)

        self.shooting_stars.spawn_check(self.rng, elapsed)
        self.shooting_stars.update(elapsed)

        self.satellites.spawn_check(self.rng, elapsed)
        self.satellites.update(elapsed)

        self.tick += 1
        self.clock += elapsed

    def resize(self, width: int, height: int) -> None:
        """Rebuild the sky for a new grid; transient entities are dropped."""

        width, height = max(width, 1), max(height, 1)
        if (width, height) == (self.width, self.height):
            return
        logger.info("Resizing sky from %dx%d to %dx%d", self.width, self.height, width, height)
        self._build(width, height)

    def snapshot(self) -> FrameSnapshot:
        return FrameSnapshot(
            width=self.width,
            height=self.height,
            tick=self.tick,
            stars=tuple(self.star_field),
            shooting_stars=tuple(self.shooting_stars),
            satellites=tuple(self.satellites),
        )


__all__ = ["Scene", "FrameSnapshot", "default_star_count"]
