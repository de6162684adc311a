from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Tuple

from .config import DEFAULT_CONFIG, SkyConfig

TWINKLE_PERIOD = 2.0 * math.pi


class Brightness(IntEnum):
    DIM = 1
    MEDIUM = 2
    BRIGHT = 3


LEVELS: Tuple[Brightness, ...] = (Brightness.DIM, Brightness.MEDIUM, Brightness.BRIGHT)


@dataclass
class Star:
    col: int
    row: int
    brightness: Brightness = Brightness.DIM
    phase: float = 0.0
    twinkle_speed: float = 1.0


def current_level(star: Star) -> Brightness:
    """Return the brightness a star shows right now.

    The twinkle swings the displayed level between half and all of the base
    brightness, so a dim star never disappears completely.
    """

    twinkle = (math.sin(star.phase) + 1.0) / 2.0
    level = round(int(star.brightness) * (0.5 + 0.5 * twinkle))
    return Brightness(min(max(level, Brightness.DIM), Brightness.BRIGHT))


class StarField:
    """Fixed population of twinkling stars (CPU scalar version)."""

    def __init__(
        self,
        width: int,
        height: int,
        count: int,
        rng: random.Random,
        *,
        config: SkyConfig = DEFAULT_CONFIG,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("star field needs a positive width and height")
        if count < 0:
            raise ValueError("count must be non-negative")

        self.width = width
        self.height = height
        low, high = config.twinkle_speed_range
        self.stars: List[Star] = []
        for _ in range(count):
            self.stars.append(
                Star(
                    col=rng.randrange(width),
                    row=rng.randrange(height),
                    brightness=rng.choices(LEVELS, weights=config.brightness_weights)[0],
                    phase=rng.uniform(0.0, TWINKLE_PERIOD) % TWINKLE_PERIOD,
                    twinkle_speed=rng.uniform(low, high),
                )
            )

    def update(self, elapsed: float) -> None:
        """Advance every twinkle phase; positions and population never change."""

        for star in self.stars:
            star.phase = (star.phase + star.twinkle_speed * elapsed) % TWINKLE_PERIOD

    def positions(self) -> List[Tuple[int, int]]:
        return [(star.col, star.row) for star in self.stars]

    def __len__(self) -> int:
        return len(self.stars)

    def __iter__(self) -> Iterator[Star]:
        return iter(self.stars)


__all__ = ["Brightness", "Star", "StarField", "TWINKLE_PERIOD", "current_level"]
