"""Satellites: slow horizontal drifters with a blinking light."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List

from .config import DEFAULT_CONFIG, SkyConfig

logger = logging.getLogger(__name__)

EDGE_MARGIN_ROWS = 5


def blink_ticks(period: float, tick_length: float) -> int:
    """Number of whole ticks in one blink period (at least one)."""

    return max(round(period / tick_length), 1)


@dataclass
class Satellite:
    x: float
    y: float
    vx: float
    blink_period: float = 1.0
    blink_cycle: int = 60
    blink_tick: int = 0

    @property
    def blink_on(self) -> bool:
        """The light shows during the first half of each blink cycle."""

        return self.blink_tick < (self.blink_cycle + 1) // 2

    def advance_blink(self, elapsed: float) -> None:
        """Step the blink counter by one tick.

        The cycle is ``blink_period`` measured in whole ticks of ``elapsed``,
        so a fixed tick length repeats the on/off pattern exactly.
        """

        if elapsed > 0.0:
            self.blink_cycle = blink_ticks(self.blink_period, elapsed)
        self.blink_tick = (self.blink_tick + 1) % self.blink_cycle

    def exited(self, width: int) -> bool:
        if self.vx >= 0.0:
            return self.x >= width
        return self.x < 0.0


class SatelliteManager:
    """Population of satellites crossing a ``width`` x ``height`` grid."""

    def __init__(self, width: int, height: int, *, config: SkyConfig = DEFAULT_CONFIG) -> None:
        self.width = width
        self.height = height
        self.config = config
        self.satellites: List[Satellite] = []

    def _row_range(self) -> tuple[int, int]:
        if self.height > 2 * EDGE_MARGIN_ROWS:
            return EDGE_MARGIN_ROWS, self.height - EDGE_MARGIN_ROWS
        return 0, self.height

    def _new_satellite(self, rng: random.Random, x: float | None = None) -> Satellite:
        heading = rng.choice((1.0, -1.0))
        if x is None:
            x = 0.0 if heading > 0 else float(self.width - 1)
        low, high = self._row_range()
        speed = rng.uniform(*self.config.satellite_speed_range)
        period = rng.choice(self.config.satellite_blink_periods)
        cycle = blink_ticks(period, self.config.frame_interval)
        return Satellite(
            x=x,
            y=float(rng.randrange(low, high)),
            vx=heading * speed,
            blink_period=period,
            blink_cycle=cycle,
            blink_tick=rng.randrange(cycle),
        )

    def spawn_check(self, rng: random.Random, elapsed: float) -> Satellite | None:
        """Run one spawn trial; return the new satellite, if any."""

        chance = min(self.config.satellite_rate * elapsed, 1.0)
        roll = rng.random()
        if roll >= chance or len(self.satellites) >= self.config.satellite_max:
            return None

        satellite = self._new_satellite(rng)
        self.satellites.append(satellite)
        logger.debug("Satellite spawned on row %d heading %+.0f", satellite.y, satellite.vx)
        return satellite

    def seed(self, rng: random.Random, count: int) -> List[Satellite]:
        """Place up to ``count`` satellites mid-flight, e.g. at startup."""

        seeded: List[Satellite] = []
        while len(seeded) < count and len(self.satellites) < self.config.satellite_max:
            satellite = self._new_satellite(rng, x=float(rng.randrange(self.width)))
            self.satellites.append(satellite)
            seeded.append(satellite)
        return seeded

    def add(self, satellite: Satellite) -> bool:
        if len(self.satellites) >= self.config.satellite_max:
            return False
        self.satellites.append(satellite)
        return True

    def update(self, elapsed: float) -> int:
        """Move satellites and cycle their lights; return how many left the grid."""

        for satellite in self.satellites:
            satellite.x += satellite.vx * elapsed
            satellite.advance_blink(elapsed)

        survivors = [satellite for satellite in self.satellites if not satellite.exited(self.width)]
        removed = len(self.satellites) - len(survivors)
        if removed:
            logger.debug("Removed %d satellite(s)", removed)
        self.satellites = survivors
        return removed

    def __len__(self) -> int:
        return len(self.satellites)

    def __iter__(self) -> Iterator[Satellite]:
        return iter(self.satellites)


__all__ = ["Satellite", "SatelliteManager"]
