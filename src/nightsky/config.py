"""Visual tuning constants for the night-sky animation."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Tuple

Range = Tuple[float, float]


@dataclass(frozen=True)
class SkyConfig:
    """Named parameters shared by the scene, its populations and the loop.

    Rates are expected spawns per simulated second; speeds are terminal cells
    per second; periods and lifetimes are seconds.
    """

    frame_rate: float = 60.0
    max_elapsed: float = 0.25

    brightness_weights: Tuple[int, int, int] = (6, 3, 1)
    twinkle_speed_range: Range = (1.0, 5.0)

    shooting_star_rate: float = 0.4
    shooting_star_max: int = 3
    shooting_star_speed_range: Range = (40.0, 80.0)
    shooting_star_lifetime_range: Range = (0.75, 1.5)
    trail_length: int = 5

    satellite_rate: float = 0.05
    satellite_max: int = 1
    satellite_speed_range: Range = (4.0, 10.0)
    satellite_blink_periods: Tuple[float, ...] = (1.0, 1.5, 2.0)

    def __post_init__(self) -> None:
        if self.frame_rate <= 0:
            raise ValueError("frame_rate must be positive")
        if self.trail_length < 0:
            raise ValueError("trail_length must be non-negative")
        if self.shooting_star_max < 0 or self.satellite_max < 0:
            raise ValueError("population caps must be non-negative")
        if not self.satellite_blink_periods or min(self.satellite_blink_periods) <= 0:
            raise ValueError("satellite_blink_periods must hold positive periods")

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.frame_rate

    def replace(self, **changes) -> "SkyConfig":
        """Return a copy with ``changes`` applied."""

        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = SkyConfig()

__all__ = ["SkyConfig", "DEFAULT_CONFIG"]
