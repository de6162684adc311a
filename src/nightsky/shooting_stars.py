"""Shooting stars: short-lived streaks whose trails fade after the head is gone."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterator, List, Optional

from .config import DEFAULT_CONFIG, SkyConfig

logger = logging.getLogger(__name__)


@dataclass
class TrailParticle:
    x: float
    y: float
    age: int = 0


@dataclass
class ShootingStar:
    x: float
    y: float
    vx: float
    vy: float
    lifetime: Optional[float] = None
    age: float = 0.0
    trail: Deque[TrailParticle] = field(default_factory=deque)

    def on_grid(self, width: int, height: int) -> bool:
        return 0.0 <= self.x < width and 0.0 <= self.y < height

    @property
    def burned_out(self) -> bool:
        return self.lifetime is not None and self.age >= self.lifetime

    def head_spent(self, width: int, height: int) -> bool:
        """True once the head has left the grid or burned out."""

        return self.burned_out or not self.on_grid(width, height)


class ShootingStarManager:
    """Spawns, moves and retires shooting stars on a ``width`` x ``height`` grid."""

    def __init__(self, width: int, height: int, *, config: SkyConfig = DEFAULT_CONFIG) -> None:
        self.width = width
        self.height = height
        self.config = config
        self.stars: List[ShootingStar] = []

    def spawn_check(self, rng: random.Random, elapsed: float) -> ShootingStar | None:
        """Run one spawn trial; return the new star, if any."""

        chance = min(self.config.shooting_star_rate * elapsed, 1.0)
        roll = rng.random()
        if roll >= chance or len(self.stars) >= self.config.shooting_star_max:
            return None

        heading = rng.choice((1.0, -1.0))
        speed = rng.uniform(*self.config.shooting_star_speed_range)
        star = ShootingStar(
            x=float(rng.randrange(self.width)),
            y=float(rng.randrange(max(self.height // 2, 1))),
            vx=heading * speed,
            vy=speed * 0.5,
            lifetime=rng.uniform(*self.config.shooting_star_lifetime_range),
        )
        self.stars.append(star)
        logger.debug("Shooting star spawned at (%.1f, %.1f) vx=%.1f", star.x, star.y, star.vx)
        return star

    def add(self, star: ShootingStar) -> bool:
        """Append ``star`` unless the population is already at its cap."""

        if len(self.stars) >= self.config.shooting_star_max:
            return False
        self.stars.append(star)
        return True

    def update(self, elapsed: float) -> int:
        """Advance every shooting star by ``elapsed`` seconds; return how many were removed."""

        max_length = self.config.trail_length
        for star in self.stars:
            # 1) Leave a particle behind while the head is still burning
            if not star.head_spent(self.width, self.height):
                star.trail.appendleft(TrailParticle(star.x, star.y))
                while len(star.trail) > max_length:
                    star.trail.pop()

                # 2) Move the head
                star.x += star.vx * elapsed
                star.y += star.vy * elapsed
                star.age += elapsed

            # 3) Fade the trail; ages grow toward the tail so expired entries sit at the end
            for particle in star.trail:
                particle.age += 1
            while star.trail and star.trail[-1].age > max_length:
                star.trail.pop()

        # 4) Retire stars with nothing left to draw
        survivors = [
            star for star in self.stars if star.trail or not star.head_spent(self.width, self.height)
        ]
        removed = len(self.stars) - len(survivors)
        if removed:
            logger.debug("Removed %d shooting star(s)", removed)
        self.stars = survivors
        return removed

    def __len__(self) -> int:
        return len(self.stars)

    def __iter__(self) -> Iterator[ShootingStar]:
        return iter(self.stars)


__all__ = ["TrailParticle", "ShootingStar", "ShootingStarManager"]
