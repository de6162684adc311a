"""Quick headless demo: run the sky simulation without a terminal."""

from __future__ import annotations

import random

from nightsky import Scene, SkyConfig
from nightsky.preview import save_frame_png


def main() -> None:
    config = SkyConfig().replace(shooting_star_rate=2.0, satellite_rate=0.5)
    scene = Scene(80, 24, rng=random.Random(7), config=config, initial_satellites=1)

    print(f"Stars: {len(scene.star_field)}")

    for step in range(1, 301):
        scene.advance(config.frame_interval)
        if step % 60 == 0:
            frame = scene.snapshot()
            print(
                f"After {step} ticks ({scene.clock:.1f}s): "
                f"{len(frame.shooting_stars)} shooting star(s), {len(frame.satellites)} satellite(s)"
            )

    path = save_frame_png(scene.snapshot(), "output/headless_demo.png")
    print(f"Final frame: {path}")


if __name__ == "__main__":
    main()
