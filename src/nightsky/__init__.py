"""nightsky package."""

import logging

from .config import DEFAULT_CONFIG, SkyConfig
from .errors import NightSkyError, RenderError, SessionError
from .loop import AnimationLoop, LoopState
from .satellites import Satellite, SatelliteManager
from .scene import FrameSnapshot, Scene, default_star_count
from .shooting_stars import ShootingStar, ShootingStarManager, TrailParticle
from .starfield import Brightness, Star, StarField, current_level

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Star",
    "StarField",
    "Brightness",
    "current_level",
    "ShootingStar",
    "ShootingStarManager",
    "TrailParticle",
    "Satellite",
    "SatelliteManager",
    "Scene",
    "FrameSnapshot",
    "default_star_count",
    "AnimationLoop",
    "LoopState",
    "SkyConfig",
    "DEFAULT_CONFIG",
    "NightSkyError",
    "SessionError",
    "RenderError",
]
__version__ = "0.1.0"
