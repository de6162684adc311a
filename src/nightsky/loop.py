"""Fixed-rate animation loop and the collaborator interfaces it drives."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Protocol, Tuple, runtime_checkable

from .scene import FrameSnapshot, Scene

logger = logging.getLogger(__name__)


@runtime_checkable
class Renderer(Protocol):
    """Draws one frame; implementations raise ``RenderError`` on failure."""

    def render(self, frame: FrameSnapshot) -> None:
        """Draw ``frame`` without retaining it."""


@runtime_checkable
class InputPoller(Protocol):
    """Non-blocking keyboard/terminal event source."""

    def poll_quit(self, timeout: float) -> bool:
        """Return True if a quit key was pressed since the last poll."""

    def pending_resize(self) -> Tuple[int, int] | None:
        """Return the new ``(width, height)`` if the terminal was resized."""


class LoopState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class AnimationLoop:
    """Tick-sleep-tick scheduler.

    Each tick polls for quit, advances the scene, hands a snapshot to the
    renderer and then waits for the next frame boundary. ``fixed_elapsed``
    replaces the wall-clock delta so tests can run without real time.
    """

    def __init__(
        self,
        scene: Scene,
        renderer: Renderer,
        poller: InputPoller,
        *,
        frame_interval: float,
        max_elapsed: float = 0.25,
        fixed_elapsed: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if frame_interval <= 0.0:
            raise ValueError("frame_interval must be positive")
        self.scene = scene
        self.renderer = renderer
        self.poller = poller
        self.frame_interval = frame_interval
        self.max_elapsed = max(max_elapsed, frame_interval)
        self.fixed_elapsed = fixed_elapsed
        self._clock = clock
        self._sleep = sleep
        self.state = LoopState.STOPPED
        self.ticks = 0

    def run(self, max_ticks: int | None = None) -> int:
        """Run until a quit key (or ``max_ticks``); return the number of frames rendered."""

        self.state = LoopState.RUNNING
        start = self._clock()
        # The first frame advances by one full interval.
        last = start - self.frame_interval
        deadline = start + self.frame_interval
        logger.info("Animation loop started at %.1f fps", 1.0 / self.frame_interval)

        while self.state is LoopState.RUNNING:
            if max_ticks is not None and self.ticks >= max_ticks:
                self.state = LoopState.STOPPED
                break
            if self.poller.poll_quit(0.0):
                logger.info("Quit requested after %d frame(s)", self.ticks)
                self.state = LoopState.STOPPED
                break

            size = self.poller.pending_resize()
            if size is not None:
                self.scene.resize(*size)

            now = self._clock()
            if self.fixed_elapsed is not None:
                elapsed = self.fixed_elapsed
            else:
                elapsed = min(max(now - last, 0.0), self.max_elapsed)
            last = now

            self.scene.advance(elapsed)
            self.renderer.render(self.scene.snapshot())
            self.ticks += 1

            deadline = self._wait_until(deadline)

        return self.ticks

    def _wait_until(self, deadline: float) -> float:
        remaining = deadline - self._clock()
        if remaining > 0.0:
            self._sleep(remaining)
        elif -remaining > self.frame_interval:
            # Fell more than a frame behind; drop the backlog.
            return self._clock() + self.frame_interval
        return deadline + self.frame_interval


__all__ = ["AnimationLoop", "InputPoller", "LoopState", "Renderer"]
