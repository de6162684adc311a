"""Curses-backed terminal session, renderer and key poller.

Everything here is a thin shell around ``curses``: the session switches the
terminal into animation mode and guarantees it is restored, the renderer maps
a :class:`~nightsky.scene.FrameSnapshot` onto cells, and the poller reports
quit keys and resizes without blocking.
"""

from __future__ import annotations

import curses
import locale
import logging
import sys
from enum import Enum
from typing import Dict, Mapping, TextIO, Tuple

from .errors import RenderError, SessionError
from .scene import FrameSnapshot
from .shooting_stars import ShootingStar
from .starfield import Brightness, current_level

logger = logging.getLogger(__name__)

ESCAPE = 27
ESCAPE_DELAY_MS = 25
QUIT_KEYS = frozenset({ord("q"), ord("Q"), ESCAPE})

STAR_GLYPHS: Dict[Brightness, str] = {
    Brightness.DIM: ".",
    Brightness.MEDIUM: "·",
    Brightness.BRIGHT: "✦",
}
TRAIL_GLYPHS: Tuple[str, ...] = ("•", "·", "·", ".", ".")
SATELLITE_GLYPH = "◆"


class Role(Enum):
    STAR_DIM = 1
    STAR_MEDIUM = 2
    STAR_BRIGHT = 3
    METEOR_HEAD = 4
    METEOR_TRAIL = 5
    SATELLITE = 6


# (256-colour foreground, 8-colour fallback, extra attributes)
_PALETTE: Dict[Role, Tuple[int, int, int]] = {
    Role.STAR_DIM: (244, curses.COLOR_WHITE, curses.A_DIM),
    Role.STAR_MEDIUM: (250, curses.COLOR_WHITE, curses.A_NORMAL),
    Role.STAR_BRIGHT: (231, curses.COLOR_WHITE, curses.A_BOLD),
    Role.METEOR_HEAD: (221, curses.COLOR_YELLOW, curses.A_BOLD),
    Role.METEOR_TRAIL: (172, curses.COLOR_YELLOW, curses.A_NORMAL),
    Role.SATELLITE: (189, curses.COLOR_CYAN, curses.A_BOLD),
}

_STAR_ROLES = {
    Brightness.DIM: Role.STAR_DIM,
    Brightness.MEDIUM: Role.STAR_MEDIUM,
    Brightness.BRIGHT: Role.STAR_BRIGHT,
}


def star_glyph(level: Brightness) -> str:
    return STAR_GLYPHS[level]


def trail_glyph(age: int) -> str:
    """Fresher particles get heavier dots."""

    index = min(max(age - 1, 0), len(TRAIL_GLYPHS) - 1)
    return TRAIL_GLYPHS[index]


def head_glyph(star: ShootingStar) -> str:
    return "\\" if star.vx >= 0.0 else "/"


def _init_palette() -> Dict[Role, int]:
    """Allocate colour pairs; without colour support fall back to plain attributes."""

    if not curses.has_colors():
        return {role: extra for role, (_, _, extra) in _PALETTE.items()}

    curses.start_color()
    background = -1
    try:
        curses.use_default_colors()
    except curses.error:
        background = curses.COLOR_BLACK

    rich = getattr(curses, "COLORS", 8) >= 256
    attrs: Dict[Role, int] = {}
    for role, (fg_256, fg_8, extra) in _PALETTE.items():
        curses.init_pair(role.value, fg_256 if rich else fg_8, background)
        attrs[role] = curses.color_pair(role.value) | extra
    return attrs


class CursesRenderer:
    """Draws frames onto a curses window."""

    name = "curses"

    def __init__(self, screen, palette: Mapping[Role, int] | None = None) -> None:
        self._screen = screen
        self._palette: Mapping[Role, int] = palette or {}

    def _attr(self, role: Role) -> int:
        return self._palette.get(role, curses.A_NORMAL)

    def _put(self, x: float, y: float, glyph: str, role: Role, bounds: Tuple[int, int]) -> None:
        max_y, max_x = bounds
        col, row = int(x), int(y)
        if not (0 <= col < max_x and 0 <= row < max_y):
            return
        if (row, col) == (max_y - 1, max_x - 1):
            # addstr on the last cell scrolls the window and raises.
            self._screen.insstr(row, col, glyph, self._attr(role))
        else:
            self._screen.addstr(row, col, glyph, self._attr(role))

    def render(self, frame: FrameSnapshot) -> None:
        try:
            self._screen.erase()
            max_y, max_x = self._screen.getmaxyx()
            bounds = (min(max_y, frame.height), min(max_x, frame.width))

            for star in frame.stars:
                level = current_level(star)
                self._put(star.col, star.row, star_glyph(level), _STAR_ROLES[level], bounds)

            for meteor in frame.shooting_stars:
                # Oldest first so fresher particles win shared cells.
                for particle in reversed(meteor.trail):
                    self._put(particle.x, particle.y, trail_glyph(particle.age), Role.METEOR_TRAIL, bounds)
                if not meteor.head_spent(frame.width, frame.height):
                    self._put(meteor.x, meteor.y, head_glyph(meteor), Role.METEOR_HEAD, bounds)

            for satellite in frame.satellites:
                if satellite.blink_on:
                    self._put(satellite.x, satellite.y, SATELLITE_GLYPH, Role.SATELLITE, bounds)

            self._screen.refresh()
        except curses.error as exc:
            raise RenderError(f"failed to draw frame {frame.tick}: {exc}") from exc


class CursesInput:
    """Reports quit keys and terminal resizes from a curses window."""

    def __init__(self, screen) -> None:
        self._screen = screen
        self._resize: Tuple[int, int] | None = None

    def poll_quit(self, timeout: float) -> bool:
        self._screen.timeout(max(int(timeout * 1000), 0))
        quit_requested = False
        key = self._screen.getch()
        while key != -1:
            if key in QUIT_KEYS:
                quit_requested = True
            elif key == curses.KEY_RESIZE:
                max_y, max_x = self._screen.getmaxyx()
                self._resize = (max_x, max_y)
            self._screen.timeout(0)
            key = self._screen.getch()
        return quit_requested

    def pending_resize(self) -> Tuple[int, int] | None:
        size, self._resize = self._resize, None
        return size


class TerminalSession:
    """Scoped curses session; ``leave`` always restores the terminal.

    Use as a context manager::

        with TerminalSession() as session:
            width, height = session.size()
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._screen = None
        self.renderer: CursesRenderer | None = None
        self.poller: CursesInput | None = None

    @property
    def active(self) -> bool:
        return self._screen is not None

    def enter(self) -> "TerminalSession":
        if self.active:
            return self
        if not self._stream.isatty():
            raise SessionError("standard output is not a terminal")

        locale.setlocale(locale.LC_ALL, "")
        try:
            self._screen = curses.initscr()
        except curses.error as exc:
            raise SessionError(f"could not initialise the terminal: {exc}") from exc

        try:
            curses.set_escdelay(ESCAPE_DELAY_MS)
            curses.noecho()
            curses.cbreak()
            self._screen.keypad(True)
            self._screen.nodelay(True)
            try:
                curses.curs_set(0)
            except curses.error:
                logger.debug("Terminal cannot hide the cursor")
            palette = _init_palette()
        except curses.error as exc:
            self.leave()
            raise SessionError(f"could not configure the terminal: {exc}") from exc

        self.renderer = CursesRenderer(self._screen, palette)
        self.poller = CursesInput(self._screen)
        logger.info("Terminal session started (%dx%d)", *self.size())
        return self

    def leave(self) -> None:
        if self._screen is None:
            return
        screen, self._screen = self._screen, None
        try:
            screen.keypad(False)
            curses.nocbreak()
            curses.echo()
            try:
                curses.curs_set(1)
            except curses.error:
                logger.debug("Terminal cannot show the cursor")
        finally:
            curses.endwin()
            self.renderer = None
            self.poller = None
            logger.info("Terminal session restored")

    def size(self) -> Tuple[int, int]:
        if self._screen is None:
            raise SessionError("terminal session is not active")
        max_y, max_x = self._screen.getmaxyx()
        return max_x, max_y

    def __enter__(self) -> "TerminalSession":
        return self.enter()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.leave()


__all__ = [
    "CursesInput",
    "CursesRenderer",
    "Role",
    "TerminalSession",
    "head_glyph",
    "star_glyph",
    "trail_glyph",
]
