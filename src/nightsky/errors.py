"""Exceptions raised outside the simulation itself."""

from __future__ import annotations


class NightSkyError(Exception):
    """Base class for fatal night-sky errors."""

    exit_code = 1


class SessionError(NightSkyError):
    """The terminal could not be put into animation mode (no TTY, curses failure)."""

    exit_code = 1


class RenderError(NightSkyError):
    """A frame could not be drawn to the terminal."""

    exit_code = 2


__all__ = ["NightSkyError", "SessionError", "RenderError"]
