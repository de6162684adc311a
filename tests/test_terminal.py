import curses
import os
from collections import deque

import pytest

from nightsky import Brightness, RenderError, Satellite, ShootingStar, Star, TrailParticle
from nightsky import terminal
from nightsky.scene import FrameSnapshot
from nightsky.terminal import CursesInput, CursesRenderer, TerminalSession, head_glyph, star_glyph, trail_glyph


class FakeScreen:
    def __init__(self, width: int = 10, height: int = 5, keys=(), fail: bool = False) -> None:
        self.width = width
        self.height = height
        self.cells = {}
        self.keys = list(keys)
        self.fail = fail
        self.refreshed = 0
        self.timeouts = []

    def erase(self) -> None:
        self.cells.clear()

    def getmaxyx(self):
        return self.height, self.width

    def addstr(self, row, col, text, attr=0) -> None:
        if self.fail:
            raise curses.error("addstr() returned ERR")
        if (row, col) == (self.height - 1, self.width - 1):
            raise curses.error("addstr() returned ERR")
        self.cells[(col, row)] = text

    def insstr(self, row, col, text, attr=0) -> None:
        self.cells[(col, row)] = text

    def refresh(self) -> None:
        self.refreshed += 1

    def timeout(self, delay: int) -> None:
        self.timeouts.append(delay)

    def getch(self) -> int:
        return self.keys.pop(0) if self.keys else -1


def _frame(**kwargs) -> FrameSnapshot:
    values = dict(width=10, height=5, tick=1, stars=(), shooting_stars=(), satellites=())
    values.update(kwargs)
    return FrameSnapshot(**values)


def test_glyph_tables() -> None:
    assert star_glyph(Brightness.DIM) == "."
    assert star_glyph(Brightness.MEDIUM) == "·"
    assert star_glyph(Brightness.BRIGHT) == "✦"
    assert trail_glyph(1) == "•"
    assert trail_glyph(99) == "."
    assert head_glyph(ShootingStar(x=0, y=0, vx=3.0, vy=1.0)) == "\\"
    assert head_glyph(ShootingStar(x=0, y=0, vx=-3.0, vy=1.0)) == "/"


def test_renders_stars_meteors_and_satellites() -> None:
    screen = FakeScreen()
    meteor = ShootingStar(
        x=4.5,
        y=2.2,
        vx=2.0,
        vy=1.0,
        trail=deque([TrailParticle(3.5, 1.7, age=1), TrailParticle(2.5, 1.2, age=2)]),
    )
    frame = _frame(
        stars=(Star(col=0, row=0, brightness=Brightness.DIM),),
        shooting_stars=(meteor,),
        satellites=(
            Satellite(x=7.2, y=3.0, vx=1.0, blink_period=1.0, blink_tick=6),
            Satellite(x=8.0, y=1.0, vx=1.0, blink_period=1.0, blink_tick=54),
        ),
    )

    CursesRenderer(screen).render(frame)

    assert screen.cells == {
        (0, 0): ".",
        (3, 1): "•",
        (2, 1): "·",
        (4, 2): "\\",
        (7, 3): "◆",
    }
    assert screen.refreshed == 1


def test_bottom_right_cell_and_offscreen_cells() -> None:
    screen = FakeScreen(width=10, height=5)
    frame = _frame(
        stars=(
            Star(col=9, row=4, brightness=Brightness.DIM),
            Star(col=12, row=1, brightness=Brightness.DIM),
        ),
        width=20,
    )

    CursesRenderer(screen).render(frame)

    assert screen.cells == {(9, 4): "."}


def test_curses_failure_becomes_render_error() -> None:
    screen = FakeScreen(fail=True)
    frame = _frame(stars=(Star(col=1, row=1),))
    with pytest.raises(RenderError):
        CursesRenderer(screen).render(frame)


def test_input_reports_quit_keys() -> None:
    assert CursesInput(FakeScreen(keys=[ord("x"), ord("q")])).poll_quit(0.0)
    assert CursesInput(FakeScreen(keys=[27])).poll_quit(0.0)
    assert not CursesInput(FakeScreen(keys=[ord("a")])).poll_quit(0.0)
    assert not CursesInput(FakeScreen()).poll_quit(0.0)


def test_input_records_resize_once() -> None:
    screen = FakeScreen(width=30, height=9, keys=[curses.KEY_RESIZE])
    poller = CursesInput(screen)

    assert not poller.poll_quit(0.0)
    assert poller.pending_resize() == (30, 9)
    assert poller.pending_resize() is None


class TtyStream:
    def isatty(self) -> bool:
        return True


class SessionScreen(FakeScreen):
    def __init__(self) -> None:
        super().__init__(width=40, height=12)
        self.keypad_calls = []

    def keypad(self, flag: bool) -> None:
        self.keypad_calls.append(flag)

    def nodelay(self, flag: bool) -> None:
        pass


def test_session_sets_escape_delay_without_touching_environment(monkeypatch) -> None:
    screen = SessionScreen()
    calls = []
    monkeypatch.delenv("ESCDELAY", raising=False)
    monkeypatch.setattr(terminal.locale, "setlocale", lambda *args: "C")
    monkeypatch.setattr(terminal.curses, "initscr", lambda: screen)
    monkeypatch.setattr(terminal.curses, "set_escdelay", lambda ms: calls.append(("escdelay", ms)))
    for name in ("noecho", "cbreak", "nocbreak", "echo", "endwin"):
        monkeypatch.setattr(terminal.curses, name, lambda name=name: calls.append(name))
    monkeypatch.setattr(terminal.curses, "curs_set", lambda visibility: calls.append(("curs_set", visibility)))
    monkeypatch.setattr(terminal.curses, "has_colors", lambda: False)

    with TerminalSession(TtyStream()) as session:
        assert session.active
        assert session.size() == (40, 12)
        assert "ESCDELAY" not in os.environ

    assert calls[0] == ("escdelay", 25)
    assert calls[-1] == "endwin"
    assert screen.keypad_calls == [True, False]
    assert not session.active
