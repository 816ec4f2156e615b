# input_handler.py
"""
Polling keyboard input.

The game calls poll() once at the start of every loop tick. poll() reads at
most one buffered key and caches it, and every query below answers from that
cached key, so asking is_up_pressed() and then direction() in the same tick
sees the same key.
"""
from __future__ import annotations
import curses
from collections import deque
from typing import Deque, Iterable, Optional

import pygame  # type: ignore

from .enums import Direction, Key

_KEY_DIRECTIONS = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}


class InputHandler:
    """Base class; backends only implement _read_key()."""

    def __init__(self) -> None:
        self.key: Optional[Key] = None

    def initialize(self) -> None:
        pass

    def _read_key(self) -> Optional[Key]:
        """Return the next buffered key without blocking, or None."""
        raise NotImplementedError

    def poll(self) -> Optional[Key]:
        self.key = self._read_key()
        return self.key

    def clear_keys(self) -> None:
        self.key = None
        while self._read_key() is not None:
            pass

    # Queries ------------------------------------------------------------------
    def direction(self) -> Direction:
        return _KEY_DIRECTIONS.get(self.key, Direction.NONE)

    def key_pressed(self) -> bool:
        return self.key is not None

    def is_up_pressed(self) -> bool:
        return self.key is Key.UP

    def is_down_pressed(self) -> bool:
        return self.key is Key.DOWN

    def is_left_pressed(self) -> bool:
        return self.key is Key.LEFT

    def is_right_pressed(self) -> bool:
        return self.key is Key.RIGHT

    def is_pause_pressed(self) -> bool:
        return self.key is Key.PAUSE

    def is_quit_pressed(self) -> bool:
        return self.key is Key.QUIT

    def is_enter_pressed(self) -> bool:
        return self.key is Key.ENTER

    def is_close_requested(self) -> bool:
        return self.key is Key.CLOSE


# ---------- Scripted ----------
class QueuedInput(InputHandler):
    """
    Feeds keys from a queue, one per poll. None entries stand for ticks
    with no key press.
    """

    def __init__(self, keys: Iterable[Optional[Key]] = ()) -> None:
        super().__init__()
        self.queue: Deque[Optional[Key]] = deque(keys)

    def push(self, *keys: Optional[Key]) -> None:
        self.queue.extend(keys)

    def _read_key(self) -> Optional[Key]:
        return self.queue.popleft() if self.queue else None

    def clear_keys(self) -> None:
        # Scripted ticks are not a buffer; only drop the current key.
        self.key = None


# ---------- Terminal (curses) ----------
def map_curses_key(code: int) -> Optional[Key]:
    if code == -1:
        return None
    if code in (curses.KEY_UP, ord("w"), ord("W")):
        return Key.UP
    if code in (curses.KEY_DOWN, ord("s"), ord("S")):
        return Key.DOWN
    if code in (curses.KEY_LEFT, ord("a"), ord("A")):
        return Key.LEFT
    if code in (curses.KEY_RIGHT, ord("d"), ord("D")):
        return Key.RIGHT
    if code in (ord("p"), ord("P")):
        return Key.PAUSE
    if code in (ord("q"), ord("Q")):
        return Key.QUIT
    if code in (curses.KEY_ENTER, 10, 13):
        return Key.ENTER
    if code == curses.KEY_RESIZE:
        return None
    return Key.OTHER


class CursesInput(InputHandler):
    """Reads from the renderer's curses screen (which is in nodelay mode)."""

    def __init__(self, renderer) -> None:
        super().__init__()
        self.renderer = renderer

    def _read_key(self) -> Optional[Key]:
        screen = self.renderer.screen
        if screen is None:
            return None
        return map_curses_key(screen.getch())


# ---------- Window (pygame) ----------
_PYGAME_KEYS = {
    pygame.K_UP: Key.UP, pygame.K_w: Key.UP,
    pygame.K_DOWN: Key.DOWN, pygame.K_s: Key.DOWN,
    pygame.K_LEFT: Key.LEFT, pygame.K_a: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT, pygame.K_d: Key.RIGHT,
    pygame.K_p: Key.PAUSE,
    pygame.K_q: Key.QUIT, pygame.K_ESCAPE: Key.QUIT,
    pygame.K_RETURN: Key.ENTER, pygame.K_KP_ENTER: Key.ENTER,
}


class PygameInput(InputHandler):
    """Buffers pygame key events; closing the window becomes Key.CLOSE."""

    def __init__(self) -> None:
        super().__init__()
        self.pending: Deque[Key] = deque()

    def _pump(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.pending.append(Key.CLOSE)
            elif event.type == pygame.KEYDOWN:
                self.pending.append(_PYGAME_KEYS.get(event.key, Key.OTHER))

    def _read_key(self) -> Optional[Key]:
        self._pump()
        return self.pending.popleft() if self.pending else None

    def clear_keys(self) -> None:
        self._pump()
        closing = Key.CLOSE in self.pending
        self.pending.clear()
        self.key = None
        if closing:
            self.pending.append(Key.CLOSE)


def make_input(backend: str, renderer) -> InputHandler:
    if backend == "pygame":
        return PygameInput()
    if backend == "terminal":
        return CursesInput(renderer)
    raise ValueError(f"Unknown backend: {backend!r}")
