# renderer.py
"""
Character-cell drawing surfaces.

Every backend draws into the same in-memory grid of (glyph, ColorTag) cells;
refresh() pushes the grid to the real output. Coordinates outside the grid are
dropped silently so game code never has to clip.
"""
from __future__ import annotations
import curses
import logging
from typing import Dict, List, Tuple

import pygame  # type: ignore

from .config import BG, PALETTE
from .enums import ColorTag

logger = logging.getLogger(__name__)

Cell = Tuple[str, ColorTag]
BLANK: Cell = (" ", ColorTag.DEFAULT)


# ---------- In-memory grid ----------
class BufferRenderer:
    """Renderer contract plus a plain grid; also the renderer used in tests."""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.cells: List[List[Cell]] = []
        self.initialized = False
        self.frames = 0  # number of refresh() calls

    def initialize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells = [[BLANK] * width for _ in range(height)]
        self.initialized = True

    def cleanup(self) -> None:
        self.initialized = False

    def clear(self) -> None:
        for row in self.cells:
            row[:] = [BLANK] * self.width

    def refresh(self) -> None:
        self.frames += 1

    # Drawing primitives -------------------------------------------------------
    def draw_char(self, x: int, y: int, glyph: str, color: ColorTag = ColorTag.DEFAULT) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y][x] = (glyph, color)

    def draw_text(self, x: int, y: int, text: str, color: ColorTag = ColorTag.DEFAULT) -> None:
        if not 0 <= y < self.height:
            return
        for i, ch in enumerate(text):
            self.draw_char(x + i, y, ch, color)

    def draw_rect(self, x: int, y: int, w: int, h: int, color: ColorTag = ColorTag.DEFAULT) -> None:
        for i in range(x, x + w):
            self.draw_char(i, y, "-", color)
            self.draw_char(i, y + h - 1, "-", color)
        for j in range(y, y + h):
            self.draw_char(x, j, "|", color)
            self.draw_char(x + w - 1, j, "|", color)
        for cx, cy in ((x, y), (x + w - 1, y), (x, y + h - 1), (x + w - 1, y + h - 1)):
            self.draw_char(cx, cy, "+", color)

    def draw_border(self) -> None:
        self.draw_rect(0, 0, self.width, self.height, ColorTag.BORDER)

    def draw_centered(self, y: int, text: str, color: ColorTag = ColorTag.DEFAULT) -> None:
        self.draw_text(self.width // 2 - len(text) // 2, y, text, color)

    # Inspection ---------------------------------------------------------------
    def char_at(self, x: int, y: int) -> str:
        return self.cells[y][x][0]

    def color_at(self, x: int, y: int) -> ColorTag:
        return self.cells[y][x][1]

    def row_text(self, y: int) -> str:
        return "".join(glyph for glyph, _ in self.cells[y])

    def screen_text(self) -> str:
        return "\n".join(self.row_text(y) for y in range(self.height))

    def find(self, glyph: str) -> List[Tuple[int, int]]:
        return [
            (x, y)
            for y, row in enumerate(self.cells)
            for x, (g, _) in enumerate(row)
            if g == glyph
        ]


# ---------- Terminal (curses) ----------
class CursesRenderer(BufferRenderer):
    """Blits the grid onto a curses screen; one color pair per ColorTag."""

    def __init__(self) -> None:
        super().__init__()
        self.screen = None
        self._attrs: Dict[ColorTag, int] = {}

    def initialize(self, width: int, height: int) -> None:
        super().initialize(width, height)
        self.screen = curses.initscr()
        curses.noecho()
        curses.cbreak()
        self.screen.keypad(True)
        self.screen.nodelay(True)
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")
        self._init_colors()
        rows, cols = self.screen.getmaxyx()
        if rows < height or cols < width:
            logger.warning("Terminal is %dx%d, game needs %dx%d", cols, rows, width, height)

    def _init_colors(self) -> None:
        self._attrs = {tag: 0 for tag in ColorTag}
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            bg = -1
        except curses.error:
            bg = curses.COLOR_BLACK
        spec = {
            ColorTag.DEFAULT:          (curses.COLOR_WHITE, 0),
            ColorTag.BORDER:           (curses.COLOR_WHITE, curses.A_DIM),
            ColorTag.SNAKE_HEAD:       (curses.COLOR_GREEN, curses.A_BOLD),
            ColorTag.SNAKE_BODY_1:     (curses.COLOR_GREEN, 0),
            ColorTag.SNAKE_BODY_2:     (curses.COLOR_CYAN, 0),
            ColorTag.FOOD_BRIGHT:      (curses.COLOR_RED, curses.A_BOLD),
            ColorTag.FOOD_MEDIUM:      (curses.COLOR_RED, 0),
            ColorTag.FOOD_DIM:         (curses.COLOR_MAGENTA, 0),
            ColorTag.FOOD_DARK:        (curses.COLOR_MAGENTA, curses.A_DIM),
            ColorTag.SCORE:            (curses.COLOR_YELLOW, curses.A_BOLD),
            ColorTag.TITLE:            (curses.COLOR_CYAN, curses.A_BOLD),
            ColorTag.SUBTITLE:         (curses.COLOR_WHITE, 0),
            ColorTag.MENU_NORMAL:      (curses.COLOR_WHITE, 0),
            ColorTag.MENU_HIGHLIGHT:   (curses.COLOR_YELLOW, curses.A_BOLD),
            ColorTag.EXPLOSION_BRIGHT: (curses.COLOR_YELLOW, curses.A_BOLD),
            ColorTag.EXPLOSION_MEDIUM: (curses.COLOR_YELLOW, 0),
            ColorTag.EXPLOSION_DARK:   (curses.COLOR_RED, curses.A_DIM),
            ColorTag.DEATH:            (curses.COLOR_RED, curses.A_BOLD),
            ColorTag.DEATH_DARK:       (curses.COLOR_RED, curses.A_DIM),
        }
        for pair, (tag, (fg, extra)) in enumerate(spec.items(), start=1):
            curses.init_pair(pair, fg, bg)
            self._attrs[tag] = curses.color_pair(pair) | extra

    def refresh(self) -> None:
        super().refresh()
        if self.screen is None:
            return
        for y, row in enumerate(self.cells):
            for x, (glyph, color) in enumerate(row):
                try:
                    self.screen.addstr(y, x, glyph, self._attrs.get(color, 0))
                except curses.error:
                    # writing the bottom-right cell moves the cursor off-screen
                    pass
        self.screen.refresh()

    def cleanup(self) -> None:
        if self.screen is None:
            return
        try:
            curses.curs_set(1)
        except curses.error:
            pass
        self.screen.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        self.screen = None
        super().cleanup()


# ---------- Window (pygame) ----------
class PygameRenderer(BufferRenderer):
    """Draws the grid as monospace glyphs into a pygame window."""

    def __init__(self, cell_w: int = 12, cell_h: int = 22, font_size: int = 20) -> None:
        super().__init__()
        self.cell_w = cell_w
        self.cell_h = cell_h
        self.font_size = font_size
        self.screen = None
        self.font = None
        self._glyphs: Dict[Cell, object] = {}

    def initialize(self, width: int, height: int) -> None:
        super().initialize(width, height)
        pygame.init()
        self.screen = pygame.display.set_mode((width * self.cell_w, height * self.cell_h))
        pygame.display.set_caption("Terminal Snake")
        self.font = pygame.font.SysFont("monospace", self.font_size, bold=True)

    def _glyph(self, cell: Cell):
        surf = self._glyphs.get(cell)
        if surf is None:
            glyph, color = cell
            surf = self.font.render(glyph, True, PALETTE[color])
            self._glyphs[cell] = surf
        return surf

    def refresh(self) -> None:
        super().refresh()
        if self.screen is None:
            return
        self.screen.fill(BG)
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell[0] == " ":
                    continue
                self.screen.blit(self._glyph(cell), (x * self.cell_w, y * self.cell_h))
        pygame.display.flip()

    def cleanup(self) -> None:
        if self.screen is None:
            return
        pygame.quit()
        self.screen = None
        self._glyphs.clear()
        super().cleanup()


def make_renderer(backend: str) -> BufferRenderer:
    if backend == "pygame":
        return PygameRenderer()
    if backend == "terminal":
        return CursesRenderer()
    raise ValueError(f"Unknown backend: {backend!r}")
