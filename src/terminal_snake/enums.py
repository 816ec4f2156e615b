# enums.py
from enum import Enum, IntEnum
from typing import Tuple


class Direction(Enum):
    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) for one grid step; y grows downward."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def is_opposite(self, other: "Direction") -> bool:
        return self is not Direction.NONE and other is self.opposite


_DELTAS = {
    Direction.NONE: (0, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.NONE: Direction.NONE,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class GameState(Enum):
    INTRO = "intro"
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    QUIT = "quit"


class Difficulty(IntEnum):
    EASY = 0
    MEDIUM = 1
    HARD = 2
    EXTREME = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def cycle(self, step: int) -> "Difficulty":
        return Difficulty((self + step) % len(Difficulty))


class ColorTag(Enum):
    DEFAULT = 0
    BORDER = 1
    SNAKE_HEAD = 2
    SNAKE_BODY_1 = 3
    SNAKE_BODY_2 = 4
    FOOD_BRIGHT = 5
    FOOD_MEDIUM = 6
    FOOD_DIM = 7
    FOOD_DARK = 8
    SCORE = 9
    TITLE = 10
    SUBTITLE = 11
    MENU_NORMAL = 12
    MENU_HIGHLIGHT = 13
    EXPLOSION_BRIGHT = 14
    EXPLOSION_MEDIUM = 15
    EXPLOSION_DARK = 16
    DEATH = 17
    DEATH_DARK = 18


class Key(Enum):
    """Logical keys the game reacts to; backends map raw key codes onto these."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAUSE = "pause"
    QUIT = "quit"
    ENTER = "enter"
    CLOSE = "close"   # window closed
    OTHER = "other"
