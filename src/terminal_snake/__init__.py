"""Terminal snake: a segment-animated snake game on a character grid."""

from .enums import ColorTag, Difficulty, Direction, GameState, Key
from .food import Food
from .game import Game
from .snake import Snake, SnakeSegment

__all__ = [
    "ColorTag", "Difficulty", "Direction", "GameState", "Key",
    "Food", "Game", "Snake", "SnakeSegment",
]
