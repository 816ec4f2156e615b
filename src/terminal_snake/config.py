# config.py
from __future__ import annotations
from dataclasses import dataclass, fields
import os
from typing import Dict, Tuple

from .enums import ColorTag, Difficulty

# ----- Board (character cells) -----
BOARD_W, BOARD_H = 80, 24

# ----- Snake -----
INITIAL_LENGTH = 3
MOVE_SPEED = 8.0          # segments per second
ASSUMED_FPS = 60.0        # update() advances as if called at this rate
GROWTH_FACTOR = 3         # tail is kept for this many grid steps after an eat
SELF_COLLISION_OFFSET = 3

# ----- Food -----
BLINK_RATE = 3.0          # glow cycles per second

# ----- Timing (seconds) -----
BASE_FRAME_TIME = 0.2
FRAME_DELAY = 0.010       # minimum time between render frames
INTRO_DURATION = 2.0
DEATH_FRAMES = 10
DEATH_FRAME_TIME = 0.1
LEVEL_SPEEDUP = 0.95

# ----- Scoring -----
POINTS_PER_DIFFICULTY = 10
LEVEL_SCORE_STEP = 50

# ----- High scores -----
HIGH_SCORE_FILE = "snake_high_scores.dat"
MAX_HIGH_SCORES = 10
MAX_NAME_BYTES = 256

# ----- Text -----
TITLE = "TERMINAL SNAKE"
SUBTITLE = "The Most Advanced Terminal Snake Game"
PRESS_KEY = "Press any key to continue"
CONTROLS = "Controls: Arrow Keys/WASD - Move, P - Pause, Q - Quit"
MENU_ITEMS = ("Start Game", "Difficulty", "High Scores", "How to Play", "Quit")
GAME_OVER_ITEMS = ("Play Again", "Return to Menu")
HELP_LINES = (
    "Steer the snake with the arrow keys or WASD.",
    "Eat the glowing food to grow and score points.",
    "Every few meals the level rises and the snake speeds up.",
    "Hitting the wall or your own tail ends the round.",
    "P pauses, Q quits.",
)

# ----- Difficulty -----
DIFFICULTY_MULTIPLIER: Dict[Difficulty, float] = {
    Difficulty.EASY: 0.8,
    Difficulty.MEDIUM: 1.0,
    Difficulty.HARD: 1.2,
    Difficulty.EXTREME: 1.5,
}

# ----- Colors (RGB, used by the pygame backend) -----
BG = (12, 12, 16)
PALETTE: Dict[ColorTag, Tuple[int, int, int]] = {
    ColorTag.DEFAULT:          (220, 220, 230),
    ColorTag.BORDER:           (120, 120, 140),
    ColorTag.SNAKE_HEAD:       (140, 255, 140),
    ColorTag.SNAKE_BODY_1:     (60, 200, 60),
    ColorTag.SNAKE_BODY_2:     (40, 150, 90),
    ColorTag.FOOD_BRIGHT:      (255, 90, 90),
    ColorTag.FOOD_MEDIUM:      (220, 70, 70),
    ColorTag.FOOD_DIM:         (170, 50, 50),
    ColorTag.FOOD_DARK:        (110, 30, 30),
    ColorTag.SCORE:            (240, 220, 90),
    ColorTag.TITLE:            (90, 220, 240),
    ColorTag.SUBTITLE:         (170, 170, 190),
    ColorTag.MENU_NORMAL:      (200, 200, 210),
    ColorTag.MENU_HIGHLIGHT:   (255, 255, 120),
    ColorTag.EXPLOSION_BRIGHT: (255, 240, 120),
    ColorTag.EXPLOSION_MEDIUM: (255, 150, 40),
    ColorTag.EXPLOSION_DARK:   (160, 60, 20),
    ColorTag.DEATH:            (255, 60, 60),
    ColorTag.DEATH_DARK:       (140, 20, 20),
}


# ----- Tunables -----
@dataclass
class Config:
    seed: int | None = None
    width: int = BOARD_W
    height: int = BOARD_H
    backend: str = "terminal"          # "terminal" (curses) or "pygame"
    high_score_path: str = HIGH_SCORE_FILE
    player_name: str = "Player"
    log_file: str = "snake.log"
    log_level: str = "INFO"
    min_frame_time: float = 0.02       # floor for the level-up speedup

    @classmethod
    def from_env(cls, environ=None) -> "Config":
        """
        Build a Config from SNAKE_* environment variables, e.g.
        SNAKE_BACKEND=pygame or SNAKE_SEED=42. Unset names keep the defaults.
        """
        environ = os.environ if environ is None else environ
        cfg = cls()
        for f in fields(cls):
            raw = environ.get(f"SNAKE_{f.name.upper()}")
            if raw is None:
                continue
            default = getattr(cfg, f.name)
            if f.name == "seed" or isinstance(default, int):
                value = int(raw)
            elif isinstance(default, float):
                value = float(raw)
            else:
                value = raw
            setattr(cfg, f.name, value)
        if cfg.backend not in ("terminal", "pygame"):
            raise ValueError(f"Unknown backend: {cfg.backend!r}")
        return cfg


CFG = Config()
