# game.py
from __future__ import annotations
import logging
import math
import time
from typing import Callable, List, Optional

import numpy as np  # type: ignore

from .config import (
    BASE_FRAME_TIME, CFG, CONTROLS, DEATH_FRAME_TIME, DEATH_FRAMES,
    DIFFICULTY_MULTIPLIER, FRAME_DELAY, GAME_OVER_ITEMS, HELP_LINES,
    INTRO_DURATION, LEVEL_SCORE_STEP, LEVEL_SPEEDUP, MAX_HIGH_SCORES, MENU_ITEMS,
    POINTS_PER_DIFFICULTY, PRESS_KEY, SUBTITLE, TITLE, Config,
)
from .enums import ColorTag, Difficulty, Direction, GameState
from .food import Food
from .highscores import HighScore, rank
from .snake import Snake
from .timing import FrameLimiter, StepGate

logger = logging.getLogger(__name__)

MENU_START, MENU_DIFFICULTY, MENU_HIGH_SCORES, MENU_HELP, MENU_QUIT = range(len(MENU_ITEMS))
PLAY_AGAIN, RETURN_TO_MENU = range(len(GAME_OVER_ITEMS))


# ---------- Rules ----------
def base_frame_time(difficulty: Difficulty) -> float:
    return BASE_FRAME_TIME / (1 + DIFFICULTY_MULTIPLIER[difficulty] * 0.5)


def points_per_food(difficulty: Difficulty) -> int:
    return POINTS_PER_DIFFICULTY * int(difficulty) + 1


def level_score_step(difficulty: Difficulty) -> int:
    return LEVEL_SCORE_STEP * (int(difficulty) + 1)


def pulse(t: float) -> float:
    """0..1 sine pulse used for blinking text."""
    return (math.sin(t) + 1) / 2


class ShutdownFlag:
    """Set from a signal handler, checked by Game.run() once per loop."""

    def __init__(self) -> None:
        self.signum: Optional[int] = None

    @property
    def requested(self) -> bool:
        return self.signum is not None

    def request(self, signum: int, frame=None) -> None:
        self.signum = signum


# ---------- Game ----------
class Game:
    """
    Owns the snake, the food, the score and the state machine.

    Each call to tick() polls input once and runs the handler for the current
    state. While PLAYING, the snake only advances when the step gate says
    frame_time has passed; everything is still redrawn every tick.
    """

    def __init__(
        self,
        renderer,
        input_handler,
        store,
        rng: Optional[np.random.Generator] = None,
        config: Config = CFG,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        shutdown: Optional[ShutdownFlag] = None,
    ) -> None:
        self.renderer = renderer
        self.input = input_handler
        self.store = store
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.config = config
        self.clock = clock
        self.shutdown = shutdown

        self.width = config.width
        self.height = config.height
        self.snake = Snake()
        self.food = Food()

        self.state = GameState.INTRO
        self.difficulty = Difficulty.MEDIUM
        self.score = 0
        self.level = 1
        self.high_score = 0
        self.high_scores: List[HighScore] = []
        self.frame_time = base_frame_time(self.difficulty)

        now = clock()
        self.gate = StepGate(self.frame_time, now)
        self.limiter = FrameLimiter(FRAME_DELAY, clock, sleep)

        # per-screen state, reset when the screen is entered
        self.state_entered_at = now
        self.menu_selection = 0
        self.menu_panel: Optional[int] = None   # MENU_HIGH_SCORES or MENU_HELP when open
        self.game_over_selection = 0
        self.death_frame = -1
        self.last_animated_at = now

    # ------------------------------------------------------------------ setup
    def initialize(self) -> None:
        self.renderer.initialize(self.width, self.height)
        self.input.initialize()
        self.snake.initialize(self.width // 2, self.height // 2)
        self.generate_food()
        self.update_difficulty(self.difficulty)
        self.load_high_scores()
        self.set_state(GameState.INTRO)

    def cleanup(self) -> None:
        self.renderer.cleanup()

    def reset_game(self) -> None:
        now = self.clock()
        self.score = 0
        self.level = 1
        self.snake.initialize(self.width // 2, self.height // 2)
        self.generate_food()
        self.gate.reset(now)
        self.last_animated_at = now
        self.update_difficulty(self.difficulty)

    # ------------------------------------------------------------------- loop
    def run(self) -> None:
        while self.state is not GameState.QUIT:
            if self.shutdown is not None and self.shutdown.requested:
                logger.info("Shutdown requested (signal %s)", self.shutdown.signum)
                break
            started = self.clock()
            self.tick()
            self.limiter.wait(started)

    def tick(self) -> None:
        now = self.clock()
        self.input.poll()
        if self.input.is_close_requested():
            self.set_state(GameState.QUIT)
            return
        handler = {
            GameState.INTRO: self.handle_intro,
            GameState.MENU: self.handle_menu,
            GameState.PLAYING: self.handle_playing,
            GameState.PAUSED: self.handle_paused,
            GameState.GAME_OVER: self.handle_game_over,
        }.get(self.state)
        if handler is not None:
            handler(now)

    def set_state(self, state: GameState) -> None:
        logger.debug("State %s -> %s", self.state.name, state.name)
        self.state = state
        self.state_entered_at = self.clock()
        if state is GameState.MENU:
            self.menu_selection = 0
            self.menu_panel = None
        elif state is GameState.GAME_OVER:
            self.game_over_selection = 0
            self.death_frame = -1

    # ------------------------------------------------------------- simulation
    def update(self, now: float) -> bool:
        """Run one logical step if frame_time has passed; return whether it ran."""
        if self.gate.poll(now) is None:
            return False
        self.snake.update()
        if self.snake.check_food_collision(self.food):
            self.eat()
        if self.check_collision():
            logger.info("Round over: score %d, level %d", self.score, self.level)
            self.save_high_score()
            self.set_state(GameState.GAME_OVER)
        return True

    def eat(self) -> None:
        self.snake.grow()
        self.score += points_per_food(self.difficulty)
        if self.score % level_score_step(self.difficulty) == 0:
            self.increment_level()
        self.generate_food()
        self.high_score = max(self.high_score, self.score)

    def check_collision(self) -> bool:
        if self.snake.check_self_collision():
            return True
        x, y = self.snake.head
        return x < 1 or x >= self.width - 1 or y < 1 or y >= self.height - 1

    def generate_food(self) -> None:
        # rejection sampling over the interior; the board is large next to the snake
        while True:
            x = int(self.rng.integers(1, self.width - 1))
            y = int(self.rng.integers(1, self.height - 1))
            if not self.snake.contains_position(x, y):
                break
        self.food.set_position(x, y)

    def update_difficulty(self, difficulty: Difficulty) -> None:
        self.difficulty = difficulty
        self.frame_time = base_frame_time(difficulty)
        self.gate.interval = self.frame_time
        logger.info("Difficulty %s, frame time %.4fs", difficulty.label, self.frame_time)

    def increment_level(self) -> None:
        self.level += 1
        self.frame_time = max(self.frame_time * LEVEL_SPEEDUP, self.config.min_frame_time)
        self.gate.interval = self.frame_time
        logger.info("Level %d, frame time %.4fs", self.level, self.frame_time)

    # ------------------------------------------------------------ high scores
    def load_high_scores(self) -> None:
        self.high_scores = rank(self.store.load())
        if self.high_scores:
            self.high_score = self.high_scores[0].score

    def save_high_score(self) -> None:
        if self.score <= 0:
            return
        entry = HighScore(self.config.player_name, self.score, self.difficulty)
        self.high_scores = rank(self.high_scores + [entry], MAX_HIGH_SCORES)
        try:
            self.store.save(self.high_scores)
        except OSError:
            logger.exception("Could not save high scores")

    # ----------------------------------------------------------------- states
    def handle_intro(self, now: float) -> None:
        elapsed = now - self.state_entered_at
        r = self.renderer
        r.clear()
        title_y, sub_y = self.height // 2 - 1, self.height // 2 + 1
        if elapsed < INTRO_DURATION:
            progress = elapsed / INTRO_DURATION
            r.draw_text(self.width // 2 - len(TITLE) // 2, title_y,
                        TITLE[:int(len(TITLE) * progress)], ColorTag.TITLE)
            if progress > 0.5:
                sub_progress = (progress - 0.5) * 2
                r.draw_text(self.width // 2 - len(SUBTITLE) // 2, sub_y,
                            SUBTITLE[:int(len(SUBTITLE) * sub_progress)], ColorTag.SUBTITLE)
        else:
            r.draw_centered(title_y, TITLE, ColorTag.TITLE)
            r.draw_centered(sub_y, SUBTITLE, ColorTag.SUBTITLE)
            color = ColorTag.MENU_HIGHLIGHT if pulse(elapsed * 1000 * 0.01) > 0.5 else ColorTag.MENU_NORMAL
            r.draw_centered(self.height // 2 + 3, PRESS_KEY, color)
            if self.input.key_pressed():
                self.set_state(GameState.MENU)
                self.input.clear_keys()
        r.refresh()

    def handle_menu(self, now: float) -> None:
        inp = self.input
        n = len(MENU_ITEMS)
        if self.menu_panel is not None:
            if inp.key_pressed():
                self.menu_panel = None
                inp.clear_keys()
        elif inp.is_up_pressed():
            self.menu_selection = (self.menu_selection - 1) % n
            inp.clear_keys()
        elif inp.is_down_pressed():
            self.menu_selection = (self.menu_selection + 1) % n
            inp.clear_keys()
        elif inp.is_left_pressed() or inp.is_right_pressed():
            if self.menu_selection == MENU_DIFFICULTY:
                step = -1 if inp.is_left_pressed() else 1
                self.update_difficulty(self.difficulty.cycle(step))
            inp.clear_keys()
        elif inp.is_enter_pressed():
            if self.menu_selection == MENU_START:
                self.reset_game()
                self.set_state(GameState.PLAYING)
            elif self.menu_selection in (MENU_HIGH_SCORES, MENU_HELP):
                self.menu_panel = self.menu_selection
            elif self.menu_selection == MENU_QUIT:
                self.set_state(GameState.QUIT)
            inp.clear_keys()

        if self.state is GameState.MENU:
            self.draw_menu()

    def handle_playing(self, now: float) -> None:
        self.process_input()
        if self.state is not GameState.PLAYING:
            return
        self.update(now)
        self.food.update(now - self.last_animated_at)
        self.last_animated_at = now
        self.render()

    def process_input(self) -> None:
        direction = self.input.direction()
        if direction is not Direction.NONE:
            self.snake.change_direction(direction)
        if self.input.is_pause_pressed():
            self.set_state(GameState.PAUSED)
        elif self.input.is_quit_pressed():
            self.set_state(GameState.QUIT)

    def handle_paused(self, now: float) -> None:
        r = self.renderer
        self.draw_playfield()
        msg, hint = "GAME PAUSED", "Press P to continue, Q to quit"
        msg_x, msg_y = self.width // 2 - len(msg) // 2, self.height // 2 - 1
        r.draw_rect(msg_x - 2, msg_y - 2, len(msg) + 4, 5, ColorTag.BORDER)
        r.draw_text(msg_x, msg_y, msg, ColorTag.MENU_HIGHLIGHT)
        r.draw_centered(self.height // 2 + 1, hint, ColorTag.MENU_NORMAL)
        r.refresh()

        # quitting from pause goes back to the menu, not out of the game
        if self.input.is_pause_pressed():
            self.set_state(GameState.PLAYING)
            self.last_animated_at = now
            self.input.clear_keys()
        elif self.input.is_quit_pressed():
            self.set_state(GameState.MENU)
            self.input.clear_keys()

    def handle_game_over(self, now: float) -> None:
        frame = int((now - self.state_entered_at) / DEATH_FRAME_TIME)
        if frame < DEATH_FRAMES:
            if frame != self.death_frame:
                self.death_frame = frame
                self.draw_death(frame)
            return

        inp = self.input
        if inp.is_up_pressed() or inp.is_down_pressed():
            self.game_over_selection = 1 - self.game_over_selection
            inp.clear_keys()
        elif inp.is_enter_pressed():
            if self.game_over_selection == PLAY_AGAIN:
                self.reset_game()
                self.set_state(GameState.PLAYING)
            else:
                self.set_state(GameState.MENU)
            inp.clear_keys()
            return
        self.draw_game_over(now)

    # ---------------------------------------------------------------- drawing
    def hud_text(self) -> str:
        return (f"Score: {self.score:,} | High Score: {self.high_score:,} | "
                f"Level: {self.level} | {self.difficulty.label}")

    def draw_playfield(self) -> None:
        r = self.renderer
        r.clear()
        r.draw_border()
        self.snake.render(r)
        self.food.render(r)
        r.draw_text(1, 0, self.hud_text(), ColorTag.SCORE)

    def render(self) -> None:
        self.draw_playfield()
        self.renderer.refresh()

    def draw_death(self, frame: int) -> None:
        r = self.renderer
        r.clear()
        r.draw_border()
        self.snake.render_death(r, frame, DEATH_FRAMES, self.rng)
        self.food.render(r)
        r.draw_text(1, 0, self.hud_text(), ColorTag.SCORE)
        r.refresh()

    def draw_game_over(self, now: float) -> None:
        r = self.renderer
        r.clear()
        elapsed_ms = (now - self.state_entered_at) * 1000
        color = ColorTag.DEATH if pulse(elapsed_ms * 0.005) > 0.5 else ColorTag.DEATH_DARK
        r.draw_centered(self.height // 2 - 4, "GAME OVER", color)
        r.draw_centered(self.height // 2 - 2, f"Final Score: {self.score:,}", ColorTag.SCORE)
        self._draw_options(GAME_OVER_ITEMS, self.game_over_selection, self.height // 2 + 2)
        r.refresh()

    def _draw_options(self, items, selected: int, top: int) -> None:
        for i, label in enumerate(items):
            if i == selected:
                self.renderer.draw_centered(top + i * 2, f"> {label} <", ColorTag.MENU_HIGHLIGHT)
            else:
                self.renderer.draw_centered(top + i * 2, label, ColorTag.MENU_NORMAL)

    def menu_labels(self) -> List[str]:
        labels = list(MENU_ITEMS)
        labels[MENU_DIFFICULTY] = f"Difficulty: {self.difficulty.label}"
        return labels

    def draw_menu(self) -> None:
        r = self.renderer
        r.clear()
        r.draw_centered(5, TITLE, ColorTag.TITLE)
        if self.menu_panel == MENU_HIGH_SCORES:
            self._draw_panel("HIGH SCORES", self.high_score_lines())
        elif self.menu_panel == MENU_HELP:
            self._draw_panel("HOW TO PLAY", list(HELP_LINES))
        else:
            self._draw_options(self.menu_labels(), self.menu_selection, 10)
        r.draw_centered(self.height - 3, CONTROLS, ColorTag.SUBTITLE)
        r.refresh()

    def high_score_lines(self) -> List[str]:
        if not self.high_scores:
            return ["No high scores yet"]
        return [
            f"{i:2d}. {entry.name[:16]:<16} {entry.score:>8,}  {entry.difficulty.label}"
            for i, entry in enumerate(self.high_scores, start=1)
        ]

    def _draw_panel(self, heading: str, lines: List[str]) -> None:
        r = self.renderer
        inner = max(len(heading), *(len(line) for line in lines))
        w, h = inner + 4, len(lines) + 4
        x, y = self.width // 2 - w // 2, 7
        r.draw_rect(x, y, w, h, ColorTag.BORDER)
        r.draw_centered(y + 1, heading, ColorTag.MENU_HIGHLIGHT)
        for i, line in enumerate(lines):
            r.draw_text(x + 2, y + 3 + i, line, ColorTag.MENU_NORMAL)
        r.draw_centered(y + h + 1, "Press any key to go back", ColorTag.SUBTITLE)
