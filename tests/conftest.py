import numpy as np  # type: ignore
import pytest

from terminal_snake.config import Config
from terminal_snake.game import Game
from terminal_snake.highscores import MemoryHighScoreStore
from terminal_snake.input_handler import QueuedInput
from terminal_snake.renderer import BufferRenderer


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def renderer():
    r = BufferRenderer()
    r.initialize(80, 24)
    return r


@pytest.fixture
def make_game(clock, rng):
    """Build an initialized game on an 80x24 board driven by the fake clock."""
    def _make(keys=(), store=None, **cfg):
        game = Game(
            renderer=BufferRenderer(),
            input_handler=QueuedInput(keys),
            store=store if store is not None else MemoryHighScoreStore(),
            rng=rng,
            config=Config(**cfg),
            clock=clock,
            sleep=clock.advance,
        )
        game.initialize()
        return game
    return _make
