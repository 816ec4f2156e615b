import pytest

from terminal_snake.config import Config


def test_defaults():
    cfg = Config.from_env({})
    assert (cfg.width, cfg.height) == (80, 24)
    assert cfg.backend == "terminal"
    assert cfg.seed is None


def test_env_overrides():
    cfg = Config.from_env({
        "SNAKE_SEED": "42",
        "SNAKE_BACKEND": "pygame",
        "SNAKE_MIN_FRAME_TIME": "0.05",
        "SNAKE_WIDTH": "60",
        "SNAKE_PLAYER_NAME": "ada",
    })
    assert cfg.seed == 42
    assert cfg.backend == "pygame"
    assert cfg.min_frame_time == 0.05
    assert cfg.width == 60
    assert cfg.player_name == "ada"


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        Config.from_env({"SNAKE_BACKEND": "braille"})
