import math

import pytest

from terminal_snake.enums import ColorTag
from terminal_snake.food import Food


def test_set_position_resets_animation():
    food = Food()
    food.update(0.3)
    food.set_position(7, 4)
    assert food.position == (7, 4)
    assert food.animation_time == 0.0
    assert food.glow_amount == 0.0


def test_glow_follows_sine_at_blink_rate():
    food = Food()
    food.update(1 / 12)          # quarter period at 3 Hz -> peak
    assert food.glow_amount == pytest.approx(1.0)
    food.update(1 / 6)           # three quarters -> trough
    assert food.glow_amount == pytest.approx(0.0, abs=1e-9)
    assert 0.0 <= food.glow_amount <= 1.0


@pytest.mark.parametrize("glow, glyph, color", [
    (0.95, "@", ColorTag.FOOD_BRIGHT),
    (0.8, "&", ColorTag.FOOD_MEDIUM),     # thresholds are strict
    (0.6, "&", ColorTag.FOOD_MEDIUM),
    (0.5, "%", ColorTag.FOOD_DIM),
    (0.3, "%", ColorTag.FOOD_DIM),
    (0.2, "#", ColorTag.FOOD_DARK),
    (0.0, "#", ColorTag.FOOD_DARK),
])
def test_four_glow_bands(renderer, glow, glyph, color):
    food = Food()
    food.set_position(3, 3)
    food.glow_amount = glow
    food.render(renderer)
    assert renderer.char_at(3, 3) == glyph
    assert renderer.color_at(3, 3) is color


def band_sequence(start: float, samples: int = 24):
    food = Food()
    food.update(start)
    seq = []
    for _ in range(samples):
        seq.append(food.appearance())
        food.update(1 / 3 / samples)
    return seq


def test_bands_repeat_every_period():
    period = 1 / 3
    assert band_sequence(0.01) == band_sequence(0.01 + period)
    assert {glyph for glyph, _ in band_sequence(0.01)} == {"@", "&", "%", "#"}


def test_glow_is_deterministic_for_a_given_time():
    a, b = Food(), Food()
    for _ in range(10):
        a.update(0.017)
    b.update(0.17)
    assert a.glow_amount == pytest.approx(b.glow_amount)
    assert a.glow_amount == pytest.approx((math.sin(0.17 * 3 * 2 * math.pi) + 1) / 2)
