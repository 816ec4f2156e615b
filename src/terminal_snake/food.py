# food.py
import math
from typing import Tuple

from .config import BLINK_RATE
from .enums import ColorTag

# (threshold, glyph, color), brightest first; glow must be strictly above threshold
GLOW_BANDS: Tuple[Tuple[float, str, ColorTag], ...] = (
    (0.8, "@", ColorTag.FOOD_BRIGHT),
    (0.5, "&", ColorTag.FOOD_MEDIUM),
    (0.2, "%", ColorTag.FOOD_DIM),
)
DARK_BAND: Tuple[str, ColorTag] = ("#", ColorTag.FOOD_DARK)


class Food:
    """A single food cell that pulses between four brightness bands."""

    def __init__(self, blink_rate: float = BLINK_RATE) -> None:
        self.x = 0
        self.y = 0
        self.blink_rate = blink_rate
        self.animation_time = 0.0
        self.glow_amount = 0.0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        self.animation_time = 0.0
        self.glow_amount = 0.0

    def update(self, delta_time: float) -> None:
        self.animation_time += delta_time
        self.glow_amount = (math.sin(self.animation_time * self.blink_rate * 2 * math.pi) + 1) / 2

    def appearance(self) -> Tuple[str, ColorTag]:
        for threshold, glyph, color in GLOW_BANDS:
            if self.glow_amount > threshold:
                return glyph, color
        return DARK_BAND

    def render(self, renderer) -> None:
        glyph, color = self.appearance()
        renderer.draw_char(self.x, self.y, glyph, color)
