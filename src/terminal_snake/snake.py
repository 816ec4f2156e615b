# snake.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
import math
from typing import Deque, List, Tuple

import numpy as np  # type: ignore

from .config import (
    ASSUMED_FPS, GROWTH_FACTOR, INITIAL_LENGTH, MOVE_SPEED, SELF_COLLISION_OFFSET,
)
from .enums import ColorTag, Direction
from .food import Food

HEAD_GLYPHS = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
    Direction.NONE: "O",
}
BODY_GLYPH = "o"
TAIL_GLYPH = "*"
DEAD_HEAD_GLYPH = "X"
DEAD_BODY_GLYPH = "x"
PARTICLE_GLYPHS = ("*", "+", ".")


# ---------- Helpers ----------
def segment_color(index: int) -> ColorTag:
    if index == 0:
        return ColorTag.SNAKE_HEAD
    return ColorTag.SNAKE_BODY_1 if index % 2 == 0 else ColorTag.SNAKE_BODY_2


def explosion_color(intensity: float) -> ColorTag:
    if intensity > 0.7:
        return ColorTag.EXPLOSION_BRIGHT
    if intensity > 0.4:
        return ColorTag.EXPLOSION_MEDIUM
    return ColorTag.EXPLOSION_DARK


def ring_offsets(radius: int) -> List[Tuple[int, int]]:
    """Cells whose Euclidean distance from the center lies in [radius - 1, radius]."""
    cells = []
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            distance = math.sqrt(dx * dx + dy * dy)
            if radius - 1.0 <= distance <= radius:
                cells.append((dx, dy))
    return cells


# ---------- State ----------
@dataclass
class SnakeSegment:
    x: float
    y: float
    direction: Direction = Direction.RIGHT

    @property
    def cell(self) -> Tuple[int, int]:
        return (int(self.x), int(self.y))


class Snake:
    """
    Segment-based snake. body[0] is the head.

    update() is called once per logical tick and advances moveProgress by a
    fixed amount; the snake only moves a whole cell when moveProgress wraps
    past 1.0, which is also the only point where a queued turn takes effect.
    """

    def __init__(self, move_speed: float = MOVE_SPEED, growth: int = GROWTH_FACTOR) -> None:
        self.body: Deque[SnakeSegment] = deque()
        self.step = move_speed / ASSUMED_FPS
        self.growth = growth
        self.current_direction = Direction.RIGHT
        self.queued_direction = Direction.NONE
        self.growing = False
        self.growth_amount = 0
        self.move_progress = 0.0

    def initialize(self, start_x: int, start_y: int) -> None:
        self.body = deque(
            SnakeSegment(start_x - i, start_y, Direction.RIGHT) for i in range(INITIAL_LENGTH)
        )
        self.current_direction = Direction.RIGHT
        self.queued_direction = Direction.NONE
        self.growing = False
        self.growth_amount = 0
        self.move_progress = 0.0

    # Queries ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Tuple[int, int]:
        return self.body[0].cell

    def cells(self) -> List[Tuple[int, int]]:
        return [seg.cell for seg in self.body]

    def contains_position(self, x: int, y: int) -> bool:
        return any(seg.cell == (x, y) for seg in self.body)

    def check_food_collision(self, food: Food) -> bool:
        return self.head == food.position

    def check_self_collision(self) -> bool:
        # the three segments behind the head can never be hit by it
        head = self.head
        return any(
            self.body[i].cell == head for i in range(SELF_COLLISION_OFFSET, len(self.body))
        )

    # Commands -----------------------------------------------------------------
    def change_direction(self, direction: Direction) -> None:
        self.queued_direction = direction

    def grow(self) -> None:
        self.growing = True
        self.growth_amount += self.growth

    def update(self) -> bool:
        """Advance the animation; return True if the snake moved a whole cell."""
        self.move_progress += self.step
        if self.move_progress < 1.0:
            return False
        self.move_progress = 0.0

        if self.queued_direction is not Direction.NONE:
            if not self.queued_direction.is_opposite(self.current_direction):
                self.current_direction = self.queued_direction
            self.queued_direction = Direction.NONE

        head = self.body[0]
        dx, dy = self.current_direction.delta
        self.body.appendleft(SnakeSegment(head.x + dx, head.y + dy, self.current_direction))

        if self.growing:
            self.growth_amount -= 1
            if self.growth_amount <= 0:
                self.growing = False
        else:
            self.body.pop()

        self._update_segment_directions()
        return True

    def _update_segment_directions(self) -> None:
        """Point every body segment toward the segment in front of it."""
        for prev, curr in zip(list(self.body), list(self.body)[1:]):
            dx = prev.x - curr.x
            dy = prev.y - curr.y
            if abs(dx) > 1.5 or abs(dy) > 1.5:
                continue
            if abs(dx) > abs(dy):
                curr.direction = Direction.RIGHT if dx > 0 else Direction.LEFT
            elif abs(dy) > 0:
                curr.direction = Direction.DOWN if dy > 0 else Direction.UP

    # Drawing ------------------------------------------------------------------
    def head_display_position(self) -> Tuple[float, float]:
        """Head position pulled back along the direction of travel by moveProgress."""
        head = self.body[0]
        dx, dy = self.current_direction.delta
        return (head.x - dx * self.move_progress, head.y - dy * self.move_progress)

    def render(self, renderer) -> None:
        # head last: its interpolated cell usually overlaps body[1]
        last = len(self.body) - 1
        for i in range(last, 0, -1):
            seg = self.body[i]
            glyph = TAIL_GLYPH if i == last else BODY_GLYPH
            renderer.draw_char(int(seg.x), int(seg.y), glyph, segment_color(i))
        x, y = self.head_display_position()
        renderer.draw_char(int(x), int(y), HEAD_GLYPHS[self.current_direction], segment_color(0))

    def render_death(self, renderer, frame: int, max_frames: int, rng: np.random.Generator) -> None:
        """
        Explosion that travels from head to tail.

        Segment i starts exploding once overall progress passes
        (i / len) * 0.5. Before that it shows as damaged, during the explosion
        it is a ring of particles growing to radius 2, afterwards it is gone.
        """
        progress = frame / max_frames
        n = len(self.body)
        for i, seg in enumerate(self.body):
            local = progress - (i / n) * 0.5
            cx, cy = seg.cell
            if local <= 0:
                glyph = DEAD_HEAD_GLYPH if i == 0 else DEAD_BODY_GLYPH
                renderer.draw_char(cx, cy, glyph, segment_color(i))
            elif local < 1.0:
                color = explosion_color(1.0 - local)
                for dx, dy in ring_offsets(int(local * 3)):
                    glyph = PARTICLE_GLYPHS[int(rng.integers(len(PARTICLE_GLYPHS)))]
                    renderer.draw_char(cx + dx, cy + dy, glyph, color)
