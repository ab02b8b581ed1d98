"""Game entities.

Plain records for the bird, pipe pairs, crates and projectiles. Each one knows
how to move itself by one tick and which boxes it occupies; drawing lives in
``render`` and the rules that tie them together live in ``world``.
"""

from __future__ import annotations

from enum import Enum

from .collision import Box, player_hitbox
from .config import (
    BIRD_SIZE,
    BIRD_X,
    BOUNDS_TOLERANCE,
    CRATE_SIZE,
    PIPE_WIDTH,
    PROJECTILE_SPEED,
    WINDOW_HEIGHT,
)


class GameStatus(Enum):
    START = "START"
    COUNTDOWN = "COUNTDOWN"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"


class Player:
    """The bird. Horizontal position is fixed at BIRD_X."""

    def __init__(self, y: float) -> None:
        self.y = float(y)
        self.velocity = 0.0
        self.alive = True

    @classmethod
    def centered(cls, play_height: int = WINDOW_HEIGHT) -> "Player":
        return cls(play_height / 2)

    def flap(self, jump_strength: float) -> None:
        self.velocity = jump_strength

    def integrate(self, gravity: float) -> None:
        # Semi-implicit Euler: velocity first, then position with the new velocity.
        self.velocity += gravity
        self.y += self.velocity

    def out_of_bounds(self, play_height: float, tolerance: float = BOUNDS_TOLERANCE) -> bool:
        return self.y < -tolerance or self.y > play_height + tolerance

    def hitbox(self) -> Box:
        return player_hitbox(self.y)

    @property
    def center(self) -> tuple[float, float]:
        return BIRD_X + BIRD_SIZE / 2, self.y + BIRD_SIZE / 2


class Pipe:
    """A pipe pair with a fixed-size gap between `top_height` and `bottom_y`."""

    def __init__(self, x: float, top_height: float, gap: float, width: float = PIPE_WIDTH) -> None:
        self.x = float(x)
        self.top_height = top_height
        self.bottom_y = top_height + gap
        self.width = width
        self.scored = False

    @property
    def gap(self) -> float:
        return self.bottom_y - self.top_height

    @property
    def trailing_edge(self) -> float:
        return self.x + self.width

    def scroll(self, speed: float) -> None:
        self.x -= speed

    def top_box(self, tolerance: float = BOUNDS_TOLERANCE) -> Box:
        # Segments reach into the out-of-bounds band so the bird can't sneak over them.
        return Box(self.x, -tolerance, self.x + self.width, self.top_height)

    def bottom_box(self, play_height: float, tolerance: float = BOUNDS_TOLERANCE) -> Box:
        return Box(self.x, self.bottom_y, self.x + self.width, play_height + tolerance)

    def offscreen(self) -> bool:
        return self.trailing_edge <= 0


class Crate:
    """A floating bonus target; shot crates stay in the list until they scroll off."""

    def __init__(self, x: float, y: float, size: float = CRATE_SIZE) -> None:
        self.x = float(x)
        self.y = float(y)
        self.size = size
        self.active = True

    def scroll(self, speed: float) -> None:
        self.x -= speed

    def box(self) -> Box:
        return Box.from_size(self.x, self.y, self.size, self.size)

    def offscreen(self) -> bool:
        return self.x + self.size <= 0


class Projectile:
    def __init__(self, x: float, y: float, speed: float = PROJECTILE_SPEED) -> None:
        self.x = float(x)
        self.y = float(y)
        self.speed = speed
        self.active = True

    def advance(self) -> None:
        self.x += self.speed

    def offscreen(self, play_width: float) -> bool:
        return self.x >= play_width
