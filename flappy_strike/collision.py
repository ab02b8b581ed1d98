"""Axis-aligned box collision tests used by the simulation step."""

from __future__ import annotations

from typing import NamedTuple

from .config import BIRD_SIZE, BIRD_X, HITBOX_MARGIN


class Box(NamedTuple):
    """Axis-aligned rectangle in screen space (y grows downward)."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, x: float, y: float, w: float, h: float) -> "Box":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


def inset_box(box: Box, factor: float) -> Box:
    """Shrink box to `factor` of its width and height, keeping it centered."""
    margin = (1.0 - factor) / 2.0
    dx = box.width * margin
    dy = box.height * margin
    return Box(box.left + dx, box.top + dy, box.right - dx, box.bottom - dy)


def boxes_overlap(a: Box, b: Box) -> bool:
    """True unless one box lies entirely left, right, above or below the other.

    Touching edges count as overlap.
    """
    return not (
        a.left > b.right
        or a.right < b.left
        or a.top > b.bottom
        or a.bottom < b.top
    )


def point_in_box(x: float, y: float, box: Box) -> bool:
    """Inclusive point containment."""
    return box.left <= x <= box.right and box.top <= y <= box.bottom


def player_hitbox(y: float, factor: float = HITBOX_MARGIN) -> Box:
    """Collision box of the bird whose sprite top edge sits at `y`."""
    return inset_box(Box.from_size(BIRD_X, y, BIRD_SIZE, BIRD_SIZE), factor)
