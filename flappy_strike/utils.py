"""Small numeric and color helpers used by the renderer."""

from __future__ import annotations

import numpy as np


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def scale_color(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    """Scale an RGB color by factor, clamped to [0,255]."""
    r, g, b = color
    return (
        int(clamp(r * factor, 0, 255)),
        int(clamp(g * factor, 0, 255)),
        int(clamp(b * factor, 0, 255)),
    )


def vertical_gradient(
    w: int,
    h: int,
    top: tuple[int, int, int],
    bottom: tuple[int, int, int],
) -> np.ndarray:
    """Top-to-bottom linear gradient as a (w, h, 3) uint8 array for surfarray.

    Note the axis order: pygame's surfarray indexes pixels as [x, y].
    """
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    rows = np.asarray(top, dtype=np.float32) * (1.0 - t) + np.asarray(bottom, dtype=np.float32) * t
    column = np.clip(np.rint(rows), 0, 255).astype(np.uint8)
    return np.repeat(column[None, :, :], w, axis=0)


def tilt_degrees(velocity: float, per_velocity: float, limit: float) -> float:
    """Sprite rotation for a vertical velocity; nose up while rising."""
    return -clamp(velocity * per_velocity, -limit, limit)
