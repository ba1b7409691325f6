"""Geometry and numeric rules shared by the transformation catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import GeometryError


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def box(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_magnitude(value: int, limit: int) -> int:
    return int(clamp(value, -limit, limit))


def scale_to_fit(
    width: int,
    height: int,
    maxwidth: int | None = None,
    maxheight: int | None = None,
) -> tuple[int, int]:
    """Shrink (width, height) to fit inside the bounds, preserving aspect.

    The width bound is applied first. The height bound is then checked against
    the already shrunk height, so the two factors compound rather than taking
    the smaller of two independent factors.
    """
    if not maxwidth or maxwidth <= 0:
        maxwidth = width
    if not maxheight or maxheight <= 0:
        maxheight = height

    w = float(width)
    h = float(height)
    if w > maxwidth:
        h = h * maxwidth / w
        w = float(maxwidth)
    if h > maxheight:
        w = w * maxheight / h
        h = float(maxheight)

    return max(1, math.floor(w)), max(1, math.floor(h))


def crop_rect(x1: float, y1: float, x2: float, y2: float, width: int, height: int) -> Rect:
    x1 = clamp(x1, 0.0, 1.0)
    y1 = clamp(y1, 0.0, 1.0)
    x2 = clamp(x2, 0.0, 1.0)
    y2 = clamp(y2, 0.0, 1.0)
    if x1 >= x2 or y1 >= y2:
        raise GeometryError(
            f"crop rectangle is empty or inverted: ({x1:g}, {y1:g}) -> ({x2:g}, {y2:g})"
        )
    # Offsets round half up and the extent is clipped to the image edge.
    x = _round_half_up(x1 * width)
    y = _round_half_up(y1 * height)
    return Rect(
        x=x,
        y=y,
        width=min(_round_half_up((x2 - x1) * width), width - x),
        height=min(_round_half_up((y2 - y1) * height), height - y),
    )
