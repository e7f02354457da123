"""Angle helpers shared by both dial variants and the Qt widgets.

All angles are in degrees, measured clockwise from straight up, in screen
coordinates where ``y`` grows downward. Pointer mapping and label placement
both go through :func:`pointer_angle_clockwise` / :func:`point_on_circle` so
that only one reference direction exists in the package.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from ..errors import GeometryUnavailable

Point = Tuple[float, float]


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


def normalize_degrees(d: float) -> float:
    """Reduce ``d`` modulo 360 into ``[0, 360)``."""
    wrapped = math.fmod(float(d), 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    # -1e-17 + 360 rounds to 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def pointer_angle_clockwise(center: Point, point: Point) -> float:
    """Return the clockwise angle of ``point`` around ``center`` in ``[0, 360)``.

    Zero is straight up; 90 is to the right. A point exactly on the center
    reads as 0.
    """
    dx = float(point[0]) - float(center[0])
    dy = float(point[1]) - float(center[1])
    if dx == 0.0 and dy == 0.0:
        return 0.0
    # atan2(dx, -dy): swapping the arguments turns "counter-clockwise from
    # +x" into "clockwise from up" for a y-down screen.
    return normalize_degrees(math.degrees(math.atan2(dx, -dy)))


def point_on_circle(center: Point, radius: float, angle: float) -> Point:
    """Inverse of :func:`pointer_angle_clockwise` for a given ``radius``."""
    theta = math.radians(angle)
    x = float(center[0]) + radius * math.sin(theta)
    y = float(center[1]) - radius * math.cos(theta)
    return x, y


def angular_distance(a: float, b: float) -> float:
    """Shortest distance between two angles on the circle, in ``[0, 180]``."""
    d = normalize_degrees(a - b)
    return 360.0 - d if d > 180.0 else d


def is_within_arc(angle: float, arc_start: float, arc_sweep: float) -> bool:
    """Return ``True`` if ``angle`` lies on the clockwise arc from ``arc_start``.

    Both endpoints are included and arcs that wrap past 360 are handled.
    """
    if arc_sweep >= 360.0:
        return True
    return normalize_degrees(angle - arc_start) <= arc_sweep


def clamp_to_arc(angle: float, arc_start: float, arc_sweep: float) -> float:
    """Return the clockwise offset of ``angle`` from ``arc_start``, clamped to the arc.

    The result lies in ``[0, arc_sweep]``. Angles in the dead zone go to the
    nearer endpoint; an exact tie goes to the start.
    """
    if is_within_arc(angle, arc_start, arc_sweep):
        return normalize_degrees(angle - arc_start)
    to_start = angular_distance(angle, arc_start)
    to_end = angular_distance(angle, arc_start + arc_sweep)
    return 0.0 if to_start <= to_end else float(arc_sweep)


def nearest_angle_index(angle: float, angles: Sequence[float]) -> int:
    """Index of the entry in ``angles`` closest to ``angle`` (first wins ties)."""
    arr = np.asarray(angles, dtype=np.float64)
    if arr.size == 0:
        raise ValueError("angles must not be empty")
    diff = np.mod(arr - float(angle), 360.0)
    dist = np.minimum(diff, 360.0 - diff)
    # np.argmin returns the first occurrence of the minimum.
    return int(np.argmin(dist))


def rect_center(left: float, top: float, width: float, height: float) -> Point:
    """Center of a bounding rectangle.

    Raises :class:`~rotary_input.errors.GeometryUnavailable` for an empty or
    non-finite rectangle, which happens transiently during layout.
    """
    values = (left, top, width, height)
    if not all(math.isfinite(v) for v in values):
        raise GeometryUnavailable(f"non-finite bounding rectangle {values!r}")
    if width <= 0 or height <= 0:
        raise GeometryUnavailable(f"zero-size bounding rectangle {width}x{height}")
    return left + width / 2.0, top + height / 2.0


__all__ = [
    "Point",
    "clamp",
    "normalize_degrees",
    "pointer_angle_clockwise",
    "point_on_circle",
    "angular_distance",
    "is_within_arc",
    "clamp_to_arc",
    "nearest_angle_index",
    "rect_center",
]
