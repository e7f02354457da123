"""Shared helpers for geometry and Qt interop."""

from .geometry import (
    Point,
    angular_distance,
    clamp,
    clamp_to_arc,
    is_within_arc,
    nearest_angle_index,
    normalize_degrees,
    point_on_circle,
    pointer_angle_clockwise,
    rect_center,
)

__all__ = [
    "Point",
    "angular_distance",
    "clamp",
    "clamp_to_arc",
    "is_within_arc",
    "nearest_angle_index",
    "normalize_degrees",
    "point_on_circle",
    "pointer_angle_clockwise",
    "rect_center",
]
