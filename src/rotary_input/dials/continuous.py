"""Value/angle mapping for continuous-range dials (zoom, EV, ISO, ...).

A :class:`~rotary_input.models.RangeConfig` lays ``[minimum, maximum]`` out
over a clockwise arc of ``sweep_degrees`` starting at ``start_angle_degrees``.
Angles returned here are *unwrapped*: with the default -135/270 layout they
run from -135 to 135 so they can be fed straight into a rotation transform.
"""

from __future__ import annotations

import math
from typing import Optional

from ..models import ContinuousCommand, DragSession, RangeConfig
from ..utils.geometry import Point, clamp, clamp_to_arc, pointer_angle_clockwise

# Absorbs float noise in span / step (e.g. 4 / 0.1 == 39.99999999999999).
_GRID_EPS = 1e-9
# Unwrapped angles from angle_for_value can overshoot the arc by float noise.
_ANGLE_EPS = 1e-9


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def grid_size(config: RangeConfig) -> int:
    """Index of the last grid value that still fits in the range."""
    return int(math.floor(config.span / config.step + _GRID_EPS))


def grid_value(index: int, config: RangeConfig) -> float:
    """Value at grid position ``index`` (``minimum`` is index 0).

    Decimal grids are rounded to strip float noise (0.1 * 3); other grids
    keep ``minimum + index * step`` exactly.
    """
    value = config.minimum + index * config.step
    if config.decimal_grid:
        value = round(value, config.precision)
    return clamp(value, config.minimum, config.maximum)


def quantize(value: float, config: RangeConfig) -> float:
    """Snap ``value`` to the nearest multiple of ``step`` from ``minimum``.

    The grid index rounds half away from zero, so halves go toward
    ``maximum``. The result is clamped to the last grid position at or below
    ``maximum``, so it is always on the grid.
    """
    index = _round_half_away((value - config.minimum) / config.step)
    index = max(0, min(grid_size(config), index))
    return grid_value(index, config)


def big_step(config: RangeConfig) -> float:
    """Step used by page up/down."""
    if config.page_step is not None:
        return config.page_step
    return max(config.step * 5, config.span / 10)


def angle_for_value(value: float, config: RangeConfig) -> float:
    """Map ``value`` onto ``[start, start + sweep]``; out-of-range values clamp."""
    v = clamp(value, config.minimum, config.maximum)
    fraction = (v - config.minimum) / config.span
    return config.start_angle_degrees + fraction * config.sweep_degrees


def value_for_angle(angle: float, config: RangeConfig) -> float:
    """Inverse of :func:`angle_for_value`, quantized to the step grid.

    ``angle`` may be unwrapped (as returned by :func:`angle_for_value`) or
    any other representative modulo 360. Angles in the dead zone clamp to the
    nearest end of the arc.
    """
    offset = angle - config.start_angle_degrees
    if -_ANGLE_EPS <= offset <= config.sweep_degrees + _ANGLE_EPS:
        offset = clamp(offset, 0.0, config.sweep_degrees)
    else:
        offset = clamp_to_arc(angle, config.start_angle_degrees, config.sweep_degrees)
    raw = config.minimum + offset / config.sweep_degrees * config.span
    return quantize(raw, config)


def apply_pointer_move(
    screen_point: Point,
    drag_session: Optional[DragSession],
    config: RangeConfig,
    center: Point,
) -> float:
    """Value under the pointer while dragging.

    Continuous dials track the absolute pointer angle; ``drag_session``
    is not consulted and never modified.
    """
    angle = pointer_angle_clockwise(center, screen_point)
    return value_for_angle(angle, config)


def apply_key_command(
    command: ContinuousCommand, current_value: float, config: RangeConfig
) -> float:
    """Apply a keyboard command; returns ``current_value`` itself on a no-op."""
    if command is ContinuousCommand.STEP_UP:
        target = current_value + config.step
    elif command is ContinuousCommand.STEP_DOWN:
        target = current_value - config.step
    elif command is ContinuousCommand.PAGE_UP:
        target = current_value + big_step(config)
    elif command is ContinuousCommand.PAGE_DOWN:
        target = current_value - big_step(config)
    elif command is ContinuousCommand.JUMP_TO_MIN:
        target = config.minimum
    elif command is ContinuousCommand.JUMP_TO_MAX:
        target = config.maximum
    else:
        raise ValueError(f"not a continuous dial command: {command!r}")
    result = quantize(target, config)
    if result == current_value:
        return current_value
    return result


def format_value(value: float, config: RangeConfig) -> str:
    """Readout text for ``value`` using the config's ``value_format``."""
    return config.value_format.format(value)


__all__ = [
    "grid_size",
    "grid_value",
    "quantize",
    "big_step",
    "angle_for_value",
    "value_for_angle",
    "apply_pointer_move",
    "apply_key_command",
    "format_value",
]
