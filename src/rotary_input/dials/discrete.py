"""Label selection for discrete mode dials (AUTO/P/A/S/M and friends)."""

from __future__ import annotations

from typing import Dict, Tuple

from ..errors import InvalidLabel
from ..models import (
    DiscreteCommand,
    DragSession,
    JumpToLabel,
    SelectionConfig,
    SelectorCommand,
)
from ..utils.geometry import (
    Point,
    nearest_angle_index,
    normalize_degrees,
    point_on_circle,
    pointer_angle_clockwise,
)


def rotation_for_label(label: str, config: SelectionConfig) -> float:
    """Rotation that puts the knob's pip on ``label``."""
    return config.angles[config.index_of(label)]


def label_for_rotation(rotation: float, config: SelectionConfig) -> str:
    """Label nearest to ``rotation``; the first declared label wins ties."""
    return config.labels[nearest_angle_index(rotation, config.angles)]


def apply_pointer_move(
    screen_point: Point, drag_session: DragSession, center: Point
) -> float:
    """Unsnapped knob rotation during a drag.

    Only the change in pointer angle since the drag began is applied, so the
    knob does not jump to the pointer when the drag starts.
    """
    current = pointer_angle_clockwise(center, screen_point)
    delta = current - drag_session.anchor_screen_angle
    return normalize_degrees(drag_session.base_value_angle + delta)


def snap_rotation(rotation: float, config: SelectionConfig) -> Tuple[str, float]:
    """Nearest label to ``rotation`` and the exact rotation of that label."""
    label = label_for_rotation(rotation, config)
    return label, rotation_for_label(label, config)


def commit_drag(rotation: float, config: SelectionConfig) -> str:
    """Label a drag ending at ``rotation`` settles on."""
    label, _ = snap_rotation(rotation, config)
    return label


def apply_key_command(
    command: SelectorCommand, current_label: str, config: SelectionConfig
) -> str:
    """Apply a keyboard command.

    Next/previous walk ``config.labels`` in declaration order and wrap,
    independent of the label angles.
    """
    if isinstance(command, JumpToLabel):
        return apply_direct_select(command.label, config)
    count = config.count
    index = config.index_of(current_label)
    if command is DiscreteCommand.NEXT:
        return config.labels[(index + 1) % count]
    if command is DiscreteCommand.PREVIOUS:
        return config.labels[(index - 1 + count) % count]
    if command is DiscreteCommand.JUMP_TO_FIRST:
        return config.labels[0]
    if command is DiscreteCommand.JUMP_TO_LAST:
        return config.labels[-1]
    raise ValueError(f"not a selector command: {command!r}")


def apply_direct_select(label: str, config: SelectionConfig) -> str:
    """Select ``label`` as if its button on the label ring was clicked."""
    if label not in config.labels:
        raise InvalidLabel(label, config.labels)
    return label


def label_positions(
    config: SelectionConfig, center: Point, radius: float
) -> Dict[str, Point]:
    """Screen position of every label on a fixed ring around ``center``."""
    return {
        label: point_on_circle(center, radius, angle)
        for label, angle in zip(config.labels, config.angles)
    }


__all__ = [
    "rotation_for_label",
    "label_for_rotation",
    "apply_pointer_move",
    "snap_rotation",
    "commit_drag",
    "apply_key_command",
    "apply_direct_select",
    "label_positions",
]
