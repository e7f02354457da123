"""Qt helper utilities: key translation and widget geometry."""

from typing import Dict, Optional

from PySide6 import QtCore

from ..models import ContinuousCommand, DiscreteCommand
from .geometry import Point, rect_center

Key = QtCore.Qt.Key

CONTINUOUS_KEYS: Dict[Key, ContinuousCommand] = {
    Key.Key_Right: ContinuousCommand.STEP_UP,
    Key.Key_Up: ContinuousCommand.STEP_UP,
    Key.Key_Left: ContinuousCommand.STEP_DOWN,
    Key.Key_Down: ContinuousCommand.STEP_DOWN,
    Key.Key_PageUp: ContinuousCommand.PAGE_UP,
    Key.Key_PageDown: ContinuousCommand.PAGE_DOWN,
    Key.Key_Home: ContinuousCommand.JUMP_TO_MIN,
    Key.Key_End: ContinuousCommand.JUMP_TO_MAX,
}

# Clockwise/right/up advances.
DISCRETE_KEYS: Dict[Key, DiscreteCommand] = {
    Key.Key_Right: DiscreteCommand.NEXT,
    Key.Key_Up: DiscreteCommand.NEXT,
    Key.Key_Left: DiscreteCommand.PREVIOUS,
    Key.Key_Down: DiscreteCommand.PREVIOUS,
    Key.Key_Home: DiscreteCommand.JUMP_TO_FIRST,
    Key.Key_End: DiscreteCommand.JUMP_TO_LAST,
}


def _as_key(key: object) -> Optional[Key]:
    if isinstance(key, Key):
        return key
    try:
        return Key(int(key))  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None


def continuous_command_for_key(key: object) -> Optional[ContinuousCommand]:
    """Command for a :class:`QtCore.Qt.Key` (or its int value), if any."""
    qt_key = _as_key(key)
    return CONTINUOUS_KEYS.get(qt_key) if qt_key is not None else None


def discrete_command_for_key(key: object) -> Optional[DiscreteCommand]:
    """Command for a :class:`QtCore.Qt.Key` (or its int value), if any."""
    qt_key = _as_key(key)
    return DISCRETE_KEYS.get(qt_key) if qt_key is not None else None


def qrect_center(rect: QtCore.QRectF) -> Point:
    """Center of ``rect``; raises ``GeometryUnavailable`` when it is empty."""
    return rect_center(rect.left(), rect.top(), rect.width(), rect.height())


def qpoint_to_tuple(point: QtCore.QPointF) -> Point:
    return float(point.x()), float(point.y())


__all__ = [
    "CONTINUOUS_KEYS",
    "DISCRETE_KEYS",
    "continuous_command_for_key",
    "discrete_command_for_key",
    "qrect_center",
    "qpoint_to_tuple",
]
