"""Per-dial drag state machines that turn :class:`DialEvent` streams into values.

Each adapter instance owns at most one :class:`~rotary_input.models.DragSession`
(Idle when ``None``, Dragging otherwise). Everything else, including the
current value, belongs to the caller and is passed in with every event.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from .dials import continuous, discrete
from .errors import GeometryUnavailable, InvalidLabel
from .models import (
    ContinuousCommand,
    DialEvent,
    DialOutput,
    DiscreteCommand,
    DragSession,
    EventType,
    JumpToLabel,
    RangeConfig,
    SelectionConfig,
)
from .utils.geometry import Point, pointer_angle_clockwise

logger = logging.getLogger(__name__)

_POINTER_EVENTS = (
    EventType.POINTER_DOWN,
    EventType.POINTER_MOVE,
    EventType.POINTER_UP,
    EventType.POINTER_CANCEL,
)


def _require_center(event: DialEvent) -> Point:
    if event.center is None:
        raise GeometryUnavailable("dial has no center (empty layout)")
    return event.center


def _require_point(event: DialEvent) -> Point:
    if event.screen_point is None:
        raise GeometryUnavailable(
            f"{event.type.value} event without a pointer position"
        )
    return event.screen_point


class _DialInput:
    """Shared drag lifecycle; subclasses supply the value semantics."""

    def __init__(
        self, hit_radius: Optional[float] = None, disabled: bool = False
    ) -> None:
        self.hit_radius = hit_radius
        self.disabled = disabled
        self._session: Optional[DragSession] = None

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def dragging(self) -> bool:
        return self._session is not None

    def handle(
        self, event: DialEvent, current: Union[float, str]
    ) -> Optional[DialOutput]:
        """Process one event; ``None`` means nothing changed."""
        if event.type in _POINTER_EVENTS:
            try:
                return self._handle_pointer(event, current)
            except GeometryUnavailable as exc:
                logger.debug("Skipping %s: %s", event.type.value, exc)
                return None
            except InvalidLabel as exc:
                logger.warning("Rejected %s: %s", event.type.value, exc)
                return None
        if event.type is EventType.KEY_COMMAND:
            if not self._idle_for(event):
                return None
            return self._on_key(event, current)
        if event.type is EventType.DIRECT_SELECT:
            if not self._idle_for(event):
                return None
            return self._on_direct_select(event, current)
        raise ValueError(f"unsupported event type {event.type!r}")

    def _idle_for(self, event: DialEvent) -> bool:
        if self.disabled:
            logger.debug("Ignoring %s on a disabled dial", event.type.value)
            return False
        if self.dragging:
            logger.debug("Ignoring %s during a drag", event.type.value)
            return False
        return True

    def _handle_pointer(
        self, event: DialEvent, current: Union[float, str]
    ) -> Optional[DialOutput]:
        if event.type is EventType.POINTER_DOWN:
            if self.disabled:
                return None
            center = _require_center(event)
            point = _require_point(event)
            if not self._hit(center, point):
                logger.debug("Pointer down at %r is outside the dial", point)
                return None
            session = DragSession(
                anchor_screen_angle=pointer_angle_clockwise(center, point),
                base_value_angle=self._rotation_of(current),
            )
            self._session = session
            return self._on_drag_start(session, current)
        if event.type is EventType.POINTER_MOVE:
            if self._session is None:
                return None
            return self._on_drag_move(
                _require_point(event), self._session, _require_center(event), current
            )
        # Up and cancel both commit.
        session = self._session
        if session is None:
            return None
        self._session = None
        return self._on_drag_end(event, session, current)

    def _hit(self, center: Point, point: Point) -> bool:
        if self.hit_radius is None:
            return True
        dx = point[0] - center[0]
        dy = point[1] - center[1]
        return math.hypot(dx, dy) <= self.hit_radius

    def _rotation_of(self, current: Union[float, str]) -> float:
        raise NotImplementedError

    def _on_drag_start(
        self, session: DragSession, current: Union[float, str]
    ) -> Optional[DialOutput]:
        return None

    def _on_drag_move(
        self,
        point: Point,
        session: DragSession,
        center: Point,
        current: Union[float, str],
    ) -> Optional[DialOutput]:
        raise NotImplementedError

    def _on_drag_end(
        self, event: DialEvent, session: DragSession, current: Union[float, str]
    ) -> Optional[DialOutput]:
        raise NotImplementedError

    def _on_key(
        self, event: DialEvent, current: Union[float, str]
    ) -> Optional[DialOutput]:
        raise NotImplementedError

    def _on_direct_select(
        self, event: DialEvent, current: Union[float, str]
    ) -> Optional[DialOutput]:
        logger.debug("%s does not support direct selection", type(self).__name__)
        return None


class ContinuousDialInput(_DialInput):
    """Drives a numeric value in ``config``'s range.

    The value follows the absolute pointer angle (clamped into the arc) and is
    emitted whenever it crosses a step boundary.
    """

    def __init__(
        self,
        config: RangeConfig,
        hit_radius: Optional[float] = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(hit_radius=hit_radius, disabled=disabled)
        self.config = config

    def _rotation_of(self, current: Union[float, str]) -> float:
        return continuous.angle_for_value(float(current), self.config)

    def _output(self, value: float) -> DialOutput:
        return DialOutput(value, continuous.angle_for_value(value, self.config))

    def _on_drag_move(
        self,
        point: Point,
        session: DragSession,
        center: Point,
        current: Union[float, str],
    ) -> Optional[DialOutput]:
        value = continuous.apply_pointer_move(point, session, self.config, center)
        if value == current:
            return None
        return self._output(value)

    def _on_drag_end(
        self, event: DialEvent, session: DragSession, current: Union[float, str]
    ) -> Optional[DialOutput]:
        # Moves already emitted every value change.
        logger.debug("Drag ended at %s", current)
        return None

    def _on_key(
        self, event: DialEvent, current: Union[float, str]
    ) -> Optional[DialOutput]:
        command = event.command
        if not isinstance(command, ContinuousCommand):
            logger.debug("Ignoring non-continuous command %r", command)
            return None
        value = continuous.apply_key_command(command, float(current), self.config)
        if value == current:
            return None
        return self._output(value)


class DiscreteDialInput(_DialInput):
    """Drives a label selection around a full circle.

    During a drag the knob follows the pointer delta and only
    :attr:`DialOutput.rotation` changes; the label is decided when the drag is
    released or cancelled.
    """

    def __init__(
        self,
        config: SelectionConfig,
        hit_radius: Optional[float] = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(hit_radius=hit_radius, disabled=disabled)
        self.config = config
        self._rotation: Optional[float] = None

    def _rotation_of(self, current: Union[float, str]) -> float:
        return discrete.rotation_for_label(str(current), self.config)

    def _on_drag_start(
        self, session: DragSession, current: Union[float, str]
    ) -> Optional[DialOutput]:
        self._rotation = session.base_value_angle
        return None

    def _on_drag_move(
        self,
        point: Point,
        session: DragSession,
        center: Point,
        current: Union[float, str],
    ) -> Optional[DialOutput]:
        self._rotation = discrete.apply_pointer_move(point, session, center)
        return DialOutput(current, self._rotation, committed=False)

    def _on_drag_end(
        self, event: DialEvent, session: DragSession, current: Union[float, str]
    ) -> Optional[DialOutput]:
        rotation = self._rotation
        if rotation is None:
            rotation = session.base_value_angle
        if event.screen_point is not None and event.center is not None:
            rotation = discrete.apply_pointer_move(
                event.screen_point, session, event.center
            )
        self._rotation = None
        label, snapped = discrete.snap_rotation(rotation, self.config)
        logger.info("Mode dial settled on %s (released at %.1f deg)", label, rotation)
        return DialOutput(label, snapped)

    def _on_key(
        self, event: DialEvent, current: Union[float, str]
    ) -> Optional[DialOutput]:
        command = event.command
        if not isinstance(command, (DiscreteCommand, JumpToLabel)):
            logger.debug("Ignoring non-selector command %r", command)
            return None
        try:
            label = discrete.apply_key_command(command, str(current), self.config)
        except InvalidLabel as exc:
            logger.warning("Rejected %r: %s", command, exc)
            return None
        if label == current:
            return None
        return DialOutput(label, discrete.rotation_for_label(label, self.config))

    def _on_direct_select(
        self, event: DialEvent, current: Union[float, str]
    ) -> Optional[DialOutput]:
        try:
            label = discrete.apply_direct_select(str(event.label), self.config)
        except InvalidLabel as exc:
            logger.warning("Rejected direct select: %s", exc)
            return None
        return DialOutput(label, discrete.rotation_for_label(label, self.config))


__all__ = ["ContinuousDialInput", "DiscreteDialInput"]
