"""Dataclasses describing dial configuration, drag state, events and results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from enum import Enum
import json
import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import ConfigError, InvalidLabel
from .utils.geometry import Point, normalize_degrees

# Hand-tuned mode dial spacing: AUTO is wide, so the A-S gap is widened a
# little to keep the chips from crowding.
MODE_DIAL_LABELS: Tuple[str, ...] = ("AUTO", "P", "A", "S", "M")
MODE_DIAL_ANGLES: Dict[str, float] = {
    "AUTO": 0.0,
    "P": 68.0,
    "A": 152.0,
    "S": 208.0,
    "M": 296.0,
}

_MAX_DECIMALS = 12
_RANGE_FIELDS = (
    "minimum",
    "maximum",
    "step",
    "sweep_degrees",
    "start_angle_degrees",
    "page_step",
    "value_format",
    "label",
)


def _decimals(x: float) -> int:
    exponent = Decimal(repr(float(x))).normalize().as_tuple().exponent
    if not isinstance(exponent, int):  # 'n', 'N', 'F' for nan/inf
        return 0
    return min(_MAX_DECIMALS, max(0, -exponent))


def _require_finite(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ConfigError(f"{name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class RangeConfig:
    """Legal value space of a continuous dial.

    ``start_angle_degrees`` is where ``minimum`` sits (clockwise from up) and
    the value range is laid out over ``sweep_degrees`` clockwise from there.
    """

    minimum: float
    maximum: float
    step: float
    sweep_degrees: float = 270.0
    start_angle_degrees: float = -135.0
    page_step: Optional[float] = None  # None: max(step * 5, span / 10)
    value_format: str = "{:g}"
    label: str = ""

    def __post_init__(self) -> None:
        for name in ("minimum", "maximum", "step", "sweep_degrees"):
            object.__setattr__(self, name, _require_finite(name, getattr(self, name)))
        object.__setattr__(
            self,
            "start_angle_degrees",
            _require_finite("start_angle_degrees", self.start_angle_degrees),
        )
        if not self.minimum < self.maximum:
            raise ConfigError(
                f"minimum ({self.minimum}) must be less than maximum ({self.maximum})"
            )
        if self.step <= 0:
            raise ConfigError(f"step must be positive, got {self.step}")
        if not 0 < self.sweep_degrees <= 360:
            raise ConfigError(
                f"sweep_degrees must be in (0, 360], got {self.sweep_degrees}"
            )
        if self.page_step is not None:
            page = _require_finite("page_step", self.page_step)
            if page <= 0:
                raise ConfigError(f"page_step must be positive, got {page}")
            object.__setattr__(self, "page_step", page)
        if not isinstance(self.value_format, str):
            raise ConfigError(
                f"value_format must be a string, got {self.value_format!r}"
            )
        try:
            self.value_format.format(self.minimum)
        except (IndexError, KeyError, ValueError) as exc:
            raise ConfigError(f"invalid value_format {self.value_format!r}") from exc

    @property
    def span(self) -> float:
        return self.maximum - self.minimum

    @property
    def end_angle_degrees(self) -> float:
        return self.start_angle_degrees + self.sweep_degrees

    @property
    def precision(self) -> int:
        """Decimal places needed to represent any grid value exactly."""
        return max(_decimals(self.minimum), _decimals(self.step))

    @property
    def decimal_grid(self) -> bool:
        """``False`` for steps like 1/3 that have no short decimal form."""
        return self.precision < _MAX_DECIMALS

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> "RangeConfig":
        if not isinstance(data, Mapping):
            raise ConfigError(f"range config must be a mapping, got {data!r}")
        missing = [k for k in ("minimum", "maximum", "step") if k not in data]
        if missing:
            raise ConfigError(f"range config is missing {', '.join(missing)}")
        kwargs = {k: data[k] for k in _RANGE_FIELDS if k in data}
        return RangeConfig(**kwargs)  # type: ignore[arg-type]


@dataclass(frozen=True)
class SelectionConfig:
    """Ordered labels of a discrete dial and the angle each one sits at.

    ``angles`` runs parallel to ``labels``. Use :meth:`create` to get even
    spacing with optional per-label overrides.
    """

    labels: Tuple[str, ...]
    angles: Tuple[float, ...]

    def __post_init__(self) -> None:
        labels = tuple(self.labels)
        if not labels:
            raise ConfigError("a selection needs at least one label")
        for label in labels:
            if not isinstance(label, str) or not label:
                raise ConfigError(f"labels must be non-empty strings, got {label!r}")
        seen = set()
        for label in labels:
            if label in seen:
                raise ConfigError(f"duplicate label {label!r}")
            seen.add(label)
        angles = tuple(self.angles)
        if len(angles) != len(labels):
            raise ConfigError(f"expected {len(labels)} angles, got {len(angles)}")
        angles = tuple(
            normalize_degrees(_require_finite(f"angle of {label!r}", a))
            for label, a in zip(labels, angles)
        )
        object.__setattr__(self, "labels", labels)
        object.__setattr__(self, "angles", angles)

    @classmethod
    def create(
        cls,
        labels: Sequence[str],
        angles: Optional[Mapping[str, float]] = None,
    ) -> "SelectionConfig":
        """Evenly space ``labels`` from 0 degrees, then apply ``angles`` overrides."""
        labels = tuple(labels)
        if not labels:
            raise ConfigError("a selection needs at least one label")
        spacing = 360.0 / len(labels)
        resolved = [i * spacing for i in range(len(labels))]
        for label, angle in (angles or {}).items():
            if label not in labels:
                raise ConfigError(f"angle override for unknown label {label!r}")
            resolved[labels.index(label)] = angle
        return cls(labels=labels, angles=tuple(resolved))

    @property
    def angles_degrees(self) -> Dict[str, float]:
        return dict(zip(self.labels, self.angles))

    @property
    def count(self) -> int:
        return len(self.labels)

    def index_of(self, label: str) -> int:
        try:
            return self.labels.index(label)
        except ValueError:
            raise InvalidLabel(label, self.labels) from None

    def to_dict(self) -> Dict[str, object]:
        return {"labels": list(self.labels), "angles": self.angles_degrees}

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> "SelectionConfig":
        if not isinstance(data, Mapping):
            raise ConfigError(f"selection config must be a mapping, got {data!r}")
        labels = data.get("labels")
        if not isinstance(labels, (list, tuple)):
            raise ConfigError("selection config needs a list of labels")
        angles = data.get("angles") or {}
        if not isinstance(angles, Mapping):
            raise ConfigError("selection angles must be a mapping of label to angle")
        return SelectionConfig.create(labels, angles)


def mode_dial_config() -> SelectionConfig:
    """The AUTO/P/A/S/M program dial with its hand-tuned label angles."""
    return SelectionConfig.create(MODE_DIAL_LABELS, MODE_DIAL_ANGLES)


@dataclass(frozen=True)
class DragSession:
    """Where a drag began: pointer angle and the dial angle at that moment."""

    anchor_screen_angle: float
    base_value_angle: float


class ContinuousCommand(Enum):
    STEP_UP = "step_up"
    STEP_DOWN = "step_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    JUMP_TO_MIN = "jump_to_min"
    JUMP_TO_MAX = "jump_to_max"


class DiscreteCommand(Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    JUMP_TO_FIRST = "jump_to_first"
    JUMP_TO_LAST = "jump_to_last"


@dataclass(frozen=True)
class JumpToLabel:
    """Keyboard-style command selecting ``label`` directly."""

    label: str


SelectorCommand = Union[DiscreteCommand, JumpToLabel]
Command = Union[ContinuousCommand, DiscreteCommand, JumpToLabel]


class EventType(Enum):
    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    POINTER_CANCEL = "pointer_cancel"
    KEY_COMMAND = "key_command"
    DIRECT_SELECT = "direct_select"


@dataclass(frozen=True)
class DialEvent:
    """A normalized input event.

    Pointer events carry ``screen_point`` and the dial ``center`` in the same
    coordinate space; ``center`` may be ``None`` when the layout has no size
    yet. Key events carry ``command`` and direct selects carry ``label``.
    """

    type: EventType
    screen_point: Optional[Point] = None
    center: Optional[Point] = None
    command: Optional[Command] = None
    label: Optional[str] = None

    @classmethod
    def pointer_down(cls, screen_point: Point, center: Optional[Point]) -> "DialEvent":
        return cls(EventType.POINTER_DOWN, screen_point=screen_point, center=center)

    @classmethod
    def pointer_move(cls, screen_point: Point, center: Optional[Point]) -> "DialEvent":
        return cls(EventType.POINTER_MOVE, screen_point=screen_point, center=center)

    @classmethod
    def pointer_up(
        cls, screen_point: Optional[Point] = None, center: Optional[Point] = None
    ) -> "DialEvent":
        return cls(EventType.POINTER_UP, screen_point=screen_point, center=center)

    @classmethod
    def pointer_cancel(cls) -> "DialEvent":
        return cls(EventType.POINTER_CANCEL)

    @classmethod
    def key(cls, command: Command) -> "DialEvent":
        return cls(EventType.KEY_COMMAND, command=command)

    @classmethod
    def direct_select(cls, label: str) -> "DialEvent":
        return cls(EventType.DIRECT_SELECT, label=label)


@dataclass(frozen=True)
class DialOutput:
    """What a dial emits back to its owner.

    ``value`` is the semantic value (number or label); ``rotation`` is the
    angle to draw. While a selector drag is in progress ``committed`` is
    ``False`` and ``rotation`` is not snapped to a label.
    """

    value: Union[float, str]
    rotation: float
    committed: bool = True


def _default_dials() -> List[RangeConfig]:
    return [
        RangeConfig(1.0, 5.0, 0.1, value_format="{:.1f}x", label="Zoom"),
        RangeConfig(-3.0, 3.0, 0.5, value_format="{:+g}", label="EV"),
        RangeConfig(50.0, 800.0, 10.0, value_format="ISO {:g}", label="ISO"),
        RangeConfig(0.0, 1.0, 0.01, value_format="{:.2f}", label="Focus"),
    ]


@dataclass
class AppConfig:
    """Configuration of the demo window: which dials exist and their ranges.

    Only configuration is stored here, never the current dial values.
    """

    dials: List[RangeConfig] = field(default_factory=_default_dials)
    modes: SelectionConfig = field(default_factory=mode_dial_config)

    def to_json(self) -> str:
        data = {
            "dials": [d.to_dict() for d in self.dials],
            "modes": self.modes.to_dict(),
        }
        return json.dumps(data, indent=2)

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"config is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError("config must be a JSON object")
        cfg = AppConfig()
        if "dials" in data:
            if not isinstance(data["dials"], list):
                raise ConfigError("config 'dials' must be a list")
            cfg.dials = [RangeConfig.from_dict(d) for d in data["dials"]]
        if "modes" in data:
            cfg.modes = SelectionConfig.from_dict(data["modes"])
        return cfg


__all__ = [
    "MODE_DIAL_LABELS",
    "MODE_DIAL_ANGLES",
    "RangeConfig",
    "SelectionConfig",
    "mode_dial_config",
    "DragSession",
    "ContinuousCommand",
    "DiscreteCommand",
    "JumpToLabel",
    "SelectorCommand",
    "Command",
    "EventType",
    "DialEvent",
    "DialOutput",
    "AppConfig",
]
