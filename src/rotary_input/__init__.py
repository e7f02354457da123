"""rotary_input package: angle tracking and value mapping for on-screen dials."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._version import get_version
from .errors import ConfigError, GeometryUnavailable, InvalidLabel, RotaryInputError
from .input_adapter import ContinuousDialInput, DiscreteDialInput
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
    mode_dial_config,
)

__version__ = get_version()

if TYPE_CHECKING:  # pragma: no cover - only for type checkers
    from .app import main as _main_type  # noqa: F401


def main() -> None:
    """Entry point for ``python -m rotary_input`` and console scripts."""
    from .app import main as _main

    _main()


__all__ = [
    "main",
    "__version__",
    "get_version",
    "RotaryInputError",
    "ConfigError",
    "InvalidLabel",
    "GeometryUnavailable",
    "ContinuousDialInput",
    "DiscreteDialInput",
    "ContinuousCommand",
    "DiscreteCommand",
    "JumpToLabel",
    "DialEvent",
    "DialOutput",
    "DragSession",
    "EventType",
    "RangeConfig",
    "SelectionConfig",
    "mode_dial_config",
]
