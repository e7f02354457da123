"""Exception types raised by the rotary input core."""

from __future__ import annotations


class RotaryInputError(Exception):
    """Base class for every error raised by :mod:`rotary_input`."""


class ConfigError(RotaryInputError, ValueError):
    """Raised when a dial configuration is invalid."""


class InvalidLabel(ConfigError, KeyError):
    """Raised when a selector operation names a label outside the configuration."""

    def __init__(self, label: object, labels: tuple[str, ...] = ()) -> None:
        self.label = label
        self.labels = labels
        known = ", ".join(labels)
        super().__init__(f"unknown label {label!r} (expected one of: {known})")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class GeometryUnavailable(RotaryInputError):
    """Raised when a dial has no usable on-screen geometry (e.g. zero size)."""


__all__ = [
    "RotaryInputError",
    "ConfigError",
    "InvalidLabel",
    "GeometryUnavailable",
]
