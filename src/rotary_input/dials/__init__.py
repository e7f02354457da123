"""Pure value mapping for the two dial variants."""

from . import continuous, discrete

__all__ = ["continuous", "discrete"]
