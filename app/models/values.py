"""
Value objects for circuit elements.

This module contains no Qt dependencies. Positions are plain pixel
coordinates, grid coordinates are the integer units used in netlist files.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from .errors import ValidationError


def _is_real(value) -> bool:
    """Return True for int/float values (bool is excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


@dataclass(frozen=True)
class Position:
    """A continuous (x, y) position in pixel space."""

    x: float
    y: float

    def __post_init__(self):
        for name in ("x", "y"):
            value = getattr(self, name)
            if not _is_real(value) or not _is_finite(value):
                raise ValidationError(f"Position {name} must be a finite number, got {value!r}.")

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        return cls(data["x"], data["y"])

    def offset(self, dx: float, dy: float) -> "Position":
        """Return a new position shifted by (dx, dy)."""
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class GridCoordinate:
    """An integer (x, y) position in logical grid units."""

    x: int
    y: int

    def __post_init__(self):
        for name in ("x", "y"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(f"Grid coordinate {name} must be an integer, got {value!r}.")


@dataclass(frozen=True)
class Label:
    """Display text attached to an element.

    The text is written verbatim as the last netlist field, so it may not
    contain the field separator or line breaks.
    """

    text: str

    def __post_init__(self):
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValidationError("Label text must be a non-empty string.")
        object.__setattr__(self, "text", self.text.strip())
        if ";" in self.text or "\n" in self.text or "\r" in self.text:
            raise ValidationError(f"Label text may not contain ';' or line breaks: {self.text!r}")

    def __str__(self) -> str:
        return self.text


@dataclass
class Properties:
    """
    Named numeric values of an element (resistance, capacitance, ...).

    Each value is a finite number or None (not set). Which names are
    allowed depends on the element type and is checked by ElementData.
    """

    values: dict[str, Optional[float]] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.values, dict):
            raise ValidationError("Properties must be built from a dict.")
        self.values = {key: _check_property_value(key, value) for key, value in self.values.items()}

    def get(self, key: str) -> Optional[float]:
        return self.values.get(key)

    def set(self, key: str, value: Optional[float]) -> None:
        self.values[key] = _check_property_value(key, value)

    def keys(self):
        return self.values.keys()

    def copy(self) -> "Properties":
        return Properties(dict(self.values))

    def to_dict(self) -> dict:
        return dict(self.values)


def _check_property_value(key, value) -> Optional[float]:
    """Validate one entry and return it as a float (ints are stored as floats)."""
    if not isinstance(key, str) or not key:
        raise ValidationError(f"Property names must be non-empty strings, got {key!r}.")
    if value is None:
        return None
    if not _is_real(value):
        raise ValidationError(f"Property '{key}' must be a number or None, got {value!r}.")
    if not _is_finite(value):
        raise ValidationError(f"Property '{key}' must be finite, got {value!r}.")
    return float(value)
