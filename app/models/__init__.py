"""
Pure Python data models for the schematic editor.

This package contains Qt-free data classes that represent circuit elements.
All models use only Python standard library types (no PyQt6 dependencies).
"""

from .circuit import CircuitModel
from .element import (
    ELEMENT_TYPES,
    PRIMARY_PROPERTIES,
    PROPERTY_KEYS,
    TERMINAL_COUNTS,
    ElementData,
    get_terminal_count,
)
from .errors import CircuitError, ElementLookupError, ReentrantNotificationError, ValidationError
from .registry import ElementRegistry, create_default_registry, new_element_id
from .values import GridCoordinate, Label, Position, Properties

__all__ = [
    "CircuitModel",
    "ElementData",
    "ELEMENT_TYPES",
    "PRIMARY_PROPERTIES",
    "PROPERTY_KEYS",
    "TERMINAL_COUNTS",
    "get_terminal_count",
    "ElementRegistry",
    "create_default_registry",
    "new_element_id",
    "Position",
    "GridCoordinate",
    "Properties",
    "Label",
    "CircuitError",
    "ValidationError",
    "ElementLookupError",
    "ReentrantNotificationError",
]
