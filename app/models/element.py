"""
ElementData - Pure Python data model for circuit elements.

This module contains no Qt dependencies. Every element type shares the
same shape (id, type, nodes, label, properties); what differs per type is
looked up in the tables below instead of being encoded in subclasses.

Element types use display names as canonical identifiers:
'Resistor', 'Capacitor', 'Inductor', 'Junction', 'Ground', 'Wire'
"""

from dataclasses import dataclass, field
from typing import Optional

from .errors import ValidationError
from .values import Label, Position, Properties

ELEMENT_TYPES = [
    "Resistor",
    "Capacitor",
    "Inductor",
    "Junction",
    "Ground",
    "Wire",
]

# Number of terminals per element type (default is 2)
TERMINAL_COUNTS = {
    "Ground": 1,
}

# The value written to the netlist for each element type
PRIMARY_PROPERTIES = {
    "Resistor": "resistance",
    "Capacitor": "capacitance",
    "Inductor": "inductance",
    "Junction": "value",
    "Ground": "value",
    "Wire": "value",
}

# Properties an element of each type may carry
PROPERTY_KEYS = {element_type: (key,) for element_type, key in PRIMARY_PROPERTIES.items()}


def get_terminal_count(element_type: str) -> int:
    """Return the number of terminals for an element type."""
    return TERMINAL_COUNTS.get(element_type, 2)


@dataclass
class ElementData:
    """
    Pure Python data class representing a circuit element.

    Construction validates the node count and the property names against
    the element type. Missing declared properties are filled with None.
    """

    element_id: str
    element_type: str
    nodes: list[Position]
    label: Optional[Label] = None
    properties: Properties = field(default_factory=Properties)

    def __post_init__(self):
        if self.element_type not in PROPERTY_KEYS:
            raise ValidationError(f"Unknown element type '{self.element_type}'.")
        if not isinstance(self.element_id, str) or not self.element_id:
            raise ValidationError("Element id must be a non-empty string.")

        self.nodes = list(self.nodes)
        expected = get_terminal_count(self.element_type)
        if len(self.nodes) != expected:
            raise ValidationError(
                f"A {self.element_type} must have exactly {expected} node(s), got {len(self.nodes)}."
            )
        for node in self.nodes:
            if not isinstance(node, Position):
                raise ValidationError(f"Nodes must be Position instances, got {node!r}.")

        if self.label is not None and not isinstance(self.label, Label):
            raise ValidationError("Label must be a Label instance or None.")

        if not isinstance(self.properties, Properties):
            raise ValidationError("Properties must be a Properties instance.")
        allowed = PROPERTY_KEYS[self.element_type]
        unknown = [key for key in self.properties.keys() if key not in allowed]
        if unknown:
            raise ValidationError(
                f"{self.element_type} does not accept properties {unknown}; allowed: {list(allowed)}."
            )
        for key in allowed:
            if key not in self.properties.values:
                self.properties.values[key] = None

    def get_terminal_count(self) -> int:
        """Return number of terminals for this element type."""
        return get_terminal_count(self.element_type)

    @property
    def primary_property(self) -> str:
        """Name of the property written to the netlist."""
        return PRIMARY_PROPERTIES[self.element_type]

    @property
    def primary_value(self) -> Optional[float]:
        return self.properties.get(self.primary_property)

    def translate(self, dx: float, dy: float) -> None:
        """Shift all nodes by (dx, dy)."""
        self.nodes = [node.offset(dx, dy) for node in self.nodes]

    def to_dict(self) -> dict:
        """
        Serialize element to the snapshot dictionary shape.

        Nodes are written as {"x", "y"} dicts in pixel space.
        """
        return {
            "id": self.element_id,
            "type": self.element_type,
            "nodes": [node.to_dict() for node in self.nodes],
            "properties": self.properties.to_dict(),
            "label": self.label.text if self.label else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ElementData":
        """Deserialize element from the snapshot dictionary shape."""
        label = data.get("label")
        return cls(
            element_id=data["id"],
            element_type=data["type"],
            nodes=[Position.from_dict(node) for node in data["nodes"]],
            label=Label(label) if label else None,
            properties=Properties(dict(data.get("properties", {}))),
        )

    def __repr__(self) -> str:
        nodes = ", ".join(f"({n.x}, {n.y})" for n in self.nodes)
        return f"ElementData(id={self.element_id!r}, type={self.element_type!r}, nodes=[{nodes}])"
