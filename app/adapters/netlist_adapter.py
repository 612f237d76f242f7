"""
adapters/netlist_adapter.py

Reads and writes circuits in the compact netlist format, one element per
line::

    <TypeCode>;<x1>,<y1>;<x2>,<y2>;<value>;<label>

Coordinates are logical grid units. The value is the element's primary
property written in scientific notation with as few digits as possible.
"""

import logging
import re
from typing import Iterable, Optional

from models.element import PRIMARY_PROPERTIES, ElementData
from models.errors import CircuitError
from models.registry import ElementRegistry
from models.values import GridCoordinate, Label

from .coordinate_adapter import GRID_SPACING, grid_to_pixel, pixel_to_grid

logger = logging.getLogger(__name__)

# Netlist type code -> element type
TYPE_CODES = {
    "R": "Resistor",
    "C": "Capacitor",
    "L": "Inductor",
    "J": "Junction",
    "G": "Ground",
    "W": "Wire",
}

# Element type -> netlist type code
TYPE_TO_CODE = {element_type: code for code, element_type in TYPE_CODES.items()}

FIELD_SEPARATOR = ";"
FIELD_COUNT = 5
MAX_SIGNIFICANT_DIGITS = 15

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


class FormatError(ValueError):
    """Raised when netlist text cannot be parsed."""


def _to_scientific(value: float, digits: int) -> str:
    """Format with ``digits`` significant digits, exponent as ``e+3``/``e-9``."""
    mantissa, exponent = f"{value:.{digits - 1}e}".split("e")
    exp = int(exponent)
    sign = "+" if exp >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exp)}"


def format_value(value: float) -> str:
    """Return the shortest scientific notation that parses back to ``value``.

    Values that need more than 15 significant digits are written with 15.

    >>> format_value(4700)
    '4.7e+3'
    """
    for digits in range(1, MAX_SIGNIFICANT_DIGITS + 1):
        text = _to_scientific(value, digits)
        if float(text) == value:
            return text
    return _to_scientific(value, MAX_SIGNIFICANT_DIGITS)


def _parse_coordinate(text: str, line_number: int) -> GridCoordinate:
    parts = text.split(",")
    if len(parts) != 2:
        raise FormatError(f"Line {line_number}: expected 'x,y' coordinate, got {text!r}.")
    x, y = (part.strip() for part in parts)
    if not _INTEGER_RE.match(x) or not _INTEGER_RE.match(y):
        raise FormatError(f"Line {line_number}: coordinates must be integers, got {text!r}.")
    return GridCoordinate(int(x), int(y))


def _parse_value(text: str, line_number: int) -> Optional[float]:
    raw = text.strip()
    if raw == "":
        return None
    if not _FLOAT_RE.match(raw):
        raise FormatError(f"Line {line_number}: invalid numeric value {raw!r}.")
    value = float(raw)
    if value in (float("inf"), float("-inf")):
        raise FormatError(f"Line {line_number}: value {raw!r} is out of range.")
    return value


class NetlistAdapter:
    """
    Serializes circuit elements to netlist text and back.

    Args:
        registry: Registry used to construct imported elements.
        spacing: Pixels per grid unit for the coordinate transform.
    """

    def __init__(self, registry: ElementRegistry, spacing: int = GRID_SPACING):
        self.registry = registry
        self.spacing = spacing

    # --- Export ---

    def export_to_string(self, elements: Iterable[ElementData]) -> str:
        """Serialize elements, in order, to netlist text."""
        lines = [self.serialize_element(element) for element in elements]
        logger.debug("Exported %d element(s) to netlist", len(lines))
        return "\n".join(lines)

    def serialize_element(self, element: ElementData) -> str:
        """Return the netlist record for one element."""
        code = TYPE_TO_CODE.get(element.element_type)
        if code is None:
            raise FormatError(f"Element type '{element.element_type}' has no netlist type code.")

        first = element.nodes[0]
        # Single-terminal elements repeat their node in the second slot
        second = element.nodes[1] if len(element.nodes) > 1 else first
        start = pixel_to_grid(first, self.spacing)
        end = pixel_to_grid(second, self.spacing)

        value = element.properties.get(PRIMARY_PROPERTIES[element.element_type])
        value_text = "" if value is None else format_value(value)
        label_text = element.label.text if element.label else ""

        return FIELD_SEPARATOR.join(
            [code, f"{start.x},{start.y}", f"{end.x},{end.y}", value_text, label_text]
        )

    # --- Import ---

    def import_from_string(self, content: str) -> list[ElementData]:
        """
        Parse netlist text into new elements with fresh ids.

        Raises:
            FormatError: If any line is malformed. Nothing is returned in
                that case, so a bad file never yields a partial circuit.
        """
        elements = []
        for line_number, line in enumerate(content.splitlines(), start=1):
            stripped = line.strip()
            if not stripped:
                continue
            elements.append(self.parse_line(stripped, line_number))
        logger.debug("Imported %d element(s) from netlist", len(elements))
        return elements

    def parse_line(self, line: str, line_number: int = 1) -> ElementData:
        """Parse a single netlist record into an element."""
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != FIELD_COUNT:
            raise FormatError(
                f"Line {line_number}: expected {FIELD_COUNT} fields separated by "
                f"'{FIELD_SEPARATOR}', got {len(fields)}."
            )
        code, start_text, end_text, value_text, label_text = fields

        element_type = TYPE_CODES.get(code.strip())
        if element_type is None:
            raise FormatError(f"Line {line_number}: unknown element type code {code!r}.")

        start = _parse_coordinate(start_text, line_number)
        end = _parse_coordinate(end_text, line_number)
        nodes = [grid_to_pixel(start, self.spacing), grid_to_pixel(end, self.spacing)]
        if element_type == "Ground":
            nodes = nodes[:1]

        properties = {PRIMARY_PROPERTIES[element_type]: _parse_value(value_text, line_number)}
        label_text = label_text.strip()

        try:
            label = Label(label_text) if label_text else None
            return self.registry.create(element_type, None, nodes, properties, label)
        except CircuitError as e:
            raise FormatError(f"Line {line_number}: {e}") from e
