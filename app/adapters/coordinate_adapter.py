"""
adapters/coordinate_adapter.py

Converts between pixel positions (used in memory) and logical grid
coordinates (used in netlist files).
"""

import math

from models.values import GridCoordinate, Position

# Pixels per grid unit; matches the canvas snap grid
GRID_SPACING = 10

# Distance between the two terminals of a freshly placed element, in pixels
COMPONENT_SPAN = 50


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def pixel_to_grid(position: Position, spacing: int = GRID_SPACING) -> GridCoordinate:
    """Return the nearest grid coordinate to a pixel position.

    Halfway values round up, so 15px with 10px spacing maps to 2.
    """
    return GridCoordinate(
        _round_half_up(position.x / spacing),
        _round_half_up(position.y / spacing),
    )


def grid_to_pixel(coordinate: GridCoordinate, spacing: int = GRID_SPACING) -> Position:
    """Return the pixel position of a grid coordinate."""
    return Position(coordinate.x * spacing, coordinate.y * spacing)


def snap_to_grid(position: Position, spacing: int = GRID_SPACING) -> Position:
    """Move a pixel position onto the nearest grid point."""
    return grid_to_pixel(pixel_to_grid(position, spacing), spacing)


def layout_nodes(center: Position, terminal_count: int, span: float = COMPONENT_SPAN) -> list[Position]:
    """Return node positions for an element centered on a point.

    Two-terminal elements lie horizontally across ``span`` pixels;
    single-terminal elements sit on the center.
    """
    if terminal_count == 1:
        return [center]
    half = span / 2
    return [center.offset(-half, 0), center.offset(half, 0)]
