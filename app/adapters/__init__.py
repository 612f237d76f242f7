"""
Adapters between the circuit model and external representations.

Coordinate conversion between pixel and grid space, and the netlist text
format used for saving and exchanging circuits.
"""

from .coordinate_adapter import (
    COMPONENT_SPAN,
    GRID_SPACING,
    grid_to_pixel,
    layout_nodes,
    pixel_to_grid,
    snap_to_grid,
)
from .netlist_adapter import TYPE_CODES, FormatError, NetlistAdapter, format_value

__all__ = [
    "GRID_SPACING",
    "COMPONENT_SPAN",
    "pixel_to_grid",
    "grid_to_pixel",
    "snap_to_grid",
    "layout_nodes",
    "NetlistAdapter",
    "FormatError",
    "TYPE_CODES",
    "format_value",
]
