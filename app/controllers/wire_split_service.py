"""
WireSplitService - splits a wire where a new node lands on it.

When a node is placed on the interior of a straight wire, the wire is
replaced by two wires that meet at the node, so the node becomes a real
connection point.
"""

import logging
from typing import Optional

from controllers.circuit_controller import CircuitController
from models.element import ElementData
from models.registry import ElementRegistry
from models.values import Position

logger = logging.getLogger(__name__)

# Largest |cross product| still treated as collinear (pixel^2)
COLLINEAR_TOLERANCE = 1e-6


def is_on_segment(point: Position, start: Position, end: Position) -> bool:
    """
    Return True if ``point`` lies strictly between ``start`` and ``end``.

    The point must be collinear with the segment and may not coincide with
    either endpoint.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    px = point.x - start.x
    py = point.y - start.y

    cross = dy * px - dx * py
    if abs(cross) > COLLINEAR_TOLERANCE:
        return False

    dot = px * dx + py * dy
    length_sq = dx * dx + dy * dy
    return 0 < dot < length_sq


class WireSplitService:
    """Splits wires of a circuit at a given node."""

    def __init__(self, controller: CircuitController, registry: ElementRegistry):
        self.controller = controller
        self.registry = registry

    def find_wire_at(self, node: Position) -> Optional[ElementData]:
        """Return the first wire (collection order) whose interior contains ``node``."""
        for element in self.controller.get_elements():
            if element.element_type != "Wire":
                continue
            start, end = element.nodes
            if is_on_segment(node, start, end):
                return element
        return None

    def try_split_at_node(self, node: Position) -> bool:
        """
        Split the first wire that passes through ``node``.

        Only one wire is split per call; when several overlapping wires
        pass through the node, call again to split the next one.

        Returns:
            True if a wire was split, False if no wire contains the node.
        """
        wire = self.find_wire_at(node)
        if wire is None:
            return False

        start, end = wire.nodes
        first = self.registry.create("Wire", None, [start, node], {}, None)
        second = self.registry.create("Wire", None, [node, end], {}, None)

        self.controller.delete_element(wire.element_id)
        self.controller.add_element(first)
        self.controller.add_element(second)

        logger.debug("Split wire %s at (%s, %s)", wire.element_id, node.x, node.y)
        return True
