"""
Headless logic behind the canvas mouse gestures.

Hit-testing, dragging with grid snap, placing a new element, and turning
a finished gesture into a single undo step. The view layer feeds these
classes scene coordinates; nothing here touches a widget toolkit.
"""

import logging
import math
from typing import Iterable, Optional

from adapters.coordinate_adapter import GRID_SPACING, layout_nodes, snap_to_grid
from controllers.circuit_controller import CircuitController, has_state_changed
from controllers.command_history import CommandHistory
from controllers.commands import SnapshotCommand
from models.element import ElementData
from models.values import Position

logger = logging.getLogger(__name__)

# Clickable distance around an element's line, in pixels
HIT_AURA = 10


def is_inside_element(x: float, y: float, element: ElementData, aura: float = HIT_AURA) -> bool:
    """Return True if (x, y) is within ``aura`` pixels of the element."""
    start = element.nodes[0]
    if len(element.nodes) < 2:
        return math.hypot(x - start.x, y - start.y) <= aura

    end = element.nodes[1]
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length < 1e-6:
        return math.hypot(x - start.x, y - start.y) <= aura

    distance = abs(dy * x - dx * y + end.x * start.y - end.y * start.x) / length
    if distance > aura:
        return False

    min_x = min(start.x, end.x) - aura
    max_x = max(start.x, end.x) + aura
    min_y = min(start.y, end.y) - aura
    max_y = max(start.y, end.y) + aura
    return min_x <= x <= max_x and min_y <= y <= max_y


def find_element_at(elements: Iterable[ElementData], x: float, y: float) -> Optional[ElementData]:
    """Return the first element hit at (x, y), or None."""
    for element in elements:
        if is_inside_element(x, y, element):
            return element
    return None


class DragGesture:
    """
    Moves an element with the mouse.

    The element's first node follows the pointer (keeping the grab offset)
    and is snapped to the grid; the other nodes keep their relative
    positions.
    """

    def __init__(self, controller: CircuitController, snap: bool = True, spacing: int = GRID_SPACING):
        self.controller = controller
        self.snap = snap
        self.spacing = spacing
        self.element: Optional[ElementData] = None
        self._offset = (0.0, 0.0)

    def start(self, x: float, y: float) -> Optional[ElementData]:
        """Pick the element under (x, y). Returns it, or None if nothing was hit."""
        self.element = find_element_at(self.controller.get_elements(), x, y)
        if self.element is not None:
            first = self.element.nodes[0]
            self._offset = (x - first.x, y - first.y)
        return self.element

    def move(self, x: float, y: float) -> None:
        """Drag the picked element so its first node follows (x, y)."""
        if self.element is None:
            return

        target = Position(x - self._offset[0], y - self._offset[1])
        if self.snap:
            target = snap_to_grid(target, self.spacing)

        first = self.element.nodes[0]
        dx = target.x - first.x
        dy = target.y - first.y
        nodes = [node.offset(dx, dy) for node in self.element.nodes]
        self.controller.move_element(self.element.element_id, nodes)

    def stop(self) -> None:
        self.element = None


class PlacementGesture:
    """
    Positions a new element under the pointer before it is dropped.

    Every move lays the element out around the snapped pointer position
    and emits movePreview; finalize() does the same and emits
    finalizePlacement.
    """

    def __init__(self, controller: CircuitController, element: ElementData, spacing: int = GRID_SPACING):
        self.controller = controller
        self.element = element
        self.spacing = spacing

    def _layout(self, x: float, y: float) -> None:
        center = snap_to_grid(Position(x, y), self.spacing)
        self.element.nodes = layout_nodes(center, self.element.get_terminal_count())

    def move(self, x: float, y: float) -> None:
        self._layout(x, y)
        self.controller.emit("movePreview", self.element)

    def finalize(self, x: float, y: float) -> ElementData:
        self._layout(x, y)
        self.controller.emit("finalizePlacement", self.element)
        return self.element


class SnapshotRecorder:
    """
    Records an interactive gesture as one undo step.

    Call begin() when the gesture starts and commit() when it ends. If the
    circuit changed in between, the live state is rolled back to the
    "before" snapshot and a SnapshotCommand re-applies the "after"
    snapshot through the command history.
    """

    def __init__(self, controller: CircuitController, history: CommandHistory):
        self.controller = controller
        self.history = history
        self.before: Optional[dict] = None

    @property
    def active(self) -> bool:
        return self.before is not None

    def begin(self) -> None:
        self.before = self.controller.export_state()

    def commit(self, description: str = "Edit circuit") -> Optional[SnapshotCommand]:
        """
        Finish the gesture.

        Returns:
            The executed SnapshotCommand, or None if nothing changed.
        """
        if self.before is None:
            raise RuntimeError("commit() called without begin().")
        before, self.before = self.before, None

        after = self.controller.export_state()
        if not has_state_changed(before, after):
            return None

        self.controller.import_state(before)
        command = SnapshotCommand(self.controller, before, after, description)
        self.history.execute_command(command)
        logger.debug("Recorded gesture '%s' as snapshot command", description)
        return command

    def cancel(self) -> None:
        """Abandon the gesture, restoring the circuit if it changed."""
        if self.before is None:
            return
        before, self.before = self.before, None
        if has_state_changed(before, self.controller.export_state()):
            self.controller.import_state(before)
