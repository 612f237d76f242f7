"""
CircuitController - Orchestrates element CRUD operations.

This module contains no Qt dependencies. It owns the CircuitModel and
notifies views of changes through an observer pattern. It is the only
object that mutates the model.
"""

import logging
from typing import Callable, Optional, Union

from models.circuit import CircuitModel
from models.element import ElementData
from models.errors import ElementLookupError, ReentrantNotificationError, ValidationError
from models.registry import ElementRegistry
from models.values import Label, Position, Properties

logger = logging.getLogger(__name__)

Observer = Callable[[str, Optional[ElementData]], None]

EVENT_TYPES = (
    "addElement",
    "moveElement",
    "deleteElement",
    "finalizePlacement",
    "movePreview",
    "updateElement",
    "importState",
)


def build_element(registry: ElementRegistry, data: dict) -> ElementData:
    """Rebuild an element from its snapshot dict through the registry (id kept)."""
    return registry.create(
        data["type"],
        data["id"],
        [Position.from_dict(node) for node in data["nodes"]],
        data.get("properties"),
        data.get("label"),
    )


def has_state_changed(before: Optional[dict], after: Optional[dict]) -> bool:
    """
    Compare two export_state() snapshots.

    Snapshots differ if the element count differs or, index by index, the
    id, type or node list differs. Property and label edits are not
    considered.
    """
    if not before or not after:
        return True
    before_elements = before.get("elements", [])
    after_elements = after.get("elements", [])
    if len(before_elements) != len(after_elements):
        return True
    for a, b in zip(before_elements, after_elements):
        if a["id"] != b["id"] or a["type"] != b["type"]:
            return True
        if a["nodes"] != b["nodes"]:
            return True
    return False


class CircuitController:
    """
    Controller for circuit element operations.

    Manages the CircuitModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Observer events (callback receives the event name and an element):
        addElement (ElementData) - An element was added
        deleteElement (ElementData) - An element was removed
        moveElement (ElementData) - An element's nodes moved
        updateElement (ElementData) - Properties or label changed
        movePreview (ElementData) - An element is being placed (not final)
        finalizePlacement (ElementData) - Placement of an element finished
        importState (None) - The whole element collection was replaced

    Dispatch is synchronous and may not be re-entered: an observer that
    mutates the circuit or emits while being notified gets a
    ReentrantNotificationError.
    """

    def __init__(self, registry: ElementRegistry, model: Optional[CircuitModel] = None):
        self.registry = registry
        self.model = model if model is not None else CircuitModel()
        self._observers: list[Observer] = []
        self._dispatching = False

    # --- Observers ---

    def add_observer(self, callback: Observer) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Observer) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def emit(self, event_type: str, element: Optional[ElementData] = None) -> None:
        """Notify all observers of a model change."""
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type '{event_type}'.")
        self._ensure_not_dispatching(event_type)

        self._dispatching = True
        try:
            for observer in list(self._observers):
                try:
                    observer(event_type, element)
                except (TypeError, AttributeError, RuntimeError) as e:
                    logger.error("Error notifying observer: %s", e)
        finally:
            self._dispatching = False

    def _ensure_not_dispatching(self, action: str) -> None:
        if self._dispatching:
            raise ReentrantNotificationError(f"Cannot {action} while observers are being notified.")

    # --- Queries ---

    def get_elements(self) -> list[ElementData]:
        """Return the live, ordered element list. Do not mutate it."""
        return self.model.elements

    def get_element(self, element_id: str) -> Optional[ElementData]:
        return self.model.get_element(element_id)

    def _require_element(self, element_id: str) -> ElementData:
        element = self.model.get_element(element_id)
        if element is None:
            raise ElementLookupError(f"No element with id '{element_id}'.")
        return element

    # --- Element operations ---

    def create_element(
        self,
        element_type: str,
        nodes: list[Position],
        properties: Union[Properties, dict, None] = None,
        label: Union[Label, str, None] = None,
    ) -> ElementData:
        """Build an element with a fresh id through the registry (not added)."""
        return self.registry.create(element_type, None, nodes, properties, label)

    def add_element(self, element: ElementData) -> ElementData:
        """
        Add an element to the end of the circuit.

        Raises:
            ValidationError: If an element with the same id exists.
        """
        return self.insert_element(len(self.model.elements), element)

    def insert_element(self, index: int, element: ElementData) -> ElementData:
        """Add an element at a position in the collection order."""
        self._ensure_not_dispatching("add an element")
        self.model.insert_element(index, element)
        self.emit("addElement", element)
        return element

    def delete_element(self, element_id: str) -> Optional[ElementData]:
        """
        Remove an element by id.

        Unknown ids are ignored; nothing is emitted for them.

        Returns:
            The removed element, or None.
        """
        self._ensure_not_dispatching("delete an element")
        removed = self.model.remove_element(element_id)
        if removed is None:
            return None
        _, element = removed
        self.emit("deleteElement", element)
        return element

    def move_element(self, element_id: str, nodes: list[Position]) -> ElementData:
        """Replace an element's node positions."""
        self._ensure_not_dispatching("move an element")
        element = self._require_element(element_id)
        nodes = list(nodes)
        if len(nodes) != len(element.nodes):
            raise ValidationError(
                f"{element.element_type} '{element_id}' has {len(element.nodes)} node(s), got {len(nodes)}."
            )
        if not all(isinstance(node, Position) for node in nodes):
            raise ValidationError("Nodes must be Position instances.")
        element.nodes = nodes
        self.emit("moveElement", element)
        return element

    def update_properties(self, element_id: str, values: dict) -> ElementData:
        """Change property values of an element (validated before applying)."""
        self._ensure_not_dispatching("update an element")
        element = self._require_element(element_id)
        merged = element.properties.to_dict()
        merged.update(values)
        # Validate against the element type without touching the live element
        candidate = ElementData(
            element_id=element.element_id,
            element_type=element.element_type,
            nodes=element.nodes,
            label=element.label,
            properties=Properties(merged),
        )
        element.properties = candidate.properties
        self.emit("updateElement", element)
        return element

    def set_label(self, element_id: str, label: Union[Label, str, None]) -> ElementData:
        """Set or clear an element's label."""
        self._ensure_not_dispatching("update an element")
        element = self._require_element(element_id)
        if isinstance(label, str):
            label = Label(label) if label else None
        element.label = label
        self.emit("updateElement", element)
        return element

    # --- Circuit operations ---

    def export_state(self) -> dict:
        """Return a snapshot of every element in pixel coordinates."""
        return self.model.to_dict()

    def import_state(self, snapshot: dict) -> None:
        """
        Replace the whole element collection with a snapshot.

        Every element is rebuilt and validated first; on any error the
        current circuit is left untouched.
        """
        self._ensure_not_dispatching("import a snapshot")
        try:
            elements = [build_element(self.registry, item) for item in snapshot["elements"]]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValidationError(f"Malformed circuit snapshot: {e!r}") from e

        self.model.replace_elements(elements)
        self.emit("importState", None)

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        self._ensure_not_dispatching("clear the circuit")
        self.model.clear()
        self.emit("importState", None)

