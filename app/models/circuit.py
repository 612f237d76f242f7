"""
CircuitModel - Central data store for circuit state.

This module contains no Qt dependencies. It holds the ordered element
collection and enforces id uniqueness. Change notification is the
controller's job.
"""

from dataclasses import dataclass, field
from typing import Optional

from .element import ElementData
from .errors import ValidationError


@dataclass
class CircuitModel:
    """
    Ordered collection of circuit elements keyed by id.

    Insertion order is kept: it is the netlist export order and the order
    in which wires are considered for splitting.
    """

    elements: list[ElementData] = field(default_factory=list)
    _index: dict[str, ElementData] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        elements, self.elements = self.elements, []
        self.replace_elements(elements)

    # --- Element operations ---

    def add_element(self, element: ElementData) -> None:
        """Append an element; its id must not be present yet."""
        self.insert_element(len(self.elements), element)

    def insert_element(self, index: int, element: ElementData) -> None:
        """Insert an element at a position in the collection order."""
        if element.element_id in self._index:
            raise ValidationError(f"Element id '{element.element_id}' already exists in the circuit.")
        self.elements.insert(index, element)
        self._index[element.element_id] = element

    def remove_element(self, element_id: str) -> Optional[tuple[int, ElementData]]:
        """
        Remove an element by id.

        Returns:
            (index, element) of the removed element, or None if the id is unknown.
        """
        element = self._index.pop(element_id, None)
        if element is None:
            return None
        index = self.elements.index(element)
        del self.elements[index]
        return index, element

    def get_element(self, element_id: str) -> Optional[ElementData]:
        return self._index.get(element_id)

    def index_of(self, element_id: str) -> int:
        """Return the collection index of an element, or -1 if absent."""
        element = self._index.get(element_id)
        return self.elements.index(element) if element is not None else -1

    def replace_elements(self, elements: list[ElementData]) -> None:
        """
        Replace the whole collection.

        Ids are checked before anything changes, so a duplicate leaves the
        current collection untouched.
        """
        index: dict[str, ElementData] = {}
        for element in elements:
            if element.element_id in index:
                raise ValidationError(f"Duplicate element id '{element.element_id}'.")
            index[element.element_id] = element

        # Mutate in place so callers holding the live list stay in sync
        self.elements[:] = elements
        self._index = index

    def clear(self) -> None:
        """Clear all circuit data."""
        self.elements.clear()
        self._index.clear()

    def __len__(self) -> int:
        return len(self.elements)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._index

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to the snapshot dictionary shape."""
        return {"elements": [element.to_dict() for element in self.elements]}

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """Deserialize circuit from the snapshot dictionary shape."""
        return cls([ElementData.from_dict(item) for item in data.get("elements", [])])
