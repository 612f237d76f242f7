"""
ElementRegistry - maps element type tags to validating constructors.

The registry is an ordinary object: build one with
create_default_registry() at startup and hand it to the controller,
wire split service and netlist adapter that need it.
"""

import uuid
from typing import Callable, Optional, Union

from .element import ELEMENT_TYPES, ElementData
from .errors import ElementLookupError
from .values import Label, Position, Properties

ElementFactory = Callable[..., ElementData]


def new_element_id() -> str:
    """Return a fresh unique element id."""
    return uuid.uuid4().hex


def _coerce_properties(properties: Union[Properties, dict, None]) -> Properties:
    if properties is None:
        return Properties()
    if isinstance(properties, Properties):
        return properties.copy()
    return Properties(dict(properties))


def _coerce_label(label: Union[Label, str, None]) -> Optional[Label]:
    if label is None or isinstance(label, Label):
        return label
    return Label(label) if label else None


def make_element_factory(element_type: str) -> ElementFactory:
    """Build the standard factory for one element type."""

    def factory(
        element_id: Optional[str],
        nodes: list[Position],
        properties: Union[Properties, dict, None] = None,
        label: Union[Label, str, None] = None,
    ) -> ElementData:
        return ElementData(
            element_id=element_id or new_element_id(),
            element_type=element_type,
            nodes=list(nodes),
            label=_coerce_label(label),
            properties=_coerce_properties(properties),
        )

    factory.__name__ = f"create_{element_type.lower()}"
    return factory


class ElementRegistry:
    """
    Registry of element factories keyed by type tag.

    Registering a tag twice replaces the earlier factory.
    """

    def __init__(self):
        self._factories: dict[str, ElementFactory] = {}

    def register(self, element_type: str, factory: ElementFactory) -> None:
        """Store a factory under a type tag."""
        self._factories[element_type] = factory

    def get(self, element_type: str) -> Optional[ElementFactory]:
        """Return the factory for a type tag, or None if not registered."""
        return self._factories.get(element_type)

    def create(
        self,
        element_type: str,
        element_id: Optional[str],
        nodes: list[Position],
        properties: Union[Properties, dict, None] = None,
        label: Union[Label, str, None] = None,
    ) -> ElementData:
        """
        Construct an element of the given type.

        Raises:
            ElementLookupError: If no factory is registered for the type.
            ValidationError: If the nodes or properties do not fit the type.
        """
        factory = self.get(element_type)
        if factory is None:
            raise ElementLookupError(f"No factory registered for element type '{element_type}'.")
        return factory(element_id, nodes, properties, label)

    def get_types(self) -> list[str]:
        """Return registered type tags in registration order."""
        return list(self._factories)

    def __contains__(self, element_type: str) -> bool:
        return element_type in self._factories


def create_default_registry() -> ElementRegistry:
    """Return a registry with factories for every built-in element type."""
    registry = ElementRegistry()
    for element_type in ELEMENT_TYPES:
        registry.register(element_type, make_element_factory(element_type))
    return registry
