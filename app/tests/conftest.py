"""
Shared test fixtures for the schematic editor test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, controllers, adapters)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from controllers.circuit_controller import CircuitController
from controllers.command_history import CommandHistory
from models.element import PRIMARY_PROPERTIES
from models.registry import create_default_registry
from models.values import Position


class EventLog:
    """Simple observer that records (event, element) tuples."""

    def __init__(self):
        self.events = []

    def __call__(self, event, element):
        self.events.append((event, element))

    def names(self):
        return [event for event, _ in self.events]

    def count(self, event_name):
        return sum(1 for e, _ in self.events if e == event_name)

    def last(self):
        return self.events[-1] if self.events else None

    def clear(self):
        self.events.clear()


def make_element(registry, element_type, points, value=None, label=None, element_id=None):
    """Helper to create an element from (x, y) tuples with minimal boilerplate."""
    nodes = [Position(x, y) for x, y in points]
    properties = {PRIMARY_PROPERTIES[element_type]: value}
    return registry.create(element_type, element_id, nodes, properties, label)


def node_tuples(element):
    """Return an element's nodes as (x, y) tuples."""
    return [(node.x, node.y) for node in element.nodes]


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def controller(registry):
    return CircuitController(registry)


@pytest.fixture
def history():
    return CommandHistory()


@pytest.fixture
def events(controller):
    """An EventLog already registered on the controller."""
    log = EventLog()
    controller.add_observer(log)
    return log


@pytest.fixture
def rc_circuit(controller, registry):
    """A resistor, a capacitor, a wire and a ground, added in that order."""
    elements = [
        make_element(registry, "Resistor", [(0, 0), (50, 0)], 4700, "R1", element_id="r1"),
        make_element(registry, "Capacitor", [(50, 0), (50, 50)], 1e-9, element_id="c1"),
        make_element(registry, "Wire", [(0, 0), (0, 50)], element_id="w1"),
        make_element(registry, "Ground", [(0, 50)], element_id="g1"),
    ]
    for element in elements:
        controller.add_element(element)
    return controller
