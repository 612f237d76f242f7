"""Tests for CircuitController (Qt-free, observer-based)."""

import copy

import pytest
from controllers.circuit_controller import CircuitController, has_state_changed
from models.errors import ElementLookupError, ReentrantNotificationError, ValidationError
from models.values import Label, Position
from tests.conftest import EventLog, make_element, node_tuples


class TestObserverPattern:
    def test_add_element_notifies(self, controller, registry, events):
        element = make_element(registry, "Resistor", [(0, 0), (50, 0)], 100)
        controller.add_element(element)
        assert events.events == [("addElement", element)]

    def test_remove_observer(self, controller, registry):
        log = EventLog()
        controller.add_observer(log)
        controller.remove_observer(log)
        controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)]))
        assert log.events == []

    def test_observer_registered_once(self, controller, registry):
        log = EventLog()
        controller.add_observer(log)
        controller.add_observer(log)
        controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)]))
        assert log.count("addElement") == 1

    def test_all_observers_notified_in_order(self, controller, registry):
        calls = []
        controller.add_observer(lambda event, element: calls.append("first"))
        controller.add_observer(lambda event, element: calls.append("second"))
        controller.emit("movePreview", make_element(registry, "Wire", [(0, 0), (10, 0)]))
        assert calls == ["first", "second"]

    def test_unknown_event_type_rejected(self, controller):
        with pytest.raises(ValueError):
            controller.emit("explode")

    def test_failing_observer_is_isolated(self, controller, registry, events, caplog):
        def broken(event, element):
            raise RuntimeError("view is gone")

        controller.add_observer(broken)
        later = EventLog()
        controller.add_observer(later)

        element = controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)]))

        assert controller.get_element(element.element_id) is element
        assert later.count("addElement") == 1
        assert "view is gone" in caplog.text

    def test_reentrant_emit_raises(self, controller, registry):
        def echo(event, element):
            if event == "addElement":
                controller.emit("movePreview", element)

        controller.add_observer(echo)
        with pytest.raises(ReentrantNotificationError):
            controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)]))

    def test_mutation_from_observer_raises(self, controller, registry):
        def deleter(event, element):
            if event == "addElement":
                controller.delete_element(element.element_id)

        controller.add_observer(deleter)
        with pytest.raises(ReentrantNotificationError):
            controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)]))

    def test_dispatch_usable_after_reentrancy_error(self, controller, registry):
        def echo(event, element):
            controller.emit("movePreview", element)

        controller.add_observer(echo)
        with pytest.raises(ReentrantNotificationError):
            controller.emit("finalizePlacement")
        controller.remove_observer(echo)

        log = EventLog()
        controller.add_observer(log)
        controller.emit("finalizePlacement")
        assert log.names() == ["finalizePlacement"]


class TestElementOperations:
    def test_add_then_lookup(self, controller, registry):
        element = controller.add_element(make_element(registry, "Resistor", [(0, 0), (50, 0)], 100))
        assert controller.get_element(element.element_id) is element
        assert controller.get_elements() == [element]

    def test_add_duplicate_id_raises_and_emits_nothing(self, controller, registry, events):
        controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)], element_id="w"))
        events.clear()
        with pytest.raises(ValidationError):
            controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)], element_id="w"))
        assert events.events == []
        assert len(controller.get_elements()) == 1

    def test_get_elements_is_live(self, controller, registry):
        elements = controller.get_elements()
        controller.add_element(make_element(registry, "Wire", [(0, 0), (10, 0)]))
        assert len(elements) == 1

    def test_create_element_does_not_add(self, controller):
        element = controller.create_element("Resistor", [Position(0, 0), Position(50, 0)], {"resistance": 1})
        assert element.element_id
        assert controller.get_elements() == []

    def test_delete_element(self, rc_circuit, events):
        removed = rc_circuit.delete_element("c1")
        assert removed.element_id == "c1"
        assert rc_circuit.get_element("c1") is None
        assert events.events == [("deleteElement", removed)]

    def test_delete_unknown_is_noop(self, rc_circuit, events):
        before = rc_circuit.export_state()
        assert rc_circuit.delete_element("nope") is None
        assert rc_circuit.export_state() == before
        assert events.events == []

    def test_move_element(self, rc_circuit, events):
        moved = rc_circuit.move_element("r1", [Position(10, 10), Position(60, 10)])
        assert node_tuples(moved) == [(10, 10), (60, 10)]
        assert events.names() == ["moveElement"]

    def test_move_wrong_node_count_raises(self, rc_circuit, events):
        with pytest.raises(ValidationError):
            rc_circuit.move_element("g1", [Position(0, 0), Position(10, 0)])
        assert node_tuples(rc_circuit.get_element("g1")) == [(0, 50)]
        assert events.events == []

    def test_move_unknown_raises(self, controller):
        with pytest.raises(ElementLookupError):
            controller.move_element("nope", [Position(0, 0)])

    def test_update_properties(self, rc_circuit, events):
        rc_circuit.update_properties("r1", {"resistance": 220})
        assert rc_circuit.get_element("r1").primary_value == 220
        assert events.names() == ["updateElement"]

    def test_update_properties_validates_before_applying(self, rc_circuit, events):
        with pytest.raises(ValidationError):
            rc_circuit.update_properties("r1", {"capacitance": 1e-6})
        with pytest.raises(ValidationError):
            rc_circuit.update_properties("r1", {"resistance": float("inf")})
        assert rc_circuit.get_element("r1").properties.to_dict() == {"resistance": 4700}
        assert events.events == []

    def test_update_unknown_raises(self, controller):
        with pytest.raises(ElementLookupError):
            controller.update_properties("nope", {"resistance": 1})

    def test_set_label(self, rc_circuit, events):
        rc_circuit.set_label("c1", "C1")
        assert rc_circuit.get_element("c1").label == Label("C1")
        rc_circuit.set_label("c1", None)
        assert rc_circuit.get_element("c1").label is None
        assert events.names() == ["updateElement", "updateElement"]


class TestStateSnapshots:
    def test_export_state_shape(self, rc_circuit):
        state = rc_circuit.export_state()
        assert [item["id"] for item in state["elements"]] == ["r1", "c1", "w1", "g1"]
        assert state["elements"][0] == {
            "id": "r1",
            "type": "Resistor",
            "nodes": [{"x": 0, "y": 0}, {"x": 50, "y": 0}],
            "properties": {"resistance": 4700},
            "label": "R1",
        }

    def test_export_state_is_independent(self, rc_circuit):
        state = rc_circuit.export_state()
        frozen = copy.deepcopy(state)
        rc_circuit.move_element("r1", [Position(100, 100), Position(150, 100)])
        rc_circuit.delete_element("w1")
        assert state == frozen

    def test_import_state_round_trip(self, rc_circuit, registry, events):
        state = rc_circuit.export_state()
        other = CircuitController(registry)
        log = EventLog()
        other.add_observer(log)
        other.import_state(state)
        assert other.export_state() == state
        assert log.events == [("importState", None)]

    def test_import_state_preserves_ids(self, rc_circuit, registry):
        other = CircuitController(registry)
        other.import_state(rc_circuit.export_state())
        assert other.get_element("r1").label == Label("R1")

    def test_import_state_is_atomic(self, rc_circuit, events):
        before = rc_circuit.export_state()
        bad = copy.deepcopy(before)
        bad["elements"][2]["nodes"] = [{"x": 0, "y": 0}]
        with pytest.raises(ValidationError):
            rc_circuit.import_state(bad)
        assert rc_circuit.export_state() == before
        assert events.events == []

    def test_import_state_duplicate_ids_rejected(self, rc_circuit):
        before = rc_circuit.export_state()
        bad = copy.deepcopy(before)
        bad["elements"][1]["id"] = "r1"
        with pytest.raises(ValidationError):
            rc_circuit.import_state(bad)
        assert rc_circuit.export_state() == before

    def test_import_state_malformed_snapshot(self, rc_circuit):
        before = rc_circuit.export_state()
        with pytest.raises(ValidationError):
            rc_circuit.import_state({"items": []})
        with pytest.raises(ValidationError):
            rc_circuit.import_state({"elements": [{"type": "Wire"}]})
        assert rc_circuit.export_state() == before

    def test_clear_circuit(self, rc_circuit, events):
        live = rc_circuit.get_elements()
        rc_circuit.clear_circuit()
        assert live == []
        assert events.events == [("importState", None)]


class TestHasStateChanged:
    def test_identical_snapshots(self, rc_circuit):
        assert not has_state_changed(rc_circuit.export_state(), rc_circuit.export_state())

    def test_count_difference(self, rc_circuit):
        before = rc_circuit.export_state()
        rc_circuit.delete_element("g1")
        assert has_state_changed(before, rc_circuit.export_state())

    def test_node_difference(self, rc_circuit):
        before = rc_circuit.export_state()
        rc_circuit.move_element("w1", [Position(0, 0), Position(0, 60)])
        assert has_state_changed(before, rc_circuit.export_state())

    def test_order_difference(self, rc_circuit):
        before = rc_circuit.export_state()
        reordered = copy.deepcopy(before)
        reordered["elements"].reverse()
        assert has_state_changed(before, reordered)

    def test_property_and_label_edits_ignored(self, rc_circuit):
        before = rc_circuit.export_state()
        rc_circuit.update_properties("r1", {"resistance": 1})
        rc_circuit.set_label("r1", "Rload")
        assert not has_state_changed(before, rc_circuit.export_state())

    def test_missing_snapshot_counts_as_change(self, rc_circuit):
        assert has_state_changed(None, rc_circuit.export_state())
