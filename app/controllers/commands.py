"""
Command Pattern Implementation for Undo/Redo.

Each command stores minimal state needed to undo/redo an operation.
Commands are executed through the CircuitController to maintain consistency.

Two kinds of command share the same interface: delta commands that apply
and reverse one targeted change, and SnapshotCommand, which swaps the
whole circuit between two export_state() snapshots.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

from adapters.coordinate_adapter import layout_nodes, snap_to_grid
from controllers.circuit_controller import CircuitController, build_element
from models.element import ElementData, get_terminal_count
from models.values import Label, Position, Properties

# Where new elements go when no nodes are given (pixel coordinates)
DEFAULT_PLACEMENT = Position(400, 300)


class Command(ABC):
    """Base class for undoable commands."""

    @abstractmethod
    def execute(self) -> None:
        """Execute the command (perform the action)."""
        pass

    @abstractmethod
    def undo(self) -> None:
        """Undo the command (reverse the action)."""
        pass

    def get_description(self) -> str:
        """Return a human-readable description of this command."""
        return self.__class__.__name__


class AddElementCommand(Command):
    """Command to add an element to the circuit."""

    def __init__(
        self,
        controller: CircuitController,
        element_type: str,
        nodes: Optional[list[Position]] = None,
        properties: Union[Properties, dict, None] = None,
        label: Union[Label, str, None] = None,
        snap: bool = True,
    ):
        self.controller = controller
        self.element_type = element_type
        self.nodes = nodes
        self.properties = properties
        self.label = label
        self.snap = snap
        self.element: Optional[ElementData] = None

    @classmethod
    def from_element(cls, controller: CircuitController, element: ElementData) -> "AddElementCommand":
        """Wrap an already constructed element."""
        command = cls(controller, element.element_type, list(element.nodes), snap=False)
        command.element = element
        return command

    def execute(self) -> None:
        """Build the element on first run, then add it; redo re-adds it with the same id."""
        if self.element is None:
            nodes = self.nodes
            if nodes is None:
                nodes = layout_nodes(DEFAULT_PLACEMENT, get_terminal_count(self.element_type))
            if self.snap:
                nodes = [snap_to_grid(node) for node in nodes]
            self.element = self.controller.create_element(self.element_type, nodes, self.properties, self.label)
        self.controller.add_element(self.element)

    def undo(self) -> None:
        """Remove the added element, keeping a detached copy of it for redo."""
        if self.element is None:
            return
        live = self.controller.get_element(self.element.element_id)
        if live is not None:
            self.element = build_element(self.controller.registry, live.to_dict())
        self.controller.delete_element(self.element.element_id)

    @property
    def element_id(self) -> Optional[str]:
        return self.element.element_id if self.element else None

    def get_description(self) -> str:
        return f"Add {self.element_type}"


class DeleteElementCommand(Command):
    """Command to delete one or more elements from the circuit."""

    def __init__(self, controller: CircuitController, element_ids: Union[str, list[str]]):
        self.controller = controller
        ids = [element_ids] if isinstance(element_ids, str) else element_ids
        # Each id is deleted and restored once
        self.element_ids = list(dict.fromkeys(ids))
        self.deleted: list[tuple[int, dict]] = []

    def execute(self) -> None:
        """Delete the elements and store their data and positions for undo."""
        found = []
        for element_id in self.element_ids:
            index = self.controller.model.index_of(element_id)
            if index >= 0:
                found.append((index, self.controller.get_element(element_id).to_dict()))
        self.deleted = sorted(found, key=lambda item: item[0])

        for _, data in reversed(self.deleted):
            self.controller.delete_element(data["id"])

    def undo(self) -> None:
        """Restore the deleted elements at their original indices."""
        for index, data in self.deleted:
            element = build_element(self.controller.registry, data)
            self.controller.insert_element(index, element)

    def get_description(self) -> str:
        if len(self.element_ids) == 1:
            return f"Delete {self.element_ids[0]}"
        return f"Delete {len(self.element_ids)} elements"


class DeleteAllCommand(Command):
    """Command to delete every element in the circuit."""

    def __init__(self, controller: CircuitController):
        self.controller = controller
        self.snapshot: Optional[dict] = None

    def execute(self) -> None:
        self.snapshot = self.controller.export_state()
        self.controller.clear_circuit()

    def undo(self) -> None:
        if self.snapshot is not None:
            self.controller.import_state(self.snapshot)

    def get_description(self) -> str:
        return "Delete all"


class MoveElementCommand(Command):
    """Command to move an element's nodes to new positions."""

    def __init__(
        self,
        controller: CircuitController,
        element_id: str,
        new_nodes: list[Position],
        old_nodes: Optional[list[Position]] = None,
    ):
        self.controller = controller
        self.element_id = element_id
        self.new_nodes = list(new_nodes)
        self.old_nodes = list(old_nodes) if old_nodes is not None else None

    def execute(self) -> None:
        """Move the element and store the old nodes."""
        element = self.controller.get_element(self.element_id)
        if element is not None:
            if self.old_nodes is None:
                self.old_nodes = list(element.nodes)
            self.controller.move_element(self.element_id, self.new_nodes)

    def undo(self) -> None:
        """Restore the old nodes."""
        if self.old_nodes is not None:
            self.controller.move_element(self.element_id, self.old_nodes)

    def get_description(self) -> str:
        return f"Move {self.element_id}"


class ChangePropertiesCommand(Command):
    """Command to change property values of an element."""

    def __init__(self, controller: CircuitController, element_id: str, values: dict):
        self.controller = controller
        self.element_id = element_id
        self.new_values = dict(values)
        self.old_values: Optional[dict] = None

    def execute(self) -> None:
        """Change the values and store the old ones."""
        element = self.controller.get_element(self.element_id)
        if element is not None:
            old_values = {key: element.properties.get(key) for key in self.new_values}
            self.controller.update_properties(self.element_id, self.new_values)
            self.old_values = old_values

    def undo(self) -> None:
        """Restore the old values."""
        if self.old_values is not None:
            self.controller.update_properties(self.element_id, self.old_values)

    def get_description(self) -> str:
        return f"Change {self.element_id} properties"


class ChangeLabelCommand(Command):
    """Command to set or clear an element's label."""

    def __init__(self, controller: CircuitController, element_id: str, label: Union[Label, str, None]):
        self.controller = controller
        self.element_id = element_id
        self.new_label = label
        self.old_label: Optional[Label] = None
        self._applied = False

    def execute(self) -> None:
        element = self.controller.get_element(self.element_id)
        if element is not None:
            old_label = element.label
            self.controller.set_label(self.element_id, self.new_label)
            self.old_label = old_label
            self._applied = True

    def undo(self) -> None:
        if self._applied:
            self.controller.set_label(self.element_id, self.old_label)

    def get_description(self) -> str:
        return f"Change {self.element_id} label"


class SnapshotCommand(Command):
    """
    Command that swaps the whole circuit between two snapshots.

    Used for interactive gestures (drags, wire drawing) whose effect is
    easier to capture as before/after state than as a targeted change.
    """

    def __init__(self, controller: CircuitController, before: dict, after: dict, description: str = "Edit circuit"):
        self.controller = controller
        self.before = before
        self.after = after
        self.description = description

    def execute(self) -> None:
        self.controller.import_state(self.after)

    def undo(self) -> None:
        self.controller.import_state(self.before)

    def get_description(self) -> str:
        return self.description


class CompoundCommand(Command):
    """Command that groups multiple commands into a single undo step.

    If a child fails, the children already applied in that pass are
    reversed before the error is re-raised.
    """

    def __init__(self, commands: list[Command], description: str = "Multiple actions"):
        self.commands = commands
        self.description = description

    def execute(self) -> None:
        """Execute all commands in order."""
        done: list[Command] = []
        try:
            for command in self.commands:
                command.execute()
                done.append(command)
        except Exception:
            for command in reversed(done):
                command.undo()
            raise

    def undo(self) -> None:
        """Undo all commands in reverse order."""
        done: list[Command] = []
        try:
            for command in reversed(self.commands):
                command.undo()
                done.append(command)
        except Exception:
            for command in reversed(done):
                command.execute()
            raise

    def get_description(self) -> str:
        return self.description
