"""
Controllers for the schematic editor.

This package contains Qt-free controller classes that orchestrate
operations between models and views using an observer pattern.
FileController is the exception: it persists recent files via QSettings
and is imported from its own module.
"""

from .circuit_controller import EVENT_TYPES, CircuitController, build_element, has_state_changed
from .command_history import CommandHistory
from .commands import (
    AddElementCommand,
    ChangeLabelCommand,
    ChangePropertiesCommand,
    Command,
    CompoundCommand,
    DeleteAllCommand,
    DeleteElementCommand,
    MoveElementCommand,
    SnapshotCommand,
)
from .gestures import DragGesture, PlacementGesture, SnapshotRecorder, find_element_at, is_inside_element
from .wire_split_service import WireSplitService, is_on_segment

__all__ = [
    "CircuitController",
    "EVENT_TYPES",
    "build_element",
    "has_state_changed",
    "CommandHistory",
    "Command",
    "AddElementCommand",
    "DeleteElementCommand",
    "DeleteAllCommand",
    "MoveElementCommand",
    "ChangePropertiesCommand",
    "ChangeLabelCommand",
    "SnapshotCommand",
    "CompoundCommand",
    "WireSplitService",
    "is_on_segment",
    "DragGesture",
    "PlacementGesture",
    "SnapshotRecorder",
    "find_element_at",
    "is_inside_element",
]
