"""
FileController - Handles netlist file I/O and the recent files list.

File dialog interaction is the responsibility of the view layer.
Recent files tracking uses QSettings for cross-session persistence.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from adapters.netlist_adapter import NetlistAdapter
from controllers.circuit_controller import CircuitController
from controllers.command_history import CommandHistory
from PyQt6.QtCore import QSettings

logger = logging.getLogger(__name__)

MAX_RECENT_FILES = 10
SETTINGS_ORGANIZATION = "QucatSchematic"
SETTINGS_APPLICATION = "Schematic Editor"
RECENT_FILES_KEY = "file/recent_files"


class FileController:
    """
    Saves and loads circuits as netlist files.

    Loading parses the whole file before touching the circuit, so a
    malformed file leaves the current circuit and its undo history intact.
    """

    def __init__(
        self,
        controller: CircuitController,
        history: Optional[CommandHistory] = None,
        adapter: Optional[NetlistAdapter] = None,
    ):
        self.controller = controller
        self.history = history
        self.adapter = adapter or NetlistAdapter(controller.registry)
        self.current_file: Optional[Path] = None

    def new_circuit(self) -> None:
        """Clear the circuit, the undo history and the file state."""
        self.controller.clear_circuit()
        if self.history is not None:
            self.history.clear()
        self.current_file = None

    def export_netlist(self) -> str:
        """Return the current circuit as netlist text."""
        return self.adapter.export_to_string(self.controller.get_elements())

    def save_netlist(self, filepath) -> None:
        """
        Save the circuit to a netlist file.

        Args:
            filepath: Path or string to save to.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        text = self.export_netlist()
        with open(filepath, "w", newline="\n") as f:
            f.write(text)
            if text:
                f.write("\n")
        self.current_file = filepath
        self.add_recent_file(filepath)

    def load_netlist(self, filepath) -> None:
        """
        Load a circuit from a netlist file, replacing the current one.

        Args:
            filepath: Path or string to load from.

        Raises:
            OSError: If the file cannot be read.
            adapters.netlist_adapter.FormatError: If the file is malformed.
        """
        filepath = Path(filepath)
        with open(filepath, "r") as f:
            text = f.read()

        elements = self.adapter.import_from_string(text)
        self.controller.import_state({"elements": [element.to_dict() for element in elements]})
        if self.history is not None:
            self.history.clear()

        self.current_file = filepath
        self.add_recent_file(filepath)

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

    def get_window_title(self, base: str = "Schematic Editor") -> str:
        """Get window title based on current file."""
        if self.current_file:
            return f"{base} - {self.current_file.name}"
        return base

    # ------------------------------------------------------------------
    # Recent files
    # ------------------------------------------------------------------

    def _settings(self) -> QSettings:
        return QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)

    def get_recent_files(self) -> List[str]:
        """
        Get list of recently opened files from QSettings.

        Returns:
            List of file paths (most recent first), with non-existent files removed.
        """
        settings = self._settings()
        recent = settings.value(RECENT_FILES_KEY, [])

        # QSettings returns a bare string for one-element lists on some backends
        if isinstance(recent, str):
            recent = [recent]
        elif not isinstance(recent, list):
            logger.warning("Ignoring unexpected recent files value: %r", recent)
            recent = []

        existing = [f for f in recent if os.path.exists(f)]

        if len(existing) != len(recent):
            settings.setValue(RECENT_FILES_KEY, existing)

        return existing

    def add_recent_file(self, filepath: Path) -> None:
        """
        Add a file to the front of the recent files list.

        Args:
            filepath: Path to add to recent files.
        """
        filepath_str = str(Path(filepath).absolute())
        recent = self.get_recent_files()

        if filepath_str in recent:
            recent.remove(filepath_str)
        recent.insert(0, filepath_str)
        recent = recent[:MAX_RECENT_FILES]

        self._settings().setValue(RECENT_FILES_KEY, recent)

    def clear_recent_files(self) -> None:
        """Clear the recent files list."""
        self._settings().setValue(RECENT_FILES_KEY, [])
