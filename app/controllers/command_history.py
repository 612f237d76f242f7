"""
CommandHistory - Manages undo/redo stacks and command execution.

Maintains a history of executed commands with configurable depth limit.
Supports undo, redo, and clearing history. The history never looks at
what kind of command it holds; anything with execute() and undo() works.
"""

import logging
from typing import Optional

from controllers.commands import Command

logger = logging.getLogger(__name__)


class CommandHistory:
    """
    Two-stack undo/redo engine: executed commands on one stack, undone
    commands on the other.

    Delta and snapshot commands share the stacks. A command only moves
    between stacks after its execute()/undo() returns, so an exception
    leaves both stacks as they were before the call and reaches the caller.
    """

    def __init__(self, max_depth: int = 100):
        """
        Args:
            max_depth: Undoable commands kept; the oldest is dropped beyond this.
        """
        self.max_depth = max_depth
        self._history: list[Command] = []
        self._future: list[Command] = []

    def execute_command(self, command: Command) -> None:
        """
        Execute a command and add it to the history stack.

        Clears the future stack since a new action invalidates any redo history.

        Args:
            command: The command to execute
        """
        logger.debug("Executing command: %s", _describe(command))
        command.execute()

        self._history.append(command)

        # Enforce max depth
        if len(self._history) > self.max_depth:
            self._history.pop(0)

        # Clear future stack - new actions invalidate redo history
        self._future.clear()

    def undo(self) -> bool:
        """
        Undo the last command.

        Returns:
            True if an action was undone, False if history is empty
        """
        if not self._history:
            return False

        command = self._history[-1]
        logger.debug("Undoing command: %s", _describe(command))
        command.undo()
        self._history.pop()
        self._future.append(command)

        return True

    def redo(self) -> bool:
        """
        Redo the last undone command.

        Returns:
            True if an action was redone, False if the future stack is empty
        """
        if not self._future:
            return False

        command = self._future[-1]
        logger.debug("Redoing command: %s", _describe(command))
        command.execute()
        self._future.pop()
        self._history.append(command)

        return True

    def can_undo(self) -> bool:
        """Return whether there are commands to undo."""
        return len(self._history) > 0

    def can_redo(self) -> bool:
        """Return whether there are commands to redo."""
        return len(self._future) > 0

    def get_undo_description(self) -> Optional[str]:
        """
        Get description of the command that would be undone.

        Returns:
            Description string or None if history is empty
        """
        if self._history:
            return _describe(self._history[-1])
        return None

    def get_redo_description(self) -> Optional[str]:
        """
        Get description of the command that would be redone.

        Returns:
            Description string or None if the future stack is empty
        """
        if self._future:
            return _describe(self._future[-1])
        return None

    def clear(self) -> None:
        """Clear both stacks (project reset or load)."""
        self._history.clear()
        self._future.clear()

    def get_undo_count(self) -> int:
        """Return the number of commands in the history stack."""
        return len(self._history)

    def get_redo_count(self) -> int:
        """Return the number of commands in the future stack."""
        return len(self._future)


def _describe(command) -> str:
    # Plain objects with execute()/undo() are accepted too
    describe = getattr(command, "get_description", None)
    return describe() if callable(describe) else type(command).__name__
