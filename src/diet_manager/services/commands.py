"""Reversible command engine shared by the catalog and the daily log."""

import logging
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

from diet_manager.domain.errors import InvariantViolation

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")
StateT_contra = TypeVar("StateT_contra", contravariant=True)


class Command(Protocol[StateT_contra]):
    """A reversible mutation of a store's in-memory state."""

    def apply(self, state: StateT_contra) -> None:
        """Perform the mutation."""

    def revert(self, state: StateT_contra) -> None:
        """Restore the state that existed before ``apply``."""


@dataclass
class CommandManager(Generic[StateT]):
    """Linear undo/redo over commands applied to a single state object.

    Not safe for concurrent use: the stacks and the state they mutate are
    updated without locking.
    """

    state: StateT
    _undo_stack: list[Command[StateT]] = field(default_factory=list)
    _redo_stack: list[Command[StateT]] = field(default_factory=list)

    def execute(self, command: Command[StateT]) -> None:
        """Apply a command and make it the latest undoable step."""
        command.apply(self.state)
        self._undo_stack.append(command)
        self._redo_stack.clear()

    def undo(self) -> bool:
        """Revert the latest command; return False when there is none."""
        if not self._undo_stack:
            logger.info("Nothing to undo.")
            return False
        command = self._undo_stack.pop()
        try:
            command.revert(self.state)
        except InvariantViolation:
            logger.exception("Undo of %r failed; history dropped", command)
            self.clear()
            return False
        self._redo_stack.append(command)
        return True

    def redo(self) -> bool:
        """Re-apply the latest undone command; return False when there is none."""
        if not self._redo_stack:
            logger.info("Nothing to redo.")
            return False
        command = self._redo_stack.pop()
        try:
            command.apply(self.state)
        except InvariantViolation:
            logger.exception("Redo of %r failed; history dropped", command)
            self.clear()
            return False
        self._undo_stack.append(command)
        return True

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def clear(self) -> None:
        """Forget all undo and redo history."""
        self._undo_stack.clear()
        self._redo_stack.clear()
