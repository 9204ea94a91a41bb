"""Daily food log service."""

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from diet_manager.domain.errors import (
    InvariantViolation,
    PersistenceError,
    ValidationError,
)
from diet_manager.domain.foods import FoodSnapshot, canonical_name
from diet_manager.domain.log import LogEntry, LogState, validate_date_key
from diet_manager.services.commands import CommandManager

logger = logging.getLogger(__name__)


class LogRepository(Protocol):
    """Persistence interface for the daily food log."""

    def load(self) -> LogState:
        """Return the stored log, empty when nothing is stored yet."""

    def save(self, state: LogState) -> None:
        """Replace the stored log with ``state``."""


@dataclass(frozen=True)
class AddEntryCommand:
    """Append ``entry`` to a date; reverting removes it by id."""

    date: str
    entry: LogEntry
    creates_day: bool

    def apply(self, state: LogState) -> None:
        state.days.setdefault(self.date, []).append(self.entry)

    def revert(self, state: LogState) -> None:
        entries = state.days.get(self.date, [])
        index = _index_of(entries, self.entry.id)
        if index is None:
            raise InvariantViolation(
                f"Entry {self.entry.id} missing from {self.date} during undo"
            )
        del entries[index]
        if self.creates_day and not entries:
            del state.days[self.date]


@dataclass(frozen=True)
class RemoveEntryCommand:
    """Remove the entry at ``index``; reverting re-inserts it there."""

    date: str
    index: int
    entry: LogEntry

    def apply(self, state: LogState) -> None:
        entries = state.days.get(self.date, [])
        if self.index >= len(entries) or entries[self.index].id != self.entry.id:
            raise InvariantViolation(
                f"Entry {self.entry.id} is no longer at position {self.index} "
                f"of {self.date}"
            )
        del entries[self.index]

    def revert(self, state: LogState) -> None:
        entries = state.days.get(self.date, [])
        if self.index > len(entries):
            raise InvariantViolation(
                f"Cannot restore entry {self.entry.id} at position {self.index} "
                f"of {self.date}"
            )
        state.days.setdefault(self.date, entries).insert(self.index, self.entry)


def new_entry_id() -> str:
    """Return a unique log entry id."""
    return f"{int(time.time())}_{uuid4().hex}"


@dataclass
class DailyLog:
    """Per-date food log with its own undo history.

    Entries carry a snapshot of the food taken when they were logged, so
    later catalog edits never change past totals. Instances are not safe
    for concurrent mutation from several threads.
    """

    repository: LogRepository
    state: LogState = field(init=False)
    commands: CommandManager[LogState] = field(init=False)
    dirty: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.state = self.repository.load()
        self.commands = CommandManager(self.state)

    def add_entry(
        self, date: str, food_name: str, servings: int, details: FoodSnapshot
    ) -> LogEntry:
        """Log ``servings`` of a food on ``date``."""
        validate_date_key(date)
        name = canonical_name(food_name) if isinstance(food_name, str) else ""
        if not name:
            raise ValidationError("Food name must not be empty")
        if isinstance(servings, bool) or not isinstance(servings, int) or servings < 1:
            raise ValidationError(
                f"Servings must be a positive integer, got {servings!r}"
            )
        if not isinstance(details, FoodSnapshot):
            raise ValidationError("Entry details must be a food snapshot")
        entry = LogEntry(
            id=new_entry_id(), food_name=name, servings=servings, details=details
        )
        self.commands.execute(
            AddEntryCommand(
                date=date, entry=entry, creates_day=date not in self.state.days
            )
        )
        logger.info("Logged %d x '%s' on %s", servings, name, date)
        self._save()
        return entry

    def remove_entry(self, date: str, entry_id: str) -> bool:
        """Remove an entry by id; return False when it does not exist."""
        index = _index_of(self.state.entries(date), entry_id)
        if index is None:
            logger.info("Entry %s not found on %s", entry_id, date)
            return False
        entry = self.state.days[date][index]
        self.commands.execute(RemoveEntryCommand(date=date, index=index, entry=entry))
        logger.info("Removed entry %s from %s", entry_id, date)
        self._save()
        return True

    def view_log(self, date: str) -> list[LogEntry]:
        """Return a copy of the entries logged on ``date``."""
        return list(self.state.entries(date))

    def daily_calories(self, date: str) -> int:
        """Return total calories logged on ``date``."""
        return sum(entry.calories for entry in self.state.entries(date))

    def dates(self) -> list[str]:
        """Return the dates that have a log, oldest first."""
        return sorted(self.state.days)

    def undo(self) -> bool:
        if not self.commands.undo():
            return False
        self._save()
        return True

    def redo(self) -> bool:
        if not self.commands.redo():
            return False
        self._save()
        return True

    def can_undo(self) -> bool:
        return self.commands.can_undo()

    def can_redo(self) -> bool:
        return self.commands.can_redo()

    def reload(self) -> None:
        """Re-read the log from the repository and drop undo history."""
        self.state.replace_with(self.repository.load())
        self.commands.clear()
        self.dirty = False

    def close(self) -> None:
        """Write the log a final time; raises if it cannot be saved."""
        self.repository.save(self.state)
        self.dirty = False

    def _save(self) -> None:
        try:
            self.repository.save(self.state)
        except PersistenceError as exc:
            self.dirty = True
            logger.warning("Daily log kept in memory only: %s", exc)
            return
        self.dirty = False


def _index_of(entries: list[LogEntry], entry_id: str) -> int | None:
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            return index
    return None
