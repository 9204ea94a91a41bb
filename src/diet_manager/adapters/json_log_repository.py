"""JSON file implementation for the daily food log."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, TypeAdapter

from diet_manager.adapters.json_files import Document, read_document, write_document
from diet_manager.domain.foods import BASIC, COMPOSITE, FoodSnapshot
from diet_manager.domain.log import LogEntry, LogState
from diet_manager.services.daily_log import LogRepository


class SnapshotDocument(Document):
    keywords: list[str] = Field(default_factory=list)
    calories: int = Field(ge=0)
    ingredients: dict[str, int] | None = None


class LogEntryDocument(Document):
    id: str
    name: str
    servings: int = Field(gt=0)
    details: SnapshotDocument


_SCHEMA = TypeAdapter(dict[str, list[LogEntryDocument]])


@dataclass
class JsonLogRepository(LogRepository):
    """Log stored as ``{"YYYY-MM-DD": [entry, ...]}``."""

    path: Path

    def load(self) -> LogState:
        """Return the stored log, empty when the file is missing."""
        document = read_document(self.path, _SCHEMA)
        if document is None:
            return LogState()
        return LogState(
            days={
                date: [_parse_entry(row) for row in rows]
                for date, rows in document.items()
            }
        )

    def save(self, state: LogState) -> None:
        """Rewrite the whole log file."""
        document = {
            date: [_dump_entry(entry) for entry in entries]
            for date, entries in state.days.items()
        }
        write_document(self.path, _SCHEMA, document)


def _parse_entry(row: LogEntryDocument) -> LogEntry:
    details = row.details
    return LogEntry(
        id=row.id,
        food_name=row.name,
        servings=row.servings,
        details=FoodSnapshot(
            namespace=BASIC if details.ingredients is None else COMPOSITE,
            keywords=tuple(details.keywords),
            calories=details.calories,
            ingredients=details.ingredients,
        ),
    )


def _dump_entry(entry: LogEntry) -> LogEntryDocument:
    details = entry.details
    return LogEntryDocument(
        id=entry.id,
        name=entry.food_name,
        servings=entry.servings,
        details=SnapshotDocument(
            keywords=list(details.keywords),
            calories=details.calories,
            ingredients=(
                dict(details.ingredients) if details.ingredients is not None else None
            ),
        ),
    )
