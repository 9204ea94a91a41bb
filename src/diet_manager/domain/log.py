"""Domain models for the daily food log."""

import re
from dataclasses import dataclass, field
from datetime import datetime

from diet_manager.domain.errors import ValidationError
from diet_manager.domain.foods import FoodSnapshot

DATE_KEY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class LogEntry:
    """A single logged food with the details it had when logged."""

    id: str
    food_name: str
    servings: int
    details: FoodSnapshot

    @property
    def calories(self) -> int:
        return self.servings * self.details.calories


@dataclass
class LogState:
    """In-memory log: date key to entries in insertion order."""

    days: dict[str, list[LogEntry]] = field(default_factory=dict)

    def entries(self, date: str) -> list[LogEntry]:
        return self.days.get(date, [])

    def replace_with(self, other: "LogState") -> None:
        """Swap in another state's entries, keeping this object's identity."""
        self.days.clear()
        self.days.update(other.days)


def validate_date_key(date: str) -> str:
    """Return ``date`` if it is a real ``YYYY-MM-DD`` date."""
    if not isinstance(date, str) or not DATE_KEY_PATTERN.fullmatch(date):
        raise ValidationError(f"Date '{date}' must use the YYYY-MM-DD format")
    try:
        datetime.strptime(date, "%Y-%m-%d")
    except ValueError as exc:
        raise ValidationError(f"Date '{date}' is not a calendar date") from exc
    return date
