"""Domain models for the user profile and calorie targets."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DailyMetrics:
    """Body metrics recorded for a single date."""

    age: int
    weight: int
    activity_level: str


@dataclass(frozen=True)
class UserProfile:
    """Stable profile fields plus per-date metrics."""

    gender: str
    height: int
    daily_data: dict[str, DailyMetrics] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class CalorieSummary:
    """Target versus consumed calories for a date."""

    date: str
    target: int
    consumed: int
    calculator_name: str

    @property
    def difference(self) -> int:
        return self.consumed - self.target
