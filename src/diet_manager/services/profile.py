"""User profile and calorie target service."""

import logging
from dataclasses import dataclass, field, replace
from typing import Protocol

from diet_manager.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from diet_manager.domain.log import validate_date_key
from diet_manager.domain.profile import CalorieSummary, DailyMetrics, UserProfile
from diet_manager.services.calculators import DietCalculator, HarrisBenedictCalculator

logger = logging.getLogger(__name__)

GENDERS = {"M", "F"}


class ProfileRepository(Protocol):
    """Persistence interface for the user profile."""

    def load(self) -> UserProfile | None:
        """Return the stored profile, if one has been set up."""

    def save(self, profile: UserProfile) -> None:
        """Replace the stored profile."""


@dataclass
class ProfileService:
    """Service for profile data and daily calorie targets."""

    repository: ProfileRepository
    calculator: DietCalculator = field(default_factory=HarrisBenedictCalculator)
    profile: UserProfile | None = field(init=False)
    dirty: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.profile = self.repository.load()

    def is_set_up(self) -> bool:
        return self.profile is not None

    def setup(self, gender: str, height: int) -> UserProfile:
        """Store gender and height, keeping recorded daily metrics."""
        normalized = gender.strip().upper() if isinstance(gender, str) else ""
        if normalized not in GENDERS:
            raise ValidationError(f"Gender must be M or F, got {gender!r}")
        _require_positive("height", height)
        daily_data = dict(self.profile.daily_data) if self.profile else {}
        self.profile = UserProfile(
            gender=normalized, height=height, daily_data=daily_data
        )
        self._save()
        return self.profile

    def record_metrics(
        self, date: str, age: int, weight: int, activity_level: str
    ) -> DailyMetrics:
        """Store age, weight and activity level for a date."""
        validate_date_key(date)
        _require_positive("age", age)
        _require_positive("weight", weight)
        if not isinstance(activity_level, str) or not activity_level.strip():
            raise ValidationError("Activity level must not be empty")
        metrics = DailyMetrics(
            age=age, weight=weight, activity_level=activity_level.strip().lower()
        )
        self._store_metrics(date, metrics)
        return metrics

    def metrics_for(self, date: str) -> DailyMetrics:
        """Return metrics for a date, carrying the latest ones forward."""
        validate_date_key(date)
        profile = self._require_profile()
        metrics = profile.daily_data.get(date)
        if metrics is not None:
            return metrics
        if not profile.daily_data:
            raise NotFoundError(f"No profile data recorded for {date}")
        latest = max(profile.daily_data)
        metrics = profile.daily_data[latest]
        self._store_metrics(date, metrics)
        return metrics

    def calorie_target(self, date: str) -> int:
        """Return the daily calorie target for a date."""
        profile = self._require_profile()
        metrics = self.metrics_for(date)
        return self.calculator.calculate_calories(
            profile.gender,
            profile.height,
            metrics.age,
            metrics.weight,
            metrics.activity_level,
        )

    def summary(self, date: str, consumed: int) -> CalorieSummary:
        """Compare consumed calories with the target for a date."""
        return CalorieSummary(
            date=date,
            target=self.calorie_target(date),
            consumed=consumed,
            calculator_name=self.calculator.name,
        )

    def set_calculator(self, calculator: DietCalculator) -> None:
        self.calculator = calculator

    def close(self) -> None:
        """Write the profile a final time; raises if it cannot be saved."""
        if self.profile is not None:
            self.repository.save(self.profile)
        self.dirty = False

    def _store_metrics(self, date: str, metrics: DailyMetrics) -> None:
        profile = self._require_profile()
        daily_data = dict(profile.daily_data)
        daily_data[date] = metrics
        self.profile = replace(profile, daily_data=daily_data)
        self._save()

    def _require_profile(self) -> UserProfile:
        if self.profile is None:
            raise NotFoundError("User profile has not been set up")
        return self.profile

    def _save(self) -> None:
        try:
            self.repository.save(self._require_profile())
        except PersistenceError as exc:
            self.dirty = True
            logger.warning("Profile kept in memory only: %s", exc)
            return
        self.dirty = False


def _require_positive(label: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{label.capitalize()} must be a positive integer")
