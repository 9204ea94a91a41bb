"""Daily calorie target calculators."""

from dataclasses import dataclass
from typing import Protocol

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very active": 1.9,
}
DEFAULT_MULTIPLIER = ACTIVITY_MULTIPLIERS["sedentary"]
DEFAULT_CALCULATOR = "harris-benedict"


class DietCalculator(Protocol):
    """Strategy that turns body metrics into a daily calorie target."""

    name: str

    def calculate_calories(
        self, gender: str, height: int, age: int, weight: int, activity_level: str
    ) -> int:
        """Return the daily calorie target."""


def activity_multiplier(activity_level: str) -> float:
    """Return the multiplier for an activity level, sedentary when unknown."""
    return ACTIVITY_MULTIPLIERS.get(activity_level.lower(), DEFAULT_MULTIPLIER)


@dataclass(frozen=True)
class HarrisBenedictCalculator:
    """Revised Harris-Benedict equation."""

    name: str = "Harris-Benedict Equation"

    def calculate_calories(
        self, gender: str, height: int, age: int, weight: int, activity_level: str
    ) -> int:
        if gender.upper() == "M":
            bmr = 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
        else:
            bmr = 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age
        return int(bmr * activity_multiplier(activity_level))


@dataclass(frozen=True)
class MifflinStJeorCalculator:
    """Mifflin-St Jeor equation."""

    name: str = "Mifflin-St Jeor Equation"

    def calculate_calories(
        self, gender: str, height: int, age: int, weight: int, activity_level: str
    ) -> int:
        bmr = 10 * weight + 6.25 * height - 5 * age
        bmr += 5 if gender.upper() == "M" else -161
        return int(bmr * activity_multiplier(activity_level))


_CALCULATORS: dict[str, type[DietCalculator]] = {
    "harris-benedict": HarrisBenedictCalculator,
    "mifflin-st-jeor": MifflinStJeorCalculator,
}


def available_calculators() -> list[str]:
    """Return the names accepted by :func:`create_calculator`."""
    return list(_CALCULATORS)


def create_calculator(name: str) -> DietCalculator:
    """Return the calculator registered under ``name``, Harris-Benedict otherwise."""
    factory = _CALCULATORS.get(name.lower(), _CALCULATORS[DEFAULT_CALCULATOR])
    return factory()
