"""JSON file implementation for the user profile."""

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, TypeAdapter

from diet_manager.adapters.json_files import Document, read_document, write_document
from diet_manager.domain.profile import DailyMetrics, UserProfile
from diet_manager.services.profile import ProfileRepository


class DailyMetricsDocument(Document):
    age: int = Field(gt=0)
    weight: int = Field(gt=0)
    activity_level: str = Field(alias="activityLevel")


class ProfileDocument(Document):
    gender: str = ""
    height: int = 0
    daily_data: dict[str, DailyMetricsDocument] = Field(
        default_factory=dict, alias="dailyData"
    )


_SCHEMA = TypeAdapter(ProfileDocument)


@dataclass
class JsonProfileRepository(ProfileRepository):
    """Profile stored as ``{"gender", "height", "dailyData": {...}}``."""

    path: Path

    def load(self) -> UserProfile | None:
        """Return the profile, or None when it was never set up."""
        document = read_document(self.path, _SCHEMA)
        if document is None or not document.gender or document.height <= 0:
            return None
        return UserProfile(
            gender=document.gender,
            height=document.height,
            daily_data={
                date: DailyMetrics(
                    age=row.age, weight=row.weight, activity_level=row.activity_level
                )
                for date, row in document.daily_data.items()
            },
        )

    def save(self, profile: UserProfile) -> None:
        """Rewrite the whole profile file."""
        document = ProfileDocument(
            gender=profile.gender,
            height=profile.height,
            daily_data={
                date: DailyMetricsDocument(
                    age=metrics.age,
                    weight=metrics.weight,
                    activity_level=metrics.activity_level,
                )
                for date, metrics in profile.daily_data.items()
            },
        )
        write_document(self.path, _SCHEMA, document)
