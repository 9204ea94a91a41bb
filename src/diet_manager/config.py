"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path(".")
    food_db_filename: str = "food_db.json"
    log_filename: str = "daily_food_log.json"
    profile_filename: str = "user_profile.json"
    calculator: str = "harris-benedict"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="DIET_MANAGER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def food_db_path(self) -> Path:
        return self.data_dir / self.food_db_filename

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.log_filename

    @property
    def profile_path(self) -> Path:
        return self.data_dir / self.profile_filename
