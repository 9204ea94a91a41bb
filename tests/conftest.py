"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field

import pytest

from diet_manager.config import Settings
from diet_manager.domain.errors import PersistenceError
from diet_manager.domain.foods import CatalogState
from diet_manager.domain.log import LogState
from diet_manager.domain.profile import UserProfile
from diet_manager.services.catalog import CatalogRepository, FoodCatalog
from diet_manager.services.daily_log import DailyLog, LogRepository
from diet_manager.services.profile import ProfileRepository, ProfileService


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog repository for tests."""

    stored: CatalogState = field(default_factory=CatalogState)
    saves: int = 0
    fail_saves: bool = False

    def load(self) -> CatalogState:
        return CatalogState(
            basic=dict(self.stored.basic), composite=dict(self.stored.composite)
        )

    def save(self, state: CatalogState) -> None:
        if self.fail_saves:
            raise PersistenceError("disk full")
        self.stored = CatalogState(
            basic=dict(state.basic), composite=dict(state.composite)
        )
        self.saves += 1


@dataclass
class InMemoryLogRepository(LogRepository):
    """In-memory log repository for tests."""

    stored: LogState = field(default_factory=LogState)
    saves: int = 0
    fail_saves: bool = False

    def load(self) -> LogState:
        return LogState(
            days={date: list(entries) for date, entries in self.stored.days.items()}
        )

    def save(self, state: LogState) -> None:
        if self.fail_saves:
            raise PersistenceError("disk full")
        self.stored = LogState(
            days={date: list(entries) for date, entries in state.days.items()}
        )
        self.saves += 1


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    stored: UserProfile | None = None
    saves: int = 0

    def load(self) -> UserProfile | None:
        return self.stored

    def save(self, profile: UserProfile) -> None:
        self.stored = profile
        self.saves += 1


@pytest.fixture(autouse=True)
def reset_package_logger():
    logger = logging.getLogger("diet_manager")
    yield
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=tmp_path, calculator="mifflin-st-jeor")


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def log_repository() -> InMemoryLogRepository:
    return InMemoryLogRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def catalog(catalog_repository: InMemoryCatalogRepository) -> FoodCatalog:
    return FoodCatalog(catalog_repository)


@pytest.fixture
def stocked_catalog(catalog: FoodCatalog) -> FoodCatalog:
    catalog.add_or_update_basic("Oats", ["grain", "breakfast"], 150)
    catalog.add_or_update_basic("Nuts", ["snack", "protein"], 300)
    catalog.add_or_update_basic("Apple", ["fruit", "sweet"], 95)
    catalog.add_or_update_basic("Carrot", ["vegetable", "savory"], 25)
    catalog.commands.clear()
    return catalog


@pytest.fixture
def daily_log(log_repository: InMemoryLogRepository) -> DailyLog:
    return DailyLog(log_repository)


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)
