"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from diet_manager.adapters.json_catalog_repository import JsonCatalogRepository
from diet_manager.adapters.json_log_repository import JsonLogRepository
from diet_manager.adapters.json_profile_repository import JsonProfileRepository
from diet_manager.app_logging import configure_logging
from diet_manager.config import Settings
from diet_manager.services.calculators import create_calculator
from diet_manager.services.catalog import FoodCatalog
from diet_manager.services.daily_log import DailyLog
from diet_manager.services.history import History
from diet_manager.services.profile import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: FoodCatalog
    daily_log: DailyLog
    profile_service: ProfileService
    history: History
    close_resources: Callable[[], None]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container, loading all stores."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level.upper())
    catalog = FoodCatalog(JsonCatalogRepository(resolved_settings.food_db_path))
    daily_log = DailyLog(JsonLogRepository(resolved_settings.log_path))
    profile_service = ProfileService(
        repository=JsonProfileRepository(resolved_settings.profile_path),
        calculator=create_calculator(resolved_settings.calculator),
    )
    history = History(daily_log=daily_log, catalog=catalog)

    def close_resources() -> None:
        catalog.close()
        daily_log.close()
        profile_service.close()

    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        daily_log=daily_log,
        profile_service=profile_service,
        history=history,
        close_resources=close_resources,
    )
