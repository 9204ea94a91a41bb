"""Undo/redo across the daily log and the food catalog."""

import logging
from dataclasses import dataclass

from diet_manager.services.catalog import FoodCatalog
from diet_manager.services.daily_log import DailyLog

logger = logging.getLogger(__name__)


@dataclass
class History:
    """Presentation-level undo that prefers the log over the catalog.

    The two stores keep separate histories; this only decides which one
    a single "undo" or "redo" request goes to.
    """

    daily_log: DailyLog
    catalog: FoodCatalog

    def undo(self) -> bool:
        if self.daily_log.can_undo():
            return self.daily_log.undo()
        if self.catalog.can_undo():
            return self.catalog.undo()
        logger.info("Nothing to undo.")
        return False

    def redo(self) -> bool:
        if self.daily_log.can_redo():
            return self.daily_log.redo()
        if self.catalog.can_redo():
            return self.catalog.redo()
        logger.info("Nothing to redo.")
        return False
