"""Daily nutrition log service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from meal_planner.domain.nutrition import EMPTY_NUTRITION, NutritionFacts
from meal_planner.domain.stats import NutritionLogEntry
from meal_planner.services.scoring import score

_logger = logging.getLogger(__name__)


class NutritionLogStore(Protocol):
    """Persistence interface for daily nutrition logs."""

    def get_entry(self, user_id: UUID, day: date) -> NutritionLogEntry | None:
        """Return the log row for a user and day, if present."""

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[NutritionLogEntry]:
        """Return log rows between start and end, inclusive, oldest first."""

    def upsert_today(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        totals: NutritionFacts,
        target_calories: int,
        meals_completed_delta: int,
    ) -> NutritionLogEntry:
        """Add totals to the day's row, creating it when missing.

        The target snapshot is replaced with ``target_calories``.
        """


@dataclass
class NutritionLogService:
    """Service that records completed meals into daily logs."""

    store: NutritionLogStore

    def record_meal(
        self,
        user_id: UUID,
        day: date,
        nutrition: NutritionFacts,
        target_calories: int,
    ) -> NutritionLogEntry:
        """Add one completed meal to the day's log."""
        entry = self.store.upsert_today(
            user_id, day, nutrition, target_calories, meals_completed_delta=1
        )
        _logger.info(
            "Nutrition log updated: user_id=%s day=%s calories=%.0f meals=%s",
            user_id,
            day,
            entry.total_calories,
            entry.meals_completed,
        )
        return entry

    def refresh_target(
        self, user_id: UUID, day: date, target_calories: int
    ) -> NutritionLogEntry | None:
        """Replace the target snapshot of an existing log row."""
        if self.store.get_entry(user_id, day) is None:
            return None
        return self.store.upsert_today(
            user_id, day, EMPTY_NUTRITION, target_calories, meals_completed_delta=0
        )

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[NutritionLogEntry]:
        return self.store.list_entries(user_id, start, end)


def score_entry(entry: NutritionLogEntry) -> int:
    """Score a stored log row against its own target snapshot."""
    return score(entry.total_calories, entry.target_calories)
