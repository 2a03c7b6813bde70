"""Tests for the nutrition log service."""

from datetime import date
from uuid import uuid4

from meal_planner.domain.nutrition import NutritionFacts
from meal_planner.domain.stats import NutritionLogEntry
from meal_planner.services.nutrition_log import NutritionLogService, score_entry
from tests.conftest import InMemoryNutritionLogStore

DAY = date(2024, 2, 1)
BREAKFAST = NutritionFacts(calories=450, protein_g=25, fat_g=15, carbs_g=50)


def test_record_meal_accumulates_per_day() -> None:
    user_id = uuid4()
    service = NutritionLogService(InMemoryNutritionLogStore())

    service.record_meal(user_id, DAY, BREAKFAST, 2000)
    entry = service.record_meal(user_id, DAY, BREAKFAST, 2100)

    assert entry.total_calories == 900
    assert entry.total_protein_g == 50
    assert entry.meals_completed == 2
    assert entry.target_calories == 2100


def test_refresh_target_only_touches_existing_rows() -> None:
    user_id = uuid4()
    service = NutritionLogService(InMemoryNutritionLogStore())

    assert service.refresh_target(user_id, DAY, 1800) is None

    service.record_meal(user_id, DAY, BREAKFAST, 2000)
    refreshed = service.refresh_target(user_id, DAY, 1800)

    assert refreshed is not None
    assert refreshed.target_calories == 1800
    assert refreshed.total_calories == 450
    assert refreshed.meals_completed == 1


def test_list_entries_is_ordered_and_scoped() -> None:
    user_id = uuid4()
    service = NutritionLogService(InMemoryNutritionLogStore())
    service.record_meal(user_id, date(2024, 2, 3), BREAKFAST, 2000)
    service.record_meal(user_id, date(2024, 2, 1), BREAKFAST, 2000)
    service.record_meal(uuid4(), date(2024, 2, 2), BREAKFAST, 2000)

    entries = service.list_entries(user_id, date(2024, 2, 1), date(2024, 2, 3))

    assert [entry.day for entry in entries] == [date(2024, 2, 1), date(2024, 2, 3)]


def test_score_entry_uses_target_snapshot() -> None:
    entry = NutritionLogEntry(
        user_id=uuid4(),
        day=DAY,
        total_calories=1800,
        total_protein_g=90,
        total_fat_g=60,
        total_carbs_g=200,
        target_calories=2000,
        meals_completed=3,
    )

    assert score_entry(entry) == 90
