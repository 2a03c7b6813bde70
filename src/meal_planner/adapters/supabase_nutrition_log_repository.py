"""Supabase repository for daily nutrition logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from meal_planner.domain.nutrition import NutritionFacts
from meal_planner.domain.stats import NutritionLogEntry
from meal_planner.services.nutrition_log import NutritionLogStore

_COLUMNS = (
    "user_id, date, total_calories, total_protein, total_fat, total_carbs, "
    "target_calories, meals_completed"
)


@dataclass
class SupabaseNutritionLogRepository(NutritionLogStore):
    """Supabase implementation for nutrition logs.

    Rows are keyed by (user_id, date); totals are read, added to and written
    back in ``upsert_today``.
    """

    client: Client

    def get_entry(self, user_id: UUID, day: date) -> NutritionLogEntry | None:
        response = (
            self.client.table("nutrition_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[NutritionLogEntry]:
        response = (
            self.client.table("nutrition_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def upsert_today(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        totals: NutritionFacts,
        target_calories: int,
        meals_completed_delta: int,
    ) -> NutritionLogEntry:
        current = self.get_entry(user_id, day)
        entry = NutritionLogEntry(
            user_id=user_id,
            day=day,
            total_calories=totals.calories
            + (current.total_calories if current else 0.0),
            total_protein_g=totals.protein_g
            + (current.total_protein_g if current else 0.0),
            total_fat_g=totals.fat_g + (current.total_fat_g if current else 0.0),
            total_carbs_g=totals.carbs_g
            + (current.total_carbs_g if current else 0.0),
            target_calories=target_calories,
            meals_completed=meals_completed_delta
            + (current.meals_completed if current else 0),
        )
        response = (
            self.client.table("nutrition_logs")
            .upsert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "total_calories": entry.total_calories,
                    "total_protein": entry.total_protein_g,
                    "total_fat": entry.total_fat_g,
                    "total_carbs": entry.total_carbs_g,
                    "target_calories": entry.target_calories,
                    "meals_completed": entry.meals_completed,
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to upsert nutrition log")
        return entry


def _parse_row(row: dict[str, object]) -> NutritionLogEntry:
    return NutritionLogEntry(
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])[:10]),
        total_calories=float(row.get("total_calories") or 0.0),
        total_protein_g=float(row.get("total_protein") or 0.0),
        total_fat_g=float(row.get("total_fat") or 0.0),
        total_carbs_g=float(row.get("total_carbs") or 0.0),
        target_calories=int(row.get("target_calories") or 0),
        meals_completed=int(row.get("meals_completed") or 0),
    )
