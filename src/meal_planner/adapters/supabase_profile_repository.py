"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_planner.domain.models import UserProfile
from meal_planner.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile, or None when weight or height is unset."""
        response = (
            self.client.table("user_profiles")
            .select(
                "weight, height, weekly_workouts, calorie_threshold, meals_per_day"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if not row.get("weight") or not row.get("height"):
            return None
        return UserProfile(
            weight_kg=float(row["weight"]),
            height_cm=float(row["height"]),
            workouts_per_week=int(row.get("weekly_workouts") or 0),
            calorie_threshold_percent=int(row.get("calorie_threshold") or 0),
            meals_per_day=int(row.get("meals_per_day") or 3),
        )

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        """Create or replace the user's profile."""
        self.client.table("user_profiles").upsert(
            {
                "user_id": str(user_id),
                "weight": profile.weight_kg,
                "height": profile.height_cm,
                "weekly_workouts": profile.workouts_per_week,
                "calorie_threshold": profile.calorie_threshold_percent,
                "meals_per_day": profile.meals_per_day,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
