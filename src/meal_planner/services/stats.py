"""Statistics over completed meals."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from meal_planner.domain.errors import InvalidArgument
from meal_planner.domain.meals import MealRecord
from meal_planner.domain.stats import DailyTotals
from meal_planner.services.profiles import ProfileService
from meal_planner.services.scoring import badge_for_score, score
from meal_planner.services.targets import round_half_up

ON_TARGET_SCORE = 80


class MealHistoryFeed(Protocol):
    """Source of a user's meals with their completion logs."""

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return all meals of a user, including completion timestamps."""


@dataclass
class PeriodSummary:
    """Aggregated totals and scores for a window of days."""

    daily: list[DailyTotals]
    scores: list[int]
    target_calories: int
    avg_calories: float
    avg_protein_g: float
    avg_fat_g: float
    avg_carbs_g: float
    avg_score: int
    score_trend: int
    days_on_target: int

    @property
    def badge(self) -> str:
        return badge_for_score(self.avg_score).value


@dataclass
class StatsService:
    """Service for computing chartable nutrition history."""

    meal_feed: MealHistoryFeed
    profile_service: ProfileService

    def get_window(
        self,
        user_id: UUID,
        days: int,
        today: date | None = None,
        timezone_name: str | None = None,
    ) -> list[DailyTotals]:
        """Return per-day totals for the last ``days`` days."""
        tz = resolve_timezone(timezone_name)
        reference = today or datetime.now(tz=tz or UTC).date()
        meals = self.meal_feed.list_meals(user_id)
        return totals_for_window(meals, reference, days, tz)

    def get_summary(
        self,
        user_id: UUID,
        days: int = 7,
        today: date | None = None,
        timezone_name: str | None = None,
    ) -> PeriodSummary:
        """Return totals, scores and averages against the user's target."""
        daily = self.get_window(user_id, days, today, timezone_name)
        target = self.profile_service.get_targets(user_id).daily_calories
        return summarize(daily, target)


def count_completions(meal: MealRecord, day: date, tz: ZoneInfo | None = None) -> int:
    """Return how many times a meal was completed on a calendar day."""
    return sum(
        1
        for completed_at in meal.completed_at
        if completion_day(completed_at, tz) == day
    )


def totals_for_window(
    meals: Iterable[MealRecord],
    reference_date: date,
    window_days: int,
    tz: ZoneInfo | None = None,
) -> list[DailyTotals]:
    """Return one totals entry per day, oldest first, ending at reference_date.

    Each completion adds the meal's full nutrition to the day it falls on;
    days without completions are included with zero totals.
    """
    if window_days <= 0:
        raise InvalidArgument("window_days must be positive")
    meals = list(meals)
    start = reference_date - timedelta(days=window_days - 1)
    return [
        _aggregate_day(start + timedelta(days=offset), meals, tz)
        for offset in range(window_days)
    ]


def summarize(daily: list[DailyTotals], target_calories: int) -> PeriodSummary:
    """Score each day against a target and compute period averages."""
    scores = [score(entry.calories, target_calories) for entry in daily]
    total_days = max(len(daily), 1)
    trend = scores[-1] - scores[-2] if len(scores) >= 2 else 0  # noqa: PLR2004
    return PeriodSummary(
        daily=daily,
        scores=scores,
        target_calories=target_calories,
        avg_calories=sum(entry.calories for entry in daily) / total_days,
        avg_protein_g=sum(entry.protein_g for entry in daily) / total_days,
        avg_fat_g=sum(entry.fat_g for entry in daily) / total_days,
        avg_carbs_g=sum(entry.carbs_g for entry in daily) / total_days,
        avg_score=round_half_up(sum(scores) / total_days),
        score_trend=trend,
        days_on_target=sum(1 for value in scores if value >= ON_TARGET_SCORE),
    )


def resolve_timezone(timezone_name: str | None) -> ZoneInfo | None:
    """Return the zone for an IANA name, or None when no name is given."""
    if not timezone_name:
        return None
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidArgument(f"Unknown timezone: {timezone_name}") from exc


def completion_day(moment: datetime, tz: ZoneInfo | None = None) -> date:
    """Return the calendar day a completion falls on, in ``tz`` when given."""
    if tz is not None and moment.tzinfo is not None:
        return moment.astimezone(tz).date()
    return moment.date()


def _aggregate_day(
    day: date, meals: list[MealRecord], tz: ZoneInfo | None
) -> DailyTotals:
    total = DailyTotals(day=day, calories=0, protein_g=0, fat_g=0, carbs_g=0)
    for meal in meals:
        count = count_completions(meal, day, tz)
        if count == 0:
            continue
        total = DailyTotals(
            day=day,
            calories=total.calories + meal.nutrition.calories * count,
            protein_g=total.protein_g + meal.nutrition.protein_g * count,
            fat_g=total.fat_g + meal.nutrition.fat_g * count,
            carbs_g=total.carbs_g + meal.nutrition.carbs_g * count,
            meal_count=total.meal_count + count,
        )
    return total
