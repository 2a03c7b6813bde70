"""Meal validation and completion service."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, date, datetime
from fractions import Fraction
from typing import Protocol
from uuid import UUID

from meal_planner.domain.errors import (
    FoodItemNotFound,
    InvalidArgument,
    MealIncomplete,
    MealNotFound,
)
from meal_planner.domain.meals import MealIngredient, MealRecord
from meal_planner.domain.nutrition import EMPTY_NUTRITION, NutritionFacts
from meal_planner.domain.stats import NutritionLogEntry
from meal_planner.services.food_catalog import FoodCatalogRepository
from meal_planner.services.nutrition_log import NutritionLogService
from meal_planner.services.profiles import ProfileService
from meal_planner.services.stats import (
    MealHistoryFeed,
    completion_day,
    resolve_timezone,
)

# share of the per-meal calorie target a meal needs before it can be validated
MEAL_VALIDATION_RATIO = Fraction(4, 5)

_logger = logging.getLogger(__name__)


class MealRepository(MealHistoryFeed, Protocol):
    """Persistence interface for meals and their completions."""

    def create_meal(
        self,
        user_id: UUID,
        name: str,
        nutrition: NutritionFacts,
        ingredients: list[MealIngredient],
        completed_at: datetime | None,
    ) -> MealRecord:
        """Create a meal, optionally with a first completion."""

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealRecord | None:
        """Return one of the user's meals by id."""

    def add_completion(
        self, user_id: UUID, meal_id: UUID, completed_at: datetime
    ) -> MealRecord:
        """Append a completion timestamp and return the updated meal."""


@dataclass(frozen=True)
class MealProgress:
    """Nutrition of a meal in progress against the per-meal target."""

    nutrition: NutritionFacts
    calories_per_meal: int
    required_calories: float
    ready: bool


@dataclass(frozen=True)
class MealValidation:
    """Result of validating a meal."""

    meal: MealRecord
    log_entry: NutritionLogEntry


def is_meal_ready_to_validate(
    accumulated_calories: float, calories_per_meal_target: float
) -> bool:
    """Return True once a meal reaches 80 % of the per-meal calorie target."""
    _check_target(calories_per_meal_target)
    if not math.isfinite(accumulated_calories):
        raise InvalidArgument("accumulated_calories must be finite")
    return (
        Fraction(accumulated_calories)
        >= Fraction(calories_per_meal_target) * MEAL_VALIDATION_RATIO
    )


def required_calories(calories_per_meal_target: float) -> float:
    _check_target(calories_per_meal_target)
    return float(Fraction(calories_per_meal_target) * MEAL_VALIDATION_RATIO)


def _check_target(calories_per_meal_target: float) -> None:
    if (
        not math.isfinite(calories_per_meal_target)
        or calories_per_meal_target <= 0
    ):
        raise InvalidArgument("calories_per_meal_target must be finite and positive")


@dataclass
class MealService:
    """Service that assembles meals from the catalog and records completions.

    The day's nutrition log is written before the meal row, so a failed log
    write leaves no completed meal behind. Log days follow the same rule as
    ``StatsService``: the completion's calendar date, in ``timezone_name``
    when one is given.
    """

    repository: MealRepository
    food_catalog: FoodCatalogRepository
    profile_service: ProfileService
    nutrition_log_service: NutritionLogService

    def compute_meal_totals(self, ingredients: list[MealIngredient]) -> NutritionFacts:
        """Sum catalog nutrition for the ingredients, scaled by quantity."""
        total = EMPTY_NUTRITION
        for ingredient in ingredients:
            facts = self.food_catalog.get_food(ingredient.food_item_id)
            if facts is None:
                raise FoodItemNotFound(ingredient.food_item_id)
            total = total.plus(facts.scaled(ingredient.quantity))
        return total

    def preview_meal(
        self, user_id: UUID, ingredients: list[MealIngredient]
    ) -> MealProgress:
        """Return the meal's progress towards the user's per-meal target."""
        nutrition = self.compute_meal_totals(ingredients)
        per_meal = self.profile_service.get_targets(user_id).calories_per_meal
        return MealProgress(
            nutrition=nutrition,
            calories_per_meal=per_meal,
            required_calories=required_calories(per_meal),
            ready=is_meal_ready_to_validate(nutrition.calories, per_meal),
        )

    def validate_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        ingredients: list[MealIngredient],
        validated_at: datetime | None = None,
        timezone_name: str | None = None,
    ) -> MealValidation:
        """Save a meal as eaten and add it to the day's nutrition log.

        Raises MealIncomplete without persisting anything when the meal is
        below the validation threshold.
        """
        nutrition = self.compute_meal_totals(ingredients)
        targets = self.profile_service.get_targets(user_id)
        if not is_meal_ready_to_validate(
            nutrition.calories, targets.calories_per_meal
        ):
            _logger.info(
                "Meal validation rejected: user_id=%s calories=%.0f target=%s",
                user_id,
                nutrition.calories,
                targets.calories_per_meal,
            )
            raise MealIncomplete(
                nutrition.calories, required_calories(targets.calories_per_meal)
            )

        moment = validated_at or datetime.now(tz=UTC)
        entry = self.nutrition_log_service.record_meal(
            user_id,
            _log_day(moment, timezone_name),
            nutrition,
            targets.daily_calories,
        )
        meal = self.repository.create_meal(
            user_id=user_id,
            name=name,
            nutrition=nutrition,
            ingredients=ingredients,
            completed_at=moment,
        )
        return MealValidation(meal=meal, log_entry=entry)

    def complete_meal(
        self,
        user_id: UUID,
        meal_id: UUID,
        completed_at: datetime | None = None,
        timezone_name: str | None = None,
    ) -> MealValidation:
        """Record another completion of one of the user's meals."""
        meal = self.repository.get_meal(user_id, meal_id)
        if meal is None:
            raise MealNotFound(meal_id)
        moment = completed_at or datetime.now(tz=UTC)
        targets = self.profile_service.get_targets(user_id)
        entry = self.nutrition_log_service.record_meal(
            user_id,
            _log_day(moment, timezone_name),
            meal.nutrition,
            targets.daily_calories,
        )
        updated = self.repository.add_completion(user_id, meal_id, moment)
        return MealValidation(meal=updated, log_entry=entry)


def _log_day(moment: datetime, timezone_name: str | None) -> date:
    return completion_day(moment, resolve_timezone(timezone_name))
