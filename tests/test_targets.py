"""Tests for calorie and macro targets."""

import math

import pytest

from meal_planner.domain.errors import InvalidArgument, InvalidProfile
from meal_planner.domain.models import UserProfile
from meal_planner.domain.nutrition import MacroTargets
from meal_planner.services.targets import (
    activity_multiplier,
    calories_per_meal,
    daily_calories,
    macros_for_calories,
    round_half_up,
    targets_for_profile,
)


def test_daily_calories_light_activity() -> None:
    # base 1767.5 * 1.375 = 2430.3125
    assert daily_calories(70, 170, 3, 0) == 2430


@pytest.mark.parametrize(
    ("workouts", "expected"),
    [(0, 2121), (1, 2430), (4, 2740), (6, 2740), (7, 3049), (14, 3049)],
)
def test_daily_calories_by_activity_band(workouts: int, expected: int) -> None:
    assert daily_calories(70, 170, workouts, 0) == expected


@pytest.mark.parametrize(
    ("workouts", "multiplier"),
    [(0, 1.2), (1, 1.375), (3, 1.375), (4, 1.55), (6, 1.55), (7, 1.725)],
)
def test_activity_multiplier_bands(workouts: int, multiplier: float) -> None:
    assert activity_multiplier(workouts) == multiplier


def test_daily_calories_applies_threshold() -> None:
    assert daily_calories(70, 170, 3, -20) == 1944
    assert daily_calories(70, 170, 3, 10) == 2673


def test_daily_calories_non_decreasing_in_threshold() -> None:
    values = [daily_calories(82.5, 181, 4, pct) for pct in range(-50, 55, 5)]
    assert values == sorted(values)


@pytest.mark.parametrize(
    ("weight", "height", "workouts"),
    [(0, 170, 3), (-70, 170, 3), (70, 0, 3), (70, -1, 3), (70, 170, -1)],
)
def test_daily_calories_rejects_invalid_profile(
    weight: float, height: float, workouts: int
) -> None:
    with pytest.raises(InvalidProfile):
        daily_calories(weight, height, workouts, 0)


@pytest.mark.parametrize(
    ("weight", "height"),
    [
        (math.inf, 170),
        (math.nan, 170),
        (70, math.inf),
        (70, math.nan),
        (1e308, 170),
    ],
)
def test_daily_calories_rejects_non_finite_body_values(
    weight: float, height: float
) -> None:
    with pytest.raises(InvalidProfile):
        daily_calories(weight, height, 3, 0)


@pytest.mark.parametrize("threshold", [math.inf, -math.inf, math.nan])
def test_daily_calories_rejects_non_finite_threshold(threshold: float) -> None:
    with pytest.raises(InvalidArgument):
        daily_calories(70, 170, 3, threshold)


def test_calories_per_meal() -> None:
    assert calories_per_meal(2430, 3) == 810
    assert calories_per_meal(2000, 3) == 667
    assert calories_per_meal(2000, 1) == 2000


@pytest.mark.parametrize("meals_per_day", [0, -2])
def test_calories_per_meal_rejects_non_positive_meals(meals_per_day: int) -> None:
    with pytest.raises(InvalidArgument):
        calories_per_meal(2430, meals_per_day)


def test_macros_for_calories() -> None:
    macros = macros_for_calories(810)

    assert macros == MacroTargets(protein_g=61, fat_g=23, carbs_g=91)
    kcal = 4 * macros.protein_g + 9 * macros.fat_g + 4 * macros.carbs_g
    assert abs(kcal - 810) <= 10


def test_macros_for_daily_target() -> None:
    assert macros_for_calories(2000) == MacroTargets(
        protein_g=150, fat_g=56, carbs_g=225
    )
    assert macros_for_calories(0) == MacroTargets(protein_g=0, fat_g=0, carbs_g=0)


def test_macros_rejects_negative_calories() -> None:
    with pytest.raises(InvalidArgument):
        macros_for_calories(-1)


@pytest.mark.parametrize("calories", [math.inf, math.nan])
def test_non_finite_calories_are_rejected(calories: float) -> None:
    with pytest.raises(InvalidArgument):
        macros_for_calories(calories)
    with pytest.raises(InvalidArgument):
        calories_per_meal(calories, 3)
    with pytest.raises(InvalidArgument):
        round_half_up(calories)


def test_round_half_up_rounds_halves_upward() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(62.5) == 63
    assert round_half_up(62.49) == 62


def test_targets_for_profile_uses_meals_per_day() -> None:
    targets = targets_for_profile(
        UserProfile(weight_kg=70, height_cm=170, workouts_per_week=3, meals_per_day=3)
    )

    assert targets.daily_calories == 2430
    assert targets.calories_per_meal == 810
    assert targets.meal_macros == MacroTargets(protein_g=61, fat_g=23, carbs_g=91)
    assert targets.daily_macros == macros_for_calories(2430)


def test_targets_for_profile_rejects_zero_meals() -> None:
    with pytest.raises(InvalidArgument):
        targets_for_profile(UserProfile(weight_kg=70, height_cm=170, meals_per_day=0))
