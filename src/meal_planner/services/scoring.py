"""Daily adherence scoring."""

import math
from enum import Enum

from meal_planner.domain.errors import InvalidArgument
from meal_planner.services.targets import round_half_up

LOWER_BAND = 0.8
UPPER_BAND = 1.2
UNDEREAT_FACTOR = 1.25
OVERSHOOT_PENALTY = 150


class Badge(str, Enum):
    """Badge shown next to a daily score."""

    EXCELLENT = "Excellent"
    VERY_GOOD = "Très bien"
    GOOD = "Bien"
    NEEDS_WORK = "À améliorer"


_BADGE_THRESHOLDS = (
    (90, Badge.EXCELLENT),
    (80, Badge.VERY_GOOD),
    (60, Badge.GOOD),
)


def score(total_calories: float, target_calories: float) -> int:
    """Return a 0-100 score comparing intake to the calorie target.

    Within 80-120 % of the target the score drops one point per percent away
    from the target. Undereating below 80 % scales linearly towards zero and
    overshooting from 120 % loses 1.5 points per percent.
    """
    if not math.isfinite(target_calories) or target_calories <= 0:
        raise InvalidArgument("target_calories must be finite and positive")
    if not math.isfinite(total_calories):
        raise InvalidArgument("total_calories must be finite")
    if total_calories <= 0:
        return 0
    ratio = total_calories / target_calories
    if ratio < LOWER_BAND:
        raw = ratio * 100 * UNDEREAT_FACTOR
    elif ratio < UPPER_BAND:
        raw = 100 - abs(1 - ratio) * 100
    else:
        raw = 100 - (ratio - UPPER_BAND) * OVERSHOOT_PENALTY
    return round_half_up(min(100.0, max(0.0, raw)))


def badge_for_score(value: int) -> Badge:
    """Classify a score into a badge."""
    for minimum, badge in _BADGE_THRESHOLDS:
        if value >= minimum:
            return badge
    return Badge.NEEDS_WORK
