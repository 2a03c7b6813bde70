"""Domain exceptions for the nutrition engine."""

from uuid import UUID


class NutritionEngineError(Exception):
    """Base exception for nutrition engine errors."""


class InvalidProfile(NutritionEngineError):
    """Raised when profile values cannot produce a calorie target."""


class InvalidArgument(NutritionEngineError):
    """Raised when a computation receives an out-of-range argument."""


class MealIncomplete(NutritionEngineError):
    """Raised when a meal is validated below the calorie threshold."""

    def __init__(self, accumulated_calories: float, required_calories: float):
        super().__init__(
            f"Meal has {accumulated_calories:.0f} kcal, "
            f"at least {required_calories:.0f} kcal required"
        )
        self.accumulated_calories = accumulated_calories
        self.required_calories = required_calories


class ProfileNotFound(NutritionEngineError):
    def __init__(self, user_id: UUID):
        super().__init__(f"Profile not found for user: {user_id}")
        self.user_id = user_id


class FoodItemNotFound(NutritionEngineError):
    def __init__(self, food_item_id: int):
        super().__init__(f"Food item not found: {food_item_id}")
        self.food_item_id = food_item_id


class MealNotFound(NutritionEngineError):
    def __init__(self, meal_id: UUID):
        super().__init__(f"Meal not found: {meal_id}")
        self.meal_id = meal_id
