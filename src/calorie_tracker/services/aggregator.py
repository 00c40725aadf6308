"""Nutrient aggregation for meals and daily totals."""

from collections.abc import Iterable

from calorie_tracker.domain.nutrition import Ingredient, Meal, Nutrients


def sum_ingredients(ingredients: Iterable[Ingredient]) -> Nutrients:
    """Return the element-wise sum of ingredient nutrients."""
    total = Nutrients()
    for ingredient in ingredients:
        total = total + ingredient.nutrients
    return total


def recalculate_meal_totals(meal: Meal) -> Nutrients:
    """Refresh a meal's totals from its current ingredient nutrients."""
    meal.total_nutrients = sum_ingredients(meal.ingredients)
    return meal.total_nutrients


def recalculate_daily_totals(meals: Iterable[Meal]) -> Nutrients:
    """Return the element-wise sum of each meal's totals."""
    total = Nutrients()
    for meal in meals:
        total = total + meal.total_nutrients
    return total
