"""Tests for portion rescaling."""

from calorie_tracker.domain.nutrition import FoodMeasure, Nutrients
from calorie_tracker.services.portions import (
    rescale,
    reset,
    resolve_reference_gram_weight,
)
from tests.conftest import make_ingredient


def test_reference_prefers_ai_selected_portion() -> None:
    ingredient = make_ingredient(serving_info="100g serving", ai_grams=150)

    assert resolve_reference_gram_weight(ingredient) == 150


def test_reference_uses_first_grams_in_serving_info() -> None:
    ingredient = make_ingredient(serving_info="1 cup (240g), about 250g cooked")

    assert resolve_reference_gram_weight(ingredient) == 240


def test_reference_ignores_zero_ai_portion() -> None:
    ingredient = make_ingredient(serving_info="85g fillet", ai_grams=0)

    assert resolve_reference_gram_weight(ingredient) == 85


def test_reference_falls_back_to_first_food_measure() -> None:
    ingredient = make_ingredient(
        serving_info="1 medium apple",
        food_measures=[FoodMeasure(label="medium", gram_weight=182)],
    )

    assert resolve_reference_gram_weight(ingredient) == 182


def test_reference_is_zero_when_nothing_resolves() -> None:
    ingredient = make_ingredient(serving_info="a handful")

    assert resolve_reference_gram_weight(ingredient) == 0


def test_rescale_computes_from_reference() -> None:
    ingredient = make_ingredient(calories=200, protein=10, carbs=20, fat=5)

    assert rescale(ingredient, 150)

    assert ingredient.nutrients == Nutrients(
        calories=300, protein=15.0, carbs=30.0, fat=7.5
    )
    assert ingredient.original_nutrients == Nutrients(200, 10, 20, 5)


def test_rescale_rounds_calories_and_macros() -> None:
    ingredient = make_ingredient(calories=101, protein=3.3, carbs=7.7, fat=1.1)

    rescale(ingredient, 33)

    assert ingredient.nutrients.calories == 33
    assert ingredient.nutrients.protein == 1.1
    assert ingredient.nutrients.carbs == 2.5
    assert ingredient.nutrients.fat == 0.4


def test_rescale_rounds_half_up() -> None:
    ingredient = make_ingredient(calories=5, protein=0.5, carbs=0, fat=0)

    rescale(ingredient, 50)

    assert ingredient.nutrients.calories == 3
    assert ingredient.nutrients.protein == 0.3


def test_rescale_with_zero_grams_is_noop() -> None:
    ingredient = make_ingredient()
    before = ingredient.nutrients

    assert not rescale(ingredient, 0)

    assert ingredient.nutrients == before
    assert ingredient.original_nutrients is None


def test_rescale_without_reference_is_noop() -> None:
    ingredient = make_ingredient(serving_info="a bowl")
    before = ingredient.nutrients

    assert not rescale(ingredient, 250)

    assert ingredient.nutrients == before
    assert ingredient.original_nutrients is None


def test_repeated_rescale_keeps_first_snapshot() -> None:
    ingredient = make_ingredient(calories=200, protein=10, carbs=20, fat=5)

    rescale(ingredient, 33)
    rescale(ingredient, 77)
    rescale(ingredient, 200)

    assert ingredient.original_nutrients == Nutrients(200, 10, 20, 5)
    assert ingredient.nutrients == Nutrients(
        calories=400, protein=20.0, carbs=40.0, fat=10.0
    )


def test_rescale_then_reset_restores_exact_values() -> None:
    ingredient = make_ingredient(calories=233, protein=7.3, carbs=41.9, fat=2.2)
    before = ingredient.nutrients

    rescale(ingredient, 37)
    assert reset(ingredient)

    assert ingredient.nutrients == before


def test_reset_is_idempotent() -> None:
    ingredient = make_ingredient()
    rescale(ingredient, 250)

    reset(ingredient)
    once = ingredient.nutrients
    reset(ingredient)

    assert ingredient.nutrients == once


def test_reset_without_snapshot_is_noop() -> None:
    ingredient = make_ingredient()
    before = ingredient.nutrients

    assert not reset(ingredient)
    assert ingredient.nutrients == before


def test_rescale_overflowing_grams_is_noop() -> None:
    ingredient = make_ingredient()
    before = ingredient.nutrients

    assert not rescale(ingredient, 1e308)
    assert not rescale(ingredient, float("inf"))
    assert not rescale(ingredient, float("nan"))

    assert ingredient.nutrients == before
    assert ingredient.original_nutrients is None
