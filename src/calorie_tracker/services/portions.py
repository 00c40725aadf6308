"""Portion rescaling for logged ingredients.

Ingredient nutrients arrive anchored to a reference gram weight. Rescaling
always starts from the first-seen nutrients (``original_nutrients``) so that
repeated adjustments never compound rounding and a reset is exact.
"""

import logging
import math
import re

from calorie_tracker.domain.nutrition import Ingredient, Nutrients

_GRAMS_PATTERN = re.compile(r"([0-9]+)g")

_logger = logging.getLogger(__name__)


def resolve_reference_gram_weight(ingredient: Ingredient) -> float:
    """Return the grams the ingredient's nutrients are anchored to, or 0."""
    grams = 0.0
    portion = ingredient.ai_selected_portion
    if portion is not None and portion.gram_weight:
        grams = float(portion.gram_weight)
    else:
        match = _GRAMS_PATTERN.search(ingredient.serving_info or "")
        if match:
            grams = float(match.group(1))

    if grams == 0 and ingredient.food_measures:
        grams = float(ingredient.food_measures[0].gram_weight or 0.0)
    return grams


def rescale(ingredient: Ingredient, requested_gram_weight: float) -> bool:
    """Rescale nutrients to ``requested_gram_weight`` in place.

    Returns False without touching the ingredient when either the requested
    or the reference weight is not positive, or when the scaled values are
    not finite.
    """
    reference = resolve_reference_gram_weight(ingredient)
    if not reference > 0 or not requested_gram_weight > 0:
        _logger.debug(
            "Skipping rescale: ingredient=%s reference=%s requested=%s",
            ingredient.name,
            reference,
            requested_gram_weight,
        )
        return False

    base = ingredient.original_nutrients or ingredient.nutrients
    scaled = _scale(base, requested_gram_weight / reference)
    if scaled is None:
        _logger.debug(
            "Skipping rescale: ingredient=%s requested=%s overflows",
            ingredient.name,
            requested_gram_weight,
        )
        return False

    if ingredient.original_nutrients is None:
        ingredient.original_nutrients = ingredient.nutrients
    ingredient.nutrients = scaled
    return True


def reset(ingredient: Ingredient) -> bool:
    """Restore the first-seen nutrients, if the ingredient was ever rescaled."""
    if ingredient.original_nutrients is None:
        return False
    ingredient.nutrients = ingredient.original_nutrients
    return True


def _scale(base: Nutrients, multiplier: float) -> Nutrients | None:
    calories = base.calories * multiplier
    macros = [value * multiplier * 10 for value in (base.protein, base.carbs, base.fat)]
    if not all(math.isfinite(value) for value in (calories, *macros)):
        return None
    protein, carbs, fat = (_round_half_up(value) / 10 for value in macros)
    return Nutrients(
        calories=_round_half_up(calories),
        protein=protein,
        carbs=carbs,
        fat=fat,
    )


def _round_half_up(value: float) -> float:
    # round() is banker's rounding; portions use half-up.
    return float(math.floor(value + 0.5))
