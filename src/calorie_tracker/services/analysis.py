"""Food analysis boundary: validates AI service output into meals."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from calorie_tracker.domain.analysis import FoodAnalysis
from calorie_tracker.domain.nutrition import Meal
from calorie_tracker.services.errors import InvalidAnalysisResponseError

_logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = (
    "Split the food description into meals. For each meal list its "
    "ingredients with a name, brand (empty string if generic), a serving_info "
    "text that states the grams (for example '150g cooked'), and calories, "
    "protein, carbs and fat for that serving. Pick the serving in "
    "ai_selected_portion with its gram weight and a short reasoning. Add up to "
    "three alternative foodMeasures with their gram weights. total_nutrients is "
    "the sum of the meal's ingredients; dailyTotals is the sum of all meals."
)

_NUTRIENTS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
    },
    "required": ["calories", "protein", "carbs", "fat"],
    "additionalProperties": False,
}

_NULLABLE_STRING: dict[str, object] = {
    "anyOf": [{"type": "string"}, {"type": "null"}]
}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "dailyTotals": _NUTRIENTS_SCHEMA,
        "loggedMeals": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "meal_name": {"type": "string"},
                    "meal_size": _NULLABLE_STRING,
                    "total_nutrients": _NUTRIENTS_SCHEMA,
                    "ingredients": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "brand": {"type": "string"},
                                "serving_info": {"type": "string"},
                                "nutrients": _NUTRIENTS_SCHEMA,
                                "foodMeasures": {
                                    "type": "array",
                                    "items": {
                                        "type": "object",
                                        "properties": {
                                            "label": {"type": "string"},
                                            "portionDescription": {"type": "string"},
                                            "unit": {"type": "string"},
                                            "gramWeight": {
                                                "type": "number",
                                                "minimum": 0,
                                            },
                                        },
                                        "required": [
                                            "label",
                                            "portionDescription",
                                            "unit",
                                            "gramWeight",
                                        ],
                                        "additionalProperties": False,
                                    },
                                },
                                "ai_selected_portion": {
                                    "type": "object",
                                    "properties": {
                                        "gramWeight": {"type": "number", "minimum": 0},
                                        "portionDescription": {"type": "string"},
                                        "reasoning": _NULLABLE_STRING,
                                    },
                                    "required": [
                                        "gramWeight",
                                        "portionDescription",
                                        "reasoning",
                                    ],
                                    "additionalProperties": False,
                                },
                            },
                            "required": [
                                "name",
                                "brand",
                                "serving_info",
                                "nutrients",
                                "foodMeasures",
                                "ai_selected_portion",
                            ],
                            "additionalProperties": False,
                        },
                    },
                },
                "required": [
                    "meal_name",
                    "meal_size",
                    "total_nutrients",
                    "ingredients",
                ],
                "additionalProperties": False,
            },
        },
    },
    "required": ["dailyTotals", "loggedMeals"],
    "additionalProperties": False,
}


class FoodAnalysisClient(Protocol):
    """Interface for the AI food parsing service."""

    async def analyze(self, food_description: str) -> dict[str, object]:
        """Return the raw analysis payload for a food description."""


@dataclass
class FoodAnalysisService:
    """Service that calls the analysis client and validates its output."""

    client: FoodAnalysisClient
    debug: bool = False

    async def analyze(self, food_description: str) -> list[Meal]:
        """Return the meals parsed from ``food_description``.

        The service's own ``dailyTotals`` is validated for presence but not
        returned; running totals are always recomputed locally.
        """
        raw = await self.client.analyze(food_description)
        analysis = parse_analysis(raw)
        if self.debug:
            _logger.info(
                "Food analysis: meals=%s service_calories=%s",
                len(analysis.logged_meals),
                analysis.daily_totals.calories,
            )
        return [meal.to_domain() for meal in analysis.logged_meals]


def parse_analysis(raw: object) -> FoodAnalysis:
    """Validate a raw analysis payload."""
    if not isinstance(raw, dict):
        raise InvalidAnalysisResponseError
    try:
        return FoodAnalysis.model_validate(raw)
    except ValidationError as exc:
        _logger.warning("Invalid food analysis response: %s", exc)
        raise InvalidAnalysisResponseError from exc
