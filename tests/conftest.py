"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.nutrition import (
    AiSelectedPortion,
    FoodMeasure,
    Ingredient,
    Meal,
    Nutrients,
)
from calorie_tracker.services.analysis import FoodAnalysisClient, FoodAnalysisService
from calorie_tracker.services.meals import FoodLogService


def sample_analysis() -> dict[str, object]:
    return {
        "dailyTotals": {"calories": 590, "protein": 25, "carbs": 75, "fat": 20.5},
        "loggedMeals": [
            {
                "meal_name": "Big Mac and fries",
                "meal_size": "medium",
                "total_nutrients": {
                    "calories": 590,
                    "protein": 25,
                    "carbs": 75,
                    "fat": 20.5,
                },
                "ingredients": [
                    {
                        "name": "Big Mac",
                        "brand": "McDonald's",
                        "serving_info": "1 burger (219g)",
                        "nutrients": {
                            "calories": 300,
                            "protein": 20,
                            "carbs": 30,
                            "fat": 10.5,
                        },
                        "foodMeasures": [
                            {
                                "label": "1 large burger",
                                "portionDescription": "1 large burger",
                                "unit": "burger",
                                "gramWeight": 250,
                            }
                        ],
                        "ai_selected_portion": {
                            "gramWeight": 200,
                            "portionDescription": "1 burger",
                            "reasoning": "standard sandwich",
                        },
                    },
                    {
                        "name": "French fries",
                        "brand": "",
                        "serving_info": "medium (100g)",
                        "nutrients": {
                            "calories": 290,
                            "protein": 5,
                            "carbs": 45,
                            "fat": 10,
                        },
                        "foodMeasures": [
                            {"label": "small", "gram_weight": 75},
                            {"label": "large", "gramWeight": 150},
                        ],
                        "selectedPortion": {"source": "serving", "reasoning": None},
                    },
                ],
            }
        ],
    }


def make_ingredient(  # noqa: PLR0913
    name: str = "Rice",
    *,
    calories: float = 200,
    protein: float = 10,
    carbs: float = 20,
    fat: float = 5,
    serving_info: str = "100g serving",
    food_measures: list[FoodMeasure] | None = None,
    ai_grams: float | None = None,
) -> Ingredient:
    return Ingredient(
        name=name,
        brand="",
        serving_info=serving_info,
        nutrients=Nutrients(calories=calories, protein=protein, carbs=carbs, fat=fat),
        food_measures=food_measures or [],
        ai_selected_portion=(
            AiSelectedPortion(gram_weight=ai_grams, portion_description="portion")
            if ai_grams is not None
            else None
        ),
    )


def make_meal(name: str, *ingredients: Ingredient) -> Meal:
    total = Nutrients()
    for ingredient in ingredients:
        total = total + ingredient.nutrients
    return Meal(meal_name=name, ingredients=list(ingredients), total_nutrients=total)


@dataclass
class FakeFoodAnalysisClient(FoodAnalysisClient):
    """Fake analysis client returning a fixed payload or raising."""

    payload: object = field(default_factory=sample_analysis)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def analyze(self, food_description: str) -> dict[str, object]:
        self.calls.append(food_description)
        if self.error is not None:
            raise self.error
        return self.payload  # type: ignore[return-value]

    async def close(self) -> None:
        return None


@pytest.fixture
def settings() -> Settings:
    return Settings(
        analysis_service_url="https://analysis.test/api/analyze-food",
        openai_api_key="openai-key",
    )


@pytest.fixture
def analysis_client() -> FakeFoodAnalysisClient:
    return FakeFoodAnalysisClient()


@pytest.fixture
def food_log_service(analysis_client: FakeFoodAnalysisClient) -> FoodLogService:
    return FoodLogService(analysis_service=FoodAnalysisService(analysis_client))


@pytest.fixture
def container(
    settings: Settings, food_log_service: FoodLogService
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=food_log_service.analysis_service,
        food_log_service=food_log_service,
        close_resources=close_resources,
    )
