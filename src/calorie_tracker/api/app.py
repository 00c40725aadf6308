"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.models import (
    CustomGramsRequest,
    LogFoodRequest,
    SelectMeasureRequest,
)
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.nutrition import (
    FoodMeasure,
    Ingredient,
    Meal,
    Nutrients,
)
from calorie_tracker.services.errors import (
    EmptyFoodDescriptionError,
    FoodAnalysisError,
    FoodLogBusyError,
    FoodLogError,
    MealIndexError,
)
from calorie_tracker.services.meals import FoodLogService, FoodLogState

_ERROR_STATUS: list[tuple[type[FoodLogError], int]] = [
    (EmptyFoodDescriptionError, status.HTTP_400_BAD_REQUEST),
    (MealIndexError, status.HTTP_404_NOT_FOUND),
    (FoodLogBusyError, status.HTTP_409_CONFLICT),
    (FoodAnalysisError, status.HTTP_502_BAD_GATEWAY),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(FoodLogError)
    async def food_log_error_handler(
        request: Request, exc: FoodLogError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info("Request %s failed (%s): %s", request.url.path, status_code, exc)
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/state")
    async def get_state(request: Request) -> dict[str, object]:
        """Return the current food log."""
        return _state_payload(_food_log(request).state)

    @app.post("/meals")
    async def log_food(body: LogFoodRequest, request: Request) -> dict[str, object]:
        """Analyze a food description and append its meals."""
        service = _food_log(request)
        await service.log_food(body.food_description)
        return _state_payload(service.state)

    @app.delete("/meals/{meal_index}")
    async def remove_meal(meal_index: int, request: Request) -> dict[str, object]:
        """Remove a logged meal."""
        service = _food_log(request)
        service.remove_meal(meal_index)
        return _state_payload(service.state)

    @app.post("/meals/{meal_index}/ingredients/{ingredient_index}/measure")
    async def select_measure(
        meal_index: int,
        ingredient_index: int,
        body: SelectMeasureRequest,
        request: Request,
    ) -> dict[str, object]:
        """Rescale an ingredient to one of its predefined measures."""
        service = _food_log(request)
        service.select_measurement(meal_index, ingredient_index, body.measure_index)
        return _state_payload(service.state)

    @app.post("/meals/{meal_index}/ingredients/{ingredient_index}/grams")
    async def set_custom_grams(
        meal_index: int,
        ingredient_index: int,
        body: CustomGramsRequest,
        request: Request,
    ) -> dict[str, object]:
        """Rescale an ingredient to a custom gram amount."""
        service = _food_log(request)
        service.set_custom_grams(meal_index, ingredient_index, body.grams)
        return _state_payload(service.state)

    @app.post("/meals/{meal_index}/ingredients/{ingredient_index}/reset")
    async def reset_ingredient(
        meal_index: int, ingredient_index: int, request: Request
    ) -> dict[str, object]:
        """Restore an ingredient's original nutrients."""
        service = _food_log(request)
        service.reset_ingredient(meal_index, ingredient_index)
        return _state_payload(service.state)

    return app


def _food_log(request: Request) -> FoodLogService:
    state_container: AppContainer = request.app.state.container
    return state_container.food_log_service


def _status_for(exc: FoodLogError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _state_payload(state: FoodLogState) -> dict[str, object]:
    return {
        "dailyTotals": _nutrients_payload(state.daily_totals),
        "loggedMeals": [_meal_payload(meal) for meal in state.meals],
        "loading": state.loading,
        "error": state.error,
    }


def _meal_payload(meal: Meal) -> dict[str, object]:
    return {
        "meal_name": meal.meal_name,
        "meal_size": meal.meal_size,
        "ingredients": [_ingredient_payload(item) for item in meal.ingredients],
        "total_nutrients": _nutrients_payload(meal.total_nutrients),
    }


def _ingredient_payload(ingredient: Ingredient) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": ingredient.name,
        "brand": ingredient.brand,
        "serving_info": ingredient.serving_info,
        "nutrients": _nutrients_payload(ingredient.nutrients),
        "foodMeasures": [_measure_payload(m) for m in ingredient.food_measures],
    }
    if ingredient.original_nutrients is not None:
        payload["originalNutrients"] = _nutrients_payload(
            ingredient.original_nutrients
        )
    if ingredient.ai_selected_portion is not None:
        payload["ai_selected_portion"] = {
            "gramWeight": ingredient.ai_selected_portion.gram_weight,
            "portionDescription": ingredient.ai_selected_portion.portion_description,
            "reasoning": ingredient.ai_selected_portion.reasoning,
        }
    if ingredient.selected_portion is not None:
        payload["selectedPortion"] = {
            "source": ingredient.selected_portion.source,
            "reasoning": ingredient.selected_portion.reasoning,
        }
    return payload


def _measure_payload(measure: FoodMeasure) -> dict[str, object]:
    return {
        "label": measure.label,
        "portionDescription": measure.portion_description,
        "unit": measure.unit,
        "gramWeight": measure.gram_weight,
    }


def _nutrients_payload(nutrients: Nutrients) -> dict[str, float]:
    return {
        "calories": nutrients.calories,
        "protein": nutrients.protein,
        "carbs": nutrients.carbs,
        "fat": nutrients.fat,
    }
