"""In-memory meal store and the food log controller."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from calorie_tracker.domain.nutrition import Ingredient, Meal, Nutrients
from calorie_tracker.services import portions
from calorie_tracker.services.aggregator import (
    recalculate_daily_totals,
    recalculate_meal_totals,
)
from calorie_tracker.services.analysis import FoodAnalysisService
from calorie_tracker.services.errors import (
    GENERIC_ERROR_MESSAGE,
    EmptyFoodDescriptionError,
    FoodAnalysisError,
    FoodLogBusyError,
    FoodLogError,
    MealIndexError,
)

_logger = logging.getLogger(__name__)


@dataclass
class MealStore:
    """Ordered list of logged meals with cached daily totals."""

    meals: list[Meal] = field(default_factory=list)
    daily_totals: Nutrients = field(default_factory=Nutrients)

    def append_meals(self, batch: list[Meal]) -> Nutrients:
        """Append a batch of meals in arrival order and refresh daily totals."""
        self.meals.extend(batch)
        return self._refresh_daily_totals()

    def remove_meal(self, index: int) -> Meal:
        """Remove and return the meal at ``index``."""
        self._check_meal_index(index)
        meal = self.meals.pop(index)
        self._refresh_daily_totals()
        return meal

    def get_meal(self, index: int) -> Meal:
        """Return the meal at ``index``."""
        self._check_meal_index(index)
        return self.meals[index]

    def get_ingredient(self, meal_index: int, ingredient_index: int) -> Ingredient:
        """Return an ingredient for in-place mutation."""
        meal = self.get_meal(meal_index)
        if not 0 <= ingredient_index < len(meal.ingredients):
            raise MealIndexError(
                f"Ingredient index {ingredient_index} out of range "
                f"for meal {meal_index}"
            )
        return meal.ingredients[ingredient_index]

    def rescale_ingredient(
        self, meal_index: int, ingredient_index: int, grams: float
    ) -> bool:
        """Rescale an ingredient to ``grams`` and refresh totals when it applies."""
        ingredient = self.get_ingredient(meal_index, ingredient_index)
        if not portions.rescale(ingredient, grams):
            return False
        self._refresh_meal(meal_index)
        return True

    def reset_ingredient(self, meal_index: int, ingredient_index: int) -> bool:
        """Restore an ingredient's original nutrients and refresh totals."""
        ingredient = self.get_ingredient(meal_index, ingredient_index)
        if not portions.reset(ingredient):
            return False
        self._refresh_meal(meal_index)
        return True

    def _refresh_meal(self, meal_index: int) -> None:
        recalculate_meal_totals(self.meals[meal_index])
        self._refresh_daily_totals()

    def _refresh_daily_totals(self) -> Nutrients:
        self.daily_totals = recalculate_daily_totals(self.meals)
        return self.daily_totals

    def _check_meal_index(self, index: int) -> None:
        if not 0 <= index < len(self.meals):
            raise MealIndexError(f"Meal index {index} out of range")


@dataclass
class FoodLogState:
    """Application state rendered by the presentation layer."""

    store: MealStore = field(default_factory=MealStore)
    loading: bool = False
    error: str = ""
    progress_message: str = ""
    progress_stage: str = ""

    @property
    def meals(self) -> list[Meal]:
        return self.store.meals

    @property
    def daily_totals(self) -> Nutrients:
        return self.store.daily_totals


StateListener = Callable[[FoodLogState], None]


@dataclass
class FoodLogService:
    """Controller for the single-user food log session."""

    analysis_service: FoodAnalysisService
    state: FoodLogState = field(default_factory=FoodLogState)
    _listeners: list[StateListener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def log_food(self, food_description: str) -> list[Meal]:
        """Analyze a food description and append the resulting meals."""
        text = food_description.strip()
        if not text:
            self.state.error = EmptyFoodDescriptionError().message
            self._notify()
            raise EmptyFoodDescriptionError
        if self.state.loading:
            raise FoodLogBusyError

        self.state.error = ""
        self.state.loading = True
        self._set_progress("Analyzing your food...", "Extracting food items...")
        try:
            meals = await self.analysis_service.analyze(text)
        except FoodLogError as exc:
            _logger.warning("Food logging failed: %s", exc.message)
            self._fail(exc.message)
            raise
        except Exception as exc:
            _logger.exception("Unexpected food logging failure")
            self._fail(GENERIC_ERROR_MESSAGE)
            raise FoodAnalysisError(GENERIC_ERROR_MESSAGE) from exc
        except asyncio.CancelledError:
            _logger.info("Food logging cancelled")
            self._fail("")
            raise
        finally:
            self.state.loading = False

        self.state.store.append_meals(meals)
        self._set_progress("Success!", "Done!")
        _logger.info(
            "Logged %s meals; daily calories=%s",
            len(meals),
            self.state.daily_totals.calories,
        )
        return meals

    def remove_meal(self, index: int) -> None:
        """Remove a logged meal."""
        self.state.store.remove_meal(index)
        self._notify()

    def select_measurement(
        self, meal_index: int, ingredient_index: int, measure_index: int
    ) -> bool:
        """Rescale an ingredient to one of its predefined measures."""
        ingredient = self.state.store.get_ingredient(meal_index, ingredient_index)
        if not 0 <= measure_index < len(ingredient.food_measures):
            raise MealIndexError(f"Measure index {measure_index} out of range")
        grams = ingredient.food_measures[measure_index].gram_weight or 0.0
        return self._apply(
            self.state.store.rescale_ingredient(meal_index, ingredient_index, grams)
        )

    def set_custom_grams(
        self, meal_index: int, ingredient_index: int, grams: float
    ) -> bool:
        """Rescale to a custom gram amount; non-positive amounts reset."""
        if grams > 0:
            changed = self.state.store.rescale_ingredient(
                meal_index, ingredient_index, grams
            )
        else:
            changed = self.state.store.reset_ingredient(meal_index, ingredient_index)
        return self._apply(changed)

    def reset_ingredient(self, meal_index: int, ingredient_index: int) -> bool:
        """Restore an ingredient to its original nutrients."""
        return self._apply(
            self.state.store.reset_ingredient(meal_index, ingredient_index)
        )

    def _apply(self, changed: bool) -> bool:
        if changed:
            self._notify()
        return changed

    def _fail(self, message: str) -> None:
        self.state.loading = False
        self.state.error = message
        self._set_progress("", "")

    def _set_progress(self, message: str, stage: str) -> None:
        self.state.progress_message = message
        self.state.progress_stage = stage
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)
