"""Nutrition domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Nutrients:
    """Calories and macronutrients (grams) for a portion."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def __add__(self, other: "Nutrients") -> "Nutrients":
        return Nutrients(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


@dataclass(frozen=True)
class FoodMeasure:
    """Alternative serving description for an ingredient."""

    label: str | None = None
    portion_description: str | None = None
    unit: str | None = None
    gram_weight: float | None = None


@dataclass(frozen=True)
class AiSelectedPortion:
    """Portion the AI anchored the ingredient nutrients to."""

    gram_weight: float
    portion_description: str
    reasoning: str | None = None


@dataclass(frozen=True)
class SelectedPortion:
    """Where the portion choice came from."""

    source: str | None = None
    reasoning: str | None = None


@dataclass
class Ingredient:
    """Single ingredient of a logged meal, mutated in place on rescale."""

    name: str
    brand: str
    serving_info: str
    nutrients: Nutrients
    original_nutrients: Nutrients | None = None
    food_measures: list[FoodMeasure] = field(default_factory=list)
    ai_selected_portion: AiSelectedPortion | None = None
    selected_portion: SelectedPortion | None = None


@dataclass
class Meal:
    """Logged meal with its ingredients and cached totals."""

    meal_name: str
    ingredients: list[Ingredient] = field(default_factory=list)
    total_nutrients: Nutrients = field(default_factory=Nutrients)
    meal_size: str | None = None
