"""Models for food analysis service responses."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from calorie_tracker.domain.nutrition import (
    AiSelectedPortion,
    FoodMeasure,
    Ingredient,
    Meal,
    Nutrients,
    SelectedPortion,
)


class NutrientsPayload(BaseModel):
    """Calories and macros as returned by the service."""

    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)

    def to_domain(self) -> Nutrients:
        return Nutrients(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class FoodMeasurePayload(BaseModel):
    """Alternative serving for an ingredient."""

    label: str | None = None
    portion_description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("portionDescription", "portion_description"),
    )
    unit: str | None = None
    gram_weight: float | None = Field(
        default=None,
        ge=0.0,
        validation_alias=AliasChoices("gramWeight", "gram_weight"),
    )

    @model_validator(mode="before")
    @classmethod
    def _fallback_gram_weight(cls, data: object) -> object:
        # An empty gramWeight defers to gram_weight.
        if isinstance(data, dict) and not data.get("gramWeight"):
            fallback = data.get("gram_weight")
            if fallback:
                return {**data, "gramWeight": fallback}
        return data

    def to_domain(self) -> FoodMeasure:
        return FoodMeasure(
            label=self.label,
            portion_description=self.portion_description,
            unit=self.unit,
            gram_weight=self.gram_weight,
        )


class AiSelectedPortionPayload(BaseModel):
    """Anchor portion chosen by the AI."""

    gram_weight: float = Field(
        ge=0.0, validation_alias=AliasChoices("gramWeight", "gram_weight")
    )
    portion_description: str = Field(
        default="",
        validation_alias=AliasChoices("portionDescription", "portion_description"),
    )
    reasoning: str | None = None


class SelectedPortionPayload(BaseModel):
    """Provenance of the selected portion."""

    source: str | None = None
    reasoning: str | None = None


class IngredientPayload(BaseModel):
    """Single matched ingredient."""

    name: str
    brand: str | None = ""
    serving_info: str | None = ""
    nutrients: NutrientsPayload
    original_nutrients: NutrientsPayload | None = Field(
        default=None,
        validation_alias=AliasChoices("originalNutrients", "original_nutrients"),
    )
    food_measures: list[FoodMeasurePayload] = Field(
        default_factory=list,
        validation_alias=AliasChoices("foodMeasures", "food_measures"),
    )
    ai_selected_portion: AiSelectedPortionPayload | None = None
    selected_portion: SelectedPortionPayload | None = Field(
        default=None,
        validation_alias=AliasChoices("selectedPortion", "selected_portion"),
    )

    def to_domain(self) -> Ingredient:
        ai_portion = None
        if self.ai_selected_portion is not None:
            ai_portion = AiSelectedPortion(
                gram_weight=self.ai_selected_portion.gram_weight,
                portion_description=self.ai_selected_portion.portion_description,
                reasoning=self.ai_selected_portion.reasoning,
            )
        selected = None
        if self.selected_portion is not None:
            selected = SelectedPortion(
                source=self.selected_portion.source,
                reasoning=self.selected_portion.reasoning,
            )
        return Ingredient(
            name=self.name,
            brand=self.brand or "",
            serving_info=self.serving_info or "",
            nutrients=self.nutrients.to_domain(),
            original_nutrients=(
                self.original_nutrients.to_domain()
                if self.original_nutrients is not None
                else None
            ),
            food_measures=[measure.to_domain() for measure in self.food_measures],
            ai_selected_portion=ai_portion,
            selected_portion=selected,
        )


class MealPayload(BaseModel):
    """Meal parsed from the food description."""

    meal_name: str
    meal_size: str | None = None
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    total_nutrients: NutrientsPayload

    def to_domain(self) -> Meal:
        return Meal(
            meal_name=self.meal_name,
            meal_size=self.meal_size,
            ingredients=[ingredient.to_domain() for ingredient in self.ingredients],
            total_nutrients=self.total_nutrients.to_domain(),
        )


class FoodAnalysis(BaseModel):
    """Full analysis response: totals plus the newly logged meals."""

    model_config = ConfigDict(populate_by_name=True)

    daily_totals: NutrientsPayload = Field(alias="dailyTotals")
    logged_meals: list[MealPayload] = Field(alias="loggedMeals")
