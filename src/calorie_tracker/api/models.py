"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field

MAX_CUSTOM_GRAMS = 100_000.0


class LogFoodRequest(BaseModel):
    """Free-text food description to analyze."""

    model_config = ConfigDict(populate_by_name=True)

    food_description: str = Field(alias="foodDescription")


class SelectMeasureRequest(BaseModel):
    """Predefined measure chosen for an ingredient."""

    model_config = ConfigDict(populate_by_name=True)

    measure_index: int = Field(alias="measureIndex", ge=0)


class CustomGramsRequest(BaseModel):
    """Custom gram amount; zero or less resets to the original portion."""

    grams: float = Field(le=MAX_CUSTOM_GRAMS, allow_inf_nan=False)
