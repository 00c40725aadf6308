"""Errors raised by the food log services."""

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
SERVICE_ERROR_MESSAGE = "Failed to process food data"
INVALID_RESPONSE_MESSAGE = "Invalid response format from AI. Please try again."
EMPTY_INPUT_MESSAGE = "Please enter what you ate"


class FoodLogError(Exception):
    """Base error for food logging with a user-facing message."""

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class EmptyFoodDescriptionError(FoodLogError):
    """Raised when the submitted food text is blank."""

    def __init__(self, message: str = EMPTY_INPUT_MESSAGE) -> None:
        super().__init__(message)


class FoodLogBusyError(FoodLogError):
    """Raised when a food analysis request is already pending."""

    def __init__(self, message: str = "Already analyzing your food.") -> None:
        super().__init__(message)


class FoodAnalysisError(FoodLogError):
    """Raised when the food analysis service fails."""

    def __init__(self, message: str = SERVICE_ERROR_MESSAGE) -> None:
        super().__init__(message)


class InvalidAnalysisResponseError(FoodAnalysisError):
    """Raised when the analysis response is missing required fields."""

    def __init__(self, message: str = INVALID_RESPONSE_MESSAGE) -> None:
        super().__init__(message)


class MealIndexError(FoodLogError, IndexError):
    """Raised when a meal, ingredient or measure index is out of range."""
