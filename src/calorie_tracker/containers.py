"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from calorie_tracker.adapters.analysis_http_client import HttpxFoodAnalysisClient
from calorie_tracker.adapters.openai_analysis_client import OpenAIFoodAnalysisClient
from calorie_tracker.config import Settings
from calorie_tracker.services.analysis import FoodAnalysisService
from calorie_tracker.services.meals import FoodLogService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: FoodAnalysisService
    food_log_service: FoodLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The analyze-food HTTP service is used when ``analysis_service_url`` is
    configured; otherwise meals are parsed directly with OpenAI.
    """
    resolved_settings = settings or Settings()
    client: HttpxFoodAnalysisClient | OpenAIFoodAnalysisClient
    if resolved_settings.analysis_service_url:
        client = HttpxFoodAnalysisClient.create(
            url=resolved_settings.analysis_service_url,
            timeout_seconds=resolved_settings.analysis_timeout_seconds,
        )
    elif resolved_settings.openai_api_key:
        client = OpenAIFoodAnalysisClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
    else:
        raise ValueError(
            "Configure ANALYSIS_SERVICE_URL or OPENAI_API_KEY for food analysis"
        )
    analysis_service = FoodAnalysisService(
        client=client, debug=resolved_settings.debug
    )
    food_log_service = FoodLogService(analysis_service=analysis_service)

    async def close_resources() -> None:
        await client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        food_log_service=food_log_service,
        close_resources=close_resources,
    )
