"""HTTP client for the analyze-food service."""

import json
import logging
from dataclasses import dataclass

import httpx

from calorie_tracker.services.analysis import FoodAnalysisClient
from calorie_tracker.services.errors import SERVICE_ERROR_MESSAGE, FoodAnalysisError

_logger = logging.getLogger(__name__)


@dataclass
class HttpxFoodAnalysisClient(FoodAnalysisClient):
    """HTTPX-backed client for the analyze-food endpoint."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 60.0

    @classmethod
    def create(
        cls, url: str, timeout_seconds: float = 60.0
    ) -> "HttpxFoodAnalysisClient":
        """Create an analysis client with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def analyze(self, food_description: str) -> dict[str, object]:
        """POST the description and return the decoded JSON body."""
        try:
            response = await self.http_client.post(
                self.url,
                json={"foodDescription": food_description},
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            _logger.warning("Food analysis request failed: %s", exc)
            raise FoodAnalysisError from exc

        if response.is_error:
            raise FoodAnalysisError(_error_message(response))
        try:
            return response.json()
        except json.JSONDecodeError as exc:
            raise FoodAnalysisError from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Return the service-provided error message, or the generic fallback."""
    try:
        payload = response.json()
    except json.JSONDecodeError:
        return SERVICE_ERROR_MESSAGE
    if isinstance(payload, dict):
        message = payload.get("error")
        if isinstance(message, str) and message:
            return message
    return SERVICE_ERROR_MESSAGE
