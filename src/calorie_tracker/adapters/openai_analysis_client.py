"""OpenAI Responses API client for food analysis."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from calorie_tracker.services.analysis import (
    ANALYSIS_PROMPT,
    ANALYSIS_SCHEMA,
    FoodAnalysisClient,
)
from calorie_tracker.services.errors import FoodAnalysisError


@dataclass
class OpenAIFoodAnalysisClient(FoodAnalysisClient):
    """Analysis client backed by OpenAI structured outputs."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAIFoodAnalysisClient":
        """Create an OpenAI analysis client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def analyze(self, food_description: str) -> dict[str, object]:
        """Call OpenAI Responses API with the analysis schema."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [
                {"role": "system", "content": ANALYSIS_PROMPT},
                {"role": "user", "content": food_description},
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "food_analysis",
                    "strict": True,
                    "schema": ANALYSIS_SCHEMA,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise FoodAnalysisError from exc
        output_text = response.output_text
        if not output_text:
            raise FoodAnalysisError("OpenAI returned an empty response")
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise FoodAnalysisError from exc

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP session."""
        await self.client.close()
