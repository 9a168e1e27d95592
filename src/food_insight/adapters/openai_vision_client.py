"""OpenAI Responses API client for food photo analysis."""

from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from food_insight.errors import AuthError, QuotaExceeded
from food_insight.services.analysis import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Call OpenAI Responses API and return the free-form text output."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AuthError("API authentication failed") from exc
        except openai.RateLimitError as exc:
            raise QuotaExceeded("API quota exceeded, please try again later") from exc
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
