"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from food_insight.config import Settings
from food_insight.containers import AppContainer
from food_insight.services.analysis import FoodAnalysisService, VisionClient

DAL_RICE_REPLY = (
    "Sure! Here is the analysis:\n"
    + json.dumps(
        {
            "foodName": "Dal Rice",
            "calories": 350,
            "protein": 15.2,
            "carbs": 65.0,
            "fat": 8.5,
            "fiber": 6.0,
            "portionSize": "1 serving (200g)",
            "description": "Traditional Indian lentil curry with rice",
            "confidence": 0.85,
        },
        indent=2,
    )
    + "\nThanks!"
)

JPEG_BASE64 = "/9j/4AAQSkZJRgABAQ=="


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed reply and recording calls."""

    reply: str = DAL_RICE_REPLY
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "reasoning_effort": reasoning_effort,
                "store": store,
                "image_data_url": image_data_url,
                "prompt": prompt,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def analysis_service(
    settings: Settings, vision_client: FakeVisionClient
) -> FoodAnalysisService:
    return FoodAnalysisService(
        client=vision_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )


@pytest.fixture
def container(
    settings: Settings, analysis_service: FoodAnalysisService
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )


@pytest.fixture
def offline_container() -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=Settings(openai_api_key=None),
        analysis_service=None,
        close_resources=close_resources,
    )
