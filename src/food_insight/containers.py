"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_insight.adapters.openai_vision_client import OpenAIVisionClient
from food_insight.config import Settings
from food_insight.services.analysis import FoodAnalysisService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies.

    ``analysis_service`` is None when no AI credential is configured; the
    analysis endpoint then reports the service as unavailable.
    """

    settings: Settings
    analysis_service: FoodAnalysisService | None
    close_resources: Callable[[], Awaitable[None]]

    @property
    def ai_connected(self) -> bool:
        """Return True when food analysis can be served."""
        return self.analysis_service is not None


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    analysis_service = None
    if resolved_settings.api_key_present:
        openai_client = OpenAIVisionClient.create(
            str(resolved_settings.openai_api_key)
        )
        analysis_service = FoodAnalysisService(
            client=openai_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
    else:
        _logger.warning("OPENAI_API_KEY is not set; food analysis is disabled")

    async def close_resources() -> None:
        if analysis_service is not None:
            await analysis_service.client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
