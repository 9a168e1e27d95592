"""Food photo analysis using a multimodal LLM."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from food_insight.domain.nutrition import NutritionEstimate
from food_insight.errors import (
    AuthError,
    FoodInsightError,
    InternalError,
    QuotaExceeded,
    ValidationError,
)
from food_insight.services.normalizer import normalize

ANALYSIS_PROMPT = """Analyze this Indian food image and provide detailed \
nutritional information.

Please provide:
1. Food name (in English, identify the specific Indian dish)
2. Estimated calories per serving
3. Protein content (grams)
4. Carbohydrates (grams)
5. Fat content (grams)
6. Fiber content (grams)
7. Typical portion size
8. Brief description
9. Confidence level (0.0 to 1.0)

Format your response as a JSON object with these exact keys:
{
  "foodName": "Dal Rice",
  "calories": 350,
  "protein": 15.2,
  "carbs": 65.0,
  "fat": 8.5,
  "fiber": 6.0,
  "portionSize": "1 serving (200g)",
  "description": "Traditional Indian lentil curry with rice",
  "confidence": 0.85
}

If you cannot identify the food clearly, set confidence below 0.5 \
and provide your best estimate."""

DEFAULT_MIME_TYPE = "image/jpeg"

_logger = logging.getLogger(__name__)


class VisionClient(Protocol):
    """Interface for a model that describes an image in free-form text."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Return the model's text answer for the prompt and image."""

    async def close(self) -> None:
        """Release network resources."""


@dataclass
class FoodAnalysisService:
    """Service that sends food photos to the model and normalizes replies."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(
        self, image_base64: str, mime_type: str | None = None
    ) -> NutritionEstimate:
        """Estimate nutrition for a base64-encoded food photo."""
        image_bytes, prefixed_mime = _decode_image(image_base64)
        resolved_mime = mime_type or prefixed_mime or _detect_mime_type(image_bytes)
        _logger.info(
            "Analyzing food image: bytes=%s mime=%s", len(image_bytes), resolved_mime
        )
        data_url = _to_data_url(image_bytes, resolved_mime)
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=data_url,
                prompt=ANALYSIS_PROMPT,
            )
        except FoodInsightError:
            raise
        except Exception as exc:
            raise classify_failure(exc) from exc
        _logger.info("Model response received: chars=%s", len(raw))
        return normalize(raw)


def classify_failure(exc: Exception) -> FoodInsightError:
    """Map an untyped client failure to an error by its message."""
    message = str(exc)
    if "API key" in message:
        return AuthError("API authentication failed")
    if "quota" in message or "limit" in message:
        return QuotaExceeded("API quota exceeded, please try again later")
    return InternalError(f"AI analysis failed: {message}")


def _decode_image(image_base64: str) -> tuple[bytes, str | None]:
    """Decode base64 image data, accepting an optional data URL prefix."""
    payload = image_base64.strip()
    mime_type = None
    if payload.startswith("data:") and "," in payload:
        header, payload = payload.split(",", maxsplit=1)
        mime_type = header[len("data:") :].split(";", maxsplit=1)[0] or None
    payload = "".join(payload.split())
    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Image data is not valid base64") from exc
    if not image_bytes:
        raise ValidationError("No image data provided")
    return image_bytes, mime_type


def _to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_MIME_TYPE
