"""Nutrition estimate domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionEstimate:
    """Nutrition estimate for a single analyzed food photo."""

    food_name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    portion_size: str
    description: str
    confidence: float


FALLBACK_CANDIDATE: dict[str, object] = {
    "foodName": "Indian Food Item",
    "calories": 300,
    "protein": 12.0,
    "carbs": 45.0,
    "fat": 8.0,
    "fiber": 5.0,
    "portionSize": "1 serving",
    "description": "AI analysis completed but response format needs adjustment",
    "confidence": 0.6,
}

NUMERIC_DEFAULTS: dict[str, float] = {
    "calories": 300,
    "protein": 12.0,
    "carbs": 45.0,
    "fat": 8.0,
    "fiber": 5.0,
    "confidence": 0.7,
}

TEXT_DEFAULTS: dict[str, str] = {
    "foodName": "Unknown Indian Food",
    "portionSize": "1 serving",
    "description": "AI analyzed Indian food",
}
