"""Conversion of domain results into camelCase response payloads."""

from datetime import UTC, datetime

from food_insight.domain.nutrition import NutritionEstimate
from food_insight.domain.profiles import (
    DashboardSnapshot,
    MacroTargets,
    NutrientTotals,
    QuickTarget,
    UserProfile,
)


def timestamp() -> str:
    """Return the current UTC time in ISO-8601 form."""
    return datetime.now(tz=UTC).isoformat().replace("+00:00", "Z")


def estimate_payload(estimate: NutritionEstimate) -> dict[str, object]:
    """Serialize an estimate with the keys the mobile client expects."""
    return {
        "foodName": estimate.food_name,
        "calories": estimate.calories,
        "protein": estimate.protein,
        "carbs": estimate.carbs,
        "fat": estimate.fat,
        "fiber": estimate.fiber,
        "portionSize": estimate.portion_size,
        "description": estimate.description,
        "confidence": estimate.confidence,
    }


def profile_payload(profile: UserProfile, created_at: str) -> dict[str, object]:
    return {
        "goal": profile.goal,
        "age": profile.age,
        "gender": profile.gender,
        "height": profile.height_cm,
        "weight": profile.weight_kg,
        "activityLevel": profile.activity_level,
        "bmr": profile.bmr,
        "tdee": profile.tdee,
        "dailyCalorieTarget": profile.daily_calorie_target,
        "recommendedMacros": _macros(profile.recommended_macros),
        "createdAt": created_at,
    }


def dashboard_payload(
    snapshot: DashboardSnapshot, last_updated: str
) -> dict[str, object]:
    """Serialize a dashboard snapshot; progress may contain nulls."""
    return {
        "todaysTotals": {
            **_totals(snapshot.totals),
            "fiber": snapshot.totals.fiber,
        },
        "targets": _totals(snapshot.targets),
        "remaining": _totals(snapshot.remaining),
        "progress": {
            "calories": snapshot.progress.calories,
            "protein": snapshot.progress.protein,
            "carbs": snapshot.progress.carbs,
            "fat": snapshot.progress.fat,
        },
        "recommendations": list(snapshot.recommendations),
        "mealCount": snapshot.meal_count,
        "lastUpdated": last_updated,
    }


def quick_target_payload(target: QuickTarget) -> dict[str, object]:
    return {
        "dailyCalorieTarget": target.daily_calorie_target,
        "goal": target.goal,
        "message": target.message,
    }


def _macros(macros: MacroTargets) -> dict[str, float]:
    return {"protein": macros.protein, "carbs": macros.carbs, "fat": macros.fat}


def _totals(totals: NutrientTotals) -> dict[str, float]:
    return {
        "calories": totals.calories,
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fat": totals.fat,
    }
