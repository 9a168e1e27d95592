"""Calorie, macro and dashboard calculations."""

import math
from collections.abc import Sequence

from food_insight.domain.profiles import (
    ConsumedTotals,
    DashboardSnapshot,
    MacroTargets,
    MealEntry,
    NutrientTotals,
    ProfileTargets,
    Progress,
    QuickTarget,
    UserProfile,
)
from food_insight.errors import InternalError, ValidationError

WEIGHT_LOSS = "weight_loss"
MUSCLE_GAIN = "muscle_gain"
MAINTAIN = "maintain"

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55

# goal -> (calorie adjustment, protein g per weight unit, carb share, fat share)
_GOAL_PLANS: dict[str, tuple[int, float, float, float]] = {
    WEIGHT_LOSS: (-500, 2.2, 0.40, 0.25),
    MUSCLE_GAIN: (300, 2.4, 0.45, 0.25),
    MAINTAIN: (0, 2.0, 0.45, 0.30),
}

MISSING_PROFILE_FIELDS = (
    "Missing required fields: goal, age, gender, height, weight, activityLevel"
)
MISSING_PROFILE = "User profile required"

CLOSE_TO_TARGET = "Great! You're close to your calorie target for weight loss."
ROOM_FOR_SNACK = "You have room for a healthy snack. Try fruits or nuts."
ADD_PROTEIN = "Add more protein! Try dal, paneer, or chicken for muscle growth."
ADD_CALORIES = (
    "You need more calories for muscle gain. Add healthy carbs like rice or roti."
)
BALANCED = "Perfect balance! You're maintaining well."
LOW_PROTEIN = "Low protein today. Consider adding dal, eggs, or Greek yogurt."
LOW_CARBS = "Add some healthy carbs like brown rice, quinoa, or fruits."
MAX_RECOMMENDATIONS = 2


def compute_profile(  # noqa: PLR0913
    goal: str | None,
    age: float | None,
    gender: str | None,
    height_cm: float | None,
    weight_kg: float | None,
    activity_level: str | None,
) -> UserProfile:
    """Compute BMR, TDEE, the goal-adjusted target and macro targets."""
    if not all((goal, age, gender, height_cm, weight_kg, activity_level)):
        raise ValidationError(MISSING_PROFILE_FIELDS)
    age_value = _finite(age, "age")
    height_value = _finite(height_cm, "height")
    weight_value = _finite(weight_kg, "weight")

    bmr = harris_benedict_bmr(str(gender), age_value, height_value, weight_value)
    multiplier = ACTIVITY_MULTIPLIERS.get(
        str(activity_level).lower(), DEFAULT_ACTIVITY_MULTIPLIER
    )
    tdee = round_half_up(bmr * multiplier)

    adjustment, protein_per_unit, carb_share, fat_share = _GOAL_PLANS.get(
        str(goal).lower(), _GOAL_PLANS[MAINTAIN]
    )
    target = tdee + adjustment
    macros = MacroTargets(
        protein=round_half_up(weight_value * protein_per_unit),
        carbs=round_half_up(target * carb_share / 4),
        fat=round_half_up(target * fat_share / 9),
    )
    return UserProfile(
        goal=str(goal),
        age=age_value,
        gender=str(gender),
        height_cm=height_value,
        weight_kg=weight_value,
        activity_level=str(activity_level),
        bmr=round_half_up(bmr),
        tdee=tdee,
        daily_calorie_target=target,
        recommended_macros=macros,
        message=f"Daily target: {target} calories for {_goal_label(str(goal))}",
    )


def harris_benedict_bmr(
    gender: str, age: float, height_cm: float, weight_kg: float
) -> float:
    """Return the revised Harris-Benedict BMR.

    Only "male" (any case) selects the male formula.
    """
    if gender.lower() == "male":
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age


def compute_dashboard(
    profile: ProfileTargets | None,
    meals: Sequence[MealEntry] = (),
) -> DashboardSnapshot:
    """Aggregate today's meals against a profile's targets."""
    if profile is None:
        raise ValidationError(MISSING_PROFILE)

    macros = profile.recommended_macros
    targets = NutrientTotals(
        calories=profile.daily_calorie_target,
        protein=macros.protein,
        carbs=macros.carbs,
        fat=macros.fat,
    )
    totals = sum_meals(meals)
    remaining = NutrientTotals(
        calories=targets.calories - totals.calories,
        protein=targets.protein - totals.protein,
        carbs=targets.carbs - totals.carbs,
        fat=targets.fat - totals.fat,
    )
    progress = Progress(
        calories=_percent(totals.calories, targets.calories),
        protein=_percent(totals.protein, targets.protein),
        carbs=_percent(totals.carbs, targets.carbs),
        fat=_percent(totals.fat, targets.fat),
    )
    return DashboardSnapshot(
        totals=ConsumedTotals(
            calories=round_half_up(totals.calories),
            protein=round_tenth(totals.protein),
            carbs=round_tenth(totals.carbs),
            fat=round_tenth(totals.fat),
            fiber=round_tenth(totals.fiber),
        ),
        targets=targets,
        remaining=NutrientTotals(
            calories=round_half_up(remaining.calories),
            protein=round_tenth(remaining.protein),
            carbs=round_tenth(remaining.carbs),
            fat=round_tenth(remaining.fat),
        ),
        progress=progress,
        recommendations=recommend(profile.goal.lower(), progress, remaining),
        meal_count=len(meals),
    )


def sum_meals(meals: Sequence[MealEntry]) -> ConsumedTotals:
    """Sum meal nutrition scaled by each meal's portion multiplier."""
    calories = protein = carbs = fat = fiber = 0.0
    for meal in meals:
        portion = meal.portion_size or 1
        calories += meal.calories * portion
        protein += meal.protein * portion
        carbs += meal.carbs * portion
        fat += meal.fat * portion
        fiber += (meal.fiber or 0) * portion
    return ConsumedTotals(
        calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber
    )


def recommend(goal: str, progress: Progress, remaining: NutrientTotals) -> list[str]:
    """Return up to two recommendations, goal-specific ones first."""
    recommendations: list[str] = []
    if goal == WEIGHT_LOSS:
        if progress.calories is not None and progress.calories > 90:  # noqa: PLR2004
            recommendations.append(CLOSE_TO_TARGET)
        elif remaining.calories > 300:  # noqa: PLR2004
            recommendations.append(ROOM_FOR_SNACK)
    elif goal == MUSCLE_GAIN:
        if remaining.protein > 15:  # noqa: PLR2004
            recommendations.append(ADD_PROTEIN)
        if remaining.calories > 200:  # noqa: PLR2004
            recommendations.append(ADD_CALORIES)
    elif abs(remaining.calories) < 100:  # noqa: PLR2004
        recommendations.append(BALANCED)

    if remaining.protein > 20:  # noqa: PLR2004
        recommendations.append(LOW_PROTEIN)
    if remaining.carbs > 30:  # noqa: PLR2004
        recommendations.append(LOW_CARBS)
    return recommendations[:MAX_RECOMMENDATIONS]


def quick_target(
    goal: str | None,
    age: float | None,
    gender: str | None,
    activity_level: str | None,
) -> QuickTarget:
    """Estimate a calorie target from a coarse heuristic table."""
    if not goal or not gender:
        raise InternalError("goal and gender are required")
    target = 2000 if gender.lower() == "male" else 1800
    if activity_level == "active":
        target += 300
    elif activity_level == "sedentary":
        target -= 200
    if age is not None and age > 40:  # noqa: PLR2004
        target -= 100
    elif age is not None and age < 25:  # noqa: PLR2004
        target += 100
    if goal == WEIGHT_LOSS:
        target -= 500
    elif goal == MUSCLE_GAIN:
        target += 300
    return QuickTarget(
        daily_calorie_target=target,
        goal=goal,
        message=f"Target: {target} calories for {_goal_label(goal)}",
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves toward positive infinity."""
    return math.floor(value * 10 + 0.5) / 10


def _percent(total: float, target: float) -> int | None:
    if target <= 0:
        return None
    return round_half_up(total / target * 100)


def _finite(value: float | None, name: str) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number") from exc
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be a finite number")
    return number


def _goal_label(goal: str) -> str:
    return goal.replace("_", " ", 1)
