"""Tests for calorie and dashboard calculations."""

import pytest

from food_insight.domain.profiles import MacroTargets, MealEntry, ProfileTargets
from food_insight.errors import InternalError, ValidationError
from food_insight.services.calculator import (
    ADD_CALORIES,
    ADD_PROTEIN,
    BALANCED,
    CLOSE_TO_TARGET,
    LOW_CARBS,
    LOW_PROTEIN,
    MISSING_PROFILE_FIELDS,
    ROOM_FOR_SNACK,
    compute_dashboard,
    compute_profile,
    quick_target,
    round_half_up,
    round_tenth,
)


def _targets(
    goal: str = "weight_loss",
    calories: float = 2275,
    protein: float = 176,
    carbs: float = 228,
    fat: float = 63,
) -> ProfileTargets:
    return ProfileTargets(
        goal=goal,
        daily_calorie_target=calories,
        recommended_macros=MacroTargets(protein=protein, carbs=carbs, fat=fat),
    )


def test_weight_loss_profile_for_reference_male() -> None:
    profile = compute_profile("weight_loss", 30, "male", 175, 80, "moderate")

    assert profile.bmr == 1830
    assert profile.tdee == 2836
    assert profile.daily_calorie_target == 2336
    assert profile.recommended_macros == MacroTargets(protein=176, carbs=234, fat=65)
    assert profile.message == "Daily target: 2336 calories for weight loss"


def test_muscle_gain_profile_for_female() -> None:
    profile = compute_profile("Muscle_Gain", 25, "female", 160, 55, "light")

    # 447.593 + 508.585 + 495.68 - 108.25 = 1343.608
    assert profile.bmr == 1344
    assert profile.tdee == 1847
    assert profile.daily_calorie_target == 2147
    assert profile.recommended_macros == MacroTargets(protein=132, carbs=242, fat=60)


def test_maintain_is_default_goal_and_activity() -> None:
    profile = compute_profile("recomp", 40, "MALE", 180, 75, "couch")

    assert profile.tdee == round_half_up(profile_bmr_raw(40, 180, 75) * 1.55)
    assert profile.daily_calorie_target == profile.tdee
    assert profile.recommended_macros.protein == 150


def profile_bmr_raw(age: float, height: float, weight: float) -> float:
    return 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age


@pytest.mark.parametrize(
    "field",
    ["goal", "age", "gender", "height_cm", "weight_kg", "activity_level"],
)
def test_missing_profile_field_raises(field: str) -> None:
    kwargs: dict[str, object] = {
        "goal": "maintain",
        "age": 30,
        "gender": "male",
        "height_cm": 175,
        "weight_kg": 80,
        "activity_level": "moderate",
    }
    kwargs[field] = None

    with pytest.raises(ValidationError) as exc_info:
        compute_profile(**kwargs)  # type: ignore[arg-type]

    assert exc_info.value.message == MISSING_PROFILE_FIELDS


def test_non_finite_profile_input_raises() -> None:
    with pytest.raises(ValidationError):
        compute_profile("maintain", float("nan"), "male", 175, 80, "moderate")


def test_profile_is_deterministic() -> None:
    first = compute_profile("weight_loss", 30, "male", 175, 80, "moderate")
    second = compute_profile("weight_loss", 30, "male", 175, 80, "moderate")

    assert first == second


def test_dashboard_without_meals_reports_full_targets() -> None:
    snapshot = compute_dashboard(_targets(), [])

    assert snapshot.totals.calories == 0
    assert snapshot.totals.fiber == 0
    assert snapshot.remaining.calories == 2275
    assert snapshot.remaining.protein == 176
    assert snapshot.progress.calories == 0
    assert snapshot.meal_count == 0


def test_dashboard_from_computed_profile() -> None:
    profile = compute_profile("weight_loss", 30, "male", 175, 80, "moderate")
    meals = [MealEntry(calories=336, protein=26, carbs=34, fat=5)]

    snapshot = compute_dashboard(profile.targets(), meals)

    assert snapshot.targets.calories == 2336
    assert snapshot.targets.protein == 176
    assert snapshot.remaining.calories == 2000
    assert snapshot.remaining.protein == 150
    assert snapshot.remaining.carbs == 200
    assert snapshot.remaining.fat == 60


def test_dashboard_exact_target_is_one_hundred_percent() -> None:
    meals = [
        MealEntry(calories=1000, protein=80, carbs=100, fat=30),
        MealEntry(calories=637.5, protein=48, carbs=64, fat=16.5, portion_size=2),
    ]

    snapshot = compute_dashboard(_targets(), meals)

    assert snapshot.totals.calories == 2275
    assert snapshot.progress.calories == 100
    assert snapshot.remaining.calories == 0
    assert snapshot.recommendations == [CLOSE_TO_TARGET]


def test_dashboard_scales_fiber_by_portion() -> None:
    meals = [
        MealEntry(calories=200, protein=5, carbs=30, fat=4, fiber=2.5, portion_size=2),
        MealEntry(calories=100, protein=1, carbs=10, fat=1),
    ]

    snapshot = compute_dashboard(_targets(), meals)

    assert snapshot.totals.calories == 500
    assert snapshot.totals.fiber == 5.0
    assert snapshot.totals.protein == 11.0
    assert snapshot.meal_count == 2


def test_dashboard_rounds_grams_to_one_decimal() -> None:
    meals = [MealEntry(calories=100.4, protein=10.04, carbs=3.25, fat=1.15)]

    snapshot = compute_dashboard(_targets(), meals)

    assert snapshot.totals.calories == 100
    assert snapshot.totals.protein == 10.0
    assert snapshot.totals.carbs == 3.3
    assert snapshot.remaining.protein == 166.0


def test_dashboard_requires_profile() -> None:
    with pytest.raises(ValidationError):
        compute_dashboard(None, [])


def test_zero_target_reports_no_progress() -> None:
    snapshot = compute_dashboard(
        _targets(goal="maintain", calories=0, protein=0, carbs=0, fat=0),
        [MealEntry(calories=100, protein=10, carbs=10, fat=10)],
    )

    assert snapshot.progress.calories is None
    assert snapshot.progress.fat is None
    assert snapshot.remaining.calories == -100


def test_weight_loss_snack_recommendation() -> None:
    snapshot = compute_dashboard(
        _targets(),
        [MealEntry(calories=1500, protein=170, carbs=220, fat=50)],
    )

    assert snapshot.recommendations == [ROOM_FOR_SNACK]


def test_muscle_gain_recommendations_are_truncated_to_two() -> None:
    snapshot = compute_dashboard(
        _targets(goal="muscle_gain", calories=2800, protein=180, carbs=300, fat=80),
        [],
    )

    assert snapshot.recommendations == [ADD_PROTEIN, ADD_CALORIES]


def test_maintain_balanced_then_generic_recommendations() -> None:
    snapshot = compute_dashboard(
        _targets(goal="maintain", calories=2000, protein=150, carbs=225, fat=67),
        [MealEntry(calories=1950, protein=100, carbs=150, fat=60)],
    )

    assert snapshot.recommendations == [BALANCED, LOW_PROTEIN]


def test_unknown_goal_gets_generic_recommendations() -> None:
    snapshot = compute_dashboard(
        _targets(goal="bulk", calories=2000, protein=150, carbs=225, fat=67),
        [MealEntry(calories=500, protein=100, carbs=150, fat=20)],
    )

    assert snapshot.recommendations == [LOW_PROTEIN, LOW_CARBS]


def test_recommendations_never_exceed_two() -> None:
    for goal in ("weight_loss", "muscle_gain", "maintain"):
        snapshot = compute_dashboard(_targets(goal=goal), [])
        assert len(snapshot.recommendations) <= 2


@pytest.mark.parametrize(
    ("goal", "age", "gender", "activity", "expected"),
    [
        ("weight_loss", 30, "male", "moderate", 1500),
        ("muscle_gain", 22, "female", "active", 2500),
        ("maintain", 45, "male", "sedentary", 1700),
        ("maintain", None, "other", None, 1800),
    ],
)
def test_quick_target(
    goal: str, age: float | None, gender: str, activity: str | None, expected: int
) -> None:
    target = quick_target(goal, age, gender, activity)

    assert target.daily_calorie_target == expected
    assert target.goal == goal


def test_quick_target_message() -> None:
    target = quick_target("weight_loss", 30, "male", "moderate")

    assert target.message == "Target: 1500 calories for weight loss"


def test_quick_target_without_gender_fails() -> None:
    with pytest.raises(InternalError):
        quick_target("maintain", 30, None, "moderate")


def test_rounding_halves_go_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_tenth(0.25) == 0.3
