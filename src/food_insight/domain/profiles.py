"""Domain models for user profiles and daily dashboards."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class UserProfile:
    """Biometric inputs with derived energy and macro targets."""

    goal: str
    age: float
    gender: str
    height_cm: float
    weight_kg: float
    activity_level: str
    bmr: int
    tdee: int
    daily_calorie_target: int
    recommended_macros: MacroTargets
    message: str

    def targets(self) -> "ProfileTargets":
        """Return the parts of the profile a dashboard needs."""
        return ProfileTargets(
            goal=self.goal,
            daily_calorie_target=self.daily_calorie_target,
            recommended_macros=self.recommended_macros,
        )


@dataclass(frozen=True)
class ProfileTargets:
    """Goal and targets of a previously computed profile, as resubmitted."""

    goal: str
    daily_calorie_target: float
    recommended_macros: MacroTargets


@dataclass(frozen=True)
class MealEntry:
    """Client-supplied meal used for dashboard totals.

    ``portion_size`` is a serving multiplier, not the descriptive portion
    text of a nutrition estimate.
    """

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float | None = None
    portion_size: float | None = None


@dataclass(frozen=True)
class NutrientTotals:
    """Calories and macros for a day."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class ConsumedTotals(NutrientTotals):
    """Consumed totals, which also track fiber."""

    fiber: float


@dataclass(frozen=True)
class Progress:
    """Percent of each target reached; None when the target is not positive."""

    calories: int | None
    protein: int | None
    carbs: int | None
    fat: int | None


@dataclass(frozen=True)
class DashboardSnapshot:
    """Daily progress computed from a profile and today's meals."""

    totals: ConsumedTotals
    targets: NutrientTotals
    remaining: NutrientTotals
    progress: Progress
    recommendations: list[str]
    meal_count: int


@dataclass(frozen=True)
class QuickTarget:
    """Coarse calorie target from the simplified heuristic table."""

    daily_calorie_target: int
    goal: str
    message: str
