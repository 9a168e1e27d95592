"""Pydantic models for API request payloads."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from food_insight.domain.profiles import MacroTargets, MealEntry, ProfileTargets


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class AnalyzeFoodRequest(_CamelModel):
    """Base64 food photo payload."""

    image: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")


class ProfileRequest(_CamelModel):
    """Biometric inputs for a calorie profile."""

    goal: str | None = None
    age: float | None = None
    gender: str | None = None
    height: float | None = None
    weight: float | None = None
    activity_level: str | None = Field(default=None, alias="activityLevel")


class MacroTargetsModel(_CamelModel):
    """Macro targets as returned by the profile endpoint."""

    protein: float
    carbs: float
    fat: float


class DashboardProfile(_CamelModel):
    """Previously computed profile resubmitted by the client."""

    goal: str = ""
    daily_calorie_target: float = Field(alias="dailyCalorieTarget")
    recommended_macros: MacroTargetsModel = Field(alias="recommendedMacros")

    def to_domain(self) -> ProfileTargets:
        """Convert to the calculator's profile targets."""
        return ProfileTargets(
            goal=self.goal,
            daily_calorie_target=self.daily_calorie_target,
            recommended_macros=MacroTargets(
                protein=self.recommended_macros.protein,
                carbs=self.recommended_macros.carbs,
                fat=self.recommended_macros.fat,
            ),
        )


class MealModel(_CamelModel):
    """Logged meal; ``portionSize`` is a serving multiplier."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float | None = None
    portion_size: float | None = Field(default=None, alias="portionSize")

    @field_validator("calories", "protein", "carbs", "fat", mode="before")
    @classmethod
    def _default_missing(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("portion_size", mode="before")
    @classmethod
    def _multiplier_or_none(cls, value: object) -> object:
        # Descriptive portion text such as "1 serving" is not a multiplier.
        if isinstance(value, str):
            try:
                number = float(value)
            except ValueError:
                return None
            return number if math.isfinite(number) else None
        return value

    def to_domain(self) -> MealEntry:
        """Convert to a calculator meal entry."""
        return MealEntry(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            fiber=self.fiber,
            portion_size=self.portion_size,
        )


class DashboardRequest(_CamelModel):
    """Profile plus today's meals."""

    user_profile: DashboardProfile | None = Field(default=None, alias="userProfile")
    todays_meals: list[MealModel] = Field(default_factory=list, alias="todaysMeals")


class QuickTargetRequest(_CamelModel):
    """Inputs for the simplified calorie target."""

    goal: str | None = None
    age: float | None = None
    gender: str | None = None
    activity_level: str | None = Field(default=None, alias="activityLevel")
