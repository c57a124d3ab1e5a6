# src/stacksfit_ai/models.py
"""
Request and result types.

Requests are pydantic models validated once at the HTTP boundary and frozen
afterwards. Field names are snake_case in Python and camelCase on the wire.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

ShortText = Annotated[str, Field(max_length=30)]


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class GenerationKind(str, Enum):
    WORKOUT = "workout"
    NUTRITION = "nutrition"
    PROGRESS = "progress"
    MOTIVATION = "motivation"


class Provider(str, Enum):
    """Fallback stages, in the order they are attempted."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    STATIC = "static"


class _Frozen(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class UserProfile(_Frozen):
    fitness_level: FitnessLevel = Field(alias="fitnessLevel")
    goals: str = Field(min_length=1, max_length=50)
    age: int = Field(ge=13, le=120)
    height: int = Field(ge=100, le=250, description="Height in cm")
    weight: Optional[int] = Field(default=None, ge=300, le=3000, description="Weight in tenths of a kg")
    weight_kg: Optional[float] = Field(default=None, alias="weightKg", ge=30, le=300)
    preferred_workout_types: List[ShortText] = Field(default_factory=list, alias="preferredWorkoutTypes", max_length=5)
    weekly_workout_goal: int = Field(alias="weeklyWorkoutGoal", ge=1, le=14)

    @model_validator(mode="after")
    def _require_weight(self):
        if self.weight is None and self.weight_kg is None:
            raise ValueError("either weight (tenths of a kg) or weightKg is required")
        return self

    @property
    def kilograms(self) -> float:
        if self.weight is not None:
            return self.weight / 10
        return float(self.weight_kg)


class NutritionGoals(_Frozen):
    target_calories: int = Field(alias="targetCalories", ge=800, le=5000)
    protein_ratio: Optional[float] = Field(default=None, alias="proteinRatio", ge=0.1, le=0.7)
    carb_ratio: Optional[float] = Field(default=None, alias="carbRatio", ge=0.1, le=0.7)
    fat_ratio: Optional[float] = Field(default=None, alias="fatRatio", ge=0.1, le=0.7)

    @model_validator(mode="after")
    def _ratios_fit(self):
        given = [r for r in (self.protein_ratio, self.carb_ratio, self.fat_ratio) if r is not None]
        if sum(given) > 1.0 + 1e-9:
            raise ValueError("macro ratios must not sum to more than 1.0")
        return self


class WorkoutRequest(_Frozen):
    user_profile: UserProfile = Field(alias="userProfile")
    progress_history: Optional[List[Dict[str, Any]]] = Field(default=None, alias="progressHistory")
    preferences: Optional[Dict[str, Any]] = None


class NutritionRequest(_Frozen):
    user_profile: UserProfile = Field(alias="userProfile")
    nutrition_goals: NutritionGoals = Field(alias="nutritionGoals")
    dietary_restrictions: Optional[List[ShortText]] = Field(default=None, alias="dietaryRestrictions", max_length=10)
    current_nutrition: Optional[Dict[str, Any]] = Field(default=None, alias="currentNutrition")


class ProgressAnalysisRequest(_Frozen):
    user_profile: UserProfile = Field(alias="userProfile")
    progress_data: List[Dict[str, Any]] = Field(alias="progressData", min_length=1, max_length=366)
    timeframe: ShortText = "week"


class MotivationRequest(_Frozen):
    user_profile: UserProfile = Field(alias="userProfile")
    progress_data: Optional[List[Dict[str, Any]]] = Field(default=None, alias="progressData", max_length=366)
    context: Optional[str] = Field(default=None, max_length=200)


@dataclass(frozen=True)
class StageAttempt:
    """One step of the fallback sequence and how it ended."""

    stage: Provider
    backend: str
    succeeded: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class GenerationResult:
    plan: Dict[str, Any]
    provider: Provider
    backend: str
    fallback_used: bool
    fallback_reason: Optional[str] = None
    attempts: Tuple[StageAttempt, ...] = field(default_factory=tuple)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "plan": self.plan,
            "provider": self.provider.value,
            "backend": self.backend,
            "fallbackUsed": self.fallback_used,
            "fallbackReason": self.fallback_reason,
        }
