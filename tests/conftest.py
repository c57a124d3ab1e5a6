"""
Shared fixtures: sample profiles/requests and an in-memory provider adapter.
"""
import json
import time
from typing import List, Optional

import pytest

from stacksfit_ai.llm.llm_client import ProviderAdapter
from stacksfit_ai.llm.prompts import Prompt
from stacksfit_ai.models import NutritionRequest, WorkoutRequest

WORKOUT_JSON = json.dumps({
    "planName": "Provider Plan",
    "durationWeeks": 1,
    "difficulty": "beginner",
    "workoutDays": [],
    "nutritionTips": "Eat well",
    "safetyNotes": "Be safe",
})

NUTRITION_JSON = json.dumps({
    "planName": "Provider Nutrition",
    "dailyTargets": {"calories": 2000, "protein": 150, "carbs": 200, "fats": 67, "fiber": 25, "water": 2500},
    "meals": [],
})


class FakeAdapter(ProviderAdapter):
    """Returns a canned text (or raises) without any network call."""

    def __init__(self, name: str, text: Optional[str] = None, error: Optional[Exception] = None,
                 available: bool = True, delay: float = 0.0):
        self.name = name
        self.text = text
        self.error = error
        self.available = available
        self.configured = available
        self.delay = delay
        self.prompts: List[Prompt] = []

    def is_available(self) -> bool:
        return self.available

    def _generate_sync(self, prompt: Prompt) -> str:
        self.prompts.append(prompt)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.text

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture
def profile_data():
    return {
        "fitnessLevel": "beginner",
        "goals": "weight loss",
        "age": 30,
        "height": 170,
        "weight": 650,
        "preferredWorkoutTypes": ["walking", "bodyweight"],
        "weeklyWorkoutGoal": 3,
    }


@pytest.fixture
def workout_request(profile_data):
    return WorkoutRequest.model_validate({"userProfile": profile_data})


@pytest.fixture
def nutrition_request(profile_data):
    return NutritionRequest.model_validate({
        "userProfile": profile_data,
        "nutritionGoals": {"targetCalories": 2000},
    })


@pytest.fixture
def unavailable():
    """Pair of adapters that are both not configured."""
    return FakeAdapter("openai", available=False), FakeAdapter("gemini", available=False)
