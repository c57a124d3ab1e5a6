# demo_run.py
"""
Demo runner for StacksFit AI.

Builds the orchestrator from the current environment (.env is honoured) and
generates a workout plan, a nutrition plan and a coaching message for a
sample profile, printing which fallback stage produced each.

Run from the project root without installing:  python demo_run.py
"""

import asyncio
import os
import sys
from pprint import pprint

ROOT = os.path.dirname(os.path.abspath(__file__))
SRC = os.path.join(ROOT, "src")

# make sure the local src/ wins over any installed copy
if SRC in sys.path:
    sys.path.remove(SRC)
sys.path.insert(0, SRC)

from dotenv import load_dotenv

load_dotenv(os.path.join(ROOT, ".env"))

from stacksfit_ai.config import configure_logging, load_settings
from stacksfit_ai.main import build_orchestrator
from stacksfit_ai.models import MotivationRequest, NutritionRequest, WorkoutRequest

SAMPLE_PROFILE = {
    "fitnessLevel": "beginner",
    "goals": "weight loss",
    "age": 30,
    "height": 170,
    "weight": 650,
    "preferredWorkoutTypes": ["walking", "bodyweight"],
    "weeklyWorkoutGoal": 3,
}


async def run_demo():
    settings = load_settings()
    configure_logging(settings.log_level)
    orchestrator = build_orchestrator(settings)

    print("Provider status:")
    pprint(orchestrator.health_status())

    workout = await orchestrator.generate_workout(WorkoutRequest.model_validate({"userProfile": SAMPLE_PROFILE}))
    print(f"\n=== Workout plan (provider={workout.provider.value}, backend={workout.backend}) ===")
    if workout.fallback_used:
        print("fallback:", workout.fallback_reason)
    pprint(workout.plan)

    nutrition = await orchestrator.generate_nutrition(
        NutritionRequest.model_validate(
            {
                "userProfile": SAMPLE_PROFILE,
                "nutritionGoals": {"targetCalories": 1800},
                "dietaryRestrictions": ["vegetarian"],
            }
        )
    )
    print(f"\n=== Nutrition plan (provider={nutrition.provider.value}, backend={nutrition.backend}) ===")
    if nutrition.fallback_used:
        print("fallback:", nutrition.fallback_reason)
    pprint(nutrition.plan)

    motivation = await orchestrator.generate_motivation(
        MotivationRequest.model_validate({"userProfile": SAMPLE_PROFILE, "context": "first week back"})
    )
    print(f"\n=== Coaching message (provider={motivation.provider.value}) ===")
    print(motivation.plan.get("message"))


if __name__ == "__main__":
    try:
        asyncio.run(run_demo())
    except KeyboardInterrupt:
        print("\nDemo cancelled.")
