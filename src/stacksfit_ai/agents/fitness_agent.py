# src/stacksfit_ai/agents/fitness_agent.py
from typing import Any, Dict, List

from stacksfit_ai.llm.prompts import Prompt, workout_prompt
from stacksfit_ai.models import FitnessLevel, UserProfile, WorkoutRequest

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MAX_TRAINING_DAYS = 6

# volume per fitness level; beginners get the lowest sets and rep ranges
LEVEL_VOLUME = {
    FitnessLevel.BEGINNER: {
        "sets": 2,
        "upper_reps": "5-8",
        "lower_reps": "8-12",
        "plank": "20-30 seconds",
        "climbers": "10 each leg",
        "cardio": "15-20 minutes",
        "strength_minutes": 30,
        "cardio_minutes": 25,
    },
    FitnessLevel.INTERMEDIATE: {
        "sets": 3,
        "upper_reps": "8-12",
        "lower_reps": "12-15",
        "plank": "30-60 seconds",
        "climbers": "15 each leg",
        "cardio": "20-30 minutes",
        "strength_minutes": 45,
        "cardio_minutes": 35,
    },
    FitnessLevel.ADVANCED: {
        "sets": 4,
        "upper_reps": "10-15",
        "lower_reps": "15-20",
        "plank": "45-90 seconds",
        "climbers": "20 each leg",
        "cardio": "30-40 minutes",
        "strength_minutes": 60,
        "cardio_minutes": 45,
    },
}


def _strength_day(volume: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "workoutType": "Full Body Strength",
        "duration": volume["strength_minutes"],
        "exercises": [
            {
                "name": "Push-ups",
                "sets": volume["sets"],
                "reps": volume["upper_reps"],
                "duration": None,
                "rest": "60 seconds",
                "instructions": "Keep your core tight and maintain proper form",
                "modifications": {
                    "beginner": "Knee push-ups or wall push-ups",
                    "advanced": "Diamond push-ups or decline push-ups",
                },
            },
            {
                "name": "Bodyweight Squats",
                "sets": volume["sets"],
                "reps": volume["lower_reps"],
                "duration": None,
                "rest": "60 seconds",
                "instructions": "Keep your chest up and weight in your heels",
                "modifications": {
                    "beginner": "Chair-assisted squats",
                    "advanced": "Jump squats or single-leg squats",
                },
            },
            {
                "name": "Plank",
                "sets": volume["sets"],
                "reps": None,
                "duration": volume["plank"],
                "rest": "45 seconds",
                "instructions": "Keep your body in a straight line from head to toe",
                "modifications": {
                    "beginner": "Knee plank or wall plank",
                    "advanced": "Plank with leg lifts or side planks",
                },
            },
        ],
        "equipment": ["None - Bodyweight only"],
        "warmup": "5 minutes of light movement and dynamic stretching",
        "cooldown": "5-10 minutes of static stretching",
    }


def _cardio_day(volume: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "workoutType": "Cardio & Core",
        "duration": volume["cardio_minutes"],
        "exercises": [
            {
                "name": "Walking/Jogging",
                "sets": 1,
                "reps": None,
                "duration": volume["cardio"],
                "rest": None,
                "instructions": "Maintain a pace where you can still hold a conversation",
                "modifications": {
                    "beginner": "Brisk walking",
                    "advanced": "Interval running",
                },
            },
            {
                "name": "Mountain Climbers",
                "sets": volume["sets"],
                "reps": volume["climbers"],
                "duration": None,
                "rest": "45 seconds",
                "instructions": "Keep your core engaged and maintain quick, controlled movements",
                "modifications": {
                    "beginner": "Slow mountain climbers",
                    "advanced": "Cross-body mountain climbers",
                },
            },
        ],
        "equipment": ["None"],
        "warmup": "5 minutes light cardio",
        "cooldown": "5 minutes stretching",
    }


def _rest_day() -> Dict[str, Any]:
    return {
        "workoutType": "Rest Day",
        "duration": 0,
        "exercises": [],
        "equipment": [],
        "warmup": "Light stretching or gentle yoga",
        "cooldown": "Focus on recovery and hydration",
    }


def training_day_indexes(weekly_goal: int) -> List[int]:
    """Spread the week's sessions evenly over Monday..Sunday."""
    sessions = max(1, min(weekly_goal, MAX_TRAINING_DAYS))
    return [(i * len(DAY_NAMES)) // sessions for i in range(sessions)]


class FitnessAgent:
    """Builds workout prompts and the canned workout plan."""

    def build_prompt(self, request: WorkoutRequest, profile: UserProfile) -> Prompt:
        return workout_prompt(profile, request.progress_history, request.preferences)

    def static_plan(self, profile: UserProfile) -> Dict[str, Any]:
        volume = LEVEL_VOLUME[profile.fitness_level]
        training = training_day_indexes(profile.weekly_workout_goal)

        days = []
        for index, day_name in enumerate(DAY_NAMES):
            if index in training:
                session = training.index(index)
                body = _strength_day(volume) if session % 2 == 0 else _cardio_day(volume)
            else:
                body = _rest_day()
            days.append({"day": index + 1, "dayName": day_name, **body})

        level = profile.fitness_level.value
        return {
            "planName": f"{level.capitalize()} Fitness Plan",
            "durationWeeks": 4,
            "difficulty": level,
            "workoutDays": days,
            "nutritionTips": (
                f"For {profile.goals}, focus on balanced meals with adequate protein, complex "
                "carbohydrates, and healthy fats. Stay hydrated and eat within 30 minutes post-workout."
            ),
            "safetyNotes": (
                "Always warm up before exercising. Stop if you feel pain or dizziness. Consult a "
                "healthcare provider before starting any new exercise program."
            ),
        }
