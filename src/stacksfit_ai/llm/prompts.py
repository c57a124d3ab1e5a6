# src/stacksfit_ai/llm/prompts.py
"""
Prompt templates for workout and nutrition plans, progress analysis and coaching messages.

Builders are deterministic: the same request always renders the same text,
so tests can compare prompts byte for byte.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from stacksfit_ai.models import GenerationKind, NutritionGoals, UserProfile

WORKOUT_SYSTEM_INSTRUCTION = (
    "You are a certified personal trainer and fitness expert. Provide safe, effective, "
    "and personalized workout plans. Always prioritize user safety and proper form."
)

NUTRITION_SYSTEM_INSTRUCTION = (
    "You are a certified nutritionist and dietitian. Provide safe, evidence-based nutrition "
    "advice. Always prioritize user safety and respect dietary restrictions."
)

PROGRESS_SYSTEM_INSTRUCTION = (
    "You are an AI fitness coach. Provide encouraging, data-driven insights while being "
    "realistic and supportive."
)

MOTIVATION_SYSTEM_INSTRUCTION = (
    "You are an encouraging and motivational fitness coach. Keep it personal and specific to "
    "the user's situation. Don't use generic motivational quotes."
)

WORKOUT_SCHEMA = """{
  "planName": "string",
  "durationWeeks": number,
  "difficulty": "beginner|intermediate|advanced",
  "workoutDays": [
    {
      "day": number,
      "dayName": "string",
      "workoutType": "string",
      "duration": number,
      "exercises": [
        {
          "name": "string",
          "sets": number,
          "reps": "string or null",
          "duration": "string or null",
          "rest": "string or null",
          "instructions": "string",
          "modifications": {
            "beginner": "string",
            "advanced": "string"
          }
        }
      ],
      "equipment": ["string"],
      "warmup": "string",
      "cooldown": "string"
    }
  ],
  "nutritionTips": "string",
  "safetyNotes": "string"
}"""

NUTRITION_SCHEMA = """{
  "planName": "string",
  "dailyTargets": {
    "calories": number,
    "protein": number,
    "carbs": number,
    "fats": number,
    "fiber": number,
    "water": number
  },
  "meals": [
    {
      "mealType": "string",
      "time": "string",
      "calories": number,
      "foods": [
        {
          "name": "string",
          "portion": "string",
          "calories": number,
          "protein": number,
          "carbs": number,
          "fats": number
        }
      ],
      "tips": "string"
    }
  ],
  "hydrationPlan": {
    "dailyWater": "string",
    "timing": "string",
    "preworkout": "string",
    "postworkout": "string"
  },
  "supplementRecommendations": ["string"],
  "mealTiming": {
    "preworkout": "string",
    "postworkout": "string"
  }
}"""

PROGRESS_SCHEMA = """{
  "overallScore": number,
  "trends": {
    "steps": "improving|declining|stable",
    "calories": "improving|declining|stable",
    "consistency": "improving|declining|stable"
  },
  "achievements": ["string"],
  "insights": ["string"],
  "recommendations": ["string"],
  "motivation": "string",
  "nextGoals": ["string"]
}"""

MOTIVATION_SCHEMA = """{
  "message": "string"
}"""

WORKOUT_PROMPT_TEMPLATE = (
    "Generate a personalized weekly workout plan for a user with the following profile:\n\n"
    "Fitness Level: {fitness_level}\n"
    "Goals: {goals}\n"
    "Age: {age}\n"
    "Height: {height}cm\n"
    "Weight: {weight}kg\n"
    "Preferred Workouts: {workout_types}\n"
    "Weekly Workout Goal: {weekly_goal} sessions\n"
    "{extra}"
    "\nCreate a structured 7-day workout plan. Return ONLY a JSON object with this exact structure:\n"
    "{schema}\n"
    "Do not include any explanatory text, comments, or markdown. Only JSON."
)

NUTRITION_PROMPT_TEMPLATE = (
    "Create a personalized daily nutrition plan for this user:\n\n"
    "Age: {age} years\n"
    "Height: {height}cm\n"
    "Weight: {weight}kg\n"
    "Fitness Level: {fitness_level}\n"
    "Goals: {goals}\n"
    "Dietary Restrictions: {restrictions}\n"
    "Target Calories: {target_calories}\n"
    "Macro Ratios: {ratios}\n"
    "{extra}"
    "\nReturn ONLY a JSON object with this exact structure:\n"
    "{schema}\n"
    "Do not include any extra commentary. Only JSON."
)

PROGRESS_PROMPT_TEMPLATE = (
    "Analyze the fitness progress for a user with the following profile:\n\n"
    "Fitness Level: {fitness_level}\n"
    "Goals: {goals}\n"
    "Age: {age}\n"
    "Weight: {weight}kg\n"
    "Weekly Workout Goal: {weekly_goal} sessions\n"
    "\nProgress Data ({timeframe}):\n{progress}\n"
    "\nProvide insights on progress trends, goal achievement, areas for improvement, "
    "recommendations for next steps and potential challenges.\n"
    "Return ONLY a JSON object with this exact structure:\n"
    "{schema}\n"
    "Do not include any explanatory text, comments, or markdown. Only JSON."
)

MOTIVATION_PROMPT_TEMPLATE = (
    "Create a personalized motivational message for this user:\n\n"
    "User: {fitness_level} level, goals: {goals}\n"
    "{extra}"
    "Context: {context}\n"
    "\nWrite a brief, encouraging message (2-3 sentences) that acknowledges their effort, "
    "highlights progress or provides motivation, gives a specific actionable tip and keeps "
    "a positive, supportive tone.\n"
    "Return ONLY a JSON object with this exact structure:\n"
    "{schema}\n"
    "Only JSON."
)

WORKOUT_MAX_TOKENS = 2000
NUTRITION_MAX_TOKENS = 1500
TEMPERATURE = 0.7
PROGRESS_MAX_TOKENS = 1500
MOTIVATION_MAX_TOKENS = 300
COACHING_TEMPERATURE = 0.8


@dataclass(frozen=True)
class Prompt:
    kind: GenerationKind
    text: str
    schema: str
    system_instruction: str
    max_output_tokens: int
    temperature: float = TEMPERATURE
    # top-level keys a reply must carry to count as an answer
    required_keys: Tuple[str, ...] = ()


def format_kg(tenths: int) -> str:
    """650 -> '65', 703 -> '70.3'"""
    if tenths % 10 == 0:
        return str(tenths // 10)
    return f"{tenths / 10:.1f}"


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


def _section(title: str, value: Any) -> str:
    if not value:
        return ""
    return f"\n{title}:\n{_dump(value)}\n"


def _join(items: Optional[List[str]], empty: str) -> str:
    return ", ".join(items) if items else empty


def workout_prompt(
    profile: UserProfile,
    progress_history: Optional[List[Dict[str, Any]]] = None,
    preferences: Optional[Dict[str, Any]] = None,
) -> Prompt:
    extra = _section("Recent Progress", progress_history) + _section("Preferences", preferences)
    text = WORKOUT_PROMPT_TEMPLATE.format(
        fitness_level=profile.fitness_level.value,
        goals=profile.goals,
        age=profile.age,
        height=profile.height,
        weight=format_kg(profile.weight),
        workout_types=_join(profile.preferred_workout_types, "Not specified"),
        weekly_goal=profile.weekly_workout_goal,
        extra=extra,
        schema=WORKOUT_SCHEMA,
    )
    return Prompt(
        kind=GenerationKind.WORKOUT,
        text=text,
        schema=WORKOUT_SCHEMA,
        system_instruction=WORKOUT_SYSTEM_INSTRUCTION,
        max_output_tokens=WORKOUT_MAX_TOKENS,
    )


def _ratios_text(goals: NutritionGoals) -> str:
    parts = []
    for label, ratio in (("protein", goals.protein_ratio), ("carbs", goals.carb_ratio), ("fats", goals.fat_ratio)):
        if ratio is not None:
            parts.append(f"{label} {ratio * 100:g}%")
    return ", ".join(parts) if parts else "Not specified"


def nutrition_prompt(
    profile: UserProfile,
    goals: NutritionGoals,
    dietary_restrictions: Optional[List[str]] = None,
    current_nutrition: Optional[Dict[str, Any]] = None,
) -> Prompt:
    text = NUTRITION_PROMPT_TEMPLATE.format(
        age=profile.age,
        height=profile.height,
        weight=format_kg(profile.weight),
        fitness_level=profile.fitness_level.value,
        goals=profile.goals,
        restrictions=_join(dietary_restrictions, "None"),
        target_calories=goals.target_calories,
        ratios=_ratios_text(goals),
        extra=_section("Current Nutrition Patterns", current_nutrition),
        schema=NUTRITION_SCHEMA,
    )
    return Prompt(
        kind=GenerationKind.NUTRITION,
        text=text,
        schema=NUTRITION_SCHEMA,
        system_instruction=NUTRITION_SYSTEM_INSTRUCTION,
        max_output_tokens=NUTRITION_MAX_TOKENS,
    )


def progress_prompt(profile: UserProfile, progress_data: List[Dict[str, Any]], timeframe: str = "week") -> Prompt:
    text = PROGRESS_PROMPT_TEMPLATE.format(
        fitness_level=profile.fitness_level.value,
        goals=profile.goals,
        age=profile.age,
        weight=format_kg(profile.weight),
        weekly_goal=profile.weekly_workout_goal,
        timeframe=timeframe,
        progress=_dump(progress_data),
        schema=PROGRESS_SCHEMA,
    )
    return Prompt(
        kind=GenerationKind.PROGRESS,
        text=text,
        schema=PROGRESS_SCHEMA,
        system_instruction=PROGRESS_SYSTEM_INSTRUCTION,
        max_output_tokens=PROGRESS_MAX_TOKENS,
        temperature=COACHING_TEMPERATURE,
    )


def motivation_prompt(
    profile: UserProfile,
    progress_data: Optional[List[Dict[str, Any]]] = None,
    context: Optional[str] = None,
) -> Prompt:
    text = MOTIVATION_PROMPT_TEMPLATE.format(
        fitness_level=profile.fitness_level.value,
        goals=profile.goals,
        extra=_section("Recent Progress", progress_data),
        context=context or "None",
        schema=MOTIVATION_SCHEMA,
    )
    return Prompt(
        kind=GenerationKind.MOTIVATION,
        text=text,
        schema=MOTIVATION_SCHEMA,
        system_instruction=MOTIVATION_SYSTEM_INSTRUCTION,
        max_output_tokens=MOTIVATION_MAX_TOKENS,
        temperature=COACHING_TEMPERATURE,
        required_keys=("message",),
    )
