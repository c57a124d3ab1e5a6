# src/stacksfit_ai/agents/static_plan.py
"""Canned plans used when no provider produced a usable answer. No network."""

from typing import Any, Dict, List, Optional

from stacksfit_ai.agents.fitness_agent import FitnessAgent
from stacksfit_ai.agents.nutrition_agent import NutritionAgent
from stacksfit_ai.models import GenerationKind, NutritionGoals, UserProfile

_fitness = FitnessAgent()
_nutrition = NutritionAgent()


def generate_static_plan(
    profile: UserProfile,
    kind: GenerationKind,
    goals: Optional[NutritionGoals] = None,
    dietary_restrictions: Optional[List[str]] = None,
) -> Dict[str, Any]:
    if kind is GenerationKind.WORKOUT:
        return _fitness.static_plan(profile)
    if kind is not GenerationKind.NUTRITION:
        raise ValueError(f"no static plan for {kind.value}")
    if goals is None:
        raise ValueError("nutrition goals are required for a nutrition plan")
    return _nutrition.static_plan(profile, goals, dietary_restrictions)
