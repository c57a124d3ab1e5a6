# src/stacksfit_ai/agents/input_agent.py

"""
ProfileNormalizer - converts an incoming profile into the units the prompt
builders and static plans expect (weight in tenths of a kg).
"""

import math

from stacksfit_ai.models import UserProfile


def to_tenths(kg: float) -> int:
    """70.3 -> 703. Halves round up."""
    return int(math.floor(kg * 10 + 0.5))


class ProfileNormalizer:
    """Pure conversion; validation has already enforced the bounds."""

    def normalize(self, profile: UserProfile) -> UserProfile:
        weight = profile.weight
        if profile.weight_kg is not None:
            weight = to_tenths(profile.weight_kg)

        workout_types = [t.strip() for t in profile.preferred_workout_types if t and t.strip()]

        return profile.model_copy(
            update={
                "weight": weight,
                "weight_kg": None,
                "goals": profile.goals.strip(),
                "preferred_workout_types": workout_types,
            }
        )
