# src/stacksfit_ai/agents/coach_agent.py
"""
CoachAgent - progress analysis and short motivational messages.

Both go through the same provider stages as the plans. The canned versions
below read only the numbers the client logged (steps, calories, workouts per
entry), so the same request always produces the same answer.
"""

import math
from typing import Any, Dict, List, Optional

from stacksfit_ai.llm.prompts import Prompt, motivation_prompt, progress_prompt
from stacksfit_ai.models import FitnessLevel, MotivationRequest, ProgressAnalysisRequest, UserProfile

TREND_METRICS = ("steps", "calories")
CONSISTENCY_METRIC = "workouts"
# relative change between the two halves of a series that counts as a trend
TREND_THRESHOLD = 0.05

BASE_SCORE = 60
TREND_POINTS = 10

LEVEL_RECOMMENDATIONS = {
    FitnessLevel.BEGINNER: [
        "Add a 10-minute walk on rest days",
        "Keep sessions at a comfortable, conversational intensity",
    ],
    FitnessLevel.INTERMEDIATE: [
        "Increase one workout's volume by a set each week",
        "Mix one interval session into your cardio days",
    ],
    FitnessLevel.ADVANCED: [
        "Plan a lighter deload week every fourth week",
        "Track recovery (sleep, soreness) alongside training load",
    ],
}

LEVEL_TIPS = {
    FitnessLevel.BEGINNER: "Start each session with a five-minute warm-up walk.",
    FitnessLevel.INTERMEDIATE: "Add one extra set to your favourite exercise this week.",
    FitnessLevel.ADVANCED: "Schedule a recovery day so you come back to your next session stronger.",
}


def metric_series(entries: List[Dict[str, Any]], metric: str) -> List[float]:
    values = []
    for entry in entries:
        value = entry.get(metric)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if math.isfinite(value):
            values.append(float(value))
    return values


def trend(values: List[float]) -> str:
    """Compare the mean of the later half of a series against the earlier half."""
    if len(values) < 2:
        return "stable"
    half = len(values) // 2
    earlier = sum(values[:half]) / half
    later = sum(values[half:]) / (len(values) - half)
    if earlier == 0:
        return "improving" if later > 0 else "stable"
    change = (later - earlier) / abs(earlier)
    if change > TREND_THRESHOLD:
        return "improving"
    if change < -TREND_THRESHOLD:
        return "declining"
    return "stable"


class CoachAgent:
    """Builds coaching prompts and the canned analysis and message."""

    def build_progress_prompt(self, request: ProgressAnalysisRequest, profile: UserProfile) -> Prompt:
        return progress_prompt(profile, request.progress_data, request.timeframe)

    def build_motivation_prompt(self, request: MotivationRequest, profile: UserProfile) -> Prompt:
        return motivation_prompt(profile, request.progress_data, request.context)

    def static_analysis(
        self, profile: UserProfile, progress_data: List[Dict[str, Any]], timeframe: str = "week"
    ) -> Dict[str, Any]:
        series = {metric: metric_series(progress_data, metric) for metric in TREND_METRICS}
        trends = {metric: trend(values) for metric, values in series.items()}
        trends["consistency"] = trend(metric_series(progress_data, CONSISTENCY_METRIC))

        improving = [m for m, t in trends.items() if t == "improving"]
        declining = [m for m, t in trends.items() if t == "declining"]
        score = BASE_SCORE + TREND_POINTS * (len(improving) - len(declining))

        achievements = [f"Logged {len(progress_data)} progress entries this {timeframe}"]
        achievements += [f"{metric.capitalize()} trending up" for metric in improving]

        insights = []
        for metric in TREND_METRICS:
            if not series[metric]:
                continue
            if trends[metric] == "improving":
                insights.append(f"Your {metric} are improving compared to earlier in the {timeframe}")
            elif trends[metric] == "declining":
                insights.append(f"Your {metric} dipped compared to earlier in the {timeframe}")
            else:
                insights.append(f"Your {metric} held steady this {timeframe}")
        if not insights:
            insights.append("Log steps and calories regularly to unlock detailed insights")

        recommendations = list(LEVEL_RECOMMENDATIONS[profile.fitness_level])
        if trends["consistency"] == "declining":
            recommendations.append("Schedule your workouts in advance to rebuild consistency")

        next_goals = [f"Complete {profile.weekly_workout_goal} workouts next {timeframe}"]
        if series["steps"]:
            average = sum(series["steps"]) / len(series["steps"])
            next_goals.append(f"Average {int(round(average * 1.1, -2))} steps per day")

        return {
            "overallScore": max(0, min(100, score)),
            "trends": trends,
            "achievements": achievements,
            "insights": insights,
            "recommendations": recommendations,
            "motivation": f"Keep going: every session moves you closer to {profile.goals}.",
            "nextGoals": next_goals,
        }

    def static_motivation(
        self, profile: UserProfile, progress_data: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        if progress_data:
            effort = f"You have logged {len(progress_data)} progress entries, and that effort adds up."
        else:
            effort = "Showing up is the hardest part, and you are already doing it."
        message = f"{effort} Keep your focus on {profile.goals}. Tip: {LEVEL_TIPS[profile.fitness_level]}"
        return {"message": message}
