"""
Tests for ProfileNormalizer, the prompt builders and the response parser.
"""
import pytest

from stacksfit_ai.agents.input_agent import ProfileNormalizer, to_tenths
from stacksfit_ai.llm.parser import parse_plan
from stacksfit_ai.llm.prompts import (
    NUTRITION_SCHEMA,
    WORKOUT_SCHEMA,
    format_kg,
    nutrition_prompt,
    workout_prompt,
)
from stacksfit_ai.models import GenerationKind, NutritionGoals, UserProfile


class TestProfileNormalizer:

    def test_kg_to_tenths(self):
        assert to_tenths(70.3) == 703
        assert to_tenths(65) == 650
        assert to_tenths(65.25) == 653

    def test_weight_kg_is_converted(self, profile_data):
        data = {k: v for k, v in profile_data.items() if k != "weight"}
        profile = UserProfile.model_validate({**data, "weightKg": 70.3})
        normalized = ProfileNormalizer().normalize(profile)

        assert normalized.weight == 703
        assert normalized.weight_kg is None

    def test_tenths_are_kept(self, profile_data):
        normalized = ProfileNormalizer().normalize(UserProfile.model_validate(profile_data))
        assert normalized.weight == 650

    def test_input_profile_untouched(self, profile_data):
        profile = UserProfile.model_validate({**profile_data, "goals": "  tone up  "})
        normalized = ProfileNormalizer().normalize(profile)

        assert normalized.goals == "tone up"
        assert profile.goals == "  tone up  "


class TestWorkoutPrompt:

    def test_deterministic(self, profile_data):
        profile = UserProfile.model_validate(profile_data)
        history = [{"steps": 9000, "date": "2024-01-02"}, {"steps": 7000, "date": "2024-01-01"}]
        first = workout_prompt(profile, history, {"equipment": "none"})
        second = workout_prompt(profile, list(history), {"equipment": "none"})

        assert first.text == second.text
        assert first == second

    def test_embeds_profile_and_schema(self, profile_data):
        prompt = workout_prompt(UserProfile.model_validate(profile_data))

        assert prompt.kind is GenerationKind.WORKOUT
        assert prompt.max_output_tokens == 2000
        for fragment in (
            "Fitness Level: beginner",
            "Goals: weight loss",
            "Age: 30",
            "Height: 170cm",
            "Weight: 65kg",
            "Preferred Workouts: walking, bodyweight",
            "Weekly Workout Goal: 3 sessions",
            WORKOUT_SCHEMA,
        ):
            assert fragment in prompt.text
        assert "Recent Progress" not in prompt.text

    def test_progress_and_preferences_sections(self, profile_data):
        prompt = workout_prompt(
            UserProfile.model_validate(profile_data),
            [{"workouts": 3}],
            {"time": "morning"},
        )
        assert "Recent Progress:\n" in prompt.text
        assert '"workouts": 3' in prompt.text
        assert '"time": "morning"' in prompt.text

    def test_format_kg(self):
        assert format_kg(650) == "65"
        assert format_kg(703) == "70.3"


class TestNutritionPrompt:

    def test_embeds_goals_and_restrictions(self, profile_data):
        goals = NutritionGoals.model_validate({"targetCalories": 1800, "proteinRatio": 0.3})
        prompt = nutrition_prompt(UserProfile.model_validate(profile_data), goals, ["vegan", "nut-free"])

        assert prompt.kind is GenerationKind.NUTRITION
        assert prompt.max_output_tokens == 1500
        assert "Target Calories: 1800" in prompt.text
        assert "Macro Ratios: protein 30%" in prompt.text
        assert "Dietary Restrictions: vegan, nut-free" in prompt.text
        assert NUTRITION_SCHEMA in prompt.text

    def test_defaults(self, profile_data):
        goals = NutritionGoals.model_validate({"targetCalories": 2000})
        prompt = nutrition_prompt(UserProfile.model_validate(profile_data), goals)

        assert "Dietary Restrictions: None" in prompt.text
        assert "Macro Ratios: Not specified" in prompt.text
        assert prompt == nutrition_prompt(UserProfile.model_validate(profile_data), goals)

    def test_ratios_are_not_rounded(self, profile_data):
        goals = NutritionGoals.model_validate({"targetCalories": 2000, "proteinRatio": 0.255, "fatRatio": 0.1})
        prompt = nutrition_prompt(UserProfile.model_validate(profile_data), goals)

        assert "Macro Ratios: protein 25.5%, fats 10%" in prompt.text


class TestParsePlan:

    def test_object(self):
        result = parse_plan('  {"planName": "A"}  ')
        assert result.ok
        assert result.data == {"planName": "A"}

    @pytest.mark.parametrize("text", [
        None,
        "",
        "   ",
        "```json\n{\"planName\": \"A\"}\n```",
        "Here you go: {\"planName\": \"A\"}",
        "[1, 2]",
        "\"just a string\"",
    ])
    def test_rejects_anything_but_a_bare_object(self, text):
        result = parse_plan(text)
        assert result.ok is False
        assert result.data is None
        assert result.error

    @pytest.mark.parametrize("text", [
        '{"planName": "x", "durationWeeks": NaN}',
        '{"planName": "x", "durationWeeks": Infinity}',
        '{"planName": "x", "durationWeeks": -Infinity}',
        '{"planName": "x", "durationWeeks": 1e999}',
    ])
    def test_rejects_non_finite_numbers(self, text):
        result = parse_plan(text)
        assert result.ok is False
        assert result.error.startswith("invalid JSON")

    def test_keeps_ordinary_floats(self):
        assert parse_plan('{"ratio": 0.25, "big": 12345678901234567890}').data == {
            "ratio": 0.25,
            "big": 12345678901234567890,
        }
