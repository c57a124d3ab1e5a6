# src/stacksfit_ai/agents/nutrition_agent.py
from typing import Any, Dict, List, Optional

from stacksfit_ai.llm.prompts import Prompt, nutrition_prompt
from stacksfit_ai.models import NutritionGoals, NutritionRequest, UserProfile

PROTEIN_RATIO = 0.25
CARB_RATIO = 0.45
FAT_RATIO = 0.30
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

FIBER_G = 25
WATER_ML_PER_KG = 35

# (meal type, time, share of daily calories)
MEAL_SLOTS = [
    ("Breakfast", "7:00 AM", 0.25),
    ("Lunch", "12:30 PM", 0.35),
    ("Dinner", "6:00 PM", 0.30),
    ("Snacks", "Throughout day", 0.10),
]

MEAL_FOODS = {
    "omnivore": [
        ("Oatmeal with banana and Greek yogurt", "1 cup oats + 1 banana + 1/2 cup yogurt"),
        ("Grilled chicken with quinoa and vegetables", "4oz chicken + 1/2 cup quinoa + 1 cup vegetables"),
        ("Baked fish with sweet potato and greens", "4oz fish + 1 medium sweet potato + 2 cups greens"),
        ("Mixed nuts and fruit", "1 small handful nuts + 1 piece fruit"),
    ],
    "vegetarian": [
        ("Veggie omelette with whole-grain toast", "2 eggs + 1 cup vegetables + 1 slice toast"),
        ("Quinoa salad with chickpeas and feta", "1 cup quinoa + 1/2 cup chickpeas + 30g feta"),
        ("Paneer and vegetable stir-fry with brown rice", "100g paneer + 1 cup vegetables + 1/2 cup rice"),
        ("Greek yogurt with berries", "1 cup yogurt + 1/2 cup berries"),
    ],
    "vegan": [
        ("Oatmeal with soy milk and berries", "1 cup oats + 1 cup soy milk + 1/2 cup berries"),
        ("Lentil and quinoa bowl", "1 cup lentils + 1/2 cup quinoa + greens"),
        ("Tofu stir-fry with brown rice", "150g tofu + 1 cup vegetables + 1/2 cup rice"),
        ("Hummus with vegetable sticks", "1/4 cup hummus + 1 cup vegetables"),
    ],
}

MEAL_TIPS = {
    "Breakfast": "Start your day with complex carbs and protein for sustained energy",
    "Lunch": "Include lean protein and fiber-rich carbohydrates",
    "Dinner": "Keep dinner moderate and include plenty of vegetables",
    "Snacks": "Choose nutrient-dense snacks when hungry between meals",
}


def macro_targets(calories: int) -> Dict[str, int]:
    """Fixed 25/45/30 split: 2000 kcal -> 125g protein, 225g carbs, 67g fat."""
    return {
        "protein": round(calories * PROTEIN_RATIO / KCAL_PER_G_PROTEIN),
        "carbs": round(calories * CARB_RATIO / KCAL_PER_G_CARBS),
        "fats": round(calories * FAT_RATIO / KCAL_PER_G_FAT),
    }


def diet_style(restrictions: Optional[List[str]]) -> str:
    lowered = [r.lower() for r in restrictions or []]
    if any("vegan" in r for r in lowered):
        return "vegan"
    if any("vegetarian" in r for r in lowered):
        return "vegetarian"
    return "omnivore"


def _supplements(goals: str) -> List[str]:
    text = goals.lower()
    if "loss" in text or "lose" in text:
        return ["Multivitamin", "Omega-3", "Vitamin D"]
    return ["Multivitamin", "Protein powder", "Creatine"]


class NutritionAgent:
    """Builds nutrition prompts and the canned nutrition plan."""

    def build_prompt(self, request: NutritionRequest, profile: UserProfile) -> Prompt:
        return nutrition_prompt(
            profile,
            request.nutrition_goals,
            request.dietary_restrictions,
            request.current_nutrition,
        )

    def static_plan(
        self,
        profile: UserProfile,
        goals: NutritionGoals,
        dietary_restrictions: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        calories = goals.target_calories
        macros = macro_targets(calories)
        water_ml = round(profile.kilograms * WATER_ML_PER_KG)
        style = diet_style(dietary_restrictions)

        meals = []
        for (meal_type, time, share), (food, portion) in zip(MEAL_SLOTS, MEAL_FOODS[style]):
            meal_calories = round(calories * share)
            meals.append(
                {
                    "mealType": meal_type,
                    "time": time,
                    "calories": meal_calories,
                    "foods": [
                        {
                            "name": food,
                            "portion": portion,
                            "calories": meal_calories,
                            "protein": round(macros["protein"] * share),
                            "carbs": round(macros["carbs"] * share),
                            "fats": round(macros["fats"] * share),
                        }
                    ],
                    "tips": MEAL_TIPS[meal_type],
                }
            )

        return {
            "planName": "Balanced Nutrition Plan",
            "dailyTargets": {
                "calories": calories,
                "protein": macros["protein"],
                "carbs": macros["carbs"],
                "fats": macros["fats"],
                "fiber": FIBER_G,
                "water": water_ml,
            },
            "meals": meals,
            "hydrationPlan": {
                "dailyWater": f"{water_ml}ml",
                "timing": "Sip throughout the day",
                "preworkout": "500ml 1-2 hours before exercise",
                "postworkout": "150% of fluid lost during exercise",
            },
            "supplementRecommendations": _supplements(profile.goals),
            "mealTiming": {
                "preworkout": "Light snack 1-2 hours before training",
                "postworkout": "Protein and carbs within 30-60 minutes after training",
            },
            "dietaryRestrictions": list(dietary_restrictions or []),
        }
