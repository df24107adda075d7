"""
Calorie and macro calculators used when the AI calculation is unavailable
"""
from typing import Dict
import logging

from bigback.config import (
    CARB_CALORIE_SHARE,
    FAT_CALORIE_SHARE,
    KCAL_PER_KG,
    MIN_CALORIES,
    MODERATE_ACTIVITY_MULTIPLIER,
    PROTEIN_PER_KG
)
from bigback.database.models import Gender

logger = logging.getLogger(__name__)

# Mifflin-St Jeor sex constant; "Other" is the mean of the two
BMR_GENDER_OFFSETS = {
    Gender.MALE: 5,
    Gender.FEMALE: -161,
    Gender.OTHER: -78
}


class GoalCalculator:
    """Deterministic daily calorie and macro targets"""

    @staticmethod
    def calculate_bmr_mifflin(weight: float, height: float, age: int, gender: Gender) -> float:
        """
        Basal metabolic rate by the Mifflin-St Jeor equation

        Args:
            weight: weight in kg
            height: height in cm
            age: age in years
            gender: Gender value

        Returns:
            BMR in kcal/day
        """
        bmr = (10 * weight) + (6.25 * height) - (5 * age) + BMR_GENDER_OFFSETS[Gender(gender)]

        logger.info(f"BMR (Mifflin): {bmr:.2f} kcal for {Gender(gender).value}, {age} y, {weight} kg, {height} cm")
        return bmr

    @staticmethod
    def calculate_tdee(bmr: float) -> float:
        """
        Total daily energy expenditure at moderate activity

        There is no activity input; every user is treated as moderately active.
        """
        tdee = bmr * MODERATE_ACTIVITY_MULTIPLIER

        logger.info(f"TDEE: {tdee:.2f} kcal (BMR: {bmr:.2f} * {MODERATE_ACTIVITY_MULTIPLIER})")
        return tdee

    @staticmethod
    def calculate_daily_delta(weight: float, target_weight: float, timeframe_weeks: int) -> float:
        """
        Daily calorie change needed to reach the target weight in time

        Positive when losing weight, negative when gaining.

        Raises:
            ValueError: timeframe_weeks is not positive
        """
        if timeframe_weeks <= 0:
            raise ValueError("Timeframe must be at least one week")

        weekly_delta = (weight - target_weight) * KCAL_PER_KG / timeframe_weeks
        return weekly_delta / 7

    @staticmethod
    def calculate_target_calories(tdee: float, daily_delta: float, gender: Gender) -> float:
        """
        TDEE moved toward the target weight, never below the safe minimum

        Returns:
            Adjusted calories in kcal/day, not yet truncated
        """
        adjusted = tdee - daily_delta
        minimum = MIN_CALORIES[Gender(gender).value]

        if adjusted < minimum:
            logger.info(f"Calories {adjusted:.2f} below the {minimum} kcal floor, clamping")
            return float(minimum)

        return adjusted

    @staticmethod
    def calculate_macros(weight: float, target_calories: float) -> Dict[str, float]:
        """
        Protein from body weight, carbs and fat from calorie shares

        Args:
            weight: weight in kg
            target_calories: adjusted calories in kcal/day

        Returns:
            Protein, carbs and fat in grams
        """
        # 1 g protein = 4 kcal, 1 g carbs = 4 kcal, 1 g fat = 9 kcal
        protein_grams = weight * PROTEIN_PER_KG
        carb_grams = target_calories * CARB_CALORIE_SHARE / 4
        fat_grams = target_calories * FAT_CALORIE_SHARE / 9

        logger.info(f"Macros: P:{protein_grams:.1f}g, C:{carb_grams:.1f}g, F:{fat_grams:.1f}g")
        return {
            "protein": protein_grams,
            "carbs": carb_grams,
            "fat": fat_grams
        }

    @staticmethod
    def calculate_fallback_goal(
        weight: float,
        height: float,
        age: int,
        gender: Gender,
        target_weight: float,
        timeframe_weeks: int
    ) -> Dict:
        """
        Full fallback calculation

        Returns:
            Dictionary with the intermediate values and the daily targets
        """
        bmr = GoalCalculator.calculate_bmr_mifflin(weight, height, age, gender)
        tdee = GoalCalculator.calculate_tdee(bmr)
        daily_delta = GoalCalculator.calculate_daily_delta(weight, target_weight, timeframe_weeks)
        target_calories = GoalCalculator.calculate_target_calories(tdee, daily_delta, gender)
        macros = GoalCalculator.calculate_macros(weight, target_calories)

        return {
            "bmr": bmr,
            "tdee": tdee,
            "daily_delta": daily_delta,
            "target_calories": int(target_calories),
            "protein": macros["protein"],
            "carbs": macros["carbs"],
            "fat": macros["fat"]
        }

    @staticmethod
    def get_methodology_explanation(bmr: float, tdee: float, daily_delta: float, target_calories: int) -> str:
        """Human-readable summary of the fallback calculation"""
        if daily_delta > 0:
            adjustment = f"a deficit of {daily_delta:.0f} kcal/day to lose weight"
        elif daily_delta < 0:
            adjustment = f"a surplus of {-daily_delta:.0f} kcal/day to gain weight"
        else:
            adjustment = "no adjustment, your target matches your weight"

        explanation = f"""📊 HOW WE CALCULATED IT:

🔹 Basal metabolic rate (BMR): {bmr:.0f} kcal/day
   Mifflin-St Jeor equation.

🔹 Daily energy expenditure (TDEE): {tdee:.0f} kcal/day
   BMR × {MODERATE_ACTIVITY_MULTIPLIER} for moderate activity.

🔹 Daily calories: {target_calories} kcal/day
   TDEE with {adjustment}.

🔹 Macros:
   Protein {PROTEIN_PER_KG} g per kg, {CARB_CALORIE_SHARE:.0%} of calories from carbs, {FAT_CALORIE_SHARE:.0%} from fat."""

        return explanation
