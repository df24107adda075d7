"""
Goal engine: daily calorie and macro targets from body data
"""
from typing import Dict, Optional
import logging
import math

from bigback.config import DEFAULT_DAILY_TARGETS, DEFAULT_TIMEFRAME_WEEKS
from bigback.database.models import Gender, UserGoal
from bigback.database.preferences import PreferenceStore
from bigback.services.fallback import fetch_with_fallback
from bigback.services.openai_service import OpenAIService
from bigback.utils.calculators import GoalCalculator

logger = logging.getLogger(__name__)


class GoalEngine:
    """Calculates, holds and persists the installation's UserGoal"""

    def __init__(self, openai_service: OpenAIService, store: PreferenceStore):
        self.openai_service = openai_service
        self.store = store
        self.user_goal: Optional[UserGoal] = store.load_user_goal()
        self.error_message: Optional[str] = None
        # intermediate values of the last fallback calculation, for display
        self.last_fallback: Optional[Dict] = None

    def load_goal(self) -> Optional[UserGoal]:
        self.user_goal = self.store.load_user_goal()
        return self.user_goal

    def save_goal(self, goal: UserGoal):
        self.user_goal = goal
        self.store.save_user_goal(goal)

    def create_signup_goal(
        self,
        username: str,
        height: float,
        weight: float,
        age: int,
        gender: Gender
    ) -> UserGoal:
        """Goal stored at sign-up: placeholder targets, target weight = current weight"""
        goal = UserGoal(
            username=username,
            height=height,
            weight=weight,
            age=age,
            gender=Gender(gender),
            target_weight=weight,
            timeframe=DEFAULT_TIMEFRAME_WEEKS,
            body_fat=None,
            daily_calories=DEFAULT_DAILY_TARGETS["calories"],
            daily_protein=DEFAULT_DAILY_TARGETS["protein"],
            daily_carbs=DEFAULT_DAILY_TARGETS["carbs"],
            daily_fat=DEFAULT_DAILY_TARGETS["fat"]
        )
        self.save_goal(goal)
        return goal

    async def calculate_goals(
        self,
        height: float,
        weight: float,
        age: int,
        gender: Gender,
        target_weight: float,
        timeframe: int,
        body_fat: Optional[float] = None
    ) -> UserGoal:
        """
        New goal from the AI calculation, or from the formula when that fails

        The returned goal replaces the current one and is persisted.

        Raises:
            ValueError: non-positive or non-finite measurements, or non-positive timeframe
        """
        measurements = (height, weight, target_weight)
        if not all(math.isfinite(value) and value > 0 for value in measurements):
            raise ValueError("Height, weight and target weight must be positive")
        if timeframe <= 0:
            raise ValueError("Timeframe must be at least one week")

        gender = Gender(gender)
        self.error_message = None
        self.last_fallback = None

        def fallback() -> Dict[str, float]:
            plan = GoalCalculator.calculate_fallback_goal(
                weight=weight,
                height=height,
                age=age,
                gender=gender,
                target_weight=target_weight,
                timeframe_weeks=timeframe
            )
            self.last_fallback = plan
            return {
                "dailyCalories": plan["target_calories"],
                "dailyProtein": plan["protein"],
                "dailyCarbs": plan["carbs"],
                "dailyFat": plan["fat"]
            }

        result = await fetch_with_fallback(
            self.openai_service.calculate_goals(
                height=height,
                weight=weight,
                age=age,
                gender=gender,
                target_weight=target_weight,
                timeframe=timeframe,
                body_fat=body_fat
            ),
            fallback,
            description="Goal calculation"
        )

        if result.used_fallback:
            self.error_message = f"Failed to calculate goals: {result.error}"

        targets = result.value
        username = self.user_goal.username if self.user_goal else ""

        goal = UserGoal(
            username=username,
            height=height,
            weight=weight,
            age=age,
            gender=gender,
            target_weight=target_weight,
            timeframe=timeframe,
            body_fat=body_fat,
            daily_calories=int(targets["dailyCalories"]),
            daily_protein=targets["dailyProtein"],
            daily_carbs=targets["dailyCarbs"],
            daily_fat=targets["dailyFat"]
        )
        self.save_goal(goal)

        logger.info(f"Goals updated: {goal.daily_calories} kcal (fallback: {result.used_fallback})")
        return goal
