"""
Conversational assistant with the user's day and goals as hidden context
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import logging

from bigback.database.food_log import FoodLog
from bigback.database.models import ChatMessage, FoodLogEntry, UserGoal, UserProfile
from bigback.services.fallback import fetch_with_fallback
from bigback.services.openai_service import OpenAIService
from bigback.utils.progress import ProgressReport

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\nFor context (not visible to user): "
FAILURE_MESSAGE = "Sorry, I couldn't process that request. Please try again later."
HISTORY_LIMIT = 10
MAINTENANCE_TOLERANCE_KG = 0.5


def weight_goal_type(goal: UserGoal) -> str:
    difference = goal.target_weight - goal.weight
    if abs(difference) < MAINTENANCE_TOLERANCE_KG:
        return "maintain weight"
    if difference > 0:
        return "gain weight (bulking)"
    return "lose weight (cutting)"


def build_context(
    profile: Optional[UserProfile],
    goal: Optional[UserGoal],
    entries: Iterable[FoodLogEntry],
    now: Optional[datetime] = None
) -> str:
    """
    Context appended to a chat question: identity, today's food and goals

    Only entries from the same calendar day as now are counted.
    """
    today = (now or datetime.now()).date()
    todays_entries = [entry for entry in entries if entry.timestamp.date() == today]

    username = profile.username if profile and profile.username else "user"
    age = profile.age if profile else 0
    gender = profile.gender.value if profile else "Unknown"

    context = f"User's name: {username}\n"
    context += f"User's age: {age}\n"
    context += f"User's gender: {gender}\n\n"

    total_calories = sum(int(entry.macros.calories) for entry in todays_entries)
    total_protein = sum(entry.macros.protein for entry in todays_entries)

    if todays_entries:
        context += "\nToday's food log:\n"
        for entry in todays_entries:
            context += (
                f"- {entry.food_name}: {entry.weight} {entry.unit} "
                f"({int(entry.macros.calories)} kcal, {int(entry.macros.protein)}g protein)\n"
            )
        context += f"\nToday's totals: {total_calories} kcal, {total_protein:.1f}g protein\n"
    else:
        context += "\nNo food logged today yet.\n"

    if goal is None:
        context += "\nNo nutrition goals set yet.\n"
        return context

    context += "\nUser's goals:\n"
    goal_type = weight_goal_type(goal)
    difference = abs(goal.target_weight - goal.weight)
    if goal_type.startswith("gain"):
        context += f"- Weight goal: Gain {difference:.1f} kg in {goal.timeframe} weeks\n"
    elif goal_type.startswith("lose"):
        context += f"- Weight goal: Lose {difference:.1f} kg in {goal.timeframe} weeks\n"

    context += f"- Goal type: {goal_type}\n"
    context += f"- Current weight: {goal.weight:.1f} kg\n"
    context += f"- Target weight: {goal.target_weight:.1f} kg\n"
    context += f"- Daily calorie target: {int(goal.daily_calories)} kcal\n"
    context += f"- Daily protein target: {int(goal.daily_protein)}g\n"
    context += f"- Daily carbs target: {int(goal.daily_carbs)}g\n"
    context += f"- Daily fat target: {int(goal.daily_fat)}g\n"

    context += "\nProgress today:\n"
    context += f"- Calories: {ProgressReport.percent_of_goal(total_calories, goal.daily_calories)}% of daily goal\n"
    context += f"- Protein: {ProgressReport.percent_of_goal(total_protein, goal.daily_protein)}% of daily goal\n"

    return context


class ChatAssistant:
    """Append-only conversation with the nutrition assistant"""

    def __init__(
        self,
        openai_service: OpenAIService,
        food_log: FoodLog,
        profile: Optional[UserProfile] = None,
        goal: Optional[UserGoal] = None
    ):
        self.openai_service = openai_service
        self.food_log = food_log
        self._profile = profile
        self.goal = goal
        self.messages: List[ChatMessage] = [self._welcome_message()]

    @property
    def profile(self) -> Optional[UserProfile]:
        return self._profile

    @profile.setter
    def profile(self, profile: Optional[UserProfile]):
        """Greeting follows the profile, e.g. after sign-up"""
        self._profile = profile
        self.messages[0] = self._welcome_message()

    def _welcome_message(self) -> ChatMessage:
        name = self.profile.username if self.profile and self.profile.username else "there"
        return ChatMessage(
            content=f"Hey {name} 👋! I'm your nutrition assistant. Ask me anything about nutrition, your goals, or how to improve your physique!",
            is_from_user=False
        )

    def _history(self) -> List[Dict[str, str]]:
        # welcome message and failure replies are local only, the model never wrote them
        history = [
            {"role": "user" if message.is_from_user else "assistant", "content": message.content}
            for message in self.messages[1:]
            if not message.is_fallback
        ]
        return history[-HISTORY_LIMIT:]

    async def send_message(self, text: str, now: Optional[datetime] = None) -> Optional[ChatMessage]:
        """
        Ask the assistant; returns the reply (or failure message) appended to the history

        Blank input is ignored and returns None.
        """
        if not text or not text.strip():
            return None

        history = self._history()
        self.messages.append(ChatMessage(content=text, is_from_user=True))

        context = build_context(self.profile, self.goal, self.food_log.entries, now)
        enhanced_query = text + CONTEXT_SEPARATOR + context

        result = await fetch_with_fallback(
            self.openai_service.get_chat_response(enhanced_query, history),
            lambda: FAILURE_MESSAGE,
            description="Chat response"
        )

        reply = ChatMessage(content=result.value, is_from_user=False, is_fallback=result.used_fallback)
        self.messages.append(reply)
        return reply
