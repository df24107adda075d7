"""
Daily progress against goals: ratios, bands and feedback messages
"""
from typing import List, Tuple

LOW = "low"
MID = "mid"
HIGH = "high"

MOTIVATION = [
    (0.2, "You're just getting started. Time to hit those macros!"),
    (0.5, "Making progress, keep pushing!"),
    (0.8, "Halfway there! Don't stop now, the gains are coming!"),
    (1.0, "Almost there! Finish strong and hit those targets!"),
]
MOTIVATION_DONE = "You've hit your targets! Beast mode activated! 💪"

CALORIE_FEEDBACK = [
    (0.1, "Barely a bite so far. Time to eat something!"),
    (0.3, "That's a snack, not a day of eating. Keep going!"),
    (0.5, "Under half your calories. Fuel up!"),
    (0.7, "Getting there, a couple more meals to go."),
    (0.9, "Almost there, don't stop now!"),
    (1.0, "So close! One more bite."),
    (1.1, "Calories hit. Nice work!"),
    (1.3, "Slightly over your calories today."),
]
CALORIE_FEEDBACK_OVER = "Well over your calorie target. Reset tomorrow!"

PROTEIN_FEEDBACK = [
    (0.1, "Almost no protein yet. Your muscles are waiting!"),
    (0.3, "Protein is way behind. Add a lean source to your next meal."),
    (0.5, "Under half your protein. Time for a shake?"),
    (0.7, "Getting there, keep the protein coming."),
    (0.9, "Almost enough protein. One more serving!"),
    (1.0, "So close! One more shake."),
    (1.1, "Protein target hit!"),
    (1.3, "A little over on protein. Solid effort!"),
]
PROTEIN_FEEDBACK_OVER = "Protein goal crushed!"


def _pick(value: float, table: List[Tuple[float, str]], default: str) -> str:
    for upper, message in table:
        if value < upper:
            return message
    return default


class ProgressReport:
    """Turns consumed totals and targets into display values"""

    @staticmethod
    def ratio(consumed: float, target: float) -> float:
        """Uncapped consumed/target; 0 when there is no target"""
        if target <= 0:
            return 0.0
        return max(consumed, 0.0) / target

    @staticmethod
    def goal_progress(consumed: float, target: float) -> float:
        """Progress toward a daily target, capped at 1.0"""
        return min(1.0, ProgressReport.ratio(consumed, target))

    @staticmethod
    def percent_of_goal(consumed: float, target: float) -> int:
        """Whole percent of the target, not capped"""
        return int(ProgressReport.ratio(consumed, target) * 100)

    @staticmethod
    def progress_band(value: float) -> str:
        if value < 0.3:
            return LOW
        if value < 0.7:
            return MID
        return HIGH

    @staticmethod
    def progress_bar(value: float, width: int = 10) -> str:
        filled = round(min(max(value, 0.0), 1.0) * width)
        return "▓" * filled + "░" * (width - filled)

    @staticmethod
    def motivational_message(average_progress: float) -> str:
        return _pick(average_progress, MOTIVATION, MOTIVATION_DONE)

    @staticmethod
    def calories_feedback(ratio: float) -> str:
        return _pick(ratio, CALORIE_FEEDBACK, CALORIE_FEEDBACK_OVER)

    @staticmethod
    def protein_feedback(ratio: float) -> str:
        return _pick(ratio, PROTEIN_FEEDBACK, PROTEIN_FEEDBACK_OVER)
