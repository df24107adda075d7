"""
Inline keyboards for bot navigation
"""
from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from bigback.config import FOOD_UNITS
from bigback.database.models import Gender

class InlineKeyboards:
    """Inline keyboard factory"""

    @staticmethod
    def main_menu() -> InlineKeyboardMarkup:
        """Main menu"""
        keyboard = [
            [
                InlineKeyboardButton("🏠 Dashboard", callback_data="dashboard"),
                InlineKeyboardButton("📈 Progress", callback_data="progress")
            ],
            [
                InlineKeyboardButton("🍽 Log food", callback_data="log_food"),
                InlineKeyboardButton("📋 Food log", callback_data="food_log")
            ],
            [
                InlineKeyboardButton("🎯 Set goals", callback_data="set_goal"),
                InlineKeyboardButton("📊 My goals", callback_data="my_goals")
            ],
            [
                InlineKeyboardButton("💬 Ask AI", callback_data="ai_chat"),
                InlineKeyboardButton("ℹ️ Help", callback_data="help")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def signup_start() -> InlineKeyboardMarkup:
        keyboard = [[InlineKeyboardButton("✨ Create account", callback_data="signup")]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def terms_acceptance() -> InlineKeyboardMarkup:
        """Terms of use"""
        keyboard = [
            [
                InlineKeyboardButton("✅ I accept", callback_data="terms_accept"),
                InlineKeyboardButton("❌ Decline", callback_data="terms_decline")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def unit_system() -> InlineKeyboardMarkup:
        """Metric or imperial input"""
        keyboard = [
            [
                InlineKeyboardButton("📏 cm / kg", callback_data="system_metric"),
                InlineKeyboardButton("📐 ft-in / lb", callback_data="system_imperial")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def gender_selection() -> InlineKeyboardMarkup:
        """Gender"""
        keyboard = [
            [
                InlineKeyboardButton("👨 Male", callback_data=f"gender_{Gender.MALE.value}"),
                InlineKeyboardButton("👩 Female", callback_data=f"gender_{Gender.FEMALE.value}"),
                InlineKeyboardButton("🧑 Other", callback_data=f"gender_{Gender.OTHER.value}")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def body_fat_skip() -> InlineKeyboardMarkup:
        keyboard = [[InlineKeyboardButton("⏭ Skip", callback_data="bodyfat_skip")]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def food_units() -> InlineKeyboardMarkup:
        """Units for a food amount"""
        keyboard = [[InlineKeyboardButton(unit, callback_data=f"unit_{unit}") for unit in FOOD_UNITS]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def food_entry_actions(entry_id: str) -> InlineKeyboardMarkup:
        """Actions on a logged food"""
        keyboard = [
            [
                InlineKeyboardButton("🔬 Details", callback_data=f"details_{entry_id}"),
                InlineKeyboardButton("🗑 Remove", callback_data=f"remove_{entry_id}")
            ],
            [
                InlineKeyboardButton("🍽 Log more", callback_data="log_food"),
                InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def food_log_entries(entries: list) -> InlineKeyboardMarkup:
        """One button per entry, newest first"""
        keyboard = [
            [InlineKeyboardButton(f"{entry.food_name} · {entry.macros.calories:.0f} kcal", callback_data=f"details_{entry.id}")]
            for entry in entries
        ]
        keyboard.append([
            InlineKeyboardButton("🍽 Log food", callback_data="log_food"),
            InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")
        ])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def goal_actions() -> InlineKeyboardMarkup:
        keyboard = [
            [
                InlineKeyboardButton("🔄 Recalculate", callback_data="set_goal"),
                InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def dashboard_actions() -> InlineKeyboardMarkup:
        keyboard = [
            [
                InlineKeyboardButton("🍽 Log food", callback_data="log_food"),
                InlineKeyboardButton("📈 Progress", callback_data="progress")
            ],
            [
                InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")
            ]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def back_to_menu() -> InlineKeyboardMarkup:
        """Back to main menu"""
        keyboard = [[InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")]]
        return InlineKeyboardMarkup(keyboard)
