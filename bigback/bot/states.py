"""
Conversation states for the bot's text routing
"""
from enum import Enum

class BotState(str, Enum):
    """Bot states"""
    IDLE = "idle"

    # Sign-up, step 1: account
    SIGNUP_USERNAME = "signup_username"
    SIGNUP_EMAIL = "signup_email"
    SIGNUP_PASSWORD = "signup_password"
    SIGNUP_CONFIRM_PASSWORD = "signup_confirm_password"
    SIGNUP_TERMS = "signup_terms"

    # Sign-up, step 2: personal information
    SIGNUP_UNITS = "signup_units"
    SIGNUP_AGE = "signup_age"
    SIGNUP_GENDER = "signup_gender"
    SIGNUP_HEIGHT = "signup_height"
    SIGNUP_WEIGHT = "signup_weight"

    # Goal setting
    GOAL_UNITS = "goal_units"
    GOAL_HEIGHT = "goal_height"
    GOAL_WEIGHT = "goal_weight"
    GOAL_AGE = "goal_age"
    GOAL_GENDER = "goal_gender"
    GOAL_TARGET_WEIGHT = "goal_target_weight"
    GOAL_TIMEFRAME = "goal_timeframe"
    GOAL_BODY_FAT = "goal_body_fat"

    # Food logging
    FOOD_NAME = "food_name"
    FOOD_WEIGHT = "food_weight"
    FOOD_UNIT = "food_unit"

    # Assistant
    AI_CHAT = "ai_chat"
