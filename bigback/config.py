"""
Application configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()

# API keys
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")

# Value shipped in sample configs; treated the same as a missing key
PLACEHOLDER_API_KEY = "YOUR_OPENAI_API_KEY_HERE"

# Models
OPENAI_GOAL_MODEL = os.getenv("OPENAI_GOAL_MODEL", "gpt-4o")
OPENAI_NUTRITION_MODEL = os.getenv("OPENAI_NUTRITION_MODEL", "gpt-4")
OPENAI_CHAT_MODEL = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")

# Flat key-value store, one per installation
PREFERENCES_PATH = os.getenv("PREFERENCES_PATH", "preferences.json")

# Goal calculation constants
MODERATE_ACTIVITY_MULTIPLIER = 1.55
KCAL_PER_KG = 7700  # ~1 kg of fat mass
PROTEIN_PER_KG = 1.8
CARB_CALORIE_SHARE = 0.40
FAT_CALORIE_SHARE = 0.30

MIN_CALORIES = {
    "Male": 1500,
    "Female": 1200,
    "Other": 1200
}

# Targets stored at sign-up until goals are calculated
DEFAULT_DAILY_TARGETS = {
    "calories": 2000,
    "protein": 150.0,
    "carbs": 200.0,
    "fat": 60.0
}
DEFAULT_TIMEFRAME_WEEKS = 12

# Food logging
FOOD_UNITS = ["g", "oz", "ml", "cup", "tbsp"]
DEFAULT_FOOD_UNIT = "g"
