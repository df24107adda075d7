"""
Flat key-value preference store backed by a JSON file
"""
from typing import Any, Dict, Optional
import json
import logging
import os

from bigback.database.models import Gender, UserGoal, UserProfile

logger = logging.getLogger(__name__)

USER_GOAL_KEY = "userGoal"
USERNAME_KEY = "username"
EMAIL_KEY = "userEmail"
GENDER_KEY = "userGender"
AGE_KEY = "userAge"


class PreferenceStore:
    """Single-writer store for the goal record and profile scalars"""

    def __init__(self, path: str):
        self.path = path
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading preferences from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Ignoring preferences file {self.path}: not a JSON object")
            return {}
        return data

    def _flush(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)

    # ===== SCALARS =====
    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any):
        self._data[key] = value
        self._flush()

    def remove(self, key: str):
        if self._data.pop(key, None) is not None:
            self._flush()

    # ===== USER GOAL =====
    def load_user_goal(self) -> Optional[UserGoal]:
        """Load the goal record; a missing or unreadable record yields None"""
        raw = self._data.get(USER_GOAL_KEY)
        if raw is None:
            return None
        try:
            return UserGoal.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Error loading user goal: {e}")
            return None

    def save_user_goal(self, goal: UserGoal):
        self.set(USER_GOAL_KEY, goal.to_dict())
        logger.info(f"User goal saved: {goal.daily_calories} kcal")

    # ===== USER PROFILE =====
    def load_profile(self) -> Optional[UserProfile]:
        """Profile saved at sign-up, None before the first sign-up"""
        username = self._data.get(USERNAME_KEY)
        if username is None:
            return None

        try:
            gender = Gender(self._data.get(GENDER_KEY, Gender.OTHER.value))
        except ValueError:
            gender = Gender.OTHER

        return UserProfile(
            username=username,
            email=self._data.get(EMAIL_KEY, ""),
            gender=gender,
            age=int(self._data.get(AGE_KEY, 0) or 0)
        )

    def save_profile(self, profile: UserProfile):
        self._data.update({
            USERNAME_KEY: profile.username,
            EMAIL_KEY: profile.email,
            GENDER_KEY: profile.gender.value,
            AGE_KEY: profile.age
        })
        self._flush()
        logger.info(f"Profile saved for {profile.username}")
