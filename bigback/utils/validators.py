"""
Validators for sign-up, goal and food log input
"""
from typing import Tuple, Optional
import math
import re

from bigback.config import FOOD_UNITS
from bigback.utils.converters import feet_inches_to_cm, pounds_to_kg

EMAIL_PATTERN = re.compile(r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")
MIN_PASSWORD_LENGTH = 6

SIGNUP_AGE_RANGE = (13, 100)
GOAL_AGE_RANGE = (18, 100)
TIMEFRAME_RANGE = (4, 52)


def _parse_float(value: str) -> Optional[float]:
    try:
        number = float(value.strip().replace(',', '.'))
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


class DataValidator:
    """Validation of user input"""

    # ===== ACCOUNT (sign-up step 1) =====
    @staticmethod
    def validate_username(username: str) -> Tuple[bool, Optional[str], str]:
        username = username.strip()
        if not username:
            return False, None, "Username is required"
        return True, username, ""

    @staticmethod
    def validate_email(email: str) -> Tuple[bool, Optional[str], str]:
        email = email.strip()
        if not email:
            return False, None, "Email is required"
        if not EMAIL_PATTERN.fullmatch(email):
            return False, None, "Please enter a valid email"
        return True, email, ""

    @staticmethod
    def validate_password(password: str) -> Tuple[bool, Optional[str], str]:
        if not password:
            return False, None, "Password is required"
        if len(password) < MIN_PASSWORD_LENGTH:
            return False, None, f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        return True, password, ""

    @staticmethod
    def validate_password_confirmation(password: str, confirm_password: str) -> Tuple[bool, Optional[str], str]:
        if password != confirm_password:
            return False, None, "Passwords don't match"
        return True, confirm_password, ""

    @staticmethod
    def validate_terms(terms_accepted: bool) -> Tuple[bool, Optional[bool], str]:
        if not terms_accepted:
            return False, None, "Please accept the terms"
        return True, True, ""

    @staticmethod
    def validate_account(
        username: str,
        email: str,
        password: str,
        confirm_password: str,
        terms_accepted: bool
    ) -> Tuple[bool, str]:
        """Whole first sign-up step; reports the first failing field"""
        checks = (
            DataValidator.validate_username(username),
            DataValidator.validate_email(email),
            DataValidator.validate_password(password),
            DataValidator.validate_password_confirmation(password, confirm_password),
            DataValidator.validate_terms(terms_accepted)
        )
        for valid, _, error in checks:
            if not valid:
                return False, error
        return True, ""

    # ===== BODY DATA =====
    @staticmethod
    def validate_age(age_str: str, age_range: Tuple[int, int] = SIGNUP_AGE_RANGE) -> Tuple[bool, Optional[int], str]:
        """Age within the given range; sign-up range by default"""
        if not age_str.strip():
            return False, None, "Age is required"

        low, high = age_range
        try:
            age = int(age_str.strip())
        except ValueError:
            return False, None, f"Please enter a valid age ({low}-{high})"

        if low <= age <= high:
            return True, age, ""
        return False, None, f"Please enter a valid age ({low}-{high})"

    @staticmethod
    def validate_goal_age(age_str: str) -> Tuple[bool, Optional[int], str]:
        return DataValidator.validate_age(age_str, GOAL_AGE_RANGE)

    @staticmethod
    def validate_height(height_str: str, metric: bool = True) -> Tuple[bool, Optional[float], str]:
        """Height in cm, or feet/inches when metric is False"""
        if not height_str.strip():
            return False, None, "Height is required"

        if metric:
            height = _parse_float(height_str)
        else:
            height = feet_inches_to_cm(height_str)

        if height is None or height <= 0:
            return False, None, "Please enter a valid height"
        return True, height, ""

    @staticmethod
    def validate_weight(weight_str: str, metric: bool = True) -> Tuple[bool, Optional[float], str]:
        """Weight in kg, or pounds when metric is False"""
        if not weight_str.strip():
            return False, None, "Weight is required"

        weight = _parse_float(weight_str)
        if weight is None or weight <= 0:
            return False, None, "Please enter a valid weight"

        if not metric:
            weight = pounds_to_kg(weight)
        return True, weight, ""

    @staticmethod
    def validate_target_weight(weight_str: str, metric: bool = True) -> Tuple[bool, Optional[float], str]:
        if not weight_str.strip():
            return False, None, "Target weight is required"

        valid, weight, _ = DataValidator.validate_weight(weight_str, metric)
        if not valid:
            return False, None, "Please enter a valid target weight"
        return True, weight, ""

    @staticmethod
    def validate_timeframe(timeframe_str: str) -> Tuple[bool, Optional[int], str]:
        low, high = TIMEFRAME_RANGE
        try:
            weeks = int(timeframe_str.strip())
        except ValueError:
            return False, None, f"Timeframe must be a whole number of weeks ({low}-{high})"

        if low <= weeks <= high:
            return True, weeks, ""
        return False, None, f"Timeframe must be between {low} and {high} weeks"

    @staticmethod
    def validate_body_fat(body_fat_str: str) -> Tuple[bool, Optional[float], str]:
        """Optional body fat percentage; empty or 'skip' means not provided"""
        text = body_fat_str.strip()
        if not text or text.lower() == "skip":
            return True, None, ""

        body_fat = _parse_float(text.rstrip('%'))
        if body_fat is None or not 0 <= body_fat <= 100:
            return False, None, "Body fat must be a percentage between 0 and 100"
        return True, body_fat, ""

    # ===== FOOD LOG =====
    @staticmethod
    def validate_food_name(name: str) -> Tuple[bool, Optional[str], str]:
        name = name.strip()
        if not name:
            return False, None, "Please enter a food name"
        return True, name, ""

    @staticmethod
    def validate_food_weight(weight_str: str) -> Tuple[bool, Optional[float], str]:
        weight = _parse_float(weight_str)
        if weight is None or weight <= 0:
            return False, None, "Amount must be a number greater than 0"
        return True, weight, ""

    @staticmethod
    def validate_unit(unit: str) -> Tuple[bool, Optional[str], str]:
        unit = unit.strip().lower()
        if unit not in FOOD_UNITS:
            return False, None, f"Unit must be one of: {', '.join(FOOD_UNITS)}"
        return True, unit, ""
