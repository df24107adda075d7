"""
Imperial to metric conversions for body measurements
"""
from typing import Optional
import re

CM_PER_INCH = 2.54
KG_PER_POUND = 0.453592

_FEET_INCHES = re.compile(r"^\s*(\d+)\s*'\s*(\d+)\s*\"?\s*$")
_FEET_SPACE_INCHES = re.compile(r"^\s*(\d+)\s+(\d+)\s*$")
_FEET_ONLY = re.compile(r"^\s*(\d+)\s*'?\s*$")


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def pounds_to_kg(pounds: float) -> float:
    return pounds * KG_PER_POUND


def feet_inches_to_cm(text: str) -> Optional[float]:
    """
    Parse a height like 5'10, 5 10 or 5 into centimetres

    Returns None when the text is not in one of those forms.
    """
    for pattern in (_FEET_INCHES, _FEET_SPACE_INCHES):
        match = pattern.match(text)
        if match:
            feet, inches = int(match.group(1)), int(match.group(2))
            return inches_to_cm(feet * 12 + inches)

    match = _FEET_ONLY.match(text)
    if match:
        return inches_to_cm(int(match.group(1)) * 12)

    return None
