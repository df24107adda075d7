"""
Data models for goals, food logs and chat
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any
import uuid


class Gender(str, Enum):
    """Gender options shared by sign-up and goal setting"""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


@dataclass
class UserProfile:
    """Identity fields kept for quick access by the assistant"""
    username: str = ""
    email: str = ""
    gender: Gender = Gender.OTHER
    age: int = 0


@dataclass
class UserGoal:
    """Body data and daily targets, one record per installation"""
    height: float  # cm
    weight: float  # kg
    age: int
    gender: Gender
    target_weight: float  # kg
    timeframe: int  # weeks
    body_fat: Optional[float] = None  # %
    daily_calories: int = 0  # kcal
    daily_protein: float = 0.0  # g
    daily_carbs: float = 0.0  # g
    daily_fat: float = 0.0  # g
    username: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the keys used by the persisted record"""
        return {
            "username": self.username,
            "height": self.height,
            "weight": self.weight,
            "age": self.age,
            "gender": self.gender.value,
            "targetWeight": self.target_weight,
            "timeframe": self.timeframe,
            "bodyFat": self.body_fat,
            "dailyCalories": self.daily_calories,
            "dailyProtein": self.daily_protein,
            "dailyCarbs": self.daily_carbs,
            "dailyFat": self.daily_fat
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserGoal":
        """Inverse of to_dict; raises KeyError/ValueError on a broken record"""
        return cls(
            username=data.get("username", ""),
            height=float(data["height"]),
            weight=float(data["weight"]),
            age=int(data["age"]),
            gender=Gender(data["gender"]),
            target_weight=float(data["targetWeight"]),
            timeframe=int(data["timeframe"]),
            body_fat=data.get("bodyFat"),
            daily_calories=int(data.get("dailyCalories", 0)),
            daily_protein=float(data.get("dailyProtein", 0)),
            daily_carbs=float(data.get("dailyCarbs", 0)),
            daily_fat=float(data.get("dailyFat", 0))
        )


@dataclass(frozen=True)
class MacroNutrients:
    """Macros of a logged food"""
    protein: float  # g
    fat: float  # g
    carbs: float  # g
    calories: float  # kcal


@dataclass(frozen=True)
class MicroNutrients:
    """Micronutrients of a logged food"""
    total_sugars: float  # g
    fiber: float  # g
    calcium: float  # mg
    iron: float  # mg
    sodium: float  # mg
    vitamin_a: float  # IU
    vitamin_c: float  # mg
    cholesterol: float  # mg


@dataclass(frozen=True)
class NutritionData:
    """Nutrition lookup result before it becomes a log entry"""
    macros: MacroNutrients
    micros: MicroNutrients

    def as_dict(self) -> Dict[str, float]:
        return {**asdict(self.macros), **asdict(self.micros)}


@dataclass(frozen=True)
class FoodLogEntry:
    """One logged food"""
    food_name: str
    timestamp: datetime
    weight: float
    unit: str
    macros: MacroNutrients
    micros: MicroNutrients
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class ChatMessage:
    """A message in the assistant conversation"""
    content: str
    is_from_user: bool
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    # canned reply standing in for a failed request
    is_fallback: bool = False

    @property
    def formatted_time(self) -> str:
        return self.timestamp.strftime("%H:%M")
