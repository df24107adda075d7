"""
OpenAI chat completions client for goals, nutrition lookup and chat
"""
from openai import AsyncOpenAI, OpenAIError
from typing import Any, Dict, List, Optional
import json
import logging
import math
import re

from bigback.config import (
    OPENAI_CHAT_MODEL,
    OPENAI_GOAL_MODEL,
    OPENAI_NUTRITION_MODEL,
    PLACEHOLDER_API_KEY
)
from bigback.database.models import Gender, MacroNutrients, MicroNutrients, NutritionData

logger = logging.getLogger(__name__)

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*?\}")

GOAL_FIELDS = ("dailyCalories", "dailyProtein", "dailyCarbs", "dailyFat")

# response key -> (group, attribute)
NUTRITION_FIELDS = {
    "protein": ("macros", "protein"),
    "fat": ("macros", "fat"),
    "carbs": ("macros", "carbs"),
    "calories": ("macros", "calories"),
    "totalSugars": ("micros", "total_sugars"),
    "fiber": ("micros", "fiber"),
    "calcium": ("micros", "calcium"),
    "iron": ("micros", "iron"),
    "sodium": ("micros", "sodium"),
    "vitaminA": ("micros", "vitamin_a"),
    "vitaminC": ("micros", "vitamin_c"),
    "cholesterol": ("micros", "cholesterol"),
}


class NutritionServiceError(Exception):
    """Base class for failed text-generation calls"""


class ServiceNotConfiguredError(NutritionServiceError):
    """No usable API key"""


class ServiceTransportError(NutritionServiceError):
    """Network or API failure"""


class ServiceDecodeError(NutritionServiceError):
    """Reply does not contain the expected JSON"""


class MissingFieldError(NutritionServiceError):
    """Reply JSON lacks a required field"""


def is_configured_key(api_key: Optional[str]) -> bool:
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY


def extract_json_object(content: str) -> Dict[str, Any]:
    """
    Parse the first {...} block of a reply, ignoring surrounding prose

    Raises:
        ServiceDecodeError: no JSON object or invalid JSON
    """
    match = JSON_OBJECT_PATTERN.search(content or "")
    if not match:
        raise ServiceDecodeError("Could not extract JSON from response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ServiceDecodeError(f"Invalid JSON in response: {e}") from e

    if not isinstance(data, dict):
        raise ServiceDecodeError("JSON in response is not an object")
    return data


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    # json.loads accepts NaN, Infinity and 1e400
    if not math.isfinite(number):
        return None
    return number


def parse_goal_payload(data: Dict[str, Any]) -> Dict[str, float]:
    """
    Read the four daily targets

    Raises:
        MissingFieldError: a field is absent or not a number
    """
    result = {}
    for key in GOAL_FIELDS:
        value = _as_number(data.get(key))
        if value is None:
            raise MissingFieldError(f"Missing required field in JSON response: {key}")
        result[key] = value
    return result


def parse_nutrition_payload(data: Dict[str, Any]) -> NutritionData:
    """Read the twelve nutrient fields; any missing field becomes 0.0"""
    groups: Dict[str, Dict[str, float]] = {"macros": {}, "micros": {}}
    for key, (group, attribute) in NUTRITION_FIELDS.items():
        value = _as_number(data.get(key))
        groups[group][attribute] = value if value is not None else 0.0

    return NutritionData(
        macros=MacroNutrients(**groups["macros"]),
        micros=MicroNutrients(**groups["micros"])
    )


class OpenAIService:
    """Service for OpenAI chat completions"""

    def __init__(self, api_key: Optional[str], client: Optional[AsyncOpenAI] = None):
        """Client is created only for a usable key"""
        self.api_key = api_key
        self.client = client
        if self.client is None and is_configured_key(api_key):
            self.client = AsyncOpenAI(api_key=api_key)
            logger.info("OpenAI client initialized")
        elif self.client is None:
            logger.warning("OpenAI API key is not set, AI features will use fallbacks")

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Send one chat completion request and return the reply text

        Raises:
            ServiceNotConfiguredError: no API key
            ServiceTransportError: the request failed
            ServiceDecodeError: the reply has no message content
        """
        if not self.is_configured:
            raise ServiceNotConfiguredError("OpenAI API key is not configured")

        params: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        try:
            response = await self.client.chat.completions.create(**params)
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise ServiceTransportError(str(e)) from e

        if not response.choices or response.choices[0].message.content is None:
            raise ServiceDecodeError("Invalid response format")
        return response.choices[0].message.content

    @staticmethod
    def build_goal_prompt(
        height: float,
        weight: float,
        age: int,
        gender: Gender,
        target_weight: float,
        timeframe: int,
        body_fat: Optional[float] = None
    ) -> str:
        body_fat_line = f"- Body Fat Percentage: {body_fat}%\n" if body_fat is not None else ""

        return f"""Calculate daily nutrition goals for a person with the following characteristics:
- Height: {height} cm
- Current Weight: {weight} kg
- Age: {age} years
- Gender: {Gender(gender).value}
- Target Weight: {target_weight} kg
- Timeframe: {timeframe} weeks
{body_fat_line}
Please provide the following in JSON format:
- Daily calorie intake
- Daily protein in grams
- Daily carbohydrates in grams
- Daily fat in grams

Response format:
{{
  "dailyCalories": 2000,
  "dailyProtein": 150,
  "dailyCarbs": 200,
  "dailyFat": 60
}}"""

    async def calculate_goals(
        self,
        height: float,
        weight: float,
        age: int,
        gender: Gender,
        target_weight: float,
        timeframe: int,
        body_fat: Optional[float] = None
    ) -> Dict[str, float]:
        """
        Daily targets calculated by the model

        Returns:
            dailyCalories, dailyProtein, dailyCarbs and dailyFat
        """
        prompt = self.build_goal_prompt(height, weight, age, gender, target_weight, timeframe, body_fat)

        content = await self.complete(
            messages=[
                {"role": "system", "content": "You are a nutrition and fitness expert assistant. Provide nutrition goal calculations in JSON format only."},
                {"role": "user", "content": prompt}
            ],
            model=OPENAI_GOAL_MODEL,
            temperature=0.7
        )

        result = parse_goal_payload(extract_json_object(content))
        logger.info(f"Goals calculated by AI: {result['dailyCalories']:.0f} kcal")
        return result

    @staticmethod
    def build_nutrition_prompt(food: str, weight: float, unit: str) -> str:
        return f"""I need nutritional information for {weight} {unit} of {food}.
Please provide the following nutritional values in a JSON format:
- protein (g)
- fat (g)
- carbs (g)
- calories (kcal)
- totalSugars (g)
- fiber (g)
- calcium (mg)
- iron (mg)
- sodium (mg)
- vitaminA (IU)
- vitaminC (mg)
- cholesterol (mg)

Format your response as valid JSON only, with no additional text:
{{
  "protein": 0.0,
  "fat": 0.0,
  "carbs": 0.0,
  "calories": 0.0,
  "totalSugars": 0.0,
  "fiber": 0.0,
  "calcium": 0.0,
  "iron": 0.0,
  "sodium": 0.0,
  "vitaminA": 0.0,
  "vitaminC": 0.0,
  "cholesterol": 0.0
}}"""

    async def get_nutrition_data(self, food: str, weight: float, unit: str) -> NutritionData:
        """Nutrient estimate for an amount of food"""
        content = await self.complete(
            messages=[
                {"role": "system", "content": "You are a nutrition database assistant. Provide accurate nutritional information in JSON format only."},
                {"role": "user", "content": self.build_nutrition_prompt(food, weight, unit)}
            ],
            model=OPENAI_NUTRITION_MODEL,
            temperature=0.2
        )

        return parse_nutrition_payload(extract_json_object(content))

    async def get_chat_response(self, message: str, history: Optional[List[Dict[str, str]]] = None) -> str:
        """Free-text reply from the assistant"""
        messages = [
            {"role": "system", "content": "You are a personal nutrition and fitness assistant. You help people reach their nutrition goals."}
        ]

        if history:
            messages.extend(history)

        messages.append({"role": "user", "content": message})

        return await self.complete(
            messages=messages,
            model=OPENAI_CHAT_MODEL,
            temperature=0.8,
            max_tokens=1000
        )
