"""
Nutrition lookup: nutrient estimates for logged foods
"""
from datetime import datetime
from typing import Optional
import logging

from bigback.database.food_log import FoodLog
from bigback.database.models import FoodLogEntry, MacroNutrients, MicroNutrients, NutritionData
from bigback.services.fallback import fetch_with_fallback
from bigback.services.openai_service import OpenAIService

logger = logging.getLogger(__name__)

SCANNED_FOOD_NAME = "Scanned Food"
SCANNED_FOOD_WEIGHT = 100.0
SCANNED_FOOD_UNIT = "g"

# 100 g chicken breast; returned as-is whatever food or amount was asked for
FALLBACK_NUTRITION = NutritionData(
    macros=MacroNutrients(protein=20.4, fat=12.7, carbs=1.1, calories=165.0),
    micros=MicroNutrients(
        total_sugars=0.7,
        fiber=0.0,
        calcium=158.0,
        iron=0.4,
        sodium=433.0,
        vitamin_a=352.0,
        vitamin_c=1.7,
        cholesterol=67.0
    )
)


class NutritionLookup:
    """Looks up foods and records them in the food log"""

    def __init__(self, openai_service: OpenAIService, food_log: FoodLog):
        self.openai_service = openai_service
        self.food_log = food_log
        self.error_message: Optional[str] = None

    async def lookup(self, food_name: str, weight: float, unit: str) -> NutritionData:
        """Nutrients from the service, or the fixed fallback record"""
        result = await fetch_with_fallback(
            self.openai_service.get_nutrition_data(food_name, weight, unit),
            lambda: FALLBACK_NUTRITION,
            description=f"Nutrition lookup for {food_name!r}"
        )

        # an unconfigured key is expected in development, not an error for the user
        if result.used_fallback and self.openai_service.is_configured:
            self.error_message = f"Error: {result.error}"
        return result.value

    async def add_food_entry(self, food_name: str, weight: float, unit: str) -> FoodLogEntry:
        """
        Look up a food and put it at the head of the log

        Raises:
            ValueError: weight is not positive
        """
        if weight <= 0:
            raise ValueError("Weight must be greater than 0")

        self.error_message = None
        nutrition = await self.lookup(food_name, weight, unit)

        entry = FoodLogEntry(
            food_name=food_name.strip().upper(),
            timestamp=datetime.now(),
            weight=weight,
            unit=unit,
            macros=nutrition.macros,
            micros=nutrition.micros
        )
        self.food_log.add(entry)

        logger.info(f"Logged {entry.food_name} ({weight}{unit}): {entry.macros.calories:.0f} kcal")
        return entry

    async def scan_food(self) -> FoodLogEntry:
        """Camera placeholder: logs a generic 100 g item"""
        return await self.add_food_entry(SCANNED_FOOD_NAME, SCANNED_FOOD_WEIGHT, SCANNED_FOOD_UNIT)

    def remove_entry(self, entry_id: str) -> bool:
        removed = self.food_log.remove(entry_id)
        if removed:
            logger.info(f"Removed food log entry {entry_id}")
        return removed
