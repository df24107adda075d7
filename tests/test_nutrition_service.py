# tests/test_nutrition_service.py
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from bigback.database.food_log import FoodLog
from bigback.database.models import MacroNutrients, MicroNutrients, NutritionData
from bigback.services.nutrition_service import FALLBACK_NUTRITION, NutritionLookup
from bigback.services.openai_service import OpenAIService, ServiceDecodeError, ServiceTransportError

BANANA = NutritionData(
    macros=MacroNutrients(protein=1.3, fat=0.4, carbs=27.0, calories=105.0),
    micros=MicroNutrients(
        total_sugars=14.4,
        fiber=3.1,
        calcium=6.0,
        iron=0.3,
        sodium=1.0,
        vitamin_a=76.0,
        vitamin_c=10.3,
        cholesterol=0.0,
    ),
)


def _lookup(get_nutrition_data, configured=True):
    service = MagicMock()
    service.get_nutrition_data = get_nutrition_data
    service.is_configured = configured
    return NutritionLookup(service, FoodLog())


def test_service_values_are_logged():
    lookup = _lookup(AsyncMock(return_value=BANANA))

    entry = asyncio.run(lookup.add_food_entry("  banana ", 120, "g"))

    assert entry.food_name == "BANANA"
    assert entry.macros == BANANA.macros
    assert entry.micros == BANANA.micros
    assert lookup.error_message is None
    lookup.openai_service.get_nutrition_data.assert_awaited_once_with("  banana ", 120, "g")


@pytest.mark.parametrize("food, weight, unit", [
    ("banana", 120, "g"),
    ("rice", 2, "cup"),
    ("olive oil", 1, "tbsp"),
])
def test_unreachable_service_returns_fixed_record(food, weight, unit):
    lookup = _lookup(AsyncMock(side_effect=ServiceTransportError("offline")))

    data = asyncio.run(lookup.lookup(food, weight, unit))

    assert data == FALLBACK_NUTRITION
    assert data.macros.calories == 165.0
    assert lookup.error_message == "Error: offline"


def test_non_json_reply_returns_fixed_record():
    lookup = _lookup(AsyncMock(side_effect=ServiceDecodeError("Could not extract JSON from response")))
    assert asyncio.run(lookup.lookup("soup", 300, "ml")) == FALLBACK_NUTRITION


def test_missing_key_is_silent():
    lookup = NutritionLookup(OpenAIService("YOUR_OPENAI_API_KEY_HERE"), FoodLog())

    entry = asyncio.run(lookup.add_food_entry("steak", 200, "g"))

    assert entry.macros == FALLBACK_NUTRITION.macros
    assert lookup.error_message is None


def test_entries_are_prepended():
    lookup = _lookup(AsyncMock(return_value=BANANA))

    for name in ("oats", "milk", "banana"):
        asyncio.run(lookup.add_food_entry(name, 100, "g"))

    assert [entry.food_name for entry in lookup.food_log.entries] == ["BANANA", "MILK", "OATS"]


def test_scan_food_logs_generic_item():
    lookup = _lookup(AsyncMock(side_effect=ServiceTransportError("offline")))

    entry = asyncio.run(lookup.scan_food())

    assert entry.food_name == "SCANNED FOOD"
    assert (entry.weight, entry.unit) == (100.0, "g")
    assert lookup.food_log.entries[0] is entry


def test_non_positive_weight_rejected():
    get_nutrition_data = AsyncMock()
    lookup = _lookup(get_nutrition_data)

    with pytest.raises(ValueError):
        asyncio.run(lookup.add_food_entry("banana", 0, "g"))
    get_nutrition_data.assert_not_called()
    assert len(lookup.food_log) == 0


def test_remove_entry():
    lookup = _lookup(AsyncMock(return_value=BANANA))
    entry = asyncio.run(lookup.add_food_entry("banana", 100, "g"))

    assert lookup.remove_entry(entry.id)
    assert not lookup.remove_entry(entry.id)
