# tests/test_openai_service.py
import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from bigback.config import OPENAI_GOAL_MODEL
from bigback.database.models import Gender
from bigback.services.openai_service import (
    MissingFieldError,
    OpenAIService,
    ServiceDecodeError,
    ServiceNotConfiguredError,
    ServiceTransportError,
    extract_json_object,
    is_configured_key,
    parse_goal_payload,
    parse_nutrition_payload,
)


def _reply(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _service(create):
    client = MagicMock()
    client.chat.completions.create = create
    return OpenAIService("sk-test", client=client)


# ── JSON handling ───────────────────────────────────────────────────
def test_extract_json_ignores_surrounding_prose():
    content = 'Sure! Here you go:\n{"dailyCalories": 2100, "dailyProtein": 140}\nEnjoy.'
    assert extract_json_object(content) == {"dailyCalories": 2100, "dailyProtein": 140}


def test_extract_json_takes_first_object():
    assert extract_json_object('{"a": 1} and {"b": 2}') == {"a": 1}


@pytest.mark.parametrize("content", ["no json here", "{broken: yes}", ""])
def test_extract_json_failures(content):
    with pytest.raises(ServiceDecodeError):
        extract_json_object(content)


def test_goal_payload_requires_every_field():
    with pytest.raises(MissingFieldError, match="dailyFat"):
        parse_goal_payload({"dailyCalories": 2000, "dailyProtein": 150, "dailyCarbs": 200})


def test_goal_payload_rejects_non_numbers():
    with pytest.raises(MissingFieldError):
        parse_goal_payload({"dailyCalories": "2000", "dailyProtein": 150, "dailyCarbs": 200, "dailyFat": 60})


def test_nutrition_payload_is_lenient():
    data = parse_nutrition_payload({"protein": 31, "calories": 165.5, "vitaminC": None})

    assert data.macros.protein == 31.0
    assert data.macros.calories == 165.5
    assert data.macros.fat == 0.0
    assert data.micros.vitamin_c == 0.0
    assert data.micros.cholesterol == 0.0


def test_placeholder_key_is_not_configured():
    assert not is_configured_key(None)
    assert not is_configured_key("")
    assert not is_configured_key("YOUR_OPENAI_API_KEY_HERE")
    assert is_configured_key("sk-live")
    assert not OpenAIService("YOUR_OPENAI_API_KEY_HERE").is_configured


# ── requests ────────────────────────────────────────────────────────
def test_unconfigured_service_raises():
    service = OpenAIService(None)
    with pytest.raises(ServiceNotConfiguredError):
        asyncio.run(service.get_chat_response("hi"))


def test_transport_error_is_wrapped():
    service = _service(AsyncMock(side_effect=OpenAIError("connection reset")))
    with pytest.raises(ServiceTransportError):
        asyncio.run(service.get_chat_response("hi"))


def test_empty_choices_is_decode_error():
    service = _service(AsyncMock(return_value=SimpleNamespace(choices=[])))
    with pytest.raises(ServiceDecodeError):
        asyncio.run(service.get_chat_response("hi"))


def test_calculate_goals_parses_reply():
    create = AsyncMock(return_value=_reply(
        'Based on your data:\n{"dailyCalories": 2300, "dailyProtein": 170, "dailyCarbs": 230, "dailyFat": 75}'
    ))
    service = _service(create)

    result = asyncio.run(service.calculate_goals(180, 90, 25, Gender.MALE, 85, 10, body_fat=20))

    assert result == {"dailyCalories": 2300.0, "dailyProtein": 170.0, "dailyCarbs": 230.0, "dailyFat": 75.0}
    kwargs = create.call_args.kwargs
    assert kwargs["model"] == OPENAI_GOAL_MODEL
    assert kwargs["temperature"] == 0.7
    assert "Body Fat Percentage: 20%" in kwargs["messages"][1]["content"]


def test_goal_prompt_without_body_fat():
    prompt = OpenAIService.build_goal_prompt(180, 90, 25, Gender.FEMALE, 85, 10)
    assert "Body Fat" not in prompt
    assert "Gender: Female" in prompt


def test_get_nutrition_data_uses_low_temperature():
    create = AsyncMock(return_value=_reply('{"protein": 1.3, "fat": 0.4, "carbs": 27, "calories": 105}'))
    service = _service(create)

    data = asyncio.run(service.get_nutrition_data("banana", 120, "g"))

    assert data.macros.carbs == 27.0
    assert data.micros.fiber == 0.0
    assert create.call_args.kwargs["temperature"] == 0.2
    assert "120 g of banana" in create.call_args.kwargs["messages"][1]["content"]


def test_chat_response_sends_history():
    create = AsyncMock(return_value=_reply("Eat more protein."))
    service = _service(create)
    history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]

    reply = asyncio.run(service.get_chat_response("what now?", history))

    assert reply == "Eat more protein."
    messages = create.call_args.kwargs["messages"]
    assert messages[0]["role"] == "system"
    assert messages[1:3] == history
    assert messages[-1] == {"role": "user", "content": "what now?"}
    assert create.call_args.kwargs["max_tokens"] == 1000


# ── non-finite numbers ──────────────────────────────────────────────
@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e400"])
def test_goal_payload_rejects_non_finite(literal):
    data = extract_json_object(
        f'{{"dailyCalories": {literal}, "dailyProtein": 150, "dailyCarbs": 200, "dailyFat": 60}}'
    )
    with pytest.raises(MissingFieldError, match="dailyCalories"):
        parse_goal_payload(data)


def test_goal_payload_rejects_huge_integer():
    with pytest.raises(MissingFieldError):
        parse_goal_payload({"dailyCalories": 10 ** 400, "dailyProtein": 150, "dailyCarbs": 200, "dailyFat": 60})


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "1e400"])
def test_nutrition_payload_zeroes_non_finite(literal):
    data = parse_nutrition_payload(extract_json_object(f'{{"calories": {literal}, "protein": 12}}'))

    assert data.macros.calories == 0.0
    assert data.macros.protein == 12.0
