# tests/test_assistant.py
import asyncio
from datetime import datetime, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from bigback.database.food_log import FoodLog
from bigback.database.models import FoodLogEntry, Gender, UserGoal, UserProfile
from bigback.services.assistant import (
    CONTEXT_SEPARATOR,
    FAILURE_MESSAGE,
    ChatAssistant,
    build_context,
    weight_goal_type,
)
from bigback.services.nutrition_service import FALLBACK_NUTRITION, NutritionLookup
from bigback.services.openai_service import OpenAIService, ServiceNotConfiguredError, ServiceTransportError

NOW = datetime(2024, 5, 2, 18, 30)
PROFILE = UserProfile(username="alex", email="alex@example.com", gender=Gender.MALE, age=25)


def _goal(weight=90.0, target_weight=85.0):
    return UserGoal(
        height=180,
        weight=weight,
        age=25,
        gender=Gender.MALE,
        target_weight=target_weight,
        timeframe=10,
        daily_calories=2000,
        daily_protein=150.0,
        daily_carbs=200.0,
        daily_fat=60.0,
    )


def _entry(name, timestamp):
    return FoodLogEntry(
        food_name=name,
        timestamp=timestamp,
        weight=100.0,
        unit="g",
        macros=FALLBACK_NUTRITION.macros,
        micros=FALLBACK_NUTRITION.micros,
    )


def _assistant(get_chat_response, entries=(), goal=None):
    service = MagicMock()
    service.get_chat_response = get_chat_response
    log = FoodLog()
    for entry in entries:
        log.add(entry)
    return ChatAssistant(service, log, profile=PROFILE, goal=goal)


# ── context ─────────────────────────────────────────────────────────
def test_context_counts_today_only():
    entries = [_entry("LUNCH", NOW.replace(hour=12)), _entry("LATE SNACK", NOW - timedelta(days=1))]

    context = build_context(PROFILE, _goal(), entries, now=NOW)

    assert "- LUNCH: 100.0 g (165 kcal, 20g protein)" in context
    assert "LATE SNACK" not in context
    assert "Today's totals: 165 kcal, 20.4g protein" in context
    assert "- Calories: 8% of daily goal" in context
    assert "- Protein: 13% of daily goal" in context


def test_context_identity():
    context = build_context(PROFILE, None, [], now=NOW)

    assert "User's name: alex" in context
    assert "User's age: 25" in context
    assert "User's gender: Male" in context
    assert "No food logged today yet." in context
    assert "No nutrition goals set yet." in context


def test_context_without_profile():
    context = build_context(None, None, [], now=NOW)
    assert "User's name: user" in context
    assert "User's gender: Unknown" in context


def test_goal_types():
    assert weight_goal_type(_goal(90, 85)) == "lose weight (cutting)"
    assert weight_goal_type(_goal(70, 75)) == "gain weight (bulking)"
    assert weight_goal_type(_goal(70, 70.4)) == "maintain weight"
    assert weight_goal_type(_goal(70, 69.6)) == "maintain weight"


def test_context_weight_goal_line():
    assert "- Weight goal: Lose 5.0 kg in 10 weeks" in build_context(PROFILE, _goal(90, 85), [], now=NOW)
    assert "- Weight goal: Gain 3.0 kg in 10 weeks" in build_context(PROFILE, _goal(70, 73), [], now=NOW)
    assert "Weight goal:" not in build_context(PROFILE, _goal(70, 70), [], now=NOW)


# ── conversation ────────────────────────────────────────────────────
def test_welcome_message_uses_name():
    assistant = _assistant(AsyncMock())
    assert assistant.messages[0].content.startswith("Hey alex 👋!")
    assert not assistant.messages[0].is_from_user


def test_reply_is_appended():
    get_chat_response = AsyncMock(return_value="Have some Greek yogurt.")
    assistant = _assistant(get_chat_response, entries=[_entry("EGGS", NOW)], goal=_goal())

    reply = asyncio.run(assistant.send_message("What should I eat?", now=NOW))

    assert reply.content == "Have some Greek yogurt."
    assert [m.is_from_user for m in assistant.messages] == [False, True, False]

    query, history = get_chat_response.call_args.args
    question, context = query.split(CONTEXT_SEPARATOR)
    assert question == "What should I eat?"
    assert "- EGGS: 100.0 g" in context
    # welcome message is not sent as history
    assert history == []


def test_history_is_sent_on_follow_up():
    get_chat_response = AsyncMock(side_effect=["First answer", "Second answer"])
    assistant = _assistant(get_chat_response)

    asyncio.run(assistant.send_message("first", now=NOW))
    asyncio.run(assistant.send_message("second", now=NOW))

    _, history = get_chat_response.call_args.args
    assert history == [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "First answer"},
    ]


def test_failure_message_on_error():
    for error in (ServiceTransportError("timeout"), ServiceNotConfiguredError("no key")):
        assistant = _assistant(AsyncMock(side_effect=error))

        reply = asyncio.run(assistant.send_message("hello", now=NOW))

        assert reply.content == FAILURE_MESSAGE
        assert assistant.messages[-1] is reply


def test_blank_input_ignored():
    get_chat_response = AsyncMock()
    assistant = _assistant(get_chat_response)

    assert asyncio.run(assistant.send_message("   ")) is None
    assert len(assistant.messages) == 1
    get_chat_response.assert_not_called()


def test_welcome_follows_profile_after_signup():
    assistant = ChatAssistant(MagicMock(), FoodLog())
    assert assistant.messages[0].content.startswith("Hey there 👋!")

    assistant.profile = PROFILE

    assert assistant.messages[0].content.startswith("Hey alex 👋!")
    assert len(assistant.messages) == 1


def test_failure_reply_not_sent_as_history():
    get_chat_response = AsyncMock(side_effect=[ServiceTransportError("timeout"), "Try oats.", "Sure."])
    assistant = _assistant(get_chat_response)

    failed = asyncio.run(assistant.send_message("first", now=NOW))
    asyncio.run(assistant.send_message("second", now=NOW))
    asyncio.run(assistant.send_message("third", now=NOW))

    assert failed.is_fallback
    _, history = get_chat_response.call_args.args
    assert {"role": "assistant", "content": FAILURE_MESSAGE} not in history
    assert history == [
        {"role": "user", "content": "first"},
        {"role": "user", "content": "second"},
        {"role": "assistant", "content": "Try oats."},
    ]


def test_chat_works_after_nan_nutrition_reply():
    content = '{"protein": 20, "calories": NaN}'
    reply = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        side_effect=[reply, SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="Nice."))])]
    )
    service = OpenAIService("sk-test", client=client)
    log = FoodLog()

    entry = asyncio.run(NutritionLookup(service, log).add_food_entry("soup", 300, "ml"))
    assert entry.macros.calories == 0.0

    assistant = ChatAssistant(service, log, profile=PROFILE)
    answer = asyncio.run(assistant.send_message("How am I doing?"))

    assert answer.content == "Nice."
    assert not answer.is_fallback
