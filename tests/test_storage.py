# tests/test_storage.py
import json
from datetime import date, datetime, timedelta

import pytest

from bigback.database.food_log import FoodLog
from bigback.database.models import FoodLogEntry, Gender, UserGoal, UserProfile
from bigback.database.preferences import PreferenceStore, USER_GOAL_KEY
from bigback.services.nutrition_service import FALLBACK_NUTRITION


def _goal():
    return UserGoal(
        username="alex",
        height=180,
        weight=90,
        age=25,
        gender=Gender.MALE,
        target_weight=85,
        timeframe=10,
        body_fat=18.5,
        daily_calories=2402,
        daily_protein=162.0,
        daily_carbs=240.275,
        daily_fat=80.09,
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


# ── preference store ────────────────────────────────────────────────
def test_goal_survives_reload(tmp_path):
    path = tmp_path / "prefs.json"
    PreferenceStore(str(path)).save_user_goal(_goal())

    assert PreferenceStore(str(path)).load_user_goal() == _goal()


def test_goal_record_uses_camel_case_keys(tmp_path):
    path = tmp_path / "prefs.json"
    PreferenceStore(str(path)).save_user_goal(_goal())

    record = json.loads(path.read_text())[USER_GOAL_KEY]
    assert record["dailyCalories"] == 2402
    assert record["targetWeight"] == 85
    assert record["bodyFat"] == 18.5


def test_missing_file_means_no_goal(tmp_path):
    store = PreferenceStore(str(tmp_path / "nothing.json"))
    assert store.load_user_goal() is None
    assert store.load_profile() is None


def test_broken_file_is_ignored(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")

    assert PreferenceStore(str(path)).load_user_goal() is None


def test_broken_goal_record_is_ignored(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({USER_GOAL_KEY: {"height": 180}}))

    assert PreferenceStore(str(path)).load_user_goal() is None


def test_profile_round_trip(tmp_path):
    path = str(tmp_path / "nested" / "prefs.json")
    profile = UserProfile(username="alex", email="alex@example.com", gender=Gender.FEMALE, age=31)
    PreferenceStore(path).save_profile(profile)

    assert PreferenceStore(path).load_profile() == profile


def test_unknown_gender_falls_back_to_other(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"username": "alex", "userGender": "Robot"}))

    assert PreferenceStore(str(path)).load_profile().gender == Gender.OTHER


def test_remove_key(tmp_path):
    store = PreferenceStore(str(tmp_path / "prefs.json"))
    store.set("username", "alex")
    store.remove("username")
    assert store.get("username") is None


# ── food log ────────────────────────────────────────────────────────
def test_newest_entry_first():
    log = FoodLog()
    now = datetime.now()
    for name in ("A", "B", "C"):
        log.add(_entry(name, now))

    assert [entry.food_name for entry in log.entries] == ["C", "B", "A"]
    assert len(log) == 3


def test_remove_and_get():
    log = FoodLog()
    entry = _entry("EGG", datetime.now())
    log.add(entry)

    assert log.get(entry.id) is entry
    assert log.remove(entry.id) is True
    assert log.remove(entry.id) is False
    assert log.get(entry.id) is None


def test_summary_counts_only_that_day():
    log = FoodLog()
    today = datetime(2024, 5, 2, 12, 0)
    log.add(_entry("YESTERDAY", today - timedelta(days=1)))
    log.add(_entry("LUNCH", today))
    log.add(_entry("DINNER", today.replace(hour=19)))

    summary = log.summary_for_date(date(2024, 5, 2))
    assert summary["count"] == 2
    assert summary["calories"] == 330.0
    assert summary["protein"] == pytest.approx(40.8)


def test_entries_list_is_a_copy():
    log = FoodLog()
    log.entries.append(_entry("GHOST", datetime.now()))
    assert len(log) == 0
