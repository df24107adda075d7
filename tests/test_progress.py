# tests/test_progress.py
import pytest

from bigback.utils.progress import (
    CALORIE_FEEDBACK_OVER,
    MOTIVATION_DONE,
    PROTEIN_FEEDBACK_OVER,
    ProgressReport,
)


def test_ratio_without_target():
    assert ProgressReport.ratio(500, 0) == 0.0
    assert ProgressReport.percent_of_goal(500, 0) == 0


def test_progress_is_capped_but_percent_is_not():
    assert ProgressReport.goal_progress(3000, 2000) == 1.0
    assert ProgressReport.percent_of_goal(3000, 2000) == 150


@pytest.mark.parametrize("value, band", [
    (0.0, "low"),
    (0.29, "low"),
    (0.3, "mid"),
    (0.69, "mid"),
    (0.7, "high"),
    (1.0, "high"),
])
def test_bands(value, band):
    assert ProgressReport.progress_band(value) == band


def test_progress_bar():
    assert ProgressReport.progress_bar(0.0) == "░" * 10
    assert ProgressReport.progress_bar(0.5) == "▓" * 5 + "░" * 5
    assert ProgressReport.progress_bar(2.0) == "▓" * 10


def test_messages_cover_over_target():
    assert ProgressReport.motivational_message(1.0) == MOTIVATION_DONE
    assert ProgressReport.calories_feedback(1.5) == CALORIE_FEEDBACK_OVER
    assert ProgressReport.protein_feedback(1.5) == PROTEIN_FEEDBACK_OVER
    assert ProgressReport.calories_feedback(0.0) != ProgressReport.calories_feedback(0.95)
