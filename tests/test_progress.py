# tests/test_progress.py
import pytest

from core.progress import (
    bar_fraction,
    count_toward_goal,
    progress_percent,
    summarize,
    total_mmr,
)
from database.models import Deal, Goals, Meeting


def meeting(i, outcome):
    return Meeting(id=str(i), contact_name="c", company_name="co", meeting_date="2024-01-01", outcome=outcome)


def test_completed_and_scheduled_count():
    ms = [meeting(1, "Scheduled"), meeting(2, "Completed"), meeting(3, "No show"),
          meeting(4, "Rescheduled"), meeting(5, "Unqualified")]
    assert count_toward_goal(ms) == 2


def test_total_mmr_sums_values():
    assert total_mmr([Deal(id="1", name="a", value=100), Deal(id="2", name="b", value=250.5)]) == 350.5
    assert total_mmr([]) == 0


@pytest.mark.parametrize("goal", [0, None])
def test_zero_goal_is_zero_percent(goal):
    assert progress_percent(3, goal) == 0


def test_percent_can_exceed_hundred_but_bar_is_clamped():
    assert progress_percent(15, 10) == 150
    assert bar_fraction(150) == 1.0
    assert bar_fraction(-5) == 0.0
    assert bar_fraction(50) == 0.5


def test_summary_for_four_meeting_goal():
    ms = [meeting(1, "Scheduled"), meeting(2, "Completed"), meeting(3, "No show")]
    summary = summarize(ms, [], Goals(meeting_goal=4, mmr_goal=1000))
    assert summary.meetings_counted == 2
    assert summary.meeting_percent == 50
    assert summary.meeting_label == "2 / 4 Meetings"


def test_summary_without_goals():
    summary = summarize([meeting(1, "Completed")], [Deal(id="1", name="a", value=1200)], None)
    assert summary.meeting_percent == 0
    assert summary.mmr_percent == 0
    assert summary.mmr_label == "$1,200 / $0"
