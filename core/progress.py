"""
core/progress.py
----------------
Goal progress figures shown above the meetings and deals panels.

A meeting counts toward the meeting goal when it is Completed or Scheduled.
MMR is the sum of deal values. A zero or missing goal gives 0% rather than
a division error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from database.models import Deal, Goals, Meeting, Outcome

COUNTED_OUTCOMES = frozenset({Outcome.COMPLETED, Outcome.SCHEDULED})


def count_toward_goal(meetings: Iterable[Meeting]) -> int:
    return sum(1 for m in meetings if m.outcome in COUNTED_OUTCOMES)


def total_mmr(deals: Iterable[Deal]) -> float:
    return sum((d.value for d in deals), 0.0)


def progress_percent(actual: float, goal: Optional[float]) -> float:
    """Return actual/goal as a percentage; 0 when there is no goal."""
    if not goal:
        return 0.0
    return actual / goal * 100


def bar_fraction(percent: float) -> float:
    """Clamp a percentage to the 0..1 range a progress bar accepts."""
    return min(max(percent, 0.0), 100.0) / 100


@dataclass(frozen=True)
class ProgressSummary:
    meetings_counted: int
    meeting_goal: int
    meeting_percent: float
    mmr_total: float
    mmr_goal: float
    mmr_percent: float

    @property
    def meeting_label(self) -> str:
        return f"{self.meetings_counted} / {self.meeting_goal} Meetings"

    @property
    def mmr_label(self) -> str:
        return f"${self.mmr_total:,.0f} / ${self.mmr_goal:,.0f}"


def summarize(
    meetings: Iterable[Meeting],
    deals: Iterable[Deal],
    goals: Optional[Goals],
) -> ProgressSummary:
    """Build both progress figures; unset goals count as zero targets."""
    counted = count_toward_goal(meetings)
    mmr = total_mmr(deals)
    meeting_goal = goals.meeting_goal if goals else 0
    mmr_goal = goals.mmr_goal if goals else 0.0
    return ProgressSummary(
        meetings_counted=counted,
        meeting_goal=meeting_goal,
        meeting_percent=progress_percent(counted, meeting_goal),
        mmr_total=mmr,
        mmr_goal=mmr_goal,
        mmr_percent=progress_percent(mmr, mmr_goal),
    )
