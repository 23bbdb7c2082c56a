"""
Goal setter and the two progress bars.
"""

from __future__ import annotations

import streamlit as st

from core.progress import ProgressSummary, bar_fraction
from core.workspace import Workspace


def render_goal_setter(ws: Workspace) -> None:
    """Set or change the quarter's targets (both at once)."""
    current = ws.goals.goals
    title = "🎯 Edit Goals" if current else "🎯 Set Your Quarterly Goals"
    with st.expander(title, expanded=current is None):
        with st.form("goal_setter"):
            meeting_goal = st.number_input(
                "Meeting Goal", min_value=1, step=1, value=current.meeting_goal if current else 1
            )
            mmr_goal = st.number_input(
                "MMR Goal ($)", min_value=1.0, step=100.0, value=float(current.mmr_goal) if current else 1.0
            )
            if st.form_submit_button("Set Goals"):
                if ws.goals.save(meeting_goal, mmr_goal) is not None:
                    st.rerun()


def render_progress(label: str, fraction_label: str, percent: float) -> None:
    left, right = st.columns([3, 1])
    left.caption(fraction_label)
    right.caption(f"{round(percent)}%")
    st.progress(bar_fraction(percent), text=label)


def render_meeting_progress(summary: ProgressSummary) -> None:
    render_progress("Meetings Goal", summary.meeting_label, summary.meeting_percent)


def render_mmr_progress(summary: ProgressSummary) -> None:
    render_progress("MMR Goal", summary.mmr_label, summary.mmr_percent)
