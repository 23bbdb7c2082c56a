"""
Meetings panel: add form and the meetings table with per-row outcome edit
and two-step delete.
"""

from __future__ import annotations

import streamlit as st

from core.workspace import Workspace
from database.models import Meeting, OUTCOME_CHOICES, Outcome
from ui.state import flag_key

OUTCOME_COLORS = {
    Outcome.COMPLETED: "green",
    Outcome.SCHEDULED: "blue",
    Outcome.NO_SHOW: "red",
    Outcome.RESCHEDULED: "orange",
}


def outcome_badge(outcome: Outcome) -> str:
    color = OUTCOME_COLORS.get(outcome, "gray")
    return f":{color}[{outcome.value}]"


def render_add_meeting(ws: Workspace) -> None:
    with st.form("add_meeting", clear_on_submit=True):
        c1, c2 = st.columns(2)
        contact = c1.text_input("Contact Name", placeholder="Contact Name")
        company = c2.text_input("Company Name", placeholder="Company Name")
        c3, c4 = st.columns(2)
        meeting_date = c3.date_input("Meeting Date", value=None)
        outcome = c4.selectbox("Outcome", OUTCOME_CHOICES, index=0)
        if st.form_submit_button("📅 Add Meeting", use_container_width=True):
            ws.meetings.create(contact, company, meeting_date, outcome)


def _save_outcome(ws: Workspace, meeting_id: str) -> None:
    outcome = st.session_state[flag_key("outcome", meeting_id)]
    ws.meetings.update(meeting_id, outcome=outcome)
    st.session_state[flag_key("editing", meeting_id)] = False


def _set_editing(meeting_id: str, editing: bool) -> None:
    st.session_state[flag_key("editing", meeting_id)] = editing


def render_meeting_row(ws: Workspace, meeting: Meeting) -> None:
    name_col, company_col, date_col, status_col, actions_col = st.columns([3, 3, 2, 3, 2])
    name_col.write(meeting.contact_name)
    company_col.caption(meeting.company_name)
    date_col.caption(meeting.meeting_date)

    if st.session_state.get(flag_key("editing", meeting.id)):
        status_col.selectbox(
            "Outcome",
            OUTCOME_CHOICES,
            index=OUTCOME_CHOICES.index(meeting.outcome.value),
            key=flag_key("outcome", meeting.id),
            label_visibility="collapsed",
        )
        save_col, cancel_col = actions_col.columns(2)
        save_col.button("✔", key=flag_key("save", meeting.id), on_click=_save_outcome, args=(ws, meeting.id))
        cancel_col.button("✖", key=flag_key("cancel", meeting.id), on_click=_set_editing, args=(meeting.id, False))
        return

    status_col.markdown(outcome_badge(meeting.outcome))
    edit_col, delete_col = actions_col.columns(2)
    edit_col.button("✏️", key=flag_key("edit", meeting.id), on_click=_set_editing, args=(meeting.id, True))
    pending = ws.meeting_deletes.is_pending(meeting.id)
    delete_col.button(
        "⚠️" if pending else "🗑",
        key=flag_key("delete_meeting", meeting.id),
        help="Click again to confirm deletion" if pending else "Delete meeting",
        type="primary" if pending else "secondary",
        on_click=ws.request_meeting_delete,
        args=(meeting.id,),
    )


def render_meetings_table(ws: Workspace) -> None:
    if ws.meetings.loading:
        st.caption("Loading...")
        return
    header = st.columns([3, 3, 2, 3, 2])
    for col, title in zip(header, ["Contact Name", "Company", "Date", "Status", ""]):
        col.caption(f"**{title}**")
    for meeting in ws.meetings.items:
        render_meeting_row(ws, meeting)
