"""
QuotaTrack: Streamlit App
--------------------------
Main entrypoint:

    streamlit run ui/app.py

Screens, in order of precedence:
sign-in -> welcome flow -> "no quarter selected" -> dashboard.
"""

import os
import sys

# Ensure project root is on sys.path when running via `streamlit run ui/app.py`
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

import streamlit as st
from streamlit_autorefresh import st_autorefresh

from core.log_config import setup_logging
from ui.components.auth_form import render_sign_in
from ui.components.backend_status import render_status_bar
from ui.components.deals_panel import render_add_deal, render_deals_list
from ui.components.goals_panel import (
    render_goal_setter,
    render_meeting_progress,
    render_mmr_progress,
)
from ui.components.meetings_panel import render_add_meeting, render_meetings_table
from ui.components.onboarding import render_no_quarter, render_welcome
from ui.components.quarters_panel import render_quarter_picker
from ui.state import get_workspace

setup_logging()
st.set_page_config(page_title="QuotaTrack", page_icon="📈", layout="wide")

ws = get_workspace()
render_status_bar()

# ---------------------------------------------------------------------------
# 1. Session gate
# ---------------------------------------------------------------------------
if ws.session.get_session() is None:
    render_sign_in(ws)
    st.stop()

if not ws.bootstrapped:
    with st.spinner("Loading..."):
        ws.bootstrap()

# ---------------------------------------------------------------------------
# 2. Onboarding / recovery
# ---------------------------------------------------------------------------
if ws.needs_onboarding:
    render_welcome(ws)
    st.stop()

if ws.current_quarter_id is None:
    render_no_quarter(ws)
    st.stop()

# ---------------------------------------------------------------------------
# 3. Dashboard
# ---------------------------------------------------------------------------
render_quarter_picker(ws)
st.sidebar.button("Logout", on_click=ws.sign_out, use_container_width=True)

st.title("📈 My Dashboard")
st.caption("Have an amazing day!")

if ws.goals.goals is None and not ws.goals.loading:
    st.info("No goals set for this quarter yet, progress is measured against zero.")
render_goal_setter(ws)

summary = ws.summary()
meetings_col, deals_col = st.columns(2)

with meetings_col:
    st.subheader("📅 Meetings Goal")
    render_meeting_progress(summary)
    render_add_meeting(ws)
    render_meetings_table(ws)

with deals_col:
    st.subheader("💰 MMR Goal")
    render_mmr_progress(summary)
    render_add_deal(ws)
    render_deals_list(ws)

# Rerun once the confirmation window passes so armed delete buttons reset
if ws.meeting_deletes.pending_id or ws.deal_deletes.pending_id:
    st_autorefresh(
        interval=int(ws.meeting_deletes.window_seconds * 1000),
        limit=None,
        key="delete_confirm_refresh",
    )
