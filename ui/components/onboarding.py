"""
Welcome flow and the "no quarter selected" recovery screen.
"""

from __future__ import annotations

import streamlit as st

from core.workspace import Workspace


def render_welcome(ws: Workspace) -> None:
    wizard = ws.onboarding
    st.title("👋 Welcome!")

    if wizard.error:
        st.error(wizard.error)

    if wizard.step == 1:
        st.caption("Let's start by creating your first quarter")
        with st.form("welcome_quarter"):
            name = st.text_input("Quarter Name", value=wizard.quarter_name, placeholder="e.g., Q1 2024")
            if st.form_submit_button("Next"):
                if wizard.submit_name(name):
                    st.rerun()
                st.warning("Enter a quarter name.")
        return

    st.caption(f"Set your goals for {wizard.quarter_name}")
    with st.form("welcome_goals"):
        meeting_goal = st.number_input("Meeting Goal", min_value=0, step=1, value=0)
        mmr_goal = st.number_input("MMR Goal ($)", min_value=0, step=100, value=0)
        back_col, submit_col = st.columns(2)
        back = back_col.form_submit_button("Back")
        submitted = submit_col.form_submit_button("Start Tracking")

    if back:
        wizard.back()
        st.rerun()
    if submitted:
        with st.spinner("Setting up..."):
            quarter_id = ws.finish_onboarding(meeting_goal, mmr_goal)
        if quarter_id is not None or wizard.error:
            st.rerun()
        st.warning("Both goals must be greater than zero.")


def render_no_quarter(ws: Workspace) -> None:
    st.subheader("No quarter selected")
    create_col, logout_col = st.columns(2)
    create_col.button("Create New Quarter", on_click=ws.start_onboarding)
    logout_col.button("Logout", on_click=ws.sign_out, key="logout_no_quarter")
