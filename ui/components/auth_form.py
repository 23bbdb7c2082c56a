"""
Sign-in form. Authentication itself is Supabase's; this only collects the
credentials and reports a failed attempt.
"""

from __future__ import annotations

import streamlit as st

from core.log_config import get_logger
from core.workspace import Workspace

log = get_logger(__name__)


def render_sign_in(ws: Workspace) -> None:
    st.title("📈 QuotaTrack")
    st.caption("Sign in to track your meetings and deals.")

    with st.form("sign_in"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        if not email or not password:
            st.warning("Enter your email and password.")
            return
        try:
            ws.session.sign_in(email.strip(), password)
        except Exception as e:  # noqa: BLE001 - any auth failure is shown the same way
            log.warning("Sign-in failed", error=e.__class__.__name__)
            st.error("Sign-in failed. Check your credentials and try again.")
            return
        st.rerun()
