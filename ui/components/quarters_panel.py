"""
Quarter picker: list, switch and create quarters from the sidebar.
"""

from __future__ import annotations

import streamlit as st

from core.workspace import Workspace


def render_quarter_picker(ws: Workspace) -> None:
    with st.sidebar.expander("🕒 Quarters", expanded=False):
        quarters = ws.quarters.list_quarters()
        for quarter in quarters:
            label = quarter.name + (" · Active" if quarter.is_active else "")
            is_current = quarter.id == ws.current_quarter_id
            st.button(
                label,
                key=f"quarter_{quarter.id}",
                type="primary" if is_current else "secondary",
                disabled=is_current,
                on_click=ws.select_quarter,
                args=(quarter.id,),
                use_container_width=True,
            )

        with st.form("new_quarter", clear_on_submit=True):
            name = st.text_input("New quarter", placeholder="Enter quarter name")
            if st.form_submit_button("Create Quarter"):
                if ws.create_quarter(name) is not None:
                    st.rerun()
