"""
Deals panel: add form and the recent deals list with value edit and
two-step delete.
"""

from __future__ import annotations

import streamlit as st

from core.workspace import Workspace
from database.models import Deal
from ui.state import flag_key


def render_add_deal(ws: Workspace) -> None:
    with st.form("add_deal", clear_on_submit=True):
        name = st.text_input("Company Name", placeholder="Company Name")
        value = st.number_input("Deal Value ($)", min_value=0.0, step=100.0, value=None, placeholder="Deal Value")
        if st.form_submit_button("💰 Add Deal", use_container_width=True):
            if value is not None:
                ws.deals.create(name, value)


def _save_value(ws: Workspace, deal_id: str) -> None:
    value = st.session_state[flag_key("deal_value", deal_id)]
    if ws.deals.update(deal_id, value=value) is not None:
        st.session_state[flag_key("editing_deal", deal_id)] = False


def _set_editing(deal_id: str, editing: bool) -> None:
    st.session_state[flag_key("editing_deal", deal_id)] = editing


def render_deal_row(ws: Workspace, deal: Deal) -> None:
    name_col, value_col, actions_col = st.columns([4, 3, 2])
    name_col.write(f"**{deal.name}**")

    if st.session_state.get(flag_key("editing_deal", deal.id)):
        value_col.number_input(
            "Value",
            min_value=0.0,
            step=100.0,
            value=float(deal.value),
            key=flag_key("deal_value", deal.id),
            label_visibility="collapsed",
        )
        save_col, cancel_col = actions_col.columns(2)
        save_col.button("✔", key=flag_key("save_deal", deal.id), on_click=_save_value, args=(ws, deal.id))
        cancel_col.button("✖", key=flag_key("cancel_deal", deal.id), on_click=_set_editing, args=(deal.id, False))
        return

    value_col.markdown(f":green[${deal.value:,.0f}]")
    edit_col, delete_col = actions_col.columns(2)
    edit_col.button("✏️", key=flag_key("edit_deal", deal.id), on_click=_set_editing, args=(deal.id, True))
    pending = ws.deal_deletes.is_pending(deal.id)
    delete_col.button(
        "⚠️" if pending else "🗑",
        key=flag_key("delete_deal", deal.id),
        help="Click again to confirm deletion" if pending else "Delete deal",
        type="primary" if pending else "secondary",
        on_click=ws.request_deal_delete,
        args=(deal.id,),
    )


def render_deals_list(ws: Workspace) -> None:
    st.markdown("#### Recent Deals")
    if ws.deals.loading:
        st.caption("Loading...")
        return
    for deal in ws.deals.items:
        render_deal_row(ws, deal)
