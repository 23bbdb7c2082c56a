"""
ui/state.py
-----------
Keeps one Workspace per browser session in `st.session_state`.
"""

from __future__ import annotations

import streamlit as st

from core.log_config import get_logger
from core.workspace import Workspace
from supabase_client.config import get_supabase_client

log = get_logger(__name__)

WORKSPACE_KEY = "workspace"


def get_workspace() -> Workspace:
    """Return this session's workspace, creating it on first use."""
    if WORKSPACE_KEY not in st.session_state:
        try:
            client = get_supabase_client()
        except RuntimeError as e:
            st.error(f"⚠️ {e} Set SUPABASE_URL and SUPABASE_ANON_KEY.")
            st.stop()
        workspace = Workspace(client)
        workspace.listen()
        st.session_state[WORKSPACE_KEY] = workspace
        log.info("Workspace created for new browser session")
    return st.session_state[WORKSPACE_KEY]


def flag_key(prefix: str, row_id: str) -> str:
    """Session-state key for per-row UI flags (edit mode, etc.)."""
    return f"{prefix}_{row_id}"
