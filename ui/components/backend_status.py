# ui/components/backend_status.py
"""
Backend health indicator for the QuotaTrack sidebar.

Features
--------
- Reads BACKEND_URL from core.ui_config.
- Uses Pydantic to validate the /health schema.
- Cached via st.cache_data with configurable TTL.
- Never crashes the UI when the backend is offline.
"""

from __future__ import annotations

import requests
import streamlit as st
from pydantic import BaseModel, Field, ValidationError
from typing import Optional, Dict, Any

from core.metadata import __project__, __version__
from core.ui_config import BACKEND_STATUS_TTL, BACKEND_URL

STATUS_COLORS = {
    "ok": "green",
    "healthy": "green",
    "degraded": "orange",
    "error": "red",
    "offline": "red",
}


# --------------------------------------------------------------------------- #
# Typed Health Schema
# --------------------------------------------------------------------------- #

class HealthSchema(BaseModel):
    """Structured schema for the /health endpoint response."""
    status: str = Field(default="unknown", description="Overall backend status")
    message: Optional[str] = Field(default=None, description="Optional status message")
    version: Optional[str] = Field(default=None, description="Backend version string")
    supabase_connected: Optional[bool] = Field(default=None, description="Supabase connectivity flag")
    cpu_load: Optional[float] = Field(default=None, description="Backend CPU load (optional)")
    memory_usage: Optional[float] = Field(default=None, description="Backend memory usage in MB")
    latency_ms: Optional[float] = Field(default=None, description="Approximate round-trip latency in ms")


def get_status_color(status: str) -> str:
    """Public helper for coloring elements dynamically by status."""
    return STATUS_COLORS.get(status.lower(), "gray")


# --------------------------------------------------------------------------- #
# Health Fetcher (cached + resilient)
# --------------------------------------------------------------------------- #

@st.cache_data(ttl=BACKEND_STATUS_TTL)
def get_backend_status() -> Dict[str, Any]:
    """
    Fetch the backend /health endpoint with structured fallback.

    Returns
    -------
    dict
        Parsed JSON response or a structured error dict.
    """
    url = f"{BACKEND_URL}/health"
    try:
        resp = requests.get(url, timeout=5)
        latency_ms = round(resp.elapsed.total_seconds() * 1000, 2)

        if resp.status_code != 200:
            return {
                "status": "error",
                "message": f"HTTP {resp.status_code}: {resp.text[:100]}",
            }
        data = resp.json()
        data["latency_ms"] = latency_ms
        return HealthSchema(**data).model_dump()
    except requests.exceptions.RequestException as e:
        return {
            "status": "offline",
            "message": f"Backend unreachable at {BACKEND_URL} ({e.__class__.__name__})",
        }
    except (ValueError, ValidationError) as e:
        return {"status": "error", "message": f"Unexpected health payload: {e.__class__.__name__}"}


# --------------------------------------------------------------------------- #
# UI Renderer
# --------------------------------------------------------------------------- #

def render_status_bar(expanded: bool = False):
    """
    Render a compact backend health summary in the sidebar.

    Parameters
    ----------
    expanded : bool
        If True, show detailed diagnostics; else compact mode.
    """
    st.sidebar.markdown("---")
    st.sidebar.caption("### 🔍 Backend Status")

    health = get_backend_status()
    status = health.get("status", "unknown")
    st.sidebar.markdown(f":{get_status_color(status)}[● {status.upper()}]")

    msg = health.get("message")
    if msg:
        st.sidebar.caption(f"💬 {msg}")

    if health.get("supabase_connected"):
        st.sidebar.caption("☁️ Supabase: connected")
    else:
        st.sidebar.caption("☁️ Supabase: unavailable")

    if expanded:
        with st.sidebar.expander("Advanced diagnostics", expanded=False):
            latency = health.get("latency_ms")
            if latency:
                st.write(f"⏱ Latency: {latency} ms")
            if health.get("cpu_load") is not None:
                st.write(f"🧠 CPU load: {health['cpu_load']}%")
            if health.get("memory_usage") is not None:
                st.write(f"💾 Memory: {health['memory_usage']} MB")
            st.json(health)

    st.sidebar.caption(f"{__project__} v{__version__}")
