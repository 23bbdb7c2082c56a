"""
QuotaTrack Backend API
======================

FastAPI service exposing liveness, health and status endpoints for the
Streamlit app's sidebar indicator and for deployment probes.

The tracker itself talks to Supabase directly from the UI process; this
service holds no user data.

Run with:
    uvicorn backend.main:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from core.health import system_health
from core.log_config import setup_logging
from core.metadata import __version__, get_metadata
from core.ui_config import SUPABASE_ANON_KEY, SUPABASE_URL

setup_logging()

# --------------------------------------------------------------------------- #
# FastAPI App
# --------------------------------------------------------------------------- #

app = FastAPI(
    title="QuotaTrack Backend API",
    version=__version__,
    description="Health and status endpoints for the QuotaTrack tracker.",
)


# --------------------------------------------------------------------------- #
# Core Routes
# --------------------------------------------------------------------------- #

@app.get("/")
async def root():
    """
    Basic liveness probe.
    """
    return {
        "status": "ok",
        "message": "QuotaTrack Backend is live.",
        "version": app.version,
    }


@app.get("/health")
def health():
    """
    System health endpoint.

    Delegates to core.health.system_health which:
    - Checks Supabase connectivity
    - Reports runtime metrics
    - Returns a stable, machine-readable payload
    """
    return system_health()


@app.get("/status/summary")
async def status_summary():
    """
    High-level status summary for dashboards.
    """
    return {
        "backend_version": app.version,
        "metadata": get_metadata(),
        "supabase_url_configured": bool(SUPABASE_URL),
        "supabase_key_configured": bool(SUPABASE_ANON_KEY),
    }
