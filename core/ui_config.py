"""
core/ui_config.py
-----------------
Central configuration hub for QuotaTrack.

- Reads Supabase credentials and the backend URL from environment variables.
- Provides global constants for the UI, the stores and the backend.
"""

from __future__ import annotations
import os

# ---------------------------------------------------------------------------
# Backend configuration
# ---------------------------------------------------------------------------

BACKEND_URL: str = os.getenv("BACKEND_URL", "http://127.0.0.1:8000").rstrip("/")
BACKEND_STATUS_TTL: int = int(os.getenv("BACKEND_STATUS_TTL", "60"))  # seconds

# ---------------------------------------------------------------------------
# Supabase configuration
# ---------------------------------------------------------------------------

SUPABASE_URL: str | None = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY: str | None = os.getenv("SUPABASE_ANON_KEY")

# ---------------------------------------------------------------------------
# Behaviour
# ---------------------------------------------------------------------------

DELETE_CONFIRM_SECONDS: float = float(os.getenv("DELETE_CONFIRM_SECONDS", "3"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON: bool = os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")

