"""
core/health.py
--------------
Health report served by the backend `/health` endpoint and shown by the
sidebar status indicator (`ui.components.backend_status.HealthSchema`).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import psutil

from core.log_config import get_logger
from core.metadata import __version__
from supabase_client.config import get_supabase_client
from supabase_client.helpers import ping

log = get_logger(__name__)


def supabase_reachable() -> bool:
    """True when a client can be built and answers a one-row select."""
    try:
        return ping(get_supabase_client())
    except Exception as e:  # noqa: BLE001 - bad or missing credentials read as "not connected"
        log.warning("Supabase client unavailable", error=str(e))
        return False


def process_load() -> Tuple[Optional[float], Optional[float]]:
    """CPU percent and used memory in MB, or (None, None) if psutil cannot read them."""
    try:
        cpu = psutil.cpu_percent(interval=0.2)
        memory_mb = round(psutil.virtual_memory().used / (1024 * 1024), 2)
    except (psutil.Error, OSError):
        return None, None
    return cpu, memory_mb


def system_health() -> Dict[str, Any]:
    connected = supabase_reachable()
    cpu_load, memory_usage = process_load()
    return {
        "status": "ok" if connected else "degraded",
        "message": "Backend operational." if connected else "Supabase check failed.",
        "version": __version__,
        "supabase_connected": connected,
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
    }
