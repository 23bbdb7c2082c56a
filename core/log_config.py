"""
core/log_config.py
------------------
Structured logging shared by the Streamlit app, the stores and the backend.

Every module asks for a logger via `get_logger(__name__)` and logs an event
name plus key/value context; `setup_logging()` is called by each entrypoint.
"""

from __future__ import annotations

import logging
import sys

import structlog

from core.ui_config import LOG_JSON, LOG_LEVEL


def add_app_name(logger, method_name: str, event_dict: dict) -> dict:
    """Tag every entry with the project name."""
    event_dict.setdefault("app", "quotatrack")
    return event_dict


def setup_logging(log_level: str = LOG_LEVEL, json_output: bool = LOG_JSON) -> None:
    """
    Configure structlog and the standard logging bridge.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines instead of the coloured console format
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_app_name,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Standard logging for supabase-py, httpx and uvicorn
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    # Reduce noise from the HTTP stack underneath supabase-py
    for noisy in ("httpx", "httpcore", "hpack", "urllib3", "requests"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structured logger (name is usually `__name__`)."""
    return structlog.get_logger(name or "quotatrack")
