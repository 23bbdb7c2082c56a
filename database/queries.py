# database/queries.py
"""
Per-table queries against Supabase.

Every function is scoped by the owning `user_id` and, for goals, meetings
and deals, by `quarter_id`. Return values are raw rows (dicts); mapping to
models happens in the stores.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from supabase import Client

from supabase_client.helpers import (
    delete_rows,
    insert_row,
    select_maybe_one,
    select_rows,
    update_one,
    update_rows,
    upsert_row,
)

QUARTERS = "quarters"
GOALS = "goals"
MEETINGS = "meetings"
DEALS = "deals"

GOALS_CONFLICT_KEY = "user_id,quarter_id"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _scope(user_id: str, quarter_id: str) -> Dict[str, str]:
    return {"user_id": user_id, "quarter_id": quarter_id}


# ---------------------------------------------------------------------
# Quarters
# ---------------------------------------------------------------------
def list_quarters(client: Client, *, user_id: str) -> List[Dict[str, Any]]:
    """Return the user's quarters, newest first."""
    return select_rows(
        client, QUARTERS, {"user_id": user_id}, order_by="created_at", desc=True
    )


def insert_quarter(client: Client, *, user_id: str, name: str, is_active: bool = True) -> Dict[str, Any]:
    return insert_row(client, QUARTERS, {"user_id": user_id, "name": name, "is_active": is_active})


def deactivate_all_quarters(client: Client, *, user_id: str) -> List[Dict[str, Any]]:
    return update_rows(client, QUARTERS, {"is_active": False}, {"user_id": user_id})


def activate_quarter(client: Client, *, user_id: str, quarter_id: str) -> Dict[str, Any]:
    return update_one(
        client, QUARTERS, {"is_active": True}, {"id": quarter_id, "user_id": user_id}
    )


# ---------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------
def fetch_goals(client: Client, *, user_id: str, quarter_id: str) -> Optional[Dict[str, Any]]:
    """Return the quarter's goals row, or None if goals were never set."""
    return select_maybe_one(client, GOALS, _scope(user_id, quarter_id))


def insert_goals(
    client: Client, *, user_id: str, quarter_id: str, meeting_goal: int, mmr_goal: float
) -> Dict[str, Any]:
    return insert_row(
        client,
        GOALS,
        {**_scope(user_id, quarter_id), "meeting_goal": meeting_goal, "mmr_goal": mmr_goal},
    )


def upsert_goals(
    client: Client, *, user_id: str, quarter_id: str, meeting_goal: int, mmr_goal: float
) -> Dict[str, Any]:
    """Create or replace the goals row keyed by (user, quarter)."""
    return upsert_row(
        client,
        GOALS,
        {
            **_scope(user_id, quarter_id),
            "meeting_goal": meeting_goal,
            "mmr_goal": mmr_goal,
            "updated_at": _now(),
        },
        on_conflict=GOALS_CONFLICT_KEY,
    )


# ---------------------------------------------------------------------
# Meetings
# ---------------------------------------------------------------------
def list_meetings(client: Client, *, user_id: str, quarter_id: str) -> List[Dict[str, Any]]:
    """Return the quarter's meetings, latest meeting date first."""
    return select_rows(
        client, MEETINGS, _scope(user_id, quarter_id), order_by="meeting_date", desc=True
    )


def insert_meeting(
    client: Client, *, user_id: str, quarter_id: str, row: Mapping[str, Any]
) -> Dict[str, Any]:
    return insert_row(client, MEETINGS, {**_scope(user_id, quarter_id), **row})


def update_meeting(
    client: Client, *, user_id: str, quarter_id: str, meeting_id: str, changes: Mapping[str, Any]
) -> Dict[str, Any]:
    return update_one(
        client,
        MEETINGS,
        {**changes, "updated_at": _now()},
        {"id": meeting_id, **_scope(user_id, quarter_id)},
    )


def delete_meeting(client: Client, *, user_id: str, quarter_id: str, meeting_id: str) -> None:
    delete_rows(client, MEETINGS, {"id": meeting_id, **_scope(user_id, quarter_id)})


# ---------------------------------------------------------------------
# Deals
# ---------------------------------------------------------------------
def list_deals(client: Client, *, user_id: str, quarter_id: str) -> List[Dict[str, Any]]:
    """Return the quarter's deals, newest first."""
    return select_rows(
        client, DEALS, _scope(user_id, quarter_id), order_by="created_at", desc=True
    )


def insert_deal(
    client: Client, *, user_id: str, quarter_id: str, name: str, value: float
) -> Dict[str, Any]:
    return insert_row(client, DEALS, {**_scope(user_id, quarter_id), "name": name, "value": value})


def update_deal(
    client: Client, *, user_id: str, quarter_id: str, deal_id: str, changes: Mapping[str, Any]
) -> Dict[str, Any]:
    return update_one(
        client,
        DEALS,
        {**changes, "updated_at": _now()},
        {"id": deal_id, **_scope(user_id, quarter_id)},
    )


def delete_deal(client: Client, *, user_id: str, quarter_id: str, deal_id: str) -> None:
    delete_rows(client, DEALS, {"id": deal_id, **_scope(user_id, quarter_id)})
