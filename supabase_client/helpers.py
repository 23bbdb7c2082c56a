# supabase_client/helpers.py
"""
Utility layer for interacting with Supabase.

Features
--------
- Thin wrappers for the query surface the stores need: filtered/ordered
  selects, single-row fetches, insert, update, delete and upsert.
- Every call is scoped by equality filters (`user_id`, `quarter_id`, `id`).
- Debug logging of each call; payload values are never logged.
- Plain dict / list return values for easy model mapping.

Errors from PostgREST (`postgrest.exceptions.APIError`) are NOT swallowed
here; `core.safe_connect` classifies them for the stores.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from supabase import Client

from core.log_config import get_logger

log = get_logger(__name__)

Row = Dict[str, Any]


class NoRowError(LookupError):
    """A write or single-row fetch matched no row."""


def _filtered(query, filters: Optional[Mapping[str, Any]]):
    for column, value in (filters or {}).items():
        query = query.eq(column, value)
    return query


def select_rows(
    client: Client,
    table: str,
    filters: Optional[Mapping[str, Any]] = None,
    order_by: Optional[str] = None,
    desc: bool = False,
    limit: Optional[int] = None,
    columns: str = "*",
) -> List[Row]:
    """
    Fetch rows from a Supabase table.

    Parameters
    ----------
    table : str
        Table name.
    filters : mapping
        Column -> value equality filters.
    order_by : str, optional
        Column to order by.
    desc : bool
        Descending order when True.
    limit : int, optional
        Max rows to fetch.

    Returns
    -------
    list[dict]
        Matching rows, [] if none.
    """
    log.debug("Fetching rows", table=table, filters=sorted((filters or {}).keys()))
    query = _filtered(client.table(table).select(columns), filters)
    if order_by:
        query = query.order(order_by, desc=desc)
    if limit is not None:
        query = query.limit(limit)
    res = query.execute()
    records = res.data or []
    log.debug("Fetched rows", table=table, count=len(records))
    return records


def select_maybe_one(
    client: Client,
    table: str,
    filters: Optional[Mapping[str, Any]] = None,
    columns: str = "*",
) -> Optional[Row]:
    """Fetch one row or None; zero rows is not an error."""
    log.debug("Fetching at most one row", table=table)
    res = _filtered(client.table(table).select(columns), filters).maybe_single().execute()
    # postgrest returns no response at all for zero rows on some versions
    if res is None:
        return None
    return res.data or None


def select_one(
    client: Client,
    table: str,
    filters: Optional[Mapping[str, Any]] = None,
    columns: str = "*",
) -> Row:
    """Fetch exactly one row; zero or multiple rows raise an APIError."""
    log.debug("Fetching one row", table=table)
    res = _filtered(client.table(table).select(columns), filters).single().execute()
    return res.data


def insert_row(client: Client, table: str, data: Mapping[str, Any]) -> Row:
    """
    Insert a record and return the row as stored (ids, timestamps).

    Raises
    ------
    NoRowError
        If the insert returned no representation (e.g. blocked by RLS).
    """
    log.debug("Inserting row", table=table, keys=list(data.keys()))
    res = client.table(table).insert(dict(data)).execute()
    if not res.data:
        raise NoRowError(f"Insert into '{table}' returned no row.")
    return res.data[0]


def update_rows(
    client: Client,
    table: str,
    values: Mapping[str, Any],
    filters: Mapping[str, Any],
) -> List[Row]:
    """Apply `values` to every row matching `filters`; return updated rows."""
    log.debug("Updating rows", table=table, keys=list(values.keys()))
    res = _filtered(client.table(table).update(dict(values)), filters).execute()
    return res.data or []


def update_one(
    client: Client,
    table: str,
    values: Mapping[str, Any],
    filters: Mapping[str, Any],
) -> Row:
    """Update a single row; raise NoRowError if nothing matched."""
    rows = update_rows(client, table, values, filters)
    if not rows:
        raise NoRowError(f"Update on '{table}' matched no row.")
    return rows[0]


def delete_rows(client: Client, table: str, filters: Mapping[str, Any]) -> List[Row]:
    """Delete rows matching `filters`; return the deleted rows."""
    log.debug("Deleting rows", table=table, filters=sorted(filters.keys()))
    res = _filtered(client.table(table).delete(), filters).execute()
    return res.data or []


def upsert_row(
    client: Client,
    table: str,
    data: Mapping[str, Any],
    on_conflict: str,
) -> Row:
    """Insert-or-update on the `on_conflict` key; return the stored row."""
    log.debug("Upserting row", table=table, on_conflict=on_conflict)
    res = client.table(table).upsert(dict(data), on_conflict=on_conflict).execute()
    if not res.data:
        raise NoRowError(f"Upsert into '{table}' returned no row.")
    return res.data[0]


def ping(client: Client, table: str = "quarters") -> bool:
    """
    Verify Supabase connectivity with a harmless one-row read.

    Returns
    -------
    bool
        True if the request went through (RLS may still return no rows).
    """
    try:
        client.table(table).select("id").limit(1).execute()
    except Exception as e:  # noqa: BLE001 - any failure means "not connected"
        log.warning("Supabase connection check failed", error=e.__class__.__name__)
        return False
    return True
