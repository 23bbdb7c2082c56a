"""
QuotaTrack Safe Gateway Layer
-----------------------------
Shared error wrapping between the synchronization stores and Supabase.

Purpose
-------
Store operations never let a failure escape to the UI. Each one runs inside
`safe_operation`, which converts whatever went wrong into one of three
kinds, records it as the store's `last_error`, logs it and suppresses it.
The operation then returns its failure sentinel (None / False).

Taxonomy
--------
- no_user  : no authenticated user; aborts before contacting Supabase.
- gateway  : Supabase rejected the operation (PostgREST error, RLS,
             a write that matched no row).
- unknown  : anything else.

There is no retry: a failure is recorded once and left for the user.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from postgrest.exceptions import APIError

from core.log_config import get_logger
from supabase_client.helpers import NoRowError

log = get_logger(__name__)


class StoreError(Exception):
    """Base class for failures recorded by a store."""

    kind = "unknown"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class NoUserError(StoreError):
    kind = "no_user"


class GatewayError(StoreError):
    kind = "gateway"


class UnknownStoreError(StoreError):
    kind = "unknown"


def classify_error(exc: BaseException) -> StoreError:
    """Map any exception onto the store error taxonomy."""
    if isinstance(exc, StoreError):
        return exc
    if isinstance(exc, APIError):
        return GatewayError(exc.message or "Supabase rejected the operation.", exc)
    if isinstance(exc, NoRowError):
        return GatewayError(str(exc), exc)
    return UnknownStoreError(str(exc) or exc.__class__.__name__, exc)


def require_user(user_id: Optional[str]) -> str:
    """Return `user_id`, or raise NoUserError when nobody is signed in."""
    if not user_id:
        raise NoUserError("No user found")
    return user_id


@dataclass
class OperationOutcome:
    """Filled in by `safe_operation`; `error` stays None on success."""
    action: str
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@contextmanager
def safe_operation(store: Any, action: str) -> Iterator[OperationOutcome]:
    """
    Run a store operation, recording and suppressing any failure.

    Parameters
    ----------
    store : object
        Anything with a writable `last_error` attribute.
    action : str
        Human-readable name used in the log line, e.g. "adding meeting".
    """
    outcome = OperationOutcome(action=action)
    try:
        yield outcome
    except Exception as exc:  # noqa: BLE001 - stores never raise past this point
        error = classify_error(exc)
        outcome.error = error
        store.last_error = error
        log.error("Store operation failed", action=action, kind=error.kind, error=str(error))
