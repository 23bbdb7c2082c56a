"""
core/quarters.py
----------------
Quarter resolution and quarter management.

Resolution runs once per sign-in and decides which quarter every store is
scoped to:

1. No quarters at all      -> onboarding is required.
2. An active quarter       -> select it (the newest one if several are
                              flagged, which only a race can produce).
3. Quarters, none active   -> activate the newest one remotely and select it;
                              a failed activation is logged and recorded
                              but the quarter is still selected.
4. The listing failed      -> log it, select nothing, do NOT start
                              onboarding; the user can create a quarter or
                              log out from the "no quarter selected" screen.

Activation always deactivates every quarter of the user first. The two
writes are separate requests, so two concurrent activations can still leave
two active quarters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError
from supabase import Client

from core.log_config import get_logger
from core.safe_connect import StoreError, require_user, safe_operation
from database import queries
from database.models import Quarter, QuarterDraft, from_row
from supabase_client.auth import SessionProvider

log = get_logger(__name__)


@dataclass
class QuarterResolution:
    quarter_id: Optional[str] = None
    needs_onboarding: bool = False
    error: Optional[StoreError] = None


class QuarterService:
    def __init__(self, client: Client, session: SessionProvider):
        self.client = client
        self.session = session
        self.last_error: Optional[StoreError] = None

    def _user_id(self) -> str:
        return require_user(self.session.get_user_id())

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #
    def resolve_current_quarter(self) -> QuarterResolution:
        """Pick the current quarter, repairing a missing active flag."""
        with safe_operation(self, "checking user setup") as op:
            user_id = self._user_id()
            quarters = [
                from_row(Quarter, row)
                for row in queries.list_quarters(self.client, user_id=user_id)
            ]

            if not quarters:
                log.info("No quarters yet, onboarding required")
                return QuarterResolution(needs_onboarding=True)

            active = next((q for q in quarters if q.is_active), None)
            if active:
                return QuarterResolution(quarter_id=active.id)

            most_recent = quarters[0]
            log.info("No active quarter, activating most recent one", quarter_id=most_recent.id)
            with safe_operation(self, "activating most recent quarter"):
                queries.activate_quarter(self.client, user_id=user_id, quarter_id=most_recent.id)
            return QuarterResolution(quarter_id=most_recent.id)

        return QuarterResolution(error=op.error)

    # ------------------------------------------------------------------ #
    # Management (quarter picker)
    # ------------------------------------------------------------------ #
    def list_quarters(self) -> List[Quarter]:
        """Return the user's quarters, newest first; [] on failure."""
        with safe_operation(self, "fetching quarters"):
            rows = queries.list_quarters(self.client, user_id=self._user_id())
            return [from_row(Quarter, row) for row in rows]
        return []

    def insert_active(self, user_id: str, name: str) -> Quarter:
        """Deactivate every quarter, then insert `name` as the active one (raises)."""
        queries.deactivate_all_quarters(self.client, user_id=user_id)
        return from_row(Quarter, queries.insert_quarter(self.client, user_id=user_id, name=name))

    def create_quarter(self, name: str) -> Optional[Quarter]:
        """Create a new quarter and make it the only active one."""
        try:
            draft = QuarterDraft(name=name)
        except ValidationError:
            log.info("Quarter not created: empty name")
            return None

        with safe_operation(self, "creating new quarter"):
            return self.insert_active(self._user_id(), draft.name)
        return None

    def select_quarter(self, quarter_id: str) -> bool:
        """Make `quarter_id` the only active quarter."""
        with safe_operation(self, "selecting quarter"):
            user_id = self._user_id()
            queries.deactivate_all_quarters(self.client, user_id=user_id)
            queries.activate_quarter(self.client, user_id=user_id, quarter_id=quarter_id)
            return True
        return False
