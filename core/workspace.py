"""
core/workspace.py
-----------------
Per-session state container owned by the UI.

One `Workspace` per signed-in browser session holds the Supabase client,
the quarter service, the three synchronization stores, the two delete
confirmation slots and the onboarding wizard. Nothing here is a module
level singleton; the Streamlit app keeps the workspace in
`st.session_state`.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from supabase import Client

from core.confirm import DeleteConfirmation
from core.log_config import get_logger
from core.onboarding import OnboardingWizard
from core.progress import ProgressSummary, summarize
from core.quarters import QuarterResolution, QuarterService
from core.stores import DealsStore, GoalsStore, MeetingsStore
from core.ui_config import DELETE_CONFIRM_SECONDS
from supabase_client.auth import SessionProvider

log = get_logger(__name__)

SIGNED_OUT = "SIGNED_OUT"


class Workspace:
    def __init__(
        self,
        client: Client,
        confirm_window: float = DELETE_CONFIRM_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.client = client
        self.session = SessionProvider(client)
        self.quarters = QuarterService(client, self.session)
        self.goals = GoalsStore(client, self.session)
        self.meetings = MeetingsStore(client, self.session)
        self.deals = DealsStore(client, self.session)
        self.onboarding = OnboardingWizard(client, self.session, self.quarters)

        confirm_kwargs = {"window_seconds": confirm_window}
        if clock is not None:
            confirm_kwargs["clock"] = clock
        self.meeting_deletes = DeleteConfirmation(**confirm_kwargs)
        self.deal_deletes = DeleteConfirmation(**confirm_kwargs)

        self.current_quarter_id: Optional[str] = None
        self.needs_onboarding = False
        self.bootstrapped = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #
    def listen(self) -> None:
        """Subscribe to auth changes (idempotent)."""
        if self._unsubscribe is None:
            self._unsubscribe = self.session.subscribe(self.on_session_change)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_session_change(self, event: str, session: Any) -> None:
        """Rebuild all derived state whenever the session changes."""
        log.info("Auth state changed", auth_event=event)
        self.reset()
        if session is not None and event != SIGNED_OUT:
            self.bootstrap()

    def reset(self) -> None:
        self.current_quarter_id = None
        self.needs_onboarding = False
        self.bootstrapped = False
        self.quarters.last_error = None
        for store in (self.goals, self.meetings, self.deals):
            store.reset()
        self.meeting_deletes.clear()
        self.deal_deletes.clear()
        self.onboarding.reset()

    def bootstrap(self) -> QuarterResolution:
        """Resolve the current quarter and scope the stores to it."""
        resolution = self.quarters.resolve_current_quarter()
        self.needs_onboarding = resolution.needs_onboarding
        self._scope(resolution.quarter_id)
        self.bootstrapped = True
        return resolution

    def sign_out(self) -> None:
        try:
            self.session.sign_out()
        finally:
            self.reset()

    # ------------------------------------------------------------------ #
    # Quarter scope
    # ------------------------------------------------------------------ #
    def _scope(self, quarter_id: Optional[str]) -> None:
        if quarter_id != self.current_quarter_id:
            self.meeting_deletes.clear()
            self.deal_deletes.clear()
        self.current_quarter_id = quarter_id
        for store in (self.goals, self.meetings, self.deals):
            store.set_quarter(quarter_id)

    def select_quarter(self, quarter_id: str) -> bool:
        """Activate `quarter_id` remotely and rescope every store to it."""
        if not self.quarters.select_quarter(quarter_id):
            return False
        self._scope(quarter_id)
        return True

    def create_quarter(self, name: str) -> Optional[str]:
        quarter = self.quarters.create_quarter(name)
        if quarter is None:
            return None
        self._scope(quarter.id)
        return quarter.id

    def start_onboarding(self) -> None:
        """Open the welcome flow, e.g. from the "no quarter selected" screen."""
        self.onboarding.reset()
        self.needs_onboarding = True

    def finish_onboarding(self, meeting_goal: Any, mmr_goal: Any) -> Optional[str]:
        quarter_id = self.onboarding.submit_goals(meeting_goal, mmr_goal)
        if quarter_id is None:
            return None
        self.needs_onboarding = False
        self.onboarding.reset()
        self._scope(quarter_id)
        return quarter_id

    # ------------------------------------------------------------------ #
    # Row actions
    # ------------------------------------------------------------------ #
    def request_meeting_delete(self, meeting_id: str) -> bool:
        """Two-step delete; True only when the meeting was actually deleted."""
        if not self.meeting_deletes.request(meeting_id):
            return False
        return self.meetings.delete(meeting_id)

    def request_deal_delete(self, deal_id: str) -> bool:
        if not self.deal_deletes.request(deal_id):
            return False
        return self.deals.delete(deal_id)

    def summary(self) -> ProgressSummary:
        return summarize(self.meetings.items, self.deals.items, self.goals.goals)
