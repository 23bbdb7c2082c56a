"""
core/stores.py
--------------
Entity synchronization stores for goals, meetings and deals.

Each store keeps an in-memory copy of one entity type for the currently
selected quarter and mirrors create / update / delete to Supabase.

Lifecycle
---------
    UNINITIALIZED --set_quarter(id)--> LOADING --ok--> READY
                                               +--fail--> ERRORED

- Changing the quarter discards the cache and reloads it.
- With no quarter the cache is empty and nothing is loading.
- The cache changes only after Supabase confirms a write.
- Operations return the entity / True on success and None / False on
  failure; failures are recorded in `last_error` (see core.safe_connect).

Operations run synchronously on the caller's thread, so a store never has
two operations in flight at once.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import ValidationError
from supabase import Client

from core.log_config import get_logger
from core.safe_connect import StoreError, require_user, safe_operation
from database import queries
from database.models import (
    Deal,
    DealChanges,
    DealDraft,
    Goals,
    GoalsDraft,
    Meeting,
    MeetingChanges,
    MeetingDraft,
    Outcome,
    from_row,
)
from supabase_client.auth import SessionProvider

log = get_logger(__name__)

T = TypeVar("T")


class StoreStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


class SyncStore:
    """Shared quarter scoping, loading state and error bookkeeping."""

    name = "entities"

    def __init__(self, client: Client, session: SessionProvider):
        self.client = client
        self.session = session
        self.quarter_id: Optional[str] = None
        self.status = StoreStatus.UNINITIALIZED
        self.last_error: Optional[StoreError] = None
        self._reset_cache()

    # -- hooks ------------------------------------------------------------
    def _reset_cache(self) -> None:
        raise NotImplementedError

    def _load(self, user_id: str, quarter_id: str) -> None:
        raise NotImplementedError

    # -- scoping ----------------------------------------------------------
    @property
    def loading(self) -> bool:
        return self.status is StoreStatus.LOADING

    def set_quarter(self, quarter_id: Optional[str]) -> None:
        """Scope the store to `quarter_id`, reloading when it changes."""
        if quarter_id == self.quarter_id:
            return
        self.quarter_id = quarter_id
        self._reset_cache()
        if quarter_id is None:
            self.status = StoreStatus.UNINITIALIZED
            return
        self.refresh()

    def reset(self) -> None:
        """Drop the scope, the cache and any recorded error."""
        self.quarter_id = None
        self.status = StoreStatus.UNINITIALIZED
        self.last_error = None
        self._reset_cache()

    def clear_error(self) -> None:
        self.last_error = None

    def _user_id(self) -> str:
        return require_user(self.session.get_user_id())

    # -- list -------------------------------------------------------------
    def refresh(self) -> bool:
        """Replace the whole cache with the remote rows for this quarter."""
        if self.quarter_id is None:
            return False
        self.status = StoreStatus.LOADING
        with safe_operation(self, f"fetching {self.name}"):
            self._load(self._user_id(), self.quarter_id)
            self.status = StoreStatus.READY
            return True
        self.status = StoreStatus.ERRORED
        return False


class ListStore(SyncStore, Generic[T]):
    """A store whose cache is an ordered list of rows with an `id`."""

    items: List[T]

    def _reset_cache(self) -> None:
        self.items = []

    def get(self, item_id: str) -> Optional[T]:
        return next((item for item in self.items if item.id == item_id), None)

    def _prepend(self, item: T) -> None:
        self.items = [item, *self.items]

    def _replace(self, item: T) -> None:
        self.items = [item if existing.id == item.id else existing for existing in self.items]

    def _discard(self, item_id: str) -> None:
        self.items = [existing for existing in self.items if existing.id != item_id]


def _invalid(kind: str, err: ValidationError) -> None:
    fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in err.errors())
    log.info("Draft rejected", draft=kind, fields=fields)


# --------------------------------------------------------------------------- #
# Goals
# --------------------------------------------------------------------------- #

class GoalsStore(SyncStore):
    """At most one goals row per quarter; `goals` is None while unset."""

    name = "goals"

    def _reset_cache(self) -> None:
        self.goals: Optional[Goals] = None

    def _load(self, user_id: str, quarter_id: str) -> None:
        row = queries.fetch_goals(self.client, user_id=user_id, quarter_id=quarter_id)
        self.goals = from_row(Goals, row) if row else None

    def _write(self, meeting_goal: Any, mmr_goal: Any, upsert: bool) -> Optional[Goals]:
        if self.quarter_id is None:
            return None
        try:
            draft = GoalsDraft(meeting_goal=meeting_goal, mmr_goal=mmr_goal)
        except ValidationError as err:
            _invalid("Goals", err)
            return None

        action = "updating goals" if upsert else "creating goals"
        with safe_operation(self, action):
            write = queries.upsert_goals if upsert else queries.insert_goals
            row = write(
                self.client,
                user_id=self._user_id(),
                quarter_id=self.quarter_id,
                meeting_goal=draft.meeting_goal,
                mmr_goal=draft.mmr_goal,
            )
            self.goals = from_row(Goals, row)
            return self.goals
        return None

    def save(self, meeting_goal: Any, mmr_goal: Any) -> Optional[Goals]:
        """Set both targets for the quarter (insert or replace)."""
        return self._write(meeting_goal, mmr_goal, upsert=True)

    def create(self, meeting_goal: Any, mmr_goal: Any) -> Optional[Goals]:
        """Insert the quarter's first goals row."""
        return self._write(meeting_goal, mmr_goal, upsert=False)


# --------------------------------------------------------------------------- #
# Meetings
# --------------------------------------------------------------------------- #

class MeetingsStore(ListStore[Meeting]):
    """Meetings of the quarter, latest meeting date first."""

    name = "meetings"

    def _load(self, user_id: str, quarter_id: str) -> None:
        rows = queries.list_meetings(self.client, user_id=user_id, quarter_id=quarter_id)
        self.items = [from_row(Meeting, row) for row in rows]

    def create(
        self,
        contact_name: Any,
        company_name: Any,
        meeting_date: Any,
        outcome: Any = Outcome.SCHEDULED,
    ) -> Optional[Meeting]:
        if self.quarter_id is None:
            return None
        try:
            draft = MeetingDraft(
                contact_name=contact_name,
                company_name=company_name,
                meeting_date=meeting_date,
                outcome=outcome,
            )
        except ValidationError as err:
            _invalid("Meeting", err)
            return None

        with safe_operation(self, "adding meeting"):
            row = queries.insert_meeting(
                self.client,
                user_id=self._user_id(),
                quarter_id=self.quarter_id,
                row=draft.to_row(),
            )
            meeting = from_row(Meeting, row)
            self._prepend(meeting)
            return meeting
        return None

    def update(self, meeting_id: str, **fields: Any) -> Optional[Meeting]:
        """
        Apply a partial update.

        The meetings table only edits `outcome`, but contact, company and
        date are accepted too for full-record edits.
        """
        if self.quarter_id is None:
            return None
        try:
            changes = MeetingChanges(**fields).to_row()
        except ValidationError as err:
            _invalid("Meeting update", err)
            return None
        if not changes:
            return None

        with safe_operation(self, "updating meeting"):
            row = queries.update_meeting(
                self.client,
                user_id=self._user_id(),
                quarter_id=self.quarter_id,
                meeting_id=meeting_id,
                changes=changes,
            )
            meeting = from_row(Meeting, row)
            self._replace(meeting)
            return meeting
        return None

    def delete(self, meeting_id: str) -> bool:
        if self.quarter_id is None:
            return False
        with safe_operation(self, "deleting meeting"):
            queries.delete_meeting(
                self.client,
                user_id=self._user_id(),
                quarter_id=self.quarter_id,
                meeting_id=meeting_id,
            )
            self._discard(meeting_id)
            return True
        return False


# --------------------------------------------------------------------------- #
# Deals
# --------------------------------------------------------------------------- #

class DealsStore(ListStore[Deal]):
    """Deals of the quarter, newest first."""

    name = "deals"

    def _load(self, user_id: str, quarter_id: str) -> None:
        rows = queries.list_deals(self.client, user_id=user_id, quarter_id=quarter_id)
        self.items = [from_row(Deal, row) for row in rows]

    def create(self, name: Any, value: Any) -> Optional[Deal]:
        if self.quarter_id is None:
            return None
        try:
            draft = DealDraft(name=name, value=value)
        except ValidationError as err:
            _invalid("Deal", err)
            return None

        with safe_operation(self, "adding deal"):
            row = queries.insert_deal(
                self.client,
                user_id=self._user_id(),
                quarter_id=self.quarter_id,
                name=draft.name,
                value=draft.value,
            )
            deal = from_row(Deal, row)
            self._prepend(deal)
            return deal
        return None

    def update(self, deal_id: str, name: Any = None, value: Any = None) -> Optional[Deal]:
        """Edit a deal in place (the deal list edits `value`)."""
        if self.quarter_id is None:
            return None
        try:
            changes = DealChanges(name=name, value=value).to_row()
        except ValidationError as err:
            _invalid("Deal update", err)
            return None
        if not changes:
            return None

        with safe_operation(self, "updating deal"):
            row = queries.update_deal(
                self.client,
                user_id=self._user_id(),
                quarter_id=self.quarter_id,
                deal_id=deal_id,
                changes=changes,
            )
            deal = from_row(Deal, row)
            self._replace(deal)
            return deal
        return None

    def delete(self, deal_id: str) -> bool:
        if self.quarter_id is None:
            return False
        with safe_operation(self, "deleting deal"):
            queries.delete_deal(
                self.client,
                user_id=self._user_id(),
                quarter_id=self.quarter_id,
                deal_id=deal_id,
            )
            self._discard(deal_id)
            return True
        return False
