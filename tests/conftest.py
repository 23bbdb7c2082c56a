# tests/conftest.py
"""
In-memory stand-in for the Supabase client used by every test.

`FakeSupabase` mimics the slice of the supabase-py API the app calls:
`table(...).select/insert/update/delete/upsert`, `.eq`, `.order`,
`.limit`, `.single`, `.maybe_single`, `.execute`, and `auth` with
sessions and change notifications. Failures can be queued per
(table, operation).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from postgrest.exceptions import APIError

from core.workspace import Workspace

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def api_error(message: str = "permission denied", code: str = "42501") -> APIError:
    return APIError({"message": message, "code": code, "hint": None, "details": None})


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.op = "select"
        self.payload: Optional[Dict[str, Any]] = None
        self.filters: List[Tuple[str, Any]] = []
        self.order_by: Optional[Tuple[str, bool]] = None
        self.limit_n: Optional[int] = None
        self.single_mode: Optional[str] = None
        self.on_conflict: Optional[str] = None

    def select(self, columns: str = "*", count: Optional[str] = None):
        self.op = "select"
        return self

    def insert(self, data: Dict[str, Any]):
        self.op, self.payload = "insert", data
        return self

    def update(self, data: Dict[str, Any]):
        self.op, self.payload = "update", data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def upsert(self, data: Dict[str, Any], on_conflict: str = ""):
        self.op, self.payload, self.on_conflict = "upsert", data, on_conflict
        return self

    def eq(self, column: str, value: Any):
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, n: int):
        self.limit_n = n
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def execute(self):
        return self.db.run(self)


class FakeAuth:
    def __init__(self):
        self.user_id: Optional[str] = None
        self.listeners: List[Callable[[str, Any], None]] = []
        self.passwords: Dict[str, Tuple[str, str]] = {}

    def _session(self):
        if self.user_id is None:
            return None
        return SimpleNamespace(user=SimpleNamespace(id=self.user_id), access_token="token")

    def _emit(self, event: str) -> None:
        for listener in list(self.listeners):
            listener(event, self._session())

    def register(self, email: str, password: str, user_id: str) -> None:
        self.passwords[email] = (password, user_id)

    def get_session(self):
        return self._session()

    def get_user(self):
        if self.user_id is None:
            return None
        return SimpleNamespace(user=SimpleNamespace(id=self.user_id))

    def sign_in_with_password(self, credentials: Dict[str, str]):
        password, user_id = self.passwords.get(credentials["email"], (None, None))
        if password != credentials["password"]:
            raise ValueError("Invalid login credentials")
        self.user_id = user_id
        self._emit("SIGNED_IN")
        return SimpleNamespace(session=self._session(), user=SimpleNamespace(id=user_id))

    def sign_out(self):
        self.user_id = None
        self._emit("SIGNED_OUT")

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return SimpleNamespace(unsubscribe=lambda: self.listeners.remove(callback))


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            "quarters": [],
            "goals": [],
            "meetings": [],
            "deals": [],
        }
        self.auth = FakeAuth()
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.failures: Dict[Tuple[str, str], List[Exception]] = {}
        self._seq = 0

    # -- test controls --------------------------------------------------
    def fail_next(self, table: str, op: str, error: Optional[Exception] = None) -> None:
        self.failures.setdefault((table, op), []).append(error or api_error())

    def calls_to(self, table: str, op: Optional[str] = None) -> List[Dict[str, Any]]:
        return [f for t, o, f in self.calls if t == table and (op is None or o == op)]

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def seed(self, table: str, **row: Any) -> Dict[str, Any]:
        n = self._next()
        stamp = (BASE_TIME + timedelta(seconds=n)).isoformat()
        full = {"id": f"{table}-{n}", "created_at": stamp, "updated_at": stamp, **row}
        self.tables[table].append(full)
        return dict(full)

    # -- supabase-py surface --------------------------------------------
    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def _matches(self, row: Dict[str, Any], filters: List[Tuple[str, Any]]) -> bool:
        return all(row.get(col) == val for col, val in filters)

    def run(self, q: FakeQuery):
        self.calls.append((q.table_name, q.op, dict(q.filters)))
        queued = self.failures.get((q.table_name, q.op))
        if queued:
            raise queued.pop(0)

        rows = self.tables[q.table_name]
        if q.op == "select":
            found = [dict(r) for r in rows if self._matches(r, q.filters)]
            if q.order_by:
                column, desc = q.order_by
                found.sort(key=lambda r: r[column], reverse=desc)
            if q.limit_n is not None:
                found = found[: q.limit_n]
            if q.single_mode == "maybe":
                if not found:
                    return None
                if len(found) > 1:
                    raise api_error("multiple rows returned", "PGRST116")
                return SimpleNamespace(data=found[0])
            if q.single_mode == "single":
                if len(found) != 1:
                    raise api_error("JSON object requested, multiple (or no) rows returned", "PGRST116")
                return SimpleNamespace(data=found[0])
            return SimpleNamespace(data=found)

        if q.op == "insert":
            return SimpleNamespace(data=[self.seed(q.table_name, **q.payload)])

        if q.op == "update":
            updated = []
            for row in rows:
                if self._matches(row, q.filters):
                    row.update(q.payload)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated)

        if q.op == "delete":
            deleted = [dict(r) for r in rows if self._matches(r, q.filters)]
            self.tables[q.table_name] = [r for r in rows if not self._matches(r, q.filters)]
            return SimpleNamespace(data=deleted)

        if q.op == "upsert":
            keys = [k.strip() for k in q.on_conflict.split(",") if k.strip()]
            for row in rows:
                if all(row.get(k) == q.payload.get(k) for k in keys):
                    row.update(q.payload)
                    return SimpleNamespace(data=[dict(row)])
            return SimpleNamespace(data=[self.seed(q.table_name, **q.payload)])

        raise AssertionError(f"unsupported op {q.op}")


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


USER_ID = "user-1"


@pytest.fixture
def fake_client() -> FakeSupabase:
    client = FakeSupabase()
    client.auth.register("rep@example.com", "secret", USER_ID)
    client.auth.user_id = USER_ID
    return client


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def workspace(fake_client, clock) -> Workspace:
    return Workspace(fake_client, confirm_window=3.0, clock=clock)


@pytest.fixture
def quarter(fake_client) -> Dict[str, Any]:
    return fake_client.seed("quarters", user_id=USER_ID, name="Q1 2024", is_active=True)
