"""
core/confirm.py
---------------
Two-step delete for meeting and deal rows.

The first click arms the row; a second click on the same row within the
confirmation window performs the delete. When the window passes the row
disarms on its own and the next click arms it again.

There is a single pending slot per list: arming row B while row A is
pending silently disarms A.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from core.ui_config import DELETE_CONFIRM_SECONDS


class DeleteConfirmation:
    def __init__(
        self,
        window_seconds: float = DELETE_CONFIRM_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window_seconds = window_seconds
        self.clock = clock
        self._pending_id: Optional[str] = None
        self._armed_at = 0.0

    @property
    def pending_id(self) -> Optional[str]:
        """The armed row, or None once the window has passed."""
        if self._pending_id is not None and self.clock() - self._armed_at >= self.window_seconds:
            self._pending_id = None
        return self._pending_id

    def is_pending(self, row_id: str) -> bool:
        return self.pending_id == row_id

    def request(self, row_id: str) -> bool:
        """
        Register a delete click on `row_id`.

        Returns
        -------
        bool
            True if the delete should run now, False if the row was armed.
        """
        if self.is_pending(row_id):
            self._pending_id = None
            return True
        self._pending_id = row_id
        self._armed_at = self.clock()
        return False

    def clear(self) -> None:
        self._pending_id = None
