"""
core/onboarding.py
------------------
Two-step welcome flow for a user with no quarters.

Step 1 takes the quarter name, step 2 both goals. Submitting step 2 makes
two dependent writes: the quarter (created active), then its goals row.
They are not one transaction: if the goals write fails the quarter stays,
without goals, and the wizard shows the error so the user can try again.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError
from supabase import Client

from core.log_config import get_logger
from core.quarters import QuarterService
from core.safe_connect import StoreError, require_user, safe_operation
from database import queries
from database.models import GoalsDraft, QuarterDraft
from supabase_client.auth import SessionProvider

log = get_logger(__name__)

GENERIC_ERROR = "Failed to create quarter and goals. Please try again."


class OnboardingWizard:
    def __init__(self, client: Client, session: SessionProvider, quarters: QuarterService):
        self.client = client
        self.session = session
        self.quarters = quarters
        self.step = 1
        self.quarter_name = ""
        self.error: Optional[str] = None
        self.last_error: Optional[StoreError] = None
        self.created_quarter_id: Optional[str] = None

    def submit_name(self, name: str) -> bool:
        """Validate the quarter name and move to step 2."""
        try:
            self.quarter_name = QuarterDraft(name=name).name
        except ValidationError:
            return False
        self.step = 2
        return True

    def back(self) -> None:
        self.step = 1

    def submit_goals(self, meeting_goal: Any, mmr_goal: Any) -> Optional[str]:
        """
        Create the quarter and its goals.

        Returns
        -------
        str or None
            The new quarter id, or None if validation or a write failed.
        """
        if self.step != 2:
            return None
        self.error = None
        try:
            goals = GoalsDraft(meeting_goal=meeting_goal, mmr_goal=mmr_goal)
        except ValidationError:
            return None

        with safe_operation(self, "setting up quarter and goals") as op:
            user_id = require_user(self.session.get_user_id())
            quarter = self.quarters.insert_active(user_id, self.quarter_name)
            self.created_quarter_id = quarter.id
            queries.insert_goals(
                self.client,
                user_id=user_id,
                quarter_id=quarter.id,
                meeting_goal=goals.meeting_goal,
                mmr_goal=goals.mmr_goal,
            )
            log.info("Onboarding complete", quarter_id=quarter.id)
            return quarter.id

        self.error = str(op.error) or GENERIC_ERROR
        return None

    def reset(self) -> None:
        self.step = 1
        self.quarter_name = ""
        self.error = None
        self.last_error = None
        self.created_quarter_id = None
