# database/models.py
"""
Typed rows for the four Supabase tables, plus the draft models the forms
validate before anything is sent over the network.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Outcome(str, Enum):
    """Closed set of meeting results."""
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    NO_SHOW = "No show"
    RESCHEDULED = "Rescheduled"
    UNQUALIFIED = "Unqualified"


OUTCOME_CHOICES = [o.value for o in Outcome]


# --------------------------------------------------------------------------- #
# Rows (as stored remotely)
# --------------------------------------------------------------------------- #

class Quarter(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: Optional[str] = None
    name: str
    is_active: bool = False
    created_at: Optional[str] = None


class Goals(BaseModel):
    model_config = ConfigDict(extra="ignore")

    meeting_goal: int
    mmr_goal: float
    id: Optional[str] = None
    quarter_id: Optional[str] = None


class Meeting(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    contact_name: str
    company_name: str
    meeting_date: str
    outcome: Outcome


class Deal(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    value: float
    created_at: Optional[str] = None


def from_row(model: type[BaseModel], row: Dict[str, Any]) -> Any:
    """Map a gateway row onto `model`, ignoring columns it does not declare."""
    return model.model_validate(row)


# --------------------------------------------------------------------------- #
# Drafts (client-side validation, nothing sent until these pass)
# --------------------------------------------------------------------------- #

class _Draft(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class QuarterDraft(_Draft):
    name: str = Field(min_length=1)


class GoalsDraft(_Draft):
    meeting_goal: int = Field(gt=0)
    mmr_goal: float = Field(gt=0, allow_inf_nan=False)


class MeetingDraft(_Draft):
    contact_name: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    meeting_date: date
    outcome: Outcome = Outcome.SCHEDULED

    def to_row(self) -> Dict[str, Any]:
        return {
            "contact_name": self.contact_name,
            "company_name": self.company_name,
            "meeting_date": self.meeting_date.isoformat(),
            "outcome": self.outcome.value,
        }


class MeetingChanges(_Draft):
    """Partial meeting update; unset fields are left untouched remotely."""
    contact_name: Optional[str] = Field(default=None, min_length=1)
    company_name: Optional[str] = Field(default=None, min_length=1)
    meeting_date: Optional[date] = None
    outcome: Optional[Outcome] = None

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, mode="json")


class DealDraft(_Draft):
    name: str = Field(min_length=1)
    value: float = Field(ge=0, allow_inf_nan=False)


class DealChanges(_Draft):
    name: Optional[str] = Field(default=None, min_length=1)
    value: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
