from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .match import MatchReport

JobStatus = Literal["Interested", "Applied", "Interviewing", "Offer", "Rejected"]
JobLocation = Literal["Remote", "On-site", "Hybrid"]

JOB_STATUSES: tuple[str, ...] = ("Interested", "Applied", "Interviewing", "Offer", "Rejected")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StatusChange(BaseModel):
    status: JobStatus
    changed_at: datetime = Field(default_factory=_utc_now)
    note: str | None = None


class Job(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user_id: str
    company: str = Field(min_length=1)
    position: str = Field(min_length=1)
    job_description: str | None = None
    location: JobLocation = "On-site"
    status: JobStatus = "Interested"
    status_history: list[StatusChange] = Field(default_factory=list)
    applied_at: datetime | None = None
    cached_analysis: MatchReport | None = None
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @field_validator("company", "position")
    @classmethod
    def _strip(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    def change_status(self, status: str, note: str | None = None) -> None:
        if status not in JOB_STATUSES:
            raise ValueError(
                f"Invalid status '{status}'. Allowed values: {', '.join(JOB_STATUSES)}"
            )
        now = _utc_now()
        self.status = status  # type: ignore[assignment]
        self.status_history.append(StatusChange(status=status, changed_at=now, note=note))  # type: ignore[arg-type]
        if status == "Applied":
            self.applied_at = now
        self.updated_at = now
