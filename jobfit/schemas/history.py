from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from jobfit.core.content_hash import fingerprint

from .readiness import ReadinessReport
from .resume import StructuredResume


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResumeVersion(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    file_name: str = Field(min_length=1)
    raw_text: str
    structured: StructuredResume
    uploaded_at: datetime = Field(default_factory=_utc_now)
    readiness_report: ReadinessReport | None = None

    @property
    def content_hash(self) -> str | None:
        return fingerprint(self.structured)


class UserResumes(BaseModel):
    """A user's resume versions in upload order plus the id of the active one."""

    user_id: str
    versions: list[ResumeVersion] = Field(default_factory=list)
    active_version_id: str | None = None
