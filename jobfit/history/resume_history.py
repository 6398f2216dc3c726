from __future__ import annotations

import logging

from jobfit.errors import DuplicateVersion, NoActiveVersion, NotFound
from jobfit.schemas.history import ResumeVersion, UserResumes
from jobfit.schemas.readiness import ReadinessReport

logger = logging.getLogger(__name__)


class ResumeHistoryStore:
    """Ordered resume versions for one user plus an explicit active-version pointer.

    The version list is the only copy of the data. Appending makes the new
    version active. Deleting the active version clears the pointer and the
    caller must pick a replacement with `set_active`; nothing is auto-selected.
    """

    def __init__(self, user_resumes: UserResumes):
        self._state = user_resumes

    @property
    def user_id(self) -> str:
        return self._state.user_id

    @property
    def state(self) -> UserResumes:
        return self._state

    def _find_index(self, version_id: str) -> int | None:
        for index, version in enumerate(self._state.versions):
            if version.id == version_id:
                return index
        return None

    def ensure_available(self, file_name: str) -> None:
        """Raise DuplicateVersion before any normalization work is spent on a taken name."""
        if any(version.file_name == file_name for version in self._state.versions):
            raise DuplicateVersion(file_name)

    def append(self, version: ResumeVersion) -> ResumeVersion:
        self.ensure_available(version.file_name)
        if self._find_index(version.id) is not None:
            raise ValueError(f"Resume version id '{version.id}' already exists.")
        self._state.versions.append(version)
        self._state.active_version_id = version.id
        logger.info("resume_version_appended user_id=%s version_id=%s", self.user_id, version.id)
        return version

    def get(self, version_id: str) -> ResumeVersion:
        index = self._find_index(version_id)
        if index is None:
            raise NotFound("resume_version", version_id)
        return self._state.versions[index]

    def delete(self, version_id: str) -> ResumeVersion:
        index = self._find_index(version_id)
        if index is None:
            raise NotFound("resume_version", version_id)
        removed = self._state.versions.pop(index)
        if self._state.active_version_id == version_id:
            self._state.active_version_id = None
            logger.info("active_resume_cleared user_id=%s version_id=%s", self.user_id, version_id)
        logger.info("resume_version_deleted user_id=%s version_id=%s", self.user_id, version_id)
        return removed

    def list_ordered(self) -> list[ResumeVersion]:
        return list(self._state.versions)

    def active(self) -> ResumeVersion:
        if self._state.active_version_id is None:
            raise NoActiveVersion(self.user_id)
        return self.get(self._state.active_version_id)

    def set_active(self, version_id: str) -> ResumeVersion:
        version = self.get(version_id)
        self._state.active_version_id = version.id
        return version

    def resolve(self, version_id: str | None = None) -> ResumeVersion:
        """The named version, or the active one when no id is given."""
        return self.get(version_id) if version_id else self.active()

    def attach_readiness(self, version_id: str, report: ReadinessReport) -> ResumeVersion:
        version = self.get(version_id)
        version.readiness_report = report
        return version
