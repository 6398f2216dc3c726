from __future__ import annotations

import logging

from jobfit.ai.types import LLMClient
from jobfit.cache.analysis_cache import AnalysisCache
from jobfit.errors import NotFound
from jobfit.history.resume_history import ResumeHistoryStore
from jobfit.normalize.normalize_resume import normalize_resume
from jobfit.parsing.parse import parse_document_bytes
from jobfit.schemas.history import ResumeVersion
from jobfit.schemas.job import Job
from jobfit.schemas.match import MatchReport
from jobfit.schemas.readiness import ReadinessReport
from jobfit.schemas.resume import StructuredResume
from jobfit.scoring.match_scorer import match_resume_to_job
from jobfit.scoring.readiness_scorer import assess_resume
from jobfit.store.document_store import DocumentStore

logger = logging.getLogger(__name__)


class ResumeService:
    """Entry points for callers (API layer, scripts).

    Every operation loads what it needs from the store, does all fallible work
    first, and writes back only once that work has succeeded.
    """

    def __init__(self, store: DocumentStore, *, client: LLMClient | None = None):
        self._store = store
        self._client = client
        self._cache = AnalysisCache(scorer=self._score, job_store=store)

    def _score(self, resume: StructuredResume, job_description: str) -> MatchReport:
        return match_resume_to_job(resume, job_description, client=self._client)

    def _history(self, user_id: str) -> ResumeHistoryStore:
        return ResumeHistoryStore(self._store.get_user_resumes(user_id))

    def _owned_job(self, user_id: str, job_id: str) -> Job:
        job = self._store.get_job(job_id)
        if job is None or job.user_id != user_id:
            raise NotFound("job", job_id)
        return job

    # Resumes

    def normalize(self, raw_text: str) -> StructuredResume:
        return normalize_resume(raw_text, client=self._client)

    def upload_resume(self, user_id: str, file_name: str, content: bytes) -> ResumeVersion:
        history = self._history(user_id)
        history.ensure_available(file_name)

        parsed = parse_document_bytes(file_name, content)
        structured = self.normalize(parsed.text)

        version = history.append(ResumeVersion(file_name=file_name, raw_text=parsed.text, structured=structured))
        self._store.save_user_resumes(history.state)
        return version

    def list_resumes(self, user_id: str) -> list[ResumeVersion]:
        return self._history(user_id).list_ordered()

    def get_resume(self, user_id: str, version_id: str) -> ResumeVersion:
        return self._history(user_id).get(version_id)

    def active_resume(self, user_id: str) -> ResumeVersion:
        return self._history(user_id).active()

    def set_active_resume(self, user_id: str, version_id: str) -> ResumeVersion:
        history = self._history(user_id)
        version = history.set_active(version_id)
        self._store.save_user_resumes(history.state)
        return version

    def delete_resume(self, user_id: str, version_id: str) -> ResumeVersion:
        history = self._history(user_id)
        removed = history.delete(version_id)
        self._store.save_user_resumes(history.state)
        return removed

    def assess(self, user_id: str, version_id: str | None = None) -> ReadinessReport:
        history = self._history(user_id)
        version = history.resolve(version_id)
        report = assess_resume(version.structured, client=self._client)
        history.attach_readiness(version.id, report)
        self._store.save_user_resumes(history.state)
        return report

    # Jobs

    def create_job(
        self,
        user_id: str,
        *,
        company: str,
        position: str,
        job_description: str | None = None,
        location: str = "On-site",
    ) -> Job:
        job = Job(
            user_id=user_id,
            company=company,
            position=position,
            job_description=job_description,
            location=location,  # type: ignore[arg-type]
        )
        job.change_status(job.status)
        self._store.save_job(job)
        logger.info("job_created user_id=%s job_id=%s", user_id, job.id)
        return job

    def get_job(self, user_id: str, job_id: str) -> Job:
        return self._owned_job(user_id, job_id)

    def list_jobs(self, user_id: str) -> list[Job]:
        return self._store.list_jobs(user_id)

    def delete_job(self, user_id: str, job_id: str) -> None:
        self._owned_job(user_id, job_id)
        self._store.delete_job(job_id)

    def update_job_description(self, user_id: str, job_id: str, job_description: str | None) -> Job:
        job = self._owned_job(user_id, job_id)
        job.job_description = job_description
        self._store.save_job(job)
        return job

    def update_job_status(self, user_id: str, job_id: str, status: str, note: str | None = None) -> Job:
        job = self._owned_job(user_id, job_id)
        job.change_status(status, note)
        self._store.save_job(job)
        logger.info("job_status_changed job_id=%s status=%s", job_id, status)
        return job

    # Matching

    def match(
        self,
        user_id: str,
        job_id: str,
        version_id: str | None = None,
        force_refresh: bool = False,
    ) -> tuple[MatchReport, bool]:
        job = self._owned_job(user_id, job_id)
        version = self._history(user_id).resolve(version_id)
        return self._cache.get_or_compute(job, version, force_refresh=force_refresh)

    def match_with_upload(
        self,
        user_id: str,
        job_id: str,
        file_name: str,
        content: bytes,
    ) -> tuple[MatchReport, bool]:
        """Upload a fresh resume and score exactly that artifact, bypassing the cache."""
        self._owned_job(user_id, job_id)
        version = self.upload_resume(user_id, file_name, content)
        return self.match(user_id, job_id, version_id=version.id, force_refresh=True)
