from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from jobfit.core.content_hash import fingerprint
from jobfit.errors import MissingJobDescription
from jobfit.schemas.history import ResumeVersion
from jobfit.schemas.job import Job
from jobfit.schemas.match import MatchReport
from jobfit.schemas.resume import StructuredResume
from jobfit.scoring.match_scorer import match_resume_to_job
from jobfit.store.document_store import JobStore

logger = logging.getLogger(__name__)

MatchFn = Callable[[StructuredResume, str], MatchReport]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_fresh(report: MatchReport | None, *, jd_hash: str | None, resume_hash: str | None) -> bool:
    """A cached report is valid only for the exact inputs it was computed from."""
    if report is None:
        return False
    return report.jd_hash == jd_hash and report.resume_hash == resume_hash


class AnalysisCache:
    """Per-job match report cache keyed by the job description and resume fingerprints.

    There is no explicit invalidation: every read recomputes both fingerprints
    and compares them with the ones stamped on the stored report.
    """

    def __init__(self, scorer: MatchFn = match_resume_to_job, job_store: JobStore | None = None):
        self._scorer = scorer
        self._job_store = job_store

    def get_or_compute(
        self,
        job: Job,
        resume_version: ResumeVersion,
        force_refresh: bool = False,
    ) -> tuple[MatchReport, bool]:
        if not job.job_description or not job.job_description.strip():
            raise MissingJobDescription(job.id)

        jd_hash = fingerprint(job.job_description)
        resume_hash = fingerprint(resume_version.structured)

        if not force_refresh and is_fresh(job.cached_analysis, jd_hash=jd_hash, resume_hash=resume_hash):
            logger.info("analysis_cache_hit job_id=%s resume_id=%s", job.id, resume_version.id)
            return job.cached_analysis, True  # type: ignore[return-value]

        logger.info(
            "analysis_cache_miss job_id=%s resume_id=%s force_refresh=%s",
            job.id,
            resume_version.id,
            force_refresh,
        )
        report = self._scorer(resume_version.structured, job.job_description)
        stamped = report.model_copy(
            update={"jd_hash": jd_hash, "resume_hash": resume_hash, "analyzed_at": _utc_now()}
        )

        if self._job_store is not None:
            self._job_store.save_job(
                job.model_copy(update={"cached_analysis": stamped, "updated_at": stamped.analyzed_at})
            )
        job.cached_analysis = stamped
        job.updated_at = stamped.analyzed_at  # type: ignore[assignment]
        return stamped, False
