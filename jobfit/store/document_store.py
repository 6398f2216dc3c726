from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Protocol

from jobfit.schemas.history import UserResumes
from jobfit.schemas.job import Job


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JobStore(Protocol):
    def get_job(self, job_id: str) -> Job | None: ...

    def save_job(self, job: Job) -> None: ...


class DocumentStore(JobStore, Protocol):
    def delete_job(self, job_id: str) -> bool: ...

    def list_jobs(self, user_id: str) -> list[Job]: ...

    def get_user_resumes(self, user_id: str) -> UserResumes: ...

    def save_user_resumes(self, user_resumes: UserResumes) -> None: ...


class InMemoryDocumentStore:
    """Dict-backed store. Records are copied in and out so callers never share state with it."""

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}
        self._resumes: dict[str, UserResumes] = {}
        self._lock = threading.Lock()

    def get_job(self, job_id: str) -> Job | None:
        with self._lock:
            job = self._jobs.get(job_id)
            return job.model_copy(deep=True) if job else None

    def save_job(self, job: Job) -> None:
        with self._lock:
            self._jobs[job.id] = job.model_copy(deep=True)

    def delete_job(self, job_id: str) -> bool:
        with self._lock:
            return self._jobs.pop(job_id, None) is not None

    def list_jobs(self, user_id: str) -> list[Job]:
        with self._lock:
            jobs = [job.model_copy(deep=True) for job in self._jobs.values() if job.user_id == user_id]
        return sorted(jobs, key=lambda job: job.updated_at, reverse=True)

    def get_user_resumes(self, user_id: str) -> UserResumes:
        with self._lock:
            existing = self._resumes.get(user_id)
            return existing.model_copy(deep=True) if existing else UserResumes(user_id=user_id)

    def save_user_resumes(self, user_resumes: UserResumes) -> None:
        with self._lock:
            self._resumes[user_resumes.user_id] = user_resumes.model_copy(deep=True)


class SqliteDocumentStore:
    """Stores each job and each user's resume history as one JSON document row."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        if self._conn is not None:
            return self._conn

        directory = os.path.dirname(self._db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        conn = sqlite3.connect(
            self._db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA busy_timeout=5000;")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS jobs (
                job_id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                payload_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_jobs_user ON jobs (user_id, updated_at);")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS user_resumes (
                user_id TEXT PRIMARY KEY,
                payload_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        self._conn = conn
        return conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def get_job(self, job_id: str) -> Job | None:
        with self._lock:
            row = self._get_connection().execute(
                "SELECT payload_json FROM jobs WHERE job_id = ?", (job_id,)
            ).fetchone()
        return Job.model_validate_json(row[0]) if row else None

    def save_job(self, job: Job) -> None:
        with self._lock:
            self._get_connection().execute(
                """
                INSERT INTO jobs (job_id, user_id, payload_json, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(job_id) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """,
                (job.id, job.user_id, job.model_dump_json(), job.updated_at.isoformat()),
            )

    def delete_job(self, job_id: str) -> bool:
        with self._lock:
            cur = self._get_connection().execute("DELETE FROM jobs WHERE job_id = ?", (job_id,))
        return cur.rowcount > 0

    def list_jobs(self, user_id: str) -> list[Job]:
        with self._lock:
            rows = self._get_connection().execute(
                "SELECT payload_json FROM jobs WHERE user_id = ? ORDER BY updated_at DESC",
                (user_id,),
            ).fetchall()
        return [Job.model_validate_json(row[0]) for row in rows]

    def get_user_resumes(self, user_id: str) -> UserResumes:
        with self._lock:
            row = self._get_connection().execute(
                "SELECT payload_json FROM user_resumes WHERE user_id = ?", (user_id,)
            ).fetchone()
        return UserResumes.model_validate_json(row[0]) if row else UserResumes(user_id=user_id)

    def save_user_resumes(self, user_resumes: UserResumes) -> None:
        with self._lock:
            self._get_connection().execute(
                """
                INSERT INTO user_resumes (user_id, payload_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """,
                (user_resumes.user_id, user_resumes.model_dump_json(), _utc_now().isoformat()),
            )
