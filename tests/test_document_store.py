import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import match_payload, sample_resume  # noqa: E402
from jobfit.schemas import Job, ResumeVersion, UserResumes  # noqa: E402
from jobfit.scoring import build_match_report  # noqa: E402
from jobfit.store import InMemoryDocumentStore, SqliteDocumentStore  # noqa: E402


class _DocumentStoreContract:
    def make_store(self):
        raise NotImplementedError

    def setUp(self):
        self.store = self.make_store()

    def test_job_roundtrip_with_cached_analysis(self):
        job = Job(user_id="u1", company="Acme", position="Engineer", job_description="Python")
        job.change_status("Applied", "referral")
        job.cached_analysis = build_match_report(match_payload()).model_copy(update={"jd_hash": "0badc0de"})

        self.store.save_job(job)
        loaded = self.store.get_job(job.id)

        self.assertEqual(loaded, job)
        self.assertEqual(loaded.cached_analysis.jd_hash, "0badc0de")
        self.assertEqual(loaded.status_history[0].note, "referral")

    def test_save_overwrites_and_delete_removes(self):
        job = Job(user_id="u1", company="Acme", position="Engineer")
        self.store.save_job(job)
        job.job_description = "Updated"
        self.store.save_job(job)

        self.assertEqual(self.store.get_job(job.id).job_description, "Updated")
        self.assertTrue(self.store.delete_job(job.id))
        self.assertFalse(self.store.delete_job(job.id))
        self.assertIsNone(self.store.get_job(job.id))

    def test_list_jobs_is_per_user_newest_first(self):
        now = datetime.now(timezone.utc)
        older = Job(user_id="u1", company="Old Co", position="Engineer", updated_at=now - timedelta(days=1))
        newer = Job(user_id="u1", company="New Co", position="Engineer", updated_at=now)
        other = Job(user_id="u2", company="Else", position="Engineer")
        for job in (older, newer, other):
            self.store.save_job(job)

        self.assertEqual([job.company for job in self.store.list_jobs("u1")], ["New Co", "Old Co"])

    def test_user_resumes_default_and_roundtrip(self):
        self.assertEqual(self.store.get_user_resumes("u1"), UserResumes(user_id="u1"))

        version = ResumeVersion(file_name="resume.pdf", raw_text="Jane Doe", structured=sample_resume())
        state = UserResumes(user_id="u1", versions=[version], active_version_id=version.id)
        self.store.save_user_resumes(state)

        loaded = self.store.get_user_resumes("u1")
        self.assertEqual(loaded, state)
        self.assertEqual(loaded.versions[0].content_hash, version.content_hash)

    def test_returned_records_are_copies(self):
        job = Job(user_id="u1", company="Acme", position="Engineer")
        self.store.save_job(job)

        self.store.get_job(job.id).job_description = "mutated"

        self.assertIsNone(self.store.get_job(job.id).job_description)


class InMemoryDocumentStoreTests(_DocumentStoreContract, unittest.TestCase):
    def make_store(self):
        return InMemoryDocumentStore()


class SqliteDocumentStoreTests(_DocumentStoreContract, unittest.TestCase):
    def make_store(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        store = SqliteDocumentStore(str(Path(self._tmp.name) / "nested" / "jobfit.db"))
        self.addCleanup(store.close)
        return store

    def test_data_survives_reopening(self):
        job = Job(user_id="u1", company="Acme", position="Engineer")
        self.store.save_job(job)
        self.store.close()

        reopened = SqliteDocumentStore(self.store._db_path)
        self.addCleanup(reopened.close)
        self.assertEqual(reopened.get_job(job.id), job)


if __name__ == "__main__":
    unittest.main()
