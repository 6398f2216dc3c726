import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import readiness_payload, sample_resume  # noqa: E402
from jobfit.errors import DuplicateVersion, NoActiveVersion, NotFound  # noqa: E402
from jobfit.history import ResumeHistoryStore  # noqa: E402
from jobfit.schemas import ResumeVersion, UserResumes  # noqa: E402
from jobfit.scoring import build_readiness_report  # noqa: E402


def _version(file_name):
    return ResumeVersion(file_name=file_name, raw_text=file_name, structured=sample_resume())


class ResumeHistoryStoreTests(unittest.TestCase):
    def setUp(self):
        self.history = ResumeHistoryStore(UserResumes(user_id="u1"))

    def test_append_keeps_upload_order_and_activates_newest(self):
        first = self.history.append(_version("a.pdf"))
        second = self.history.append(_version("b.pdf"))

        self.assertEqual([v.id for v in self.history.list_ordered()], [first.id, second.id])
        self.assertEqual(self.history.active().id, second.id)
        self.assertEqual(self.history.state.active_version_id, second.id)

    def test_duplicate_file_name_is_rejected(self):
        self.history.append(_version("resume.pdf"))

        with self.assertRaises(DuplicateVersion) as ctx:
            self.history.append(_version("resume.pdf"))

        self.assertEqual(ctx.exception.file_name, "resume.pdf")
        self.assertEqual(ctx.exception.code, "duplicate_version")
        self.assertEqual(len(self.history.list_ordered()), 1)

    def test_empty_history_has_no_active_version(self):
        with self.assertRaises(NoActiveVersion):
            self.history.active()

    def test_deleting_active_version_clears_pointer(self):
        first = self.history.append(_version("a.pdf"))
        second = self.history.append(_version("b.pdf"))

        self.history.delete(second.id)

        self.assertIsNone(self.history.state.active_version_id)
        with self.assertRaises(NoActiveVersion):
            self.history.active()
        self.assertEqual(self.history.set_active(first.id).id, first.id)
        self.assertEqual(self.history.active().id, first.id)

    def test_deleting_inactive_version_keeps_pointer(self):
        first = self.history.append(_version("a.pdf"))
        second = self.history.append(_version("b.pdf"))

        self.history.delete(first.id)

        self.assertEqual(self.history.active().id, second.id)

    def test_deleted_file_name_can_be_reused(self):
        version = self.history.append(_version("resume.pdf"))
        self.history.delete(version.id)
        self.history.append(_version("resume.pdf"))
        self.assertEqual(len(self.history.list_ordered()), 1)

    def test_unknown_ids_raise_not_found(self):
        for operation in (self.history.get, self.history.delete, self.history.set_active):
            with self.subTest(operation=operation.__name__):
                with self.assertRaises(NotFound) as ctx:
                    operation("missing")
                self.assertEqual(ctx.exception.code, "not_found")

    def test_resolve_prefers_explicit_id(self):
        first = self.history.append(_version("a.pdf"))
        self.history.append(_version("b.pdf"))
        self.assertEqual(self.history.resolve(first.id).id, first.id)
        self.assertEqual(self.history.resolve().file_name, "b.pdf")

    def test_attach_readiness(self):
        version = self.history.append(_version("a.pdf"))
        report = build_readiness_report(readiness_payload())

        self.history.attach_readiness(version.id, report)

        self.assertEqual(self.history.get(version.id).readiness_report, report)


if __name__ == "__main__":
    unittest.main()
