import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import sample_resume  # noqa: E402
from jobfit.core.content_hash import fingerprint  # noqa: E402


class FingerprintTests(unittest.TestCase):
    def test_is_eight_hex_chars_and_deterministic(self):
        first = fingerprint("Senior Python engineer")
        self.assertEqual(first, fingerprint("Senior Python engineer"))
        self.assertEqual(len(first), 8)
        int(first, 16)

    def test_none_has_no_fingerprint_but_empty_string_does(self):
        self.assertIsNone(fingerprint(None))
        self.assertIsNotNone(fingerprint(""))

    def test_mapping_key_order_does_not_matter(self):
        self.assertEqual(fingerprint({"a": 1, "b": [1, 2]}), fingerprint({"b": [1, 2], "a": 1}))

    def test_model_and_its_dump_share_a_fingerprint(self):
        resume = sample_resume()
        self.assertEqual(fingerprint(resume), fingerprint(resume.model_dump(mode="json")))
        self.assertEqual(fingerprint(resume), fingerprint(sample_resume()))

    def test_records_differing_in_one_field_differ(self):
        base = sample_resume()
        renamed = base.model_copy(deep=True)
        renamed.candidate.phone = "+1 555 0101"
        extra_cert = sample_resume(certifications=["AWS Certified Developer", "CKA"])

        self.assertNotEqual(fingerprint(base), fingerprint(renamed))
        self.assertNotEqual(fingerprint(base), fingerprint(extra_cert))

    def test_list_order_is_significant(self):
        self.assertNotEqual(fingerprint(["a", "b"]), fingerprint(["b", "a"]))


if __name__ == "__main__":
    unittest.main()
