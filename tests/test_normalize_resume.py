import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import FakeLLMClient  # noqa: E402
from jobfit.errors import (  # noqa: E402
    ScannedOrEmptyDocument,
    StructuringFailure,
    StructuringParseFailure,
    StructuringUpstreamFailure,
)
from jobfit.normalize import normalize_resume  # noqa: E402
from jobfit.normalize.utils import as_number, split_into_bullets  # noqa: E402


class NormalizeResumeTests(unittest.TestCase):
    def test_full_reply_becomes_structured_resume(self):
        client = FakeLLMClient(
            {
                "candidate": {"name": "Jane Doe", "email": "jane@example.com", "phone": None, "links": None},
                "education": [{"institution": "State University", "degree": "BSc", "gpa": 3.8}],
                "experience": [
                    {"company": "Acme Corp", "role": "Backend Engineer", "duration": "2020 - 2024", "details": ["Built APIs"]}
                ],
                "activities": [],
                "skills": {"technical": ["Python", "python ", "SQL"], "domain": None, "tools": ["Docker"], "soft": []},
                "projects": [],
                "certifications": ["CKA", "CKA"],
            }
        )

        resume = normalize_resume("Jane Doe ...", client=client)

        self.assertEqual(resume.candidate.name, "Jane Doe")
        self.assertIsNone(resume.candidate.phone)
        self.assertEqual(resume.candidate.links, [])
        self.assertEqual(resume.education[0].gpa, "3.8")
        self.assertEqual(resume.skills.technical, ["python", "sql"])
        self.assertEqual(resume.skills.domain, [])
        self.assertEqual(resume.certifications, ["CKA"])
        self.assertIn("RESUME TEXT:\nJane Doe ...", client.calls[0][1].content)

    def test_unpaid_internship_lands_in_activities(self):
        client = FakeLLMClient(
            {
                "experience": [
                    {"company": "City Museum", "role": "Unpaid Research Intern", "duration": "Summer 2022", "details": []}
                ],
                "activities": [],
            }
        )

        resume = normalize_resume("City Museum - Unpaid Research Intern", client=client)

        self.assertEqual(resume.experience, [])
        self.assertEqual(len(resume.activities), 1)
        self.assertEqual(resume.activities[0].organization, "City Museum")
        self.assertEqual(resume.activities[0].role, "Unpaid Research Intern")

    def test_paid_role_stays_in_experience(self):
        client = FakeLLMClient(
            {
                "experience": [
                    {"company": "Acme Corp", "role": "Software Engineering Intern", "duration": "2023", "details": ["Paid summer internship"]}
                ],
            }
        )

        resume = normalize_resume("Acme Corp - Software Engineering Intern", client=client)

        self.assertEqual(len(resume.experience), 1)
        self.assertEqual(resume.activities, [])

    def test_paid_roles_with_club_or_volunteer_wording_stay_in_experience(self):
        client = FakeLLMClient(
            {
                "experience": [
                    {
                        "company": "Sierra Club",
                        "role": "Senior Software Engineer",
                        "duration": "2019 - 2023",
                        "details": ["Built the donor platform."],
                    },
                    {
                        "company": "Acme Corp",
                        "role": "Volunteer Program Manager",
                        "details": ["Recruited and scheduled 200 volunteers.", "Managed a $50k budget."],
                    },
                ]
            }
        )

        resume = normalize_resume("Sierra Club ... Acme Corp ...", client=client)

        self.assertEqual([e.company for e in resume.experience], ["Sierra Club", "Acme Corp"])
        self.assertEqual(resume.experience[1].details, ["Recruited and scheduled 200 volunteers.", "Managed a $50k budget."])
        self.assertEqual(resume.activities, [])

    def test_volunteer_title_moves_with_its_details(self):
        client = FakeLLMClient(
            {"experience": [{"company": "City Food Bank", "role": "Volunteer", "details": ["Sorted donations weekly."]}]}
        )

        resume = normalize_resume("City Food Bank - Volunteer", client=client)

        self.assertEqual(resume.experience, [])
        self.assertEqual(resume.activities[0].organization, "City Food Bank")
        self.assertEqual(resume.activities[0].details, ["Sorted donations weekly."])

    def test_skill_in_two_categories_is_dropped(self):
        client = FakeLLMClient(
            {"skills": {"technical": ["python", "excel"], "tools": ["Excel", "jira"], "soft": ["teamwork"]}}
        )
        resume = normalize_resume("...", client=client)
        self.assertEqual(resume.skills.technical, ["python"])
        self.assertEqual(resume.skills.tools, ["jira"])

    def test_prose_project_description_becomes_bullets(self):
        client = FakeLLMClient(
            {
                "projects": [
                    {"title": "Tracker", "tech": ["React", "React"], "description": "Built a job tracker. Added charts for stats."}
                ]
            }
        )
        resume = normalize_resume("...", client=client)
        self.assertEqual(resume.projects[0].description, ["Built a job tracker.", "Added charts for stats."])
        self.assertEqual(resume.projects[0].tech, ["React"])

    def test_entries_without_identity_are_dropped_not_guessed(self):
        client = FakeLLMClient(
            {
                "experience": [{"company": "", "role": "Engineer"}, "not an object"],
                "education": [{"institution": "State University", "degree": None}],
            }
        )
        resume = normalize_resume("...", client=client)
        self.assertEqual(resume.experience, [])
        self.assertEqual(resume.education, [])

    def test_wrong_section_type_is_parse_failure(self):
        client = FakeLLMClient({"experience": "Acme Corp, engineer"})
        with self.assertRaises(StructuringParseFailure) as ctx:
            normalize_resume("...", client=client)
        self.assertIsInstance(ctx.exception, StructuringFailure)

    def test_reply_without_resume_sections_is_parse_failure(self):
        with self.assertRaises(StructuringParseFailure):
            normalize_resume("...", client=FakeLLMClient({"answer": "ok"}))

    def test_upstream_error(self):
        with self.assertRaises(StructuringUpstreamFailure):
            normalize_resume("...", client=FakeLLMClient(error=ConnectionError("reset")))

    def test_blank_text_skips_delegate(self):
        client = FakeLLMClient({})
        with self.assertRaises(ScannedOrEmptyDocument):
            normalize_resume("  \n ", client=client)
        self.assertEqual(client.calls, [])


class SplitIntoBulletsTests(unittest.TestCase):
    def test_bullet_lines_lose_their_markers(self):
        self.assertEqual(split_into_bullets("- Built APIs\n• Cut latency 30%"), ["Built APIs", "Cut latency 30%"])


class AsNumberTests(unittest.TestCase):
    def test_accepts_numbers_and_numeric_strings(self):
        self.assertEqual(as_number(7), 7.0)
        self.assertEqual(as_number(" 82.5% "), 82.5)

    def test_rejects_non_finite_and_non_numeric_values(self):
        for value in (float("nan"), float("inf"), "NaN", "-Infinity", 10**400, True, "high", None, [1]):
            with self.subTest(value=value):
                self.assertIsNone(as_number(value))


if __name__ == "__main__":
    unittest.main()
