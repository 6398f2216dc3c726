from __future__ import annotations

import logging
import textwrap
from typing import Any

from pydantic import ValidationError

from jobfit.ai.types import LLMClient
from jobfit.core.config.scoring import get_scoring_value
from jobfit.errors import ScannedOrEmptyDocument, StructuringParseFailure, StructuringUpstreamFailure
from jobfit.schemas.resume import StructuredResume, unique_strings
from jobfit.services.llm_json import json_completion

from .utils import SchemaViolation, clean_optional, contains_marker, normalize_line, split_into_bullets, string_list

logger = logging.getLogger(__name__)

SKILL_CATEGORIES = ("technical", "domain", "tools", "soft")
_TOP_LEVEL_KEYS = {"candidate", "education", "experience", "activities", "skills", "projects", "certifications"}

SYSTEM_PROMPT = textwrap.dedent(
    """
    You convert noisy text extracted from a resume document into ONE strict JSON
    object. Automated scoring reads your output, so ambiguity breaks it.

    OUTPUT
    - JSON only: no markdown, no commentary, no keys beyond the schema.

    INTEGRITY
    - Never invent data. Missing values are null or an empty array.
    - Never guess dates, companies, roles or skills.
    - Precision beats completeness: when unsure, leave it out.

    CLEANING
    - Drop page headers/footers ("Page 1 of 2") and visual artifacts.
    - Deduplicate repeated name, email and phone lines.
    - Join lines that were broken mid-sentence.

    CLASSIFICATION
    - "experience" holds PAID or PROFESSIONAL roles only: full-time, part-time,
      contract, freelance, paid internships.
    - "activities" holds clubs, societies, campus ambassador roles, student
      leadership, volunteering and any unpaid work.
    - Projects are never experience.

    SKILLS (any industry)
    - technical: methods and hard skills (programming, accounting, legal research, ...)
    - domain: industry knowledge (finance, healthcare, logistics, ...)
    - tools: software, platforms, equipment (Excel, SAP, AutoCAD, ...)
    - soft: communication, leadership, teamwork, ...
    - lowercase strings, no duplicates, no vague buzzwords.
    - If an item could belong to more than one category, EXCLUDE it.

    PROJECTS
    - "description" is an array of bullet strings, never a paragraph.

    SCHEMA
    {
      "candidate": {"name": "string|null", "email": "string|null", "phone": "string|null", "links": ["string"]},
      "education": [{"institution": "string", "degree": "string", "field": "string|null",
                     "gpa": "string|null", "start": "string|null", "end": "string|null"}],
      "experience": [{"company": "string", "role": "string", "duration": "string|null", "details": ["string"]}],
      "activities": [{"organization": "string", "role": "string", "duration": "string|null", "details": ["string"]}],
      "skills": {"technical": ["string"], "domain": ["string"], "tools": ["string"], "soft": ["string"]},
      "projects": [{"title": "string", "tech": ["string"], "description": ["string"]}],
      "certifications": ["string"]
    }
    """
).strip()


def _entry_list(value: Any, *, path: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaViolation(f"'{path}' must be a list")
    entries = []
    for index, item in enumerate(value):
        if isinstance(item, dict):
            entries.append(item)
        else:
            logger.info("structured_entry_dropped section=%s index=%s reason=not_an_object", path, index)
    return entries


def _keep_if_identified(entry: dict[str, Any], required: tuple[str, ...], *, section: str) -> bool:
    missing = [key for key in required if not entry.get(key)]
    if missing:
        logger.info("structured_entry_dropped section=%s missing=%s", section, ",".join(missing))
        return False
    return True


def _repair_candidate(value: Any) -> dict[str, Any]:
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise SchemaViolation("'candidate' must be an object")
    return {
        "name": clean_optional(value.get("name")),
        "email": clean_optional(value.get("email")),
        "phone": clean_optional(value.get("phone")),
        "links": unique_strings(string_list(value.get("links"), path="candidate.links")),
    }


def _repair_education(value: Any) -> list[dict[str, Any]]:
    repaired = []
    for item in _entry_list(value, path="education"):
        entry = {key: clean_optional(item.get(key)) for key in ("institution", "degree", "field", "gpa", "start", "end")}
        if _keep_if_identified(entry, ("institution", "degree"), section="education"):
            repaired.append(entry)
    return repaired


def _bullets(value: Any, *, path: str) -> list[str]:
    if isinstance(value, str):
        return split_into_bullets(value)
    return string_list(value, path=path)


def _repair_experience(value: Any) -> list[dict[str, Any]]:
    repaired = []
    for item in _entry_list(value, path="experience"):
        entry = {
            "company": clean_optional(item.get("company")),
            "role": clean_optional(item.get("role")),
            "duration": clean_optional(item.get("duration")),
            "details": _bullets(item.get("details"), path="experience.details"),
        }
        if _keep_if_identified(entry, ("company", "role"), section="experience"):
            repaired.append(entry)
    return repaired


def _repair_activities(value: Any) -> list[dict[str, Any]]:
    repaired = []
    for item in _entry_list(value, path="activities"):
        entry = {
            "organization": clean_optional(item.get("organization")),
            "role": clean_optional(item.get("role")),
            "duration": clean_optional(item.get("duration")),
            "details": _bullets(item.get("details"), path="activities.details"),
        }
        if _keep_if_identified(entry, ("organization", "role"), section="activities"):
            repaired.append(entry)
    return repaired


def _repair_projects(value: Any) -> list[dict[str, Any]]:
    repaired = []
    for item in _entry_list(value, path="projects"):
        entry = {
            "title": clean_optional(item.get("title")),
            "tech": string_list(item.get("tech"), path="projects.tech"),
            "description": _bullets(item.get("description"), path="projects.description"),
        }
        if _keep_if_identified(entry, ("title",), section="projects"):
            repaired.append(entry)
    return repaired


def _repair_skills(value: Any) -> dict[str, list[str]]:
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise SchemaViolation("'skills' must be an object keyed by category")

    categorized = {
        category: unique_strings(string_list(value.get(category), path=f"skills.{category}"), lowercase=True)
        for category in SKILL_CATEGORIES
    }

    seen_in: dict[str, int] = {}
    for items in categorized.values():
        for item in items:
            seen_in[item] = seen_in.get(item, 0) + 1
    ambiguous = {item for item, count in seen_in.items() if count > 1}
    if ambiguous:
        logger.info("ambiguous_skills_dropped skills=%s", ",".join(sorted(ambiguous)))

    return {
        category: [item for item in items if item not in ambiguous]
        for category, items in categorized.items()
    }


def _is_unpaid_role_title(role: str) -> bool:
    """Only the role title is checked. Company names and details never move an entry."""
    markers = get_scoring_value("normalize.unpaid_role_markers", [])
    volunteer_titles = {title.lower() for title in get_scoring_value("normalize.volunteer_role_titles", [])}
    return contains_marker(role, markers) or normalize_line(role).lower() in volunteer_titles


def _split_experience(
    experience: list[dict[str, Any]], activities: list[dict[str, Any]]
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    paid: list[dict[str, Any]] = []
    moved: list[dict[str, Any]] = []
    for entry in experience:
        if _is_unpaid_role_title(entry["role"]):
            logger.info(
                "experience_reclassified company=%s role=%s details=%s",
                entry["company"],
                entry["role"],
                len(entry["details"]),
            )
            moved.append(
                {
                    "organization": entry["company"],
                    "role": entry["role"],
                    "duration": entry["duration"],
                    "details": entry["details"],
                }
            )
        else:
            paid.append(entry)
    return paid, activities + moved


def repair_structured_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Coerce a loosely-typed delegate reply into the StructuredResume shape.

    Absent or null fields become explicit empties, unidentifiable entries are
    dropped, skills are lowercased and de-duplicated with cross-category items
    removed, prose descriptions become bullets, and experience entries whose
    role title says they are unpaid move to activities with their details.
    Fields of the wrong type raise SchemaViolation.
    """
    if not _TOP_LEVEL_KEYS.intersection(payload):
        raise SchemaViolation("response contains none of the resume sections")

    experience, activities = _split_experience(
        _repair_experience(payload.get("experience")),
        _repair_activities(payload.get("activities")),
    )
    return {
        "candidate": _repair_candidate(payload.get("candidate")),
        "education": _repair_education(payload.get("education")),
        "experience": experience,
        "activities": activities,
        "skills": _repair_skills(payload.get("skills")),
        "projects": _repair_projects(payload.get("projects")),
        "certifications": string_list(payload.get("certifications"), path="certifications"),
    }


def normalize_resume(raw_text: str, *, client: LLMClient | None = None) -> StructuredResume:
    if not raw_text or not raw_text.strip():
        raise ScannedOrEmptyDocument("Resume text is empty; nothing to normalize.")

    payload = json_completion(
        system_prompt=SYSTEM_PROMPT,
        user_prompt=f"RESUME TEXT:\n{raw_text}",
        tool_slug="resume_structuring",
        parse_error=StructuringParseFailure,
        upstream_error=StructuringUpstreamFailure,
        client=client,
    )

    try:
        resume = StructuredResume.model_validate(repair_structured_payload(payload))
    except (SchemaViolation, ValidationError) as exc:
        logger.warning("structured_resume_invalid: %s", exc)
        raise StructuringParseFailure(f"Structured resume did not match the schema: {exc}") from exc

    logger.info(
        "resume_normalized experience=%s activities=%s projects=%s",
        len(resume.experience),
        len(resume.activities),
        len(resume.projects),
    )
    return resume
