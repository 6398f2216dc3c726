from __future__ import annotations

import json
import logging
import math
import textwrap
from typing import Any

from pydantic import ValidationError

from jobfit.ai.types import LLMClient
from jobfit.core.config.scoring import get_scoring_value, get_threshold_bands
from jobfit.errors import ScoringParseFailure, ScoringUpstreamFailure
from jobfit.normalize.utils import SchemaViolation, as_number, clamp, clean_optional, string_list
from jobfit.schemas.match import MatchReport, Visibility
from jobfit.schemas.resume import StructuredResume, unique_strings
from jobfit.services.llm_json import json_completion

logger = logging.getLogger(__name__)

# Rubric maxima; they sum to 100.
WEIGHTED_MAXIMA: dict[str, float] = {
    "keyword_score": 45.0,
    "skills_score": 25.0,
    "experience_score": 15.0,
    "education_score": 10.0,
    "format_score": 5.0,
}
PILLARS = ("profile", "education", "experience", "skills")

SYSTEM_PROMPT = textwrap.dedent(
    """
    You are an ATS scoring engine. Compare the candidate resume (JSON) with the
    job description and return STRICT JSON following the weighted rubric.

    1. keyword_score (0-45): keywords the job description requires.
       - Prefer word-for-word matches; synonyms are worth half.
       - Every matched keyword MUST quote the exact resume sentence proving it.
       - List every required keyword you could not find in missing_keywords.
    2. skills_score (0-25): hard/technical skills and tools only, never soft skills.
       Look at skills, project tech and experience details.
    3. experience_score (0-15): years of experience and role titles versus the
       stated requirement.
    4. education_score (0-10): degree/field and certifications versus requirements.
    5. format_score (0-5): deduct for missing contact info, missing sections or
       chaotic structure; full marks for a complete, well-structured record.

    Also score four pillars from 0 to 100: profile (contact, links), education,
    experience, skills.

    Be strict and mathematical. Output JSON only, no markdown:
    {
      "total_score": number,
      "score_breakdown": {
        "keyword_score": number, "skills_score": number, "experience_score": number,
        "education_score": number, "format_score": number,
        "profile": number, "education": number, "experience": number, "skills": number
      },
      "matched_keywords": [{"keyword": "string", "proof_quote": "string", "match_type": "exact|synonym"}],
      "missing_keywords": ["string"],
      "robotic_advice": "string|null",
      "phrasing_suggestions": [{"current": "string", "suggested": "string", "reason": "string"}],
      "strengths": ["string"],
      "improvements": ["string"],
      "reasoning": "string (2-3 sentences)"
    }
    """
).strip()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_star_rating(pillars: dict[str, float]) -> float:
    """Each pillar (0-100) contributes up to `per_pillar` stars; 4 pillars make 5 stars."""
    per_pillar = float(get_scoring_value("match.stars.per_pillar", 1.25))
    stars = sum(clamp(float(pillars.get(name, 0.0)), 0.0, 100.0) / 100 * per_pillar for name in PILLARS)
    return round(stars, 1)


def get_visibility_zone(score: float) -> Visibility:
    bands = get_threshold_bands("match.visibility")
    chosen = next((band for band in bands if score >= float(band["min_score"])), bands[-1])
    return Visibility(zone=chosen["zone"], description=chosen["description"])


def is_robotic(score: float) -> bool:
    return score >= float(get_scoring_value("match.robotic.threshold", 95))


def _keyword_evidence(payload: dict[str, Any]) -> tuple[list[dict[str, str]], list[str]]:
    raw_matches = payload.get("matched_keywords")
    if raw_matches is None:
        raw_matches = []
    if not isinstance(raw_matches, list):
        raise SchemaViolation("'matched_keywords' must be a list")

    matched: list[dict[str, str]] = []
    unproven: list[str] = []
    seen: set[str] = set()
    for item in raw_matches:
        if isinstance(item, str):
            item = {"keyword": item}
        if not isinstance(item, dict):
            continue
        keyword = clean_optional(item.get("keyword"))
        if not keyword or keyword.lower() in seen:
            continue
        seen.add(keyword.lower())
        quote = clean_optional(item.get("proof_quote"))
        if not quote:
            unproven.append(keyword)
            continue
        match_type = "synonym" if str(item.get("match_type", "")).strip().lower() == "synonym" else "exact"
        matched.append({"keyword": keyword, "proof_quote": quote, "match_type": match_type})

    if unproven:
        logger.info("keywords_without_proof moved_to_missing=%s", ",".join(unproven))

    missing = unique_strings([*string_list(payload.get("missing_keywords"), path="missing_keywords"), *unproven])
    proven = {item["keyword"].lower() for item in matched}
    missing = [keyword for keyword in missing if keyword.lower() not in proven]
    return matched, missing


def _keyword_score(matched: list[dict[str, str]], missing: list[str], fallback: float | None) -> float | None:
    total = len(matched) + len(missing)
    if total == 0:
        return fallback
    synonym_credit = float(get_scoring_value("match.synonym_credit", 0.5))
    credit = sum(synonym_credit if item["match_type"] == "synonym" else 1.0 for item in matched)
    return WEIGHTED_MAXIMA["keyword_score"] * credit / total


def _phrasing_suggestions(value: Any) -> list[dict[str, str]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaViolation("'phrasing_suggestions' must be a list")
    suggestions = []
    for item in value:
        if not isinstance(item, dict):
            continue
        suggestion = {key: clean_optional(item.get(key)) or "" for key in ("current", "suggested", "reason")}
        if suggestion["current"] or suggestion["suggested"]:
            suggestions.append(suggestion)
    return suggestions


def build_match_report(payload: dict[str, Any]) -> MatchReport:
    """Project a delegate reply onto MatchReport, owning all weighting arithmetic."""
    breakdown_raw = payload.get("score_breakdown")
    if breakdown_raw is None:
        breakdown_raw = {}
    if not isinstance(breakdown_raw, dict):
        raise SchemaViolation("'score_breakdown' must be an object")

    matched, missing = _keyword_evidence(payload)

    weighted: dict[str, float] = {}
    for key, maximum in WEIGHTED_MAXIMA.items():
        value = as_number(breakdown_raw.get(key))
        if key == "keyword_score":
            value = _keyword_score(matched, missing, value)
        if value is not None:
            weighted[key] = clamp(value, 0.0, maximum)

    if weighted:
        total = sum(weighted.values())
    else:
        delegate_total = as_number(payload.get("total_score"))
        if delegate_total is None:
            raise SchemaViolation("response has neither 'total_score' nor weighted sub-scores")
        total = delegate_total
    score = _round_half_up(clamp(total, 0.0, 100.0))

    pillars = {name: clamp(as_number(breakdown_raw.get(name)) or 0.0, 0.0, 100.0) for name in PILLARS}
    robotic = is_robotic(score)
    robotic_advice = None
    if robotic:
        robotic_advice = clean_optional(payload.get("robotic_advice")) or str(
            get_scoring_value("match.robotic.advice", "")
        ).strip()

    return MatchReport(
        score=score,
        score_breakdown={
            **{key: round(weighted.get(key, 0.0), 1) for key in WEIGHTED_MAXIMA},
            **{name: round(value, 1) for name, value in pillars.items()},
        },
        star_rating=calculate_star_rating(pillars),
        visibility=get_visibility_zone(score),
        matched_keywords=matched,
        missing_keywords=missing,
        robotic_flag=robotic,
        robotic_advice=robotic_advice,
        phrasing_suggestions=_phrasing_suggestions(payload.get("phrasing_suggestions")),
        strengths=string_list(payload.get("strengths"), path="strengths"),
        improvements=string_list(payload.get("improvements"), path="improvements"),
        reasoning=clean_optional(payload.get("reasoning")) or "",
    )


def match_resume_to_job(
    resume: StructuredResume,
    job_description: str,
    *,
    client: LLMClient | None = None,
) -> MatchReport:
    resume_json = json.dumps(resume.model_dump(mode="json"), indent=2, ensure_ascii=False)
    payload = json_completion(
        system_prompt=SYSTEM_PROMPT,
        user_prompt=f"CANDIDATE RESUME:\n{resume_json}\n\nJOB DESCRIPTION:\n{job_description}",
        tool_slug="job_match",
        parse_error=ScoringParseFailure,
        upstream_error=ScoringUpstreamFailure,
        client=client,
    )

    try:
        report = build_match_report(payload)
    except (SchemaViolation, ValidationError) as exc:
        logger.warning("match_report_invalid: %s", exc)
        raise ScoringParseFailure(f"Match response did not match the schema: {exc}") from exc

    delegate_total = as_number(payload.get("total_score"))
    if delegate_total is not None and abs(delegate_total - report.score) > 1:
        logger.info("match_total_recomputed delegate=%s computed=%s", delegate_total, report.score)
    logger.info("job_match_scored score=%s stars=%s zone=%s", report.score, report.star_rating, report.visibility.zone)
    return report
