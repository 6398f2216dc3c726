from __future__ import annotations

import json
import logging
import textwrap
from typing import Any

from pydantic import ValidationError

from jobfit.ai.types import LLMClient
from jobfit.core.config.scoring import get_threshold_bands
from jobfit.errors import ScoringParseFailure, ScoringUpstreamFailure
from jobfit.normalize.utils import SchemaViolation, as_number, clamp, clean_optional, string_list
from jobfit.schemas.readiness import QualityLevel, ReadinessReport
from jobfit.schemas.resume import StructuredResume
from jobfit.services.llm_json import json_completion

logger = logging.getLogger(__name__)

BREAKDOWN_KEYS = ("completeness", "keyword_richness", "format_quality", "ats_readiness")

SYSTEM_PROMPT = textwrap.dedent(
    """
    You assess a resume (JSON) for GENERAL applicant-tracking readiness, with no
    job description. Stay industry-agnostic: judge quality, not field.

    Score each criterion from 0 to 100:
    - completeness: contact, education, experience and skills present; projects
      and activities add value; nothing critical missing.
    - keyword_richness: strong action verbs, quantified achievements, specific
      industry terminology rather than vague language.
    - format_quality: clear structure, consistent formatting, identifiable
      contact info, clearly stated dates.
    - ats_readiness: overall parsability and professional presentation.

    overall_score is the average of the four. Suggest 1-3 job roles (any
    industry), the top 3 strengths, the top 3 actionable improvements and a
    2-sentence summary.

    Output JSON only, no markdown:
    {
      "overall_score": number,
      "score_breakdown": {"completeness": number, "keyword_richness": number,
                          "format_quality": number, "ats_readiness": number},
      "suggested_jobs": ["string"],
      "strengths": ["string"],
      "improvements": ["string"],
      "summary": "string"
    }
    """
).strip()


def get_quality_level(score: float) -> QualityLevel:
    bands = get_threshold_bands("readiness.quality_levels")
    chosen = next((band for band in bands if score >= float(band["min_score"])), bands[-1])
    return QualityLevel(level=chosen["level"], description=chosen["description"])


def build_readiness_report(payload: dict[str, Any]) -> ReadinessReport:
    overall = as_number(payload.get("overall_score"))
    if overall is None:
        raise SchemaViolation("'overall_score' must be present and numeric")
    overall = clamp(overall, 0.0, 100.0)

    breakdown_raw = payload.get("score_breakdown")
    if breakdown_raw is None:
        breakdown_raw = {}
    if not isinstance(breakdown_raw, dict):
        raise SchemaViolation("'score_breakdown' must be an object")

    return ReadinessReport(
        overall_score=overall,
        score_breakdown={
            key: clamp(as_number(breakdown_raw.get(key)) or 0.0, 0.0, 100.0) for key in BREAKDOWN_KEYS
        },
        quality_level=get_quality_level(overall),
        suggested_jobs=string_list(payload.get("suggested_jobs"), path="suggested_jobs"),
        strengths=string_list(payload.get("strengths"), path="strengths"),
        improvements=string_list(payload.get("improvements"), path="improvements"),
        summary=clean_optional(payload.get("summary")) or "",
    )


def assess_resume(resume: StructuredResume, *, client: LLMClient | None = None) -> ReadinessReport:
    resume_json = json.dumps(resume.model_dump(mode="json"), indent=2, ensure_ascii=False)
    payload = json_completion(
        system_prompt=SYSTEM_PROMPT,
        user_prompt=f"RESUME DATA:\n{resume_json}",
        tool_slug="resume_readiness",
        parse_error=ScoringParseFailure,
        upstream_error=ScoringUpstreamFailure,
        client=client,
    )

    try:
        report = build_readiness_report(payload)
    except (SchemaViolation, ValidationError) as exc:
        logger.warning("readiness_report_invalid: %s", exc)
        raise ScoringParseFailure(f"Readiness response did not match the schema: {exc}") from exc

    logger.info("resume_readiness_scored overall=%s level=%s", report.overall_score, report.quality_level.level)
    return report
