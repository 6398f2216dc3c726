from .match_scorer import (
    build_match_report,
    calculate_star_rating,
    get_visibility_zone,
    is_robotic,
    match_resume_to_job,
)
from .readiness_scorer import assess_resume, build_readiness_report, get_quality_level

__all__ = [
    "assess_resume",
    "build_match_report",
    "build_readiness_report",
    "calculate_star_rating",
    "get_quality_level",
    "get_visibility_zone",
    "is_robotic",
    "match_resume_to_job",
]
