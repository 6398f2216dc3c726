from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

MatchType = Literal["exact", "synonym"]


class ScoreBreakdown(BaseModel):
    keyword_score: float = Field(default=0.0, ge=0, le=45)
    skills_score: float = Field(default=0.0, ge=0, le=25)
    experience_score: float = Field(default=0.0, ge=0, le=15)
    education_score: float = Field(default=0.0, ge=0, le=10)
    format_score: float = Field(default=0.0, ge=0, le=5)
    profile: float = Field(default=0.0, ge=0, le=100)
    education: float = Field(default=0.0, ge=0, le=100)
    experience: float = Field(default=0.0, ge=0, le=100)
    skills: float = Field(default=0.0, ge=0, le=100)


class Visibility(BaseModel):
    zone: str
    description: str


class MatchedKeyword(BaseModel):
    keyword: str
    proof_quote: str
    match_type: MatchType = "exact"


class PhrasingSuggestion(BaseModel):
    current: str = ""
    suggested: str = ""
    reason: str = ""


class MatchReport(BaseModel):
    score: int = Field(ge=0, le=100)
    score_breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    star_rating: float = Field(default=0.0, ge=0, le=5)
    visibility: Visibility
    matched_keywords: list[MatchedKeyword] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    robotic_flag: bool = False
    robotic_advice: str | None = None
    phrasing_suggestions: list[PhrasingSuggestion] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    reasoning: str = ""
    analyzed_at: datetime | None = None
    jd_hash: str | None = None
    resume_hash: str | None = None
