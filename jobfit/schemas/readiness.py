from __future__ import annotations

from pydantic import BaseModel, Field


class ReadinessBreakdown(BaseModel):
    completeness: float = Field(default=0.0, ge=0, le=100)
    keyword_richness: float = Field(default=0.0, ge=0, le=100)
    format_quality: float = Field(default=0.0, ge=0, le=100)
    ats_readiness: float = Field(default=0.0, ge=0, le=100)


class QualityLevel(BaseModel):
    level: str
    description: str


class ReadinessReport(BaseModel):
    overall_score: float = Field(ge=0, le=100)
    score_breakdown: ReadinessBreakdown = Field(default_factory=ReadinessBreakdown)
    quality_level: QualityLevel
    suggested_jobs: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    summary: str = ""
