from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def unique_strings(values: list[str], *, lowercase: bool = False) -> list[str]:
    """Trim, optionally lowercase, and drop empty or repeated entries keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        cleaned = " ".join(str(value).split())
        if lowercase:
            cleaned = cleaned.lower()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result


class Candidate(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    links: list[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    institution: str
    degree: str
    field: str | None = None
    gpa: str | None = None
    start: str | None = None
    end: str | None = None


class ExperienceEntry(BaseModel):
    """Paid or professional role."""

    company: str
    role: str
    duration: str | None = None
    details: list[str] = Field(default_factory=list)


class ActivityEntry(BaseModel):
    """Unpaid, student or volunteer role."""

    organization: str
    role: str
    duration: str | None = None
    details: list[str] = Field(default_factory=list)


class SkillSet(BaseModel):
    technical: list[str] = Field(default_factory=list)
    domain: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)

    @field_validator("technical", "domain", "tools", "soft")
    @classmethod
    def _lowercase_unique(cls, value: list[str]) -> list[str]:
        return unique_strings(value, lowercase=True)


class Project(BaseModel):
    title: str
    tech: list[str] = Field(default_factory=list)
    description: list[str] = Field(default_factory=list)

    @field_validator("tech")
    @classmethod
    def _unique_tech(cls, value: list[str]) -> list[str]:
        return unique_strings(value)


class StructuredResume(BaseModel):
    candidate: Candidate = Field(default_factory=Candidate)
    education: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    activities: list[ActivityEntry] = Field(default_factory=list)
    skills: SkillSet = Field(default_factory=SkillSet)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)

    @field_validator("certifications")
    @classmethod
    def _unique_certifications(cls, value: list[str]) -> list[str]:
        return unique_strings(value)
