from .history import ResumeVersion, UserResumes
from .job import JOB_STATUSES, Job, StatusChange
from .match import MatchedKeyword, MatchReport, PhrasingSuggestion, ScoreBreakdown, Visibility
from .readiness import QualityLevel, ReadinessBreakdown, ReadinessReport
from .resume import (
    ActivityEntry,
    Candidate,
    EducationEntry,
    ExperienceEntry,
    Project,
    SkillSet,
    StructuredResume,
)

__all__ = [
    "ActivityEntry",
    "Candidate",
    "EducationEntry",
    "ExperienceEntry",
    "JOB_STATUSES",
    "Job",
    "MatchReport",
    "MatchedKeyword",
    "PhrasingSuggestion",
    "Project",
    "QualityLevel",
    "ReadinessBreakdown",
    "ReadinessReport",
    "ResumeVersion",
    "ScoreBreakdown",
    "SkillSet",
    "StatusChange",
    "StructuredResume",
    "UserResumes",
    "Visibility",
]
