"""Pydantic contracts shared by the matching core."""

from models.schemas.job_requirement import JobRequirement
from models.schemas.match_result import MatchResult, MissingSkill, ScoreBreakdown
from models.schemas.resume_record import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    PartialResumeRecord,
    ResumeRecord,
)

__all__ = [
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "JobRequirement",
    "MatchResult",
    "MissingSkill",
    "PartialResumeRecord",
    "ResumeRecord",
    "ScoreBreakdown",
]
