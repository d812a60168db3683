"""Skill match and score breakdown outputs."""

from pydantic import BaseModel


class MissingSkill(BaseModel):
    """A required skill the candidate lacks, with an upskilling hint."""
    skill: str
    suggestion: str


class MatchResult(BaseModel):
    """Partition of a job's required skills into matched and missing."""
    matched_skills: list[str] = []
    missing_skills: list[MissingSkill] = []


class ScoreBreakdown(BaseModel):
    """Individual compatibility score terms before the final clamp."""
    skills: float = 0.0  # 0-40
    experience: float = 0.0  # 0-40 (35 duration + 5 title bonus)
    education: float = 0.0  # 0, 8 or 15
    contact: float = 0.0  # 5 or 10
