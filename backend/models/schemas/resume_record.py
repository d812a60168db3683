"""Structured resume record produced by the structuring engine."""

from typing import Any

from pydantic import BaseModel, ConfigDict

UNKNOWN = "Unknown"
NOT_AVAILABLE = "N/A"

# Values treated as "not extracted" for completeness checks
MISSING_VALUES = frozenset({"", UNKNOWN.lower(), NOT_AVAILABLE.lower()})


class ContactInfo(BaseModel):
    """Candidate contact details. Unknown fields keep their defaults."""
    name: str = UNKNOWN
    email: str = NOT_AVAILABLE
    phone: str = NOT_AVAILABLE
    location: str = NOT_AVAILABLE
    links: list[str] = []

    def is_complete(self) -> bool:
        return all(
            value.strip().lower() not in MISSING_VALUES
            for value in (self.name, self.email, self.phone)
        )


class ExperienceEntry(BaseModel):
    """A single work experience entry."""
    title: str = UNKNOWN
    company: str = UNKNOWN
    period_start: str = NOT_AVAILABLE
    period_end: str = NOT_AVAILABLE  # a year or "present"
    duration_years: int = 0  # derived from the period, never taken from input


class EducationEntry(BaseModel):
    """A single education entry."""
    degree: str = NOT_AVAILABLE
    institution: str = UNKNOWN
    year: str = NOT_AVAILABLE
    level: int = 0  # 0 unspecified, 1 bachelor, 2 master, 3 doctorate


class ResumeRecord(BaseModel):
    """Canonical parsed representation of a resume."""
    contact: ContactInfo = ContactInfo()
    skills: list[str] = []
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []


class PartialResumeRecord(BaseModel):
    """Pre-structured resume payload from an upstream extraction service.

    Every field is optional and entries are loose mappings, since upstream
    producers use slightly different keys (``years`` vs ``period_start``,
    ``school`` vs ``institution``).
    """
    model_config = ConfigDict(extra="ignore")

    contact: dict[str, Any] | None = None
    skills: list[str] | None = None
    experience: list[dict[str, Any]] | None = None
    education: list[dict[str, Any]] | None = None
