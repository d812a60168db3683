"""Compatibility scorer: weighted 0-100 score of resume-to-job fit.

Weights:
- skills (40): share of required skills matched
- experience (35 + 5): 5 points per year, capped at 35, plus a title bonus
- education (15): technical degree 15, any education 8
- contact (10): complete contact 10, otherwise 5

Skills dominate as the primary signal for technical fit; education and
contact act as smaller completeness signals.
"""

from collections.abc import Sequence

from models.schemas.job_requirement import JobRequirement
from models.schemas.match_result import ScoreBreakdown
from models.schemas.resume_record import ResumeRecord

W_SKILLS = 40
POINTS_PER_YEAR = 5
MAX_EXPERIENCE_POINTS = 35
TITLE_BONUS = 5
EDUCATION_RELEVANT = 15
EDUCATION_ANY = 8
CONTACT_COMPLETE = 10
CONTACT_PARTIAL = 5

RELEVANT_DEGREE_TERMS = ("computer", "software", "engineering", "technology", "science")


def _first_word(text: str) -> str:
    words = text.lower().split()
    return words[0] if words else ""


def title_overlaps(resume: ResumeRecord, job: JobRequirement) -> bool:
    """True if any experience title shares its first word with the job title.

    Only the first whitespace-delimited word is compared, so "Senior Backend
    Engineer" does not overlap "Backend Developer".
    """
    job_word = _first_word(job.title)
    if not job_word:
        return False
    return any(_first_word(exp.title) == job_word for exp in resume.experience)


def skills_points(job: JobRequirement, matched: Sequence[str]) -> float:
    if not job.required_skills:
        return 0.0
    return len(matched) / max(len(job.required_skills), 1) * W_SKILLS


def experience_points(resume: ResumeRecord, job: JobRequirement) -> float:
    total_years = sum(max(0, exp.duration_years) for exp in resume.experience)
    points = min(total_years * POINTS_PER_YEAR, MAX_EXPERIENCE_POINTS)
    if title_overlaps(resume, job):
        points += TITLE_BONUS
    return float(points)


def education_points(resume: ResumeRecord) -> float:
    for edu in resume.education:
        degree = edu.degree.lower()
        if any(term in degree for term in RELEVANT_DEGREE_TERMS):
            return float(EDUCATION_RELEVANT)
    return float(EDUCATION_ANY) if resume.education else 0.0


def contact_points(resume: ResumeRecord) -> float:
    return float(CONTACT_COMPLETE if resume.contact.is_complete() else CONTACT_PARTIAL)


def score_breakdown(
    resume: ResumeRecord, job: JobRequirement, matched: Sequence[str]
) -> ScoreBreakdown:
    return ScoreBreakdown(
        skills=round(skills_points(job, matched), 2),
        experience=experience_points(resume, job),
        education=education_points(resume),
        contact=contact_points(resume),
    )


def score(resume: ResumeRecord, job: JobRequirement, matched: Sequence[str]) -> int:
    """Compute the 0-100 compatibility score. Pure and deterministic."""
    raw = (
        skills_points(job, matched)
        + experience_points(resume, job)
        + education_points(resume)
        + contact_points(resume)
    )
    return min(100, max(0, round(raw)))
