"""Prompt templates for Gemini API calls."""

from collections.abc import Sequence

from models.schemas.job_requirement import JobRequirement
from models.schemas.resume_record import ResumeRecord

FEEDBACK_INSTRUCTIONS = """
Provide 3-5 concise, actionable feedback points to improve this resume for the job.
Respond with a JSON object wrapped in ```json and ``` in this exact structure:
{"feedback": ["<point 1>", "<point 2>", "<point 3>"]}"""


def _join(items: Sequence[str], empty: str = "none listed") -> str:
    cleaned = [item for item in items if item]
    return ", ".join(cleaned) if cleaned else empty


def build_feedback_prompt(
    resume: ResumeRecord,
    job: JobRequirement,
    matched: Sequence[str] = (),
    missing: Sequence[str] = (),
    max_chars: int = 2000,
) -> str:
    """Ask for 3-5 actionable resume improvements as a JSON feedback list.

    Long job/candidate summaries are cut so the whole prompt stays within
    ``max_chars``; the response instructions are always kept.
    """
    experience = [f"{exp.title} ({exp.duration_years} yrs)" for exp in resume.experience]
    education = [edu.degree for edu in resume.education]

    context = f"""You are an expert resume reviewer helping a candidate apply for a job.

JOB:
- Title: {job.title or "untitled"}
- Domain: {job.domain or "unspecified"}
- Required skills: {_join(job.required_skills)}

CANDIDATE:
- Skills: {_join(resume.skills)}
- Experience: {_join(experience)}
- Education: {_join(education)}
- Matched skills: {_join(matched)}
- Missing skills: {_join(missing)}
"""

    budget = max(0, max_chars - len(FEEDBACK_INSTRUCTIONS))
    if len(context) > budget:
        context = context[: max(0, budget - 3)] + "..."
    return context + FEEDBACK_INSTRUCTIONS
