"""Orchestrator: resume-to-job analysis pipeline.

Pipeline (linear, every stage always runs):
    RECEIVED        resume input + job
    STRUCTURED      ResumeRecord (parsed, pre-structured or saved draft)
    MATCHED         matched / missing required skills
    SCORED          0-100 compatibility score
    FEEDBACK_READY  LLM or rule-based feedback
    RETURNED        AnalysisResult

An empty resume is not an error, it simply scores low. Any unexpected
exception yields a safe default result instead of propagating.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from models.responses import AnalysisResult
from models.schemas.job_requirement import JobRequirement
from models.schemas.resume_record import PartialResumeRecord, ResumeRecord
from services import compatibility_scorer, resume_structurer, skill_matcher
from services.feedback_generator import SOURCE_LLM, FeedbackGenerator
from services.gemini_client import get_text_generator
from services.resume_store import ResumeStore

logger = logging.getLogger(__name__)

SAFE_DEFAULT_FEEDBACK = (
    "Error analyzing resume. Please ensure the resume is valid and retry after some time."
)

ResumeInput = str | PartialResumeRecord | Mapping[str, Any] | None


class AnalysisStage(str, Enum):
    RECEIVED = "received"
    STRUCTURED = "structured"
    MATCHED = "matched"
    SCORED = "scored"
    FEEDBACK_READY = "feedback_ready"
    RETURNED = "returned"


@dataclass(frozen=True)
class CandidateContext:
    """Who is being analysed, and where their saved resume lives."""
    candidate_id: str | None = None
    store: ResumeStore | None = None

    def saved_resume(self) -> ResumeRecord | None:
        if self.candidate_id is None or self.store is None:
            return None
        return self.store.get(self.candidate_id)


def _as_job(job: JobRequirement | Mapping[str, Any]) -> JobRequirement:
    if isinstance(job, JobRequirement):
        return job
    return JobRequirement.model_validate(dict(job))


def _structure(resume: ResumeInput, candidate: CandidateContext | None) -> ResumeRecord:
    """Pick the resume source: pre-structured > raw text > saved draft."""
    text = resume if isinstance(resume, str) else None
    partial = None if isinstance(resume, str) else resume

    if partial is not None:
        record = resume_structurer.structure(None, partial)
        if record.skills:
            return record

    if text and text.strip():
        return resume_structurer.structure(text)

    saved = candidate.saved_resume() if candidate else None
    if saved is not None:
        logger.info("Using saved resume for candidate %s", candidate.candidate_id)
        return saved

    return resume_structurer.structure(text or "")


def _required_skills_of(job: Any) -> list[str]:
    if isinstance(job, JobRequirement):
        skills = job.required_skills
    elif isinstance(job, Mapping):
        skills = job.get("skills") or job.get("required_skills") or []
    else:
        skills = getattr(job, "required_skills", None) or []
    if isinstance(skills, str):
        skills = [skills]
    try:
        return [s for s in skills if isinstance(s, str)]
    except TypeError:
        return []


def safe_default_result(job: Any) -> AnalysisResult:
    """Score 0, nothing matched, every required skill missing."""
    return AnalysisResult(
        score=0,
        matched_skills=[],
        missing_skills=[skill_matcher.missing_skill(s) for s in _required_skills_of(job)],
        feedback=[SAFE_DEFAULT_FEEDBACK],
        extracted_skills=[],
        degraded=True,
    )


async def analyze(
    resume: ResumeInput,
    job: JobRequirement | Mapping[str, Any],
    candidate: CandidateContext | None = None,
    feedback_generator: FeedbackGenerator | None = None,
) -> AnalysisResult:
    """Run the full analysis pipeline. Never raises."""
    stage = AnalysisStage.RECEIVED
    try:
        job_requirement = _as_job(job)
        generator = feedback_generator or FeedbackGenerator(get_text_generator())

        # --- Structuring ---
        record = _structure(resume, candidate)
        stage = AnalysisStage.STRUCTURED
        logger.debug("Structured resume with %d skills", len(record.skills))

        # --- Skill matching ---
        match_result = skill_matcher.match(record.skills, job_requirement.required_skills)
        stage = AnalysisStage.MATCHED

        # --- Scoring ---
        matched = match_result.matched_skills
        score = compatibility_scorer.score(record, job_requirement, matched)
        breakdown = compatibility_scorer.score_breakdown(record, job_requirement, matched)
        stage = AnalysisStage.SCORED
        logger.debug("Compatibility score %d (%s)", score, breakdown)

        # --- Feedback ---
        feedback = await generator.generate(
            record, job_requirement, matched, match_result.missing_skills, score
        )
        stage = AnalysisStage.FEEDBACK_READY

        result = AnalysisResult(
            score=score,
            matched_skills=matched,
            missing_skills=match_result.missing_skills,
            feedback=feedback.lines,
            extracted_skills=record.skills,
            score_breakdown=breakdown,
            feedback_source=feedback.source,
            degraded=feedback.source != SOURCE_LLM,
        )
        stage = AnalysisStage.RETURNED
        logger.info(
            "Analysis for '%s' done: score=%d matched=%d missing=%d feedback=%s",
            job_requirement.title, score, len(matched),
            len(match_result.missing_skills), feedback.source,
        )
        return result
    except Exception:
        logger.exception("Resume analysis failed after stage '%s'", stage.value)
        return safe_default_result(job)
