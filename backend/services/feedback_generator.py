"""Feedback generator: improvement suggestions for a resume against a job.

Tier 1 (always available): deterministic rules over the match and score.
Tier 2 (optional): an LLM asked for 3-5 feedback points. A usable LLM answer
replaces the Tier 1 lines entirely; any failure falls back to Tier 1.
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from config import settings
from models.schemas.job_requirement import JobRequirement
from models.schemas.match_result import MissingSkill
from models.schemas.resume_record import ResumeRecord
from services import prompt_builder
from services.compatibility_scorer import title_overlaps
from services.exceptions import ProviderError
from services.gemini_client import TextGenerator

logger = logging.getLogger(__name__)

SOURCE_LLM = "llm"
SOURCE_FALLBACK = "fallback"

MAX_LISTED_SKILLS = 3


@dataclass(frozen=True)
class GeneratedFeedback:
    lines: list[str]
    source: str


# ---------------------------------------------------------------------------
# Tier 1: deterministic fallback
# ---------------------------------------------------------------------------

def _closing_line(score: int) -> str:
    if score >= 80:
        return "Excellent match! Your profile aligns strongly with this role."
    if score >= 60:
        return "Good potential. Closing a few gaps would make you a strong candidate."
    if score >= 40:
        return "Moderate match. Strengthen the missing skills to improve your chances."
    return "Build more skills and experience relevant to this role before applying."


def _missing_names(missing: Sequence[MissingSkill | str]) -> list[str]:
    return [m.skill if isinstance(m, MissingSkill) else m for m in missing]


def fallback_feedback(
    resume: ResumeRecord,
    job: JobRequirement,
    matched: Sequence[str],
    missing: Sequence[MissingSkill | str],
    score: int,
) -> list[str]:
    """Rule-based feedback. Always returns at least the closing line."""
    lines: list[str] = []

    if matched:
        lines.append(
            f"Strong match on {', '.join(matched[:MAX_LISTED_SKILLS])}. "
            "Highlight these skills prominently."
        )

    missing_names = _missing_names(missing)
    if missing_names:
        lines.append(
            f"Consider developing {', '.join(missing_names[:MAX_LISTED_SKILLS])} "
            "to meet the job requirements."
        )

    if not resume.experience:
        lines.append("Add work experience, internships or projects that show practical skills.")
    elif not title_overlaps(resume, job):
        lines.append(
            f"Tailor your experience descriptions to emphasize work relevant to {job.title or 'this role'}."
        )
    else:
        lines.append("Your experience is relevant to this role. Quantify your achievements.")

    if not resume.education:
        lines.append("Include your education, degrees or relevant certifications.")

    if not resume.contact.is_complete():
        lines.append("Complete your contact information with name, email and phone number.")

    lines.append(_closing_line(score))
    return lines


# ---------------------------------------------------------------------------
# Tier 2: LLM enrichment
# ---------------------------------------------------------------------------

def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
        text = text.strip()
    return text


def parse_feedback(text: str) -> list[str] | None:
    """Parse ``{"feedback": [...]}`` from an LLM reply, fenced or not."""
    try:
        data = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.error("Failed to parse feedback response as JSON: %s", e)
        return None

    items = data.get("feedback") if isinstance(data, dict) else None
    if not isinstance(items, list):
        logger.error("Feedback response has no 'feedback' list")
        return None

    lines = [item.strip() for item in items if isinstance(item, str) and item.strip()]
    return lines or None


class FeedbackGenerator:
    """Produces feedback lines, enriched by a TextGenerator when available.

    Retries the LLM on timeouts, HTTP 429 and HTTP 5xx with exponential
    backoff (``base_delay * 2 ** (attempt - 1)``). Never raises.
    """

    def __init__(
        self,
        text_generator: TextGenerator | None = None,
        max_attempts: int = settings.feedback_max_attempts,
        base_delay: float = settings.feedback_base_delay_seconds,
        max_prompt_chars: int = settings.feedback_max_prompt_chars,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._text_generator = text_generator
        self._max_attempts = max(1, max_attempts)
        self._base_delay = base_delay
        self._max_prompt_chars = max_prompt_chars
        self._sleep = sleep

    async def generate(
        self,
        resume: ResumeRecord,
        job: JobRequirement,
        matched: Sequence[str],
        missing: Sequence[MissingSkill | str],
        score: int,
    ) -> GeneratedFeedback:
        if self._text_generator is not None:
            prompt = prompt_builder.build_feedback_prompt(
                resume,
                job,
                matched=matched,
                missing=_missing_names(missing),
                max_chars=self._max_prompt_chars,
            )
            lines = await self._request_feedback(prompt)
            if lines:
                return GeneratedFeedback(lines=lines, source=SOURCE_LLM)
            logger.warning("LLM feedback unavailable, using rule-based feedback")

        return GeneratedFeedback(
            lines=fallback_feedback(resume, job, matched, missing, score),
            source=SOURCE_FALLBACK,
        )

    async def generate_feedback(
        self,
        resume: ResumeRecord,
        job: JobRequirement,
        matched: Sequence[str],
        missing: Sequence[MissingSkill | str],
        score: int,
    ) -> list[str]:
        """Feedback lines only. Never empty."""
        result = await self.generate(resume, job, matched, missing, score)
        return result.lines

    async def _request_feedback(self, prompt: str) -> list[str] | None:
        for attempt in range(1, self._max_attempts + 1):
            try:
                text = await self._text_generator.generate(prompt)
            except ProviderError as e:
                if not e.retryable:
                    logger.error("LLM feedback request failed (not retryable): %s", e)
                    return None
                logger.warning(
                    "LLM feedback attempt %d/%d failed: %s", attempt, self._max_attempts, e
                )
            except Exception:
                logger.exception("Unexpected error requesting LLM feedback")
                return None
            else:
                return parse_feedback(text)

            if attempt < self._max_attempts:
                delay = self._base_delay * 2 ** (attempt - 1)
                logger.info("Retrying LLM feedback in %.1fs", delay)
                await self._sleep(delay)

        logger.warning("LLM feedback retries exhausted after %d attempts", self._max_attempts)
        return None
