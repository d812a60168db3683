"""Synonym-aware matching of candidate skills against job requirements."""

import logging
from collections.abc import Iterable, Sequence

from models.schemas.match_result import MatchResult, MissingSkill
from services.skill_normalizer import MIN_FUZZY_LENGTH, canonical_of, normalize

logger = logging.getLogger(__name__)

SUGGESTION_TEMPLATE = "Consider learning {skill} through online courses or practical projects."


def suggestion_for(skill: str) -> str:
    return SUGGESTION_TEMPLATE.format(skill=skill)


def missing_skill(skill: str) -> MissingSkill:
    return MissingSkill(skill=skill, suggestion=suggestion_for(skill))


def skills_match(candidate: str, required: str) -> bool:
    """Compare two already-normalized skills.

    True on equality, on substring containment in either direction (the
    contained side must be at least MIN_FUZZY_LENGTH long), or when both
    resolve to the same canonical table entry. Empty skills never match.
    """
    if not candidate or not required:
        return False
    if candidate == required:
        return True

    shorter, longer = sorted((candidate, required), key=len)
    if len(shorter) >= MIN_FUZZY_LENGTH and shorter in longer:
        return True

    canonical = canonical_of(candidate)
    return canonical is not None and canonical == canonical_of(required)


def match(candidate_skills: Iterable[str], required_skills: Sequence[str]) -> MatchResult:
    """Partition required skills into matched and missing.

    Output keeps the caller's original spelling of each required skill.
    """
    candidates = {normalize(s) for s in candidate_skills if isinstance(s, str)}
    candidates.discard("")

    matched: list[str] = []
    missing: list[MissingSkill] = []
    for skill in required_skills:
        required = normalize(skill)
        if any(skills_match(c, required) for c in candidates):
            matched.append(skill)
        else:
            missing.append(missing_skill(skill))

    logger.debug("Matched %d of %d required skills", len(matched), len(required_skills))
    return MatchResult(matched_skills=matched, missing_skills=missing)
