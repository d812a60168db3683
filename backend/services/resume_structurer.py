"""Resume structuring engine: raw text or pre-structured payload -> ResumeRecord.

Two strategies:
1. Pass-through with field defaulting when an upstream extractor already
   produced structured data (non-empty skills).
2. Regex/keyword heuristics over plain text.

Extraction is best-effort and never raises.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from models.schemas.resume_record import (
    NOT_AVAILABLE,
    UNKNOWN,
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    PartialResumeRecord,
    ResumeRecord,
)
from services import section_parser
from services.section_parser import PRESENT, YEAR_RANGE_RE
from services.skill_normalizer import SKILL_KEYWORDS, normalize

logger = logging.getLogger(__name__)

# Common English words that are also skill names. Only accepted on list-like lines.
AMBIGUOUS_KEYWORDS = frozenset({
    "c", "go", "next", "node", "rest", "express", "spring", "swift", "rust",
    "sketch", "ts", "py", "ml", "ux", "torch", "mongo", "ror", "agile",
})

_TOKEN_RE = re.compile(r"[a-z0-9][a-z0-9+#.]*")
_LIST_SEPARATORS_RE = re.compile(r"[,|;•·/]")

# Keywords containing spaces or punctuation are found by phrase search, not tokens
_PHRASE_KEYWORDS: tuple[str, ...] = tuple(
    sorted((k for k in SKILL_KEYWORDS if not k.isalnum()), key=len, reverse=True)
)
_PHRASE_PATTERNS: tuple[tuple[str, re.Pattern], ...] = tuple(
    (k, re.compile(rf"(?<![a-z0-9.#]){re.escape(k)}(?![a-z0-9])")) for k in _PHRASE_KEYWORDS
)

_TITLE_SPLIT_RE = re.compile(r"\s+at\s+|\s*[,|]\s*", re.IGNORECASE)
_HEADER_TRIM = " ,|-–—:()"


def structure(
    raw_text: str | None,
    pre_structured: PartialResumeRecord | Mapping[str, Any] | None = None,
) -> ResumeRecord:
    """Convert raw resume text or a pre-structured payload into a ResumeRecord."""
    try:
        partial = _as_partial(pre_structured)
        if partial is not None and partial.skills:
            return from_pre_structured(partial)
        return parse_text(raw_text or "")
    except Exception:
        logger.exception("Resume structuring failed, returning empty record")
        return ResumeRecord()


def _as_partial(
    payload: PartialResumeRecord | Mapping[str, Any] | None,
) -> PartialResumeRecord | None:
    if payload is None or isinstance(payload, PartialResumeRecord):
        return payload
    return PartialResumeRecord.model_validate(dict(payload))


# ---------------------------------------------------------------------------
# Strategy 1: pre-structured pass-through
# ---------------------------------------------------------------------------

def from_pre_structured(partial: PartialResumeRecord) -> ResumeRecord:
    """Accept upstream structured data, filling in defaults field by field."""
    return ResumeRecord(
        contact=_coerce_contact(partial.contact or {}),
        skills=_dedupe(s.strip() for s in partial.skills or [] if isinstance(s, str)),
        experience=[_coerce_experience(e) for e in partial.experience or []],
        education=[_coerce_education(e) for e in partial.education or []],
    )


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _coerce_contact(data: Mapping[str, Any]) -> ContactInfo:
    links = [str(link) for link in data.get("links") or [] if link]
    for key in ("linkedin", "github", "website"):
        if data.get(key):
            links.append(str(data[key]))
    return ContactInfo(
        name=_text(data.get("name"), UNKNOWN),
        email=_text(data.get("email"), NOT_AVAILABLE),
        phone=_text(data.get("phone"), NOT_AVAILABLE),
        location=_text(data.get("location"), NOT_AVAILABLE),
        links=links,
    )


def _coerce_experience(data: Mapping[str, Any]) -> ExperienceEntry:
    start = _text(data.get("period_start") or data.get("start"), "")
    end = _text(data.get("period_end") or data.get("end"), "")
    if not start:
        period = section_parser.parse_period(_text(data.get("years") or data.get("period"), ""))
        if period:
            start, end = period
    if start and not end:
        end = PRESENT
    if end.lower() in ("present", "current", "now"):
        end = PRESENT

    return ExperienceEntry(
        title=_text(data.get("title"), UNKNOWN),
        company=_text(data.get("company"), UNKNOWN),
        period_start=start or NOT_AVAILABLE,
        period_end=end or NOT_AVAILABLE,
        duration_years=section_parser.duration_years(start, end) if start else 0,
    )


def _coerce_education(data: Mapping[str, Any]) -> EducationEntry:
    degree = _text(data.get("degree"), NOT_AVAILABLE)
    return EducationEntry(
        degree=degree,
        institution=_text(data.get("institution") or data.get("school"), UNKNOWN),
        year=_text(data.get("year"), NOT_AVAILABLE),
        level=section_parser.degree_level(degree),
    )


# ---------------------------------------------------------------------------
# Strategy 2: plain-text heuristics
# ---------------------------------------------------------------------------

def parse_text(text: str) -> ResumeRecord:
    """Heuristically extract a ResumeRecord from plain resume text."""
    lines = section_parser.clean_lines(text)
    if not lines:
        return ResumeRecord()

    return ResumeRecord(
        contact=_extract_contact(text),
        skills=extract_skills(lines),
        experience=extract_experience(lines),
        education=extract_education(lines),
    )


def _extract_contact(text: str) -> ContactInfo:
    info = section_parser.extract_contact_info(text)
    return ContactInfo(
        name=info["name"] or UNKNOWN,
        email=info["email"] or NOT_AVAILABLE,
        phone=info["phone"] or NOT_AVAILABLE,
        location=info["location"] or NOT_AVAILABLE,
        links=info["links"],
    )


def _is_list_line(line: str) -> bool:
    return bool(_LIST_SEPARATORS_RE.search(line)) or len(line.split()) <= 3


def extract_skills(lines: list[str]) -> list[str]:
    """Collect canonical skills mentioned anywhere in the resume."""
    skill_section = set(section_parser.section_lines(lines, "skills"))
    found: list[str] = []

    for line in lines:
        lower = line.lower()
        list_like = line in skill_section or _is_list_line(line)

        for keyword, pattern in _PHRASE_PATTERNS:
            if keyword in lower and pattern.search(lower):
                found.append(normalize(keyword))

        for token in _TOKEN_RE.findall(lower):
            token = token.rstrip(".")
            if token not in SKILL_KEYWORDS:
                continue
            if token in AMBIGUOUS_KEYWORDS and not list_like:
                continue
            found.append(normalize(token))

    return _dedupe(found)


def extract_experience(lines: list[str]) -> list[ExperienceEntry]:
    """Parse experience entries delimited by year ranges.

    The title/company line may precede the date line or follow it; the
    layout is decided by the first entry.
    """
    entries: list[dict[str, str | None]] = []
    pending_header: str | None = None
    header_before: bool | None = None

    for line in section_parser.section_lines(lines, "experience"):
        match = YEAR_RANGE_RE.search(line)
        if match:
            residue = line[: match.start()] + " " + line[match.end():]
            inline = section_parser.MONTH_RE.sub("", residue).strip(_HEADER_TRIM)
            if header_before is None:
                header_before = pending_header is not None and not inline
            header = inline or (pending_header if header_before else None)
            end = match.group(2).lower()
            entries.append({
                "start": match.group(1),
                "end": PRESENT if end in ("present", "current") else end,
                "header": header or None,
            })
            pending_header = None
        elif not section_parser.is_bullet(line):
            if entries and entries[-1]["header"] is None and not header_before:
                entries[-1]["header"] = line
            else:
                pending_header = line

    result = []
    for entry in entries:
        title, company = _split_title(entry["header"])
        result.append(ExperienceEntry(
            title=title,
            company=company,
            period_start=entry["start"],
            period_end=entry["end"],
            duration_years=section_parser.duration_years(entry["start"], entry["end"]),
        ))
    return result


def _split_title(header: str | None) -> tuple[str, str]:
    if not header:
        return UNKNOWN, UNKNOWN
    parts = [p.strip(_HEADER_TRIM) for p in _TITLE_SPLIT_RE.split(header, maxsplit=1)]
    title = parts[0] or UNKNOWN
    company = parts[1] if len(parts) > 1 and parts[1] else UNKNOWN
    return title, company


def extract_education(lines: list[str]) -> list[EducationEntry]:
    """Parse education entries recognised by a degree keyword or a bare year."""
    entries: list[EducationEntry] = []

    for line in section_parser.section_lines(lines, "education"):
        degree_match = section_parser.DEGREE_RE.search(line)
        year_match = section_parser.YEAR_RE.search(line)
        if not degree_match and not year_match:
            continue

        year = year_match.group() if year_match else NOT_AVAILABLE
        text = section_parser.YEAR_RE.sub("", line) if year_match else line
        parts = [p.strip(_HEADER_TRIM) for p in re.split(r",|\s+-\s+|\|", text)]
        parts = [p for p in parts if p]

        # "State University, 2019" on the line after the degree
        if not degree_match and entries and entries[-1].year == NOT_AVAILABLE:
            previous = entries[-1]
            previous.year = year
            if previous.institution == UNKNOWN and parts:
                previous.institution = parts[0]
            continue

        degree = parts[0] if parts else NOT_AVAILABLE
        entries.append(EducationEntry(
            degree=degree,
            institution=parts[1] if len(parts) > 1 else UNKNOWN,
            year=year,
            level=section_parser.degree_level(line),
        ))
    return entries


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        key = item.lower()
        if item and key not in seen:
            seen.add(key)
            result.append(item)
    return result
