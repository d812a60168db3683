"""Resume section bounding, contact extraction and date/degree primitives."""

import re
from datetime import datetime

# Section header keywords, matched as substrings of short header-like lines
EXPERIENCE_KEYWORDS = ("professional experience", "work history", "employment", "experience")
EDUCATION_KEYWORDS = ("education", "academic", "degree")
SKILLS_KEYWORDS = ("skills", "technologies", "competencies", "tech stack")
OTHER_SECTION_KEYWORDS = (
    "summary", "objective", "profile", "projects", "certifications",
    "achievements", "awards", "languages", "interests", "references",
)

# A header is a short line; longer lines are content that merely mention a keyword
MAX_HEADER_WORDS = 4

DOCUMENT_HEADER_RE = re.compile(r"\b(?:resume|résumé|cv|curriculum vitae)\b", re.IGNORECASE)

# Contact info patterns
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?<!\d)(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)
LOCATION_RE = re.compile(r"^\s*(?:location|address)\s*:\s*(.+)$", re.IGNORECASE)
THREE_DIGITS_RE = re.compile(r"\d{3}")
URL_HINT_RE = re.compile(r"https?://|www\.|\.com\b", re.IGNORECASE)

# "2019-2023", "2019 – Present", "2020—current"
YEAR_RANGE_RE = re.compile(
    r"\b((?:19|20)\d{2})\s*[-–—]\s*(?:[a-z]{3,9}\.?\s+)?((?:19|20)\d{2}|present|current)\b",
    re.IGNORECASE,
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
MONTH_RE = re.compile(
    r"\b(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|"
    r"sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?(?=\s|$)",
    re.IGNORECASE,
)
PRESENT_RE = re.compile(r"\b(?:present|current|now)\b", re.IGNORECASE)

DEGREE_RE = re.compile(
    r"\b(?:ph\.?\s?d\.?|doctor(?:ate|al)?|master(?:'?s)?|m\.sc\.?|msc|m\.s\.?|ms|"
    r"m\.a\.|m\.e\.|m\.?tech|mba|bachelor(?:'?s)?|b\.sc\.?|bsc|b\.s\.?|bs|b\.a\.|"
    r"b\.e\.|b\.?tech|associate(?:'?s)?|diploma)(?![a-z])",
    re.IGNORECASE,
)

_DOCTORATE_KEYS = {"phd", "doctor", "doctorate", "doctoral"}
_MASTER_KEYS = {"ms", "msc", "ma", "me", "mtech", "mba"}

BULLET_MARKERS = frozenset("•-–—►▪✓*○◆⚫→▸▹◇■□●")

PRESENT = "present"


def clean_lines(text: str) -> list[str]:
    """Split text into stripped, non-empty lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def _is_header(line: str, keywords: tuple[str, ...]) -> bool:
    lower = line.lower().rstrip(":")
    if len(lower.split()) > MAX_HEADER_WORDS or YEAR_RE.search(lower):
        return False
    if DEGREE_RE.search(lower) or is_bullet(lower):
        return False
    return any(k in lower for k in keywords)


def section_kind(line: str) -> str | None:
    """Return which section a header line opens, or None for content lines."""
    if _is_header(line, EXPERIENCE_KEYWORDS):
        return "experience"
    if _is_header(line, EDUCATION_KEYWORDS):
        return "education"
    if _is_header(line, SKILLS_KEYWORDS):
        return "skills"
    if _is_header(line, OTHER_SECTION_KEYWORDS):
        return "other"
    return None


def section_lines(lines: list[str], section: str) -> list[str]:
    """Collect the content lines of every occurrence of a section.

    A section starts at its header line and runs until the next header of
    any other section.
    """
    collected: list[str] = []
    inside = False
    for line in lines:
        kind = section_kind(line)
        if kind is not None:
            inside = kind == section
            continue
        if inside:
            collected.append(line)
    return collected


def is_bullet(line: str) -> bool:
    return bool(line) and line[0] in BULLET_MARKERS


# ---------------------------------------------------------------------------
# Contact extraction
# ---------------------------------------------------------------------------

def extract_name(lines: list[str]) -> str | None:
    """Take the first plausible name among the first five lines.

    The search stops at the first section header; names precede sections.
    """
    for line in lines[:5]:
        if section_kind(line) is not None:
            break
        if len(line) <= 2 or "@" in line or THREE_DIGITS_RE.search(line):
            continue
        if DOCUMENT_HEADER_RE.search(line) or URL_HINT_RE.search(line):
            continue
        return line
    return None


def extract_contact_info(text: str) -> dict[str, str | list[str] | None]:
    """Extract contact details from raw resume text. Missing values are None."""
    lines = clean_lines(text)
    email_match = EMAIL_RE.search(text)
    phone_match = PHONE_RE.search(text)

    location = None
    for line in lines:
        loc_match = LOCATION_RE.match(line)
        if loc_match:
            location = loc_match.group(1).strip()
            break

    links = [m.group() for m in LINKEDIN_RE.finditer(text)]
    links += [m.group() for m in GITHUB_RE.finditer(text)]

    return {
        "name": extract_name(lines),
        "email": email_match.group() if email_match else None,
        "phone": phone_match.group().strip() if phone_match else None,
        "location": location,
        "links": links,
    }


# ---------------------------------------------------------------------------
# Periods and durations
# ---------------------------------------------------------------------------

def current_year() -> int:
    return datetime.now().year


def duration_years(start: str, end: str) -> int:
    """Whole years between two period bounds; "present" is the current year.

    Unparseable or inverted periods yield 0.
    """
    try:
        start_year = int(start)
        end_year = current_year() if end.lower() == PRESENT else int(end)
    except ValueError:
        return 0
    return max(0, end_year - start_year)


def parse_period(text: str) -> tuple[str, str] | None:
    """Find a (start, end) period in free text such as "Jan 2020 - Present".

    The end is a year string or "present"; None when no start year is found.
    """
    match = YEAR_RANGE_RE.search(text)
    if match:
        end = match.group(2)
        return match.group(1), PRESENT if not end[0].isdigit() else end

    years = YEAR_RE.findall(text)
    if not years:
        return None
    if len(years) > 1:
        return years[0], years[1]
    if PRESENT_RE.search(text):
        return years[0], PRESENT
    return years[0], years[0]


# ---------------------------------------------------------------------------
# Degrees
# ---------------------------------------------------------------------------

def degree_level(text: str) -> int:
    """0 = no degree keyword, 1 = bachelor or other, 2 = master, 3 = doctorate."""
    levels = [_keyword_level(m.group()) for m in DEGREE_RE.finditer(text)]
    return max(levels, default=0)


def _keyword_level(keyword: str) -> int:
    key = re.sub(r"[.\s']", "", keyword.lower())
    if key in _DOCTORATE_KEYS:
        return 3
    if key.startswith("master") or key in _MASTER_KEYS:
        return 2
    return 1
