"""Map a labelled OCR extraction payload onto a pre-structured resume.

The OCR service returns pages of predictions, each a ``{label, ocr_text}``
pair. Repeated labels (roles, degrees) are paired up by position.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from models.schemas.resume_record import PartialResumeRecord

CONTACT_LABELS = {
    "name": "Name",
    "email": "Email",
    "phone": "Phone",
    "location": "Location",
    "github": "GitHub",
    "linkedin": "LinkedIn",
}
SKILL_LABELS = (
    "Languages",
    "Front-end_Technologies",
    "Back-end_Technologies",
    "Databases",
)
ROLE_LABEL = "Professional_Experience_Role"
COMPANY_LABEL = "Professional_Experience_Company"
START_LABEL = "Professional_Experience_Start_Date"
END_LABEL = "Professional_Experience_End_Date"
DEGREE_LABEL = "Education_Degree"
INSTITUTION_LABEL = "Education_Institution"
GRADUATION_LABEL = "Expected_Graduation"


def _predictions(payload: Mapping[str, Any] | Sequence[Any]) -> list[dict[str, str]]:
    pages = payload.get("result", []) if isinstance(payload, Mapping) else payload
    found: list[dict[str, str]] = []
    for page in pages or []:
        for prediction in page.get("prediction", []) if isinstance(page, Mapping) else []:
            label = prediction.get("label")
            text = (prediction.get("ocr_text") or "").strip()
            if label and text:
                found.append({"label": label, "text": text})
    return found


def _by_label(predictions: list[dict[str, str]]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for p in predictions:
        grouped.setdefault(p["label"], []).append(p["text"])
    return grouped


def _nth(values: list[str], index: int, default: str = "") -> str:
    return values[index] if index < len(values) else default


def map_ocr_result(payload: Mapping[str, Any] | Sequence[Any]) -> PartialResumeRecord:
    """Build the pre-structured payload consumed by the structuring engine."""
    grouped = _by_label(_predictions(payload))

    contact = {key: _nth(grouped.get(label, []), 0) for key, label in CONTACT_LABELS.items()}

    skills: list[str] = []
    for label in SKILL_LABELS:
        for text in grouped.get(label, []):
            skills.extend(s.strip() for s in text.split(",") if s.strip())

    starts = grouped.get(START_LABEL, [])
    ends = grouped.get(END_LABEL, [])
    companies = grouped.get(COMPANY_LABEL, [])
    experience = [
        {
            "title": role,
            "company": _nth(companies, i),
            "years": f"{_nth(starts, i)} - {_nth(ends, i, 'Present')}",
        }
        for i, role in enumerate(grouped.get(ROLE_LABEL, []))
    ]

    institutions = grouped.get(INSTITUTION_LABEL, [])
    graduations = grouped.get(GRADUATION_LABEL, [])
    education = [
        {
            "degree": degree,
            "school": _nth(institutions, i),
            "year": _nth(graduations, i),
        }
        for i, degree in enumerate(grouped.get(DEGREE_LABEL, []))
    ]

    return PartialResumeRecord(
        contact=contact,
        skills=skills,
        experience=experience,
        education=education,
    )


def ocr_text(payload: Mapping[str, Any] | Sequence[Any]) -> str:
    """All recognised text, one prediction per line."""
    return "\n".join(p["text"] for p in _predictions(payload))
