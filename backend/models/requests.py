from typing import Any

from pydantic import BaseModel, Field

from config import settings
from models.schemas.resume_record import PartialResumeRecord


class AnalyzeRequest(BaseModel):
    # Validated into a JobRequirement by the analyzer so malformed stored jobs degrade
    job: dict[str, Any] = Field(..., description="Job posting: title, details, skills")
    resume_text: str | None = Field(
        None, max_length=settings.max_resume_chars, description="Plain text resume content"
    )
    resume: PartialResumeRecord | None = Field(None, description="Pre-structured resume payload")
    candidate_id: str | None = Field(None, description="Candidate whose saved resume may be reused")


class StructureRequest(BaseModel):
    resume_text: str | None = Field(None, max_length=settings.max_resume_chars)
    resume: PartialResumeRecord | None = None
    ocr_result: dict[str, Any] | None = Field(None, description="Labelled OCR extraction payload")
