from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_feedback_generator, get_resume_store
from config import settings
from models.requests import AnalyzeRequest, StructureRequest
from models.responses import AnalysisResult, HealthResponse
from models.schemas.resume_record import ResumeRecord
from services import ocr_mapper, resume_analyzer, resume_structurer
from services.feedback_generator import FeedbackGenerator
from services.resume_store import ResumeStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _structure_request(body: StructureRequest) -> ResumeRecord:
    if body.ocr_result is not None:
        partial = ocr_mapper.map_ocr_result(body.ocr_result)
        return resume_structurer.structure(ocr_mapper.ocr_text(body.ocr_result), partial)
    if body.resume is None and not (body.resume_text or "").strip():
        raise HTTPException(
            status_code=400, detail="Provide resume_text, resume or ocr_result"
        )
    return resume_structurer.structure(body.resume_text, body.resume)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", gemini_configured=bool(settings.gemini_api_key))


@router.post("/analyze", response_model=AnalysisResult)
@limiter.limit(settings.analyze_rate_limit)
async def analyze(
    request: Request,
    body: AnalyzeRequest,
    feedback_generator: FeedbackGenerator = Depends(get_feedback_generator),
    store: ResumeStore = Depends(get_resume_store),
):
    resume = body.resume if body.resume is not None and body.resume.skills else body.resume_text
    candidate = resume_analyzer.CandidateContext(candidate_id=body.candidate_id, store=store)
    return await resume_analyzer.analyze(
        resume, body.job, candidate=candidate, feedback_generator=feedback_generator
    )


@router.post("/resume/structure", response_model=ResumeRecord)
async def structure_resume(body: StructureRequest):
    return _structure_request(body)


@router.put("/candidates/{candidate_id}/resume", response_model=ResumeRecord)
async def save_resume(
    candidate_id: str,
    body: StructureRequest,
    store: ResumeStore = Depends(get_resume_store),
):
    record = _structure_request(body)
    store.save(candidate_id, record)
    return record


@router.get("/candidates/{candidate_id}/resume", response_model=ResumeRecord)
async def get_resume(candidate_id: str, store: ResumeStore = Depends(get_resume_store)):
    record = store.get(candidate_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No saved resume for this candidate")
    return record
