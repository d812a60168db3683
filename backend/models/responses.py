from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

from models.schemas.match_result import MissingSkill, ScoreBreakdown


class AnalysisResult(BaseModel):
    """Outcome of analysing a resume against a job. Serialized in camelCase."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    score: int = 0
    matched_skills: list[str] = []
    missing_skills: list[MissingSkill] = []
    feedback: list[str] = []
    extracted_skills: list[str] = []
    # Scoring transparency fields
    score_breakdown: ScoreBreakdown = ScoreBreakdown()
    feedback_source: str = "fallback"
    degraded: bool = False

    @computed_field(alias="matchScore")
    @property
    def match_score(self) -> int:
        return self.score


class HealthResponse(BaseModel):
    status: str = "ok"
    gemini_configured: bool = False
