"""In-process store of candidates' structured resumes (saved drafts)."""

import logging

from models.schemas.resume_record import ResumeRecord

logger = logging.getLogger(__name__)


class ResumeStore:
    """Maps candidate ids to their latest structured resume.

    Records are copied on the way in and out so callers never share a
    mutable instance with the store.
    """

    def __init__(self) -> None:
        self._resumes: dict[str, ResumeRecord] = {}

    def save(self, candidate_id: str, record: ResumeRecord) -> None:
        self._resumes[candidate_id] = record.model_copy(deep=True)
        logger.info("Saved structured resume for candidate %s", candidate_id)

    def get(self, candidate_id: str) -> ResumeRecord | None:
        record = self._resumes.get(candidate_id)
        return record.model_copy(deep=True) if record is not None else None

    def clear(self) -> None:
        self._resumes.clear()


_store = ResumeStore()


def get_store() -> ResumeStore:
    return _store
