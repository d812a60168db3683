"""Shared dependencies for API routes."""

from services.feedback_generator import FeedbackGenerator
from services.gemini_client import get_text_generator
from services.resume_store import ResumeStore, get_store


def get_feedback_generator() -> FeedbackGenerator:
    return FeedbackGenerator(get_text_generator())


def get_resume_store() -> ResumeStore:
    return get_store()
