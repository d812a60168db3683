"""Tests for the Gemini text generator adapter and its error translation."""

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors

from config import settings
from models.schemas.job_requirement import JobRequirement
from models.schemas.resume_record import ResumeRecord
from services import gemini_client
from services.exceptions import ProviderError, ProviderTimeoutError
from services.feedback_generator import SOURCE_LLM, FeedbackGenerator
from services.gemini_client import GeminiTextGenerator, get_text_generator


class FakeModels:
    """Stands in for ``client.aio.models``."""

    def __init__(self, outcome=None, delay: float = 0.0):
        self.outcome = outcome
        self.delay = delay
        self.calls: list[dict] = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def _client(models: FakeModels):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def _api_error(cls, code: int):
    return cls(code, {"error": {"code": code, "message": "failure", "status": "ERROR"}})


@pytest.mark.asyncio
async def test_returns_stripped_text():
    models = FakeModels(SimpleNamespace(text='  {"feedback": ["a"]}\n'))
    generator = GeminiTextGenerator(_client(models), model="gemini-test")

    assert await generator.generate("prompt") == '{"feedback": ["a"]}'
    assert models.calls[0]["model"] == "gemini-test"
    assert models.calls[0]["contents"] == "prompt"


@pytest.mark.asyncio
async def test_empty_response_text():
    generator = GeminiTextGenerator(_client(FakeModels(SimpleNamespace(text=None))))
    assert await generator.generate("prompt") == ""


@pytest.mark.asyncio
async def test_slow_call_raises_timeout():
    models = FakeModels(SimpleNamespace(text="late"), delay=1.0)
    generator = GeminiTextGenerator(_client(models), timeout_seconds=0.01)

    with pytest.raises(ProviderTimeoutError) as exc_info:
        await generator.generate("prompt")
    assert exc_info.value.retryable


@pytest.mark.asyncio
async def test_dropped_connection_raises_timeout():
    generator = GeminiTextGenerator(_client(FakeModels(httpx.ConnectError("connection refused"))))

    with pytest.raises(ProviderTimeoutError) as exc_info:
        await generator.generate("prompt")
    assert exc_info.value.retryable


@pytest.mark.asyncio
@pytest.mark.parametrize("error_cls, code, retryable", [
    (errors.ServerError, 503, True),
    (errors.ServerError, 500, True),
    (errors.ClientError, 429, True),
    (errors.ClientError, 400, False),
    (errors.ClientError, 403, False),
])
async def test_api_errors_carry_status(error_cls, code, retryable):
    generator = GeminiTextGenerator(_client(FakeModels(_api_error(error_cls, code))))

    with pytest.raises(ProviderError) as exc_info:
        await generator.generate("prompt")
    assert not isinstance(exc_info.value, ProviderTimeoutError)
    assert exc_info.value.status_code == code
    assert exc_info.value.retryable is retryable


@pytest.mark.asyncio
async def test_rate_limit_from_sdk_is_retried(recording_sleep):
    """A 429 raised by the SDK goes through the feedback retry loop."""

    class FlakyModels(FakeModels):
        async def generate_content(self, **kwargs):
            self.calls.append(kwargs)
            if len(self.calls) == 1:
                raise _api_error(errors.ClientError, 429)
            return SimpleNamespace(text='{"feedback": ["Add metrics"]}')

    models = FlakyModels()
    feedback = FeedbackGenerator(
        GeminiTextGenerator(_client(models)), base_delay=1.0, sleep=recording_sleep
    )
    result = await feedback.generate(ResumeRecord(), JobRequirement(title="Dev"), [], [], 10)

    assert result.source == SOURCE_LLM
    assert result.lines == ["Add metrics"]
    assert len(models.calls) == 2
    assert recording_sleep.delays == [1.0]


def test_no_api_key_disables_generator(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.setattr(gemini_client, "_generator", None)
    assert get_text_generator() is None


def test_generator_is_shared(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    monkeypatch.setattr(gemini_client, "_generator", None)

    first = get_text_generator()
    assert isinstance(first, GeminiTextGenerator)
    assert get_text_generator() is first


# ---------------------------------------------------------------------------
# Integration test (calls the real Gemini API, skipped without a key)
# ---------------------------------------------------------------------------


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.skipif(not settings.gemini_api_key, reason="GEMINI_API_KEY not set")
async def test_real_gemini_returns_feedback():
    generator = FeedbackGenerator(get_text_generator())
    result = await generator.generate(
        ResumeRecord(skills=["python", "docker"]),
        JobRequirement(title="Backend Developer", skills=["Python", "Go"]),
        ["Python"],
        ["Go"],
        55,
    )
    assert result.source == SOURCE_LLM
    assert result.lines
