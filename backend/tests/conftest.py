"""Shared test configuration, pytest markers and fakes."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


class FakeTextGenerator:
    """Canned TextGenerator: returns or raises the given outcomes in order.

    The last outcome repeats once the others are used up.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Replacement for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def fake_generator():
    return FakeTextGenerator


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
