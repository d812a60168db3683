"""Google Gemini API wrapper exposing a plain ``generate(prompt) -> text`` call."""

import asyncio
import logging
from typing import Protocol

import httpx
from google import genai
from google.genai import errors, types

from config import settings
from services.exceptions import ProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns a prompt into generated text."""

    async def generate(self, prompt: str) -> str: ...


class GeminiTextGenerator:
    """TextGenerator backed by the google-genai async client.

    Provider failures are translated into ProviderError subclasses so the
    caller can decide whether to retry.
    """

    def __init__(
        self,
        client: genai.Client,
        model: str = settings.gemini_model,
        timeout_seconds: float = settings.gemini_timeout_seconds,
    ) -> None:
        self._client = client
        self._model = model
        self._timeout = timeout_seconds

    async def generate(self, prompt: str) -> str:
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self._model,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=0.3,
                        max_output_tokens=1024,
                    ),
                ),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TransportError) as e:
            raise ProviderTimeoutError(f"Gemini request failed: {e!r}") from e
        except errors.APIError as e:
            raise ProviderError(f"Gemini API error: {e}", status_code=e.code) from e

        return (response.text or "").strip()


_generator: GeminiTextGenerator | None = None


def get_text_generator() -> GeminiTextGenerator | None:
    """Return the shared Gemini generator, or None when no API key is set."""
    global _generator
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - LLM feedback disabled")
        return None
    if _generator is None:
        _generator = GeminiTextGenerator(genai.Client(api_key=settings.gemini_api_key))
    return _generator
