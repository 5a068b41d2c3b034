"""Google Gemini client used by the evaluation gateway."""

import logging
from typing import Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from screener.config import Settings
from screener.errors import ConfigurationError, ProviderTransportError

logger = logging.getLogger(__name__)

SAFETY_SETTINGS = [
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
]


class ModelClient(Protocol):
    """Anything that turns a prompt into raw model text."""

    async def generate(self, prompt: str, *, model: str, temperature: float) -> str: ...


class GeminiClient:
    """Thin async wrapper over ``google-genai``."""

    def __init__(self, api_key: str, *, max_output_tokens: int = 4096):
        self._client = genai.Client(api_key=api_key)
        self._max_output_tokens = max_output_tokens

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        if not settings.gemini_api_key:
            raise ConfigurationError(
                "Gemini API key not found. Please set GEMINI_API_KEY environment variable."
            )
        return cls(settings.gemini_api_key, max_output_tokens=settings.max_output_tokens)

    async def generate(self, prompt: str, *, model: str, temperature: float) -> str:
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=self._max_output_tokens,
            safety_settings=SAFETY_SETTINGS,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except (genai_errors.APIError, httpx.HTTPError) as exc:
            logger.error("Gemini request failed for model %s: %s", model, exc)
            raise ProviderTransportError(str(exc)) from exc
        return response.text or ""
