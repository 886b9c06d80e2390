# docqa/infrastructure/gemini_generator.py

from typing import Optional

import httpx

from docqa.config import (
    GEMINI_API_KEY,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    GENERATION_MAX_OUTPUT_TOKENS,
    GENERATION_TEMPERATURE,
    REQUEST_TIMEOUT_SECONDS,
)
from docqa.domain.errors import GenerationError
from docqa.domain.interfaces import GeneratorPort


NO_RESPONSE_TEXT = "No response generated"


class GeminiGenerator(GeneratorPort):
    """
    Single-shot call to Gemini `generateContent`. No retries: any transport
    error or non-2xx status surfaces as GenerationError.
    """

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        temperature: float = GENERATION_TEMPERATURE,
        max_output_tokens: int = GENERATION_MAX_OUTPUT_TOKENS,
        client: Optional[httpx.Client] = None,
    ):
        if not api_key:
            raise GenerationError("GEMINI_API_KEY environment variable not set")
        self._api_key = api_key
        self._model = model
        self._url = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self._generation_config = {
            "temperature": temperature,
            "maxOutputTokens": max_output_tokens,
        }
        self._client = client or httpx.Client(timeout=REQUEST_TIMEOUT_SECONDS)

    @property
    def model_name(self) -> str:
        return self._model

    def generate(self, prompt: str) -> str:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": self._generation_config,
        }

        try:
            response = self._client.post(
                self._url,
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.HTTPError as error:
            raise GenerationError(f"Gemini request failed: {error}") from error

        if not response.is_success:
            raise GenerationError(
                f"Gemini API error ({response.status_code}): {response.text}"
            )

        try:
            body = response.json()
        except ValueError as error:
            raise GenerationError(f"Gemini returned invalid JSON: {error}") from error

        return self._first_text(body)

    @staticmethod
    def _first_text(body: dict) -> str:
        candidates = body.get("candidates") or []
        if not candidates:
            return NO_RESPONSE_TEXT
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return NO_RESPONSE_TEXT
        return parts[0].get("text", NO_RESPONSE_TEXT)

    def close(self) -> None:
        self._client.close()
