"""Gemini provider implementation."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .errors import GEMINI, ProviderError, error_for_status
from .types import GenerationConfig, LLMResponse

logger = logging.getLogger(__name__)


class GeminiProvider:
    """Google Gemini provider using google-genai SDK."""

    name = GEMINI

    def __init__(self, api_key: str, model: str, timeout: float = 60.0) -> None:
        self.model = model
        # HttpOptions.timeout is expressed in milliseconds.
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

    async def generate(self, user_prompt: str, config: GenerationConfig) -> LLMResponse:
        logger.info("Calling Gemini API: %s", self.model)
        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=config.system_prompt if config.system_prompt else None,
                    temperature=config.temperature,
                    response_mime_type="application/json" if config.json_mode else None,
                ),
            )
        except genai_errors.APIError as error:
            raise error_for_status(self.name, int(error.code or 0), error.status or "") from error

        return self._from_gemini_response(response)

    def _from_gemini_response(self, response) -> LLMResponse:
        if not response.candidates:
            raise ProviderError(self.name, "Gemini API returned no response")

        candidate = response.candidates[0]
        parts = candidate.content.parts if candidate.content else []
        text_parts: List[str] = [part.text for part in parts or [] if part.text]

        usage = None
        metadata = getattr(response, "usage_metadata", None)
        if metadata:
            usage = {
                "prompt_tokens": int(getattr(metadata, "prompt_token_count", 0) or 0),
                "completion_tokens": int(getattr(metadata, "candidates_token_count", 0) or 0),
                "total_tokens": int(getattr(metadata, "total_token_count", 0) or 0),
            }

        return LLMResponse(text="".join(text_parts), usage=usage, raw=response)
