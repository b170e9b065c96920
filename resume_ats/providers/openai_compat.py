"""OpenAI-compatible provider used for OpenRouter."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from .errors import OPENROUTER, ProviderError, error_for_status
from .types import GenerationConfig, LLMResponse


class OpenAICompatibleProvider:
    """Provider for OpenAI-compatible chat completion APIs (OpenRouter by default)."""

    name = OPENROUTER

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str = "",
        timeout: float = 60.0,
    ) -> None:
        self.model = model
        self.api_base = api_base or ""
        # Retries are owned by LLMClient; the SDK must not retry on its own.
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=api_base or None,
            timeout=timeout,
            max_retries=0,
        )

    async def generate(self, user_prompt: str, config: GenerationConfig) -> LLMResponse:
        kwargs = self._build_chat_kwargs(user_prompt, config)
        try:
            completion = await self.client.chat.completions.create(**kwargs)
        except openai.APIStatusError as error:
            raise error_for_status(self.name, error.status_code) from error
        return self._from_openai_completion(completion)

    def _build_chat_kwargs(self, user_prompt: str, config: GenerationConfig) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = []
        if config.system_prompt:
            messages.append({"role": "system", "content": config.system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        if config.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        return kwargs

    def _from_openai_completion(self, completion) -> LLMResponse:
        if not completion.choices:
            raise ProviderError(self.name, "OpenRouter API returned no choices")

        message = completion.choices[0].message
        text = self._normalize_message_content(getattr(message, "content", ""))

        usage_data = getattr(completion, "usage", None)
        usage = None
        if usage_data:
            usage = {
                "prompt_tokens": int(getattr(usage_data, "prompt_tokens", 0) or 0),
                "completion_tokens": int(getattr(usage_data, "completion_tokens", 0) or 0),
                "total_tokens": int(getattr(usage_data, "total_tokens", 0) or 0),
            }

        return LLMResponse(text=text, usage=usage, raw=completion)

    def _normalize_message_content(self, content: Any) -> str:
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            chunks: List[str] = []
            for item in content:
                text = self._extract_text_from_content_item(item)
                if text:
                    chunks.append(text)
            return "".join(chunks)
        return str(content)

    def _extract_text_from_content_item(self, item: Any) -> Optional[str]:
        if item is None:
            return None
        if isinstance(item, str):
            return item
        if isinstance(item, dict):
            return str(item.get("text", "") or "")
        return str(getattr(item, "text", "") or "")
