"""Provider protocol definition."""

from __future__ import annotations

from typing import Protocol

from .types import GenerationConfig, LLMResponse


class ChatProvider(Protocol):
    """Protocol for provider implementations."""

    name: str

    async def generate(
        self,
        user_prompt: str,
        config: GenerationConfig,
    ) -> LLMResponse: ...
