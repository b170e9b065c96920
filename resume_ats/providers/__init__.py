"""Provider factory and defaults."""

from __future__ import annotations

from ..config import LLMConfig
from .base import ChatProvider
from .errors import (
    GEMINI,
    OPENROUTER,
    InvalidProviderRequestError,
    ProviderError,
    ProviderUnavailableError,
    RateLimitError,
)
from .gemini import GeminiProvider
from .openai_compat import OpenAICompatibleProvider
from .types import GenerationConfig, LLMResponse

PROVIDER_ENV_KEYS = {
    OPENROUTER: "OPENROUTER_API_KEY",
    GEMINI: "GEMINI_API_KEY",
}


def create_provider(provider: str, config: LLMConfig) -> ChatProvider:
    """Instantiate the backend named *provider* from *config*."""
    provider_name = (provider or "").lower()

    if provider_name == OPENROUTER:
        _require_key(provider_name, config.openrouter_api_key)
        return OpenAICompatibleProvider(
            api_key=config.openrouter_api_key,
            model=config.model_default,
            api_base=config.openrouter_base_url,
            timeout=config.request_timeout,
        )

    if provider_name == GEMINI:
        _require_key(provider_name, config.gemini_api_key)
        return GeminiProvider(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            timeout=config.request_timeout,
        )

    raise ValueError(f"Unknown provider: {provider!r}")


def _require_key(provider: str, api_key: str) -> None:
    if not api_key:
        raise ValueError(f"{PROVIDER_ENV_KEYS[provider]} not set. Please set the env var or add it to the config file")


__all__ = [
    "ChatProvider",
    "GEMINI",
    "GeminiProvider",
    "GenerationConfig",
    "InvalidProviderRequestError",
    "LLMResponse",
    "OPENROUTER",
    "OpenAICompatibleProvider",
    "PROVIDER_ENV_KEYS",
    "ProviderError",
    "ProviderUnavailableError",
    "RateLimitError",
    "create_provider",
]
