"""Backend error hierarchy shared by all providers."""

from __future__ import annotations

from typing import Optional

OPENROUTER = "openrouter"
GEMINI = "gemini"

_DISPLAY_NAMES = {OPENROUTER: "OpenRouter", GEMINI: "Gemini"}


class ProviderError(Exception):
    """A backend call failed (non-2xx status or unusable response)."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.message = message
        self.status_code = status_code


class RateLimitError(ProviderError):
    """HTTP 429 from any backend."""


class ProviderUnavailableError(ProviderError):
    """HTTP 503 from the Gemini backend."""


class InvalidProviderRequestError(ProviderError):
    """HTTP 400 from the Gemini backend (usually a bad model name or parameter)."""


def error_for_status(provider: str, status_code: int, reason: str = "") -> ProviderError:
    """Map a non-2xx status to the matching :class:`ProviderError` subclass."""
    display = _DISPLAY_NAMES.get(provider, provider)

    if status_code == 429:
        return RateLimitError(provider, "Rate limit exceeded. Please try again later.", status_code)

    if provider == GEMINI:
        if status_code == 503:
            return ProviderUnavailableError(
                provider,
                "Gemini API service is temporarily unavailable. Please try again later.",
                status_code,
            )
        if status_code == 400:
            return InvalidProviderRequestError(
                provider,
                "Invalid request to Gemini API. Check model name and parameters.",
                status_code,
            )

    message = f"{display} API error: {status_code}"
    if reason:
        message = f"{message} {reason}"
    return ProviderError(provider, message, status_code)
