"""Retry policy with linear backoff for LLM backend calls."""

from __future__ import annotations

from dataclasses import dataclass

from .providers.errors import ProviderError, RateLimitError, ProviderUnavailableError


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    ``max_retries`` counts retries, so a call makes at most
    ``max_retries + 1`` attempts.
    """
    max_retries: int = 2
    base_delay: float = 1.0  # seconds, multiplied by the attempt number

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def is_last_attempt(self, attempt: int) -> bool:
        return attempt >= self.max_retries

    def delay_for(self, attempt: int) -> float:
        """Linear backoff: ``base_delay * (attempt + 1)``."""
        return self.base_delay * (attempt + 1)


def is_transient_error(error: Exception) -> bool:
    """
    Determine if an error looks transient.

    Only used to pick a log level; the client retries every backend failure
    regardless.

    Args:
        error: Exception to check

    Returns:
        True if error is transient, False otherwise
    """
    if isinstance(error, (RateLimitError, ProviderUnavailableError)):
        return True

    if isinstance(error, (ConnectionError, TimeoutError)):
        return True

    if isinstance(error, ProviderError) and error.status_code is not None:
        return error.status_code >= 500

    error_msg = str(error).lower()
    transient_patterns = [
        "timeout",
        "timed out",
        "connection",
        "rate limit",
        "temporarily",
        "unavailable",
        "ssl",
        "eof",
    ]
    return any(pattern in error_msg for pattern in transient_patterns)
