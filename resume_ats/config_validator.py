"""Configuration validator for startup checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List
from urllib.parse import urlparse

from .config import LLMConfig


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""
    field: str
    message: str
    severity: Severity


def validate_config(config: LLMConfig) -> List[ConfigError]:
    """Validate an LLM configuration and return a list of issues.

    Missing credentials are only a warning here: the service still starts and
    the hard "no provider configured" error is raised when a request needs a
    backend.

    Args:
        config: Loaded configuration

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- API keys ---
    if not config.has_openrouter and not config.has_gemini:
        errors.append(ConfigError(
            field="api_key",
            message="Neither OPENROUTER_API_KEY nor GEMINI_API_KEY is set; analyze and rewrite requests will fail",
            severity=Severity.WARNING,
        ))

    if config.gemini_only and not config.has_gemini:
        errors.append(ConfigError(
            field="gemini_only",
            message="GEMINI_ONLY is set but GEMINI_API_KEY is missing; OpenRouter will be used",
            severity=Severity.WARNING,
        ))

    # --- Base URL ---
    parsed = urlparse(config.openrouter_base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        errors.append(ConfigError(
            field="openrouter_base_url",
            message=f"openrouter_base_url must be an http(s) URL, got {config.openrouter_base_url!r}",
            severity=Severity.ERROR,
        ))

    # --- Models ---
    if config.has_openrouter and not config.model_default:
        errors.append(ConfigError(
            field="model_default",
            message="model_default must be a non-empty string",
            severity=Severity.ERROR,
        ))
    if config.has_gemini and not config.gemini_model:
        errors.append(ConfigError(
            field="gemini_model",
            message="gemini_model must be a non-empty string",
            severity=Severity.ERROR,
        ))

    # --- Temperature ---
    if config.temperature < 0 or config.temperature > 2:
        errors.append(ConfigError(
            field="temperature",
            message=f"temperature must be a number between 0 and 2, got {config.temperature}",
            severity=Severity.ERROR,
        ))

    # --- Timeout / retries ---
    if config.request_timeout <= 0:
        errors.append(ConfigError(
            field="request_timeout",
            message=f"request_timeout must be positive, got {config.request_timeout}",
            severity=Severity.ERROR,
        ))
    if config.max_retries < 0:
        errors.append(ConfigError(
            field="max_retries",
            message=f"max_retries must be zero or a positive integer, got {config.max_retries}",
            severity=Severity.ERROR,
        ))

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
