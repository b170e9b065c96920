"""LLM client - schema-validated JSON generation over OpenRouter or Gemini."""

from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .config import LLMConfig
from .observability import LLMCallObserver
from .providers import GEMINI, OPENROUTER, ChatProvider, create_provider
from .providers.errors import InvalidProviderRequestError, ProviderError
from .providers.types import GenerationConfig
from .retry import RetryConfig, is_transient_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_CODE_FENCE = re.compile(r"```(?:json)?\n?|\n?```")


class LLMError(Exception):
    """Base class for errors raised by :class:`LLMClient`."""


class NoProviderConfiguredError(LLMError):
    """Neither backend has a credential."""

    def __init__(self) -> None:
        super().__init__("No LLM provider configured. Please set OPENROUTER_API_KEY or GEMINI_API_KEY")


class InvalidJSONResponseError(LLMError):
    """The backend kept answering with text that is not JSON."""

    def __init__(self) -> None:
        super().__init__("Invalid JSON response from LLM")


class SchemaValidationError(LLMError):
    """The backend answered with JSON of the wrong shape."""

    def __init__(self, error: ValidationError) -> None:
        super().__init__(f"Schema validation failed: {error}")
        self.validation_error = error


def strip_code_fences(text: str) -> str:
    """Remove Markdown code-fence wrapping (```json ... ```) and surrounding whitespace."""
    return _CODE_FENCE.sub("", text).strip()


def select_provider(config: LLMConfig) -> Optional[str]:
    """Pick the backend for a new call, or ``None`` when nothing is configured."""
    if config.gemini_only and config.has_gemini:
        return GEMINI
    if config.has_openrouter:
        return OPENROUTER
    if config.has_gemini:
        return GEMINI
    return None


class LLMClient:
    """Produces schema-valid JSON objects from a system/user prompt pair.

    The client holds only its configuration and lazily-built provider
    instances; nothing about individual calls is kept between them.
    """

    def __init__(
        self,
        config: LLMConfig,
        providers: Optional[Dict[str, ChatProvider]] = None,
        retry: Optional[RetryConfig] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self.retry = retry or RetryConfig(max_retries=config.max_retries)
        self._providers: Dict[str, ChatProvider] = dict(providers or {})
        self._sleep = sleep

    def _get_provider(self, name: str) -> ChatProvider:
        provider = self._providers.get(name)
        if provider is None:
            provider = create_provider(name, self.config)
            self._providers[name] = provider
        return provider

    async def generate_json(
        self,
        schema: Type[ModelT],
        system_prompt: str,
        user_prompt: str,
        max_retries: Optional[int] = None,
        observer: Optional[LLMCallObserver] = None,
    ) -> ModelT:
        """Call the selected backend until it returns JSON matching *schema*.

        Args:
            schema: Pydantic model the response must validate against
            system_prompt: Instructions for the model
            user_prompt: Résumé / job description payload
            max_retries: Overrides the configured retry count for this call
            observer: Receives one event per attempt

        Returns:
            The validated model instance

        Raises:
            NoProviderConfiguredError: no backend credential is set
            InvalidJSONResponseError: the last attempt still returned non-JSON text
            SchemaValidationError: a response parsed as JSON but had the wrong shape
            ProviderError: the backend error from the last attempt
        """
        retry = self.retry if max_retries is None else RetryConfig(
            max_retries=max_retries, base_delay=self.retry.base_delay
        )
        observer = observer or LLMCallObserver(label=schema.__name__)

        provider_name = select_provider(self.config)
        if provider_name is None:
            raise NoProviderConfiguredError()

        generation = GenerationConfig(
            system_prompt=system_prompt,
            temperature=self.config.temperature,
        )
        failed_over = False
        attempt = 0

        while attempt <= retry.max_retries:
            start = time.perf_counter()
            try:
                response = await self._get_provider(provider_name).generate(user_prompt, generation)
            except asyncio.CancelledError:
                raise
            except Exception as error:
                duration_ms = (time.perf_counter() - start) * 1000

                if self._should_fail_over(provider_name, error, failed_over):
                    observer.record(provider_name, attempt, "failover", duration_ms, error)
                    logger.info("Gemini rejected the request, falling back to OpenRouter")
                    provider_name = OPENROUTER
                    failed_over = True
                    continue

                observer.record(provider_name, attempt, "error", duration_ms, error)
                if retry.is_last_attempt(attempt):
                    logger.error("All %d LLM attempts failed", retry.max_attempts)
                    raise self._final_error(provider_name, error)

                delay = retry.delay_for(attempt)
                log = logger.warning if is_transient_error(error) else logger.error
                log(
                    "LLM attempt %d/%d failed: %s. Retrying in %.2fs...",
                    attempt + 1, retry.max_attempts, error, delay,
                )
                await self._sleep(delay)
                attempt += 1
                continue

            duration_ms = (time.perf_counter() - start) * 1000
            try:
                payload = json.loads(strip_code_fences(response.text))
            except json.JSONDecodeError as error:
                observer.record(provider_name, attempt, "invalid_json", duration_ms, error)
                if retry.is_last_attempt(attempt):
                    raise InvalidJSONResponseError() from error
                attempt += 1
                continue

            try:
                result = schema.model_validate(payload)
            except ValidationError as error:
                observer.record(provider_name, attempt, "schema_error", duration_ms, error)
                raise SchemaValidationError(error) from error

            observer.record(provider_name, attempt, "success", duration_ms)
            return result

        raise LLMError("All LLM attempts failed")

    def _should_fail_over(self, provider_name: str, error: Exception, failed_over: bool) -> bool:
        return (
            not failed_over
            and provider_name == GEMINI
            and self.config.has_openrouter
            and isinstance(error, InvalidProviderRequestError)
        )

    def _final_error(self, provider_name: str, error: Exception) -> Exception:
        if isinstance(error, ProviderError) and provider_name == GEMINI and self.config.has_openrouter:
            error.message = (
                f"{error.message}. OpenRouter is also configured - consider disabling "
                "GEMINI_ONLY=true to use OpenRouter instead."
            )
            error.args = (error.message,)
        return error
