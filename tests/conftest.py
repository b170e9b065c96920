"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear provider credentials and overrides that can leak in from developer machines."""
    for key in (
        "OPENROUTER_API_KEY",
        "OPENROUTER_BASE_URL",
        "MODEL_DEFAULT",
        "GEMINI_API_KEY",
        "GEMINI_MODEL",
        "GEMINI_ONLY",
        "LLM_TIMEOUT_SECONDS",
        "LLM_MAX_RETRIES",
        "RESUME_ATS_CONFIG",
    ):
        monkeypatch.delenv(key, raising=False)


class ScriptedProvider:
    """Chat provider that replays a fixed list of outcomes.

    Each outcome is either response text or an exception to raise.
    """

    def __init__(self, name: str, outcomes):
        self.name = name
        self.outcomes = list(outcomes)
        self.calls = []

    async def generate(self, user_prompt, config):
        from resume_ats.providers.types import LLMResponse

        self.calls.append((user_prompt, config))
        if not self.outcomes:
            raise AssertionError(f"{self.name} called more often than scripted")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return LLMResponse(text=outcome)


@pytest.fixture
def scripted_provider():
    """Factory for :class:`ScriptedProvider` instances."""
    return ScriptedProvider


@pytest.fixture
def sleep_recorder():
    """Async stand-in for ``asyncio.sleep`` that records requested delays."""
    delays = []

    async def _sleep(delay):
        delays.append(delay)

    _sleep.delays = delays
    return _sleep
