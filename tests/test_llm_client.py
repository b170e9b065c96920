"""Tests for LLMClient provider selection, retries and failover."""

import pytest
from pydantic import BaseModel

from resume_ats.config import LLMConfig
from resume_ats.llm import (
    InvalidJSONResponseError,
    LLMClient,
    NoProviderConfiguredError,
    SchemaValidationError,
    select_provider,
    strip_code_fences,
)
from resume_ats.observability import LLMCallObserver
from resume_ats.providers.errors import (
    GEMINI,
    OPENROUTER,
    InvalidProviderRequestError,
    ProviderError,
    ProviderUnavailableError,
    RateLimitError,
)


class Answer(BaseModel):
    value: int


def _gemini_400():
    return InvalidProviderRequestError(
        GEMINI, "Invalid request to Gemini API. Check model name and parameters.", 400
    )


def _gemini_503():
    return ProviderUnavailableError(
        GEMINI, "Gemini API service is temporarily unavailable. Please try again later.", 503
    )


def _rate_limited():
    return RateLimitError(OPENROUTER, "Rate limit exceeded. Please try again later.", 429)


class TestSelectProvider:
    def test_nothing_configured(self):
        assert select_provider(LLMConfig()) is None

    def test_openrouter_preferred(self):
        config = LLMConfig(openrouter_api_key="or", gemini_api_key="g")
        assert select_provider(config) == OPENROUTER

    def test_gemini_when_only_gemini(self):
        assert select_provider(LLMConfig(gemini_api_key="g")) == GEMINI

    def test_gemini_only_flag(self):
        config = LLMConfig(openrouter_api_key="or", gemini_api_key="g", gemini_only=True)
        assert select_provider(config) == GEMINI

    def test_gemini_only_flag_without_gemini_key(self):
        config = LLMConfig(openrouter_api_key="or", gemini_only=True)
        assert select_provider(config) == OPENROUTER


class TestStripCodeFences:
    def test_json_fence(self):
        assert strip_code_fences('```json\n{"value": 1}\n```') == '{"value": 1}'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"value": 1}```') == '{"value": 1}'

    def test_plain_text_trimmed(self):
        assert strip_code_fences('  {"value": 1}\n') == '{"value": 1}'


class TestGenerateJson:
    @pytest.mark.asyncio
    async def test_no_provider_configured(self):
        client = LLMClient(LLMConfig())
        with pytest.raises(NoProviderConfiguredError, match="OPENROUTER_API_KEY or GEMINI_API_KEY"):
            await client.generate_json(Answer, "sys", "user")

    @pytest.mark.asyncio
    async def test_success_first_attempt(self, scripted_provider, sleep_recorder):
        openrouter = scripted_provider(OPENROUTER, ['{"value": 7}'])
        client = LLMClient(
            LLMConfig(openrouter_api_key="or"),
            providers={OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        result = await client.generate_json(Answer, "be terse", "score this")

        assert result == Answer(value=7)
        assert sleep_recorder.delays == []
        user_prompt, generation = openrouter.calls[0]
        assert user_prompt == "score this"
        assert generation.system_prompt == "be terse"
        assert generation.temperature == 0.2

    @pytest.mark.asyncio
    async def test_fenced_response(self, scripted_provider):
        openrouter = scripted_provider(OPENROUTER, ['```json\n{"value": 3}\n```'])
        client = LLMClient(LLMConfig(openrouter_api_key="or"), providers={OPENROUTER: openrouter})
        assert (await client.generate_json(Answer, "s", "u")).value == 3

    @pytest.mark.asyncio
    async def test_backend_errors_retry_with_linear_backoff(self, scripted_provider, sleep_recorder):
        openrouter = scripted_provider(OPENROUTER, [_rate_limited(), _rate_limited(), '{"value": 1}'])
        client = LLMClient(
            LLMConfig(openrouter_api_key="or"),
            providers={OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        assert (await client.generate_json(Answer, "s", "u")).value == 1
        assert sleep_recorder.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_last_backend_error_is_raised(self, scripted_provider, sleep_recorder):
        errors = [ProviderError(OPENROUTER, f"OpenRouter API error: 500 #{n}", 500) for n in range(3)]
        openrouter = scripted_provider(OPENROUTER, errors)
        client = LLMClient(
            LLMConfig(openrouter_api_key="or"),
            providers={OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        with pytest.raises(ProviderError, match="#2"):
            await client.generate_json(Answer, "s", "u")
        assert len(openrouter.calls) == 3
        assert sleep_recorder.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_invalid_json_retries_without_sleep(self, scripted_provider, sleep_recorder):
        openrouter = scripted_provider(OPENROUTER, ["not json", "still not", "nope"])
        client = LLMClient(
            LLMConfig(openrouter_api_key="or"),
            providers={OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        with pytest.raises(InvalidJSONResponseError, match="Invalid JSON response from LLM"):
            await client.generate_json(Answer, "s", "u")
        assert len(openrouter.calls) == 3
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_invalid_json_then_valid(self, scripted_provider):
        openrouter = scripted_provider(OPENROUTER, ["oops", '{"value": 2}'])
        client = LLMClient(LLMConfig(openrouter_api_key="or"), providers={OPENROUTER: openrouter})
        assert (await client.generate_json(Answer, "s", "u")).value == 2

    @pytest.mark.asyncio
    async def test_schema_mismatch_fails_immediately(self, scripted_provider):
        openrouter = scripted_provider(OPENROUTER, ['{"value": "many"}', '{"value": 1}'])
        client = LLMClient(LLMConfig(openrouter_api_key="or"), providers={OPENROUTER: openrouter})

        with pytest.raises(SchemaValidationError, match="Schema validation failed"):
            await client.generate_json(Answer, "s", "u")
        assert len(openrouter.calls) == 1

    @pytest.mark.asyncio
    async def test_max_retries_override(self, scripted_provider):
        openrouter = scripted_provider(OPENROUTER, ["bad", '{"value": 1}'])
        client = LLMClient(LLMConfig(openrouter_api_key="or"), providers={OPENROUTER: openrouter})

        with pytest.raises(InvalidJSONResponseError):
            await client.generate_json(Answer, "s", "u", max_retries=0)
        assert len(openrouter.calls) == 1


class TestGeminiFailover:
    def _config(self, **overrides):
        values = dict(openrouter_api_key="or", gemini_api_key="g", gemini_only=True)
        values.update(overrides)
        return LLMConfig(**values)

    @pytest.mark.asyncio
    async def test_invalid_request_falls_back_to_openrouter(self, scripted_provider, sleep_recorder):
        gemini = scripted_provider(GEMINI, [_gemini_400()])
        openrouter = scripted_provider(OPENROUTER, ['{"value": 5}'])
        observer = LLMCallObserver(label="test")
        client = LLMClient(
            self._config(),
            providers={GEMINI: gemini, OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        result = await client.generate_json(Answer, "s", "u", observer=observer)

        assert result.value == 5
        assert sleep_recorder.delays == []
        assert observer.providers_tried == [GEMINI, OPENROUTER]
        assert [e.outcome for e in observer.events] == ["failover", "success"]
        stats = observer.get_stats()
        assert stats["attempts"] == 2
        assert stats["failures"] == 1
        assert stats["providers"] == [GEMINI, OPENROUTER]

    @pytest.mark.asyncio
    async def test_failover_keeps_full_retry_budget(self, scripted_provider, sleep_recorder):
        gemini = scripted_provider(GEMINI, [_gemini_400()])
        openrouter = scripted_provider(OPENROUTER, [_rate_limited(), _rate_limited(), _rate_limited()])
        client = LLMClient(
            self._config(),
            providers={GEMINI: gemini, OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        with pytest.raises(RateLimitError):
            await client.generate_json(Answer, "s", "u")
        assert len(gemini.calls) == 1
        assert len(openrouter.calls) == 3
        assert sleep_recorder.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_failover_on_later_attempt(self, scripted_provider, sleep_recorder):
        gemini = scripted_provider(GEMINI, [_gemini_503(), _gemini_400()])
        openrouter = scripted_provider(OPENROUTER, ['{"value": 9}'])
        client = LLMClient(
            self._config(),
            providers={GEMINI: gemini, OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        assert (await client.generate_json(Answer, "s", "u")).value == 9
        assert sleep_recorder.delays == [1.0]

    @pytest.mark.asyncio
    async def test_no_failover_without_openrouter_key(self, scripted_provider, sleep_recorder):
        gemini = scripted_provider(GEMINI, [_gemini_400(), _gemini_400(), _gemini_400()])
        client = LLMClient(
            LLMConfig(gemini_api_key="g"),
            providers={GEMINI: gemini},
            sleep=sleep_recorder,
        )

        with pytest.raises(InvalidProviderRequestError) as excinfo:
            await client.generate_json(Answer, "s", "u")
        assert len(gemini.calls) == 3
        assert "OpenRouter is also configured" not in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_final_gemini_error_mentions_openrouter(self, scripted_provider, sleep_recorder):
        gemini = scripted_provider(GEMINI, [_gemini_503(), _gemini_503(), _gemini_503()])
        openrouter = scripted_provider(OPENROUTER, [])
        client = LLMClient(
            self._config(),
            providers={GEMINI: gemini, OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        with pytest.raises(ProviderUnavailableError) as excinfo:
            await client.generate_json(Answer, "s", "u")
        assert excinfo.value.message.startswith("Gemini API service is temporarily unavailable")
        assert "consider disabling GEMINI_ONLY=true" in excinfo.value.message
        assert openrouter.calls == []

    @pytest.mark.asyncio
    async def test_failover_happens_once(self, scripted_provider, sleep_recorder):
        gemini = scripted_provider(GEMINI, [_gemini_400()])
        openrouter = scripted_provider(OPENROUTER, ["x", "y", '{"value": 4}'])
        client = LLMClient(
            self._config(),
            providers={GEMINI: gemini, OPENROUTER: openrouter},
            sleep=sleep_recorder,
        )

        assert (await client.generate_json(Answer, "s", "u")).value == 4
        assert len(gemini.calls) == 1
