"""Tests for configuration validator."""

from dataclasses import replace

from resume_ats.config import LLMConfig
from resume_ats.config_validator import ConfigError, Severity, has_errors, validate_config


class TestValidateConfig:
    """Tests for validate_config()."""

    def _valid_config(self) -> LLMConfig:
        """Return a minimal valid config."""
        return LLMConfig(openrouter_api_key="test-key-123")

    def test_valid_config_no_errors(self):
        assert validate_config(self._valid_config()) == []

    def test_missing_keys_is_only_a_warning(self):
        issues = validate_config(LLMConfig())
        assert not has_errors(issues)
        api_issues = [e for e in issues if e.field == "api_key"]
        assert len(api_issues) == 1
        assert api_issues[0].severity == Severity.WARNING

    def test_gemini_only_without_gemini_key(self):
        issues = validate_config(replace(self._valid_config(), gemini_only=True))
        assert [e.field for e in issues] == ["gemini_only"]
        assert not has_errors(issues)

    def test_bad_base_url(self):
        issues = validate_config(replace(self._valid_config(), openrouter_base_url="openrouter.ai"))
        assert has_errors(issues)
        assert issues[0].field == "openrouter_base_url"

    def test_missing_model_for_configured_backend(self):
        config = replace(self._valid_config(), model_default="")
        assert [e.field for e in validate_config(config)] == ["model_default"]

    def test_empty_gemini_model_ignored_without_gemini_key(self):
        config = replace(self._valid_config(), gemini_model="")
        assert validate_config(config) == []

    def test_temperature_out_of_range(self):
        for value in (-0.1, 2.5):
            issues = validate_config(replace(self._valid_config(), temperature=value))
            assert has_errors(issues)
            assert issues[0].field == "temperature"

    def test_timeout_and_retries(self):
        config = replace(self._valid_config(), request_timeout=0, max_retries=-1)
        fields = {e.field for e in validate_config(config)}
        assert fields == {"request_timeout", "max_retries"}


class TestHasErrors:
    def test_empty_list(self):
        assert not has_errors([])

    def test_only_warnings(self):
        issues = [ConfigError("api_key", "missing", Severity.WARNING)]
        assert not has_errors(issues)

    def test_with_error(self):
        issues = [
            ConfigError("api_key", "missing", Severity.WARNING),
            ConfigError("temperature", "bad", Severity.ERROR),
        ]
        assert has_errors(issues)
