"""Tests for LLM configuration loading."""

import pytest

from resume_ats.config import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_MODEL,
    DEFAULT_OPENROUTER_BASE_URL,
    LLMConfig,
    load_config,
    resolve_placeholder,
)


class TestLoadConfig:
    def test_defaults_without_environment(self):
        config = load_config(environ={})
        assert config == LLMConfig()
        assert config.openrouter_base_url == DEFAULT_OPENROUTER_BASE_URL
        assert config.model_default == DEFAULT_MODEL
        assert config.gemini_model == DEFAULT_GEMINI_MODEL
        assert config.temperature == 0.2
        assert not config.has_openrouter
        assert not config.has_gemini

    def test_environment_values(self):
        config = load_config(environ={
            "OPENROUTER_API_KEY": "or-key",
            "MODEL_DEFAULT": "some/model",
            "GEMINI_API_KEY": "g-key",
            "GEMINI_ONLY": "true",
            "LLM_TIMEOUT_SECONDS": "15",
            "LLM_MAX_RETRIES": "4",
        })
        assert config.openrouter_api_key == "or-key"
        assert config.model_default == "some/model"
        assert config.gemini_api_key == "g-key"
        assert config.gemini_only is True
        assert config.request_timeout == 15.0
        assert config.max_retries == 4

    @pytest.mark.parametrize("value", ["1", "yes", "TRUE ", "false", ""])
    def test_gemini_only_requires_literal_true(self, value):
        config = load_config(environ={"GEMINI_ONLY": value})
        assert config.gemini_only is (value.strip().lower() == "true")

    def test_yaml_file_is_overridden_by_environment(self, tmp_path):
        path = tmp_path / "llm.yaml"
        path.write_text(
            "model_default: yaml/model\n"
            "gemini_model: gemini-yaml\n"
            "openrouter_api_key: ${MY_OR_KEY}\n"
            "unknown_key: ignored\n",
            encoding="utf-8",
        )
        config = load_config(
            config_path=str(path),
            environ={"MY_OR_KEY": "from-placeholder", "GEMINI_MODEL": "gemini-env"},
        )
        assert config.model_default == "yaml/model"
        assert config.gemini_model == "gemini-env"
        assert config.openrouter_api_key == "from-placeholder"

    def test_config_path_from_environment(self, tmp_path):
        path = tmp_path / "llm.yaml"
        path.write_text("max_retries: 0\n", encoding="utf-8")
        config = load_config(environ={"RESUME_ATS_CONFIG": str(path)})
        assert config.max_retries == 0

    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(config_path=str(tmp_path / "nope.yaml"), environ={})

    def test_missing_env_path_is_ignored(self, tmp_path):
        config = load_config(environ={"RESUME_ATS_CONFIG": str(tmp_path / "nope.yaml")})
        assert config == LLMConfig()

    def test_non_mapping_yaml_rejected(self, tmp_path):
        path = tmp_path / "llm.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=str(path), environ={})

    def test_bad_number_rejected(self):
        with pytest.raises(ValueError, match="max_retries"):
            load_config(environ={"LLM_MAX_RETRIES": "many"})

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "proc-key")
        assert load_config().gemini_api_key == "proc-key"


class TestResolvePlaceholder:
    def test_resolves_from_env(self):
        assert resolve_placeholder("${KEY}", {"KEY": "v"}) == "v"

    def test_missing_env_resolves_to_empty(self):
        assert resolve_placeholder("${KEY}", {}) == ""

    def test_other_values_pass_through(self):
        assert resolve_placeholder("plain", {}) == "plain"
        assert resolve_placeholder(3, {}) == 3
