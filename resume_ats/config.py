"""LLM backend configuration loaded from YAML and environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "meta-llama/llama-3.1-70b-instruct"
DEFAULT_GEMINI_MODEL = "gemini-1.0-pro"

CONFIG_PATH_ENV = "RESUME_ATS_CONFIG"

#: Environment variable -> LLMConfig field.
ENV_FIELDS: Dict[str, str] = {
    "OPENROUTER_API_KEY": "openrouter_api_key",
    "OPENROUTER_BASE_URL": "openrouter_base_url",
    "MODEL_DEFAULT": "model_default",
    "GEMINI_API_KEY": "gemini_api_key",
    "GEMINI_MODEL": "gemini_model",
    "GEMINI_ONLY": "gemini_only",
    "LLM_TIMEOUT_SECONDS": "request_timeout",
    "LLM_MAX_RETRIES": "max_retries",
}


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the primary (OpenRouter) and secondary (Gemini) backends.

    Read once and handed to :class:`resume_ats.llm.LLMClient`; nothing in the
    package keeps a process-wide copy.
    """

    openrouter_api_key: str = ""
    openrouter_base_url: str = DEFAULT_OPENROUTER_BASE_URL
    model_default: str = DEFAULT_MODEL
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_only: bool = False
    temperature: float = 0.2
    request_timeout: float = 60.0
    max_retries: int = 2

    @property
    def has_openrouter(self) -> bool:
        return bool(self.openrouter_api_key)

    @property
    def has_gemini(self) -> bool:
        return bool(self.gemini_api_key)


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LLMConfig:
    """Build an :class:`LLMConfig` from defaults, an optional YAML file and the environment.

    Precedence (lowest to highest): dataclass defaults, YAML file, environment.
    The YAML file is taken from *config_path* or ``$RESUME_ATS_CONFIG``; a
    missing path is an error only when it was given explicitly.
    """
    env = os.environ if environ is None else environ
    config = LLMConfig()

    path_value = config_path or env.get(CONFIG_PATH_ENV, "")
    if path_value:
        path = Path(path_value)
        if path.exists():
            config = _apply(config, _read_yaml(path, env))
        elif config_path:
            raise FileNotFoundError(f"Config file not found: {config_path}")

    overrides: Dict[str, Any] = {}
    for env_key, field_name in ENV_FIELDS.items():
        value = env.get(env_key)
        if value is not None and value != "":
            overrides[field_name] = value
    return _apply(config, overrides)


def _read_yaml(path: Path, env: Mapping[str, str]) -> Dict[str, Any]:
    import yaml

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return {key: resolve_placeholder(value, env) for key, value in data.items()}


def resolve_placeholder(value: Any, env: Mapping[str, str]) -> Any:
    """Resolve ``${VAR_NAME}`` string values from *env*; other values pass through."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return env.get(value[2:-1], "")
    return value


def _apply(config: LLMConfig, values: Mapping[str, Any]) -> LLMConfig:
    known = {f.name: f for f in fields(LLMConfig)}
    updates: Dict[str, Any] = {}
    for key, raw in values.items():
        if key not in known or raw is None:
            continue
        default = getattr(LLMConfig, key)
        updates[key] = _coerce(raw, type(default), key)
    return replace(config, **updates)


def _coerce(value: Any, target: type, name: str) -> Any:
    if target is bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"
    try:
        if target is int:
            return int(value)
        if target is float:
            return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a {target.__name__}, got {value!r}") from exc
    return str(value)
