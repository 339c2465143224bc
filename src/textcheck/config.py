from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from textcheck.llm.errors import ConfigurationError

# Load from .env if it exists (useful for local development)
load_dotenv(find_dotenv(usecwd=True))

DEFAULT_OPENAI_MODEL = "gpt-4"
DEFAULT_VERTEX_MODEL = "gemini-2.5-pro"
DEFAULT_VERTEX_LOCATION = "us-central1"
DEFAULT_TIMEOUT_S = 60.0
DEFAULT_MAX_RETRIES = 3


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {raw!r}")
    return value


def _get_str(env: Mapping[str, str], name: str) -> Optional[str]:
    value = (env.get(name) or "").strip()
    return value or None


@dataclass(frozen=True)
class AppConfig:
    """Everything the tool needs from the environment, read once at startup."""

    provider: str = ""
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    google_credentials_path: Optional[str] = None
    google_credentials_json: Optional[str] = None
    google_project: Optional[str] = None
    google_location: str = DEFAULT_VERTEX_LOCATION
    vertex_model: str = DEFAULT_VERTEX_MODEL
    timeout_s: float = DEFAULT_TIMEOUT_S
    max_retries: int = DEFAULT_MAX_RETRIES

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        return cls(
            provider=(env.get("LLM_PROVIDER") or "").strip(),
            openai_api_key=_get_str(env, "OPENAI_API_KEY"),
            openai_model=_get_str(env, "OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            google_credentials_path=_get_str(env, "GOOGLE_APPLICATION_CREDENTIALS"),
            google_credentials_json=_get_str(env, "GOOGLE_CREDENTIALS_JSON"),
            google_project=_get_str(env, "GOOGLE_CLOUD_PROJECT"),
            google_location=_get_str(env, "GOOGLE_CLOUD_LOCATION")
            or DEFAULT_VERTEX_LOCATION,
            vertex_model=_get_str(env, "VERTEX_MODEL") or DEFAULT_VERTEX_MODEL,
            timeout_s=_get_float(env, "LLM_TIMEOUT_S", DEFAULT_TIMEOUT_S),
            max_retries=_get_int(env, "LLM_MAX_RETRIES", DEFAULT_MAX_RETRIES),
        )
