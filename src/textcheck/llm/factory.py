from __future__ import annotations

from typing import TYPE_CHECKING

from textcheck import logger as logger_mod

from .base import LLMClient, LLMConfig
from .errors import ConfigurationError

if TYPE_CHECKING:
    from textcheck.config import AppConfig

log = logger_mod.get_logger()

OPENAI = "openai"
VERTEXAI = "vertexai"

# Accepted LLM_PROVIDER values, matched exactly (case-sensitive)
PROVIDER_ALIASES = {
    "OPENAI": OPENAI,
    "VERTEXAI": VERTEXAI,
    "VERTEX": VERTEXAI,
    "GOOGLE": VERTEXAI,
    "GEMINI": VERTEXAI,
}
DEFAULT_PROVIDER = VERTEXAI


def resolve_provider(flag: str | None) -> str:
    """Map an LLM_PROVIDER value to a provider name.

    An unset flag selects the default backend. Unknown values are rejected
    instead of silently picking a backend.
    """

    p = (flag or "").strip()
    if not p:
        return DEFAULT_PROVIDER
    try:
        return PROVIDER_ALIASES[p]
    except KeyError:
        raise ConfigurationError(
            f"Unknown LLM provider: {flag!r}. Expected one of: OPENAI, VERTEXAI"
        ) from None


def build_llm(config: AppConfig) -> LLMClient:
    """Factory for provider clients.

    Providers:
    - openai (needs OPENAI_API_KEY)
    - vertexai (needs GOOGLE_APPLICATION_CREDENTIALS or GOOGLE_CREDENTIALS_JSON)
    """

    provider = resolve_provider(config.provider)

    if provider == OPENAI:
        if not config.openai_api_key:
            raise ConfigurationError("Missing env var OPENAI_API_KEY for OpenAI API key")

        from .openai_client import OpenAILLM

        llm_config = LLMConfig(
            provider=OPENAI,
            model=config.openai_model,
            timeout_s=config.timeout_s,
            max_retries=config.max_retries,
        )
        log.info("Using LLM provider: openai model=%s", llm_config.model)
        return OpenAILLM(llm_config, api_key=config.openai_api_key)

    from textcheck.google import AuthConfig, load_credentials, resolve_project

    from .vertex_client import VertexAILLM

    creds = load_credentials(
        AuthConfig(
            credentials_json=config.google_credentials_json,
            credentials_file=config.google_credentials_path,
        )
    )
    llm_config = LLMConfig(
        provider=VERTEXAI,
        model=config.vertex_model,
        timeout_s=config.timeout_s,
        max_retries=config.max_retries,
        project=resolve_project(creds, config.google_project),
        location=config.google_location,
    )
    log.info(
        "Using LLM provider: vertexai model=%s project=%s location=%s",
        llm_config.model,
        llm_config.project,
        llm_config.location,
    )
    return VertexAILLM(llm_config, credentials=creds)
