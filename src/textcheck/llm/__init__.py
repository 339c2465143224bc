"""LLM provider abstractions (OpenAI / Vertex AI).

Design goals:
- Keep provider-specific SDKs isolated.
- Provide a small, stable interface for "generate structured JSON" use cases.
- Validate output against a JSON Schema before anything downstream sees it.
"""

from .base import LLMClient, LLMConfig, LLMMessage, LLMResult
from .errors import (
    AuthenticationError,
    ConfigurationError,
    LLMError,
    NetworkError,
    ValidationError,
)
from .factory import build_llm, resolve_provider

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "LLMClient",
    "LLMConfig",
    "LLMError",
    "LLMMessage",
    "LLMResult",
    "NetworkError",
    "ValidationError",
    "build_llm",
    "resolve_provider",
]
