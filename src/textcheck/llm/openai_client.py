from __future__ import annotations

import time
from typing import Any

import openai

from textcheck import logger as logger_mod

from ._json import parse_json, validate_json
from ._retry import RetryConfig, execute_with_retry
from .base import LLMClient, LLMConfig, LLMMessage, LLMResult
from .errors import AuthenticationError, LLMError, NetworkError, ValidationError

log = logger_mod.get_logger()


def map_openai_error(error: Exception) -> LLMError:
    """Translate an OpenAI SDK exception into our error taxonomy."""

    # APITimeoutError is a subclass of APIConnectionError
    if isinstance(error, openai.APIConnectionError):
        return NetworkError(f"OpenAI transport error: {error}")
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return AuthenticationError(f"OpenAI rejected the credentials: {error}")
    if isinstance(error, openai.RateLimitError):
        return NetworkError(f"OpenAI rate limit: {error}")
    if isinstance(error, openai.APIStatusError) and error.status_code == 408:
        return NetworkError(f"OpenAI request timeout: {error}")
    if isinstance(error, openai.APIStatusError) and error.status_code >= 500:
        return NetworkError(f"OpenAI server error {error.status_code}: {error}")
    return LLMError(f"OpenAI API error: {error}")


class OpenAILLM(LLMClient):
    """OpenAI client wrapper.

    Structured output goes through function calling: the schema is offered
    as a single tool and the model is forced to call it. The tool arguments
    are the JSON payload.
    """

    def __init__(self, config: LLMConfig, *, api_key: str | None = None, client: Any = None):
        self._cfg = config
        self._retry = RetryConfig(max_retries=config.max_retries)
        if client is not None:
            self._client = client
            return

        if not api_key:
            raise LLMError("OpenAI API key is required")
        # retries are handled by execute_with_retry
        self._client = openai.OpenAI(
            api_key=api_key, timeout=config.timeout_s, max_retries=0
        )

    def _extract_arguments(self, resp: Any, schema_name: str) -> str:
        try:
            message = resp.choices[0].message
        except (AttributeError, IndexError) as e:
            raise ValidationError("OpenAI response has no choices") from e

        for call in getattr(message, "tool_calls", None) or []:
            fn = getattr(call, "function", None)
            if fn is not None and getattr(fn, "name", None) == schema_name:
                return fn.arguments or ""

        # Some models answer in plain content despite tool_choice
        content = getattr(message, "content", None)
        if isinstance(content, str) and content.strip():
            log.warning("OpenAI answered without a tool call; using message content")
            return content.strip()

        raise ValidationError("Unable to extract structured output from OpenAI response")

    def _create(self, request: dict[str, Any]) -> Any:
        try:
            return self._client.chat.completions.create(**request)
        except openai.OpenAIError as e:
            raise map_openai_error(e) from e

    def generate_json(
        self,
        *,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str = "output",
    ) -> LLMResult:
        request = {
            "model": self._cfg.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "tools": [
                {
                    "type": "function",
                    "function": {
                        "name": schema_name,
                        "description": json_schema.get("description", ""),
                        "parameters": json_schema,
                    },
                }
            ],
            "tool_choice": {"type": "function", "function": {"name": schema_name}},
            "temperature": self._cfg.temperature,
        }

        start = time.monotonic()
        resp = execute_with_retry(
            lambda: self._create(request),
            context=f"calling OpenAI {self._cfg.model}",
            retry=self._retry,
        )
        log.info(
            "LLM call: provider=openai model=%s latency=%.2fs",
            self._cfg.model,
            time.monotonic() - start,
        )

        raw = self._extract_arguments(resp, schema_name)
        data = parse_json(raw)
        validate_json(data, json_schema)
        return LLMResult(
            provider="openai", model=self._cfg.model, output_json=data, raw_text=raw
        )
