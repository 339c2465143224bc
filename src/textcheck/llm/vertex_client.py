from __future__ import annotations

import time
from typing import Any

import httpx
from google import genai
from google.auth import exceptions as auth_exceptions
from google.genai import errors as genai_errors
from google.genai import types

from textcheck import logger as logger_mod

from ._json import parse_json, validate_json
from ._retry import RetryConfig, execute_with_retry
from .base import LLMClient, LLMConfig, LLMMessage, LLMResult
from .errors import AuthenticationError, LLMError, NetworkError, ValidationError

log = logger_mod.get_logger()


def map_vertex_error(error: Exception) -> LLMError:
    """Translate google-genai / google-auth / httpx exceptions into our error taxonomy."""

    if isinstance(error, auth_exceptions.RefreshError):
        return AuthenticationError(f"Google credentials were rejected: {error}")
    if isinstance(error, (httpx.TransportError, auth_exceptions.TransportError)):
        return NetworkError(f"Vertex AI transport error: {error}")
    if isinstance(error, genai_errors.APIError):
        code = getattr(error, "code", None)
        if code in (401, 403):
            return AuthenticationError(f"Vertex AI rejected the credentials: {error}")
        if code in (408, 429) or (isinstance(code, int) and 500 <= code <= 599):
            return NetworkError(f"Vertex AI error {code}: {error}")
        return LLMError(f"Vertex AI API error {code}: {error}")
    return LLMError(f"Vertex AI error: {error}")


def _to_contents(messages: list[LLMMessage]) -> tuple[str | None, list[types.Content]]:
    """Split messages into a system instruction and the conversation contents."""

    system_parts = [m.content for m in messages if m.role == "system"]
    contents = [
        types.Content(
            role="model" if m.role == "assistant" else "user",
            parts=[types.Part.from_text(text=m.content)],
        )
        for m in messages
        if m.role != "system"
    ]
    return ("\n\n".join(system_parts) or None), contents


class VertexAILLM(LLMClient):
    """Gemini on Vertex AI, via the google-genai SDK.

    The schema is passed as `response_json_schema` with a JSON mime type, so
    the model returns a JSON document as its text. The document is still
    validated locally.
    """

    def __init__(self, config: LLMConfig, *, credentials: Any = None, client: Any = None):
        self._cfg = config
        self._retry = RetryConfig(max_retries=config.max_retries)
        if client is not None:
            self._client = client
            return

        if not config.project:
            raise LLMError("Vertex AI requires a Google Cloud project")
        self._client = genai.Client(
            vertexai=True,
            project=config.project,
            location=config.location,
            credentials=credentials,
            http_options=types.HttpOptions(timeout=int(config.timeout_s * 1000)),
        )

    def _generate(self, contents: list[types.Content], gen_config: types.GenerateContentConfig) -> Any:
        try:
            return self._client.models.generate_content(
                model=self._cfg.model, contents=contents, config=gen_config
            )
        except (
            genai_errors.APIError,
            httpx.TransportError,
            auth_exceptions.GoogleAuthError,
        ) as e:
            raise map_vertex_error(e) from e

    def generate_json(
        self,
        *,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str = "output",
    ) -> LLMResult:
        system_instruction, contents = _to_contents(messages)
        gen_config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self._cfg.temperature,
            response_mime_type="application/json",
            response_json_schema=json_schema,
        )

        start = time.monotonic()
        resp = execute_with_retry(
            lambda: self._generate(contents, gen_config),
            context=f"calling Vertex AI {self._cfg.model} ({schema_name})",
            retry=self._retry,
        )
        log.info(
            "LLM call: provider=vertexai model=%s latency=%.2fs",
            self._cfg.model,
            time.monotonic() - start,
        )

        raw = getattr(resp, "text", None)
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationError("Vertex AI response contained no text")
        raw = raw.strip()
        data = parse_json(raw)
        validate_json(data, json_schema)
        return LLMResult(
            provider="vertexai", model=self._cfg.model, output_json=data, raw_text=raw
        )
