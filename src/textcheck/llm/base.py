from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Protocol

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class LLMMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class LLMResult:
    """Provider-neutral result container; `output_json` is already schema-validated."""

    provider: str
    model: str
    output_json: dict[str, Any]
    raw_text: str


@dataclass(frozen=True)
class LLMConfig:
    provider: str
    model: str
    temperature: float = 0.0
    timeout_s: float = 60.0
    max_retries: int = 3
    # Vertex AI only
    project: Optional[str] = None
    location: Optional[str] = None


class LLMClient(Protocol):
    """Small interface for "prompt + schema -> validated JSON" tasks."""

    def generate_json(
        self,
        *,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str = "output",
    ) -> LLMResult:
        raise NotImplementedError
