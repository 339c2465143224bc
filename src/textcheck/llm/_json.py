from __future__ import annotations

import json
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as _SchemaValidationError

from .errors import ValidationError


def parse_json(text: str) -> dict[str, Any]:
    """Parse JSON from a model response.

    Assumes the provider was instructed to return JSON only. Markdown code
    fences around the payload are tolerated.
    """

    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
        cleaned = cleaned.strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Failed to parse JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return data


def validate_json(instance: dict[str, Any], schema: dict[str, Any]) -> None:
    try:
        Draft202012Validator(schema).validate(instance)
    except _SchemaValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) or "<root>"
        raise ValidationError(
            f"JSON schema validation failed at {path}: {e.message}"
        ) from e
