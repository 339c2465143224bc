from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

SCHEMA_NAME = "extractor"

SENTIMENTS = ("happy", "neutral", "sad", "angry", "frustrated")
SCORE_MIN = 1
SCORE_MAX = 10


def _score(description: str) -> dict[str, Any]:
    return {
        "type": "integer",
        "minimum": SCORE_MIN,
        "maximum": SCORE_MAX,
        "description": description,
    }


def build_classification_schema(language: str) -> dict[str, Any]:
    """JSON schema for a Classification Result.

    The `solution` guidance names the target language, so the schema is built
    per request.
    """

    return {
        "type": "object",
        "description": "Grammar, sentiment and aggressiveness classification of a text",
        "properties": {
            "sentiment": {
                "type": "string",
                "enum": list(SENTIMENTS),
                "description": "The sentiment of the text",
            },
            "aggressiveness": _score(
                "How aggressive the text is on a scale from 1 to 10"
            ),
            "correctness": _score(
                "How grammatically correct the text is on a scale from 1 to 10"
            ),
            "errors": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "The errors in the text. Specify the proper way to write the text "
                    "and where it is wrong. Explain it in a human-readable way. "
                    "Write each error in a separate string"
                ),
            },
            "solution": {
                "type": "string",
                "description": (
                    "The solution to the errors in the text. "
                    f"Write the solution in {language}"
                ),
            },
            "language": {
                "type": "string",
                "description": "The language the text is written in",
            },
        },
        "required": [
            "sentiment",
            "aggressiveness",
            "correctness",
            "errors",
            "solution",
            "language",
        ],
        "additionalProperties": False,
    }


@dataclass(frozen=True)
class ClassificationResult:
    sentiment: str
    aggressiveness: int
    correctness: int
    errors: list[str]
    solution: str
    language: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClassificationResult":
        """Build from an already-validated payload."""
        values = {f.name: data[f.name] for f in fields(cls)}
        values["errors"] = list(values["errors"])
        for name in ("aggressiveness", "correctness"):
            # jsonschema accepts 2.0 as an integer
            if isinstance(values[name], float):
                values[name] = int(values[name])
        return cls(**values)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
