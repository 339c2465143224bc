from __future__ import annotations

from textcheck import logger as logger_mod
from textcheck.llm._json import validate_json
from textcheck.llm.base import LLMClient

from .prompt import render_messages
from .schema import SCHEMA_NAME, ClassificationResult, build_classification_schema

log = logger_mod.get_logger()


def classify_text(llm: LLMClient, *, language: str, text: str) -> ClassificationResult:
    """Send one text to the backend and return its validated classification."""

    schema = build_classification_schema(language)
    messages = render_messages(language, text)
    log.debug(f"Classifying {len(text)} chars of {language} text")

    result = llm.generate_json(
        messages=messages, json_schema=schema, schema_name=SCHEMA_NAME
    )
    # enforced here as well as in the clients
    validate_json(result.output_json, schema)

    log.info(
        f"Classified text: provider={result.provider} model={result.model} "
        f"sentiment={result.output_json['sentiment']} "
        f"correctness={result.output_json['correctness']}"
    )
    return ClassificationResult.from_dict(result.output_json)
