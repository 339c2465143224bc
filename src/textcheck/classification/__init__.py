from .classifier import classify_text
from .prompt import SYSTEM_TEMPLATE, render_messages
from .schema import (
    SCHEMA_NAME,
    SENTIMENTS,
    ClassificationResult,
    build_classification_schema,
)

__all__ = [
    "SCHEMA_NAME",
    "SENTIMENTS",
    "SYSTEM_TEMPLATE",
    "ClassificationResult",
    "build_classification_schema",
    "classify_text",
    "render_messages",
]
