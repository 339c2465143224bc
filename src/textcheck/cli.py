"""Command line entry point.

Usage:
    python -m textcheck [--language LANG] [--text TEXT] [--provider NAME] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from typing import Optional, Sequence, TextIO

from textcheck import logger as logger_mod
from textcheck.classification import ClassificationResult, classify_text
from textcheck.config import AppConfig
from textcheck.llm import LLMClient, LLMError, build_llm
from textcheck.llm.errors import ConfigurationError

log = logger_mod.get_logger()

DEFAULT_LANGUAGE = "Spanish"
DEFAULT_TEXT = "Yo estas enfadado consigo"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2


def emit(result: ClassificationResult, out: TextIO) -> None:
    out.write(json.dumps(result.as_dict(), ensure_ascii=False, indent=2))
    out.write("\n")
    out.flush()


def run(
    config: AppConfig,
    *,
    language: str = DEFAULT_LANGUAGE,
    text: str = DEFAULT_TEXT,
    llm: Optional[LLMClient] = None,
    out: Optional[TextIO] = None,
) -> ClassificationResult:
    """Classify one text and print the result. Exactly one logical backend call."""

    llm = llm or build_llm(config)
    result = classify_text(llm, language=language, text=text)
    emit(result, out or sys.stdout)
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textcheck",
        description="Grade grammar, sentiment and aggressiveness of a text with an LLM.",
    )
    parser.add_argument("--language", default=DEFAULT_LANGUAGE, help="Language of the text")
    parser.add_argument("--text", default=DEFAULT_TEXT, help="Text to classify")
    parser.add_argument(
        "--provider",
        default=None,
        help="Override LLM_PROVIDER (OPENAI or VERTEXAI)",
    )
    parser.add_argument("--log-level", default=None, help="Override LOGGING_LEVEL")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.log_level:
        logger_mod.set_logging_level(args.log_level)

    try:
        config = AppConfig.from_env()
        if args.provider is not None:
            config = dataclasses.replace(config, provider=args.provider)
        run(config, language=args.language, text=args.text)
    except ConfigurationError as e:
        log.error(f"Configuration error: {e}")
        return EXIT_CONFIG
    except LLMError as e:
        log.error(f"{type(e).__name__}: {e}")
        return EXIT_ERROR
    return EXIT_OK
