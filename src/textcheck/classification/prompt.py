from __future__ import annotations

from textcheck.llm.base import LLMMessage

SYSTEM_TEMPLATE = (
    "You are an expert in {language}, you have to detect grammar problems sentences"
)


def render_messages(language: str, text: str) -> list[LLMMessage]:
    """Fill the two-message template.

    Only the system message is templated; the user text is passed through
    verbatim, braces included.
    """

    return [
        LLMMessage(role="system", content=SYSTEM_TEMPLATE.format(language=language)),
        LLMMessage(role="user", content=text),
    ]
