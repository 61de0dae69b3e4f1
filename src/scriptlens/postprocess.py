"""Whitespace cleanup applied to reconstructed text."""

from __future__ import annotations
import re

_SPACE_COMMA = re.compile(r" +, ")
_SPACE_SEMI = re.compile(r" +;")
_BLANK_RUN = re.compile(r"\n{3,}")


def cleanup(text: str) -> str:
    """Normalize stray spaces, blank-line runs and trailing whitespace.

    The result ends with exactly one newline, or is empty when ``text``
    holds only whitespace.
    """
    text = _SPACE_COMMA.sub(", ", text)
    text = _SPACE_SEMI.sub(";", text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = _BLANK_RUN.sub("\n\n", text)
    text = text.strip()
    return text + "\n" if text else ""
