"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field

# Token kinds
IDENTIFIER = "identifier"
NUMBER = "number"
STRING = "string"
TEMPLATE = "template"
REGEX = "regex"
COMMENT = "comment"
OPERATOR = "operator"
UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Token:
    """A classified slice of source text."""
    kind: str              # one of the kinds above
    text: str              # exact source slice, delimiters included

    def is_op(self, value: str) -> bool:
        return self.kind == OPERATOR and self.text == value


@dataclass(frozen=True, slots=True)
class Finding:
    """A span in scanned text that looks like a secret or a URL."""
    kind: str              # e.g. "url", "aws_access_key", "base64_long"
    start: int
    length: int
    priority: int          # higher wins overlaps
    text: str = ""

    @property
    def end(self) -> int:
        return self.start + self.length

    def overlaps(self, other: Finding) -> bool:
        return self.start < other.end and other.start < self.end

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "start": self.start,
            "length": self.length,
            "priority": self.priority,
            "text": self.text,
        }


@dataclass(slots=True)
class AnnotatedText:
    """Result of scanning and annotating a text."""
    text: str                                       # marked-up text
    findings: list[Finding] = field(default_factory=list)  # offsets into the escaped text
