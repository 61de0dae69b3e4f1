"""Sensitive-pattern scanner — URLs and credential-looking runs.

Every detector runs over the same string, raw matches are pooled, then
overlaps are resolved by priority so the result never has two findings
sharing a character.  Offsets are only meaningful for the exact string
that was scanned.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Callable

from .log import get_logger
from .types import Finding

logger = get_logger(__name__)

Detector = Callable[[str], list[Finding]]

# Each pattern: (kind, compiled_regex, priority)
_PATTERNS: list[tuple[str, re.Pattern, int]] = [
    # URL — scheme plus everything up to whitespace, a quote or markup,
    # raw or already escaped (&lt; / &gt;)
    ("url", re.compile(
        r"\b(?:https?|ftp)://(?:(?!&[lg]t;)[^\s\"'`<>])+"
    ), 100),

    # AWS access key id
    ("aws_access_key", re.compile(
        r"\bAKIA[0-9A-Z]{16}\b"
    ), 95),

    # JWT-shaped: header.payload.signature
    ("jwt", re.compile(
        r"\b[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}\b"
    ), 90),

    # Base64 run with optional padding, not glued to a longer word
    ("base64_long", re.compile(
        r"(?<![A-Za-z0-9+/=_\-])[A-Za-z0-9+/]{20,}={0,2}(?![A-Za-z0-9+/=_\-])"
    ), 40),

    # Generic long token (api keys, hashes, opaque ids)
    ("secret_long", re.compile(
        r"(?<![A-Za-z0-9_\-=+/])[A-Za-z0-9_\-=+/]{25,}(?![A-Za-z0-9_\-=+/])"
    ), 30),
]


@dataclass
class ScannerConfig:
    """Configuration for the scanner."""
    # Kinds to never report (e.g. {"url"})
    skip_kinds: set[str] = field(default_factory=set)
    # Exact values that should never be reported
    allow_list: set[str] = field(default_factory=set)
    custom_detectors: list[Detector] = field(default_factory=list)


def _raw_matches(text: str) -> list[Finding]:
    matches: list[Finding] = []
    for kind, pattern, priority in _PATTERNS:
        for m in pattern.finditer(text):
            matches.append(Finding(
                kind=kind,
                start=m.start(),
                length=m.end() - m.start(),
                priority=priority,
                text=m.group(),
            ))
    return matches


def resolve_overlaps(candidates: list[Finding]) -> list[Finding]:
    """Greedy sweep keeping, for every contested span, the higher priority.

    Candidates are visited by start ascending, longer first on ties.  A
    candidate that overlaps an accepted finding of equal or higher
    priority is dropped; otherwise it evicts every accepted finding it
    overlaps.  The result is pairwise non-overlapping, sorted by start.
    """
    ordered = sorted(candidates, key=lambda f: (f.start, -f.length))
    accepted: list[Finding] = []
    for cand in ordered:
        if cand.length <= 0:
            continue
        clashes = [f for f in accepted if f.overlaps(cand)]
        if any(f.priority >= cand.priority for f in clashes):
            continue
        if clashes:
            accepted = [f for f in accepted if not f.overlaps(cand)]
        accepted.append(cand)
    return sorted(accepted, key=lambda f: f.start)


def scan(text: str, config: ScannerConfig | None = None) -> list[Finding]:
    """Find URLs and secret-like spans in ``text``.  Never raises on input."""
    config = config or ScannerConfig()
    candidates = _raw_matches(text)
    for detector in config.custom_detectors:
        candidates.extend(detector(text))

    candidates = [
        f for f in candidates
        if f.kind not in config.skip_kinds and f.text not in config.allow_list
    ]
    findings = resolve_overlaps(candidates)
    logger.debug("scanned", chars=len(text), candidates=len(candidates), findings=len(findings))
    return findings
