"""Beautifier — tokenizer, reconstructor and cleanup chained together.

Usage:
    from scriptlens import beautify

    print(beautify("if(a){b()}else{c()}"))
    # if (a) {
    #     b();
    # }
    # else {
    #     c();
    # }
"""

from __future__ import annotations
from dataclasses import dataclass

from .lexer import tokenize
from .log import get_logger
from .postprocess import cleanup
from .reconstruct import reconstruct

logger = get_logger(__name__)


@dataclass
class BeautifyConfig:
    """Configuration for the Beautifier."""
    indent_size: int = 4              # spaces per nesting level


class Beautifier:
    """Stateless re-layout of script source.  Safe to share across threads."""

    def __init__(self, config: BeautifyConfig | None = None) -> None:
        self.config = config or BeautifyConfig()

    def beautify(self, source: str) -> str:
        """Return ``source`` re-indented; ``""`` for blank input."""
        source = source.replace("\r", "")
        tokens = tokenize(source)
        rebuilt = reconstruct(tokens, indent=" " * self.config.indent_size)
        out = cleanup(rebuilt)
        logger.debug("beautified", tokens=len(tokens), chars_in=len(source), chars_out=len(out))
        return out


_DEFAULT = Beautifier()


def beautify(source: str) -> str:
    """Beautify with the default configuration."""
    return _DEFAULT.beautify(source)
