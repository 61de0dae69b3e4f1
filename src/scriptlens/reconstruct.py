"""Reconstructor — re-emits a token list as indented, re-spaced text.

Layout comes only from the tokens: ``{`` / ``}`` drive the depth, ``;``
and comments end lines, everything else is joined by an inline spacing
rule that looks at the previous token.  Unbalanced input never raises;
the depth is clamped at zero.

A ``+`` / ``-`` after ``)``, ``]``, ``++`` or ``--`` is binary, not a
sign, even though those are operators: ``f() - 1`` rather than ``f()-1``.
"""

from __future__ import annotations
import re
from typing import Sequence

from .types import (
    COMMENT,
    IDENTIFIER,
    NUMBER,
    OPERATOR,
    REGEX,
    STRING,
    TEMPLATE,
    Token,
)

DEFAULT_INDENT = "    "

_VERBATIM_KINDS = frozenset({STRING, TEMPLATE, REGEX, NUMBER, COMMENT})
_TIGHT_OPS = frozenset({".", "?.", "(", ")", "[", "]", ":", ";", "++", "--", "..."})
_PREFIX_OPS = frozenset({"!", "~"})
_SIGN_OPS = frozenset({"+", "-"})
_BINARY_SHAPE = re.compile(r"[+\-*/%=&|^<>!]+|\?\?=?|=>")

# Keywords after which +/- are signs, not binary operators
_UNARY_KEYWORDS = frozenset({
    "return", "throw", "case", "typeof", "void", "delete",
    "await", "yield", "in", "of", "instanceof",
})
# Keywords that get a space before their "(" (``if (a)``)
_PAREN_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "with"})
_OPERAND_KEYWORDS = frozenset({"return", "throw"})


def _is_value_end(tok: Token) -> bool:
    """True when ``tok`` can end an operand (a following +/- is binary)."""
    if tok.kind == OPERATOR:
        return tok.text in (")", "]", "++", "--")
    if tok.kind == IDENTIFIER:
        return tok.text not in _UNARY_KEYWORDS
    return True


def render_inline(tok: Token, prev: Token | None) -> str:
    """Render ``tok`` with the spacing it takes after ``prev``."""
    if tok.kind in _VERBATIM_KINDS:
        return tok.text

    if tok.kind == IDENTIFIER:
        if prev is not None and (
            prev.kind in (IDENTIFIER, NUMBER, STRING, TEMPLATE, REGEX)
            or prev.is_op(")")
            or prev.is_op("]")
        ):
            return " " + tok.text
        return tok.text

    if tok.kind != OPERATOR:
        return tok.text

    op = tok.text
    if op == "(" and prev is not None and prev.kind == IDENTIFIER and prev.text in _PAREN_KEYWORDS:
        return " ("
    if op in _TIGHT_OPS:
        return op
    if op == ",":
        return ", "
    if op in _PREFIX_OPS:
        return op
    if op in _SIGN_OPS and (prev is None or not _is_value_end(prev)):
        return op
    if _BINARY_SHAPE.fullmatch(op):
        return f" {op} "
    return op


class _Layout:
    """Line buffer: finished lines plus the line being built."""

    __slots__ = ("_unit", "_lines", "_line", "depth")

    def __init__(self, unit: str) -> None:
        self._unit = unit
        self._lines: list[str] = []
        self._line: str | None = None   # None: next write starts a new line
        self.depth = 0

    @property
    def open(self) -> bool:
        return self._line is not None

    def prefix(self) -> str:
        return self._unit * self.depth

    def write(self, fragment: str) -> None:
        if self._line is None:
            self._line = self.prefix() + fragment.lstrip(" ")
        elif fragment.startswith(" ") and self._line.endswith(" "):
            self._line += fragment[1:]
        else:
            self._line += fragment

    def ends_with(self, suffix: str) -> bool:
        return self._line is not None and self._line.rstrip().endswith(suffix)

    def trim(self) -> None:
        if self._line is not None:
            self._line = self._line.rstrip()

    def break_line(self) -> None:
        if self._line is not None:
            self._lines.append(self._line.rstrip())
            self._line = None

    def own_line(self, text: str) -> None:
        self.break_line()
        self._lines.append(self.prefix() + text)

    def terminate(self) -> None:
        """Append ``;`` to the statement being closed."""
        if self._line is not None:
            self.trim()
            self._line += ";"
            self.break_line()
        elif self._lines and self._lines[-1].endswith(";"):
            self._lines[-1] += ";"
        else:
            self.own_line(";")

    def render(self) -> str:
        self.break_line()
        out = "\n".join(self._lines).strip()
        return out + "\n" if out else ""


def _case_label(tokens: Sequence[Token], i: int, layout: _Layout, prev: Token) -> tuple[int, Token]:
    """Lay out ``case X:`` on one line.

    Returns the index of the last token consumed and the new previous
    token.  Stops early (line left open) at a brace, ``;`` or comment.
    """
    layout.break_line()
    layout.write(prev.text)
    nesting = 0
    first = True
    j = i + 1
    while j < len(tokens):
        tok = tokens[j]
        if tok.kind == COMMENT or tok.is_op("{") or tok.is_op("}") or tok.is_op(";"):
            return j - 1, prev
        if tok.is_op(":") and nesting == 0:
            layout.trim()
            layout.write(":")
            layout.break_line()
            return j, tok
        if tok.is_op("(") or tok.is_op("["):
            nesting += 1
        elif (tok.is_op(")") or tok.is_op("]")) and nesting:
            nesting -= 1
        fragment = render_inline(tok, prev)
        layout.write(" " + fragment.lstrip(" ") if first else fragment)
        first = False
        prev = tok
        j += 1
    return j - 1, prev


def reconstruct(tokens: Sequence[Token], indent: str = DEFAULT_INDENT) -> str:
    """Lay out ``tokens`` as indented text ending in a newline.

    An empty token list yields ``""``.
    """
    layout = _Layout(indent)
    prev: Token | None = None
    i = 0
    while i < len(tokens):
        tok = tokens[i]

        if tok.kind == COMMENT:
            layout.own_line(tok.text.strip())

        elif tok.is_op("{"):
            if layout.open:
                if not (layout.ends_with("(") or layout.ends_with("[")):
                    layout.trim()
                    layout.write(" ")
                layout.write("{")
            else:
                layout.write("{")
            layout.break_line()
            layout.depth += 1

        elif tok.is_op("}"):
            layout.depth = max(0, layout.depth - 1)
            if layout.open and prev is not None and prev.is_op(")"):
                layout.terminate()
            layout.break_line()
            layout.write("}")
            if i + 1 < len(tokens) and tokens[i + 1].is_op(";"):
                layout.write(";")
                i += 1
            layout.break_line()

        elif tok.is_op(";"):
            layout.terminate()

        elif tok.kind == IDENTIFIER and (
            tok.text == "case"
            or (tok.text == "default" and i + 1 < len(tokens) and tokens[i + 1].is_op(":"))
        ):
            i, tok = _case_label(tokens, i, layout, tok)

        elif tok.kind == IDENTIFIER and tok.text == "else":
            layout.break_line()
            layout.write("else")

        elif tok.kind == IDENTIFIER and tok.text in _OPERAND_KEYWORDS:
            layout.write(render_inline(tok, prev))
            layout.write(" ")

        else:
            layout.write(render_inline(tok, prev))

        prev = tok
        i += 1
    return layout.render()
