"""Tokenizer — one forward pass from raw source text to a flat token list.

Whitespace is dropped: layout is rebuilt later from token adjacency and
brace nesting.  Nothing here raises; unrecognized characters become
``unknown`` tokens and unterminated literals are closed at end of input.

The only context-sensitive decision is ``/``: regex literal or division.
It is keyed on the previous non-whitespace *source* character, which is
a heuristic (``return /x/`` is lexed as division) and stays that way.
"""

from __future__ import annotations

from .types import (
    COMMENT,
    IDENTIFIER,
    NUMBER,
    OPERATOR,
    REGEX,
    STRING,
    TEMPLATE,
    UNKNOWN,
    Token,
)

# Longest forms first
_OPERATORS: tuple[frozenset[str], ...] = (
    frozenset({">>>="}),
    frozenset({
        "===", "!==", ">>>", "<<=", ">>=", "**=", "&&=", "||=", "??=", "...",
    }),
    frozenset({
        "==", "!=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=",
        "&&", "||", "<=", ">=", "<<", ">>", "=>", "**", "?.", "??",
        "++", "--",
    }),
    frozenset("+-*/%<>!&|^~?;:,.(){}[]=@#"),
)

# A "/" after one of these (or at input start) opens a regex literal
_REGEX_PRECEDERS = frozenset("([=:,!?{};\n/")
_REGEX_FLAGS = frozenset("dgimsuvy")
_NUMBER_CHARS = frozenset("0123456789_xXabcdefABCDEF")


def _is_id_start(ch: str) -> bool:
    return ch.isalpha() or ch in "_$"


def _is_id_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _scan_quoted(code: str, i: int, quote: str) -> int:
    """Return the index just past the literal opened at ``code[i]``."""
    n = len(code)
    j = i + 1
    while j < n:
        c = code[j]
        if c == "\\":
            j += 2
            continue
        j += 1
        if c == quote:
            break
    return min(j, n)


def _scan_regex(code: str, i: int) -> int:
    n = len(code)
    j = i + 1
    in_class = False
    while j < n:
        c = code[j]
        if c == "\\":
            j += 2
            continue
        j += 1
        if c == "/" and not in_class:
            break
        if c == "[":
            in_class = True
        elif c == "]":
            in_class = False
    j = min(j, n)
    while j < n and code[j] in _REGEX_FLAGS:
        j += 1
    return j


def _scan_number(code: str, i: int) -> int:
    n = len(code)
    j = i
    seen_dot = False
    while j < n:
        c = code[j]
        if c == ".":
            if seen_dot:
                break
            seen_dot = True
        elif c not in _NUMBER_CHARS:
            break
        j += 1
    return j


def _regex_allowed(code: str, i: int) -> bool:
    k = i - 1
    while k >= 0 and code[k].isspace() and code[k] != "\n":
        k -= 1
    return k < 0 or code[k] in _REGEX_PRECEDERS


def _match_operator(code: str, i: int) -> str | None:
    for table in _OPERATORS:
        width = len(next(iter(table)))
        candidate = code[i:i + width]
        if candidate in table:
            return candidate
    return None


def tokenize(code: str) -> list[Token]:
    """Split ``code`` into tokens.  Total: never raises."""
    tokens: list[Token] = []
    n = len(code)
    i = 0
    while i < n:
        ch = code[i]
        nxt = code[i + 1] if i + 1 < n else ""

        if ch.isspace():
            i += 1
            continue

        if ch == "/" and nxt == "/":
            j = code.find("\n", i)
            j = n if j == -1 else j
            tokens.append(Token(COMMENT, code[i:j]))
            i = j
            continue

        if ch == "/" and nxt == "*":
            j = code.find("*/", i + 2)
            j = n if j == -1 else j + 2
            tokens.append(Token(COMMENT, code[i:j]))
            i = j
            continue

        if ch in "'\"`":
            j = _scan_quoted(code, i, ch)
            tokens.append(Token(TEMPLATE if ch == "`" else STRING, code[i:j]))
            i = j
            continue

        if ch == "/" and _regex_allowed(code, i):
            j = _scan_regex(code, i)
            tokens.append(Token(REGEX, code[i:j]))
            i = j
            continue

        if "0" <= ch <= "9":
            j = _scan_number(code, i)
            tokens.append(Token(NUMBER, code[i:j]))
            i = j
            continue

        if _is_id_start(ch):
            j = i + 1
            while j < n and _is_id_char(code[j]):
                j += 1
            tokens.append(Token(IDENTIFIER, code[i:j]))
            i = j
            continue

        op = _match_operator(code, i)
        if op is not None:
            tokens.append(Token(OPERATOR, op))
            i += len(op)
            continue

        tokens.append(Token(UNKNOWN, ch))
        i += 1
    return tokens
