"""Prepare statements for transmission: line breaks, separators, scripts."""

from __future__ import annotations

import re

from sqlglot.tokens import Token, Tokenizer, TokenType

_LINE_BREAKS = re.compile(r"[\r\n]+")
_SEPARATOR_RUN = re.compile(r";(?:\s*;)+")
_TRAILING = re.compile(r"[;\s]+$")
# A quoted run (kept) or a `--` comment up to the end of its line (dropped).
_LINE_COMMENT = re.compile(r"""('(?:[^']|'')*'|"(?:[^"]|"")*"|`[^`]*`)|[ \t]*--[^\r\n]*""")

_QUOTES = ('"', "`")


class KsqlTokenizer(Tokenizer):
    """sqlglot tokenizer that also reads `name` as a quoted identifier."""

    IDENTIFIERS = ['"', "`"]


def _strip_line_comments(statement: str) -> str:
    return _LINE_COMMENT.sub(lambda m: m.group(1) or "", statement)


def normalize(statement: str) -> str:
    """Flatten a statement onto one line with exactly one terminating ';'.

    `--` comments are dropped first so they cannot swallow the lines that
    follow them. Line breaks then become single spaces, runs of separators
    collapse to one, and trailing separators/whitespace are replaced by a
    single ';'. Idempotent: normalize(normalize(s)) == normalize(s).
    """
    text = _LINE_BREAKS.sub(" ", _strip_line_comments(statement)).strip()
    text = _SEPARATOR_RUN.sub(";", text)
    return _TRAILING.sub("", text) + ";"


_COMMENT_START = ("--", "/*")


def _join_tokens(script: str, tokens: list[Token]) -> str:
    """Rebuild statement text from its tokens, dropping comments between them."""
    pieces: list[str] = []
    prev: Token | None = None
    for tok in tokens:
        if prev is not None:
            gap = script[prev.end + 1 : tok.start]
            # Command tokens (SHOW ...) span only their last word, so a gap
            # can also hold statement text; only comment gaps are dropped.
            pieces.append(" " if gap.strip().startswith(_COMMENT_START) else gap)
        pieces.append(script[tok.start : tok.end + 1])
        prev = tok
    return "".join(pieces)


def split_statements(script: str) -> list[str]:
    """Split a script into statements on top-level ';'.

    Separators inside string literals and quoted identifiers are ignored,
    comments are removed, and empty statements are dropped. The returned
    statements carry no terminating ';'.

    Raises sqlglot.errors.TokenError if the script cannot be tokenized
    (e.g. an unterminated string literal).
    """
    statements: list[str] = []
    current: list[Token] = []
    for tok in KsqlTokenizer().tokenize(script):
        if tok.token_type == TokenType.SEMICOLON:
            if current:
                statements.append(_join_tokens(script, current))
            current = []
            continue
        current.append(tok)
    if current:
        statements.append(_join_tokens(script, current))
    return statements


def is_quoted(value: str) -> bool:
    """True for "double-quoted" and `backtick-quoted` identifiers."""
    return len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]


def lower_if_unquoted(value: str | None) -> str | None:
    """Fold an identifier the way the engine does: quoted names keep their case."""
    if value is None or is_quoted(value):
        return value
    return value.lower()
