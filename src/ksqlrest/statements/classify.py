"""Classify statements by action (CREATE, DROP, INSERT) and object kind."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sqlglot.errors import TokenError
from sqlglot.tokens import TokenType

from ksqlrest.statements._types import Action, ObjectKind, Statement
from ksqlrest.statements.normalize import KsqlTokenizer

logger = logging.getLogger(__name__)

_ACTIONS = {"CREATE": Action.CREATE, "DROP": Action.DROP, "INSERT": Action.INSERT}

# Longest keyword sequences first so SOURCE TABLE wins over a bare TABLE.
_KINDS: tuple[tuple[tuple[str, ...], ObjectKind], ...] = (
    (("SOURCE", "TABLE"), ObjectKind.SOURCE_TABLE),
    (("SOURCE", "CONNECTOR"), ObjectKind.SOURCE_CONNECTOR),
    (("SINK", "CONNECTOR"), ObjectKind.SINK_CONNECTOR),
    (("TABLE",), ObjectKind.TABLE),
    (("STREAM",), ObjectKind.STREAM),
    (("INTO",), ObjectKind.INTO),
    (("CONNECTOR",), ObjectKind.CONNECTOR),
)

_NAME_RE = re.compile(r"\w+")
_WORD_RE = re.compile(r"\S+")


@dataclass
class _Word:
    text: str
    start: int
    end: int  # exclusive
    quoted: bool = False  # "double" or `backtick` quoted identifier, text keeps the quotes
    opaque: bool = False  # string literal, never a keyword or a name

    @property
    def keyword(self) -> str | None:
        if self.quoted or self.opaque:
            return None
        return self.text.upper()


def _words(sql: str) -> list[_Word]:
    """Tokenize with sqlglot and flatten tokens into whitespace-separated words."""
    words: list[_Word] = []
    for tok in KsqlTokenizer().tokenize(sql):
        if tok.token_type == TokenType.IDENTIFIER:
            raw = sql[tok.start : tok.end + 1]
            words.append(_Word(raw, tok.start, tok.end + 1, quoted=True))
        elif tok.token_type == TokenType.STRING:
            words.append(_Word(tok.text, tok.start, tok.end + 1, opaque=True))
        else:
            # Multi-word keywords arrive as a single token.
            raw = sql[tok.start : tok.end + 1]
            for m in _WORD_RE.finditer(raw):
                words.append(_Word(m.group(), tok.start + m.start(), tok.start + m.end()))
    return words


def _keywords(words: list[_Word], start: int, count: int) -> tuple[str | None, ...]:
    return tuple(w.keyword for w in words[start : start + count])


def _match_at(sql: str, words: list[_Word], i: int) -> Statement | None:
    action = _ACTIONS.get(words[i].keyword or "")
    if action is None:
        return None

    j = i + 1
    if action is Action.CREATE and _keywords(words, j, 2) == ("OR", "REPLACE"):
        j += 2

    for keywords, kind in _KINDS:
        if _keywords(words, j, len(keywords)) == keywords:
            break
    else:
        return None
    kind_word = words[j + len(keywords) - 1]
    j += len(keywords)

    if _keywords(words, j, 2) == ("IF", "EXISTS"):
        j += 2
    elif _keywords(words, j, 3) == ("IF", "NOT", "EXISTS"):
        j += 3

    if j >= len(words):
        return None
    name_word = words[j]
    if name_word.quoted:
        name = name_word.text
    elif not name_word.opaque and _NAME_RE.fullmatch(name_word.text):
        name = name_word.text.lower()
    else:
        return None

    return Statement(
        text=sql,
        action=action,
        kind=kind,
        name=name,
        kind_span=(kind_word.start, kind_word.end),
    )


def classify(sql: str) -> Statement:
    """Classify a statement. Never raises.

    Matches `(CREATE [OR REPLACE] | DROP | INSERT) <kind> [IF [NOT] EXISTS] <name>`
    case-insensitively anywhere in the statement. Anything else, including
    text the tokenizer rejects, is Action.OTHER with no kind or name.
    """
    try:
        words = _words(sql)
    except TokenError as e:
        logger.debug("could not tokenize statement, classifying as other: %s", e)
        return Statement(text=sql, action=Action.OTHER)

    for i in range(len(words)):
        statement = _match_at(sql, words, i)
        if statement is not None:
            return statement
    return Statement(text=sql, action=Action.OTHER)


def statement_type(sql: str) -> str:
    """'create', 'drop', 'insert' or 'other'."""
    return classify(sql).action.value


def object_type(sql: str) -> str | None:
    kind = classify(sql).kind
    return kind.value if kind is not None else None


def object_name(sql: str) -> str | None:
    return classify(sql).name


def swap_kind(statement: Statement, keyword: str) -> str:
    """Return the statement text with its kind keyword replaced (e.g. TABLE → STREAM)."""
    if statement.kind_span is None:
        raise ValueError(f"statement has no object kind to rewrite: {statement.text!r}")
    start, end = statement.kind_span
    return statement.text[:start] + keyword + statement.text[end:]
