"""
db/placeholders.py
------------------
Translates PostgreSQL positional placeholders (``$1``, ``$2`` ...) into the
``%s`` paramstyle psycopg2 expects.

Only placeholders in SQL code are bound. Text inside single-quoted strings,
double-quoted identifiers, ``--`` and ``/* */`` comments and dollar-quoted
bodies is copied through unchanged, as PostgreSQL itself would treat it.
"""

import re
from typing import Any, Optional, Sequence

_PLACEHOLDER = re.compile(r"\$(\d+)")
_DOLLAR_TAG = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _quoted_end(query: str, start: int, quote: str, backslash_escapes: bool = False) -> int:
    """Index just past the literal opened at ``start``; a doubled quote is an escape."""
    i = start + 1
    n = len(query)
    while i < n:
        ch = query[i]
        if backslash_escapes and ch == "\\":
            i += 2
            continue
        if ch == quote:
            if i + 1 < n and query[i + 1] == quote:
                i += 2
                continue
            return i + 1
        i += 1
    return n


def _block_comment_end(query: str, start: int) -> int:
    """Index just past a (possibly nested) ``/* */`` comment."""
    depth = 0
    i = start
    n = len(query)
    while i < n:
        if query.startswith("/*", i):
            depth += 1
            i += 2
        elif query.startswith("*/", i):
            depth -= 1
            i += 2
            if depth == 0:
                return i
        else:
            i += 1
    return n


def _skip_end(query: str, i: int) -> int:
    """
    If a literal or comment starts at ``i``, return the index just past it.
    Otherwise return ``i``.
    """
    ch = query[i]
    prev = query[i - 1] if i > 0 else ""

    if query.startswith("--", i):
        newline = query.find("\n", i)
        return len(query) if newline == -1 else newline
    if query.startswith("/*", i):
        return _block_comment_end(query, i)
    if ch == "'":
        # E'...' strings allow backslash escapes
        escape_string = prev in "eE" and (i < 2 or not _is_ident_char(query[i - 2]))
        return _quoted_end(query, i, "'", backslash_escapes=escape_string)
    if ch == '"':
        return _quoted_end(query, i, '"')
    if ch == "$" and not _is_ident_char(prev):
        tag = _DOLLAR_TAG.match(query, i)
        if tag:
            close = query.find(tag.group(0), tag.end())
            return len(query) if close == -1 else close + len(tag.group(0))
    return i


def to_pyformat(query: str, args: Sequence[Any]) -> tuple[str, Optional[tuple]]:
    """
    Rewrite a ``$n`` template for psycopg2.

    Each ``$n`` in SQL code becomes ``%s`` and the bound parameters are
    reordered (and repeated) to follow the placeholders as they appear in
    the text. Literal ``%`` characters are doubled so psycopg2 does not read
    them as markers. A template without placeholders is returned untouched
    with ``None`` parameters, since psycopg2 only interpolates when
    parameters are given.

    Args:
        query: SQL template using ``$1..$n``.
        args: Positional values; ``args[0]`` binds to ``$1``.

    Returns:
        The rewritten query and the parameters to pass to ``execute``.

    Raises:
        ValueError: If the template references a position with no argument.
    """
    out: list[str] = []
    params: list[Any] = []
    i = 0
    n = len(query)

    while i < n:
        end = _skip_end(query, i)
        if end > i:
            out.append(query[i:end].replace("%", "%%"))
            i = end
            continue

        prev = query[i - 1] if i > 0 else ""
        match = _PLACEHOLDER.match(query, i) if not _is_ident_char(prev) else None
        if match:
            position = int(match.group(1))
            if position < 1 or position > len(args):
                raise ValueError(
                    f"Placeholder ${position} has no matching argument ({len(args)} given)"
                )
            params.append(args[position - 1])
            out.append("%s")
            i = match.end()
            continue

        out.append("%%" if query[i] == "%" else query[i])
        i += 1

    if not params:
        return query, None
    return "".join(out), tuple(params)
