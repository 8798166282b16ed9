"""
Clause splitting for filter strings.

A filter string is a space separated list of clauses::

    state=running name='job one' partition not in (debug, dev)

Spaces inside quotes or parentheses do not separate clauses, and the keyword
operators ``in`` / ``not in`` are protected by swapping them for space-free
placeholders while splitting.
"""

from __future__ import annotations

from .operators import IN_TOKEN, NOT_IN_TOKEN

NOT_IN_PLACEHOLDER = "__NOT_IN__"
IN_PLACEHOLDER = "__IN__"

_QUOTES = ("'", '"')


def split_respecting_quotes(text: str) -> list[str]:
    """
    Split on spaces that are outside quotes and parentheses.

    Quote characters stay in the tokens. A backslash escapes the next
    character. An unterminated quote swallows the rest of the input into the
    last token.

    >>> split_respecting_quotes("name='job one' state=running")
    ["name='job one'", 'state=running']
    """
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    depth = 0
    escaped = False

    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == "\\":
            current.append(ch)
            escaped = True
            continue

        if quote is not None:
            if ch == quote:
                quote = None
            current.append(ch)
        elif ch in _QUOTES:
            quote = ch
            current.append(ch)
        elif ch == "(":
            depth += 1
            current.append(ch)
        elif ch == ")":
            depth = max(depth - 1, 0)
            current.append(ch)
        elif ch == " " and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)

    if current:
        tokens.append("".join(current))
    return tokens


def smart_split(text: str) -> list[str]:
    """
    Split a filter string into clause strings.

    Literal ``__NOT_IN__`` / ``__IN__`` in user input cannot be escaped and
    is read back as the operator.
    """
    # " not in " contains " in ", so it has to be replaced first.
    protected = text.replace(NOT_IN_TOKEN, NOT_IN_PLACEHOLDER)
    protected = protected.replace(IN_TOKEN, IN_PLACEHOLDER)

    clauses = []
    for token in split_respecting_quotes(protected):
        token = token.replace(NOT_IN_PLACEHOLDER, NOT_IN_TOKEN)
        token = token.replace(IN_PLACEHOLDER, IN_TOKEN)
        clauses.append(token)
    return clauses
