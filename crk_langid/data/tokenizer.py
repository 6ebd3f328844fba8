"""
Boundary-aware character bigrams ("digraphs").

A token is either a word boundary (Marker.START / Marker.END) or a literal
character (Char). The two kinds never compare equal, so no input character
can be mistaken for a boundary.
"""
from __future__ import annotations

from enum import Enum
from typing import FrozenSet, NamedTuple, Union


class Marker(Enum):
    START = "^"
    END = "$"

    def __repr__(self):
        return f"Marker.{self.name}"


class Char(NamedTuple):
    ch: str

    def __repr__(self):
        return f"Char({self.ch!r})"


Token = Union[Marker, Char]


class Bigram(NamedTuple):
    prev: Token
    cur: Token


# Literal characters that would read as markers (or escapes) when rendered.
_ESCAPED = {"^", "$", "\\"}


def bigrams_of(word: str) -> FrozenSet[Bigram]:
    """Distinct bigrams of an already normalized word.

    bigrams_of("ab") = {(^, a), (a, b), (b, $)}
    """
    if not word:
        return frozenset()
    if word.endswith("\n"):
        raise ValueError(f"word must be normalized, got {word!r}")

    bigrams = set()
    prev = Marker.START
    for ch in word:
        cur = Char(ch)
        bigrams.add(Bigram(prev, cur))
        prev = cur
    bigrams.add(Bigram(prev, Marker.END))
    return frozenset(bigrams)


def render_token(token: Token) -> str:
    if isinstance(token, Marker):
        return token.value
    if token.ch in _ESCAPED:
        return "\\" + token.ch
    return token.ch


def render_bigram(bigram: Bigram) -> str:
    return render_token(bigram.prev) + render_token(bigram.cur)


def token_sort_key(token: Token):
    # START < characters < END
    if token is Marker.START:
        return (0, "")
    if token is Marker.END:
        return (2, "")
    return (1, token.ch)


def bigram_sort_key(bigram: Bigram):
    return token_sort_key(bigram.prev), token_sort_key(bigram.cur)
