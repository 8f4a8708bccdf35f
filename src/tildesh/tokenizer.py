"""Bounded splitting of input lines into words."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from tildesh.constants import MAX_TOKENS, WHITESPACE


@dataclass(frozen=True)
class TokenSequence:
    """Words produced by :func:`tokenize`.

    Holds at most ``capacity - 1`` tokens. Every slot from ``count`` up to
    ``capacity - 1`` reads as the ``None`` sentinel through :meth:`at`, so a
    consumer can scan forward until it sees ``None`` without knowing the count.
    ``overflow`` is set when the input had more words than fit.
    """

    tokens: tuple[str, ...]
    capacity: int
    overflow: bool = False

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]

    def __bool__(self) -> bool:
        return bool(self.tokens)

    @property
    def count(self) -> int:
        return len(self.tokens)

    def at(self, index: int) -> str | None:
        """Return the token at *index*, or ``None`` for the sentinel slots."""
        if index < 0 or index >= self.capacity:
            raise IndexError(f"slot {index} outside capacity {self.capacity}")
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def argv(self) -> list[str]:
        return list(self.tokens)


@lru_cache(maxsize=16)
def _word_pattern(delimiters: str) -> re.Pattern[str]:
    return re.compile(f"[^{re.escape(delimiters)}]+")


def tokenize(
    line: str, delimiters: str = WHITESPACE, capacity: int = MAX_TOKENS
) -> TokenSequence:
    """Split *line* into runs of characters not in *delimiters*.

    Args:
        line: Raw text to split.
        delimiters: Characters that separate words.
        capacity: Size of the token buffer, sentinel slot included.

    Returns:
        A ``TokenSequence`` with at most ``capacity - 1`` tokens. Its
        ``overflow`` flag is set when more words were present than fit.

    Raises:
        ValueError: If *capacity* leaves no room for a token and the sentinel,
            or *delimiters* is empty.
    """
    if capacity < 2:
        raise ValueError(f"capacity must be at least 2, got {capacity}")
    if not delimiters:
        raise ValueError("delimiters must not be empty")

    limit = capacity - 1
    tokens: list[str] = []
    overflow = False
    for match in _word_pattern(delimiters).finditer(line):
        if len(tokens) == limit:
            overflow = True
            break
        tokens.append(match.group())
    return TokenSequence(tokens=tuple(tokens), capacity=capacity, overflow=overflow)
