"""
Module: tokens

Purpose:
    Provides the TokenStream - the immutable, indexed sequence of tokens
    the recognizer reads. Tokens are the whitespace/newline separated
    fragments of the input text.

Key Functions:
    - tokenize(text): Split raw text into tokens
    - TokenStream.from_text(text): Tokenize and wrap
    - TokenStream.at(position): Token at a position, None at end of input
    - TokenStream.describe(position): Token text or "end of input"
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

END_OF_INPUT = "end of input"


def tokenize(text: str) -> List[str]:
    """Return the whitespace-separated tokens of ``text``, in order."""
    if not isinstance(text, str):
        raise TypeError("text must be a string")
    return text.split()


class TokenStream:
    """
    Immutable sequence of token texts.

    Positions run from 0 to ``len(stream)``; the last position means
    "stream exhausted" and reads as None.

    Example:
        >>> stream = TokenStream.from_text("contact A B\\n20 32")
        >>> len(stream)
        5
        >>> stream.at(5) is None
        True
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[str] = ()):
        if isinstance(tokens, str):
            raise TypeError("TokenStream takes a sequence of tokens; use TokenStream.from_text for raw text")
        items = tuple(tokens)
        for token in items:
            if not isinstance(token, str):
                raise TypeError(f"tokens must be strings, got {type(token).__name__}")
            if token.split() != [token]:
                raise ValueError(f"Invalid token {token!r}: tokens are non-empty and contain no whitespace")
        self._tokens = items

    @classmethod
    def from_text(cls, text: str) -> TokenStream:
        return cls(tokenize(text))

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    def at(self, position: int) -> Optional[str]:
        """
        Token at ``position``.

        Returns None for ``position == len(self)`` so end of input can be
        handled like any failed match.

        Raises:
            IndexError: If position is outside [0, len(self)]
        """
        if not 0 <= position <= len(self._tokens):
            raise IndexError(
                f"position {position} out of range [0, {len(self._tokens)}]"
            )
        if position == len(self._tokens):
            return None
        return self._tokens[position]

    def describe(self, position: int) -> str:
        """Token text at ``position``, or "end of input"."""
        token = self.at(position)
        return END_OF_INPUT if token is None else token

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __getitem__(self, index):
        return self._tokens[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenStream):
            return NotImplemented
        return self._tokens == other._tokens

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({list(self._tokens)!r})"
