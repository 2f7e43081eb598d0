# topmark:header:start
#
#   project      : PartialFmt
#   file         : tokens.py
#   file_relpath : src/partialfmt/core/tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Toks and tokens as produced by the external tokenizer.

A [`Tok`][partialfmt.core.tokens.Tok] is the smallest lexical unit: a real
token, a comment, or a whitespace/newline trivia run. Real toks (including
comments) carry a [`RealIndex`][partialfmt.core.tokens.RealIndex]; trivia
carries the [`TRIVIA`][partialfmt.core.tokens.TRIVIA] tag instead of a
sign-encoded index.

A [`Token`][partialfmt.core.tokens.Token] groups one real, non-comment tok with
the toks immediately before and after it, so the planner can find where the
token's text really starts and ends once surrounding whitespace is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Union


@dataclass(frozen=True, slots=True)
class RealIndex:
    """Index of a real tok (token or comment) in the tokenizer's stream."""

    value: int


@dataclass(frozen=True, slots=True)
class Trivia:
    """Tag for whitespace and newline toks, which have no index."""


TRIVIA: Final[Trivia] = Trivia()

TokIndex = Union[RealIndex, Trivia]


@dataclass(frozen=True, slots=True)
class Tok:
    """Smallest lexical unit with its position in the original text.

    Attributes:
        position (int): Offset of the first character in the original text.
        text (str): The literal text.
        index (TokIndex): `RealIndex` for tokens and comments, `TRIVIA` otherwise.
        is_comment (bool): True for comment toks.
    """

    position: int
    text: str
    index: TokIndex = TRIVIA
    is_comment: bool = False

    @property
    def end(self) -> int:
        """Offset one past the last character."""
        return self.position + len(self.text)

    @property
    def is_real(self) -> bool:
        return isinstance(self.index, RealIndex)

    @property
    def real_index(self) -> int:
        """Return the tok's index.

        Raises:
            ValueError: If the tok is trivia.
        """
        match self.index:
            case RealIndex(value=value):
                return value
            case _:
                raise ValueError(f"Trivia tok at {self.position} has no index")


@dataclass(frozen=True, slots=True)
class Token:
    """A real token plus the toks attached before and after it.

    Attributes:
        tok (Tok): The token itself.
        toks_before (tuple[Tok, ...]): Whitespace and comments preceding the token.
        toks_after (tuple[Tok, ...]): Same-line whitespace and comments following it.
    """

    tok: Tok
    toks_before: tuple[Tok, ...] = ()
    toks_after: tuple[Tok, ...] = ()

    def start_tok(self) -> Tok:
        """Return the earliest non-trivia tok of this token (a comment or the token)."""
        for tok in self.toks_before:
            if tok.is_real:
                return tok
        return self.tok

    def end_tok(self) -> Tok:
        """Return the last non-trivia tok of this token (a comment or the token)."""
        for tok in reversed(self.toks_after):
            if tok.is_real:
                return tok
        return self.tok

    def start_position(self) -> int:
        """Return the earliest position of any tok, leading whitespace included."""
        return min((tok.position for tok in self.toks_before), default=self.tok.position)

    def all_toks(self) -> tuple[Tok, ...]:
        return (*self.toks_before, self.tok, *self.toks_after)
