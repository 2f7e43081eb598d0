# topmark:header:start
#
#   project      : PartialFmt
#   file         : source.py
#   file_relpath : src/partialfmt/core/source.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tokenizer-facing view of the original source.

The output builder follows along the original text while it assembles output
lines (to notice blank lines the author wrote), and the replacement planner
maps token indices back to text offsets. Both only need the read-only
[`SourceInput`][partialfmt.core.source.SourceInput] protocol defined here.

[`ListSourceInput`][partialfmt.core.source.ListSourceInput] is the list-backed
implementation. It is assembled from the tokenizer's flat tok stream by
[`ListSourceInput.from_toks`][partialfmt.core.source.ListSourceInput.from_toks].
"""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from partialfmt.config.logging import get_logger
from partialfmt.constants import NEWLINE
from partialfmt.core.ranges import EMPTY_RANGE, TokenRange, union
from partialfmt.core.tokens import RealIndex, Tok, Token

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from partialfmt.config.logging import PartialfmtLogger

logger: PartialfmtLogger = get_logger(__name__)


@runtime_checkable
class SourceInput(Protocol):
    """Read-only access to the original text, its tokens and its lines.

    Token indices run from ``0`` to ``token_count``; index ``token_count`` is
    the end-of-file token, which holds any trailing whitespace and comments.
    """

    @property
    def text(self) -> str:
        """The complete original text."""
        ...

    @property
    def token_count(self) -> int:
        """Number of real toks (tokens and comments), excluding end-of-file."""
        ...

    def get_token(self, k: int) -> Token:
        """Return the token holding real tok ``k`` (``0 <= k <= token_count``)."""
        ...

    @property
    def line_count(self) -> int:
        """Number of input lines."""
        ...

    def line_range(self, i: int) -> TokenRange:
        """Return the real toks touching input line ``i`` (empty for a blank line)."""
        ...

    def line_end_range(self, i: int) -> TokenRange:
        """Return the real toks whose last character lies on input line ``i``."""
        ...


class ListSourceInput:
    """List-backed `SourceInput` built from a tokenizer's tok stream."""

    def __init__(
        self,
        text: str,
        tokens: Sequence[Token],
        token_count: int,
    ) -> None:
        self._text: str = text
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._token_count: int = token_count
        self._k_to_token: dict[int, Token] = {}
        for token in self._tokens:
            for tok in token.all_toks():
                if tok.is_real:
                    self._k_to_token[tok.real_index] = token

        self._line_starts: list[int] = [0]
        self._line_starts.extend(i + 1 for i, ch in enumerate(text) if ch == NEWLINE)
        n_lines: int = len(self._line_starts)
        self._line_ranges: list[TokenRange] = [EMPTY_RANGE] * n_lines
        self._line_end_ranges: list[TokenRange] = [EMPTY_RANGE] * n_lines
        for token in self._tokens:
            for tok in token.all_toks():
                if not tok.is_real or not tok.text:
                    continue
                k_range: TokenRange = TokenRange.single(tok.real_index)
                first: int = self.line_of(tok.position)
                last: int = self.line_of(tok.end - 1)
                for i in range(first, last + 1):
                    self._line_ranges[i] = union(self._line_ranges[i], k_range)
                self._line_end_ranges[last] = union(self._line_end_ranges[last], k_range)

    @classmethod
    def from_toks(cls, text: str, toks: Iterable[Tok]) -> ListSourceInput:
        """Group a flat tok stream into tokens and index it.

        Whitespace and comments preceding a token become its ``toks_before``.
        Whitespace and comments following it on the same line become its
        ``toks_after``, except for whitespace after the last such comment.
        Whatever follows the last token is attached to a synthetic end-of-file
        token positioned at ``len(text)``.

        Args:
            text (str): The original text the toks were cut from.
            toks (Iterable[Tok]): Toks in source order; real toks must be
                numbered ``0, 1, 2, ...`` in order.

        Returns:
            ListSourceInput: The indexed source.

        Raises:
            ValueError: If real tok indices are not consecutive from zero.
        """
        stream: list[Tok] = list(toks)
        expected: int = 0
        for tok in stream:
            if tok.is_real:
                if tok.real_index != expected:
                    raise ValueError(
                        f"Tok {tok.text!r} at {tok.position} has index {tok.real_index}, "
                        f"expected {expected}"
                    )
                expected += 1
        token_count: int = expected

        tokens: list[Token] = []
        before: list[Tok] = []
        i: int = 0
        while i < len(stream):
            tok: Tok = stream[i]
            i += 1
            if not tok.is_real or tok.is_comment:
                before.append(tok)
                continue
            after: list[Tok] = []
            while i + len(after) < len(stream):
                nxt: Tok = stream[i + len(after)]
                if (nxt.is_real and not nxt.is_comment) or (not nxt.is_real and NEWLINE in nxt.text):
                    break
                after.append(nxt)
            # Trailing whitespace without a comment after it belongs to the next token.
            while after and not after[-1].is_real:
                after.pop()
            i += len(after)
            tokens.append(Token(tok, tuple(before), tuple(after)))
            before = []

        eof: Tok = Tok(position=len(text), text="", index=RealIndex(token_count))
        tokens.append(Token(eof, tuple(before), ()))
        logger.trace("Indexed %d toks into %d tokens", token_count, len(tokens))
        return cls(text, tokens, token_count)

    @property
    def text(self) -> str:
        return self._text

    @property
    def token_count(self) -> int:
        return self._token_count

    @property
    def tokens(self) -> tuple[Token, ...]:
        """All tokens in order, end-of-file token last."""
        return self._tokens

    def get_token(self, k: int) -> Token:
        return self._k_to_token[k]

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_of(self, position: int) -> int:
        """Return the input line holding text offset ``position``."""
        return bisect.bisect_right(self._line_starts, position) - 1

    def line_range(self, i: int) -> TokenRange:
        return self._line_ranges[i]

    def line_end_range(self, i: int) -> TokenRange:
        return self._line_end_ranges[i]

    def __repr__(self) -> str:
        return (
            f"ListSourceInput(token_count={self._token_count}, "
            f"line_count={self.line_count}, text_len={len(self._text)})"
        )
