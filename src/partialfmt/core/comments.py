# topmark:header:start
#
#   project      : PartialFmt
#   file         : comments.py
#   file_relpath : src/partialfmt/core/comments.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment rewriting hook.

The output builder carries a comment rewriter for the benefit of the layout
engine, which reflows comments while it decides what to emit. The builder never
calls it itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from partialfmt.core.tokens import Tok


@runtime_checkable
class CommentsHelper(Protocol):
    """Rewrites the text of a comment tok for a given width and start column."""

    def rewrite(self, tok: Tok, max_width: int, column0: int) -> str:
        """Return the replacement text for comment ``tok``.

        Args:
            tok (Tok): The comment tok.
            max_width (int): Maximum output line width.
            column0 (int): Column at which the comment starts.

        Returns:
            str: The rewritten comment text.
        """
        ...


class IdentityCommentsHelper:
    """`CommentsHelper` that returns the comment text unchanged."""

    def rewrite(self, tok: Tok, max_width: int, column0: int) -> str:
        return tok.text
