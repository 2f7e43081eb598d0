# topmark:header:start
#
#   project      : PartialFmt
#   file         : boundaries.py
#   file_relpath : src/partialfmt/output/boundaries.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ordered set of token indices where a partial reformat may start or end."""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING

from partialfmt.core.errors import EmptyBoundaryIndexError
from partialfmt.core.ranges import TokenRange

if TYPE_CHECKING:
    from collections.abc import Iterator


class BoundaryIndex:
    """Sorted, duplicate-free token indices marked as legal split points."""

    def __init__(self) -> None:
        self._marks: list[int] = []

    def mark(self, k: int) -> None:
        i: int = bisect.bisect_left(self._marks, k)
        if i == len(self._marks) or self._marks[i] != k:
            self._marks.insert(i, k)

    def floor(self, k: int) -> int | None:
        """Return the greatest boundary ``<= k``."""
        i: int = bisect.bisect_right(self._marks, k)
        return self._marks[i - 1] if i > 0 else None

    def higher(self, k: int) -> int | None:
        """Return the smallest boundary ``> k``."""
        i: int = bisect.bisect_right(self._marks, k)
        return self._marks[i] if i < len(self._marks) else None

    def expand(self, token_range: TokenRange) -> TokenRange:
        """Widen ``token_range`` so it starts and ends on boundaries.

        The start moves down to the nearest boundary at or before it (or the
        first boundary). The exclusive end moves to the first boundary after the
        range's last token (or one past the last boundary), so the unit that
        begins at that boundary is left out.

        Raises:
            EmptyBoundaryIndexError: If no boundary has been marked.
        """
        if not self._marks:
            raise EmptyBoundaryIndexError()
        lo: int | None = self.floor(token_range.start)
        hi: int | None = self.higher(token_range.stop - 1)
        return TokenRange(
            self._marks[0] if lo is None else lo,
            self._marks[-1] + 1 if hi is None else hi,
        )

    def __contains__(self, k: object) -> bool:
        if not isinstance(k, int):
            return False
        i: int = bisect.bisect_left(self._marks, k)
        return i < len(self._marks) and self._marks[i] == k

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._marks))

    def __len__(self) -> int:
        return len(self._marks)
