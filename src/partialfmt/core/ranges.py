# topmark:header:start
#
#   project      : PartialFmt
#   file         : ranges.py
#   file_relpath : src/partialfmt/core/ranges.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Half-open integer ranges over token indices.

`TokenRange` is the unit in which the output builder records which source
tokens contributed to an output line, and in which callers request partial
reformats. `RangeSet` keeps a canonical set of such ranges: sorted, with
overlapping or touching members merged, so that expanding two requests onto
shared boundaries yields one region.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from intervaltree import IntervalTree

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class TokenRange:
    """Half-open range ``[start, stop)`` of token indices.

    A range with ``start >= stop`` is empty; all empty ranges compare as
    "empty" through `is_empty` regardless of their endpoints.
    """

    start: int
    stop: int

    @classmethod
    def single(cls, index: int) -> TokenRange:
        """Return the range holding exactly ``index``."""
        return cls(index, index + 1)

    @property
    def is_empty(self) -> bool:
        return self.start >= self.stop

    def __len__(self) -> int:
        return max(0, self.stop - self.start)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.stop

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.stop))

    def intersection(self, other: TokenRange) -> TokenRange:
        """Return the overlap of two ranges (possibly empty)."""
        return TokenRange(max(self.start, other.start), min(self.stop, other.stop))

    def span(self, other: TokenRange) -> TokenRange:
        """Return the smallest range enclosing both (non-empty) ranges."""
        return TokenRange(min(self.start, other.start), max(self.stop, other.stop))

    def __str__(self) -> str:
        return f"[{self.start}..{self.stop})"


EMPTY_RANGE: TokenRange = TokenRange(0, 0)


def union(x: TokenRange, y: TokenRange) -> TokenRange:
    """Combine two ranges; an empty operand yields the other one unchanged."""
    if x.is_empty:
        return y
    if y.is_empty:
        return x
    return x.span(y)


class RangeSet:
    """Canonical set of non-empty, non-overlapping, non-adjacent token ranges.

    Members are held in an `IntervalTree`; every insertion is followed by a
    non-strict merge so that touching ranges fuse as well as overlapping ones.
    """

    __slots__ = ("_tree",)

    def __init__(self, ranges: Iterable[TokenRange] = ()) -> None:
        self._tree: IntervalTree = IntervalTree.from_tuples(
            (r.start, r.stop) for r in ranges if not r.is_empty
        )
        self._tree.merge_overlaps(strict=False)

    def add(self, new: TokenRange) -> None:
        """Insert ``new``, merging with every member it overlaps or touches."""
        if new.is_empty:
            return
        self._tree.addi(new.start, new.stop)
        self._tree.merge_overlaps(strict=False)

    def clip(self, domain: TokenRange) -> RangeSet:
        """Return a new set holding every member intersected with ``domain``."""
        clipped = RangeSet()
        if domain.is_empty or not self._tree:
            return clipped
        tree: IntervalTree = self._tree.copy()
        if tree.begin() < domain.start:
            tree.chop(tree.begin(), domain.start)
        if tree and tree.end() > domain.stop:
            tree.chop(domain.stop, tree.end())
        clipped._tree = tree
        return clipped

    def as_ranges(self) -> tuple[TokenRange, ...]:
        """Return the members in ascending order."""
        return tuple(TokenRange(iv.begin, iv.end) for iv in sorted(self._tree))

    def __iter__(self) -> Iterator[TokenRange]:
        return iter(self.as_ranges())

    def __len__(self) -> int:
        return len(self._tree)

    def __bool__(self) -> bool:
        return bool(self._tree)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeSet):
            return NotImplemented
        return self.as_ranges() == other.as_ranges()

    def __repr__(self) -> str:
        return f"RangeSet({', '.join(str(r) for r in self.as_ranges())})"
