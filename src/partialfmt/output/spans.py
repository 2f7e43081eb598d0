# topmark:header:start
#
#   project      : PartialFmt
#   file         : spans.py
#   file_relpath : src/partialfmt/output/spans.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-output-line bookkeeping of contributing source token ranges.

For every output line three ranges are kept:

* *first-span*: the range of the first emission that put a printable character
  on the line. Sticky: later emissions on the same line leave it alone.
* *first-span-core*: recorded under the same sticky rule, kept as a separate
  list for consumers that narrow it independently.
* *full-span*: the union of the ranges of every emission that contributed to
  the line, whitespace-only emissions included.

The sticky span tells which line a token's first appearance starts on; the full
span tells how far a line's coverage reaches, which is what the replacement
planner needs to find the last line of a multi-line token.
"""

from __future__ import annotations

from partialfmt.core.ranges import EMPTY_RANGE, TokenRange, union


class SpanTracker:
    """Accumulates the three range lists, one entry per closed output line.

    The line currently being built is *open*; its ranges are held aside until
    `close_line` appends them, so each list always has exactly one entry per
    closed line (plus the end-of-file sentinel after `append_sentinel`).
    """

    def __init__(self) -> None:
        self._first_spans: list[TokenRange] = []
        self._first_core_spans: list[TokenRange] = []
        self._full_spans: list[TokenRange] = []

        self._open_first: TokenRange = EMPTY_RANGE
        self._open_first_core: TokenRange = EMPTY_RANGE
        self._open_full: TokenRange = EMPTY_RANGE
        self._first_set: bool = False

    def record_printable(self, source_range: TokenRange) -> None:
        """Note that an emission with ``source_range`` put text on the open line."""
        if source_range.is_empty:
            return
        if not self._first_set:
            self._open_first = source_range
            self._open_first_core = source_range
            self._first_set = True
        self._open_full = union(self._open_full, source_range)

    def extend_full(self, source_range: TokenRange) -> None:
        """Widen the open line's full span by ``source_range``."""
        self._open_full = union(self._open_full, source_range)

    def close_line(self) -> None:
        """Append the open line's ranges and start a fresh line with unset sticky flags."""
        self._first_spans.append(self._open_first)
        self._first_core_spans.append(self._open_first_core)
        self._full_spans.append(self._open_full)
        self.discard_open_line()

    def discard_open_line(self) -> None:
        self._open_first = EMPTY_RANGE
        self._open_first_core = EMPTY_RANGE
        self._open_full = EMPTY_RANGE
        self._first_set = False

    def append_sentinel(self, sentinel: TokenRange) -> None:
        """Append the end-of-file entry to all three lists."""
        self._first_spans.append(sentinel)
        self._first_core_spans.append(sentinel)
        self._full_spans.append(sentinel)

    @property
    def first_spans(self) -> tuple[TokenRange, ...]:
        return tuple(self._first_spans)

    @property
    def first_core_spans(self) -> tuple[TokenRange, ...]:
        return tuple(self._first_core_spans)

    @property
    def full_spans(self) -> tuple[TokenRange, ...]:
        return tuple(self._full_spans)

    def __len__(self) -> int:
        return len(self._full_spans)
