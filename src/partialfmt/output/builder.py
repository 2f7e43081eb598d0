# topmark:header:start
#
#   project      : PartialFmt
#   file         : builder.py
#   file_relpath : src/partialfmt/output/builder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output builder: turns layout directives into finished lines.

[`FormattedOutput`][partialfmt.output.builder.FormattedOutput] has a two-phase
lifecycle:

* **Build**: the layout engine calls `emit_text`, `set_indent`, `record_wish`,
  `force_blank_line` and `mark_boundary`, strictly in non-decreasing source
  order. Whitespace is kept pending until a printable character arrives.
* **Query** (after `finalize`): the lines and range lists are frozen;
  `compute_replacements` and `write_merged` are pure functions of that state
  and may be called any number of times.

While building, the builder follows along the original input lines to notice
blank lines the author wrote, and combines that with the blank-line ledger to
decide where blank lines go.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from partialfmt.config.logging import get_logger
from partialfmt.config.policy import OutputPolicy
from partialfmt.constants import NEWLINE
from partialfmt.core.comments import IdentityCommentsHelper
from partialfmt.core.errors import OutputStateError
from partialfmt.core.ranges import EMPTY_RANGE, RangeSet, TokenRange
from partialfmt.output.boundaries import BoundaryIndex
from partialfmt.output.ledger import MERGE_POLICIES, BlankLineLedger, BlankLineWish
from partialfmt.output.merger import merge_to_string, write_merged
from partialfmt.output.planner import ReplacementPlanner
from partialfmt.output.spans import SpanTracker
from partialfmt.output.whitespace import PendingWhitespace
from partialfmt.utils.diff import render_replacements, unified_diff

if TYPE_CHECKING:
    from collections.abc import Iterable

    from partialfmt.config.logging import PartialfmtLogger
    from partialfmt.core.comments import CommentsHelper
    from partialfmt.core.source import SourceInput
    from partialfmt.output.merger import TextSink
    from partialfmt.output.planner import Replacement

logger: PartialfmtLogger = get_logger(__name__)


class FormattedOutput:
    """Formatted document assembled from layout directives.

    Args:
        source (SourceInput): The original text and its token/line index.
        comments_helper (CommentsHelper | None): Comment rewriter handed through to
            the layout engine; never called here.
        policy (OutputPolicy | None): Runtime policy; defaults to `OutputPolicy()`.
    """

    def __init__(
        self,
        source: SourceInput,
        comments_helper: CommentsHelper | None = None,
        policy: OutputPolicy | None = None,
    ) -> None:
        self._source: SourceInput = source
        self._comments_helper: CommentsHelper = comments_helper or IdentityCommentsHelper()
        self._policy: OutputPolicy = policy or OutputPolicy()

        self._ledger: BlankLineLedger = BlankLineLedger(
            MERGE_POLICIES[self._policy.blank_line_merge]
        )
        self._boundaries: BoundaryIndex = BoundaryIndex()
        self._spans: SpanTracker = SpanTracker()
        self._pending: PendingWhitespace = PendingWhitespace()

        self._mutable_lines: list[str] = []
        self._line_buffer: list[str] = []
        self._input_line: int = 0  # closest corresponding input line
        self._last_anchor: int = -1

        self._lines: tuple[str, ...] | None = None
        self._first_spans: tuple[TokenRange, ...] = ()
        self._first_core_spans: tuple[TokenRange, ...] = ()
        self._full_spans: tuple[TokenRange, ...] = ()
        self._planner: ReplacementPlanner | None = None

    # ---- Build phase -----------------------------------------------------------------

    def emit_text(self, text: str, source_range: TokenRange = EMPTY_RANGE) -> None:
        """Append ``text`` produced from the source tokens in ``source_range``.

        Spaces and newlines in ``text`` only become pending. A bare ``"\\n"``
        guarantees one pending line break without adding more.

        Args:
            text (str): The text to emit.
            source_range (TokenRange): Tokens the text stands for; empty for
                synthesized text such as spaces and breaks.
        """
        self._require_building("emit_text")
        has_range: bool = not source_range.is_empty
        logger.trace("emit %r %s pending=%s", text, source_range, self._pending)

        if has_range:
            saw_blank_line: bool = self._skip_input_lines(source_range.start)
            wish: BlankLineWish | None = self._ledger.resolve(self._last_anchor)
            if wish is None or self._policy.is_comment(text):
                blank_line: bool = saw_blank_line
            else:
                blank_line = wish.is_wanted(default=saw_blank_line)
            if blank_line:
                self._pending.newlines += 1

        if text == NEWLINE:
            # Range information is left alone; block comments use this.
            self._pending.ensure_newline()
        else:
            for ch in text:
                if ch == " ":
                    self._pending.add_space()
                elif ch == NEWLINE:
                    self._pending.add_newline()
                else:
                    self._put_printable(ch, source_range)
            if has_range:
                self._spans.extend_full(source_range)

        if has_range:
            self._last_anchor = source_range.stop

    def set_indent(self, columns: int) -> None:
        """Place the next printable character at ``columns`` (overwrites pending spaces)."""
        self._require_building("set_indent")
        self._pending.set_indent(columns)

    def record_wish(self, anchor: int, wish: BlankLineWish) -> None:
        """Record a blank-line wish before token ``anchor``."""
        self._require_building("record_wish")
        self._ledger.record(anchor, wish)

    def force_blank_line(self) -> None:
        """Ask for a blank line after the last emitted token, unless a wish is recorded there."""
        self._require_building("force_blank_line")
        self._ledger.force_yes(self._last_anchor)

    def mark_boundary(self, k: int) -> None:
        """Mark token ``k`` as a legal edge for partial reformatting.

        ``k`` should be the index of the unit's first tok, leading comments
        included, so that regions meeting at ``k`` never share a tok.
        """
        self._require_building("mark_boundary")
        self._boundaries.mark(k)

    def finalize(self) -> None:
        """Flush the last incomplete line, add the end-of-file sentinel and freeze."""
        self._require_building("finalize")
        if self._line_buffer:
            self._flush_line()
        else:
            self._spans.discard_open_line()
        n_tokens: int = self._source.token_count
        self._spans.append_sentinel(TokenRange.single(n_tokens))
        self._first_spans = self._spans.first_spans
        self._first_core_spans = self._spans.first_core_spans
        self._full_spans = self._spans.full_spans
        self._lines = tuple(self._mutable_lines)
        self._planner = ReplacementPlanner(
            self._source, self._lines, self._full_spans, self._boundaries
        )
        logger.debug(
            "Finalized %d output line(s), %d boundaries, %d blank-line wishes",
            len(self._lines),
            len(self._boundaries),
            len(self._ledger),
        )

    def _put_printable(self, ch: str, source_range: TokenRange) -> None:
        for _ in range(self._pending.take_newlines()):
            self._flush_line()
        self._line_buffer.append(self._pending.take_spaces())
        self._line_buffer.append(ch)
        self._spans.record_printable(source_range)

    def _flush_line(self) -> None:
        self._mutable_lines.append("".join(self._line_buffer))
        self._line_buffer = []
        self._spans.close_line()

    def _skip_input_lines(self, k: int) -> bool:
        """Advance the input-line cursor past lines whose tokens all end before ``k``.

        Returns:
            bool: True if a blank input line was skipped.
        """
        saw_blank_line: bool = False
        n_lines: int = self._source.line_count
        while self._input_line < n_lines:
            ending: TokenRange = self._source.line_end_range(self._input_line)
            if not ending.is_empty and ending.stop > k:
                break
            if self._source.line_range(self._input_line).is_empty:
                saw_blank_line = True
            self._input_line += 1
        return saw_blank_line

    def _require_building(self, operation: str) -> None:
        if self._lines is not None:
            raise OutputStateError(f"{operation}() called after finalize()")

    def _require_frozen(self, operation: str) -> tuple[str, ...]:
        if self._lines is None:
            raise OutputStateError(f"{operation}() called before finalize()")
        return self._lines

    # ---- Query phase -----------------------------------------------------------------

    @property
    def source(self) -> SourceInput:
        return self._source

    @property
    def policy(self) -> OutputPolicy:
        return self._policy

    @property
    def comments_helper(self) -> CommentsHelper:
        return self._comments_helper

    @property
    def last_anchor(self) -> int:
        """Anchor of the last emission: one past its last token, -1 before any."""
        return self._last_anchor

    @property
    def is_finalized(self) -> bool:
        return self._lines is not None

    @property
    def lines(self) -> tuple[str, ...]:
        return self._require_frozen("lines")

    @property
    def line_count(self) -> int:
        return len(self._require_frozen("line_count"))

    def line(self, j: int) -> str:
        return self._require_frozen("line")[j]

    def formatted_text(self) -> str:
        """Return the whole formatted document, newline-terminated."""
        lines: tuple[str, ...] = self._require_frozen("formatted_text")
        return NEWLINE.join(lines) + NEWLINE if lines else ""

    def first_span(self, j: int) -> TokenRange:
        """Range of the first emission with printable text on output line ``j``."""
        self._require_frozen("first_span")
        return self._first_spans[j]

    def first_span_core(self, j: int) -> TokenRange:
        self._require_frozen("first_span_core")
        return self._first_core_spans[j]

    def full_span(self, j: int) -> TokenRange:
        """Union of every emission range that contributed to output line ``j``."""
        self._require_frozen("full_span")
        return self._full_spans[j]

    def first_token_of_line(self, j: int) -> int | None:
        """Return the token output line ``j`` starts with, or None for a synthesized line."""
        span: TokenRange = self.first_span(j)
        return None if span.is_empty else span.start

    def lines_for_token(self, k: int) -> TokenRange:
        """Return the output lines ``[first, last + 1)`` covering token ``k``."""
        return self._require_planner("lines_for_token").lines_for_token(k)

    @property
    def boundaries(self) -> tuple[int, ...]:
        """Marked partial-format boundaries in ascending order."""
        self._require_frozen("boundaries")
        return tuple(self._boundaries)

    def expand_to_boundaries(self, requested: RangeSet | Iterable[TokenRange]) -> RangeSet:
        """Return ``requested`` clamped to the token domain, widened onto boundaries and merged."""
        return self._require_planner("expand_to_boundaries").breakable_ranges(requested)

    def compute_replacements(
        self, requested: RangeSet | Iterable[TokenRange]
    ) -> tuple[Replacement, ...]:
        """Return the edits that reformat the requested token ranges.

        Requests are clamped to the token domain; a request entirely outside it
        yields no replacement.

        Args:
            requested (RangeSet | Iterable[TokenRange]): Token ranges to reformat.

        Returns:
            tuple[Replacement, ...]: Edits sorted by start offset, without overlaps.

        Raises:
            EmptyBoundaryIndexError: If a non-empty request meets an empty boundary index.
        """
        planner: ReplacementPlanner = self._require_planner("compute_replacements")
        replacements: tuple[Replacement, ...] = planner.plan(requested)
        if self._policy.preview_replacements:
            logger.debug(
                "Replacements:\n%s", render_replacements(self._source.text, replacements)
            )
        return replacements

    def write_merged(self, sink: TextSink, requested: RangeSet | Iterable[TokenRange]) -> None:
        """Write the original text to ``sink`` with the requested ranges reformatted.

        Errors raised by ``sink`` propagate unchanged.
        """
        replacements: tuple[Replacement, ...] = self.compute_replacements(requested)
        write_merged(sink, self._source.text, replacements)

    def merged_text(self, requested: RangeSet | Iterable[TokenRange]) -> str:
        """Return the original text with the requested ranges reformatted."""
        replacements: tuple[Replacement, ...] = self.compute_replacements(requested)
        return merge_to_string(self._source.text, replacements)

    def diff(self, requested: RangeSet | Iterable[TokenRange], name: str = "<source>") -> str:
        """Return the unified diff a partial reformat of ``requested`` would apply."""
        return unified_diff(self._source.text, self.merged_text(requested), name)

    def full_range(self) -> TokenRange:
        """Return the token range covering the whole document, end-of-file included."""
        return TokenRange(0, self._source.token_count + 1)

    def _require_planner(self, operation: str) -> ReplacementPlanner:
        self._require_frozen(operation)
        assert self._planner is not None
        return self._planner

    def __repr__(self) -> str:
        return (
            f"FormattedOutput(input_line={self._input_line}, last_anchor={self._last_anchor}, "
            f"spaces_pending={self._pending.spaces}, newlines_pending={self._pending.newlines}, "
            f"blank_lines={self._ledger!r}, lines={len(self._mutable_lines)})"
        )
