# topmark:header:start
#
#   project      : PartialFmt
#   file         : planner.py
#   file_relpath : src/partialfmt/output/planner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Replacement planning: map reformatted token ranges back onto the original text.

Given the frozen output lines and the per-line full spans, the planner turns a
set of requested token ranges into a list of
[`Replacement`][partialfmt.output.planner.Replacement] edits:

1. clip the requests to ``[0, token_count]`` and merge them;
2. widen every range onto partial-format boundaries, merging again;
3. for each resulting range, pick the text offsets to replace and the output
   lines that replace them, taking care of the whitespace at both edges.

Edits come out sorted by start offset and never overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from partialfmt.config.logging import get_logger
from partialfmt.constants import NEWLINE
from partialfmt.core.errors import UnmappedTokenError
from partialfmt.core.ranges import RangeSet, TokenRange

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from partialfmt.config.logging import PartialfmtLogger
    from partialfmt.core.source import SourceInput
    from partialfmt.core.tokens import Tok
    from partialfmt.output.boundaries import BoundaryIndex

logger: PartialfmtLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Replacement:
    """Replace ``text[start:stop]`` of the original with ``text``.

    ``start == stop`` denotes a pure insertion.
    """

    start: int
    stop: int
    text: str

    def __str__(self) -> str:
        return f"[{self.start}..{self.stop}) -> {self.text!r}"


def token_line_index(full_spans: Sequence[TokenRange]) -> dict[int, TokenRange]:
    """Map every token index to the half-open range of output lines covering it.

    Args:
        full_spans (Sequence[TokenRange]): Full span per output line, sentinel last.

    Returns:
        dict[int, TokenRange]: Token index to ``[first line, last line + 1)``.
    """
    k_to_j: dict[int, TokenRange] = {}
    for j, span in enumerate(full_spans):
        for k in span:
            seen: TokenRange | None = k_to_j.get(k)
            k_to_j[k] = TokenRange(j if seen is None else seen.start, j + 1)
    return k_to_j


def first_non_whitespace(line: str) -> int:
    """Return the index of the first non-whitespace character, or -1."""
    for i, ch in enumerate(line):
        if not ch.isspace():
            return i
    return -1


class ReplacementPlanner:
    """Computes replacement lists from frozen output state. Holds no mutable state."""

    def __init__(
        self,
        source: SourceInput,
        lines: Sequence[str],
        full_spans: Sequence[TokenRange],
        boundaries: BoundaryIndex,
    ) -> None:
        self._source: SourceInput = source
        self._lines: tuple[str, ...] = tuple(lines)
        self._boundaries: BoundaryIndex = boundaries
        self._k_to_j: dict[int, TokenRange] = token_line_index(full_spans)

    def lines_for_token(self, k: int) -> TokenRange:
        """Return the output lines covering token ``k``.

        Raises:
            UnmappedTokenError: If no output line covers ``k``.
        """
        lines: TokenRange | None = self._k_to_j.get(k)
        if lines is None:
            raise UnmappedTokenError(k)
        return lines

    def breakable_ranges(self, requested: Iterable[TokenRange]) -> RangeSet:
        """Clip, expand onto boundaries and merge the requested token ranges."""
        domain: TokenRange = TokenRange(0, self._source.token_count + 1)
        clipped: RangeSet = RangeSet(requested).clip(domain)
        breakable: RangeSet = RangeSet()
        for token_range in clipped:
            expanded: TokenRange = self._boundaries.expand(token_range)
            logger.debug("Expanded token range %s to %s", token_range, expanded)
            breakable.add(expanded)
        return breakable

    def plan(self, requested: Iterable[TokenRange]) -> tuple[Replacement, ...]:
        """Return the sorted, non-overlapping replacements for ``requested``."""
        replacements: list[Replacement] = [
            self._replacement_for(token_range)
            for token_range in self.breakable_ranges(requested)
        ]
        logger.debug("Planned %d replacement(s)", len(replacements))
        return tuple(replacements)

    def _replacement_for(self, token_range: TokenRange) -> Replacement:
        text: str = self._source.text
        start_tok: Tok = self._source.get_token(token_range.start).start_tok()
        end_tok: Tok = self._source.get_token(token_range.stop - 1).end_tok()

        # Start: back up over indentation to the line start, unless the region
        # shares its line with earlier text, in which case it gets a line of its own.
        replace_from: int = start_tok.position
        needs_break_before: bool = False
        scan: int = replace_from
        while scan > 0:
            previous: str = text[scan - 1]
            if previous == NEWLINE:
                replace_from = scan
                break
            if not previous.isspace():
                needs_break_before = True
                break
            scan -= 1
        else:
            replace_from = scan

        first_line: int = self.lines_for_token(start_tok.real_index).start
        end_line: int = self.lines_for_token(end_tok.real_index).stop
        # Trailing blank lines are never materialized, so the range may run past the end.
        body: str = NEWLINE.join(self._lines[first_line : min(end_line, len(self._lines))])
        replacement: str = (NEWLINE if needs_break_before else "") + body + NEWLINE
        trailing_line: str | None = (
            self._lines[end_line] if end_line < len(self._lines) else None
        )

        replace_to: int = min(end_tok.end, len(text))
        if end_tok.real_index == self._source.token_count - 1:
            # Last real token: take the trailing whitespace up to EOF along.
            replace_to = len(text)

        # Swallow trailing whitespace. If a newline ends the region, the next
        # original line keeps its own indentation; otherwise the text left on
        # this line moves to a fresh line indented like the next output line.
        re_indent: bool = True
        while replace_to < len(text):
            end_char: str = text[replace_to]
            if end_char == NEWLINE:
                re_indent = False
                replace_to += 1
                break
            if not end_char.isspace():
                break
            replace_to += 1
        if re_indent and trailing_line is not None:
            idx: int = first_non_whitespace(trailing_line)
            if idx > 0:
                replacement += trailing_line[:idx]

        logger.trace(
            "tokens %s -> text [%d..%d), output lines [%d..%d)",
            token_range,
            replace_from,
            replace_to,
            first_line,
            end_line,
        )
        return Replacement(replace_from, replace_to, replacement)
