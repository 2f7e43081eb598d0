# topmark:header:start
#
#   project      : PartialFmt
#   file         : merger.py
#   file_relpath : src/partialfmt/output/merger.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stream the original text with replacements spliced in.

The replacement list must already be sorted by start offset and free of
overlaps, as produced by the
[`ReplacementPlanner`][partialfmt.output.planner.ReplacementPlanner]; it is
not re-validated here.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from partialfmt.output.planner import Replacement


class TextSink(Protocol):
    """Anything with a ``write(str)`` method, such as an open text file."""

    def write(self, s: str, /) -> object: ...


def write_merged(sink: TextSink, text: str, replacements: Sequence[Replacement]) -> None:
    """Write ``text`` to ``sink`` with every replacement applied.

    Errors raised by ``sink.write`` propagate unchanged; output already written
    stays written.

    Args:
        sink (TextSink): Destination for the merged document.
        text (str): The original text.
        replacements (Sequence[Replacement]): Sorted, non-overlapping edits.
    """
    cursor: int = 0
    for replacement in replacements:
        if cursor < replacement.start:
            sink.write(text[cursor : replacement.start])
        cursor = replacement.stop
        sink.write(replacement.text)
    if cursor < len(text):
        sink.write(text[cursor:])


def merge_to_string(text: str, replacements: Sequence[Replacement]) -> str:
    """Return the merged document as a string."""
    buf = io.StringIO()
    write_merged(buf, text, replacements)
    return buf.getvalue()
