# topmark:header:start
#
#   project      : PartialFmt
#   file         : whitespace.py
#   file_relpath : src/partialfmt/output/whitespace.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pending-whitespace state machine for the output builder.

Spaces and newlines requested by the layout engine are only counted here. They
materialize when the next printable character arrives, which is what coalesces
runs of blank-line requests and drops whitespace at the end of the document.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PendingWhitespace:
    """Counts of spaces and newlines not yet written to the line buffer.

    Attributes:
        spaces (int): Spaces to write before the next printable character.
        newlines (int): Line breaks to perform before the next printable character.
    """

    spaces: int = 0
    newlines: int = 0

    def add_space(self) -> None:
        self.spaces += 1

    def add_newline(self) -> None:
        """Count a line break; spaces pending on the abandoned line are dropped."""
        self.spaces = 0
        self.newlines += 1

    def ensure_newline(self) -> None:
        """Guarantee at least one pending line break and clear pending spaces."""
        if self.newlines == 0:
            self.newlines = 1
        self.spaces = 0

    def set_indent(self, columns: int) -> None:
        """Place the cursor at ``columns`` (overwrites, does not add)."""
        self.spaces = columns

    def take_newlines(self) -> int:
        """Return the pending line breaks and reset the count."""
        n: int = self.newlines
        self.newlines = 0
        return n

    def take_spaces(self) -> str:
        """Return the pending spaces as text and reset the count."""
        s: str = " " * self.spaces
        self.spaces = 0
        return s
