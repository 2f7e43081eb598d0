# topmark:header:start
#
#   project      : PartialFmt
#   file         : ledger.py
#   file_relpath : src/partialfmt/output/ledger.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Blank-line wishes keyed by anchor token.

The layout engine records, per anchor token, whether a blank line should
precede it. The anchor is the index of the token the next emission starts
with, i.e. one past the last token already emitted.

When two wishes land on the same anchor they are combined by a pluggable
[`MergePolicy`][partialfmt.output.ledger.MergePolicy]. The built-in policies
(selected by [`BlankLineMergeMode`][partialfmt.config.policy.BlankLineMergeMode])
all keep an explicit YES when the later wish is unset.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable

from partialfmt.config.logging import get_logger
from partialfmt.config.policy import BlankLineMergeMode

if TYPE_CHECKING:
    from collections.abc import Iterator

    from partialfmt.config.logging import PartialfmtLogger

logger: PartialfmtLogger = get_logger(__name__)


class BlankLineWish(Enum):
    """Tri-state request for a blank line before an anchor token."""

    YES = "yes"
    NO = "no"
    UNSET = "unset"

    def wanted(self) -> bool | None:
        """Return True/False for an explicit wish, None when unset."""
        if self is BlankLineWish.YES:
            return True
        if self is BlankLineWish.NO:
            return False
        return None

    def is_wanted(self, default: bool) -> bool:
        """Return the explicit wish, or ``default`` when unset."""
        wanted: bool | None = self.wanted()
        return default if wanted is None else wanted


MergePolicy = Callable[[BlankLineWish, BlankLineWish], BlankLineWish]


def last_explicit_wins(old: BlankLineWish, new: BlankLineWish) -> BlankLineWish:
    """The newer wish wins unless it is unset."""
    return old if new is BlankLineWish.UNSET else new


def first_explicit_wins(old: BlankLineWish, new: BlankLineWish) -> BlankLineWish:
    """The older wish wins unless it is unset."""
    return new if old is BlankLineWish.UNSET else old


def yes_wins(old: BlankLineWish, new: BlankLineWish) -> BlankLineWish:
    """YES beats NO, and NO beats UNSET."""
    if BlankLineWish.YES in (old, new):
        return BlankLineWish.YES
    if BlankLineWish.NO in (old, new):
        return BlankLineWish.NO
    return BlankLineWish.UNSET


MERGE_POLICIES: dict[BlankLineMergeMode, MergePolicy] = {
    BlankLineMergeMode.LAST_EXPLICIT_WINS: last_explicit_wins,
    BlankLineMergeMode.FIRST_EXPLICIT_WINS: first_explicit_wins,
    BlankLineMergeMode.YES_WINS: yes_wins,
}


class BlankLineLedger:
    """Mapping from anchor token index to the merged blank-line wish."""

    def __init__(self, merge: MergePolicy = last_explicit_wins) -> None:
        self._merge: MergePolicy = merge
        self._wishes: dict[int, BlankLineWish] = {}

    def record(self, anchor: int, wish: BlankLineWish) -> None:
        """Store ``wish`` for ``anchor``, merging with any existing entry."""
        old: BlankLineWish | None = self._wishes.get(anchor)
        if old is None:
            self._wishes[anchor] = wish
        else:
            self._wishes[anchor] = self._merge(old, wish)
        logger.trace("blank line wish @%d: %s -> %s", anchor, old, self._wishes[anchor])

    def force_yes(self, anchor: int) -> bool:
        """Record YES at ``anchor`` unless an entry already exists.

        An existing entry (typically a NO recorded at a block or declaration
        edge) is left untouched.

        Returns:
            bool: True if the YES was recorded.
        """
        if anchor in self._wishes:
            logger.trace("forced blank line @%d suppressed by %s", anchor, self._wishes[anchor])
            return False
        self._wishes[anchor] = BlankLineWish.YES
        return True

    def resolve(self, anchor: int) -> BlankLineWish | None:
        """Return the wish recorded for ``anchor``, or None if there is none."""
        return self._wishes.get(anchor)

    def __contains__(self, anchor: object) -> bool:
        return anchor in self._wishes

    def __len__(self) -> int:
        return len(self._wishes)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._wishes))

    def __repr__(self) -> str:
        body: str = ", ".join(f"{k}: {self._wishes[k].value}" for k in sorted(self._wishes))
        return f"BlankLineLedger({{{body}}})"
