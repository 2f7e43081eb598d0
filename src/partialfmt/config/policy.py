# topmark:header:start
#
#   project      : PartialFmt
#   file         : policy.py
#   file_relpath : src/partialfmt/config/policy.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Policy model for PartialFmt output reconciliation.

This module defines the **policy layer** that controls how the output builder
interprets directives: which emissions count as comments, how conflicting
blank-line wishes are merged, and whether replacement previews are logged.

Design:
    * ``MutableOutputPolicy`` uses tri-state options (``X | None``) to represent
      explicit values vs. *unset*. This enables non-destructive merges when
      composing multiple sources (defaults → pyproject → partialfmt.toml → API).
    * ``OutputPolicy`` is the fully-resolved, immutable runtime view, so the
      builder and planner never branch on ``None``.
    * ``MutableOutputPolicy.resolve(base)`` fills unset fields from ``base``.

TOML mapping:

    [tool.partialfmt]
    comment_prefixes = ["//", "/*"]
    blank_line_merge = "last-explicit-wins"
    preview_replacements = false
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from partialfmt.constants import DEFAULT_COMMENT_PREFIXES

T = TypeVar("T")


class BlankLineMergeMode(Enum):
    """Built-in rules for combining two blank-line wishes recorded at one anchor.

    Every mode keeps an explicit YES when the later request is unset.
    """

    LAST_EXPLICIT_WINS = "last-explicit-wins"
    FIRST_EXPLICIT_WINS = "first-explicit-wins"
    YES_WINS = "yes-wins"


@dataclass(frozen=True, slots=True)
class OutputPolicy:
    """Immutable, runtime policy used by the output builder.

    Attributes:
        comment_prefixes (tuple[str, ...]): Text prefixes identifying a comment emission.
            Comments ignore a recorded "no" wish and follow the source's blank lines.
        blank_line_merge (BlankLineMergeMode): Rule for merging wishes on the same anchor.
        preview_replacements (bool): Log a colorized preview of every computed
            replacement batch at DEBUG level.
    """

    comment_prefixes: tuple[str, ...] = DEFAULT_COMMENT_PREFIXES
    blank_line_merge: BlankLineMergeMode = BlankLineMergeMode.LAST_EXPLICIT_WINS
    preview_replacements: bool = False

    def is_comment(self, text: str) -> bool:
        """Return True if ``text`` starts with one of the comment prefixes."""
        return text.startswith(self.comment_prefixes)

    def thaw(self) -> MutableOutputPolicy:
        """Return a mutable builder initialized from this frozen policy.

        Returns:
            MutableOutputPolicy: A tri-state mutable policy.
        """
        return MutableOutputPolicy(
            comment_prefixes=self.comment_prefixes,
            blank_line_merge=self.blank_line_merge,
            preview_replacements=self.preview_replacements,
        )


@dataclass
class MutableOutputPolicy:
    """Mutable builder for `OutputPolicy`, suitable for config loading/merging.

    Attributes:
        comment_prefixes (tuple[str, ...] | None): See `OutputPolicy`. `None` means "inherit".
        blank_line_merge (BlankLineMergeMode | None): See `OutputPolicy`. `None` means "inherit".
        preview_replacements (bool | None): See `OutputPolicy`. `None` means "inherit".
    """

    comment_prefixes: tuple[str, ...] | None = None
    blank_line_merge: BlankLineMergeMode | None = None
    preview_replacements: bool | None = None

    def merge_with(self, other: MutableOutputPolicy) -> MutableOutputPolicy:
        """Return a new policy by applying ``other`` over ``self`` (last-wins).

        ``None`` fields in ``other`` do not override explicit values in ``self``.

        Args:
            other (MutableOutputPolicy): The policy whose values override current ones.

        Returns:
            MutableOutputPolicy: Merged policy.
        """
        return MutableOutputPolicy(
            comment_prefixes=_pick(current=self.comment_prefixes, override=other.comment_prefixes),
            blank_line_merge=_pick(current=self.blank_line_merge, override=other.blank_line_merge),
            preview_replacements=_pick(
                current=self.preview_replacements, override=other.preview_replacements
            ),
        )

    def resolve(self, base: OutputPolicy) -> OutputPolicy:
        """Resolve tri-state fields against a base frozen policy.

        Args:
            base (OutputPolicy): Values used for every unset field.

        Returns:
            OutputPolicy: The resolved immutable policy.
        """
        return OutputPolicy(
            comment_prefixes=_pick(current=base.comment_prefixes, override=self.comment_prefixes),
            blank_line_merge=_pick(current=base.blank_line_merge, override=self.blank_line_merge),
            preview_replacements=_pick(
                current=base.preview_replacements, override=self.preview_replacements
            ),
        )

    def freeze(self) -> OutputPolicy:
        """Resolve against the built-in defaults."""
        return self.resolve(OutputPolicy())


def _pick(*, current: T, override: T | None) -> T:
    return override if override is not None else current
