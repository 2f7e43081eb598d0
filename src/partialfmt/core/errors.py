# topmark:header:start
#
#   project      : PartialFmt
#   file         : errors.py
#   file_relpath : src/partialfmt/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for PartialFmt.

Usage:
    Raise these exceptions when a caller breaks the build/query contract of the
    output builder or supplies a malformed configuration. Range requests outside
    the token domain are clamped and never raise.
"""

from __future__ import annotations


class PartialFmtError(Exception):
    """Base class for all PartialFmt errors."""


class OutputStateError(PartialFmtError):
    """A directive or query arrived in the wrong lifecycle phase.

    Directives are only accepted before `finalize()`; replacement queries and
    merged rendering only after it.
    """


class EmptyBoundaryIndexError(PartialFmtError):
    """A partial reformat was requested before any boundary was marked.

    Callers must mark at least the whole-document boundary; no boundary is
    invented on their behalf.
    """

    def __init__(self) -> None:
        super().__init__(
            "Cannot expand a token range: no partial-format boundary has been marked"
        )


class UnmappedTokenError(PartialFmtError):
    """A token selected for replacement never reached any output line."""

    def __init__(self, token_index: int) -> None:
        self.token_index: int = token_index
        super().__init__(f"Token {token_index} does not map to any output line")


class ConfigError(PartialFmtError):
    """A configuration source could not be parsed or has a wrong value type."""
