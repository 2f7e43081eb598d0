# topmark:header:start
#
#   project      : PartialFmt
#   file         : __init__.py
#   file_relpath : src/partialfmt/output/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output side of the formatter: directive handling, span bookkeeping and reconciliation.

The entry point is [`FormattedOutput`][partialfmt.output.builder.FormattedOutput].
"""

from __future__ import annotations

from partialfmt.output.builder import FormattedOutput
from partialfmt.output.ledger import BlankLineWish
from partialfmt.output.planner import Replacement

__all__: list[str] = [
    "BlankLineWish",
    "FormattedOutput",
    "Replacement",
]
