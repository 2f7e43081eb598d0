# topmark:header:start
#
#   project      : PartialFmt
#   file         : __init__.py
#   file_relpath : src/partialfmt/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PartialFmt package.

PartialFmt is the output side of a source formatter. It accepts the low-level
directives emitted by a layout engine (text, indentation, blank-line wishes and
partial-format boundaries), assembles them into finished output lines, and
reconciles those lines with the original text so that either the whole
document or only selected token ranges get rewritten.
"""

from __future__ import annotations
