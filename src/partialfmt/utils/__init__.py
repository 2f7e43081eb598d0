# topmark:header:start
#
#   project      : PartialFmt
#   file         : __init__.py
#   file_relpath : src/partialfmt/utils/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Utilities for presenting reconciliation results (diffs and previews)."""
