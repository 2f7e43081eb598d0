# topmark:header:start
#
#   project      : PartialFmt
#   file         : __init__.py
#   file_relpath : src/partialfmt/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for PartialFmt.

Exports the immutable runtime policy ([`OutputPolicy`][partialfmt.config.policy.OutputPolicy]),
its tri-state builder, and the logging helpers. TOML loading lives in
[`partialfmt.config.io`][partialfmt.config.io].
"""

from __future__ import annotations

from partialfmt.config import logging
from partialfmt.config.policy import BlankLineMergeMode, MutableOutputPolicy, OutputPolicy

__all__: list[str] = [
    "BlankLineMergeMode",
    "MutableOutputPolicy",
    "OutputPolicy",
    "logging",
]
