# topmark:header:start
#
#   project      : PartialFmt
#   file         : __init__.py
#   file_relpath : src/partialfmt/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core value types shared by the output builder and the replacement planner.

* [`ranges`][partialfmt.core.ranges]: half-open token ranges and canonical range sets.
* [`tokens`][partialfmt.core.tokens]: toks, tokens and their trivia.
* [`source`][partialfmt.core.source]: the tokenizer-facing `SourceInput` interface.
* [`comments`][partialfmt.core.comments]: the injected comment rewriter.
* [`errors`][partialfmt.core.errors]: exception hierarchy.
"""
