# topmark:header:start
#
#   project      : PartialFmt
#   file         : constants.py
#   file_relpath : src/partialfmt/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PartialFmt Constants."""

from __future__ import annotations

PYPROJECT_TOML_NAME: str = "pyproject.toml"
# Name of the table holding PartialFmt settings inside `pyproject.toml`:
PYPROJECT_TOOL_TABLE: tuple[str, str] = ("tool", "partialfmt")
# Stand-alone configuration file name (settings live at the top level):
PARTIALFMT_TOML_NAME: str = "partialfmt.toml"

# Environment variable consulted by `setup_logging()` when no level is given.
LOG_LEVEL_ENV_VAR: str = "PARTIALFMT_LOG_LEVEL"

# Text prefixes that mark an emission as a comment.
DEFAULT_COMMENT_PREFIXES: tuple[str, ...] = ("//", "/*")

NEWLINE: str = "\n"
