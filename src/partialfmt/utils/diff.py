# topmark:header:start
#
#   project      : PartialFmt
#   file         : diff.py
#   file_relpath : src/partialfmt/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diff and preview rendering for merged output.

These helpers turn the result of a merge into human-readable text for logs:
a unified diff of the original against the merged document, and a colorized
listing of the individual replacements.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING, Sequence

from yachalk import chalk

from partialfmt.config.logging import get_logger

if TYPE_CHECKING:
    from partialfmt.config.logging import PartialfmtLogger
    from partialfmt.output.planner import Replacement

logger: PartialfmtLogger = get_logger(__name__)


def unified_diff(original: str, merged: str, name: str = "<source>") -> str:
    """Return the unified diff turning ``original`` into ``merged`` ("" if equal).

    Args:
        original (str): Text before reformatting.
        merged (str): Text after applying the replacements.
        name (str): Name shown in the diff headers.

    Returns:
        str: The unified diff text.
    """
    patch_lines: list[str] = list(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            merged.splitlines(keepends=True),
            fromfile=f"{name} (original)",
            tofile=f"{name} (formatted)",
            n=3,
        )
    )
    logger.trace("Unified diff: %d line(s)", len(patch_lines))
    return "".join(patch_lines)


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch: A unified diff as **either** a list/sequence of lines **or** a single
            multiline string.
        show_line_numbers: Whether to prefix output with line numbers.

    Returns:
        The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = list(patch)

    # Map diff markers to colors and show control characters explicitly.
    def process_line(line: str) -> str:
        content = line.replace("\r", "\\r").replace("\n", "\\n")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers is True:
        return chalk.gray(
            "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
        )
    return chalk.gray("".join(f"{process_line(line)}\n" for line in lines))


def render_replacements(text: str, replacements: Sequence[Replacement]) -> str:
    """Render each replacement as a colorized before/after block.

    Args:
        text (str): The original text the replacements apply to.
        replacements (Sequence[Replacement]): The edits to show.

    Returns:
        str: One block per replacement; empty string when there are none.
    """
    blocks: list[str] = []
    for n, replacement in enumerate(replacements, 1):
        before: str = text[replacement.start : replacement.stop]
        blocks.append(
            chalk.bold.white(f"#{n} [{replacement.start}..{replacement.stop})")
            + "\n"
            + chalk.red(f"- {before!r}")
            + "\n"
            + chalk.green(f"+ {replacement.text!r}")
        )
    return "\n".join(blocks)
