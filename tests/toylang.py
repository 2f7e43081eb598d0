# topmark:header:start
#
#   project      : PartialFmt
#   file         : toylang.py
#   file_relpath : tests/toylang.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""A tiny brace-and-semicolon language used to drive the output builder in tests.

The tokenizer cuts text into words, punctuation, ``//`` and ``/* */`` comments,
and whitespace/newline trivia. The layout engine puts every statement on its own
line, indents block bodies by four spaces, joins the words of a statement with
single spaces, and marks a partial-format boundary at end-of-file and wherever
a token starts on a fresh line (at its first leading comment, if it has one).
It records a NO blank-line wish right after ``{``, right before ``}`` and before
every token that continues a line; elsewhere the author's blank lines are
kept (at most one).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from partialfmt.core.ranges import TokenRange
from partialfmt.core.source import ListSourceInput
from partialfmt.core.tokens import TRIVIA, RealIndex, Tok
from partialfmt.output import BlankLineWish, FormattedOutput

if TYPE_CHECKING:
    from partialfmt.config import OutputPolicy
    from partialfmt.core.tokens import Token

INDENT: Final[int] = 4

_TOK_RE: Final[re.Pattern[str]] = re.compile(
    r"(?P<nl>\n)"
    r"|(?P<ws>[ \t\r]+)"
    r"|(?P<line_comment>//[^\n]*)"
    r"|(?P<block_comment>/\*.*?\*/)"
    r"|(?P<word>\w+)"
    r"|(?P<punct>\S)",
    re.DOTALL,
)

_BREAK_AFTER: Final[frozenset[str]] = frozenset({";", "{", "}"})


def tokenize(text: str) -> list[Tok]:
    """Cut ``text`` into toks, numbering tokens and comments in order."""
    toks: list[Tok] = []
    k: int = 0
    for m in _TOK_RE.finditer(text):
        kind: str | None = m.lastgroup
        if kind in ("nl", "ws"):
            toks.append(Tok(m.start(), m.group(), TRIVIA))
            continue
        is_comment: bool = kind in ("line_comment", "block_comment")
        toks.append(Tok(m.start(), m.group(), RealIndex(k), is_comment=is_comment))
        k += 1
    return toks


def parse(text: str) -> ListSourceInput:
    return ListSourceInput.from_toks(text, tokenize(text))


class ToyLayout:
    """Drives a `FormattedOutput` the way a real layout engine would."""

    def __init__(self, source: ListSourceInput, out: FormattedOutput) -> None:
        self.source: ListSourceInput = source
        self.out: FormattedOutput = out
        self.depth: int = 0
        self.at_line_start: bool = True

    def _comment(self, tok: Tok, *, own_line: bool) -> None:
        if own_line:
            if not self.at_line_start:
                self.out.emit_text("\n")
            self.out.set_indent(self.depth * INDENT)
        else:
            self.out.emit_text(" ")
        self.out.emit_text(tok.text, TokenRange.single(tok.real_index))
        if own_line or tok.text.startswith("//"):
            self.out.emit_text("\n")
            self.at_line_start = True
        else:
            self.at_line_start = False

    def _token(self, token: Token) -> None:
        if self.at_line_start:
            self.out.mark_boundary(token.start_tok().real_index)
        for tok in token.toks_before:
            if tok.is_comment:
                self._comment(tok, own_line=True)
        tok = token.tok
        k: int = tok.real_index
        if k == self.source.token_count:
            self.out.mark_boundary(k)
            return

        if tok.text == "}":
            self.depth = max(0, self.depth - 1)
            self.out.record_wish(k, BlankLineWish.NO)
        if self.at_line_start:
            self.out.set_indent(self.depth * INDENT)
        else:
            # Mid-statement: never break the line for an author blank line.
            self.out.record_wish(self.out.last_anchor, BlankLineWish.NO)
            if tok.text != ";":
                self.out.emit_text(" ")
        self.out.emit_text(tok.text, TokenRange.single(k))
        self.at_line_start = False

        for after in token.toks_after:
            if after.is_comment:
                self._comment(after, own_line=False)

        if tok.text in _BREAK_AFTER and not self.at_line_start:
            self.out.emit_text("\n")
            self.at_line_start = True
        if tok.text == "{":
            self.depth += 1
            self.out.record_wish(self.out.last_anchor, BlankLineWish.NO)

    def run(self) -> None:
        for token in self.source.tokens:
            self._token(token)


def layout_toy(text: str, policy: OutputPolicy | None = None) -> FormattedOutput:
    """Lay out ``text`` without finalizing, so tests can add directives."""
    source: ListSourceInput = parse(text)
    out = FormattedOutput(source, policy=policy)
    ToyLayout(source, out).run()
    return out


def format_toy(text: str, policy: OutputPolicy | None = None) -> FormattedOutput:
    """Lay out ``text`` and finalize the output."""
    out: FormattedOutput = layout_toy(text, policy)
    out.finalize()
    return out


def reformat_all(text: str) -> str:
    """Return ``text`` with the whole document reformatted and merged back."""
    out: FormattedOutput = format_toy(text)
    return out.merged_text([out.full_range()])
