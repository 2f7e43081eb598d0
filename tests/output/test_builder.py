# topmark:header:start
#
#   project      : PartialFmt
#   file         : test_builder.py
#   file_relpath : tests/output/test_builder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build phase of `FormattedOutput`: lines, blank lines, spans and lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from partialfmt.config import BlankLineMergeMode
from partialfmt.core.comments import IdentityCommentsHelper
from partialfmt.core.errors import OutputStateError
from partialfmt.core.ranges import EMPTY_RANGE, TokenRange
from partialfmt.core.tokens import Tok
from partialfmt.output import BlankLineWish, FormattedOutput
from tests.conftest import make_policy, parametrize
from tests.toylang import format_toy, layout_toy, parse

if TYPE_CHECKING:
    from partialfmt.config import OutputPolicy


def _two_words(text: str = "a\n\nb", policy: OutputPolicy | None = None) -> FormattedOutput:
    """Builder over a two-token source with nothing emitted yet."""
    out = FormattedOutput(parse(text), policy=policy)
    out.mark_boundary(0)
    return out


@parametrize(
    "text, expected",
    [
        ("int   x ;", ("int x;",)),
        ("a; b;", ("a;", "b;")),
        ("a;\n\n\n\nb;", ("a;", "", "b;")),
        ("{ a; { b; } }", ("{", "    a;", "    {", "        b;", "    }", "}")),
        ("{\n\n  a;\n\n}\n", ("{", "    a;", "}")),
        ("\n\na;", ("", "a;")),
        ("a;   \n\n\n", ("a;",)),
        ("a\n\n;", ("a;",)),
        ("a\n\nb;", ("a b;",)),
        ("", ()),
    ],
)
def test_toy_layout_lines(text: str, expected: tuple[str, ...]) -> None:
    """Author blank lines are kept (once), except where a NO wish is recorded."""
    out: FormattedOutput = format_toy(text)
    assert out.lines == expected
    assert out.line_count == len(expected)


def test_formatted_text_is_newline_terminated() -> None:
    assert format_toy("a ;b;").formatted_text() == "a;\nb;\n"
    assert format_toy("").formatted_text() == ""


def test_repeated_newlines_and_wishes_coalesce() -> None:
    """Three line-break emissions plus three YES wishes yield one blank line."""
    out = _two_words("a b")
    out.emit_text("a", TokenRange.single(0))
    for _ in range(3):
        out.emit_text("\n")
        out.record_wish(1, BlankLineWish.YES)
    out.emit_text("b", TokenRange.single(1))
    out.finalize()
    assert out.lines == ("a", "", "b")


def test_force_blank_line() -> None:
    out = _two_words("a b")
    out.emit_text("a", TokenRange.single(0))
    out.force_blank_line()
    out.emit_text("\n")
    out.emit_text("b", TokenRange.single(1))
    out.finalize()
    assert out.lines == ("a", "", "b")


def test_force_blank_line_suppressed_by_recorded_no() -> None:
    out = _two_words("a b")
    out.emit_text("a", TokenRange.single(0))
    out.record_wish(1, BlankLineWish.NO)
    out.force_blank_line()
    out.emit_text("\n")
    out.emit_text("b", TokenRange.single(1))
    out.finalize()
    assert out.lines == ("a", "b")


def test_comment_ignores_no_wish() -> None:
    """A comment after ``{`` keeps the author's blank line despite the NO wish."""
    out: FormattedOutput = format_toy("{\n\n// c\na;\n}")
    assert out.lines == ("{", "", "    // c", "    a;", "}")


@parametrize(
    "prefixes, expected",
    [
        (("#",), ("a", "", "# b")),
        (("//", "/*"), ("a", "# b")),
    ],
)
def test_comment_prefixes_are_configurable(
    prefixes: tuple[str, ...], expected: tuple[str, ...]
) -> None:
    out = _two_words(policy=make_policy(comment_prefixes=prefixes))
    out.emit_text("a", TokenRange.single(0))
    out.emit_text("\n")
    out.record_wish(1, BlankLineWish.NO)
    out.emit_text("# b", TokenRange.single(1))
    out.finalize()
    assert out.lines == expected


@parametrize(
    "mode, expected",
    [
        (BlankLineMergeMode.LAST_EXPLICIT_WINS, ("a", "", "b")),
        (BlankLineMergeMode.FIRST_EXPLICIT_WINS, ("a", "b")),
        (BlankLineMergeMode.YES_WINS, ("a", "", "b")),
    ],
)
def test_blank_line_merge_mode(mode: BlankLineMergeMode, expected: tuple[str, ...]) -> None:
    out = _two_words("a b", policy=make_policy(blank_line_merge=mode))
    out.emit_text("a", TokenRange.single(0))
    out.emit_text("\n")
    out.record_wish(1, BlankLineWish.NO)
    out.record_wish(1, BlankLineWish.YES)
    out.emit_text("b", TokenRange.single(1))
    out.finalize()
    assert out.lines == expected


def test_unset_wish_defers_to_source() -> None:
    out = _two_words("a\n\nb")
    out.emit_text("a", TokenRange.single(0))
    out.emit_text("\n")
    out.record_wish(1, BlankLineWish.UNSET)
    out.emit_text("b", TokenRange.single(1))
    out.finalize()
    assert out.lines == ("a", "", "b")


def test_spans_per_line() -> None:
    out: FormattedOutput = format_toy("a b;\n\nc;")
    assert out.lines == ("a b;", "", "c;")
    assert out.first_span(0) == TokenRange(0, 1)
    assert out.first_span_core(0) == TokenRange(0, 1)
    assert out.full_span(0) == TokenRange(0, 3)
    assert out.first_span(1) == EMPTY_RANGE
    assert out.first_token_of_line(1) is None
    assert out.first_token_of_line(2) == 3
    # End-of-file sentinel after the last line.
    assert out.full_span(3) == TokenRange(5, 6)
    assert out.lines_for_token(5) == TokenRange(3, 4)


def test_multiline_emission_maps_token_to_every_line() -> None:
    out: FormattedOutput = format_toy("/* x\n   y */\na;")
    assert out.lines == ("/* x", "   y */", "a;")
    assert out.lines_for_token(0) == TokenRange(0, 2)
    assert out.first_span(1) == TokenRange(0, 1)
    assert out.lines_for_token(1) == TokenRange(2, 3)


def test_last_anchor_follows_emissions() -> None:
    out = _two_words("a b")
    assert out.last_anchor == -1
    out.emit_text("a", TokenRange.single(0))
    out.emit_text(" ")
    assert out.last_anchor == 1
    assert "last_anchor=1" in repr(out)


def test_comments_helper_is_carried() -> None:
    assert isinstance(_two_words().comments_helper, IdentityCommentsHelper)

    class Upper:
        def rewrite(self, tok: Tok, max_width: int, column0: int) -> str:
            return tok.text.upper()

    helper = Upper()
    out = FormattedOutput(parse("a"), comments_helper=helper)
    assert out.comments_helper is helper


@parametrize(
    "call",
    [
        lambda o: o.emit_text("x", TokenRange.single(0)),
        lambda o: o.set_indent(2),
        lambda o: o.record_wish(0, BlankLineWish.YES),
        lambda o: o.force_blank_line(),
        lambda o: o.mark_boundary(0),
        lambda o: o.finalize(),
    ],
)
def test_directives_after_finalize_raise(call: object) -> None:
    out: FormattedOutput = format_toy("a;")
    assert out.is_finalized
    with pytest.raises(OutputStateError, match="after finalize"):
        call(out)  # type: ignore[operator]


def test_queries_before_finalize_raise() -> None:
    out: FormattedOutput = layout_toy("a;")
    assert not out.is_finalized
    with pytest.raises(OutputStateError, match="before finalize"):
        _ = out.lines
    with pytest.raises(OutputStateError):
        out.compute_replacements([TokenRange(0, 1)])
    with pytest.raises(OutputStateError):
        out.first_span(0)
