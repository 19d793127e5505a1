from __future__ import annotations

from draftbb.model import StyleRange
from draftbb.runs import Run, escape_text, get_runs, segment_styles
from draftbb.styles import VALUE_STYLES, StyleKind, build_style_table


def test_escape_text_brackets() -> None:
    assert escape_text("[b]x[/b]") == "&#91;b&#93;x&#91;/b&#93;"
    assert escape_text("line\nbreak") == "line\nbreak"
    assert escape_text("") == ""


def test_runs_coalesce_identical_toggle_sets() -> None:
    text = "abcdef"
    table = build_style_table(
        len(text), [StyleRange(0, 4, "BOLD"), StyleRange(2, 2, "ITALIC")]
    )
    runs = get_runs(text, table, 0, len(text))
    assert runs == [
        Run(0, 2, "ab", frozenset({"b"})),
        Run(2, 4, "cd", frozenset({"b", "i"})),
        Run(4, 6, "ef", frozenset()),
    ]


def test_runs_ignore_value_styles() -> None:
    text = "abcd"
    table = build_style_table(len(text), [StyleRange(0, 2, "color-red")])
    assert get_runs(text, table, 0, len(text)) == [Run(0, 4, "abcd", frozenset())]


def test_runs_restricted_to_subrange_and_escaped() -> None:
    text = "x[y]z"
    table = build_style_table(len(text), [StyleRange(0, 5, "CODE")])
    assert get_runs(text, table, 1, 4) == [Run(1, 4, "&#91;y&#93;", frozenset({"code"}))]


def test_runs_empty_range() -> None:
    table = build_style_table(3, [])
    assert get_runs("abc", table, 1, 1) == []


def test_segment_styles_splits_on_value_changes() -> None:
    text = "aabbcc"
    table = build_style_table(
        len(text),
        [StyleRange(0, 4, "color-red"), StyleRange(2, 2, "fontsize-12"), StyleRange(0, 6, "BOLD")],
    )
    segments = segment_styles(table, VALUE_STYLES, 0, len(text))
    assert [(s.start, s.end) for s in segments] == [(0, 2), (2, 4), (4, 6)]
    assert segments[0].styles == {StyleKind.COLOR: "red", StyleKind.BOLD: True}
    assert segments[1].styles[StyleKind.FONTSIZE] == "12"
    assert StyleKind.COLOR not in segments[2].styles
