from __future__ import annotations

import itertools
import re

from draftbb.runs import Run
from draftbb.tagtree import (
    Candidate,
    TagNode,
    clip,
    find_candidates,
    pack_tags,
    render_runs,
)

_TAG = re.compile(r"\[(/?)([a-z]+)\]")


def _runs(*specs: tuple[str, set[str]]) -> list[Run]:
    out: list[Run] = []
    pos = 0
    for text, tags in specs:
        out.append(Run(pos, pos + len(text), text, frozenset(tags)))
        pos += len(text)
    return out


def _active_sets(markup: str) -> list[frozenset[str]]:
    """Flatten markup back to the set of open tags at each character."""

    stack: list[str] = []
    out: list[frozenset[str]] = []
    pos = 0
    for m in _TAG.finditer(markup):
        out.extend(frozenset(stack) for _ in markup[pos : m.start()])
        closing, name = m.groups()
        if closing:
            assert stack and stack[-1] == name, f"mis-nested close of {name} in {markup!r}"
            stack.pop()
        else:
            stack.append(name)
        pos = m.end()
    out.extend(frozenset(stack) for _ in markup[pos:])
    assert not stack, f"unclosed tags {stack} in {markup!r}"
    return out


def _expected_sets(runs: list[Run]) -> list[frozenset[str]]:
    return [run.tags for run in runs for _ in run.text]


def test_single_tag_covers_text() -> None:
    assert render_runs(_runs(("test", {"b"}))) == "[b]test[/b]"
    assert render_runs(_runs(("test", {"code"}))) == "[code]test[/code]"


def test_no_tags_renders_plain_text() -> None:
    assert render_runs(_runs(("a", set()), ("b", set()))) == "ab"
    assert render_runs([]) == ""


def test_identical_spans_nest_in_fixed_order() -> None:
    assert render_runs(_runs(("x", {"b", "i"}))) == "[b][i]x[/i][/b]"
    assert render_runs(_runs(("x", {"u", "sup", "b"}))) == "[sup][b][u]x[/u][/b][/sup]"


def test_nested_spans() -> None:
    runs = _runs(("a", {"b"}), ("b", {"b", "i"}), ("c", {"b"}))
    assert render_runs(runs) == "[b]a[i]b[/i]c[/b]"


def test_crossing_spans_leftmost_wins_tie() -> None:
    runs = _runs(("bold ", {"b"}), ("and", {"b", "i"}), (" italic", {"i"}))
    assert render_runs(runs) == "[b]bold [i]and[/i][/b][i] italic[/i]"


def test_crossing_spans_longest_wins() -> None:
    # `i` covers runs 1-3 (length 3), `b` covers runs 0-1 (length 2).
    runs = [
        Run(0, 1, "a", frozenset({"b"})),
        Run(1, 2, "b", frozenset({"b", "i"})),
        Run(2, 3, "c", frozenset({"i", "u"})),
        Run(3, 4, "d", frozenset({"i"})),
    ]
    assert render_runs(runs) == "[b]a[/b][i][b]b[/b][u]c[/u]d[/i]"


def test_inner_tags_nest_inside_outer_span() -> None:
    root = pack_tags(_runs(("a", {"b"}), ("b", {"b", "i"})))
    assert root == TagNode(0, 2, None, (TagNode(0, 2, "b", (TagNode(1, 2, "i"),)),))


def test_tag_never_nests_inside_itself() -> None:
    root = pack_tags(_runs(("a", {"b"}), ("b", {"b"})))
    assert root == TagNode(0, 2, None, (TagNode(0, 2, "b"),))


def test_root_spans_all_runs_and_children_are_ordered() -> None:
    runs = _runs(("a", {"i"}), ("b", set()), ("c", {"b"}), ("d", set()))
    root = pack_tags(runs)
    assert (root.start, root.end, root.name) == (0, 4, None)
    assert [(c.name, c.start, c.end) for c in root.children] == [("i", 0, 1), ("b", 2, 3)]
    assert render_runs(runs) == "[i]a[/i]b[b]c[/b]d"


def test_find_candidates_skips_excluded_tags() -> None:
    runs = _runs(("a", {"b", "i"}), ("b", {"i"}), ("c", {"b"}))
    cands = find_candidates(runs, 0, 3, excluded=frozenset({"i"}), order=("b", "i"))
    assert cands == [Candidate("b", 0, 1), Candidate("b", 2, 3)]


def test_clip_moves_boundaries_out_of_chosen_span() -> None:
    chosen = Candidate("b", 2, 5)
    assert clip(Candidate("i", 4, 8), chosen) == Candidate("i", 5, 8)
    assert clip(Candidate("i", 0, 3), chosen) == Candidate("i", 0, 2)
    assert clip(Candidate("i", 3, 4), chosen) is None
    assert clip(Candidate("i", 2, 5), chosen) is None
    assert clip(Candidate("i", 6, 8), chosen) == Candidate("i", 6, 8)


def test_round_trip_for_non_crossing_input() -> None:
    runs = _runs(
        ("a", {"b"}),
        ("b", {"b", "i"}),
        ("c", {"b", "i", "u"}),
        ("d", {"b"}),
        ("e", set()),
        ("f", {"s"}),
    )
    assert _active_sets(render_runs(runs)) == _expected_sets(runs)


def test_crossing_input_is_always_well_nested_and_sound() -> None:
    tags = ["b", "i", "u"]
    subsets = [frozenset(c) for n in range(len(tags) + 1) for c in itertools.combinations(tags, n)]
    for combo in itertools.product(subsets, repeat=4):
        runs = [Run(i, i + 1, "xyzw"[i], combo[i]) for i in range(4)]
        # _active_sets asserts the brackets are well nested.
        assert _active_sets(render_runs(runs)) == _expected_sets(runs)
