"""Pack per-run toggle tags into a well-nested tag tree.

Runs carry arbitrary tag sets, and two tags may cross (`b` over runs 0-1,
`i` over runs 1-2). Bracket markup can only express nested spans, so the
packer picks spans greedily:

- every maximal stretch of runs sharing a tag is a candidate;
- the longest candidate wins (ties: leftmost, then `TAG_NESTING_ORDER`);
- remaining candidates are clipped so they no longer overlap the winner;
- the winner's interior is packed recursively, never reusing its own name or
  an ancestor's.

The result is deterministic for identical input.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from draftbb.runs import TAG_NESTING_ORDER, Run


@dataclass(frozen=True, slots=True)
class TagNode:
    start: int
    end: int
    name: str | None = None
    children: tuple[TagNode, ...] = ()


@dataclass(frozen=True, slots=True)
class Candidate:
    name: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def find_candidates(
    runs: Sequence[Run],
    start: int,
    end: int,
    *,
    excluded: frozenset[str],
    order: Sequence[str],
) -> list[Candidate]:
    """Maximal stretches of `runs[start:end]` where one tag is active throughout."""

    out: list[Candidate] = []
    for name in order:
        if name in excluded:
            continue
        open_at: int | None = None
        for i in range(start, end):
            if name in runs[i].tags:
                if open_at is None:
                    open_at = i
            elif open_at is not None:
                out.append(Candidate(name, open_at, i))
                open_at = None
        if open_at is not None:
            out.append(Candidate(name, open_at, end))
    return out


def clip(candidate: Candidate, chosen: Candidate) -> Candidate | None:
    """Move any boundary of `candidate` lying inside `chosen` to `chosen`'s edge."""

    start, end = candidate.start, candidate.end
    if chosen.start <= start < chosen.end:
        start = chosen.end
    if chosen.start < end <= chosen.end:
        end = chosen.start
    if end <= start:
        return None
    return Candidate(candidate.name, start, end)


def _tag_order(runs: Sequence[Run], order: Sequence[str]) -> tuple[str, ...]:
    known = set(order)
    extra = sorted({tag for run in runs for tag in run.tags} - known)
    return (*order, *extra)


def _pack(
    runs: Sequence[Run],
    start: int,
    end: int,
    name: str | None,
    ancestors: frozenset[str],
    order: tuple[str, ...],
    rank: dict[str, int],
) -> TagNode:
    excluded = ancestors | {name} if name is not None else ancestors
    pending = find_candidates(runs, start, end, excluded=excluded, order=order)

    children: list[TagNode] = []
    covered = 0
    while pending and covered < end - start:
        chosen = max(pending, key=lambda c: (c.length, -c.start, -rank[c.name]))
        covered += chosen.length
        clipped = (clip(c, chosen) for c in pending if c is not chosen)
        pending = [c for c in clipped if c is not None]
        children.append(_pack(runs, chosen.start, chosen.end, chosen.name, excluded, order, rank))

    children.sort(key=lambda n: n.start)
    return TagNode(start=start, end=end, name=name, children=tuple(children))


def pack_tags(runs: Sequence[Run], order: Sequence[str] = TAG_NESTING_ORDER) -> TagNode:
    """Build the tag tree for `runs`; the unnamed root spans every run."""

    full_order = _tag_order(runs, order)
    rank = {tag: i for i, tag in enumerate(full_order)}
    return _pack(runs, 0, len(runs), None, frozenset(), full_order, rank)


def render_tree(root: TagNode, runs: Sequence[Run]) -> str:
    parts: list[str] = []

    def emit(node: TagNode) -> None:
        cursor = node.start
        for child in node.children:
            parts.extend(run.text for run in runs[cursor : child.start])
            parts.append(f"[{child.name}]")
            emit(child)
            parts.append(f"[/{child.name}]")
            cursor = child.end
        parts.extend(run.text for run in runs[cursor : node.end])

    emit(root)
    return "".join(parts)


def render_runs(runs: Sequence[Run]) -> str:
    """Render runs as text with properly nested toggle tags."""

    return render_tree(pack_tags(runs), runs)
