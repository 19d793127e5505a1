"""Coalesce consecutive characters with identical styles into runs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from draftbb.styles import (
    TOGGLE_STYLES,
    TOGGLE_TAGS,
    StyleKind,
    StyleTable,
    same_style_as_previous,
    styles_at_offset,
)

_ESCAPES = {"[": "&#91;", "]": "&#93;"}

# Outermost first: when two tags cover exactly the same span, the earlier one
# wraps the later one.
TAG_NESTING_ORDER: tuple[str, ...] = ("sup", "sub", "code", "s", "b", "i", "u")


@dataclass(frozen=True, slots=True)
class Segment:
    start: int
    end: int
    styles: Mapping[StyleKind, Any]


@dataclass(frozen=True, slots=True)
class Run:
    start: int
    end: int
    text: str
    tags: frozenset[str]


def escape_text(text: str) -> str:
    """Replace literal brackets with numeric character references."""

    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def segment_styles(
    table: StyleTable, kinds: Sequence[StyleKind], start: int, end: int
) -> list[Segment]:
    """Split `[start, end)` wherever any style in `kinds` changes value.

    Each segment records the full style mapping at its first offset.
    """

    segments: list[Segment] = []
    seg_start = start
    for i in range(start, end):
        if i != start and same_style_as_previous(table, kinds, i):
            continue
        if i != start:
            segments.append(Segment(seg_start, i, styles_at_offset(table, seg_start)))
        seg_start = i
    if end > start:
        segments.append(Segment(seg_start, end, styles_at_offset(table, seg_start)))
    return segments


def get_runs(text: str, table: StyleTable, start: int, end: int) -> list[Run]:
    """Return toggle-style runs over `text[start:end]`, with run text escaped."""

    runs: list[Run] = []
    for seg in segment_styles(table, TOGGLE_STYLES, start, end):
        tags = frozenset(
            TOGGLE_TAGS[kind] for kind in TOGGLE_STYLES if seg.styles.get(kind)
        )
        runs.append(Run(seg.start, seg.end, escape_text(text[seg.start : seg.end]), tags))
    return runs
