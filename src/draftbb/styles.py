"""Per-character inline style tables.

A block's inline style ranges are expanded into one array per style kind,
indexed by character offset. Toggle kinds hold booleans; value kinds hold the
raw value carried in the style name (`color-red` -> "red") or None.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from draftbb.model import StyleRange


class StyleKind(StrEnum):
    BOLD = "BOLD"
    ITALIC = "ITALIC"
    UNDERLINE = "UNDERLINE"
    STRIKETHROUGH = "STRIKETHROUGH"
    CODE = "CODE"
    SUPERSCRIPT = "SUPERSCRIPT"
    SUBSCRIPT = "SUBSCRIPT"
    COLOR = "COLOR"
    BGCOLOR = "BGCOLOR"
    FONTSIZE = "FONTSIZE"
    FONTFAMILY = "FONTFAMILY"


TOGGLE_STYLES: tuple[StyleKind, ...] = (
    StyleKind.BOLD,
    StyleKind.ITALIC,
    StyleKind.UNDERLINE,
    StyleKind.STRIKETHROUGH,
    StyleKind.CODE,
    StyleKind.SUPERSCRIPT,
    StyleKind.SUBSCRIPT,
)

# Outermost to innermost wrapping order.
VALUE_STYLES: tuple[StyleKind, ...] = (
    StyleKind.COLOR,
    StyleKind.BGCOLOR,
    StyleKind.FONTSIZE,
    StyleKind.FONTFAMILY,
)

TOGGLE_TAGS: Mapping[StyleKind, str] = MappingProxyType(
    {
        StyleKind.BOLD: "b",
        StyleKind.ITALIC: "i",
        StyleKind.UNDERLINE: "u",
        StyleKind.STRIKETHROUGH: "s",
        StyleKind.CODE: "code",
        StyleKind.SUPERSCRIPT: "sup",
        StyleKind.SUBSCRIPT: "sub",
    }
)

VALUE_TAGS: Mapping[StyleKind, str] = MappingProxyType(
    {
        StyleKind.COLOR: "color",
        StyleKind.BGCOLOR: "bgcolor",
        StyleKind.FONTSIZE: "size",
        StyleKind.FONTFAMILY: "font",
    }
)

# Style-name prefixes carrying a value.
_VALUE_PREFIXES: tuple[tuple[str, StyleKind], ...] = (
    ("color-", StyleKind.COLOR),
    ("bgcolor-", StyleKind.BGCOLOR),
    ("fontsize-", StyleKind.FONTSIZE),
    ("fontfamily-", StyleKind.FONTFAMILY),
)

_TOGGLE_NAMES = frozenset(str(kind) for kind in TOGGLE_STYLES)


@dataclass(frozen=True, slots=True)
class StyleTable:
    length: int
    columns: Mapping[StyleKind, tuple[Any, ...]]

    def value(self, kind: StyleKind, offset: int) -> Any:
        column = self.columns.get(kind)
        if column is None or not 0 <= offset < len(column):
            return None
        return column[offset]


def parse_style_name(style: str) -> tuple[StyleKind, Any] | None:
    """Map a raw style name to (kind, value); None for names outside the catalog."""

    for prefix, kind in _VALUE_PREFIXES:
        if style.startswith(prefix):
            return kind, style[len(prefix) :]
    if style in _TOGGLE_NAMES:
        return StyleKind(style), True
    return None


def build_style_table(text_length: int, ranges: Iterable[StyleRange]) -> StyleTable:
    """Expand inline style ranges into per-offset columns for a block of `text_length`."""

    columns: dict[StyleKind, list[Any]] = {kind: [None] * text_length for kind in StyleKind}
    for kind in TOGGLE_STYLES:
        columns[kind] = [False] * text_length

    for r in ranges:
        parsed = parse_style_name(r.style)
        if parsed is None:
            continue
        kind, value = parsed
        column = columns[kind]
        for i in range(max(0, r.offset), min(text_length, r.offset + r.length)):
            # Toggles only ever switch on; value kinds are last-write-wins.
            column[i] = value

    return StyleTable(
        length=text_length,
        columns=MappingProxyType({kind: tuple(col) for kind, col in columns.items()}),
    )


def styles_at_offset(table: StyleTable, offset: int) -> dict[StyleKind, Any]:
    """Return the styles active at `offset` (value kinds first, falsy entries omitted)."""

    styles: dict[StyleKind, Any] = {}
    for kind in (*VALUE_STYLES, *TOGGLE_STYLES):
        value = table.value(kind, offset)
        if value:
            styles[kind] = True if kind in TOGGLE_TAGS else value
    return styles


def same_style_as_previous(table: StyleTable, styles: Iterable[StyleKind], index: int) -> bool:
    """True if every style in `styles` has the same value at `index` and `index - 1`.

    Offset 0 is never "same as previous", and neither is any offset past the end.
    """

    if not 0 < index < table.length:
        return False
    return all(table.value(kind, index) == table.value(kind, index - 1) for kind in styles)


def add_style_property_markup(styles: Mapping[str, Any] | None, text: str) -> str:
    """Wrap `text` in color/bgcolor/size/font tags for the value styles present."""

    if not styles:
        return text

    start = ""
    end = ""
    for kind in VALUE_STYLES:
        value = styles.get(kind)
        if not value:
            continue
        tag = VALUE_TAGS[kind]
        start += f"[{tag}={value}]"
        end = f"[/{tag}]{end}"
    return f"{start}{text}{end}"
