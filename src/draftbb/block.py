"""Markup for a single (non-list) block and for a block's inline content."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from draftbb.entities import EntityTransform, get_entity_markup
from draftbb.model import Block, BlockType, Entity
from draftbb.runs import get_runs, segment_styles
from draftbb.sections import HashtagConfig, Section, SectionKind, get_sections
from draftbb.styles import VALUE_STYLES, StyleTable, add_style_property_markup, build_style_table
from draftbb.tagtree import render_runs

BLOCK_TAGS: Mapping[str, str] = MappingProxyType(
    {
        BlockType.UNSTYLED: "",
        BlockType.HEADER_ONE: "h1",
        BlockType.HEADER_TWO: "h2",
        BlockType.HEADER_THREE: "h3",
        BlockType.HEADER_FOUR: "h4",
        BlockType.HEADER_FIVE: "h5",
        BlockType.HEADER_SIX: "h6",
        BlockType.UNORDERED_LIST_ITEM: "list",
        BlockType.ORDERED_LIST_ITEM: "list",
        BlockType.BLOCKQUOTE: "quote",
    }
)


def get_block_tag(block_type: str | None) -> str:
    """Return the BBCode tag for a block type ("" when the type has no tag)."""

    if not block_type:
        return ""
    return BLOCK_TAGS.get(block_type, "")


def get_block_style(data: Mapping[str, Any] | None) -> tuple[str, str]:
    """Return `(start, end)` wrapper markup for block-level data such as alignment."""

    start = ""
    end = ""
    for key, value in (data or {}).items():
        if not value:
            continue
        if key == "text-align":
            start += f"[align={value}]"
            end = f"[/align]{end}"
    return start, end


def is_atomic_entity_block(block: Block) -> bool:
    return block.type == BlockType.ATOMIC or (bool(block.entity_ranges) and not block.text)


def _section_markup(
    block: Block,
    table: StyleTable,
    entity_map: Mapping[str, Entity],
    section: Section,
    custom_entity_transform: EntityTransform | None,
) -> str:
    parts: list[str] = []
    for seg in segment_styles(table, VALUE_STYLES, section.start, section.end):
        runs = get_runs(block.text, table, seg.start, seg.end)
        parts.append(add_style_property_markup(seg.styles, render_runs(runs)))
    text = "".join(parts)

    if section.kind is SectionKind.ENTITY and section.entity_key is not None:
        return get_entity_markup(entity_map, section.entity_key, text, custom_entity_transform)
    if section.kind is SectionKind.HASHTAG:
        return f"[tag]{text}[/tag]"
    return text


def get_block_inner_markup(
    block: Block,
    entity_map: Mapping[str, Entity],
    hashtag_config: HashtagConfig | None = None,
    custom_entity_transform: EntityTransform | None = None,
) -> str:
    """Render a block's text with inline styles, entities and hashtags."""

    table = build_style_table(len(block.text), block.inline_style_ranges)
    return "".join(
        _section_markup(block, table, entity_map, section, custom_entity_transform)
        for section in get_sections(block, hashtag_config)
    )


def get_block_markup(
    block: Block,
    entity_map: Mapping[str, Entity],
    hashtag_config: HashtagConfig | None = None,
    directional: bool = False,
    custom_entity_transform: EntityTransform | None = None,
) -> str:
    """Render one block, terminated by a newline.

    `directional` is accepted for API compatibility and does not change output.
    """

    if is_atomic_entity_block(block):
        if not block.entity_ranges:
            return "\n"
        key = block.entity_ranges[0].key
        return get_entity_markup(entity_map, key, "", custom_entity_transform) + "\n"

    tag = get_block_tag(block.type)
    style_start, style_end = get_block_style(block.data)
    inner = get_block_inner_markup(block, entity_map, hashtag_config, custom_entity_transform)
    if tag:
        return f"[{tag}]{style_start}{inner}{style_end}[/{tag}]\n"
    return f"{style_start}{inner}{style_end}\n"
