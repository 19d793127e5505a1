"""Nested list markup from a flat run of depth-tagged list blocks.

Draft stores list items as consecutive blocks with a `depth` field rather
than as a tree. Each block is compared with the last block emitted at the
current level:

- a change of list type closes the open list and opens a new one at the
  same level, whatever the depth;
- deeper blocks of the same type are buffered and rendered as one nested
  list when the next block at the current level arrives (or the run ends);
- anything else is a sibling item.

A depth increase of any size nests exactly one level.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from draftbb.block import get_block_inner_markup, get_block_style, get_block_tag
from draftbb.entities import EntityTransform
from draftbb.errors import DraftBBListError
from draftbb.model import Block, BlockType, Entity
from draftbb.sections import HashtagConfig

logger = logging.getLogger("draftbb.lists")


def list_open_tag(block_type: str) -> str:
    tag = get_block_tag(block_type)
    if block_type == BlockType.ORDERED_LIST_ITEM:
        return f"[{tag}=1]\n"
    return f"[{tag}]\n"


def list_close_tag(block_type: str) -> str:
    return f"[/{get_block_tag(block_type)}]\n"


def _item_markup(
    block: Block,
    entity_map: Mapping[str, Entity],
    hashtag_config: HashtagConfig | None,
    custom_entity_transform: EntityTransform | None,
) -> str:
    style_start, style_end = get_block_style(block.data)
    inner = get_block_inner_markup(block, entity_map, hashtag_config, custom_entity_transform)
    return f"[*]{style_start}{inner}{style_end}\n"


def get_list_markup(
    list_blocks: Sequence[Block],
    entity_map: Mapping[str, Entity],
    hashtag_config: HashtagConfig | None = None,
    directional: bool = False,
    custom_entity_transform: EntityTransform | None = None,
) -> str:
    """Render a contiguous run of list-item blocks as (possibly nested) list markup."""

    if not list_blocks:
        raise DraftBBListError("Cannot render list markup for an empty run of list blocks.")

    out: list[str] = []
    nested: list[Block] = []
    previous: Block | None = None

    def flush_nested() -> None:
        if not nested:
            return
        out.append(
            get_list_markup(
                nested, entity_map, hashtag_config, directional, custom_entity_transform
            )
        )
        nested.clear()

    for block in list_blocks:
        if previous is None:
            out.append(list_open_tag(block.type))
        elif block.type != previous.type:
            flush_nested()
            out.append(list_close_tag(previous.type))
            out.append(list_open_tag(block.type))
        elif block.depth > previous.depth:
            if block.depth - previous.depth > 1 and not nested:
                logger.debug(
                    "List depth jumps from %d to %d; nesting one level",
                    previous.depth,
                    block.depth,
                )
            nested.append(block)
            continue
        else:
            flush_nested()

        out.append(_item_markup(block, entity_map, hashtag_config, custom_entity_transform))
        previous = block

    flush_nested()
    assert previous is not None
    out.append(list_close_tag(previous.type))
    return "".join(out)
