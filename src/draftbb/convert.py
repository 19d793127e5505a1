"""Top-level conversion of a Draft document to BBCode."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from draftbb.block import get_block_markup
from draftbb.entities import EntityTransform
from draftbb.lists import get_list_markup
from draftbb.model import Block, Document, is_list
from draftbb.sections import HashtagConfig


def _as_document(document: Document | Mapping[str, Any] | None) -> Document | None:
    if document is None or isinstance(document, Document):
        return document
    return Document.from_raw(document)


def convert(
    document: Document | Mapping[str, Any] | None,
    hashtag_config: HashtagConfig | Mapping[str, Any] | None = None,
    directional: bool = False,
    custom_entity_transform: EntityTransform | None = None,
) -> str:
    """Convert a Draft document (or raw content mapping) to BBCode.

    Consecutive list-item blocks are rendered together as one (possibly
    nested) list; every other block is rendered on its own. Hashtag detection
    is off unless `hashtag_config` is given.
    """

    doc = _as_document(document)
    if doc is None or not doc.blocks:
        return ""

    hashtags = HashtagConfig.coerce(hashtag_config)
    out: list[str] = []
    list_blocks: list[Block] = []

    def flush_list() -> None:
        if not list_blocks:
            return
        out.append(
            get_list_markup(
                list_blocks, doc.entity_map, hashtags, directional, custom_entity_transform
            )
        )
        list_blocks.clear()

    for block in doc.blocks:
        if is_list(block.type):
            list_blocks.append(block)
            continue
        flush_list()
        out.append(
            get_block_markup(block, doc.entity_map, hashtags, directional, custom_entity_transform)
        )

    flush_list()
    return "".join(out)
