"""Immutable document model for Draft raw content.

Draft stores content as a list of blocks plus an entity map. Raw content uses
camelCase keys; the dataclasses here use snake_case and are built once per
conversion via `Document.from_raw`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from draftbb.errors import DraftBBInputError


class BlockType(StrEnum):
    UNSTYLED = "unstyled"
    HEADER_ONE = "header-one"
    HEADER_TWO = "header-two"
    HEADER_THREE = "header-three"
    HEADER_FOUR = "header-four"
    HEADER_FIVE = "header-five"
    HEADER_SIX = "header-six"
    UNORDERED_LIST_ITEM = "unordered-list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"
    BLOCKQUOTE = "blockquote"
    ATOMIC = "atomic"
    CODE_BLOCK = "code-block"


class EntityType(StrEnum):
    LINK = "LINK"
    IMAGE = "IMAGE"
    MENTION = "MENTION"
    EMBEDDED_LINK = "EMBEDDED_LINK"


LIST_BLOCK_TYPES = frozenset({BlockType.UNORDERED_LIST_ITEM, BlockType.ORDERED_LIST_ITEM})

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _empty() -> Mapping[str, Any]:
    return _EMPTY


def is_list(block_type: str) -> bool:
    return block_type in LIST_BLOCK_TYPES


@dataclass(frozen=True, slots=True)
class StyleRange:
    offset: int
    length: int
    style: str


@dataclass(frozen=True, slots=True)
class EntityRange:
    offset: int
    length: int
    key: str


@dataclass(frozen=True, slots=True)
class Entity:
    type: str
    mutability: str = "MUTABLE"
    data: Mapping[str, Any] = field(default_factory=_empty)


@dataclass(frozen=True, slots=True)
class Block:
    text: str = ""
    type: str = BlockType.UNSTYLED
    depth: int = 0
    data: Mapping[str, Any] = field(default_factory=_empty)
    inline_style_ranges: tuple[StyleRange, ...] = ()
    entity_ranges: tuple[EntityRange, ...] = ()
    key: str = ""


@dataclass(frozen=True, slots=True)
class Document:
    blocks: tuple[Block, ...] = ()
    entity_map: Mapping[str, Entity] = field(default_factory=_empty)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Document:
        """Build a Document from a Draft raw content mapping (`blocks` + `entityMap`)."""

        if not isinstance(raw, Mapping):
            raise DraftBBInputError(
                f"Expected raw content to be a mapping, got {type(raw).__name__}."
            )

        raw_blocks = raw.get("blocks") or []
        if not isinstance(raw_blocks, list | tuple):
            raise DraftBBInputError("Expected `blocks` to be a list.")

        raw_entities = raw.get("entityMap") or {}
        if isinstance(raw_entities, list | tuple):
            # Some serializers emit the entity map as a list indexed by key.
            raw_entities = dict(enumerate(raw_entities))
        if not isinstance(raw_entities, Mapping):
            raise DraftBBInputError("Expected `entityMap` to be a mapping.")

        blocks = tuple(_block_from_raw(b, index=i) for i, b in enumerate(raw_blocks))
        entities = {entity_key(k): _entity_from_raw(v) for k, v in raw_entities.items()}
        return cls(blocks=blocks, entity_map=MappingProxyType(entities))


def entity_key(key: object) -> str:
    return str(key)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    return _EMPTY


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _block_from_raw(raw: Any, *, index: int) -> Block:
    if not isinstance(raw, Mapping):
        raise DraftBBInputError(f"Expected blocks[{index}] to be a mapping.")

    style_ranges: list[StyleRange] = []
    for r in raw.get("inlineStyleRanges") or ():
        if not isinstance(r, Mapping) or not isinstance(r.get("style"), str):
            continue
        style_ranges.append(
            StyleRange(
                offset=_as_int(r.get("offset")),
                length=_as_int(r.get("length")),
                style=r["style"],
            )
        )

    entity_ranges: list[EntityRange] = []
    for r in raw.get("entityRanges") or ():
        if not isinstance(r, Mapping) or r.get("key") is None:
            continue
        entity_ranges.append(
            EntityRange(
                offset=_as_int(r.get("offset")),
                length=_as_int(r.get("length")),
                key=entity_key(r["key"]),
            )
        )

    text = raw.get("text")
    return Block(
        text=text if isinstance(text, str) else "",
        type=str(raw.get("type") or BlockType.UNSTYLED),
        depth=max(0, _as_int(raw.get("depth"))),
        data=_as_mapping(raw.get("data")),
        inline_style_ranges=tuple(style_ranges),
        entity_ranges=tuple(entity_ranges),
        key=str(raw.get("key") or ""),
    )


def _entity_from_raw(raw: Any) -> Entity:
    if not isinstance(raw, Mapping):
        return Entity(type="")
    return Entity(
        type=str(raw.get("type") or ""),
        mutability=str(raw.get("mutability") or "MUTABLE"),
        data=_as_mapping(raw.get("data")),
    )
