"""Split a block's text into entity, hashtag and plain sections."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from draftbb.model import Block

logger = logging.getLogger("draftbb.sections")

DEFAULT_TRIGGER = "#"
DEFAULT_SEPARATOR = " "


class SectionKind(StrEnum):
    PLAIN = "PLAIN"
    ENTITY = "ENTITY"
    HASHTAG = "HASHTAG"


@dataclass(frozen=True, slots=True)
class HashtagConfig:
    trigger: str = DEFAULT_TRIGGER
    separator: str = DEFAULT_SEPARATOR

    @classmethod
    def coerce(cls, value: HashtagConfig | Mapping[str, Any] | None) -> HashtagConfig | None:
        """Accept a HashtagConfig, a `{trigger, separator}` mapping, or None (disabled)."""

        if value is None or isinstance(value, HashtagConfig):
            return value
        return cls(
            trigger=value.get("trigger") or DEFAULT_TRIGGER,
            separator=value.get("separator") or DEFAULT_SEPARATOR,
        )


@dataclass(frozen=True, slots=True)
class Section:
    start: int
    end: int
    kind: SectionKind = SectionKind.PLAIN
    entity_key: str | None = None


@dataclass(frozen=True, slots=True)
class _Match:
    offset: int
    length: int
    kind: SectionKind
    entity_key: str | None = None


def get_hashtag_ranges(text: str, config: HashtagConfig | None) -> list[tuple[int, int]]:
    """Return `(offset, length)` for each hashtag in `text`, trigger included.

    A hashtag starts at the beginning of the text or right after a separator,
    and runs up to the next separator (or the end of the text).
    """

    if config is None:
        return []

    trigger = config.trigger or DEFAULT_TRIGGER
    separator = config.separator or DEFAULT_SEPARATOR
    marker = separator + trigger

    ranges: list[tuple[int, int]] = []
    if text.startswith(trigger):
        start = 0
    else:
        found = text.find(marker)
        start = found + len(separator) if found >= 0 else -1

    while start >= 0:
        body_start = start + len(trigger)
        end = text.find(separator, body_start)
        if end < 0:
            end = len(text)
        if end > body_start:
            ranges.append((start, end - start))
        found = text.find(marker, body_start)
        start = found + len(separator) if found >= 0 else -1

    return ranges


def get_sections(block: Block, config: HashtagConfig | None) -> list[Section]:
    """Partition `block.text` into contiguous sections covering every offset."""

    matches = [
        _Match(r.offset, r.length, SectionKind.ENTITY, r.key) for r in block.entity_ranges
    ]
    matches.extend(
        _Match(offset, length, SectionKind.HASHTAG)
        for offset, length in get_hashtag_ranges(block.text, config)
    )
    # Stable: entity ranges win over hashtags starting at the same offset.
    matches.sort(key=lambda m: m.offset)

    sections: list[Section] = []
    last = 0
    text_len = len(block.text)
    for m in matches:
        if m.offset < last or m.length <= 0 or m.offset >= text_len:
            logger.debug(
                "Dropping %s range at %d (length %d) in block %r",
                m.kind,
                m.offset,
                m.length,
                block.key,
            )
            continue
        if m.offset > last:
            sections.append(Section(start=last, end=m.offset))
        end = min(m.offset + m.length, text_len)
        sections.append(Section(start=m.offset, end=end, kind=m.kind, entity_key=m.entity_key))
        last = end

    if last < text_len:
        sections.append(Section(start=last, end=text_len))
    return sections
