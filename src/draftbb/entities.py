"""Entity markup: links, images, and caller-supplied overrides."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from draftbb.model import Entity, EntityType, entity_key

logger = logging.getLogger("draftbb.entities")

EntityTransform = Callable[[Entity | None, str], str | None]


def _link_markup(data: Mapping[str, Any], text: str) -> str:
    url = data.get("url", "")
    if url == text:
        return f"[url]{url}[/url]"
    return f"[url={url}]{text}[/url]"


def _image_markup(data: Mapping[str, Any], text: str) -> str:
    width = data.get("width")
    height = data.get("height")
    arg = ""
    if width or height:
        arg = f"={width or 'auto'},{height or 'auto'}"
    markup = f"[img{arg}]{data.get('src', '')}[/img]"
    alignment = data.get("alignment")
    if alignment:
        return f"[float={alignment}]{markup}[/float]"
    return markup


_RENDERERS: Mapping[str, Callable[[Mapping[str, Any], str], str]] = MappingProxyType(
    {
        EntityType.LINK: _link_markup,
        EntityType.IMAGE: _image_markup,
    }
)


def get_entity_markup(
    entity_map: Mapping[str, Entity],
    key: object,
    text: str,
    custom_entity_transform: EntityTransform | None = None,
) -> str:
    """Return markup for the entity at `key` covering `text`.

    A callable `custom_entity_transform` returning a non-empty string overrides
    everything else, including unknown entity types.
    """

    entity = entity_map.get(entity_key(key))
    if callable(custom_entity_transform):
        markup = custom_entity_transform(entity, text)
        if markup:
            return markup

    if entity is None:
        logger.debug("No entity for key %r; rendering covered text", key)
        return text

    renderer = _RENDERERS.get(entity.type)
    if renderer is None:
        logger.debug("Unhandled entity type %r; rendering covered text", entity.type)
        return text
    return renderer(entity.data, text)
