from __future__ import annotations

from draftbb.entities import get_entity_markup
from draftbb.model import Entity, EntityType


def _map(*entities: Entity) -> dict[str, Entity]:
    return {str(i): entity for i, entity in enumerate(entities)}


def test_link_with_distinct_text() -> None:
    entities = _map(Entity(EntityType.LINK, data={"url": "https://a.test"}))
    assert get_entity_markup(entities, "0", "site") == "[url=https://a.test]site[/url]"


def test_link_whose_text_is_the_url() -> None:
    entities = _map(Entity(EntityType.LINK, data={"url": "https://a.test"}))
    assert get_entity_markup(entities, 0, "https://a.test") == "[url]https://a.test[/url]"


def test_image_without_dimensions() -> None:
    entities = _map(Entity(EntityType.IMAGE, data={"src": "cat.png"}))
    assert get_entity_markup(entities, "0", "") == "[img]cat.png[/img]"


def test_image_with_partial_dimensions_uses_auto() -> None:
    entities = _map(
        Entity(EntityType.IMAGE, data={"src": "cat.png", "width": 100}),
        Entity(EntityType.IMAGE, data={"src": "dog.png", "height": "50"}),
        Entity(EntityType.IMAGE, data={"src": "cow.png", "width": 10, "height": 20}),
    )
    assert get_entity_markup(entities, "0", "") == "[img=100,auto]cat.png[/img]"
    assert get_entity_markup(entities, "1", "") == "[img=auto,50]dog.png[/img]"
    assert get_entity_markup(entities, "2", "") == "[img=10,20]cow.png[/img]"


def test_image_alignment_wraps_in_float() -> None:
    entities = _map(Entity(EntityType.IMAGE, data={"src": "a.png", "alignment": "left"}))
    assert get_entity_markup(entities, "0", "") == "[float=left][img]a.png[/img][/float]"


def test_unhandled_entity_type_renders_text() -> None:
    entities = _map(Entity(EntityType.MENTION, data={"url": "u"}))
    assert get_entity_markup(entities, "0", "@bob") == "@bob"


def test_missing_entity_renders_text() -> None:
    assert get_entity_markup({}, "9", "plain") == "plain"


def test_custom_transform_overrides_known_and_unknown_types() -> None:
    entities = _map(
        Entity(EntityType.LINK, data={"url": "u"}),
        Entity(EntityType.MENTION, data={"name": "bob"}),
    )

    def transform(entity: Entity | None, text: str) -> str | None:
        assert entity is not None
        return f"[{entity.type.lower()}]{text}[/{entity.type.lower()}]"

    assert get_entity_markup(entities, "0", "x", transform) == "[link]x[/link]"
    assert get_entity_markup(entities, "1", "@bob", transform) == "[mention]@bob[/mention]"


def test_custom_transform_falsy_result_falls_through() -> None:
    entities = _map(Entity(EntityType.LINK, data={"url": "u"}))
    seen: list[tuple[Entity | None, str]] = []

    def transform(entity: Entity | None, text: str) -> str | None:
        seen.append((entity, text))
        return None

    assert get_entity_markup(entities, "0", "x", transform) == "[url=u]x[/url]"
    assert seen == [(entities["0"], "x")]
    assert get_entity_markup(entities, "0", "x", lambda e, t: "") == "[url=u]x[/url]"


def test_non_callable_transform_is_ignored() -> None:
    entities = _map(Entity(EntityType.LINK, data={"url": "u"}))
    markup = get_entity_markup(entities, "0", "x", "nope")  # type: ignore[arg-type]
    assert markup == "[url=u]x[/url]"


def test_missing_url_and_src_render_empty() -> None:
    entities = _map(Entity(EntityType.LINK), Entity(EntityType.IMAGE, data={"width": 5}))
    assert get_entity_markup(entities, "0", "x") == "[url=]x[/url]"
    assert get_entity_markup(entities, "1", "") == "[img=5,auto][/img]"
