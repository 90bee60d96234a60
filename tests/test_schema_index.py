from __future__ import annotations

import logging

import pytest

from storyblok_seo_stack.content.schema_index import SchemaIndex
from storyblok_seo_stack.errors import SchemaConsistencyError
from storyblok_seo_stack.models import ComponentDefinition, FieldType


def test_resolve_is_exact_match(schema_index) -> None:
    hero = schema_index.resolve("hero")
    assert hero is not None
    assert hero.field_type("headline") is FieldType.TEXT
    assert hero.field_type("subline") is FieldType.TEXTAREA
    assert hero.field_type("image") is FieldType.OTHER
    assert hero.field_type("missing") is None
    assert schema_index.resolve("Hero") is None
    assert schema_index.resolve("her") is None


def test_require_raises_for_unknown_component(schema_index) -> None:
    with pytest.raises(SchemaConsistencyError) as excinfo:
        schema_index.require("gallery")
    assert excinfo.value.component == "gallery"


def test_duplicate_names_last_wins_with_warning(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="storyblok.schema")
    index = SchemaIndex.from_definitions(
        [
            ComponentDefinition(name="teaser", schema={"title": {"type": "text"}}),
            ComponentDefinition(name="teaser", schema={"title": {"type": "richtext"}}),
        ]
    )
    assert len(index) == 1
    assert index.require("teaser").field_type("title") is FieldType.RICHTEXT
    assert "Duplicate component definition 'teaser'" in caplog.text


def test_field_definitions_without_type_fail_closed() -> None:
    definition = ComponentDefinition.model_validate(
        {"name": "odd", "schema": {"a": {}, "b": {"type": None}, "c": "broken"}}
    )
    assert definition.field_types() == {"a": FieldType.OTHER, "b": FieldType.OTHER}
