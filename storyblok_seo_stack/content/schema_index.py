# -*- coding: utf-8 -*-
"""
Schema Index
============
Name-keyed lookup from component name to its field type map, built once
per run from the Storyblok component catalog.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from storyblok_seo_stack.errors import SchemaConsistencyError
from storyblok_seo_stack.models import ComponentDefinition, FieldType

logger = logging.getLogger("storyblok.schema")


@dataclass(frozen=True)
class ComponentSchema:
    name: str
    fields: dict[str, FieldType] = field(default_factory=dict)

    def field_type(self, field_name: str) -> Optional[FieldType]:
        return self.fields.get(field_name)


class SchemaIndex:
    """
    Read-only component lookup.

    Duplicate component names are resolved last-wins; a warning is logged
    because the catalog is expected to hold unique names.
    """

    def __init__(self, schemas: dict[str, ComponentSchema]):
        self._schemas = dict(schemas)

    @classmethod
    def from_definitions(cls, definitions: Iterable[ComponentDefinition]) -> "SchemaIndex":
        schemas: dict[str, ComponentSchema] = {}
        for definition in definitions:
            if definition.name in schemas:
                logger.warning(
                    "Duplicate component definition '%s' — using the last one.",
                    definition.name,
                )
            schemas[definition.name] = ComponentSchema(
                name=definition.name, fields=definition.field_types()
            )
        logger.debug("Schema index built with %d components", len(schemas))
        return cls(schemas)

    def resolve(self, name: Any) -> Optional[ComponentSchema]:
        """Exact-match lookup. Returns None for unknown or non-string names."""
        if not isinstance(name, str):
            return None
        return self._schemas.get(name)

    def require(self, name: Any) -> ComponentSchema:
        """Lookup that raises SchemaConsistencyError for unknown components."""
        schema = self.resolve(name)
        if schema is None:
            raise SchemaConsistencyError(name)
        return schema

    def __contains__(self, name: str) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
