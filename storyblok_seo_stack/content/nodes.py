# -*- coding: utf-8 -*-
"""
Content Nodes
=============
Typed representation of a Storyblok content tree.

The raw JSON body of a story is parsed into four node kinds:
  - TypedComponent: a mapping with a "component" key (whatever its value)
  - PlainObject:    any other mapping
  - ListNode:       an ordered sequence of nodes
  - Scalar:         string / number / bool / null

Mapping nodes keep a reference to their raw dict so that field values
needing the original structure (rich text documents) can be rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from storyblok_seo_stack.errors import ContentTreeError

# Storyblok nests blocks a handful of levels deep; anything beyond this is
# treated as malformed (and catches self-referencing structures).
MAX_DEPTH = 200


@dataclass
class Scalar:
    value: Any = None


@dataclass
class ListNode:
    items: list["ContentNode"] = field(default_factory=list)


@dataclass
class PlainObject:
    fields: dict[str, "ContentNode"] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class TypedComponent:
    component: Any
    fields: dict[str, "ContentNode"] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


ContentNode = Union[TypedComponent, PlainObject, ListNode, Scalar]
MappingNode = (TypedComponent, PlainObject)


def parse_node(raw: Any, _depth: int = 0) -> ContentNode:
    """
    Parse a raw JSON value into a ContentNode.

    Field order of mappings is preserved, so traversal follows the order
    in which Storyblok returned the fields.

    Raises:
        ContentTreeError: If the tree is nested deeper than MAX_DEPTH.
    """
    if _depth > MAX_DEPTH:
        raise ContentTreeError(
            f"Content tree exceeds the maximum depth of {MAX_DEPTH} (cyclic content?)"
        )

    if isinstance(raw, dict):
        typed = "component" in raw
        fields = {
            key: parse_node(value, _depth + 1)
            for key, value in raw.items()
            if not (typed and key == "component")
        }
        if typed:
            return TypedComponent(component=raw["component"], fields=fields, raw=raw)
        return PlainObject(fields=fields, raw=raw)

    if isinstance(raw, (list, tuple)):
        return ListNode(items=[parse_node(item, _depth + 1) for item in raw])

    return Scalar(value=raw)
