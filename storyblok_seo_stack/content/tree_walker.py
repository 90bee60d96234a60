# -*- coding: utf-8 -*-
"""
Tree Walker
===========
Collects the human-readable text of a story's content tree.

Traversal is depth-first pre-order, following each mapping's field order.
For every field of a typed component two independent things happen:
  1. If the schema declares the field as extractable, its text is appended.
  2. If the value is itself a list or mapping, it is walked recursively.

A rich text field therefore contributes its rendered text (step 1) and
any components embedded in the document (step 2); embedded components are
not part of the rendered HTML, so nothing is collected twice.
"""

import logging
from typing import Any, Callable, Optional

from storyblok_seo_stack.content.nodes import (
    ContentNode,
    ListNode,
    MappingNode,
    Scalar,
    TypedComponent,
    parse_node,
)
from storyblok_seo_stack.content.richtext import richtext_to_text
from storyblok_seo_stack.content.schema_index import SchemaIndex
from storyblok_seo_stack.content.text_aggregator import TextAggregator
from storyblok_seo_stack.models import FieldType

logger = logging.getLogger("storyblok.walker")


# ---------------------------------------------------------------------------
# Field extractors, one per extractable FieldType
# ---------------------------------------------------------------------------


def _extract_plain(node: ContentNode, raw: Any) -> Optional[str]:
    if isinstance(node, Scalar) and isinstance(node.value, str) and node.value:
        return node.value
    return None


def _extract_richtext(node: ContentNode, raw: Any) -> Optional[str]:
    if isinstance(node, MappingNode) and isinstance(raw, dict):
        return richtext_to_text(raw) or None
    return None


EXTRACTORS: dict[FieldType, Callable[[ContentNode, Any], Optional[str]]] = {
    FieldType.TEXT: _extract_plain,
    FieldType.TEXTAREA: _extract_plain,
    FieldType.RICHTEXT: _extract_richtext,
}


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def walk(node: ContentNode, schema_index: SchemaIndex, aggregator: TextAggregator) -> None:
    """
    Append the extractable text below ``node`` to ``aggregator``.

    Raises:
        SchemaConsistencyError: If a typed component is missing from the index.
    """
    if isinstance(node, ListNode):
        for item in node.items:
            walk(item, schema_index, aggregator)
        return

    if not isinstance(node, MappingNode):
        return

    schema = None
    if isinstance(node, TypedComponent):
        schema = schema_index.require(node.component)

    for name, child in node.fields.items():
        if schema is not None:
            extractor = EXTRACTORS.get(schema.field_type(name))
            if extractor is not None:
                text = extractor(child, node.raw.get(name))
                if text:
                    aggregator.append(text)
        walk(child, schema_index, aggregator)


def extract_text(content: Any, schema_index: SchemaIndex) -> str:
    """
    Parse a raw content tree and return its aggregated text.

    A fresh aggregator is used for every call.

    Raises:
        ContentTreeError: If the content tree is malformed.
        SchemaConsistencyError: If a component is missing from the index.
    """
    aggregator = TextAggregator()
    walk(parse_node(content), schema_index, aggregator)
    logger.debug("Extracted %d text fragments", len(aggregator))
    return aggregator.join()
