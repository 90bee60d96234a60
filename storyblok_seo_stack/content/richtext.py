# -*- coding: utf-8 -*-
"""
Rich Text Conversion
====================
Turns a Storyblok rich text document (a ProseMirror-style JSON tree) into
plain text in two steps:
  1. render_richtext(): JSON document → HTML
  2. html_to_text():    HTML → plain text, one line per block, blank lines
                        between paragraphs, no wrapping

Embedded components ("blok" nodes) are not rendered; their text is picked
up by the tree walker when it descends into the document.
"""

import html
import logging
import re
from typing import Any

from bs4 import BeautifulSoup

logger = logging.getLogger("storyblok.richtext")

_WHITESPACE = re.compile(r"\s+")

# Node type → HTML tag for plain block/inline wrappers
_NODE_TAGS = {
    "paragraph": "p",
    "blockquote": "blockquote",
    "bullet_list": "ul",
    "ordered_list": "ol",
    "list_item": "li",
    "table": "table",
    "tableRow": "tr",
    "tableCell": "td",
    "tableHeader": "th",
}

# Mark type → HTML tag
_MARK_TAGS = {
    "bold": "strong",
    "italic": "em",
    "strike": "s",
    "underline": "u",
    "code": "code",
    "superscript": "sup",
    "subscript": "sub",
    "highlight": "mark",
    "styled": "span",
    "textStyle": "span",
    "anchor": "span",
}

_BLOCK_TAGS = [
    "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "li", "blockquote", "pre", "tr", "ul", "ol", "table",
]


# ---------------------------------------------------------------------------
# JSON → HTML
# ---------------------------------------------------------------------------


def _attr(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _attrs(item: dict) -> dict:
    attrs = item.get("attrs")
    return attrs if isinstance(attrs, dict) else {}


def _render_marks(text: str, marks: Any) -> str:
    if not isinstance(marks, list):
        return text
    for mark in marks:
        if not isinstance(mark, dict):
            continue
        mark_type = mark.get("type")
        if mark_type == "link":
            href = _attrs(mark).get("href") or ""
            text = f'<a href="{_attr(href)}">{text}</a>'
        elif mark_type in _MARK_TAGS:
            tag = _MARK_TAGS[mark_type]
            text = f"<{tag}>{text}</{tag}>"
    return text


def _render_children(node: dict) -> str:
    children = node.get("content")
    if not isinstance(children, list):
        return ""
    return "".join(_render_node(child) for child in children)


def _render_node(node: Any) -> str:
    if not isinstance(node, dict):
        return ""

    node_type = node.get("type")
    if not isinstance(node_type, str):
        return _render_children(node)
    attrs = _attrs(node)

    if node_type == "text":
        text = node.get("text")
        return _render_marks(html.escape("" if text is None else str(text)), node.get("marks"))
    if node_type == "doc":
        return _render_children(node)
    if node_type == "heading":
        level = attrs.get("level") or 1
        level = level if level in (1, 2, 3, 4, 5, 6) else 1
        return f"<h{level}>{_render_children(node)}</h{level}>"
    if node_type == "code_block":
        return f"<pre><code>{_render_children(node)}</code></pre>"
    if node_type == "hard_break":
        return "<br />"
    if node_type == "horizontal_rule":
        return "<hr />"
    if node_type == "image":
        return f'<img src="{_attr(attrs.get("src") or "")}" alt="{_attr(attrs.get("alt") or "")}" />'
    if node_type == "emoji":
        return _attr(attrs.get("emoji") or "")
    if node_type == "blok":
        return ""
    if node_type in _NODE_TAGS:
        tag = _NODE_TAGS[node_type]
        return f"<{tag}>{_render_children(node)}</{tag}>"

    logger.debug("Unknown rich text node type '%s' — rendering children only", node_type)
    return _render_children(node)


def render_richtext(document: dict) -> str:
    """Render a Storyblok rich text document to HTML."""
    return _render_node(document)


# ---------------------------------------------------------------------------
# HTML → plain text
# ---------------------------------------------------------------------------


def html_to_text(markup: str) -> str:
    """
    Strip markup, keeping one block per paragraph and collapsing whitespace.

    Line wrapping is never introduced; consecutive blank lines collapse to one.
    """
    soup = BeautifulSoup(markup, "html.parser")

    # Source whitespace is insignificant outside <pre>
    for string in soup.find_all(string=True):
        if string.find_parent("pre") is None:
            string.replace_with(_WHITESPACE.sub(" ", string))
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for cell in soup.find_all(["td", "th"]):
        cell.insert_after(" ")
    for block in soup.find_all(_BLOCK_TAGS):
        block.insert_before("\n\n")
        block.insert_after("\n\n")

    lines = [" ".join(line.split()) for line in soup.get_text().splitlines()]

    paragraphs: list[str] = []
    current: list[str] = []
    for line in lines:
        if line:
            current.append(line)
        elif current:
            paragraphs.append("\n".join(current))
            current = []
    if current:
        paragraphs.append("\n".join(current))

    return "\n\n".join(paragraphs)


def richtext_to_text(document: dict) -> str:
    """Convert a rich text document straight to plain text."""
    return html_to_text(render_richtext(document))
