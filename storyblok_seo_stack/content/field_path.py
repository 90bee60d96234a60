# -*- coding: utf-8 -*-
"""
Dot-notation access into a story's raw content.

"seo.description" addresses content["seo"]["description"]; numeric
segments index into lists ("body.0.headline").
"""

from typing import Any

MISSING = object()


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split(".") if segment]


def _step(container: Any, segment: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment, MISSING)
    if isinstance(container, list) and segment.isdigit():
        index = int(segment)
        return container[index] if index < len(container) else MISSING
    return MISSING


def get_path(content: Any, path: str, default: Any = MISSING) -> Any:
    """Return the value at ``path`` or ``default`` when any segment is absent."""
    current = content
    for segment in _segments(path):
        current = _step(current, segment)
        if current is MISSING:
            return default
    return current


def set_path(content: dict, path: str, value: Any) -> None:
    """
    Set the value at ``path``, creating intermediate dicts where missing.

    Raises:
        KeyError: If an intermediate segment exists but cannot hold children.
    """
    segments = _segments(path)
    if not segments:
        raise KeyError("Empty field path")

    current: Any = content
    for segment in segments[:-1]:
        child = _step(current, segment)
        if child is MISSING:
            if not isinstance(current, dict):
                raise KeyError(f"Cannot create '{segment}' in path '{path}'")
            child = current[segment] = {}
        elif not isinstance(child, (dict, list)):
            raise KeyError(f"'{segment}' in path '{path}' is not a container")
        current = child

    last = segments[-1]
    if isinstance(current, list) and last.isdigit() and int(last) < len(current):
        current[int(last)] = value
    elif isinstance(current, dict):
        current[last] = value
    else:
        raise KeyError(f"Cannot set '{last}' in path '{path}'")
