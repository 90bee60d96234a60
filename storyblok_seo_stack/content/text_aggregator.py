# -*- coding: utf-8 -*-
"""Ordered accumulator for text extracted from one story."""

from typing import Iterator

SEPARATOR = "\n\n"


class TextAggregator:
    """Append-only list of text fragments, joined with a blank line."""

    def __init__(self):
        self._parts: list[str] = []

    def append(self, text: str) -> None:
        self._parts.append(text)

    def join(self) -> str:
        return SEPARATOR.join(self._parts)

    def reset(self) -> None:
        self._parts.clear()

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parts)
