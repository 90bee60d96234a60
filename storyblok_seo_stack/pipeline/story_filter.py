# -*- coding: utf-8 -*-
"""
Story Filter
============
Decides which stories of a space are processed.

  - Folders are never processed.
  - A non-empty only-list is the final arbiter: a story is processed iff
    its full slug is listed, regardless of content type or skip-list.
  - Otherwise a story is processed iff its content type is allowed and its
    full slug is not in the skip-list.
"""

from dataclasses import dataclass
from typing import Iterable

from storyblok_seo_stack.config.settings import RunConfig
from storyblok_seo_stack.models import StoryStub


@dataclass(frozen=True)
class StoryFilter:
    content_types: frozenset[str]
    skip_stories: frozenset[str] = frozenset()
    only_stories: frozenset[str] = frozenset()

    @classmethod
    def from_run_config(cls, run: RunConfig) -> "StoryFilter":
        return cls(
            content_types=frozenset(run.content_types),
            skip_stories=frozenset(run.skip_stories),
            only_stories=frozenset(run.only_stories),
        )

    def includes(self, story: StoryStub) -> bool:
        if story.is_folder:
            return False
        if self.only_stories:
            return story.full_slug in self.only_stories
        return (
            story.content_type in self.content_types
            and story.full_slug not in self.skip_stories
        )

    def apply(self, stories: Iterable[StoryStub]) -> list[StoryStub]:
        return [story for story in stories if self.includes(story)]
