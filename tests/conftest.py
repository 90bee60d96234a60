from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import pytest

# Ensure the repository root is importable without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storyblok_seo_stack.agents.base_agent import BaseAgent
from storyblok_seo_stack.config.settings import RunConfig
from storyblok_seo_stack.content.schema_index import SchemaIndex
from storyblok_seo_stack.errors import GenerationFailure
from storyblok_seo_stack.models import (
    ComponentDefinition,
    GenerationResult,
    Story,
    StoryStub,
)


COMPONENTS = [
    {
        "name": "page",
        "schema": {
            "title": {"type": "text"},
            "body": {"type": "bloks"},
            "footer": {"type": "textarea"},
            "seo": {"type": "custom"},
        },
    },
    {
        "name": "hero",
        "schema": {
            "headline": {"type": "text"},
            "subline": {"type": "textarea"},
            "image": {"type": "asset"},
        },
    },
    {
        "name": "rich_section",
        "schema": {"text": {"type": "richtext"}},
    },
]


def richtext_doc(*paragraphs: str) -> dict:
    return {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": text}]}
            for text in paragraphs
        ],
    }


def page_content(description: object = "", **overrides) -> dict:
    content = {
        "_uid": "root",
        "component": "page",
        "title": "Welcome",
        "body": [
            {
                "_uid": "h1",
                "component": "hero",
                "headline": "Big headline",
                "subline": "Sub line",
                "image": {"filename": "https://a.storyblok.com/x.jpg", "alt": "An image"},
            },
            {
                "_uid": "r1",
                "component": "rich_section",
                "text": richtext_doc("Rich paragraph"),
            },
        ],
        "footer": "",
        "seo": {"plugin": "seo_metatags", "title": "", "description": description},
    }
    content.update(overrides)
    return content


def make_story(
    story_id: int,
    full_slug: str,
    content: Optional[dict] = None,
    content_type: str = "page",
    is_folder: bool = False,
) -> Story:
    return Story(
        id=story_id,
        name=full_slug.title(),
        slug=full_slug.rsplit("/", 1)[-1],
        full_slug=full_slug,
        content_type=content_type,
        is_folder=is_folder,
        content=content if content is not None else page_content(),
        uuid=f"uuid-{story_id}",
    )


class FakeStoryblok:
    """In-memory stand-in for StoryblokService."""

    def __init__(self, stories: list[Story], components: Optional[list[dict]] = None):
        self.stories = {story.id: story for story in stories}
        self.components = [
            ComponentDefinition.model_validate(raw) for raw in (components or COMPONENTS)
        ]
        self.updates: list[tuple[Story, bool]] = []
        self.fetched: list[int] = []
        self.write_error: Optional[Exception] = None

    def list_stories(self) -> list[StoryStub]:
        return [StoryStub.model_validate(s.model_dump(exclude={"content"})) for s in self.stories.values()]

    def get_story(self, story_id: int) -> Story:
        self.fetched.append(story_id)
        return self.stories[story_id].model_copy(deep=True)

    def list_components(self) -> list[ComponentDefinition]:
        return list(self.components)

    def update_story(self, story: Story, publish: bool = False) -> dict:
        if self.write_error is not None:
            raise self.write_error
        self.updates.append((story, publish))
        self.stories[story.id] = story.model_copy(deep=True)
        return story.model_dump(mode="json")


class FakeAgent(BaseAgent):
    """Records calls and returns a canned description."""

    def __init__(
        self,
        text: str = "A generated description.",
        prompt_tokens: int = 100,
        completion_tokens: int = 20,
        fail_for: Optional[set[str]] = None,
    ):
        self.text = text
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.fail_for = fail_for or set()
        self.calls: list[dict] = []

    @property
    def agent_name(self) -> str:
        return "Fake Agent"

    def generate(self, text, language, max_tokens, max_characters) -> GenerationResult:
        self.calls.append(
            {
                "text": text,
                "language": language,
                "max_tokens": max_tokens,
                "max_characters": max_characters,
            }
        )
        if any(marker in text for marker in self.fail_for):
            raise GenerationFailure("backend unavailable")
        return GenerationResult(
            text=self.text,
            prompt_tokens=self.prompt_tokens,
            completion_tokens=self.completion_tokens,
        )


@pytest.fixture()
def schema_index() -> SchemaIndex:
    return SchemaIndex.from_definitions(
        ComponentDefinition.model_validate(raw) for raw in COMPONENTS
    )


@pytest.fixture()
def run_config() -> RunConfig:
    return RunConfig(language="en", target_field="seo.description")
