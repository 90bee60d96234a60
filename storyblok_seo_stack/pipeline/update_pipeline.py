# -*- coding: utf-8 -*-
"""
Update Pipeline
================
Generates meta descriptions for the stories of a space, one story at a time:

  1. Fetch story list, filter it, fetch the selected story bodies
  2. Fetch the component catalog and build the schema index
  3. Per story:
       guard target field → extract text → generate → write back

Per-story problems (missing/invalid target field, malformed content,
generation or write failures) are reported and the run continues with the
next story. A component missing from the catalog aborts the whole run
with SchemaConsistencyError.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from storyblok_seo_stack.agents.base_agent import BaseAgent
from storyblok_seo_stack.config.settings import RunConfig
from storyblok_seo_stack.content.field_path import MISSING, get_path, set_path
from storyblok_seo_stack.content.schema_index import SchemaIndex
from storyblok_seo_stack.content.tree_walker import extract_text
from storyblok_seo_stack.errors import (
    ContentTreeError,
    FieldNotFoundError,
    FieldTypeMismatchError,
    GenerationFailure,
    TargetFieldError,
    WriteFailure,
)
from storyblok_seo_stack.models import Story, StoryOutcome, StoryResult
from storyblok_seo_stack.pipeline.story_filter import StoryFilter
from storyblok_seo_stack.pipeline.usage import UsageAccountant
from storyblok_seo_stack.services.storyblok_service import StoryblokService

logger = logging.getLogger("storyblok.pipeline")


@dataclass
class RunReport:
    """Results of one pipeline run."""

    results: list[StoryResult] = field(default_factory=list)
    usage: UsageAccountant = field(default_factory=UsageAccountant)

    def count(self, outcome: StoryOutcome) -> int:
        return sum(1 for result in self.results if result.outcome == outcome)

    @property
    def failed(self) -> bool:
        return self.count(StoryOutcome.FAILED) > 0

    def summary(self) -> dict:
        return {
            "processed": len(self.results),
            **{outcome.value: self.count(outcome) for outcome in StoryOutcome},
        }


class UpdatePipeline:
    """
    Orchestrates fetching, filtering, generation and write-back.

    Usage:
        pipeline = UpdatePipeline(storyblok, agent, settings.run)
        report = pipeline.run()
    """

    def __init__(
        self,
        storyblok: StoryblokService,
        agent: BaseAgent,
        run_config: RunConfig,
        usage: Optional[UsageAccountant] = None,
    ):
        self.storyblok = storyblok
        self.agent = agent
        self.config = run_config
        self.usage = usage if usage is not None else UsageAccountant()
        self.story_filter = StoryFilter.from_run_config(run_config)

    def _verbose(self, text: str, level: int = 1) -> None:
        if self.config.verbose >= level:
            logger.info(text)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def fetch_stories(self) -> list[Story]:
        """List all stories, apply the filter and fetch the selected bodies."""
        logger.info("Fetching stories...")
        stubs = self.storyblok.list_stories()
        selected = self.story_filter.apply(stubs)
        logger.info("Selected %d of %d stories", len(selected), len(stubs))
        return [self.storyblok.get_story(stub.id) for stub in selected]

    def build_schema_index(self) -> SchemaIndex:
        logger.info("Fetching components...")
        return SchemaIndex.from_definitions(self.storyblok.list_components())

    # ------------------------------------------------------------------
    # Per-story steps
    # ------------------------------------------------------------------

    def check_target_field(self, story: Story) -> bool:
        """
        Check the target field before generating.

        Returns:
            True if a description should be generated, False if the field
            already holds text and overwriting is disabled.

        Raises:
            FieldNotFoundError: If the field path does not exist.
            FieldTypeMismatchError: If the field does not hold a string.
        """
        path = self.config.target_field
        existing = get_path(story.content, path)
        if existing is MISSING:
            raise FieldNotFoundError(path)
        if not isinstance(existing, str):
            raise FieldTypeMismatchError(path, type(existing).__name__)
        return not (existing and not self.config.overwrite)

    def process_story(self, story: Story, schema_index: SchemaIndex) -> StoryResult:
        """
        Run guard → extract → generate → write for one story.

        The story is copied before the target field is set, so ``story``
        itself is left untouched.

        Raises:
            SchemaConsistencyError: If the content uses an unknown component.
        """
        slug = story.full_slug
        self._verbose("")
        self._verbose(f'Slug "{slug}"')
        self._verbose(f'Name "{story.name}"')
        self._verbose("==============================")

        def result(outcome: StoryOutcome, **kwargs) -> StoryResult:
            return StoryResult(story_id=story.id, full_slug=slug, outcome=outcome, **kwargs)

        # Guard
        try:
            proceed = self.check_target_field(story)
        except TargetFieldError as exc:
            logger.error("[%s] %s", slug, exc)
            outcome = (
                StoryOutcome.FIELD_NOT_FOUND
                if isinstance(exc, FieldNotFoundError)
                else StoryOutcome.FIELD_TYPE_MISMATCH
            )
            return result(outcome, message=str(exc))

        if not proceed:
            message = (
                f'Meta description already present in field "{self.config.target_field}". '
                "Use parameter --overwrite to force generation."
            )
            self._verbose(message)
            return result(StoryOutcome.ALREADY_PRESENT, message=message)

        # Extract
        try:
            text = extract_text(story.content, schema_index)
        except ContentTreeError as exc:
            logger.error("[%s] Content could not be parsed: %s", slug, exc)
            return result(StoryOutcome.INVALID_CONTENT, message=str(exc))

        self._verbose("", 2)
        self._verbose("Parsed content:", 2)
        self._verbose("---------------", 2)
        self._verbose(text, 2)

        if not text.strip():
            message = "No text found in story content. Nothing to summarize."
            logger.warning("[%s] %s", slug, message)
            return result(StoryOutcome.NO_CONTENT, message=message, extracted_text=text)

        # Generate
        try:
            generation = self.agent.generate(
                text,
                language=self.config.language,
                max_tokens=self.config.max_tokens,
                max_characters=self.config.max_characters,
            )
        except GenerationFailure as exc:
            logger.error("[%s] %s", slug, exc)
            return result(StoryOutcome.FAILED, message=str(exc), extracted_text=text)

        self.usage.record(generation)
        description = generation.text

        self._verbose("")
        self._verbose("Generated description:")
        self._verbose("----------------------")
        self._verbose(description)
        self._verbose("")
        self._verbose("Process result:")
        self._verbose("---------------")

        if self.config.dry_run:
            self._verbose("Dry-run mode. No changes performed.")
            return result(StoryOutcome.DRY_RUN, description=description, extracted_text=text)

        # Write back
        updated = story.model_copy(deep=True)
        set_path(updated.content, self.config.target_field, description)
        try:
            self.storyblok.update_story(updated, publish=self.config.publish)
        except WriteFailure as exc:
            logger.error("[%s] %s", slug, exc)
            return result(
                StoryOutcome.FAILED,
                message=str(exc),
                description=description,
                extracted_text=text,
            )

        self._verbose("Story successfully updated.")
        return result(StoryOutcome.WRITTEN, description=description, extracted_text=text)

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def run(self) -> RunReport:
        """
        Process all matching stories sequentially.

        Raises:
            SchemaConsistencyError: If any story uses an unknown component.
            StoryblokAPIError: If fetching stories or components fails.
        """
        stories = self.fetch_stories()
        schema_index = self.build_schema_index()

        logger.info("Processing stories...")
        report = RunReport(usage=self.usage)
        for story in stories:
            report.results.append(self.process_story(story, schema_index))
        return report
