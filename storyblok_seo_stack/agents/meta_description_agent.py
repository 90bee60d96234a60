# -*- coding: utf-8 -*-
"""
Meta Description Agent
=======================
Generates an SEO meta description from the aggregated text of a story.

The system instruction carries the target language and the character
limit; the user turn carries a fixed instruction followed by the story
text.
"""

import logging

from storyblok_seo_stack.agents.base_agent import BaseAgent
from storyblok_seo_stack.config.prompts.meta_description_prompts import (
    META_DESCRIPTION_SYSTEM_PROMPT,
    META_DESCRIPTION_USER_INSTRUCTION,
)
from storyblok_seo_stack.models import GenerationResult
from storyblok_seo_stack.services.gemini_service import GeminiService

logger = logging.getLogger("storyblok.agent")


class MetaDescriptionAgent(BaseAgent):
    """
    AI Meta Description Agent — summarizes story text for the meta description.

    Usage:
        agent = MetaDescriptionAgent(GeminiService(settings.gemini))
        result = agent.generate(text, language="en", max_tokens=500, max_characters=155)
    """

    def __init__(self, gemini: GeminiService):
        self.gemini = gemini

    @property
    def agent_name(self) -> str:
        return "Meta Description Agent"

    def build_system_prompt(self, language: str, max_characters: int) -> str:
        return META_DESCRIPTION_SYSTEM_PROMPT.format(
            language=language, max_characters=max_characters
        )

    def generate(
        self,
        text: str,
        language: str,
        max_tokens: int,
        max_characters: int,
    ) -> GenerationResult:
        logger.info(
            "[%s] Generating description (language=%s, input_len=%d)",
            self.agent_name,
            language,
            len(text),
        )
        result = self.gemini.generate_text(
            prompt=[META_DESCRIPTION_USER_INSTRUCTION, text],
            system_prompt=self.build_system_prompt(language, max_characters),
            max_tokens=max_tokens,
        )
        if len(result.text) > max_characters:
            logger.warning(
                "[%s] Description has %d characters (limit %d is advisory only).",
                self.agent_name,
                len(result.text),
                max_characters,
            )
        return result
