# -*- coding: utf-8 -*-
"""
Base Agent
===========
Abstract base class for text generation agents.
Provides the generation contract used by the update pipeline:
  - generate(text, language, max_tokens, max_characters) -> GenerationResult
  - agent_name for log messages
"""

from abc import ABC, abstractmethod

from storyblok_seo_stack.models import GenerationResult


class BaseAgent(ABC):
    """
    Abstract base class for all generation agents.

    Subclasses must implement:
        - generate(...) -> GenerationResult: The core agent logic.
        - agent_name (property): Human-readable agent name.
    """

    @property
    @abstractmethod
    def agent_name(self) -> str:
        """Human-readable name for this agent."""
        ...

    @abstractmethod
    def generate(
        self,
        text: str,
        language: str,
        max_tokens: int,
        max_characters: int,
    ) -> GenerationResult:
        """
        Summarize ``text`` in ``language``.

        ``max_characters`` is passed to the model as an instruction only;
        the returned text may exceed it.

        Raises:
            GenerationFailure: If the backend call fails.
        """
        ...
