# -*- coding: utf-8 -*-
"""
Gemini API Service
====================
Wrapper for Google's Gemini API, handling:
  - Text generation with a per-call system instruction
  - Token usage reporting (prompt / completion)
  - Clean error handling

Uses the google-generativeai SDK. Calls are not retried; a failing call
raises GenerationFailure.

Thinking models (gemini-2.5-*) spend part of max_output_tokens on thinking,
which this SDK cannot budget; with a small limit they may stop before
producing any text.
"""

import logging
from typing import Optional, Sequence, Union

import google.generativeai as genai

from storyblok_seo_stack.config.settings import GeminiConfig
from storyblok_seo_stack.errors import GenerationFailure
from storyblok_seo_stack.models import GenerationResult

logger = logging.getLogger("storyblok.gemini")


class GeminiService:
    """
    Google Gemini API client for text generation.

    Usage:
        service = GeminiService(settings.gemini)
        result = service.generate_text(["Your prompt here"], system_prompt="...")
        print(result.text, result.prompt_tokens, result.completion_tokens)
    """

    def __init__(self, config: GeminiConfig):
        """Initialize the Gemini client with the configured API key."""
        genai.configure(api_key=config.api_key)
        self.model_name = config.model
        self._temperature = config.temperature
        logger.info("GeminiService initialized with model: %s", config.model)

    def generate_text(
        self,
        prompt: Union[str, Sequence[str]],
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> GenerationResult:
        """
        Generate text using the Gemini model.

        Args:
            prompt: The user prompt, or several text parts of one user turn.
            system_prompt: Optional system instruction.
            max_tokens: Maximum number of output tokens. Thinking models
                count their thinking tokens against this limit.

        Returns:
            GenerationResult with the text and token usage.

        Raises:
            GenerationFailure: If the call fails or returns no text.
        """
        gen_config = genai.GenerationConfig(
            max_output_tokens=max_tokens,
            temperature=self._temperature,
        )
        model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=system_prompt,
            generation_config=gen_config,
        )
        contents = [prompt] if isinstance(prompt, str) else list(prompt)

        logger.debug(
            "Gemini generate (model=%s, prompt_len=%d)",
            self.model_name,
            sum(len(part) for part in contents),
        )
        try:
            response = model.generate_content(contents)
        except Exception as exc:
            logger.error("Gemini request failed: %s", str(exc)[:200])
            raise GenerationFailure(f"Gemini generation failed: {exc}") from exc

        # Check for blocked content
        if not response.candidates:
            raise GenerationFailure(
                "Gemini returned no candidates — content may have been blocked. "
                f"Prompt feedback: {response.prompt_feedback}"
            )
        try:
            text = response.text.strip()
        except ValueError as exc:
            reason = getattr(response.candidates[0], "finish_reason", None)
            reason = getattr(reason, "name", reason)
            message = f"Gemini returned no text (finish reason: {reason})"
            if reason == "MAX_TOKENS":
                message += ". The output token limit was reached; raise --max-tokens"
            raise GenerationFailure(message) from exc

        usage = response.usage_metadata
        result = GenerationResult(
            text=text,
            prompt_tokens=getattr(usage, "prompt_token_count", 0) or 0,
            completion_tokens=getattr(usage, "candidates_token_count", 0) or 0,
        )
        logger.info(
            "Gemini generated %d chars (prompt=%d, completion=%d tokens).",
            len(text),
            result.prompt_tokens,
            result.completion_tokens,
        )
        return result
