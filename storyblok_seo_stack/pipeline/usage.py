# -*- coding: utf-8 -*-
"""Running totals of consumed generation tokens for one run."""

from dataclasses import dataclass

from storyblok_seo_stack.models import GenerationResult


@dataclass
class UsageAccountant:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    calls: int = 0

    def record(self, result: GenerationResult) -> None:
        self.prompt_tokens += result.prompt_tokens
        self.completion_tokens += result.completion_tokens
        self.calls += 1

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def as_dict(self) -> dict:
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
            "calls": self.calls,
        }
