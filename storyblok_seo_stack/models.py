# -*- coding: utf-8 -*-
"""
Data Models
============
Pydantic models for Storyblok entities and pipeline results.
Used for validation, serialization, and clean data passing
between services, agents, and the update pipeline.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Component Models
# ---------------------------------------------------------------------------


class FieldType(str, Enum):
    """Field types relevant for text extraction. Anything else is OTHER."""

    TEXT = "text"
    TEXTAREA = "textarea"
    RICHTEXT = "richtext"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: Any) -> "FieldType":
        try:
            return cls(tag)
        except ValueError:
            return cls.OTHER


class ComponentDefinition(BaseModel):
    """A component (block) definition from the Storyblok component catalog."""

    id: Optional[int] = None
    name: str
    display_name: Optional[str] = None
    is_root: Optional[bool] = False
    schema_: dict[str, Any] = Field(default_factory=dict, alias="schema")

    class Config:
        populate_by_name = True
        extra = "allow"

    def field_types(self) -> dict[str, FieldType]:
        """Map every declared field name to its FieldType."""
        return {
            name: FieldType.from_tag((definition or {}).get("type"))
            for name, definition in self.schema_.items()
            if isinstance(definition, dict)
        }


# ---------------------------------------------------------------------------
# Story Models
# ---------------------------------------------------------------------------


class StoryStub(BaseModel):
    """A story as returned by the story listing (no content body)."""

    id: int
    name: str = ""
    slug: str = ""
    full_slug: str = ""
    content_type: Optional[str] = None
    is_folder: bool = False
    published: Optional[bool] = False

    class Config:
        extra = "allow"


class Story(StoryStub):
    """A full story including its content tree.

    Unknown attributes are kept so that the complete story object can be
    submitted back to Storyblok unchanged apart from the target field.
    """

    content: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Generation Models
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Generated text plus the token usage reported by the model."""

    text: str
    prompt_tokens: int = 0
    completion_tokens: int = 0


# ---------------------------------------------------------------------------
# Pipeline Models
# ---------------------------------------------------------------------------


class StoryOutcome(str, Enum):
    WRITTEN = "written"
    DRY_RUN = "dry_run"
    ALREADY_PRESENT = "already_present"
    FIELD_NOT_FOUND = "field_not_found"
    FIELD_TYPE_MISMATCH = "field_type_mismatch"
    NO_CONTENT = "no_content"
    INVALID_CONTENT = "invalid_content"
    FAILED = "failed"


class StoryResult(BaseModel):
    """Outcome of processing a single story."""

    story_id: int
    full_slug: str
    outcome: StoryOutcome
    message: Optional[str] = None
    description: Optional[str] = None
    extracted_text: Optional[str] = None
