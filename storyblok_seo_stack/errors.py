# -*- coding: utf-8 -*-
"""
Errors
======
Exception hierarchy for the meta description stack.

Fatal errors (abort the whole run):
  - ConfigurationError
  - SchemaConsistencyError
  - StoryblokAPIError raised while fetching the initial batch

Recoverable errors (reported per story, the run continues):
  - TargetFieldError (FieldNotFoundError, FieldTypeMismatchError)
  - ContentTreeError
  - GenerationFailure
  - WriteFailure
"""


class StoryblokSeoError(Exception):
    """Base class for all errors raised by this stack."""


class ConfigurationError(StoryblokSeoError):
    """A required option is missing or an option has an invalid value."""


class SchemaConsistencyError(StoryblokSeoError):
    """Content references a component that is absent from the catalog."""

    def __init__(self, component: object):
        self.component = component
        super().__init__(f'Component "{component}" not found.')


class ContentTreeError(StoryblokSeoError):
    """The content tree is malformed, cyclic or nested too deeply."""


class TargetFieldError(StoryblokSeoError):
    """Base class for problems with the configured target field."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class FieldNotFoundError(TargetFieldError):
    def __init__(self, path: str):
        super().__init__(
            path,
            f'Target field "{path}" not found on story. Make sure the field exists. '
            "If you are using the SEO App you have to save the story at least once "
            "for the fields to be created.",
        )


class FieldTypeMismatchError(TargetFieldError):
    def __init__(self, path: str, value_type: str):
        self.value_type = value_type
        super().__init__(
            path,
            f'Target field "{path}" does not seem to be a text field '
            f"(found {value_type}). Make sure the field exists and is a text field.",
        )


class GenerationFailure(StoryblokSeoError):
    """The text generation service call failed."""


class StoryblokAPIError(StoryblokSeoError):
    """A Storyblok Management API call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class WriteFailure(StoryblokAPIError):
    """Updating a story in Storyblok failed."""
