# -*- coding: utf-8 -*-
"""
Central Configuration Module
=============================
Merges command-line options with environment variables and provides typed,
validated settings for the meta description stack.

Secrets may be read from a .env file in the working directory. Values
already present in the environment win over the .env file, and explicit
command-line options win over both.
"""

import os
from argparse import Namespace
from dataclasses import dataclass, field
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from storyblok_seo_stack.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Storyblok Management API endpoints per region
# ---------------------------------------------------------------------------
REGION_BASE_URLS: dict[str, str] = {
    "eu": "https://mapi.storyblok.com/v1",
    "us": "https://api-us.storyblok.com/v1",
    "ap": "https://api-ap.storyblok.com/v1",
    "ca": "https://api-ca.storyblok.com/v1",
    "cn": "https://app.storyblokchina.cn/v1",
}
DEFAULT_REGION = "eu"

DEFAULT_CONTENT_TYPES = ("page",)
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_MAX_TOKENS = 500
DEFAULT_MAX_CHARACTERS = 155
DEFAULT_TIMEOUT = 30  # seconds

HELP_HINT = "Use --help to find out more."


def load_environment() -> None:
    """Load a .env file from the working directory, keeping existing values."""
    load_dotenv(find_dotenv(usecwd=True), override=False)


# ---------------------------------------------------------------------------
# Data classes: grouped, typed, immutable configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StoryblokConfig:
    """Storyblok Management API configuration."""

    oauth_token: str = field(repr=False)
    space_id: str
    region: str = DEFAULT_REGION
    timeout: int = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return REGION_BASE_URLS[self.region]


@dataclass(frozen=True)
class GeminiConfig:
    """Google Gemini API configuration."""

    api_key: str = field(repr=False)
    model: str = DEFAULT_MODEL
    temperature: Optional[float] = None  # None: model default


@dataclass(frozen=True)
class RunConfig:
    """Options controlling which stories are processed and how."""

    language: str
    target_field: str
    content_types: tuple[str, ...] = DEFAULT_CONTENT_TYPES
    skip_stories: tuple[str, ...] = ()
    only_stories: tuple[str, ...] = ()
    max_tokens: int = DEFAULT_MAX_TOKENS
    max_characters: int = DEFAULT_MAX_CHARACTERS  # advisory only
    overwrite: bool = False
    publish: bool = False
    dry_run: bool = False
    verbose: int = 0

    @property
    def mode(self) -> str:
        if self.dry_run:
            return "dry-run"
        return "live (publish)" if self.publish else "live (no-publish)"


@dataclass(frozen=True)
class Settings:
    storyblok: StoryblokConfig
    gemini: GeminiConfig
    run: RunConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _option_or_env(value: Optional[str], env_key: Optional[str]) -> Optional[str]:
    if value:
        return value
    if env_key:
        return os.getenv(env_key) or None
    return None


def _require(value: Optional[str], what: str, flag: str, env_key: Optional[str] = None) -> str:
    """Return a required value or raise a ConfigurationError naming its sources."""
    if value:
        return value
    if env_key:
        raise ConfigurationError(
            f"State your {what} via the {flag} argument or the environment "
            f"variable {env_key}. {HELP_HINT}"
        )
    raise ConfigurationError(f"State the {what} using the {flag} argument. {HELP_HINT}")


def split_list(value: Optional[str]) -> tuple[str, ...]:
    """Split a comma separated option, dropping blank entries."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _positive_int(value, flag: str, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid {flag} value '{value}'. {HELP_HINT}") from None
    if number <= 0:
        raise ConfigurationError(f"{flag} must be a positive number. {HELP_HINT}")
    return number


def _verbosity(value) -> int:
    if value is None:
        return 0
    try:
        level = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid --verbose level '{value}'. {HELP_HINT}") from None
    if level not in (0, 1, 2):
        raise ConfigurationError(f"Invalid --verbose level '{value}'. {HELP_HINT}")
    return level


def _temperature(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid GEMINI_TEMPERATURE value '{value}'. {HELP_HINT}") from None
    if not 0.0 <= number <= 2.0:
        raise ConfigurationError(f"GEMINI_TEMPERATURE must be between 0 and 2. {HELP_HINT}")
    return number


# ---------------------------------------------------------------------------
# Build configuration from parsed arguments + environment
# ---------------------------------------------------------------------------


def _build_storyblok(args: Namespace) -> StoryblokConfig:
    token = _require(
        _option_or_env(args.token, "STORYBLOK_OAUTH_TOKEN"),
        "oauth token",
        "--token",
        "STORYBLOK_OAUTH_TOKEN",
    )
    space_id = _require(
        _option_or_env(args.space, "STORYBLOK_SPACE_ID"),
        "space id",
        "--space",
        "STORYBLOK_SPACE_ID",
    )
    region = _option_or_env(args.region, "STORYBLOK_REGION") or DEFAULT_REGION
    if region not in REGION_BASE_URLS:
        raise ConfigurationError(f"Invalid region parameter stated. {HELP_HINT}")
    return StoryblokConfig(
        oauth_token=token,
        space_id=str(space_id),
        region=region,
        timeout=_positive_int(os.getenv("STORYBLOK_TIMEOUT"), "STORYBLOK_TIMEOUT", DEFAULT_TIMEOUT),
    )


def _build_gemini(args: Namespace) -> GeminiConfig:
    api_key = _require(
        _option_or_env(args.gemini_api_key, "GEMINI_API_KEY"),
        "Gemini API key",
        "--gemini-api-key",
        "GEMINI_API_KEY",
    )
    return GeminiConfig(
        api_key=api_key,
        model=_option_or_env(args.model, "GEMINI_MODEL") or DEFAULT_MODEL,
        temperature=_temperature(os.getenv("GEMINI_TEMPERATURE")),
    )


def _build_run(args: Namespace) -> RunConfig:
    language = _require(args.language, "desired language", "--language")
    target_field = _require(
        args.target_field, "field to write the description to", "--target-field"
    )
    return RunConfig(
        language=language,
        target_field=target_field,
        content_types=split_list(args.content_types) or DEFAULT_CONTENT_TYPES,
        skip_stories=split_list(args.skip_stories),
        only_stories=split_list(args.only_stories),
        max_tokens=_positive_int(args.max_tokens, "--max-tokens", DEFAULT_MAX_TOKENS),
        max_characters=_positive_int(
            args.max_characters, "--max-characters", DEFAULT_MAX_CHARACTERS
        ),
        overwrite=bool(args.overwrite),
        publish=bool(args.publish),
        dry_run=bool(args.dry_run),
        verbose=_verbosity(args.verbose),
    )


def build_settings(args: Namespace) -> Settings:
    """
    Build validated settings from parsed command-line arguments.

    Raises:
        ConfigurationError: If a required option is missing or invalid.
    """
    return Settings(
        storyblok=_build_storyblok(args),
        gemini=_build_gemini(args),
        run=_build_run(args),
    )
