#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Generate Meta Descriptions
===========================
Generates SEO meta descriptions for the stories of a Storyblok space with
Gemini and writes them into a field of each story.

Usage:
    storyblok-generate-meta-description --token <oauth token> --space <id> \\
        --gemini-api-key <key> --language en --target-field seo.description
    python -m storyblok_seo_stack.pipeline.generate_meta_descriptions --help

Output:
    Progress and per-story details are logged to stderr; a JSON run summary
    is printed to stdout:
    {
        "success": true,
        "elapsed_seconds": 12,
        "tokens": {"prompt": ..., "completion": ..., "total": ..., "calls": ...},
        "stories": {"processed": ..., "written": ..., ...}
    }

Exit status:
    0  run finished
    1  invalid configuration, unknown component, Storyblok fetch error,
       or at least one story failed to generate or write
"""

import argparse
import json
import logging
import sys
import time
from typing import Optional, Sequence

from storyblok_seo_stack.agents.meta_description_agent import MetaDescriptionAgent
from storyblok_seo_stack.config.settings import (
    DEFAULT_MAX_CHARACTERS,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    REGION_BASE_URLS,
    Settings,
    build_settings,
    load_environment,
)
from storyblok_seo_stack.errors import (
    ConfigurationError,
    SchemaConsistencyError,
    StoryblokAPIError,
)
from storyblok_seo_stack.pipeline.update_pipeline import RunReport, UpdatePipeline
from storyblok_seo_stack.pipeline.usage import UsageAccountant
from storyblok_seo_stack.services.gemini_service import GeminiService
from storyblok_seo_stack.services.storyblok_service import StoryblokService

logger = logging.getLogger("storyblok.pipeline")

EPILOG = """\
minimal example:
  storyblok-generate-meta-description --token 1234567890abcdef --space 12345 \\
      --gemini-api-key 1234567890abcdef --language en --target-field "seo.description"

maximal example:
  storyblok-generate-meta-description \\
      --token 1234567890abcdef \\
      --gemini-api-key 1234567890abcdef \\
      --region us \\
      --language en \\
      --target-field "seo.description" \\
      --content-types "page,news-article" \\
      --skip-stories "home" \\
      --model gemini-2.5-pro \\
      --max-tokens 1000 \\
      --max-characters 100 \\
      --overwrite \\
      --publish \\
      --dry-run \\
      --verbose
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storyblok-generate-meta-description",
        description="Generate meta descriptions for Storyblok stories with Gemini.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--token",
        help="Personal OAuth access token of a Storyblok user (NOT the access token "
        "of a space). Env: STORYBLOK_OAUTH_TOKEN.",
    )
    parser.add_argument("--space", help="ID of the space. Env: STORYBLOK_SPACE_ID.")
    parser.add_argument(
        "--region",
        help=f"Region of the space: {', '.join(REGION_BASE_URLS)} (default: eu). "
        "Env: STORYBLOK_REGION.",
    )
    parser.add_argument("--gemini-api-key", help="Gemini API key. Env: GEMINI_API_KEY.")
    parser.add_argument(
        "--language", help="(required) Language code to generate the description in."
    )
    parser.add_argument(
        "--target-field",
        help="(required) Field to write the description to (e.g. 'seo.description'). "
        "Use dot notation for nested fields.",
    )
    parser.add_argument(
        "--content-types",
        help="Comma separated list of content types to process (default: page).",
    )
    parser.add_argument(
        "--skip-stories",
        help='Comma separated list of full slugs to skip (e.g. "home,about-us").',
    )
    parser.add_argument(
        "--only-stories",
        help="Comma separated list of full slugs to limit processing to. "
        "Overrides --content-types and --skip-stories.",
    )
    parser.add_argument(
        "--model", help=f"Gemini model to use (default: {DEFAULT_MODEL}). Env: GEMINI_MODEL."
    )
    parser.add_argument(
        "--max-tokens",
        help=f"Maximum completion tokens per call (default: {DEFAULT_MAX_TOKENS}).",
    )
    parser.add_argument(
        "--max-characters",
        help=f"Maximum characters for the generated text (default: {DEFAULT_MAX_CHARACTERS}). "
        "Passed to the model as an instruction, not enforced.",
    )
    parser.add_argument(
        "--overwrite", action="store_true", help="Overwrite existing meta descriptions."
    )
    parser.add_argument(
        "--publish",
        action="store_true",
        help="Publish stories after updating. WARNING: may publish previously "
        "unpublished stories.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only display the changes instead of performing them.",
    )
    parser.add_argument(
        "--verbose",
        nargs="?",
        const=2,
        default=0,
        type=int,
        metavar="LEVEL",
        help="Show details for every processed story: 1 = generated description, "
        "2 = parsed content and generated description (default when no level given).",
    )
    return parser


def configure_logging(verbose: int) -> None:
    """Log to stderr; service chatter only when verbose."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logger.setLevel(logging.INFO)


def log_run_header(settings: Settings) -> None:
    run = settings.run
    logger.info("Performing generation of meta descriptions for space %s:", settings.storyblok.space_id)
    logger.info("- mode: %s", run.mode)
    logger.info("- language: %s", run.language)
    logger.info("- model: %s", settings.gemini.model)
    logger.info("- max characters: %s", run.max_characters)
    logger.info("- max tokens: %s", run.max_tokens)
    logger.info("- content types: %s", ", ".join(run.content_types))
    if run.skip_stories:
        logger.info("- skipped stories: %s", ", ".join(run.skip_stories))
    if run.only_stories:
        logger.info("- only stories: %s", ", ".join(run.only_stories))
    logger.info("- overwrite: %s", "yes" if run.overwrite else "no")


def log_run_result(report: RunReport, elapsed: float) -> None:
    usage = report.usage
    logger.info("Result")
    logger.info("======")
    logger.info("Process finished in %d seconds.", round(elapsed))
    logger.info("Stories: %s", ", ".join(f"{k}={v}" for k, v in report.summary().items() if v))
    logger.info("Used Gemini tokens:")
    logger.info("- Prompt/Input: %d", usage.prompt_tokens)
    logger.info("- Completion/Output: %d", usage.completion_tokens)
    logger.info("- Total: %d", usage.total_tokens)


def run(settings: Settings) -> RunReport:
    """Wire up the services and run the pipeline."""
    storyblok = StoryblokService(settings.storyblok)
    agent = MetaDescriptionAgent(GeminiService(settings.gemini))
    pipeline = UpdatePipeline(storyblok, agent, settings.run, usage=UsageAccountant())
    return pipeline.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    start = time.perf_counter()
    args = build_parser().parse_args(argv)
    load_environment()
    configure_logging(args.verbose or 0)

    try:
        settings = build_settings(args)
    except ConfigurationError as exc:
        logger.error("Error: %s", exc)
        print(json.dumps({"success": False, "error": str(exc)}))
        return 1

    log_run_header(settings)

    try:
        report = run(settings)
    except (SchemaConsistencyError, StoryblokAPIError) as exc:
        logger.error("Error: %s", exc)
        print(json.dumps({"success": False, "error": str(exc)}))
        return 1

    elapsed = time.perf_counter() - start
    log_run_result(report, elapsed)

    print(
        json.dumps(
            {
                "success": not report.failed,
                "elapsed_seconds": round(elapsed),
                "tokens": report.usage.as_dict(),
                "stories": report.summary(),
            },
            ensure_ascii=False,
            indent=2,
        )
    )
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
