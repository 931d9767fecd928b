# SPDX-License-Identifier: Apache-2.0
"""
Year Review - CLI Tool

Reads a questionnaire answer document and writes a year-in-review summary
(four cards, visual tags, poem, analysis, keyword and spirit animal).

Usage:
    year-review <answers-file> [options]

Examples:
    year-review answers.txt                       # JSON summary on stdout
    year-review answers.txt --markdown -o review.md
    year-review scan.pdf --mime-type application/pdf
    year-review answers.txt --offline             # Local templates only
    year-review --hint 5                          # Writing prompt for Q5
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import logging
import mimetypes
import sys
from pathlib import Path
from typing import NoReturn

from dotenv import load_dotenv

from year_review.llm.base import ConfigurationError
from year_review.llm.client import LLMConfig
from year_review.output.markdown_writer import MarkdownConfig, MarkdownWriter
from year_review.pipeline.errors import PipelineError
from year_review.pipeline.review_pipeline import ReviewPipeline

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list. Defaults to sys.argv[1:].

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="year-review",
        description="Year in Review - Turns questionnaire answers into a year summary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s answers.txt                           # JSON summary on stdout
  %(prog)s answers.txt -o summary.json           # Write JSON to file
  %(prog)s answers.txt --markdown -o review.md   # Markdown output
  %(prog)s scan.png                              # Extract answers from an image
  %(prog)s answers.txt --offline                 # Never contact the API
  %(prog)s --hint 5                              # Inspiration for question 5

Environment Variables:
  YEAR_REVIEW_API_KEY    API key (also: BIGMODEL_API_KEY, OPENAI_API_KEY)
  YEAR_REVIEW_BASE_URL   OpenAI-compatible endpoint (default: BigModel)
  YEAR_REVIEW_MODEL      Model name (default: glm-4-flash)
  YEAR_REVIEW_PROVIDER   openai (default), gemini, anthropic, ...
""",
    )

    # Input file
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="Path to the answer document (text, image or PDF)",
    )

    parser.add_argument(
        "--mime-type",
        help="MIME type of the input (default: guessed from extension, else text/plain)",
    )

    # Output options
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "-m",
        "--markdown",
        action="store_true",
        help="Write Markdown instead of JSON",
    )
    parser.add_argument(
        "--include-answers",
        action="store_true",
        help="Append the extracted answers to the Markdown output",
    )

    # API options
    api_group = parser.add_argument_group("API options")
    api_group.add_argument(
        "--offline",
        action="store_true",
        help="Do not contact the API; use the local template summary",
    )
    api_group.add_argument(
        "--provider",
        help="LLM provider (default: YEAR_REVIEW_PROVIDER or openai)",
    )
    api_group.add_argument(
        "--model",
        help="Model name (default: provider default)",
    )
    api_group.add_argument(
        "--base-url",
        help="OpenAI-compatible endpoint base URL",
    )
    api_group.add_argument(
        "--api-key",
        help="API key (or set YEAR_REVIEW_API_KEY)",
    )

    parser.add_argument(
        "--hint",
        type=int,
        metavar="N",
        help="Print an inspiration hint for question N and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args(argv)
    if args.input is None and args.hint is None:
        parser.error("an input file is required unless --hint is given")
    return args


def build_config(args: argparse.Namespace) -> LLMConfig:
    """Create the LLM configuration from the environment and CLI overrides.

    Args:
        args: Command line arguments.

    Returns:
        LLMConfig instance.
    """
    config = LLMConfig.from_env()
    if args.provider:
        config.provider = args.provider
    if args.model:
        config.model = args.model
    if args.base_url:
        config.base_url = args.base_url
    if args.api_key:
        config.api_key = args.api_key
    return config


def guess_mime_type(path: Path, explicit: str | None = None) -> str:
    """Determine the MIME type of the input file.

    Args:
        path: Input file path.
        explicit: MIME type given on the command line.

    Returns:
        MIME type string; text/plain when it cannot be guessed.
    """
    if explicit:
        return explicit
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "text/plain"


def report_progress(stage: str, current: int, total: int, message: str = "") -> None:
    """Log pipeline progress."""
    suffix = f" ({message})" if message else ""
    logger.info("[%s] %d/%d%s", stage, current, total, suffix)


async def run(args: argparse.Namespace) -> int:
    """Execute the review pipeline.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    pipeline = ReviewPipeline(
        config=build_config(args),
        progress_callback=report_progress,
        offline=args.offline,
    )

    try:
        if args.hint is not None:
            try:
                print(await pipeline.hint(args.hint))
            except KeyError:
                print(f"Error: Unknown question id: {args.hint}", file=sys.stderr)
                return 1
            return 0

        input_path: Path = args.input
        if not input_path.exists():
            print(f"Error: File not found: {input_path}", file=sys.stderr)
            return 1

        mime_type = guess_mime_type(input_path, args.mime_type)
        encoded = base64.b64encode(input_path.read_bytes()).decode("ascii")

        try:
            result = await pipeline.summarize_document(encoded, mime_type)
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except PipelineError as e:
            print(f"Error: {e}", file=sys.stderr)
            if args.verbose and e.cause is not None:
                print(f"  Cause: {e.cause}", file=sys.stderr)
            return 1

        if result.is_fallback and not args.offline:
            print("Note: remote generation unavailable, used local templates", file=sys.stderr)

        if args.markdown:
            writer = MarkdownWriter(
                MarkdownConfig(
                    include_transcript=args.include_answers,
                    source_filename=input_path.name,
                    source=result.source,
                )
            )
            output = writer.write(result.summary, result.answers, pipeline.questions)
        else:
            output = result.summary.to_json()

        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output, encoding="utf-8")
            print(f"Complete: {args.output}", file=sys.stderr)
        else:
            print(output)
        return 0
    finally:
        await pipeline.close()


def main() -> NoReturn:
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
