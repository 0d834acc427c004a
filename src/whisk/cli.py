#!/usr/bin/env python3
"""
Command-line interface for whisk.
Generates recipes from a meal description, or parses a saved completion, and prints them as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .constants import DEFAULT_PROVIDER
from .exceptions import CompletionError, RecipeParseError
from .generator import PROVIDERS, RecipeGenerator
from .models.recipe import RecipeParseResult
from .services.payload import parse_completion


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )

    # Set default log level for all loggers
    logging.getLogger().setLevel(log_level)

    if not verbose:
        logging.getLogger("whisk").setLevel(logging.WARNING)

        # And for external libraries
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("openai").setLevel(logging.WARNING)


def result_to_json(result: RecipeParseResult) -> str:
    """Serialise a parse result for printing."""
    return json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False)


async def run_generate(args: argparse.Namespace) -> RecipeParseResult:
    generator = RecipeGenerator(provider=args.provider)
    return await generator.generate(args.description, count=args.count)


def run_parse(args: argparse.Namespace) -> RecipeParseResult:
    if args.file == "-":
        raw = sys.stdin.read()
    else:
        with open(args.file, "r", encoding="utf-8") as f:
            raw = f.read()
    return parse_completion(raw)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate structured recipes from a meal description"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Ask the completion endpoint for recipes")
    generate.add_argument("description", help="Describe the meal you want")
    generate.add_argument("--count", type=int, default=1, help="Number of recipes to generate")
    generate.add_argument(
        "--provider",
        choices=sorted(PROVIDERS),
        default=DEFAULT_PROVIDER,
        help="Completion provider (default: WHISK_LLM_PROVIDER or openai)",
    )

    parse = subparsers.add_parser("parse", help="Parse a saved completion ('-' for stdin)")
    parse.add_argument("file", help="Path to the raw completion text")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == "generate":
            result = asyncio.run(run_generate(args))
        else:
            result = run_parse(args)
    except RecipeParseError as e:
        logging.error(f"Parse failed: {e}")
        print(e.user_message, file=sys.stderr)
        return 1
    except (CompletionError, ValueError, OSError) as e:
        logging.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result_to_json(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
