"""
Auto-link a wiki text file against the list of known page titles.

Reads:
  - INPUT                      wiki markup to annotate
  - --names-file / --api-url   source of known page titles

Produces:
  - the annotated text (in place, or --output)
  - an optional JSON report (--report)
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from jsonschema import validate

from autolink.config.schemas import ANNOTATION_REPORT_SCHEMA
from autolink.config.settings import (
    AUTOLINK_API_URL,
    AUTOLINK_HTTP_TIMEOUT,
    AUTOLINK_MAX_PAGES,
    AUTOLINK_NAMESPACE,
    LOG_LEVEL,
    NAME_CACHE_ENABLED,
)
from autolink.inventory.name_cache import RedisNameCache, build_redis_client
from autolink.inventory.provider import MediaWikiInventoryProvider, StaticInventoryProvider
from autolink.session.editor import FileSurface, NoEditableSurfaceError
from autolink.session.session import AutoLinkSession, SessionOutcome

logger = logging.getLogger("run_autolink")

EXIT_OK = 0
EXIT_NO_SURFACE = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Insert [[links]] around known page titles in a wiki text file.",
    )
    parser.add_argument("input", type=Path, help="Wiki text file to annotate")
    parser.add_argument("--output", type=Path, default=None, help="Write here instead of in place")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--names-file", type=Path, default=None, help="One known title per line")
    source.add_argument("--api-url", default=AUTOLINK_API_URL, help="MediaWiki api.php URL")
    parser.add_argument("--namespace", type=int, default=AUTOLINK_NAMESPACE)
    parser.add_argument("--max-pages", type=int, default=AUTOLINK_MAX_PAGES)
    parser.add_argument("--report", type=Path, default=None, help="Write a JSON report here")
    parser.add_argument(
        "--redis",
        action="store_true",
        default=NAME_CACHE_ENABLED,
        help="Share the name list between runs through Redis",
    )
    return parser


def build_report(source: Path, outcome: SessionOutcome, names_loaded: int) -> dict:
    result = outcome.result
    report = {
        "source": str(source),
        "status": outcome.status,
        "message": outcome.message,
        "inserted_count": outcome.inserted_count,
        "names_loaded": names_loaded,
        "protected_count": result.protected_count if result is not None else 0,
        "spans": [s.to_dict() for s in result.spans] if result is not None else [],
    }
    validate(instance=report, schema=ANNOTATION_REPORT_SCHEMA)
    return report


async def run(args: argparse.Namespace) -> int:
    surface = FileSurface(args.input, args.output) if args.input.is_file() else None

    if args.names_file is not None:
        provider = StaticInventoryProvider.from_file(args.names_file)
    else:
        provider = MediaWikiInventoryProvider(
            args.api_url,
            namespace=args.namespace,
            timeout=AUTOLINK_HTTP_TIMEOUT,
        )

    name_cache = None
    if args.redis:
        name_cache = RedisNameCache(build_redis_client(), namespace=args.namespace)

    async with AutoLinkSession(
        surface=surface,
        provider=provider,
        name_cache=name_cache,
        max_pages=args.max_pages,
    ) as session:
        try:
            outcome = await session.auto_link()
        except NoEditableSurfaceError:
            logger.error("Input file not found: %s", args.input)
            return EXIT_NO_SURFACE
        names_loaded = len(session.names)

    logger.info("Links inserted    : %d", outcome.inserted_count)
    logger.info("Names loaded      : %d", names_loaded)

    if args.report is not None:
        report = build_report(args.input, outcome, names_loaded)
        with open(args.report, "w", encoding="utf-8") as f:
            json.dump(report, f, ensure_ascii=False, indent=2)
        logger.info("Report saved to: %s", args.report)

    return EXIT_OK if outcome.status == "success" else EXIT_REJECTED


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stdout,
    )
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
