"""
CSV to Strapi importer: command-line entry point.

Usage:
    # Import every configured file from CSV_DIR into STRAPI_URL
    python main.py

    # Override settings from the command line
    python main.py --csv-dir ./exports --strapi-url http://localhost:1337

    # Import a subset (plan order is kept)
    python main.py --only "Authors.csv" --only "Blog.csv"

Settings come from the environment or .env (CSV_DIR, STRAPI_URL,
STRAPI_TOKEN, LOG_LEVEL, ENVIRONMENT). Start Strapi before running.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from config import IMPORT_PLAN, Settings, get_settings
from config.import_plan import select_plan
from exceptions import ImportDirectoryNotFoundError
from models.import_summary import RunReport
from services.import_service import ImportService
from services.strapi_client import StrapiClient

logger = structlog.get_logger(__name__)


def configure_logging(settings: Settings):
    """Structured logging: console in development, JSON in production."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if settings.is_production
                else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Import CSV exports into Strapi, one file per content type."
    )
    parser.add_argument(
        "--csv-dir",
        default=None,
        help="Directory containing the CSV files (default: $CSV_DIR)",
    )
    parser.add_argument(
        "--strapi-url",
        default=None,
        help="Strapi base URL (default: $STRAPI_URL or http://localhost:1337)",
    )
    parser.add_argument(
        "--only",
        action="append",
        default=[],
        metavar="FILE",
        help="Import only this file; repeatable. "
             f"Valid: {', '.join(m.file_name for m in IMPORT_PLAN)}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    return parser


def resolve_settings(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Apply CLI overrides on top of environment settings."""
    settings = base or get_settings()

    overrides = {}
    if args.csv_dir:
        overrides["csv_dir"] = args.csv_dir
    if args.strapi_url:
        overrides["strapi_url"] = args.strapi_url
    if args.log_level:
        overrides["log_level"] = args.log_level

    if not overrides:
        return settings
    return Settings.model_validate({**settings.model_dump(), **overrides})


async def run(settings: Settings, plan=IMPORT_PLAN) -> RunReport:
    """Create the single Strapi client for the run and import the plan."""
    async with StrapiClient(settings.strapi_url, settings.strapi_token) as client:
        service = ImportService(settings, client)
        return await service.run_all(plan)


def print_report(report: RunReport):
    separator = "=" * 61

    print(separator)
    print("  IMPORT SUMMARY")
    print(separator)
    for summary in report.summaries:
        label = f"  {summary.file_name}"
        padding = "." * max(2, 32 - len(label))
        if summary.attempted:
            print(f"{label}{padding} {summary.succeeded}/{summary.attempted} "
                  f"into {summary.content_type}")
        else:
            print(f"{label}{padding} {summary.status.value.upper()}")
    print(separator)
    print(f"  Total: {report.succeeded}/{report.attempted} records imported")
    print(separator)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except PydanticValidationError as e:
        logger.error("invalid_settings", error=str(e))
        return 1
    configure_logging(settings)

    try:
        plan = select_plan(args.only) if args.only else IMPORT_PLAN
    except ValueError as e:
        logger.error("invalid_file_selection", error=str(e))
        return 1

    try:
        report = asyncio.run(run(settings, plan))
    except ImportDirectoryNotFoundError as e:
        logger.error("import_aborted", error=e.message)
        return 1
    except Exception as e:
        logger.exception(
            "import_crashed",
            error=str(e),
            error_type=type(e).__name__
        )
        return 1

    print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
