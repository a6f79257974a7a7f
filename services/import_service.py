"""
Import service.

Drives a run: walks the import plan in order, parses each CSV, maps and
creates one entry per row, and tallies results. Rows and files are
processed strictly one after another.

Error boundaries:
    run    missing CSV directory → ImportDirectoryNotFoundError (fatal)
    file   missing / unreadable / empty → logged, file skipped
    row    create rejected or unreachable → logged, counted, next row
    field  transform failure → logged by the mapper, field omitted
"""

from pathlib import Path
from typing import Iterable
import structlog

from config.settings import Settings
from exceptions import (
    CSVParseError,
    ExternalServiceError,
    ImportDirectoryNotFoundError,
    StrapiRequestError,
)
from models.import_summary import FileStatus, ImportSummary, RunReport
from models.mapping import ContentTypeMapping
from models.strapi import StrapiErrorResponse
from parsers.csv_parser import read_rows
from services.field_mapper import FieldMapper
from services.relation_resolver import RelationResolver
from services.strapi_client import StrapiClient

logger = structlog.get_logger(__name__)


class ImportService:
    """
    CSV → Strapi import driver.

    Usage:
        async with StrapiClient(settings.strapi_url, settings.strapi_token) as client:
            service = ImportService(settings, client)
            report = await service.run_all(IMPORT_PLAN)
    """

    def __init__(
        self,
        settings: Settings,
        client: StrapiClient,
        mapper: FieldMapper = None,
    ):
        self.settings = settings
        self.csv_dir = Path(settings.csv_dir)
        self.client = client
        self.mapper = mapper or FieldMapper(RelationResolver(client))

    async def run_all(self, plan: Iterable[ContentTypeMapping]) -> RunReport:
        """
        Import every file of the plan, in the given order.

        The order is a dependency declaration: relation lookups only see
        entries created by files earlier in the plan.

        Returns:
            RunReport with one summary per planned file

        Raises:
            ImportDirectoryNotFoundError: If csv_dir does not exist
        """
        if not self.csv_dir.is_dir():
            logger.error("csv_dir_not_found", path=str(self.csv_dir))
            raise ImportDirectoryNotFoundError(str(self.csv_dir))

        if not self.client.is_authenticated:
            logger.warning(
                "strapi_token_missing",
                message="No STRAPI_TOKEN provided; creates may be rejected"
            )

        plan = list(plan)
        logger.info(
            "import_started",
            csv_dir=str(self.csv_dir),
            strapi_url=self.client.base_url,
            files=[m.file_name for m in plan]
        )

        report = RunReport()
        for mapping in plan:
            summary = await self.import_file(mapping)
            report.summaries.append(summary)

        logger.info(
            "import_completed",
            files_imported=report.files_imported,
            files_planned=len(plan),
            succeeded=report.succeeded,
            attempted=report.attempted
        )

        return report

    async def import_file(self, mapping: ContentTypeMapping) -> ImportSummary:
        """
        Import one CSV file into its content type.

        Never raises for file or row problems; the summary status and
        failures say what happened.
        """
        summary = ImportSummary(
            file_name=mapping.file_name,
            content_type=mapping.content_type,
        )
        log = logger.bind(file=mapping.file_name, content_type=mapping.content_type)
        file_path = self.csv_dir / mapping.file_name

        if not file_path.is_file():
            log.warning("csv_file_not_found", path=str(file_path))
            summary.status = FileStatus.MISSING
            return summary

        log.info("import_file_started", path=str(file_path))

        try:
            rows = read_rows(file_path)
        except CSVParseError as e:
            log.error("csv_file_unreadable", error=e.message, details=e.details)
            summary.status = FileStatus.UNREADABLE
            return summary

        if not rows:
            log.warning("csv_file_empty")
            summary.status = FileStatus.EMPTY
            return summary

        total = len(rows)
        log.info("csv_rows_found", rows=total)

        for index, row in enumerate(rows, start=1):
            await self._import_row(mapping, row, index, total, summary, log)

        summary.status = FileStatus.IMPORTED
        log.info(
            "import_file_completed",
            succeeded=summary.succeeded,
            attempted=summary.attempted,
            failed=summary.failed,
            field_warnings=summary.field_warnings
        )

        return summary

    async def _import_row(
        self,
        mapping: ContentTypeMapping,
        row: dict,
        index: int,
        total: int,
        summary: ImportSummary,
        log,
    ):
        """Map and create one row; record the outcome on the summary."""
        result = await self.mapper.map(row, mapping)
        summary.field_warnings += len(result.warnings)

        try:
            await self.client.create(mapping.content_type, result.payload)
        except StrapiRequestError as e:
            rejection = StrapiErrorResponse.from_body(e.response_body)
            log.error(
                "row_import_failed",
                row=index,
                total=total,
                status_code=e.status_code,
                error=e.message,
                strapi_error=rejection.error.name if rejection else None,
                strapi_message=rejection.error.message if rejection else None,
                response=e.response_body
            )
            summary.record_failure(
                row=index,
                reason=e.message,
                status_code=e.status_code,
                response_body=e.response_body,
            )
            return
        except ExternalServiceError as e:
            log.error("row_import_failed", row=index, total=total, error=e.message)
            summary.record_failure(row=index, reason=e.message)
            return

        summary.record_success()
        log.info("row_imported", row=index, total=total)
