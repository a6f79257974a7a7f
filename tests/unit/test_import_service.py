"""
Unit tests for ImportService.

Run: pytest tests/unit/test_import_service.py -v
"""

import json

import pytest
from structlog.testing import capture_logs

from config.import_plan import AUTHORS, BLOG
from config.settings import Settings
from exceptions import ImportDirectoryNotFoundError
from models.import_summary import FileStatus
from models.mapping import ContentTypeMapping, rename, transform
from services.import_service import ImportService
from tests.factories import AuthorRowFactory, BlogRowFactory, write_csv


def posted_data(request) -> dict:
    return json.loads(request.content)["data"]


# ===================
# RUN-LEVEL
# ===================

class TestRunPreconditions:

    @pytest.mark.asyncio
    async def test_missing_directory_aborts_run(self, tmp_path, strapi_client, fake_strapi):
        settings = Settings(csv_dir=tmp_path / "does-not-exist", _env_file=None)
        service = ImportService(settings, strapi_client)

        with pytest.raises(ImportDirectoryNotFoundError) as exc_info:
            await service.run_all([AUTHORS])

        assert exc_info.value.code == "CSV_DIR_NOT_FOUND"
        assert fake_strapi.requests == []

    @pytest.mark.asyncio
    async def test_missing_token_warns_once_and_continues(self, settings, csv_dir, anonymous_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(2))
        service = ImportService(settings, anonymous_client)

        with capture_logs() as logs:
            report = await service.run_all([AUTHORS, BLOG])

        warnings = [e for e in logs if e["event"] == "strapi_token_missing"]
        assert len(warnings) == 1
        assert report.succeeded == 2
        assert "Authorization" not in fake_strapi.posts()[0].headers

    @pytest.mark.asyncio
    async def test_no_token_warning_with_credentials(self, settings, csv_dir, strapi_client):
        service = ImportService(settings, strapi_client)

        with capture_logs() as logs:
            await service.run_all([AUTHORS])

        assert not [e for e in logs if e["event"] == "strapi_token_missing"]


# ===================
# FILE-LEVEL
# ===================

class TestFileSkipping:

    @pytest.mark.asyncio
    async def test_missing_file_is_skipped(self, settings, strapi_client, fake_strapi):
        service = ImportService(settings, strapi_client)

        with capture_logs() as logs:
            summary = await service.import_file(AUTHORS)

        assert summary.status is FileStatus.MISSING
        assert summary.attempted == 0
        assert fake_strapi.requests == []
        assert any(e["event"] == "csv_file_not_found" for e in logs)

    @pytest.mark.asyncio
    async def test_missing_file_does_not_stop_run(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Blog.csv", BlogRowFactory.create_batch(2))
        service = ImportService(settings, strapi_client)

        report = await service.run_all([AUTHORS, BLOG])

        assert report.get("Authors.csv").status is FileStatus.MISSING
        assert report.get("Blog.csv").status is FileStatus.IMPORTED
        assert len(fake_strapi.created("blogs")) == 2

    @pytest.mark.asyncio
    async def test_empty_file_is_skipped(self, settings, csv_dir, strapi_client, fake_strapi):
        (csv_dir / "Authors.csv").write_text("")
        service = ImportService(settings, strapi_client)

        summary = await service.import_file(AUTHORS)

        assert summary.status is FileStatus.EMPTY
        assert fake_strapi.requests == []

    @pytest.mark.asyncio
    async def test_header_only_file_is_skipped(self, settings, csv_dir, strapi_client):
        (csv_dir / "Authors.csv").write_text("Slug,Title,Image,Content\n")
        service = ImportService(settings, strapi_client)

        summary = await service.import_file(AUTHORS)

        assert summary.status is FileStatus.EMPTY

    @pytest.mark.asyncio
    async def test_unreadable_file_is_skipped(self, settings, csv_dir, strapi_client, fake_strapi):
        (csv_dir / "Authors.csv").write_bytes(b"Slug,Title\na,b\nc,d,e,f\n")
        service = ImportService(settings, strapi_client)

        summary = await service.import_file(AUTHORS)

        assert summary.status is FileStatus.UNREADABLE
        assert fake_strapi.requests == []


# ===================
# ROW-LEVEL
# ===================

class TestRowImport:

    @pytest.mark.asyncio
    async def test_one_create_per_row(self, settings, csv_dir, strapi_client, fake_strapi):
        rows = AuthorRowFactory.create_batch(3)
        write_csv(csv_dir, "Authors.csv", rows)
        service = ImportService(settings, strapi_client)

        summary = await service.import_file(AUTHORS)

        assert summary.status is FileStatus.IMPORTED
        assert summary.attempted == 3
        assert summary.succeeded == 3
        assert [posted_data(r)["slug"] for r in fake_strapi.posts("authors")] == [
            r["Slug"] for r in rows
        ]

    @pytest.mark.asyncio
    async def test_posted_payload_follows_mapping(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", [
            AuthorRowFactory.create(Slug="jane-doe", Title="Jane Doe", Content="<p>Hi</p>")
        ])
        service = ImportService(settings, strapi_client)

        await service.import_file(AUTHORS)

        assert posted_data(fake_strapi.posts("authors")[0]) == {
            "slug": "jane-doe",
            "title": "Jane Doe",
            "content": "<p>Hi</p>",
        }

    @pytest.mark.asyncio
    async def test_failed_row_does_not_stop_file(self, settings, csv_dir, strapi_client, fake_strapi):
        """Row 3 of 5 rejected: all 5 attempted, 4 succeed."""
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(5))
        fake_strapi.fail_create("authors", 3, status=400)
        service = ImportService(settings, strapi_client)

        summary = await service.import_file(AUTHORS)

        assert summary.attempted == 5
        assert summary.succeeded == 4
        assert summary.failed == 1
        assert len(fake_strapi.posts("authors")) == 5
        assert summary.failures[0].row == 3
        assert summary.failures[0].status_code == 400
        assert summary.failures[0].response_body["error"]["name"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_rejection_logged_with_body(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(1))
        fake_strapi.fail_create("authors", 1, status=401, body={"error": {"status": 401, "name": "UnauthorizedError"}})
        service = ImportService(settings, strapi_client)

        with capture_logs() as logs:
            await service.import_file(AUTHORS)

        failures = [e for e in logs if e["event"] == "row_import_failed"]
        assert failures[0]["status_code"] == 401
        assert failures[0]["response"] == {"error": {"status": 401, "name": "UnauthorizedError"}}
        assert failures[0]["file"] == "Authors.csv"
        assert failures[0]["strapi_error"] == "UnauthorizedError"

    @pytest.mark.asyncio
    async def test_non_envelope_rejection_still_logged(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(1))
        fake_strapi.fail_create("authors", 1, status=502, body="Bad Gateway")
        service = ImportService(settings, strapi_client)

        with capture_logs() as logs:
            summary = await service.import_file(AUTHORS)

        failures = [e for e in logs if e["event"] == "row_import_failed"]
        assert failures[0]["strapi_error"] is None
        assert failures[0]["response"] == "Bad Gateway"
        assert summary.failures[0].status_code == 502

    @pytest.mark.asyncio
    async def test_trailing_delimiter_rows_post_aligned_values(self, settings, csv_dir, strapi_client, fake_strapi):
        (csv_dir / "Authors.csv").write_text("Slug,Title\njane-doe,Jane,\n")
        service = ImportService(settings, strapi_client)

        await service.import_file(AUTHORS)

        assert posted_data(fake_strapi.posts("authors")[0]) == {"slug": "jane-doe", "title": "Jane"}

    @pytest.mark.asyncio
    async def test_unreachable_backend_counts_failures(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(3))
        fake_strapi.unreachable("authors")
        service = ImportService(settings, strapi_client)

        summary = await service.import_file(AUTHORS)

        assert summary.attempted == 3
        assert summary.succeeded == 0
        assert all(f.status_code is None for f in summary.failures)

    @pytest.mark.asyncio
    async def test_completion_tally_logged(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(2))
        fake_strapi.fail_create("authors", 2)
        service = ImportService(settings, strapi_client)

        with capture_logs() as logs:
            await service.import_file(AUTHORS)

        done = [e for e in logs if e["event"] == "import_file_completed"][0]
        assert done["succeeded"] == 1
        assert done["attempted"] == 2


class TestFieldWarnings:

    @pytest.mark.asyncio
    async def test_transform_failure_still_creates_row(self, settings, csv_dir, strapi_client, fake_strapi):
        def explode(value, resolver):
            raise RuntimeError("cannot convert")

        mapping = ContentTypeMapping(
            file_name="Authors.csv",
            content_type="authors",
            fields={"Slug": rename("slug"), "Title": transform("title", explode)},
        )
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(2))
        service = ImportService(settings, strapi_client)

        summary = await service.import_file(mapping)

        assert summary.succeeded == 2
        assert summary.field_warnings == 2
        assert all("title" not in posted_data(r) for r in fake_strapi.posts())


# ===================
# ORDER & RELATIONS
# ===================

class TestPlanOrder:

    @pytest.mark.asyncio
    async def test_files_imported_in_plan_order(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(2))
        write_csv(csv_dir, "Blog.csv", BlogRowFactory.create_batch(2))
        service = ImportService(settings, strapi_client)

        report = await service.run_all([AUTHORS, BLOG])

        paths = [r.url.path for r in fake_strapi.posts()]
        assert paths == ["/api/authors", "/api/authors", "/api/blogs", "/api/blogs"]
        assert [s.file_name for s in report.summaries] == ["Authors.csv", "Blog.csv"]

    @pytest.mark.asyncio
    async def test_blog_links_author_imported_earlier(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", [AuthorRowFactory.create(Slug="jane-doe")])
        write_csv(csv_dir, "Blog.csv", [BlogRowFactory.create(Author="jane-doe", Featured="true")])
        service = ImportService(settings, strapi_client)

        await service.run_all([AUTHORS, BLOG])

        author_id = fake_strapi.created("authors")[0]["id"]
        blog = posted_data(fake_strapi.posts("blogs")[0])
        assert blog["author"] == {"connect": [author_id]}
        assert blog["featured"] is True

    @pytest.mark.asyncio
    async def test_unknown_author_omits_relation_not_row(self, settings, csv_dir, strapi_client, fake_strapi):
        write_csv(csv_dir, "Authors.csv", [AuthorRowFactory.create(Slug="jane-doe")])
        write_csv(csv_dir, "Blog.csv", [BlogRowFactory.create(Author="not-imported-yet")])
        service = ImportService(settings, strapi_client)

        report = await service.run_all([AUTHORS, BLOG])

        blog_summary = report.get("Blog.csv")
        assert blog_summary.succeeded == 1
        assert blog_summary.failures == []
        assert "author" not in posted_data(fake_strapi.posts("blogs")[0])


class TestNoDeduplication:

    @pytest.mark.asyncio
    async def test_rerun_submits_duplicates(self, settings, csv_dir, strapi_client, fake_strapi):
        """Re-running the same files creates every entry again."""
        write_csv(csv_dir, "Authors.csv", AuthorRowFactory.create_batch(3))
        service = ImportService(settings, strapi_client)

        first = await service.run_all([AUTHORS])
        second = await service.run_all([AUTHORS])

        assert first.succeeded == 3
        assert second.succeeded == 3
        assert len(fake_strapi.created("authors")) == 6
        slugs = [e["slug"] for e in fake_strapi.created("authors")]
        assert slugs[:3] == slugs[3:]
