"""
Shared test fixtures.

The Strapi backend is faked in memory behind httpx.MockTransport, so the
real StrapiClient (URL building, headers, error mapping) runs in every test.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import httpx
import pytest

from config.settings import Settings
from services.strapi_client import StrapiClient
from tests.factories import FakeStrapi

STRAPI_URL = "http://strapi.test"


# ===================
# FIXTURES
# ===================

@pytest.fixture
def fake_strapi() -> FakeStrapi:
    """
    Create an empty fake backend.

    Usage:
        def test_something(fake_strapi, strapi_client):
            fake_strapi.seed("authors", 42, slug="jane-doe")
    """
    return FakeStrapi()


@pytest.fixture
def strapi_client(fake_strapi) -> StrapiClient:
    """Real StrapiClient wired to the fake backend, with a token."""
    return StrapiClient(
        STRAPI_URL,
        token="test-token",
        transport=httpx.MockTransport(fake_strapi.handler),
    )


@pytest.fixture
def anonymous_client(fake_strapi) -> StrapiClient:
    """StrapiClient without credentials."""
    return StrapiClient(
        STRAPI_URL,
        token=None,
        transport=httpx.MockTransport(fake_strapi.handler),
    )


@pytest.fixture
def csv_dir(tmp_path) -> Path:
    """Empty source directory for one test."""
    directory = tmp_path / "csv-imports"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(csv_dir) -> Settings:
    """Settings pointing at the temp CSV dir and the fake backend."""
    return Settings(
        csv_dir=csv_dir,
        strapi_url=STRAPI_URL,
        strapi_token="test-token",
        _env_file=None,
    )
