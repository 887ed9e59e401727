"""
Shared fixtures for the sitemap generator tests.
"""

from unittest.mock import MagicMock

import pytest

from seo_sitemap.generator import SitemapGenerator
from seo_sitemap.storage import LocalFileSystem

TEST_DOMAIN = "http://example.com"


@pytest.fixture
def fs(tmp_path):
    return LocalFileSystem(tmp_path)


@pytest.fixture
def runtime():
    """Runtime collaborator that answers every ping with HTTP 200."""
    mock_runtime = MagicMock()
    mock_runtime.http_get.return_value = (200, "Sitemap notification received")
    return mock_runtime


@pytest.fixture
def generator(fs, runtime):
    return SitemapGenerator(TEST_DOMAIN, "", fs, runtime)
