"""
Test configuration and fixtures for the Link Preview API.

Network collaborators (HTTP fetches, headless Chrome, Bing) are always faked;
nothing here talks to the outside world.
"""

import base64
from typing import Generator
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from app.features.link_preview.routes.link_preview import get_link_preview_service
from app.features.link_preview.services.image_search_service import ImageSearchService
from app.features.link_preview.services.link_preview_service import LinkPreviewService
from app.features.link_preview.services.scraper_service import ScraperService
from app.platform.config import settings


def _encode_target_url(url: str) -> str:
    return base64.b64encode(quote(url, safe="").encode("utf-8")).decode("ascii")


@pytest.fixture
def encode_url():
    """Encode a URL the way clients put it in the request path."""
    return _encode_target_url


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    A clean TestClient per test keeps tests isolated from each other.
    """
    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture
def bing_key(monkeypatch):
    monkeypatch.setattr(settings, "AZURE_BING_SEARCH_KEY", "test-bing-key")
    return "test-bing-key"


@pytest.fixture
def mock_scraper():
    scraper = MagicMock(spec=ScraperService)
    scraper.scrape_meta_tags = AsyncMock()
    return scraper


@pytest.fixture
def mock_image_search():
    image_search = MagicMock(spec=ImageSearchService)
    image_search.search = AsyncMock()
    return image_search


@pytest.fixture
def preview_service(mock_scraper, mock_image_search):
    return LinkPreviewService(scraper=mock_scraper, image_search=mock_image_search)


@pytest.fixture
def preview_client(client, test_app, preview_service):
    """Client whose link preview service runs on mocked collaborators."""
    test_app.dependency_overrides[get_link_preview_service] = lambda: preview_service

    yield client

    test_app.dependency_overrides.pop(get_link_preview_service, None)
