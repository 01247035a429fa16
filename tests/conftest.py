"""
Pytest configuration and shared fixtures for the design directory search tests.
"""
import os
import sys
from typing import Generator, List
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def sample_resource_dict() -> dict:
    """Sample catalog record as it appears in resources.json (camelCase)."""
    return {
        "id": 1,
        "name": "Figma",
        "url": "https://figma.com",
        "description": "Collaborative interface design tool for teams",
        "category": "Tools",
        "subCategory": "Design",
        "pricing": "Freemium",
        "tags": ["design", "prototyping", "ui", "collaboration"],
        "gravityScore": 9.5,
        "featured": True,
        "opensource": False,
    }


@pytest.fixture
def catalog_records(sample_resource_dict: dict) -> List[dict]:
    """A small catalog covering every category."""
    return [
        sample_resource_dict,
        {
            "id": 2, "name": "Cursor", "url": "https://cursor.com",
            "description": "AI-first code editor built for pair programming",
            "category": "AI", "subCategory": "Development", "pricing": "Freemium",
            "tags": ["ai", "code", "editor"], "gravityScore": 9.3,
        },
        {
            "id": 3, "name": "Midjourney", "url": "https://midjourney.com",
            "description": "Generate striking images from text prompts",
            "category": "AI", "subCategory": "Generative", "pricing": "Paid",
            "tags": ["ai", "image generation", "art"], "gravityScore": 9.0,
        },
        {
            "id": 4, "name": "Penpot", "url": "https://penpot.app",
            "description": "Open source design and prototyping platform",
            "category": "Tools", "subCategory": "Design", "pricing": "Free",
            "tags": ["design", "prototyping", "open source"], "gravityScore": 8.2,
            "opensource": True,
        },
        {
            "id": 5, "name": "Dribbble", "url": "https://dribbble.com",
            "description": "Showcase of work from designers around the world",
            "category": "Inspiration", "subCategory": "Galleries", "pricing": "Freemium",
            "tags": ["inspiration", "showcase", "portfolio"], "gravityScore": 8.8,
        },
        {
            "id": 6, "name": "Unsplash", "url": "https://unsplash.com",
            "description": "Beautiful free photos for any project",
            "category": "Templates", "subCategory": "Assets", "pricing": "Free",
            "tags": ["photos", "stock", "images"], "gravityScore": 8.9,
        },
        {
            "id": 7, "name": "Coolors", "url": "https://coolors.co",
            "description": "Fast color palette generator",
            "category": "Tools", "subCategory": "Color", "pricing": "Free",
            "tags": ["color", "palettes"], "gravityScore": 8.0,
        },
        {
            "id": 8, "name": "Refactoring UI", "url": "https://refactoringui.com",
            "description": "Learn to design beautiful user interfaces by yourself",
            "category": "Learning", "subCategory": "Guides", "pricing": "Paid",
            "tags": ["ui", "design", "book"], "gravityScore": 8.5,
        },
        {
            "id": 9, "name": "Designer News", "url": "https://designernews.co",
            "description": "Where the design community meets",
            "category": "Community", "subCategory": "Forums", "pricing": "Free",
            "tags": ["news", "discussion"], "gravityScore": 7.6,
        },
    ]


@pytest.fixture
def catalog(catalog_records: List[dict]):
    """Catalog as Resource models."""
    from search.models import Resource
    return [Resource.model_validate(record) for record in catalog_records]


@pytest.fixture
def figma(catalog):
    return catalog[0]


@pytest.fixture
def catalog_file(tmp_path, catalog_records: List[dict]):
    """Catalog written to a temporary JSON file."""
    import json
    path = tmp_path / "resources.json"
    path.write_text(json.dumps(catalog_records), encoding="utf-8")
    return path


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

@pytest.fixture
def mock_openai_client():
    """Mock OpenAI client returning a fixed JSON parse."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = (
        '{"intent": "filter", "filters": {"pricing": ["Free"], "categories": ["Tools"]}, '
        '"concepts": [], "semanticTerms": ["tools"], "confidence": "high"}'
    )
    mock_client.chat.completions.create.return_value = mock_response
    return mock_client


class StubTransport:
    """Synchronous parse transport returning a canned payload (or raising)."""

    def __init__(self, payload=None, error: Exception = None, delay: float = 0.0):
        self.payload = payload if payload is not None else {}
        self.error = error
        self.delay = delay
        self.calls: List[str] = []

    def fetch(self, query: str) -> dict:
        import time
        self.calls.append(query)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def stub_transport_factory():
    return StubTransport


# ============================================================================
# Fixtures: Process singletons
# ============================================================================

@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Clear cached settings, catalog, parse service and rate limits around each test."""
    from config.settings import get_settings
    from core.rate_limit import get_parse_rate_limiter
    from search.catalog import reset_catalog
    from search.parse_service import reset_parse_service

    get_settings.cache_clear()
    reset_catalog()
    reset_parse_service()
    get_parse_rate_limiter().reset()
    yield
    get_settings.cache_clear()
    reset_catalog()
    reset_parse_service()
    get_parse_rate_limiter().reset()


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app(catalog):
    """FastAPI application with the test catalog preloaded."""
    from api.app import create_app
    from search.catalog import set_catalog

    set_catalog(catalog)
    return create_app()


@pytest.fixture
def client(app):
    """Sync HTTP client; runs the lifespan handler."""
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "slow: marks tests as slow")
