"""
Pytest configuration and fixtures for catalog admin tests.
"""

import os

import httpx
import pytest

# Set up test environment variables before importing anything else
os.environ.setdefault("APP_NAME", "Catalog Admin Test")
os.environ.setdefault("APP_VERSION", "1.0.0")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SERVICE_NAME", "catalog-admin")
os.environ.setdefault("CATALOG_API_BASE_URL", "http://catalog.test/api")
os.environ.setdefault("REQUEST_TIMEOUT", "5")
os.environ.setdefault("CATEGORY_PAGE_SIZE", "50")
os.environ.setdefault("PRODUCT_PAGE_SIZE", "50")
os.environ.setdefault("FALLBACK_CATEGORY_NAME", "Uncategorized")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENABLE_FILE_LOGGING", "false")

from catalog_admin.app.clients.catalog_client import CatalogApiClient  # noqa: E402
from catalog_admin.app.repository import (  # noqa: E402
    CategoryRepository,
    ProductRepository,
)
from catalog_admin.app.services import CategoryDeletionOrchestrator  # noqa: E402
from catalog_admin.tests.catalog_backend import FakeCatalogBackend  # noqa: E402

CATALOG_API_BASE_URL = "http://catalog.test/api"


@pytest.fixture
def catalog_backend() -> FakeCatalogBackend:
    """
    Catalog seeded with the reference scenarios:

    10 Sofas             no products
    11 Chairs            501, 502, 503 active, 504 inactive
      12 Office Chairs   505, 506 active
    20 Furniture-General 601 active
    """
    backend = FakeCatalogBackend()
    backend.add_category(10, "Sofas", image="sofas.png")
    backend.add_category(11, "Chairs", image="chairs.png")
    backend.add_category(12, "Office Chairs", parent_id=11)
    backend.add_category(20, "Furniture-General")

    for product_id in (501, 502, 503):
        backend.add_product(product_id, 11)
    backend.add_product(504, 11, is_active=False)
    backend.add_product(505, 12)
    backend.add_product(506, 12)
    backend.add_product(601, 20)
    return backend


@pytest.fixture
async def catalog_client(catalog_backend):
    client = CatalogApiClient(
        CATALOG_API_BASE_URL,
        timeout=5,
        transport=httpx.MockTransport(catalog_backend.handler),
    )
    yield client
    await client.close()


@pytest.fixture
def category_repository(catalog_client) -> CategoryRepository:
    return CategoryRepository(catalog_client, page_size=50, correlation_id="test-run")


@pytest.fixture
def product_repository(catalog_client) -> ProductRepository:
    return ProductRepository(catalog_client, page_size=50, correlation_id="test-run")


@pytest.fixture
def orchestrator(category_repository, product_repository) -> CategoryDeletionOrchestrator:
    return CategoryDeletionOrchestrator(category_repository, product_repository)
