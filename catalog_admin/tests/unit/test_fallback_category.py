"""
Unit tests for the fallback category provisioner.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from catalog_admin.app.core.exceptions import CatalogServiceError, ProvisioningError
from catalog_admin.app.schemas.category import CategoryNode
from catalog_admin.app.services.fallback_category import (
    FallbackCategoryProvisioner,
    find_fallback_category,
)


class TestFindFallbackCategory:
    def test_match_ignores_case(self):
        categories = [
            CategoryNode(id=1, name="Chairs"),
            CategoryNode(id=2, name="UNCATEGORIZED"),
        ]

        assert find_fallback_category(categories, "Uncategorized").id == 2

    def test_subcategory_with_same_name_is_not_a_match(self):
        categories = [CategoryNode(id=3, name="Uncategorized", parent_id=1)]

        assert find_fallback_category(categories, "Uncategorized") is None


class TestFallbackCategoryProvisioner:
    @pytest.fixture
    def provisioner(self, category_repository):
        return FallbackCategoryProvisioner(category_repository)

    @pytest.mark.asyncio
    async def test_creates_category_when_missing(self, provisioner, catalog_backend):
        category_id = await provisioner.ensure_fallback()

        assert category_id == 100
        created = catalog_backend.categories[100]
        assert created["name"] == "Uncategorized"
        assert created["parentId"] is None
        assert created["description"] == "Default category for relocated products"

    @pytest.mark.asyncio
    async def test_repeated_calls_return_same_category(
        self, provisioner, catalog_backend
    ):
        first = await provisioner.ensure_fallback()
        second = await provisioner.ensure_fallback()

        assert first == second
        names = [c["name"] for c in catalog_backend.categories.values()]
        assert names.count("Uncategorized") == 1
        assert len(catalog_backend.requests_for("POST", "/categories")) == 1

    @pytest.mark.asyncio
    async def test_reuses_existing_category(self, provisioner, catalog_backend):
        catalog_backend.add_category(77, "uncategorized")

        assert await provisioner.ensure_fallback() == 77
        assert catalog_backend.requests_for("POST", "/categories") == []

    @pytest.mark.asyncio
    async def test_subcategory_named_uncategorized_is_ignored(
        self, provisioner, catalog_backend
    ):
        catalog_backend.add_category(78, "Uncategorized", parent_id=20)

        assert await provisioner.ensure_fallback() == 100

    @pytest.mark.asyncio
    async def test_configured_name(self, category_repository, catalog_backend):
        provisioner = FallbackCategoryProvisioner(
            category_repository, name="Unsorted", description="Holding area"
        )

        category_id = await provisioner.ensure_fallback()

        assert catalog_backend.categories[category_id]["name"] == "Unsorted"

    @pytest.mark.asyncio
    async def test_creation_failure(self, provisioner, catalog_backend):
        catalog_backend.fail_category_create = True

        with pytest.raises(ProvisioningError) as exc_info:
            await provisioner.ensure_fallback()

        assert "Could not create category" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, CatalogServiceError)

    @pytest.mark.asyncio
    async def test_listing_failure_propagates(self):
        category_repository = Mock()
        category_repository.correlation_id = None
        category_repository.fetch_all = AsyncMock(
            side_effect=CatalogServiceError("Catalog service request timeout")
        )
        category_repository.create = AsyncMock()
        provisioner = FallbackCategoryProvisioner(category_repository)

        with pytest.raises(CatalogServiceError):
            await provisioner.ensure_fallback()

        category_repository.create.assert_not_awaited()
