"""Category repository for remote catalog operations"""

from typing import Any, Dict, List, Optional

from ..clients.catalog_client import CatalogApiClient
from ..core.exceptions import (
    CatalogServiceError,
    CategoryConflictError,
    CategoryNotFoundError,
    CategoryValidationError,
)
from ..schemas.category import CategoryCreate, CategoryNode
from ..utils.logging import setup_catalog_admin_logging

logger = setup_catalog_admin_logging("category_repository")


class CategoryRepository:
    """Repository for category operations against the catalog service"""

    def __init__(
        self,
        client: CatalogApiClient,
        page_size: int = 100,
        correlation_id: Optional[str] = None,
    ):
        self.client = client
        self.page_size = page_size
        self.correlation_id = correlation_id

    async def fetch_subtree(self, category_id: int) -> CategoryNode:
        """Get a category with all of its descendants"""
        try:
            payload = await self.client.request(
                "GET",
                f"/categories/{category_id}",
                params={"includeSubcategories": "true"},
                correlation_id=self.correlation_id,
            )
        except CatalogServiceError as e:
            if e.status_code == 404:
                raise CategoryNotFoundError(category_id) from e
            raise

        category = payload.get("category")
        if not category:
            raise CategoryNotFoundError(category_id)

        return CategoryNode.model_validate(category)

    async def fetch_all(self) -> List[CategoryNode]:
        """Get every category as a tree of top-level nodes"""
        categories: List[CategoryNode] = []
        page = 1

        while True:
            payload = await self.client.request(
                "GET",
                "/categories",
                params={
                    "page": page,
                    "limit": self.page_size,
                    "sortBy": "name",
                    "sortOrder": "ASC",
                    "includeSubcategories": "true",
                },
                correlation_id=self.correlation_id,
            )
            batch = payload.get("categories") or payload.get("paginatedCategories") or []
            categories.extend(CategoryNode.model_validate(item) for item in batch)

            total_pages = (payload.get("pagination") or {}).get("totalPages") or 1
            if not batch or page >= total_pages:
                break
            page += 1

        return categories

    async def create(self, category_data: CategoryCreate) -> CategoryNode:
        """Create a top-level category or a subcategory"""
        if category_data.parent_id is None:
            form: Dict[str, Any] = {"name": category_data.name}
            if category_data.description:
                form["description"] = category_data.description

            files = None
            if category_data.image is not None:
                files = {
                    "image": (
                        category_data.image.filename,
                        category_data.image.content,
                        category_data.image.content_type,
                    )
                }

            payload = await self.client.request(
                "POST",
                "/categories",
                data=form,
                files=files,
                correlation_id=self.correlation_id,
            )
        else:
            body: Dict[str, Any] = {"name": category_data.name}
            if category_data.description:
                body["description"] = category_data.description

            payload = await self.client.request(
                "POST",
                f"/categories/subcategory/{category_data.parent_id}",
                json=body,
                correlation_id=self.correlation_id,
            )

        category = payload.get("category") or payload.get("data")
        if not category:
            raise CatalogServiceError(
                "Catalog service did not return the created category",
                payload=payload,
            )

        created = CategoryNode.model_validate(category)
        logger.info(
            "Category created",
            extra={
                "category_id": created.id,
                "category_name": created.name,
                "parent_id": created.parent_id,
                "correlation_id": self.correlation_id,
            },
        )
        return created

    async def update_parent(
        self, category_id: int, new_parent_id: Optional[int]
    ) -> CategoryNode:
        """Move a category under another parent, or to the top level with None"""
        if new_parent_id == category_id:
            raise CategoryConflictError("Category cannot be its own parent")

        subtree = await self.fetch_subtree(category_id)

        if new_parent_id is not None:
            descendant_ids = [node.id for node in subtree.iter_descendants()]
            if new_parent_id in descendant_ids:
                raise CategoryConflictError(
                    "Cannot move a category under one of its own subcategories",
                    affected_category_ids=[category_id] + descendant_ids,
                )
            if subtree.image:
                raise CategoryValidationError(
                    "Subcategories cannot have images. Remove the image before "
                    "moving this category under a parent.",
                    {"category_id": category_id},
                )
            # Parent must exist
            await self.fetch_subtree(new_parent_id)

        payload = await self.client.request(
            "PUT",
            f"/categories/{category_id}",
            json={"parentId": new_parent_id},
            correlation_id=self.correlation_id,
        )

        logger.info(
            "Category parent updated",
            extra={
                "category_id": category_id,
                "old_parent_id": subtree.parent_id,
                "new_parent_id": new_parent_id,
                "correlation_id": self.correlation_id,
            },
        )

        category = payload.get("category") or payload.get("data")
        if category:
            return CategoryNode.model_validate(category)
        return subtree.model_copy(update={"parent_id": new_parent_id})

    async def delete(self, category_id: int) -> None:
        """Delete a category; the catalog refuses while it still has active products"""
        try:
            await self.client.request(
                "DELETE",
                f"/categories/{category_id}",
                correlation_id=self.correlation_id,
            )
        except CatalogServiceError as e:
            if e.status_code == 404:
                raise CategoryNotFoundError(category_id) from e
            if e.payload.get("canForceDelete"):
                raise CategoryConflictError(
                    e.message,
                    active_products_count=e.payload.get("activeProductsCount"),
                    affected_category_ids=e.payload.get("affectedCategoryIds"),
                ) from e
            raise

        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "correlation_id": self.correlation_id},
        )
