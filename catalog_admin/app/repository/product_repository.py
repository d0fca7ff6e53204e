"""Product repository for remote catalog operations"""

from typing import Iterable, List, Optional

from ..clients.catalog_client import CatalogApiClient
from ..schemas.product import Product


class ProductRepository:
    """Repository for product operations against the catalog service"""

    def __init__(
        self,
        client: CatalogApiClient,
        page_size: int = 100,
        correlation_id: Optional[str] = None,
    ):
        self.client = client
        self.page_size = page_size
        self.correlation_id = correlation_id

    async def list_by_categories(self, category_ids: Iterable[int]) -> List[Product]:
        """Get all products (active or not) owned by any of the given categories"""
        ids = list(category_ids)
        if not ids:
            return []

        products: List[Product] = []
        page = 1

        while True:
            payload = await self.client.request(
                "GET",
                "/products",
                params={
                    "categoryId": ",".join(str(category_id) for category_id in ids),
                    "page": page,
                    "limit": self.page_size,
                    "sortBy": "createdAt",
                    "sortOrder": "ASC",
                },
                correlation_id=self.correlation_id,
            )
            batch = payload.get("products") or []
            products.extend(Product.model_validate(item) for item in batch)

            total_pages = payload.get("totalPages") or 1
            if not batch or page >= total_pages:
                break
            page += 1

        return products

    async def reassign_category(self, product_id: int, new_category_id: int) -> None:
        """Point a product at another category"""
        await self.client.request(
            "PUT",
            f"/products/{product_id}",
            data={"categoryId": str(new_category_id)},
            correlation_id=self.correlation_id,
        )
