"""Provisioning of the default "Uncategorized" relocation target"""

from typing import Iterable, Optional

from ..core.exceptions import CatalogAdminError, ProvisioningError
from ..repository.category_repository import CategoryRepository
from ..schemas.category import CategoryCreate, CategoryNode
from ..utils.logging import setup_catalog_admin_logging

logger = setup_catalog_admin_logging("fallback_category")

DEFAULT_FALLBACK_NAME = "Uncategorized"
DEFAULT_FALLBACK_DESCRIPTION = "Default category for relocated products"


def find_fallback_category(
    categories: Iterable[CategoryNode], name: str
) -> Optional[CategoryNode]:
    """Top-level category whose name matches `name`, ignoring case"""
    wanted = name.casefold()
    for category in categories:
        if category.parent_id is None and category.name.casefold() == wanted:
            return category
    return None


class FallbackCategoryProvisioner:
    """Finds or creates the holding category for products with no explicit target"""

    def __init__(
        self,
        category_repository: CategoryRepository,
        name: str = DEFAULT_FALLBACK_NAME,
        description: str = DEFAULT_FALLBACK_DESCRIPTION,
    ):
        self.category_repository = category_repository
        self.name = name
        self.description = description

    async def ensure_fallback(self) -> int:
        """Return the fallback category id, creating the category if needed"""
        categories = await self.category_repository.fetch_all()
        existing = find_fallback_category(categories, self.name)
        if existing is not None:
            return existing.id

        logger.info(
            "Creating fallback category",
            extra={
                "category_name": self.name,
                "correlation_id": self.category_repository.correlation_id,
            },
        )

        try:
            created = await self.category_repository.create(
                CategoryCreate(name=self.name, description=self.description)
            )
        except CatalogAdminError as e:
            logger.error(
                f"Failed to create fallback category: {e.message}",
                extra={
                    "category_name": self.name,
                    "correlation_id": self.category_repository.correlation_id,
                    "error": e.message,
                },
            )
            raise ProvisioningError(
                f"Failed to create {self.name} category: {e.message}",
                {"category_name": self.name},
            ) from e

        return created.id
