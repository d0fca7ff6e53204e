"""Deletion impact analysis for category subtrees"""

from collections import defaultdict
from typing import Dict, List

from ..repository.category_repository import CategoryRepository
from ..repository.product_repository import ProductRepository
from ..schemas.deletion import AffectedCategory, DeletionImpactReport
from ..schemas.product import Product
from ..utils.logging import setup_catalog_admin_logging

logger = setup_catalog_admin_logging("deletion_impact")


class DeletionImpactAnalyzer:
    """Works out what deleting a category would orphan. Read-only."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        product_repository: ProductRepository,
    ):
        self.category_repository = category_repository
        self.product_repository = product_repository

    async def analyze(self, category_id: int) -> DeletionImpactReport:
        """
        Build the impact report for deleting `category_id`.

        The subtree and its products are read fresh on every call; the
        product counts cached on category nodes are ignored. Only active
        products count as affected.

        Raises:
            CategoryNotFoundError: if the category does not exist
        """
        root = await self.category_repository.fetch_subtree(category_id)
        descendants = list(root.iter_descendants())
        subtree_ids = [root.id] + [node.id for node in descendants]

        products = await self.product_repository.list_by_categories(subtree_ids)

        active_by_category: Dict[int, List[Product]] = defaultdict(list)
        for product in products:
            if product.is_active and product.category_id in subtree_ids:
                active_by_category[product.category_id].append(product)

        # Root products first, then descendants in tree order
        affected_products = [
            product
            for node_id in subtree_ids
            for product in active_by_category.get(node_id, [])
        ]

        affected_subcategories = [
            AffectedCategory(
                id=node.id,
                name=node.name,
                parent_id=node.parent_id,
                active_products_count=len(active_by_category.get(node.id, [])),
            )
            for node in descendants
        ]

        report = DeletionImpactReport(
            category_id=root.id,
            category_name=root.name,
            can_delete=not affected_products,
            affected_subcategories=affected_subcategories,
            affected_products=affected_products,
            total_affected_products=len(affected_products),
            active_products_by_category={
                node_id: len(active_by_category.get(node_id, []))
                for node_id in subtree_ids
            },
        )

        logger.info(
            "Deletion impact analyzed",
            extra={
                "category_id": category_id,
                "can_delete": report.can_delete,
                "affected_subcategories": len(affected_subcategories),
                "total_affected_products": report.total_affected_products,
                "correlation_id": self.category_repository.correlation_id,
            },
        )

        return report
