"""Catalog Admin Schemas"""

from .category import (
    CategoryCreate,
    CategoryImage,
    CategoryNode,
    CategoryOption,
    CategoryParentUpdate,
)
from .deletion import (
    AffectedCategory,
    DeletionImpactReport,
    DeletionOutcome,
    DeletionState,
    DeletionStatus,
    ProductMoveResult,
    RelocationResult,
)
from .product import Product

__all__ = [
    "CategoryCreate",
    "CategoryImage",
    "CategoryNode",
    "CategoryOption",
    "CategoryParentUpdate",
    "AffectedCategory",
    "DeletionImpactReport",
    "DeletionOutcome",
    "DeletionState",
    "DeletionStatus",
    "ProductMoveResult",
    "RelocationResult",
    "Product",
]
