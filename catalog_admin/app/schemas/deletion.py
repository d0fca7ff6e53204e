from enum import Enum
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from .product import Product


class DeletionState(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    DIRECT_DELETE = "direct_delete"
    AWAITING_TARGET = "awaiting_target"
    RELOCATING = "relocating"
    DELETING = "deleting"
    DONE = "done"
    ABORTED = "aborted"
    FAILED = "failed"


class DeletionStatus(str, Enum):
    DELETED = "deleted"
    CANCELLED = "cancelled"


class AffectedCategory(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    active_products_count: int = 0


class DeletionImpactReport(BaseModel):
    """Impact of deleting a category subtree, computed on demand and never stored"""

    category_id: int
    category_name: str
    can_delete: bool
    affected_subcategories: List[AffectedCategory] = Field(default_factory=list)
    affected_products: List[Product] = Field(default_factory=list)
    total_affected_products: int = 0
    active_products_by_category: Dict[int, int] = Field(default_factory=dict)

    @property
    def excluded_category_ids(self) -> Set[int]:
        """The category under deletion plus every descendant"""
        return {self.category_id} | {
            category.id for category in self.affected_subcategories
        }


class ProductMoveResult(BaseModel):
    product_id: int
    product_name: Optional[str] = None
    success: bool
    error: Optional[str] = None


class RelocationResult(BaseModel):
    target_category_id: int
    results: List[ProductMoveResult] = Field(default_factory=list)

    @property
    def successful_moves(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failed_moves(self) -> int:
        return sum(1 for result in self.results if not result.success)

    @property
    def failed_product_ids(self) -> List[int]:
        return [result.product_id for result in self.results if not result.success]


class DeletionOutcome(BaseModel):
    status: DeletionStatus
    category_id: int
    deleted_category_id: Optional[int] = None
    moved_products_count: int = 0
    target_category_id: Optional[int] = None
    used_fallback: bool = False
    move_results: List[ProductMoveResult] = Field(default_factory=list)
    states: List[DeletionState] = Field(default_factory=list)
    message: str
