"""Category deletion API endpoints"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Query

from ...repository.category_repository import CategoryRepository
from ...schemas.category import CategoryNode, CategoryOption, CategoryParentUpdate
from ...schemas.deletion import DeletionImpactReport, DeletionOutcome
from ...services.category_deletion import CategoryDeletionOrchestrator
from ...services.fallback_category import FallbackCategoryProvisioner
from ...services.target_selection import PreselectedTarget
from ...utils.logging import setup_catalog_admin_logging
from ..dependencies import (
    CategoryRepositoryDep,
    CorrelationIdDep,
    DeletionOrchestratorDep,
    FallbackProvisionerDep,
)

logger = setup_catalog_admin_logging("categories_api")
router = APIRouter(prefix="/categories")


@router.get("/{category_id}/deletion-impact", response_model=DeletionImpactReport)
async def get_deletion_impact(
    category_id: int,
    orchestrator: CategoryDeletionOrchestrator = DeletionOrchestratorDep,
):
    """Active products and subcategories affected by deleting a category"""
    return await orchestrator.analyzer.analyze(category_id)


@router.get("/{category_id}/relocation-targets", response_model=List[CategoryOption])
async def get_relocation_targets(
    category_id: int,
    orchestrator: CategoryDeletionOrchestrator = DeletionOrchestratorDep,
):
    """Categories that may receive the products of a category being deleted"""
    return await orchestrator.relocation_candidates(category_id)


@router.delete("/{category_id}", response_model=DeletionOutcome)
async def delete_category(
    category_id: int,
    target_category_id: Optional[int] = Query(None, gt=0),
    correlation_id: Optional[str] = CorrelationIdDep,
    orchestrator: CategoryDeletionOrchestrator = DeletionOrchestratorDep,
):
    """Delete a category, moving its active products first.

    Without `target_category_id` the products go to the fallback category.
    """
    outcome = await orchestrator.delete(
        category_id, selector=PreselectedTarget(target_category_id)
    )

    logger.info(
        "Category deletion request completed",
        extra={
            "category_id": category_id,
            "status": outcome.status.value,
            "moved_products_count": outcome.moved_products_count,
            "target_category_id": outcome.target_category_id,
            "correlation_id": correlation_id,
        },
    )
    return outcome


@router.put("/{category_id}/parent", response_model=CategoryNode)
async def update_category_parent(
    category_id: int,
    parent_data: CategoryParentUpdate,
    category_repository: CategoryRepository = CategoryRepositoryDep,
):
    """Move a category under another parent, or to the top level"""
    return await category_repository.update_parent(category_id, parent_data.parent_id)


@router.post("/fallback", response_model=Dict[str, int])
async def ensure_fallback_category(
    provisioner: FallbackCategoryProvisioner = FallbackProvisionerDep,
):
    """Find or create the category that receives relocated products by default"""
    category_id = await provisioner.ensure_fallback()
    return {"category_id": category_id}
