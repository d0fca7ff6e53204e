"""
Category deletion workflow.

Deletes a category subtree after relocating its active products. The
category is only deleted once every affected product has been moved; any
failed move aborts the run and leaves the category in place. Products that
were already moved before the abort stay where they are.
"""

from typing import List, Optional, Set

from ..core.exceptions import (
    CatalogAdminError,
    CategoryConflictError,
    CategoryValidationError,
    DeleteAfterMoveError,
    PartialRelocationError,
)
from ..repository.category_repository import CategoryRepository
from ..repository.product_repository import ProductRepository
from ..schemas.category import CategoryOption
from ..schemas.deletion import (
    DeletionImpactReport,
    DeletionOutcome,
    DeletionState,
    DeletionStatus,
)
from ..utils.logging import setup_catalog_admin_logging
from .deletion_impact import DeletionImpactAnalyzer
from .fallback_category import FallbackCategoryProvisioner
from .relocation import ProgressCallback, RelocationExecutor
from .target_selection import (
    SelectionOutcome,
    TargetSelection,
    list_relocation_candidates,
)

logger = setup_catalog_admin_logging("category_deletion")

NO_VALID_TARGET_MESSAGE = "No valid target categories available for product relocation"


class CategoryDeletionOrchestrator:
    """Entry point for deleting a category together with its subcategories"""

    def __init__(
        self,
        category_repository: CategoryRepository,
        product_repository: ProductRepository,
        analyzer: Optional[DeletionImpactAnalyzer] = None,
        provisioner: Optional[FallbackCategoryProvisioner] = None,
        executor: Optional[RelocationExecutor] = None,
    ):
        self.category_repository = category_repository
        self.product_repository = product_repository
        self.analyzer = analyzer or DeletionImpactAnalyzer(
            category_repository, product_repository
        )
        self.provisioner = provisioner or FallbackCategoryProvisioner(
            category_repository
        )
        self.executor = executor or RelocationExecutor(product_repository)
        self.state = DeletionState.IDLE
        self.states: List[DeletionState] = []

    def _transition(self, state: DeletionState, category_id: int) -> None:
        logger.info(
            "Category deletion state changed",
            extra={
                "category_id": category_id,
                "from_state": self.state.value,
                "to_state": state.value,
                "correlation_id": self.category_repository.correlation_id,
            },
        )
        self.state = state
        self.states.append(state)

    async def _candidates(self, excluded_ids: Set[int]) -> List[CategoryOption]:
        categories = await self.category_repository.fetch_all()
        return list_relocation_candidates(categories, excluded_ids)

    async def relocation_candidates(self, category_id: int) -> List[CategoryOption]:
        """Categories that may receive the products of `category_id`"""
        report = await self.analyzer.analyze(category_id)
        return await self._candidates(report.excluded_category_ids)

    async def delete(
        self,
        category_id: int,
        explicit_target_id: Optional[int] = None,
        selector: Optional[TargetSelection] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> DeletionOutcome:
        """
        Delete a category, relocating its active products first if it has any.

        The target is `explicit_target_id` when given, otherwise whatever
        `selector` chooses, otherwise the fallback category.

        Returns a cancelled outcome when the selector cancels. Raises
        CategoryNotFoundError, CategoryValidationError, ProvisioningError,
        CategoryConflictError, PartialRelocationError or DeleteAfterMoveError.
        """
        self.state = DeletionState.IDLE
        self.states = [DeletionState.IDLE]

        self._transition(DeletionState.ANALYZING, category_id)
        try:
            report = await self.analyzer.analyze(category_id)
        except CatalogAdminError:
            self._transition(DeletionState.FAILED, category_id)
            raise

        if report.can_delete:
            return await self._delete_directly(report)

        return await self._relocate_and_delete(
            report, explicit_target_id, selector, on_progress
        )

    async def _delete_directly(self, report: DeletionImpactReport) -> DeletionOutcome:
        category_id = report.category_id
        self._transition(DeletionState.DIRECT_DELETE, category_id)

        try:
            await self.category_repository.delete(category_id)
        except CatalogAdminError:
            self._transition(DeletionState.FAILED, category_id)
            raise

        self._transition(DeletionState.DONE, category_id)
        return DeletionOutcome(
            status=DeletionStatus.DELETED,
            category_id=category_id,
            deleted_category_id=category_id,
            states=list(self.states),
            message="Category deleted successfully",
        )

    async def _relocate_and_delete(
        self,
        report: DeletionImpactReport,
        explicit_target_id: Optional[int],
        selector: Optional[TargetSelection],
        on_progress: Optional[ProgressCallback],
    ) -> DeletionOutcome:
        category_id = report.category_id
        excluded_ids = report.excluded_category_ids
        self._transition(DeletionState.AWAITING_TARGET, category_id)

        try:
            candidates = await self._candidates(excluded_ids)
        except CatalogAdminError:
            self._transition(DeletionState.ABORTED, category_id)
            raise

        if not candidates:
            self._transition(DeletionState.ABORTED, category_id)
            raise CategoryValidationError(
                NO_VALID_TARGET_MESSAGE,
                {
                    "category_id": category_id,
                    "total_affected_products": report.total_affected_products,
                },
            )

        target_id = explicit_target_id
        if target_id is None and selector is not None:
            choice = await selector.choose(candidates, report.total_affected_products)
            if choice == SelectionOutcome.CANCELLED:
                self._transition(DeletionState.ABORTED, category_id)
                logger.info(
                    "Category deletion cancelled at target selection",
                    extra={
                        "category_id": category_id,
                        "correlation_id": self.category_repository.correlation_id,
                    },
                )
                return DeletionOutcome(
                    status=DeletionStatus.CANCELLED,
                    category_id=category_id,
                    states=list(self.states),
                    message="Deletion cancelled",
                )
            if choice != SelectionOutcome.AUTOMATIC:
                target_id = int(choice)

        used_fallback = target_id is None
        if used_fallback:
            try:
                target_id = await self.provisioner.ensure_fallback()
            except CatalogAdminError:
                self._transition(DeletionState.ABORTED, category_id)
                raise

        # Re-checked here even if the selector only offered valid candidates
        if target_id in excluded_ids:
            self._transition(DeletionState.ABORTED, category_id)
            raise CategoryConflictError(
                "Cannot move products to a category that is being deleted",
                affected_category_ids=sorted(excluded_ids),
            )

        self._transition(DeletionState.RELOCATING, category_id)
        result = await self.executor.move_all(
            report.affected_products, target_id, on_progress=on_progress
        )

        if result.failed_moves > 0:
            self._transition(DeletionState.ABORTED, category_id)
            logger.warning(
                "Category deletion aborted after failed product moves",
                extra={
                    "category_id": category_id,
                    "target_category_id": target_id,
                    "successful_moves": result.successful_moves,
                    "failed_moves": result.failed_moves,
                    "failed_product_ids": result.failed_product_ids,
                    "correlation_id": self.category_repository.correlation_id,
                },
            )
            raise PartialRelocationError(category_id, result)

        self._transition(DeletionState.DELETING, category_id)
        try:
            await self.category_repository.delete(category_id)
        except CatalogAdminError as e:
            self._transition(DeletionState.FAILED, category_id)
            logger.error(
                "Category deletion failed after moving products",
                extra={
                    "category_id": category_id,
                    "target_category_id": target_id,
                    "moved_products_count": result.successful_moves,
                    "correlation_id": self.category_repository.correlation_id,
                    "error": e.message,
                },
            )
            raise DeleteAfterMoveError(
                category_id, target_id, result.successful_moves, e.message
            ) from e

        self._transition(DeletionState.DONE, category_id)
        return DeletionOutcome(
            status=DeletionStatus.DELETED,
            category_id=category_id,
            deleted_category_id=category_id,
            moved_products_count=result.successful_moves,
            target_category_id=target_id,
            used_fallback=used_fallback,
            move_results=list(result.results),
            states=list(self.states),
            message=(
                "Category deleted successfully. "
                f"{result.successful_moves} products were relocated."
            ),
        )
