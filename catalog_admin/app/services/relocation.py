"""Sequential product relocation"""

from typing import Callable, List, Optional

from ..repository.product_repository import ProductRepository
from ..schemas.deletion import ProductMoveResult, RelocationResult
from ..schemas.product import Product
from ..utils.logging import setup_catalog_admin_logging

logger = setup_catalog_admin_logging("relocation")

ProgressCallback = Callable[[int, int, ProductMoveResult], None]


class RelocationExecutor:
    """Moves products to a target category one at a time, in the order given.

    A failed move does not stop the run; every product is attempted and the
    per-product outcome is returned. Products are never deleted or deactivated.
    """

    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def move_all(
        self,
        products: List[Product],
        target_category_id: int,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RelocationResult:
        result = RelocationResult(target_category_id=target_category_id)
        total = len(products)

        for index, product in enumerate(products, start=1):
            try:
                await self.product_repository.reassign_category(
                    product.id, target_category_id
                )
                move = ProductMoveResult(
                    product_id=product.id, product_name=product.name, success=True
                )
                logger.info(
                    "Product moved",
                    extra={
                        "product_id": product.id,
                        "from_category_id": product.category_id,
                        "target_category_id": target_category_id,
                        "progress": f"{index}/{total}",
                        "correlation_id": self.product_repository.correlation_id,
                    },
                )
            except Exception as e:
                move = ProductMoveResult(
                    product_id=product.id,
                    product_name=product.name,
                    success=False,
                    error=str(e) or type(e).__name__,
                )
                logger.error(
                    f"Failed to move product {product.id}: {str(e)}",
                    extra={
                        "product_id": product.id,
                        "from_category_id": product.category_id,
                        "target_category_id": target_category_id,
                        "progress": f"{index}/{total}",
                        "correlation_id": self.product_repository.correlation_id,
                        "error": str(e),
                    },
                    exc_info=True,
                )

            result.results.append(move)
            if on_progress is not None:
                on_progress(index, total, move)

        logger.info(
            "Product relocation finished",
            extra={
                "target_category_id": target_category_id,
                "successful_moves": result.successful_moves,
                "failed_moves": result.failed_moves,
                "correlation_id": self.product_repository.correlation_id,
            },
        )
        return result
