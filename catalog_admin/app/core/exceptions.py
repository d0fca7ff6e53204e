"""
Catalog Admin error taxonomy.

Every failure of the category deletion workflow is raised as one of these so
callers can tell exactly what already happened on the remote catalog.
"""

from typing import Any, Dict, List, Optional

from ..schemas.deletion import RelocationResult


class CatalogAdminError(Exception):
    """Base class for all catalog admin errors"""

    error_type = "catalog_admin_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.error_type, "message": self.message, **self.details}


class CatalogServiceError(CatalogAdminError):
    """The remote catalog service rejected a request or could not be reached"""

    error_type = "catalog_service_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, {"status_code": status_code})
        self.status_code = status_code
        self.payload = payload or {}


class CategoryNotFoundError(CatalogAdminError):
    error_type = "not_found"

    def __init__(self, category_id: int):
        super().__init__(
            f"Category {category_id} not found", {"category_id": category_id}
        )
        self.category_id = category_id


class CategoryValidationError(CatalogAdminError):
    error_type = "validation_error"


class ProvisioningError(CatalogAdminError):
    error_type = "provisioning_error"


class CategoryConflictError(CatalogAdminError):
    error_type = "conflict"

    def __init__(
        self,
        message: str,
        active_products_count: Optional[int] = None,
        affected_category_ids: Optional[List[int]] = None,
    ):
        super().__init__(
            message,
            {
                "active_products_count": active_products_count,
                "affected_category_ids": affected_category_ids or [],
            },
        )
        self.active_products_count = active_products_count
        self.affected_category_ids = affected_category_ids or []


class PartialRelocationError(CatalogAdminError):
    """Some product moves failed; the category was left in place"""

    error_type = "partial_failure"

    def __init__(self, category_id: int, result: RelocationResult):
        total = len(result.results)
        super().__init__(
            f"Failed to move {result.failed_moves} out of {total} products. "
            "Cannot proceed with category deletion.",
            {
                "category_id": category_id,
                "target_category_id": result.target_category_id,
                "successful_moves": result.successful_moves,
                "failed_moves": result.failed_moves,
                "move_results": [item.model_dump() for item in result.results],
            },
        )
        self.category_id = category_id
        self.result = result


class DeleteAfterMoveError(CatalogAdminError):
    """Every product was relocated but the category itself could not be deleted"""

    error_type = "delete_after_move_error"

    def __init__(
        self,
        category_id: int,
        target_category_id: int,
        moved_products_count: int,
        reason: str,
    ):
        super().__init__(
            f"Products were moved successfully, but category deletion failed: {reason}",
            {
                "category_id": category_id,
                "target_category_id": target_category_id,
                "moved_products_count": moved_products_count,
            },
        )
        self.category_id = category_id
        self.target_category_id = target_category_id
        self.moved_products_count = moved_products_count
