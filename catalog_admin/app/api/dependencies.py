"""
FastAPI dependency injection for Catalog Admin

Provides the catalog API client, repositories and the deletion workflow,
all scoped to the incoming request's correlation id.
"""

from typing import Optional

from fastapi import Depends, Request

from ..clients.catalog_client import CatalogApiClient
from ..core.settings import get_settings
from ..repository.category_repository import CategoryRepository
from ..repository.product_repository import ProductRepository
from ..services.category_deletion import CategoryDeletionOrchestrator
from ..services.fallback_category import FallbackCategoryProvisioner

# =====================================================
# REQUEST CONTEXT DEPENDENCIES
# =====================================================


def get_correlation_id(request: Request) -> Optional[str]:
    """Extract correlation ID from request headers or state"""
    correlation_id = request.headers.get("X-Correlation-ID") or request.headers.get(
        "x-request-id"
    )

    # Fallback to request state (from middleware)
    if not correlation_id:
        correlation_id = getattr(request.state, "correlation_id", None)

    return correlation_id


# =====================================================
# CATALOG CLIENT & REPOSITORY DEPENDENCIES
# =====================================================


def get_catalog_client(request: Request) -> CatalogApiClient:
    """Provide the shared catalog API client created at startup"""
    return request.app.state.catalog_client


def get_category_repository(
    client: CatalogApiClient = Depends(get_catalog_client),
    correlation_id: Optional[str] = Depends(get_correlation_id),
) -> CategoryRepository:
    settings = get_settings()
    return CategoryRepository(
        client, page_size=settings.CATEGORY_PAGE_SIZE, correlation_id=correlation_id
    )


def get_product_repository(
    client: CatalogApiClient = Depends(get_catalog_client),
    correlation_id: Optional[str] = Depends(get_correlation_id),
) -> ProductRepository:
    settings = get_settings()
    return ProductRepository(
        client, page_size=settings.PRODUCT_PAGE_SIZE, correlation_id=correlation_id
    )


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_fallback_provisioner(
    category_repository: CategoryRepository = Depends(get_category_repository),
) -> FallbackCategoryProvisioner:
    settings = get_settings()
    return FallbackCategoryProvisioner(
        category_repository,
        name=settings.FALLBACK_CATEGORY_NAME,
        description=settings.FALLBACK_CATEGORY_DESCRIPTION,
    )


def get_deletion_orchestrator(
    category_repository: CategoryRepository = Depends(get_category_repository),
    product_repository: ProductRepository = Depends(get_product_repository),
    provisioner: FallbackCategoryProvisioner = Depends(get_fallback_provisioner),
) -> CategoryDeletionOrchestrator:
    """Provide a fresh deletion workflow for this request"""
    return CategoryDeletionOrchestrator(
        category_repository, product_repository, provisioner=provisioner
    )


# =====================================================
# COMMON DEPENDENCY ALIASES
# =====================================================

CorrelationIdDep = Depends(get_correlation_id)
CategoryRepositoryDep = Depends(get_category_repository)
FallbackProvisionerDep = Depends(get_fallback_provisioner)
DeletionOrchestratorDep = Depends(get_deletion_orchestrator)
