"""Service layer for Catalog Admin"""

from .category_deletion import CategoryDeletionOrchestrator
from .deletion_impact import DeletionImpactAnalyzer
from .fallback_category import FallbackCategoryProvisioner
from .relocation import RelocationExecutor

__all__ = [
    "CategoryDeletionOrchestrator",
    "DeletionImpactAnalyzer",
    "FallbackCategoryProvisioner",
    "RelocationExecutor",
]
