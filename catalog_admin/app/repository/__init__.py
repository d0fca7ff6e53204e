"""Repository layer for Catalog Admin"""

from .category_repository import CategoryRepository
from .product_repository import ProductRepository

__all__ = [
    "CategoryRepository",
    "ProductRepository",
]
