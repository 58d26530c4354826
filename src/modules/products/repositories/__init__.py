"""Product repositories package."""

from functools import lru_cache

from modules.products.repositories.interfaces import IProductRepository
from modules.products.repositories.memory_repository import ProductInMemoryRepository


@lru_cache(maxsize=None)
def get_product_repository() -> IProductRepository:
    """Return the process-wide product store."""
    return ProductInMemoryRepository()


__all__ = ["IProductRepository", "ProductInMemoryRepository", "get_product_repository"]
