"""Product repository interface.

Extends ``IRepository[Product]`` with the paginated, active-only
look-ups the listing endpoint needs.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Tuple

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    Only active products are visible through this contract: inactive
    (soft-deleted) records behave exactly as if they did not exist.
    """

    @abstractmethod
    def paginate(self, offset: int, limit: int) -> Tuple[List[Product], int]:
        """Return the active products in ``[offset, offset + limit)``
        (insertion order) together with the total active count."""

    @abstractmethod
    def count(self) -> int:
        """Number of active products."""
