"""In-memory implementation of the Product repository.

Satisfies ``IProductRepository`` with an insertion-ordered ``dict``
keyed by product id.  Error handling follows the Null Object pattern:
methods return ``None`` instead of raising; the Service Layer decides
how to translate a missing entity into an API response.

Every method runs under one re-entrant lock; ``atomic()`` exposes the
same lock so the service can make read-check-then-write sequences
atomic under concurrent callers.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple
from uuid import UUID

import structlog

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def _coerce_id(id: Any) -> Optional[UUID]:
    if isinstance(id, UUID):
        return id
    try:
        return UUID(str(id))
    except (TypeError, ValueError):
        return None


class ProductInMemoryRepository(IProductRepository):
    """Concrete Product repository backed by process memory."""

    def __init__(self) -> None:
        self._products: Dict[UUID, Product] = {}
        self._lock = threading.RLock()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            yield

    def _active(self) -> List[Product]:
        return [p for p in self._products.values() if p.is_active]

    def get_by_id(self, id: Any) -> Optional[Product]:
        """Retrieve an active product by id.

        Returns ``None`` for unknown, malformed or soft-deleted ids.
        """
        key = _coerce_id(id)
        if key is None:
            return None
        with self._lock:
            product = self._products.get(key)
        if product is None or not product.is_active:
            return None
        return product

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List active products, optionally filtered by exact attribute match.

        Examples of valid filters::

            {"stock": 0}
            {"name": "Widget"}
        """
        with self._lock:
            products = self._active()
        if filters:
            products = [
                p
                for p in products
                if all(getattr(p, key) == value for key, value in filters.items())
            ]
        return products

    def paginate(self, offset: int, limit: int) -> Tuple[List[Product], int]:
        with self._lock:
            active = self._active()
        return active[offset : offset + limit], len(active)

    def count(self) -> int:
        with self._lock:
            return sum(1 for p in self._products.values() if p.is_active)

    def save(self, entity: Product) -> Product:
        """Persist (create or replace) a product, keeping insertion order."""
        with self._lock:
            self._products[entity.id] = entity
        logger.debug("product.saved", product_id=str(entity.id))
        return entity

    def delete(self, id: Any) -> Optional[Product]:
        """Soft-delete an active product by id.

        Returns the deactivated product, or ``None`` when no active
        product exists with the given id (already deleted included).
        The record itself stays in the store.
        """
        with self._lock:
            product = self.get_by_id(id)
            if product is None:
                return None
            deleted = product.deactivated()
            self._products[deleted.id] = deleted
        logger.debug("product.deactivated", product_id=str(deleted.id))
        return deleted
