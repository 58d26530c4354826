"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
storage to the injected ``IProductRepository``.

Business rules enforced here:
- Only active products can be read, updated or deleted.
- Partial updates touch only the supplied fields (plus ``updated_at``).
- Soft delete flips ``is_active`` once; a second delete is NotFound.
- Field constraints are re-validated by the ``Product`` entity on
  every create and update.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import structlog

from modules.products.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from modules.products.dtos import PageMeta, ProductPage
from modules.products.exceptions import InvalidProductData, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    Each use-case runs inside ``repository.atomic()``.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new, active product.

        Raises:
            InvalidProductData: if any field violates its constraints.
        """
        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            stock=dto.stock,
        )
        with self._repo.atomic():
            product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id), name=product.name)
        return product

    def update_product(self, id: Any, dto: UpdateProductDTO) -> Product:
        """Merge the supplied fields into an active product.

        Raises:
            ProductNotFound: if the product does not exist or is inactive.
            InvalidProductData: if a supplied value violates its constraints.
        """
        log = logger.bind(product_id=str(id))
        changes = dto.changes()

        with self._repo.atomic():
            product = self._repo.get_by_id(id)
            if not product:
                log.warning("product.not_found", operation="update")
                raise ProductNotFound(f'Product with ID "{id}" not found')
            product = self._repo.save(product.with_changes(**changes))

        log.info("product.updated", fields=sorted(changes))
        return product

    def delete_product(self, id: Any) -> Product:
        """Soft-delete an active product and return it (``is_active=False``).

        Raises:
            ProductNotFound: if the product does not exist or was already
                deleted.
        """
        with self._repo.atomic():
            product = self._repo.delete(id)
        if not product:
            logger.warning("product.not_found", product_id=str(id), operation="delete")
            raise ProductNotFound(f'Product with ID "{id}" not found')
        logger.info("product.soft_deleted", product_id=str(id))
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> ProductPage:
        """Return one page of active products in creation order.

        A page past the end yields an empty ``data`` list, not an error.

        Raises:
            InvalidProductData: if ``page < 1`` or ``limit`` is outside
                ``[1, MAX_LIMIT]``.
        """
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise InvalidProductData("Page must be at least 1.", field="page")
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
            raise InvalidProductData(
                f"Limit must be between 1 and {MAX_LIMIT}.", field="limit"
            )

        offset = (page - 1) * limit
        with self._repo.atomic():
            data, total = self._repo.paginate(offset, limit)

        meta = PageMeta(
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )
        logger.info("product.listed", page=page, limit=limit, total=total, returned=len(data))
        return ProductPage(data=data, meta=meta)

    def get_product(self, id: Any) -> Product:
        """Retrieve a single active product by ID.

        Raises:
            ProductNotFound: if the product does not exist or is inactive.
        """
        with self._repo.atomic():
            product = self._repo.get_by_id(id)
        if not product:
            logger.warning("product.not_found", product_id=str(id), operation="retrieve")
            raise ProductNotFound(f'Product with ID "{id}" not found')
        logger.info("product.retrieved", product_id=str(id))
        return product
