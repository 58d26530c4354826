"""Product entity with positive price and stock control.

Business rules implemented:
- Name must be a non-blank string.
- Price must be greater than zero.
- Stock cannot be negative.
- Soft delete via ``is_active``: once ``False`` it never reverts.

``Product`` is an immutable value object.  The store keeps its own
instances and swaps them on every mutation, so callers only ever hold
snapshots and cannot change stored state behind the store's back.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID, uuid4

from django.utils import timezone

from modules.products.exceptions import InvalidProductData


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidProductData("Price must be a number.", field="price")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidProductData("Price must be a number.", field="price") from exc
    if not price.is_finite():
        raise InvalidProductData("Price must be a finite number.", field="price")
    return price


@dataclass(frozen=True)
class Product:
    """Product aggregate root."""

    name: str
    price: Decimal
    stock: int
    description: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    is_active: bool = True
    created_at: datetime = field(default_factory=timezone.now)
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            object.__setattr__(self, "updated_at", self.created_at)
        self.clean()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidProductData("Name must not be empty.", field="name")
        if self.description is not None and not isinstance(self.description, str):
            raise InvalidProductData("Description must be a string.", field="description")

        price = _to_decimal(self.price)
        if price <= 0:
            raise InvalidProductData("Price must be greater than zero.", field="price")
        object.__setattr__(self, "price", price)

        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise InvalidProductData("Stock must be an integer.", field="stock")
        if self.stock < 0:
            raise InvalidProductData("Stock cannot be negative.", field="stock")

        if self.updated_at < self.created_at:
            raise InvalidProductData("updated_at cannot precede created_at.")

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def with_changes(self, **changes: Any) -> Product:
        """Return a copy with ``changes`` merged and ``updated_at`` refreshed.

        ``id``, ``created_at`` and ``is_active`` are not changeable here.
        """
        frozen = {"id", "created_at", "is_active", "updated_at"} & changes.keys()
        if frozen:
            raise InvalidProductData(
                f"Field '{sorted(frozen)[0]}' cannot be updated.", field=sorted(frozen)[0]
            )
        return dataclasses.replace(self, updated_at=self._touch(), **changes)

    def deactivated(self) -> Product:
        """Return the soft-deleted copy of this product."""
        return dataclasses.replace(self, is_active=False, updated_at=self._touch())

    def _touch(self) -> datetime:
        # updated_at never precedes created_at.
        return max(timezone.now(), self.created_at)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.id} - {self.name}"
