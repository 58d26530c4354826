"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``) and reject unknown
fields (``extra="forbid"``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``PaginationQueryDTO``: ``page`` / ``limit`` query parameters.
- ``ProductPage`` / ``PageMeta``: paginated listing output.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator, model_validator

from modules.products.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, UPDATABLE_FIELDS

if TYPE_CHECKING:
    from modules.products.models import Product


def _require_number(v: Any) -> Any:
    # JSON numbers only: no strings, no booleans.
    if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
        raise ValueError("Price must be a number.")
    if isinstance(v, float):
        # 19.99 stays Decimal("19.99"), not its binary expansion.
        return Decimal(str(v))
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string.
    - ``price`` is a number greater than zero.
    - ``stock`` is a non-negative integer.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: StrictStr
    price: Decimal = Field(allow_inf_nan=False)
    stock: StrictInt
    description: Optional[StrictStr] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required and cannot be empty.")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_must_be_number(cls, v: Any) -> Any:
        return _require_number(v)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        return v


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional: only supplied fields will be updated.
    ``description`` may be explicitly cleared with ``null``; the other
    fields cannot.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[StrictStr] = None
    price: Optional[Decimal] = Field(default=None, allow_inf_nan=False)
    stock: Optional[StrictInt] = None
    description: Optional[StrictStr] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty.")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_must_be_number(cls, v: Any) -> Any:
        if v is None:
            return v
        return _require_number(v)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("Stock cannot be negative.")
        return v

    @model_validator(mode="after")
    def required_fields_not_null(self) -> UpdateProductDTO:
        for name in ("name", "price", "stock"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"Field '{name}' cannot be null.")
        return self

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the client actually supplied."""
        return {
            name: getattr(self, name)
            for name in UPDATABLE_FIELDS
            if name in self.model_fields_set
        }


class PaginationQueryDTO(BaseModel):
    """Immutable DTO for pagination query parameters.

    Query strings arrive as text; pydantic converts ``"2"`` to ``2``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageMeta:
    """Pagination metadata; ``total`` counts active products only."""

    total: int
    page: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class ProductPage:
    """One page of active products plus its metadata."""

    data: List[Product]
    meta: PageMeta
