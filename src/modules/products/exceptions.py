"""Product domain exceptions.

Raised by the Service Layer (and the entity's own validation) when
business rules are violated.  The API layer (Views) catches these and
translates them into appropriate HTTP responses.
"""

from __future__ import annotations


class ProductError(Exception):
    """Base class for product domain errors."""


class ProductNotFound(ProductError):
    """The requested product does not exist or has been soft-deleted.

    Inactive products are indistinguishable from absent ones.
    """


class InvalidProductData(ProductError, ValueError):
    """A product field or pagination argument failed its constraints."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
