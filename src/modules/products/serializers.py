"""Product DRF serializers for API output.

The serializers operate at the Interface layer (API Views) and only
render: input is validated by the Pydantic DTOs from ``dtos.py``.
Field names follow the public camelCase wire format.
"""

from __future__ import annotations

from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    """Read-only representation of a ``Product``."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True, allow_null=True)
    price = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        coerce_to_string=False,
        read_only=True,
    )
    stock = serializers.IntegerField(read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)


class PageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField(read_only=True)
    page = serializers.IntegerField(read_only=True)
    limit = serializers.IntegerField(read_only=True)
    totalPages = serializers.IntegerField(source="total_pages", read_only=True)


class ProductPageSerializer(serializers.Serializer):
    """Paginated listing: ``{"data": [...], "meta": {...}}``."""

    data = ProductSerializer(many=True, read_only=True)
    meta = PageMetaSerializer(read_only=True)
