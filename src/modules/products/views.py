"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions and DTO validation errors are caught and translated
into appropriate HTTP status codes; the view never swallows generic
exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import error_response, validation_error_response
from modules.products.dtos import CreateProductDTO, PaginationQueryDTO, UpdateProductDTO
from modules.products.exceptions import InvalidProductData, ProductNotFound
from modules.products.repositories import get_product_repository
from modules.products.serializers import ProductPageSerializer, ProductSerializer
from modules.products.services import ProductService


def _not_found(exc: ProductNotFound) -> Response:
    return error_response(status.HTTP_404_NOT_FOUND, "not_found", str(exc))


def _invalid(exc: InvalidProductData) -> Response:
    return error_response(
        status.HTTP_400_BAD_REQUEST, "invalid", str(exc), attr=exc.field
    )


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with the process-wide in-memory repository.
    ``PUT`` is not routed: updates are always partial (``PATCH``).
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=get_product_repository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /products?page=&limit="""
        try:
            query = PaginationQueryDTO.model_validate(request.query_params.dict())
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        try:
            result = self._service.list_products(page=query.page, limit=query.limit)
        except InvalidProductData as exc:
            return _invalid(exc)

        return Response(ProductPageSerializer(result).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /products/{pk}"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound as exc:
            return _not_found(exc)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /products"""
        try:
            dto = CreateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        try:
            product = self._service.create_product(dto)
        except InvalidProductData as exc:
            return _invalid(exc)

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /products/{pk}"""
        try:
            dto = UpdateProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound as exc:
            return _not_found(exc)
        except InvalidProductData as exc:
            return _invalid(exc)

        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /products/{pk}

        Soft delete: answers 200 with the product as it stands after the
        flip (``isActive: false``).
        """
        try:
            product = self._service.delete_product(pk)
        except ProductNotFound as exc:
            return _not_found(exc)
        return Response(ProductSerializer(product).data)
