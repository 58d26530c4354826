"""Unit tests for ProductService.

Covers:
- create_product: happy path, defensive validation.
- update_product: happy path, not found, partial update.
- get_product: happy path, not found.
- list_products: pagination arguments, metadata.
- delete_product: happy path, not found.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import InvalidProductData, ProductNotFound
from modules.products.models import Product
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


def _make_product(**overrides) -> Product:
    defaults = {
        "name": "Widget",
        "price": Decimal("19.99"),
        "stock": 10,
    }
    defaults.update(overrides)
    return Product(**defaults)


# ===========================================================================
# create_product
# ===========================================================================


class TestCreateProduct:
    def test_success(self, service, mock_repo):
        mock_repo.save.side_effect = lambda p: p

        dto = CreateProductDTO(name="Widget", price=Decimal("19.99"), stock=3)
        product = service.create_product(dto)

        assert product.name == "Widget"
        assert product.price == Decimal("19.99")
        assert product.stock == 3
        assert product.is_active is True
        assert product.created_at == product.updated_at
        mock_repo.save.assert_called_once()

    def test_runs_inside_atomic_block(self, service, mock_repo):
        mock_repo.save.side_effect = lambda p: p

        service.create_product(CreateProductDTO(name="Widget", price=1, stock=0))

        mock_repo.atomic.assert_called_once()

    def test_sets_optional_fields(self, service, mock_repo):
        mock_repo.save.side_effect = lambda p: p

        dto = CreateProductDTO(
            name="Gadget",
            price=Decimal("29.99"),
            description="A fine gadget",
            stock=50,
        )
        product = service.create_product(dto)

        assert product.description == "A fine gadget"
        assert product.stock == 50

    def test_invalid_data_bypassing_dto_is_rejected(self, service, mock_repo):
        dto = CreateProductDTO.model_construct(name="Widget", price=Decimal("-1"), stock=1, description=None)

        with pytest.raises(InvalidProductData, match="Price"):
            service.create_product(dto)

        mock_repo.save.assert_not_called()


# ===========================================================================
# update_product
# ===========================================================================


class TestUpdateProduct:
    def test_success(self, service, mock_repo):
        existing = _make_product()
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda p: p

        dto = UpdateProductDTO(name="Updated Widget")
        product = service.update_product(str(existing.id), dto)

        assert product.name == "Updated Widget"
        mock_repo.save.assert_called_once()

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        dto = UpdateProductDTO(name="Ghost")
        with pytest.raises(ProductNotFound, match="not found"):
            service.update_product("non-existent-id", dto)

        mock_repo.save.assert_not_called()

    def test_partial_update_preserves_other_fields(self, service, mock_repo):
        existing = _make_product(description="Original desc")
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda p: p

        dto = UpdateProductDTO(price=Decimal("39.99"))
        product = service.update_product(str(existing.id), dto)

        assert product.price == Decimal("39.99")
        assert product.description == "Original desc"
        assert product.name == "Widget"
        assert product.stock == 10
        assert product.created_at == existing.created_at

    def test_update_stock(self, service, mock_repo):
        existing = _make_product(stock=10)
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda p: p

        product = service.update_product(str(existing.id), UpdateProductDTO(stock=25))

        assert product.stock == 25

    def test_clear_description(self, service, mock_repo):
        existing = _make_product(description="Old")
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda p: p

        dto = UpdateProductDTO.model_validate({"description": None})
        product = service.update_product(str(existing.id), dto)

        assert product.description is None

    def test_empty_patch_only_touches_updated_at(self, service, mock_repo):
        existing = _make_product()
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda p: p

        product = service.update_product(str(existing.id), UpdateProductDTO())

        assert product.name == existing.name
        assert product.price == existing.price
        assert product.updated_at >= existing.updated_at


# ===========================================================================
# get_product
# ===========================================================================


class TestGetProduct:
    def test_success(self, service, mock_repo):
        existing = _make_product()
        mock_repo.get_by_id.return_value = existing

        product = service.get_product(str(existing.id))

        assert product.id == existing.id

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound):
            service.get_product("non-existent-id")


# ===========================================================================
# list_products
# ===========================================================================


class TestListProducts:
    def test_default_page_and_limit(self, service, mock_repo):
        mock_repo.paginate.return_value = ([], 0)

        result = service.list_products()

        mock_repo.paginate.assert_called_once_with(0, 10)
        assert result.data == []
        assert result.meta.page == 1
        assert result.meta.limit == 10
        assert result.meta.total == 0
        assert result.meta.total_pages == 0

    def test_offset_computed_from_page(self, service, mock_repo):
        mock_repo.paginate.return_value = ([], 23)

        result = service.list_products(page=3, limit=5)

        mock_repo.paginate.assert_called_once_with(10, 5)
        assert result.meta.total_pages == 5

    @pytest.mark.parametrize(
        ("page", "limit"),
        [(0, 10), (-1, 10), (1, 0), (1, 101), (True, 10), ("1", 10)],
    )
    def test_invalid_arguments_raise(self, service, mock_repo, page, limit):
        with pytest.raises(InvalidProductData):
            service.list_products(page=page, limit=limit)

        mock_repo.paginate.assert_not_called()


# ===========================================================================
# delete_product
# ===========================================================================


class TestDeleteProduct:
    def test_success(self, service, mock_repo):
        existing = _make_product()
        mock_repo.delete.return_value = existing.deactivated()

        product = service.delete_product(str(existing.id))

        mock_repo.delete.assert_called_once_with(str(existing.id))
        assert product.is_active is False

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.delete.return_value = None

        with pytest.raises(ProductNotFound):
            service.delete_product("non-existent-id")
