from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.products.dtos import CreateProductDTO
from modules.products.repositories import get_product_repository
from modules.products.services import ProductService


@pytest.fixture(autouse=True)
def _fresh_store():
    """Give every test an empty process-wide product store."""
    get_product_repository.cache_clear()
    yield
    get_product_repository.cache_clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def product_service():
    """ProductService wired to the (fresh) process-wide store."""
    return ProductService(repository=get_product_repository())


@pytest.fixture()
def make_product(product_service):
    """Factory creating products through the service layer."""

    def _make(**overrides):
        data = {
            "name": "Widget",
            "description": "A fine widget",
            "price": Decimal("19.99"),
            "stock": 10,
        }
        data.update(overrides)
        return product_service.create_product(CreateProductDTO(**data))

    return _make
