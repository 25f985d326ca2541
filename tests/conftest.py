"""Pytest fixtures for the product catalog tests."""

import itertools

import pytest
from fastapi.testclient import TestClient

from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.main import create_app
from product_catalog_api.app.schemas.product import ProductCreate
from product_catalog_api.app.services.product_store import ProductStore

API_TOKEN = "test-token"


def make_product(name="Widget", price=5, category="tools", **extra) -> ProductCreate:
    return ProductCreate(name=name, price=price, category=category, **extra)


@pytest.fixture
def store():
    """Empty store handing out predictable ids p1, p2, ..."""
    counter = itertools.count(1)
    return ProductStore(id_factory=lambda: f"p{next(counter)}")


@pytest.fixture
def app(store):
    return create_app(Settings(api_tokens=API_TOKEN), store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {API_TOKEN}"}
