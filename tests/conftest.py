"""Pytest configuration and fixtures"""
import json

import pytest
from fastapi.testclient import TestClient

from jsonshop.config import Settings
from jsonshop.main import create_app


SAMPLE_PRODUCT = {
    "title": "Lamp",
    "description": "Desk lamp",
    "price": 25,
    "thumbnail": "lamp.png",
    "code": "LAMP-1",
    "stock": 10,
}


def product_fields(n: int, **overrides):
    """A valid product body with a unique code."""
    fields = {**SAMPLE_PRODUCT, "title": f"Product {n}", "code": f"CODE-{n}"}
    fields.update(overrides)
    return fields


def write_json(path, data):
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture
def products_path(tmp_path):
    return tmp_path / "productos.json"


@pytest.fixture
def carts_path(tmp_path):
    return tmp_path / "carritos.json"


@pytest.fixture
def settings(products_path, carts_path):
    return Settings(products_path=str(products_path), carts_path=str(carts_path))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the context runs the lifespan, which loads both files
    with TestClient(app) as c:
        yield c
