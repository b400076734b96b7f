# tests/conftest.py
import os
import sys
import json
import tempfile

import pytest
from fastapi.testclient import TestClient

# ensure project root is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# point the module-level DB at a throwaway directory before anything imports it
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="test_data_"))

from wishlist_api.config import settings  # noqa: E402
from wishlist_api.database import FileBackedDB  # noqa: E402
from wishlist_api.api.deps import get_db  # noqa: E402
from wishlist_api.main import app  # noqa: E402


@pytest.fixture
def test_db(tmp_path):
    """
    A fresh file-backed DB per test. The app's get_db dependency is pointed at it.
    """
    database = FileBackedDB(tmp_path / "data")
    app.dependency_overrides[get_db] = lambda: database
    try:
        yield database
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def client(test_db):
    return TestClient(app)


@pytest.fixture
def make_store(test_db):
    """
    Create a store row. Usage: store = make_store("eu", name="EU store")
    """
    def _fn(store_id, name=None):
        return test_db.create_record(
            "stores", {"id": store_id, "name": name or f"Store {store_id}", "default_currency": "USD"}, id_field="id"
        )
    return _fn


@pytest.fixture
def make_variation(test_db):
    """
    Create a product variation sold from the given store ids.
    Usage: variation = make_variation("10", stores=["default"])
    """
    def _fn(variation_id, stores=(), title=None, price=9.99):
        return test_db.create_record(
            "product_variations",
            {
                "id": variation_id,
                "sku": f"SKU-{variation_id}",
                "title": title or f"Variation {variation_id}",
                "price": price,
                "product_id": "1",
                "stores": json.dumps(list(stores)),
            },
            id_field="id",
        )
    return _fn


@pytest.fixture
def catalog(test_db, make_store, make_variation):
    """
    Stores: default (the configured current store), eu, us.
    Variations:
      10 -> eu only
      11 -> default only
      12 -> default + eu
      13 -> eu + us
      14 -> no store at all
    Product 1 (not purchasable).
    """
    make_store(settings.DEFAULT_STORE_ID, name="Main store")
    make_store("eu")
    make_store("us")
    make_variation("10", stores=["eu"])
    make_variation("11", stores=[settings.DEFAULT_STORE_ID])
    make_variation("12", stores=[settings.DEFAULT_STORE_ID, "eu"])
    make_variation("13", stores=["eu", "us"])
    make_variation("14", stores=[])
    test_db.create_record("products", {"id": "1", "title": "Ceramic Vase", "category": "decor"}, id_field="id")
    return test_db
