"""Creates the data directory with sample stores, products and product variations."""
import json

from wishlist_api.config import settings
from wishlist_api.database import db


STORES = [
    {"id": settings.DEFAULT_STORE_ID, "name": "Main store", "default_currency": "USD"},
    {"id": "eu", "name": "EU store", "default_currency": "EUR"},
]

PRODUCTS = [
    {"id": "1", "title": "Ceramic Vase", "description": "Hand thrown vase", "category": "decor"},
]

VARIATIONS = [
    {"id": "10", "sku": "VASE-S", "title": "Ceramic Vase - Small", "price": 19.99, "product_id": "1",
     "stores": json.dumps([settings.DEFAULT_STORE_ID])},
    {"id": "11", "sku": "VASE-L", "title": "Ceramic Vase - Large", "price": 29.99, "product_id": "1",
     "stores": json.dumps([settings.DEFAULT_STORE_ID, "eu"])},
]


def seed(table, rows):
    if db.list_records(table):
        print(f"{table} already has data")
        return
    for row in rows:
        db.create_record(table, dict(row), id_field="id")
    print(f"Created {len(rows)} {table}")


if __name__ == "__main__":
    seed("stores", STORES)
    seed("products", PRODUCTS)
    seed("product_variations", VARIATIONS)
