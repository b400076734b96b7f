# wishlist_api/services/entity_types.py
"""
Entity lookup by (entity type, id) on top of the file-backed tables.

Usage:
    manager = EntityTypeManager.default(db)
    manager.has_definition("product_variation")   # True
    manager.get_storage("product_variation").load("10")
"""
from typing import Any, Callable, Dict, List, Optional

from wishlist_api.database import FileBackedDB
from wishlist_api.models.product import Product, ProductVariation, parse_store_ids
from wishlist_api.models.store import Store


class EntityStorage:
    """
    Loads rows from one table and turns them into entity objects.
    """

    def __init__(self, db: FileBackedDB, table: str, factory: Callable[[Dict[str, Any]], Any]):
        self.db = db
        self.table = table
        self.factory = factory

    def load(self, entity_id: Any) -> Optional[Any]:
        if entity_id is None or str(entity_id) == "":
            return None
        row = self.db.get_record(self.table, "id", entity_id)
        if not row:
            return None
        return self.factory(row)


class StoreStorage(EntityStorage):
    def __init__(self, db: FileBackedDB):
        super().__init__(db, "stores", Store.from_dict)

    def load_multiple(self, store_ids: List[str]) -> List[Store]:
        """Load stores in the given order, dropping ids that do not exist."""
        stores = []
        for store_id in store_ids:
            store = self.load(store_id)
            if store is not None:
                stores.append(store)
        return stores


class ProductVariationStorage(EntityStorage):
    def __init__(self, db: FileBackedDB, store_storage: StoreStorage):
        super().__init__(db, "product_variations", self._build)
        self.store_storage = store_storage

    def _build(self, row: Dict[str, Any]) -> ProductVariation:
        stores = self.store_storage.load_multiple(parse_store_ids(row.get("stores")))
        return ProductVariation.from_dict(row, stores=stores)


class EntityTypeManager:
    """
    Registry of entity types known to the system.
    """

    def __init__(self, storages: Optional[Dict[str, EntityStorage]] = None):
        self._storages: Dict[str, EntityStorage] = dict(storages or {})

    @classmethod
    def default(cls, db: FileBackedDB) -> "EntityTypeManager":
        stores = StoreStorage(db)
        return cls({
            ProductVariation.entity_type: ProductVariationStorage(db, stores),
            Product.entity_type: EntityStorage(db, "products", Product.from_dict),
            "store": stores,
        })

    def has_definition(self, entity_type: Any) -> bool:
        return isinstance(entity_type, str) and entity_type in self._storages

    def get_storage(self, entity_type: str) -> EntityStorage:
        try:
            return self._storages[entity_type]
        except KeyError:
            raise LookupError(f"Unknown entity type: {entity_type}") from None
