# wishlist_api/services/store_selection.py
import logging

from wishlist_api.models.product import PurchasableEntity
from wishlist_api.models.store import Store

logger = logging.getLogger(__name__)


class StoreSelectionError(Exception):
    pass


class NoStoreAssigned(StoreSelectionError):
    """The entity exists but is not sold from any store (malformed data)."""


class StoreMismatch(StoreSelectionError):
    """The entity can't be purchased from the current store (listings not filtered properly)."""


class StoreSelector:
    """
    Picks the store a new wishlist item belongs to.

    `current_store` is anything with a `get_store() -> Store | None` method;
    it is only consulted when the entity is sold from several stores.
    """

    def __init__(self, current_store):
        self.current_store = current_store

    def select(self, entity: PurchasableEntity) -> Store:
        """
        - sold from one store -> that store
        - sold from no store -> NoStoreAssigned
        - sold from several stores -> the current store, if it is one of them,
          otherwise StoreMismatch
        """
        stores = entity.get_stores()
        if len(stores) == 1:
            return stores[0]
        if len(stores) == 0:
            logger.warning("%s %s is not assigned to any store", entity.entity_type, entity.id)
            raise NoStoreAssigned("The given entity is not assigned to any store.")

        store = self.current_store.get_store()
        if store is None or store not in stores:
            logger.warning(
                "%s %s is not sold from current store %s",
                entity.entity_type, entity.id, store.id if store else None,
            )
            raise StoreMismatch("The given entity can't be purchased from the current store.")
        return store
