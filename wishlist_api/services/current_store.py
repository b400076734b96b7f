# wishlist_api/services/current_store.py
import logging
from typing import Optional

from wishlist_api.config import settings
from wishlist_api.models.store import Store
from wishlist_api.services.entity_types import StoreStorage

logger = logging.getLogger(__name__)


class CurrentStore:
    """
    Store implied by the current request: the store id the client sent
    (header), else the configured default store.
    """

    def __init__(self, store_storage: StoreStorage, requested_store_id: Optional[str] = None):
        self.store_storage = store_storage
        self.requested_store_id = requested_store_id
        self._store: Optional[Store] = None
        self._resolved = False

    def get_store(self) -> Optional[Store]:
        if not self._resolved:
            store_id = self.requested_store_id or settings.DEFAULT_STORE_ID
            self._store = self.store_storage.load(store_id)
            if self._store is None:
                logger.warning("Current store %r does not exist", store_id)
            self._resolved = True
        return self._store
