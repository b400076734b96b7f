# wishlist_api/services/wishlist_provider.py
"""
Finds and creates wishlists for one owner (session or account).

The owner string is opaque here: it is only used as part of the lookup key
together with the wishlist type and the store.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from wishlist_api.database import FileBackedDB
from wishlist_api.models.store import Store
from wishlist_api.models.wishlist import Wishlist, WishlistItem
from wishlist_api.services.entity_types import StoreStorage

logger = logging.getLogger(__name__)

WishlistKey = Tuple[str, str, str]


class WishlistProvider:
    def __init__(self, db: FileBackedDB, owner: str, store_storage: Optional[StoreStorage] = None):
        self.db = db
        self.owner = owner
        self.store_storage = store_storage or StoreStorage(db)
        # wishlists already handed out by this provider, keyed by (type, store id, owner)
        self._loaded: Dict[WishlistKey, Wishlist] = {}

    def _key(self, wishlist_type: str, store: Store) -> WishlistKey:
        return (wishlist_type, store.id, self.owner)

    def _load_items(self, wishlist_id: str) -> List[WishlistItem]:
        rows = self.db.find_records("wishlist_items", {"wishlist_id": wishlist_id})
        return [WishlistItem.from_dict(r) for r in rows]

    def get_wishlist(self, wishlist_type: str, store: Store) -> Optional[Wishlist]:
        key = self._key(wishlist_type, store)
        if key in self._loaded:
            return self._loaded[key]
        rows = self.db.find_records(
            "wishlists", {"type": wishlist_type, "store_id": store.id, "owner": self.owner}
        )
        if not rows:
            return None
        row = rows[0]
        wishlist = Wishlist.from_dict(row, store=store, items=self._load_items(row["id"]))
        self._loaded[key] = wishlist
        return wishlist

    def create_wishlist(self, wishlist_type: str, store: Store, name: Optional[str] = None) -> Wishlist:
        wishlist = Wishlist(
            type=wishlist_type,
            store=store,
            owner=self.owner,
            name=name or "Wishlist",
            created_at=datetime.utcnow(),
        )
        saved = self.db.create_record("wishlists", wishlist.to_dict(), id_field="id")
        wishlist.id = saved["id"]
        self._loaded[self._key(wishlist_type, store)] = wishlist
        logger.info("Created %s wishlist %s in store %s", wishlist_type, wishlist.id, store.id)
        return wishlist

    def get_wishlists(self) -> List[Wishlist]:
        """All wishlists of the owner whose store still exists."""
        wishlists = []
        for row in self.db.find_records("wishlists", {"owner": self.owner}):
            store = self.store_storage.load(row.get("store_id"))
            if store is None:
                continue
            wishlist = self.get_wishlist(str(row.get("type") or ""), store)
            if wishlist is not None:
                wishlists.append(wishlist)
        return wishlists
