# wishlist_api/services/wishlist_manager.py
import logging
from datetime import datetime

from wishlist_api.database import FileBackedDB
from wishlist_api.models.wishlist import Wishlist, WishlistItem, to_quantity

logger = logging.getLogger(__name__)


class WishlistManager:
    def __init__(self, db: FileBackedDB):
        self.db = db

    def add_wishlist_item(self, wishlist: Wishlist, item: WishlistItem, combine: bool = True) -> WishlistItem:
        """
        Save `item` into `wishlist` and return the stored item.

        With `combine`, an item for the same purchasable entity that is already
        in the wishlist gets its quantity increased instead of a second row.
        """
        if wishlist.id is None:
            raise ValueError("Wishlist must be saved before items can be added")

        if combine:
            existing = wishlist.find_matching_item(item)
            if existing is not None:
                existing.quantity = to_quantity(existing.quantity + item.quantity)
                self.db.update_record("wishlist_items", "id", existing.id, {"quantity": existing.quantity})
                if existing.purchasable_entity is None:
                    existing.purchasable_entity = item.purchasable_entity
                logger.debug("Combined item %s in wishlist %s, quantity now %s",
                             existing.id, wishlist.id, existing.quantity)
                return existing

        item.wishlist_id = wishlist.id
        item.added_at = datetime.utcnow().isoformat(sep=" ")
        saved = self.db.create_record("wishlist_items", item.to_dict(), id_field="id")
        item.id = saved["id"]
        wishlist.items.append(item)
        return item
