# wishlist_api/api/normalizers.py
from typing import Any, Dict

from wishlist_api.models.wishlist import Wishlist, WishlistItem
from wishlist_api.services.entity_types import EntityTypeManager


def normalize_purchasable_entity(item: WishlistItem, entity_type_manager: EntityTypeManager) -> Dict[str, Any]:
    """
    Expand the item's entity reference to the full entity. Items whose entity
    is gone (or whose type is no longer registered) expand to an empty object.
    """
    entity = item.purchasable_entity
    if entity is None and entity_type_manager.has_definition(item.purchasable_entity_type):
        entity = entity_type_manager.get_storage(item.purchasable_entity_type).load(item.purchasable_entity_id)
    if entity is None:
        return {}
    return entity.to_dict()


def normalize_wishlist_item(item: WishlistItem, entity_type_manager: EntityTypeManager) -> Dict[str, Any]:
    out = item.to_dict()
    out["purchasable_entity"] = normalize_purchasable_entity(item, entity_type_manager)
    return out


def normalize_wishlist(wishlist: Wishlist, entity_type_manager: EntityTypeManager) -> Dict[str, Any]:
    out = wishlist.to_dict()
    out["store"] = wishlist.store.to_dict()
    out["items"] = [normalize_wishlist_item(it, entity_type_manager) for it in wishlist.items]
    return out
