# wishlist_api/services/wishlist_add.py
"""
Adds purchasable entities to the current owner's wishlists.

A payload is a mapping of row key -> row, each row being
    {"purchasable_entity_type": "product_variation", "purchasable_entity_id": "10", "quantity": 2}

The whole payload is validated before anything is loaded or saved. Rows whose
entity is missing or not purchasable are skipped. A row whose store can't be
determined stops the request; rows saved before it stay saved.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from wishlist_api.models.product import PurchasableEntity
from wishlist_api.models.wishlist import WishlistItem
from wishlist_api.services.store_selection import StoreSelector

logger = logging.getLogger(__name__)

Payload = Union[Mapping[Any, Any], Sequence[Any]]


class WishlistValidationError(ValueError):
    def __init__(self, row_key: Any, reason: str):
        self.row_key = row_key
        self.reason = reason
        super().__init__(f"{reason} for row: {row_key}")


def normalize_payload(payload: Payload) -> Dict[Any, Any]:
    """Key list payloads by position; mappings are kept as they are."""
    if isinstance(payload, Mapping):
        return dict(payload)
    if isinstance(payload, (list, tuple)):
        return {idx: row for idx, row in enumerate(payload)}
    raise WishlistValidationError("(body)", "The request body must be a list or an object of rows")


def validate_payload(rows: Mapping[Any, Any], entity_type_manager) -> None:
    """
    Check every row before any processing; the first bad row rejects the request.
    A blank id is not rejected here: it simply matches no entity and is skipped later.
    """
    for key, row in rows.items():
        if not isinstance(row, Mapping) or row.get("purchasable_entity_type") is None:
            raise WishlistValidationError(key, "You must specify a purchasable entity type")
        if row.get("purchasable_entity_id") is None:
            raise WishlistValidationError(key, "You must specify a purchasable entity ID")
        if not entity_type_manager.has_definition(row["purchasable_entity_type"]):
            raise WishlistValidationError(key, "You must specify a valid purchasable entity type")


def build_wishlist_item(row: Mapping[str, Any], entity_type_manager) -> Optional[WishlistItem]:
    """
    Draft item for a validated row, or None when the row should be skipped.
    The row's quantity is used when it is a positive number, otherwise 1.
    """
    entity_type = row["purchasable_entity_type"]
    entity_id = row["purchasable_entity_id"]
    entity = entity_type_manager.get_storage(entity_type).load(entity_id)
    if entity is None:
        logger.info("Skipping %s %s: not found", entity_type, entity_id)
        return None
    if not isinstance(entity, PurchasableEntity):
        logger.info("Skipping %s %s: not purchasable", entity_type, entity_id)
        return None
    return WishlistItem.from_purchasable_entity(entity, quantity=row.get("quantity"))


class WishlistAdder:
    """
    Runs the add-to-wishlist workflow with explicitly injected collaborators:

    - entity_type_manager: has_definition(type), get_storage(type).load(id)
    - type_resolver: resolve(item) -> wishlist type
    - wishlist_provider: get_wishlist(type, store), create_wishlist(type, store)
    - wishlist_manager: add_wishlist_item(wishlist, item, combine)
    - current_store: get_store()
    """

    def __init__(self, entity_type_manager, type_resolver, wishlist_provider, wishlist_manager, current_store):
        self.entity_type_manager = entity_type_manager
        self.type_resolver = type_resolver
        self.wishlist_provider = wishlist_provider
        self.wishlist_manager = wishlist_manager
        self.store_selector = StoreSelector(current_store)

    def _resolve_wishlist(self, wishlist_type: str, store):
        """The owner's wishlist for (type, store), created when missing."""
        wishlist = self.wishlist_provider.get_wishlist(wishlist_type, store)
        if wishlist is None:
            wishlist = self.wishlist_provider.create_wishlist(wishlist_type, store)
        return wishlist

    def add_all(self, payload: Payload) -> List[WishlistItem]:
        """
        Returns the saved items in payload order. Raises WishlistValidationError
        (nothing saved) or StoreSelectionError (earlier rows already saved).
        """
        rows = normalize_payload(payload)
        validate_payload(rows, self.entity_type_manager)

        wishlist_items: List[WishlistItem] = []
        for row in rows.values():
            item = build_wishlist_item(row, self.entity_type_manager)
            if item is None:
                continue
            wishlist_type = self.type_resolver.resolve(item)
            store = self.store_selector.select(item.purchasable_entity)
            wishlist = self._resolve_wishlist(wishlist_type, store)
            wishlist_items.append(self.wishlist_manager.add_wishlist_item(wishlist, item, True))

        logger.info("Added %d of %d rows to wishlists", len(wishlist_items), len(rows))
        return wishlist_items
