# wishlist_api/services/type_resolver.py
from typing import Dict, Iterable, List, Optional

from wishlist_api.config import settings
from wishlist_api.models.wishlist import WishlistItem


class WishlistTypeResolver:
    """
    Strategy deciding which wishlist type an item goes into.
    Return None to let the next resolver in the chain decide.
    """

    def resolve(self, item: WishlistItem) -> Optional[str]:
        raise NotImplementedError


class EntityTypeWishlistTypeResolver(WishlistTypeResolver):
    """Maps the item's purchasable entity type to a wishlist type."""

    def __init__(self, type_map: Optional[Dict[str, str]] = None):
        self.type_map = dict(settings.WISHLIST_TYPE_MAP if type_map is None else type_map)

    def resolve(self, item: WishlistItem) -> Optional[str]:
        return self.type_map.get(item.purchasable_entity_type) or None


class DefaultWishlistTypeResolver(WishlistTypeResolver):
    def __init__(self, wishlist_type: Optional[str] = None):
        self.wishlist_type = wishlist_type or settings.DEFAULT_WISHLIST_TYPE

    def resolve(self, item: WishlistItem) -> Optional[str]:
        return self.wishlist_type


class ChainWishlistTypeResolver(WishlistTypeResolver):
    """
    Tries each resolver in order; the first non-empty answer wins.
    """

    def __init__(self, resolvers: Optional[Iterable[WishlistTypeResolver]] = None):
        self.resolvers: List[WishlistTypeResolver] = list(resolvers or [])

    def resolve(self, item: WishlistItem) -> str:
        for resolver in self.resolvers:
            wishlist_type = resolver.resolve(item)
            if wishlist_type:
                return wishlist_type
        raise LookupError(
            f"No wishlist type could be resolved for {item.purchasable_entity_type} {item.purchasable_entity_id}"
        )


def default_chain() -> ChainWishlistTypeResolver:
    return ChainWishlistTypeResolver([EntityTypeWishlistTypeResolver(), DefaultWishlistTypeResolver()])
