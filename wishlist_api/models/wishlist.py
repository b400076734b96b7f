# wishlist_api/models/wishlist.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Union
from datetime import datetime
import math

from wishlist_api.models.product import PurchasableEntity
from wishlist_api.models.store import Store


Quantity = Union[int, float]


def to_quantity(raw: Any) -> Quantity:
    """
    Positive quantity from a payload or a stored cell. Missing, zero, negative
    or non-numeric values give 1. Whole numbers come back as int.
    """
    if isinstance(raw, bool) or raw is None:
        return 1
    if isinstance(raw, int):
        quantity = raw
    else:
        text = str(raw).strip()
        try:
            quantity = int(text)
        except ValueError:
            try:
                quantity = float(text)
            except ValueError:
                return 1
            if not math.isfinite(quantity):
                return 1
            if quantity.is_integer():
                quantity = int(quantity)
    return quantity if quantity > 0 else 1


@dataclass
class WishlistItem:
    """
    A (purchasable entity, quantity) pair. Drafts have no id or wishlist_id yet;
    both are filled in when the item is saved into a wishlist.
    """
    purchasable_entity_type: str
    purchasable_entity_id: str
    quantity: Quantity = 1
    title: Optional[str] = None
    id: Optional[str] = None
    wishlist_id: Optional[str] = None
    added_at: Optional[str] = None
    # loaded entity, kept in memory only (never written to the table)
    purchasable_entity: Optional[PurchasableEntity] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_purchasable_entity(cls, entity: PurchasableEntity, quantity: Any = 1) -> "WishlistItem":
        return cls(
            purchasable_entity_type=entity.entity_type,
            purchasable_entity_id=str(entity.id),
            quantity=to_quantity(quantity),
            title=entity.get_title() or None,
            purchasable_entity=entity,
        )

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WishlistItem":
        if d is None:
            raise ValueError("Cannot construct WishlistItem from None")
        return cls(
            purchasable_entity_type=str(d.get("purchasable_entity_type") or ""),
            purchasable_entity_id=str(d.get("purchasable_entity_id") or ""),
            quantity=to_quantity(d.get("quantity")),
            title=d.get("title") or None,
            id=d.get("id") or None,
            wishlist_id=d.get("wishlist_id") or None,
            added_at=d.get("added_at") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id or "",
            "wishlist_id": self.wishlist_id or "",
            "purchasable_entity_type": self.purchasable_entity_type,
            "purchasable_entity_id": self.purchasable_entity_id,
            "quantity": self.quantity,
            "title": self.title or "",
            "added_at": self.added_at or "",
        }

    def matches(self, other: "WishlistItem") -> bool:
        """Two items match when they reference the same purchasable entity."""
        return (
            self.purchasable_entity_type == other.purchasable_entity_type
            and str(self.purchasable_entity_id) == str(other.purchasable_entity_id)
        )


@dataclass
class Wishlist:
    """
    Store-scoped, owner-scoped collection of wishlist items. `owner` is an opaque
    identity string (session or account) supplied by the caller.
    """
    type: str
    store: Store
    owner: str = ""
    id: Optional[str] = None
    name: str = ""
    created_at: Optional[datetime] = None
    items: List[WishlistItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any], store: Store, items: Optional[List[WishlistItem]] = None) -> "Wishlist":
        if d is None:
            raise ValueError("Cannot construct Wishlist from None")
        created_at = None
        created_raw = d.get("created_at")
        if created_raw:
            try:
                created_at = datetime.fromisoformat(str(created_raw))
            except ValueError:
                created_at = None
        return cls(
            type=str(d.get("type") or ""),
            store=store,
            owner=str(d.get("owner") or ""),
            id=d.get("id") or None,
            name=str(d.get("name") or ""),
            created_at=created_at,
            items=list(items or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Row representation; items live in their own table."""
        return {
            "id": self.id or "",
            "type": self.type,
            "store_id": self.store.id,
            "owner": self.owner,
            "name": self.name,
            "created_at": self.created_at.isoformat(sep=" ") if self.created_at else "",
        }

    def find_matching_item(self, item: WishlistItem) -> Optional[WishlistItem]:
        for existing in self.items:
            if existing.matches(item):
                return existing
        return None
