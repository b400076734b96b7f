# wishlist_api/models/store.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass
class Store:
    """
    A sales channel. Wishlists are scoped to a store, and purchasable entities
    list the stores they are sold from.
    """
    id: str
    name: str = ""
    default_currency: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Store":
        if d is None:
            raise ValueError("Cannot construct Store from None")
        id_val = d.get("id") or d.get("store_id") or ""
        if not id_val:
            raise ValueError("Store row has no id")
        return cls(
            id=str(id_val),
            name=str(d.get("name") or ""),
            default_currency=d.get("default_currency") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["default_currency"] = self.default_currency or ""
        return out

    def __eq__(self, other: object) -> bool:
        # stores loaded from different rows/requests compare by id
        if not isinstance(other, Store):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
