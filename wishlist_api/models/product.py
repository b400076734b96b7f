# wishlist_api/models/product.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from datetime import datetime
import json

from wishlist_api.models.store import Store


def parse_store_ids(raw: Any) -> List[str]:
    """
    Store ids live in a single CSV cell, either as a JSON array ('["us", "eu"]')
    or as a comma separated string ('us,eu').
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(s).strip() for s in raw if str(s).strip()]
    text = str(raw).strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return [str(s).strip() for s in parsed if str(s).strip()]
    return [s.strip() for s in text.split(",") if s.strip()]


def _parse_datetime(raw: Any) -> Optional[datetime]:
    if not raw:
        return None
    if isinstance(raw, datetime):
        return raw
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError:
        try:
            return datetime.strptime(str(raw), "%Y-%m-%d %H:%M:%S")
        except ValueError:
            return None


class PurchasableEntity:
    """
    Capability shared by catalog entities that can be bought.
    Every purchasable entity is sold from a set of stores.
    """
    entity_type: str = ""
    id: Optional[str] = None

    def get_stores(self) -> List[Store]:
        raise NotImplementedError

    def get_title(self) -> str:
        raise NotImplementedError


@dataclass
class ProductVariation(PurchasableEntity):
    """
    A concrete, purchasable variant of a product (size, colour, ...).
    """
    id: Optional[str] = None
    sku: str = ""
    title: str = ""
    price: float = 0.0
    product_id: Optional[str] = None
    stores: List[Store] = field(default_factory=list)

    entity_type = "product_variation"

    @classmethod
    def from_dict(cls, d: Dict[str, Any], stores: Optional[List[Store]] = None) -> "ProductVariation":
        """
        Build from a stored row. The row only carries store ids, so the resolved
        Store objects are passed in by the caller.
        """
        if d is None:
            raise ValueError("Cannot construct ProductVariation from None")
        price_raw = d.get("price", 0)
        try:
            price = float(price_raw) if price_raw not in (None, "") else 0.0
        except (TypeError, ValueError):
            price = 0.0
        return cls(
            id=d.get("id") or d.get("variation_id") or None,
            sku=str(d.get("sku") or ""),
            title=str(d.get("title") or ""),
            price=price,
            product_id=d.get("product_id") or None,
            stores=list(stores or []),
        )

    def get_stores(self) -> List[Store]:
        return list(self.stores)

    def get_title(self) -> str:
        return self.title

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id or "",
            "sku": self.sku,
            "title": self.title,
            "price": float(self.price) if self.price is not None else 0.0,
            "product_id": self.product_id or "",
            "stores": [s.id for s in self.stores],
        }


@dataclass
class Product:
    """
    Parent catalog entry grouping variations. Not purchasable on its own.
    """
    id: Optional[str] = None
    title: str = ""
    description: Optional[str] = ""
    category: Optional[str] = "general"
    created_at: Optional[datetime] = None

    entity_type = "product"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Product":
        if d is None:
            raise ValueError("Cannot construct Product from None")
        return cls(
            id=d.get("id") or d.get("product_id") or None,
            title=str(d.get("title") or ""),
            description=str(d.get("description") or ""),
            category=str(d.get("category") or "general"),
            created_at=_parse_datetime(d.get("created_at") or d.get("created")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id or "",
            "title": self.title,
            "description": self.description or "",
            "category": self.category or "general",
            "created_at": self.created_at.isoformat(sep=" ") if self.created_at else "",
        }
