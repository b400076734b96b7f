# --- Pydantic schemas for wishlist endpoints ---
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict

# The add payload itself is not modelled here: rows are checked by
# wishlist_api.services.wishlist_add.validate_payload so that errors name the row.


class WishlistItemOut(BaseModel):
    id: str
    wishlist_id: str
    purchasable_entity_type: str
    purchasable_entity_id: str
    quantity: Union[int, float]
    title: Optional[str] = None
    added_at: Optional[str] = None
    purchasable_entity: Dict[str, Any] = {}

    model_config = ConfigDict(extra="allow")


class StoreOut(BaseModel):
    id: str
    name: str = ""
    default_currency: Optional[str] = None


class WishlistOut(BaseModel):
    id: str
    type: str
    store_id: str
    owner: str
    name: str = ""
    created_at: Optional[str] = None
    store: StoreOut
    items: List[WishlistItemOut] = []

    model_config = ConfigDict(extra="allow")
