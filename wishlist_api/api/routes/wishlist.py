from typing import Any, Dict, List, Union

from fastapi import APIRouter, Body, Depends, HTTPException, status

from wishlist_api.api.deps import get_entity_type_manager, get_wishlist_adder, get_wishlist_provider
from wishlist_api.api.normalizers import normalize_wishlist, normalize_wishlist_item
from wishlist_api.api.schemas.wishlist import WishlistItemOut, WishlistOut
from wishlist_api.services.entity_types import EntityTypeManager
from wishlist_api.services.store_selection import StoreSelectionError
from wishlist_api.services.wishlist_add import WishlistAdder, WishlistValidationError
from wishlist_api.services.wishlist_provider import WishlistProvider

router = APIRouter(prefix="/api", tags=["wishlist"])


@router.post("/wishlist/add", response_model=List[WishlistItemOut])
def add_to_wishlist(
    payload: Union[List[Any], Dict[str, Any]] = Body(...),
    adder: WishlistAdder = Depends(get_wishlist_adder),
    entity_type_manager: EntityTypeManager = Depends(get_entity_type_manager),
):
    """
    Add items to the caller's wishlists.

    Body: a list (or an object keyed by row name) of
      {"purchasable_entity_type": "product_variation", "purchasable_entity_id": "10", "quantity": 2}

    - any invalid row -> 422, nothing is added
    - rows whose entity is missing or not purchasable are left out of the response
    - a row whose store can't be determined -> 400; rows before it stay added
    """
    try:
        items = adder.add_all(payload)
    except WishlistValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StoreSelectionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [normalize_wishlist_item(it, entity_type_manager) for it in items]


@router.get("/wishlist", response_model=List[WishlistOut])
def list_wishlists(
    provider: WishlistProvider = Depends(get_wishlist_provider),
    entity_type_manager: EntityTypeManager = Depends(get_entity_type_manager),
):
    """Wishlists of the current session / account, with their items."""
    return [normalize_wishlist(w, entity_type_manager) for w in provider.get_wishlists()]
