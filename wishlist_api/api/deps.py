# wishlist_api/api/deps.py
from typing import Optional
import uuid

from fastapi import Depends, Request, Response
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from wishlist_api.config import settings
from wishlist_api.database import FileBackedDB, db
from wishlist_api.services.current_store import CurrentStore
from wishlist_api.services.entity_types import EntityTypeManager, StoreStorage
from wishlist_api.services.type_resolver import ChainWishlistTypeResolver, default_chain
from wishlist_api.services.wishlist_add import WishlistAdder
from wishlist_api.services.wishlist_manager import WishlistManager
from wishlist_api.services.wishlist_provider import WishlistProvider

# Bearer tokens are optional: anonymous callers get a session-scoped wishlist.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_db():
    """
    Dependency that returns the file-backed DB object.
    Usage:
        db = Depends(get_db)
    """
    return db


def _decode_token(token: str) -> Optional[str]:
    """
    Decode JWT and return the 'sub' claim if valid, else None.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None


def get_wishlist_owner(
    request: Request,
    response: Response,
    token: Optional[str] = Depends(oauth2_scheme),
) -> str:
    """
    Opaque owner key for wishlists: "user:<sub>" for a valid bearer token,
    otherwise "session:<id>" from the session cookie. A new session id is
    issued (as a cookie) when the caller has none.
    """
    subject = _decode_token(token) if token else None
    if subject:
        return f"user:{subject}"

    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not session_id:
        session_id = uuid.uuid4().hex
        response.set_cookie(settings.SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
    return f"session:{session_id}"


def get_entity_type_manager(db: FileBackedDB = Depends(get_db)) -> EntityTypeManager:
    return EntityTypeManager.default(db)


def get_current_store(request: Request, db: FileBackedDB = Depends(get_db)) -> CurrentStore:
    return CurrentStore(StoreStorage(db), request.headers.get(settings.STORE_HEADER))


def get_type_resolver() -> ChainWishlistTypeResolver:
    return default_chain()


def get_wishlist_provider(
    db: FileBackedDB = Depends(get_db),
    owner: str = Depends(get_wishlist_owner),
) -> WishlistProvider:
    return WishlistProvider(db, owner)


def get_wishlist_manager(db: FileBackedDB = Depends(get_db)) -> WishlistManager:
    return WishlistManager(db)


def get_wishlist_adder(
    entity_type_manager: EntityTypeManager = Depends(get_entity_type_manager),
    type_resolver: ChainWishlistTypeResolver = Depends(get_type_resolver),
    wishlist_provider: WishlistProvider = Depends(get_wishlist_provider),
    wishlist_manager: WishlistManager = Depends(get_wishlist_manager),
    current_store: CurrentStore = Depends(get_current_store),
) -> WishlistAdder:
    return WishlistAdder(entity_type_manager, type_resolver, wishlist_provider, wishlist_manager, current_store)
