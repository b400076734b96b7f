# wishlist_api/main.py
from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager

from wishlist_api.config import settings
from wishlist_api.database import db
from wishlist_api.api.routes import wishlist as wishlist_routes


logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: run startup checks before the app starts serving.
    """
    # --- startup logic ---
    # multi-store products fall back to this store when the client sends none
    if db.get_record("stores", "id", settings.DEFAULT_STORE_ID) is None:
        logger.warning(
            "Default store %r not found in %s; run scripts/init_db.py or set DEFAULT_STORE_ID.",
            settings.DEFAULT_STORE_ID,
            db._file_path("stores"),
        )
    else:
        logger.info("Default store: %s", settings.DEFAULT_STORE_ID)

    yield
    # --- shutdown logic (if needed) ---
    logger.info("Shutting down Wishlist API")
app = FastAPI(title="Wishlist API", version="0.1.0", lifespan=lifespan)

app.include_router(wishlist_routes.router)


@app.get("/", tags=["root"])
async def root():
    return {"status": "ok", "service": "Wishlist API"}
