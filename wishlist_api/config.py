from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from pathlib import Path
from typing import Dict

class Settings(BaseSettings):
    ENV: str = "development"
    DATA_DIR: Path = Path("data")  # where CSV / XLSX files will live
    STORES_FILE: str = "stores.csv"
    PRODUCTS_FILE: str = "products.csv"
    PRODUCT_VARIATIONS_FILE: str = "product_variations.csv"
    WISHLISTS_FILE: str = "wishlists.csv"
    WISHLIST_ITEMS_FILE: str = "wishlist_items.csv"

    # store used when the request does not name one
    DEFAULT_STORE_ID: str = "default"
    STORE_HEADER: str = "X-Commerce-Store"

    DEFAULT_WISHLIST_TYPE: str = "default"
    # purchasable entity type -> wishlist type, e.g. {"product_variation": "default"}
    WISHLIST_TYPE_MAP: Dict[str, str] = {}

    SECRET_KEY: str = "change-this-in-prod"
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "wishlist_session"

    LOG_LEVEL: str = "INFO"

    # If you want to use Excel files, set the file names to .xlsx in .env or edit these values.
    # Example .env:
    # DATA_DIR=./data
    # STORES_FILE=stores.xlsx

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()
