# wishlist_api/database.py
"""
Simple file-backed DB layer using CSV (preferred) or Excel (xlsx) as storage.
Provides basic CRUD primitives per table name. Uses file locking to avoid
simultaneous writes corrupting files.

Usage:
    from wishlist_api.database import db
    db.list_records("stores")
    db.get_record("product_variations", "sku", "ABC123")
    db.find_records("wishlists", {"type": "default", "store_id": "us"})
    db.create_record("stores", {"id": "us", "name": "US store"})
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import pandas as pd
import uuid
from filelock import FileLock
from wishlist_api.config import settings


class FileBackedDB:
    """
    Manages CSV / Excel files inside data_dir.
    Table name corresponds to a file name in settings (or you may pass full filename).
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir if data_dir is not None else settings.DATA_DIR)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _file_path(self, table: str) -> Path:
        """
        Resolve table -> file path. If table looks like a filename (has .csv/.xlsx),
        use it directly (relative to data_dir). Otherwise try config mapping,
        else fallback to table + .csv
        """
        # allow passing explicit filenames
        if table.endswith(".csv") or table.endswith(".xlsx"):
            return self.data_dir / Path(table)

        # map well-known tables from settings
        mapping = {
            "stores": settings.STORES_FILE,
            "products": settings.PRODUCTS_FILE,
            "product_variations": settings.PRODUCT_VARIATIONS_FILE,
            "wishlists": settings.WISHLISTS_FILE,
            "wishlist_items": settings.WISHLIST_ITEMS_FILE,
        }
        filename = mapping.get(table, f"{table}.csv")
        return self.data_dir / Path(filename)

    def _lock_for(self, path: Path) -> FileLock:
        return FileLock(str(path) + ".lock")

    def _read_df(self, table: str) -> pd.DataFrame:
        path = self._file_path(table)
        if not path.exists():
            # return empty df
            return pd.DataFrame()
        if path.suffix.lower() in (".xls", ".xlsx"):
            return pd.read_excel(path, dtype=str).fillna("")
        try:
            return pd.read_csv(path, dtype=str).fillna("")
        except pd.errors.EmptyDataError:
            return pd.DataFrame()

    def _write_df_nolock(self, table: str, df: pd.DataFrame) -> None:
        """
        Write DataFrame for `table` WITHOUT acquiring file lock.
        Use this only when the caller already holds the lock.
        """
        path = self._file_path(table)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in (".xls", ".xlsx"):
            df.to_excel(path, index=False)
        else:
            df.to_csv(path, index=False)

    @staticmethod
    def _row_to_dict(row: pd.Series) -> Dict[str, Any]:
        return {k: (None if pd.isna(v) else v) for k, v in row.to_dict().items()}

    # --- high-level CRUD primitives ---

    def list_records(self, table: str) -> List[Dict[str, Any]]:
        df = self._read_df(table)
        if df.empty:
            return []
        # convert to Python types; keep strings as-is
        return df.where(pd.notnull(df), None).to_dict(orient="records")

    def get_record(self, table: str, key: str, value: Any) -> Optional[Dict[str, Any]]:
        df = self._read_df(table)
        if df.empty or key not in df.columns:
            return None
        # treat everything as string for comparison simplicity
        mask = df[key].astype(str) == str(value)
        if not mask.any():
            return None
        return self._row_to_dict(df[mask].iloc[0])

    def find_records(self, table: str, criteria: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Return every row where all `criteria` columns equal the given values (string comparison).
        """
        df = self._read_df(table)
        if df.empty:
            return []
        mask = pd.Series(True, index=df.index)
        for key, value in criteria.items():
            if key not in df.columns:
                return []
            mask &= df[key].astype(str) == str(value)
        return [self._row_to_dict(row) for _, row in df[mask].iterrows()]

    def create_record(self, table: str, data: Dict[str, Any], id_field: str = "id") -> Dict[str, Any]:
        """
        Create a new record. If id_field not present in `data`, one will be generated (uuid4 hex).
        Returns the saved record (with id).
        """
        path = self._file_path(table)
        with self._lock_for(path):
            df = self._read_df(table)
            # ensure id exists
            if id_field not in data or not data.get(id_field):
                data[id_field] = uuid.uuid4().hex
            # normalize types to string where needed
            new_row = {k: ("" if v is None else v) for k, v in data.items()}
            if df.empty:
                df = pd.DataFrame([new_row])
            else:
                df = pd.concat([df, pd.DataFrame([new_row])], ignore_index=True, sort=False)
            self._write_df_nolock(table, df)
        return data

    def update_record(self, table: str, key: str, value: Any, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update rows where df[key] == value with fields in updates. Returns the updated first row dict or None.
        """
        path = self._file_path(table)
        with self._lock_for(path):
            df = self._read_df(table)
            if df.empty or key not in df.columns:
                return None
            mask = df[key].astype(str) == str(value)
            if not mask.any():
                return None
            for k, v in updates.items():
                if k not in df.columns:
                    df[k] = ""
                df[k] = df[k].astype(object)
                df.loc[mask, k] = "" if v is None else v
            self._write_df_nolock(table, df)
            return self._row_to_dict(df[mask].iloc[0])


# module-level singleton for convenience
db = FileBackedDB()
