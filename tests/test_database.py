from wishlist_api.database import FileBackedDB


def test_missing_table_reads_empty(tmp_path):
    database = FileBackedDB(tmp_path)
    assert database.list_records("wishlists") == []
    assert database.get_record("wishlists", "id", "x") is None
    assert database.find_records("wishlists", {"owner": "a"}) == []
    assert database.update_record("wishlists", "id", "x", {"name": "n"}) is None


def test_crud_roundtrip(tmp_path):
    database = FileBackedDB(tmp_path)
    a = database.create_record("wishlists", {"type": "default", "store_id": "us", "owner": "a"})
    database.create_record("wishlists", {"type": "default", "store_id": "eu", "owner": "a"})
    database.create_record("wishlists", {"type": "default", "store_id": "us", "owner": "b"})
    assert a["id"]

    found = database.find_records("wishlists", {"owner": "a", "store_id": "us"})
    assert [r["id"] for r in found] == [a["id"]]
    assert database.find_records("wishlists", {"no_such_column": "x"}) == []

    updated = database.update_record("wishlists", "id", a["id"], {"name": "Gifts"})
    assert updated["name"] == "Gifts"
    assert database.get_record("wishlists", "id", a["id"])["name"] == "Gifts"

    assert len(database.list_records("wishlists")) == 3


def test_excel_table(tmp_path):
    database = FileBackedDB(tmp_path)
    database.create_record("stores.xlsx", {"id": "us", "name": "US"})
    assert database.get_record("stores.xlsx", "id", "us")["name"] == "US"
