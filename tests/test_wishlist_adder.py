import pytest

from wishlist_api.models.product import Product, ProductVariation
from wishlist_api.models.store import Store
from wishlist_api.models.wishlist import Wishlist, to_quantity
from wishlist_api.services.store_selection import NoStoreAssigned, StoreMismatch
from wishlist_api.services.wishlist_add import (
    WishlistAdder,
    WishlistValidationError,
    build_wishlist_item,
    validate_payload,
)

US = Store(id="us", name="US")
EU = Store(id="eu", name="EU")


class FakeStorage:
    def __init__(self, entities):
        self.entities = entities
        self.loaded = []

    def load(self, entity_id):
        self.loaded.append(entity_id)
        return self.entities.get(str(entity_id))


class FakeEntityTypeManager:
    def __init__(self, storages):
        self.storages = storages

    def has_definition(self, entity_type):
        return entity_type in self.storages

    def get_storage(self, entity_type):
        return self.storages[entity_type]


class FakeTypeResolver:
    def resolve(self, item):
        return "default"


class FakeProvider:
    def __init__(self):
        self.wishlists = {}
        self.created = 0

    def get_wishlist(self, wishlist_type, store):
        return self.wishlists.get((wishlist_type, store.id))

    def create_wishlist(self, wishlist_type, store):
        self.created += 1
        wishlist = Wishlist(type=wishlist_type, store=store, owner="session:test", id=f"w{self.created}")
        self.wishlists[(wishlist_type, store.id)] = wishlist
        return wishlist


class FakeManager:
    def __init__(self):
        self.added = []

    def add_wishlist_item(self, wishlist, item, combine=True):
        item.wishlist_id = wishlist.id
        wishlist.items.append(item)
        self.added.append((wishlist, item, combine))
        return item


class FakeCurrentStore:
    def __init__(self, store):
        self.store = store

    def get_store(self):
        return self.store


@pytest.fixture
def variations():
    return FakeStorage({
        "10": ProductVariation(id="10", title="Small", stores=[US]),
        "11": ProductVariation(id="11", title="Large", stores=[US, EU]),
        "12": ProductVariation(id="12", title="Broken", stores=[]),
        "13": ProductVariation(id="13", title="EU only", stores=[EU]),
    })


@pytest.fixture
def entity_types(variations):
    return FakeEntityTypeManager({
        "product_variation": variations,
        "product": FakeStorage({"1": Product(id="1", title="Vase")}),
    })


@pytest.fixture
def parts(entity_types):
    return {
        "entity_type_manager": entity_types,
        "type_resolver": FakeTypeResolver(),
        "wishlist_provider": FakeProvider(),
        "wishlist_manager": FakeManager(),
        "current_store": FakeCurrentStore(US),
    }


def _adder(parts):
    return WishlistAdder(**parts)


def _row(entity_id, quantity=None, entity_type="product_variation"):
    row = {"purchasable_entity_type": entity_type, "purchasable_entity_id": entity_id}
    if quantity is not None:
        row["quantity"] = quantity
    return row


def test_validation_checks_run_in_order(entity_types):
    with pytest.raises(WishlistValidationError) as exc:
        validate_payload({"a": {"purchasable_entity_id": "10"}}, entity_types)
    assert exc.value.row_key == "a"
    assert "entity type" in exc.value.reason

    with pytest.raises(WishlistValidationError) as exc:
        validate_payload({"a": {"purchasable_entity_type": "nope"}}, entity_types)
    assert "entity ID" in exc.value.reason

    with pytest.raises(WishlistValidationError) as exc:
        validate_payload({"a": _row("10", entity_type="nope")}, entity_types)
    assert "valid purchasable entity type" in exc.value.reason


def test_validation_failure_loads_nothing(parts, variations):
    with pytest.raises(WishlistValidationError) as exc:
        _adder(parts).add_all([_row("10"), _row("11"), "not a row"])
    assert exc.value.row_key == 2
    assert variations.loaded == []
    assert parts["wishlist_manager"].added == []


def test_to_quantity():
    for missing in (None, "", 0, "0", -1, "-2", "many", True):
        assert to_quantity(missing) == 1
    assert to_quantity("3") == 3
    assert to_quantity(4.0) == 4
    assert isinstance(to_quantity(4.0), int)
    assert to_quantity(1.5) == 1.5
    assert to_quantity("2.5") == 2.5
    # large integers are kept exact
    assert to_quantity(2 ** 53 + 1) == 2 ** 53 + 1
    assert to_quantity(str(2 ** 53 + 1)) == 2 ** 53 + 1


def test_blank_id_and_odd_quantity_pass_validation(entity_types):
    validate_payload({"a": _row(""), "b": _row("10", quantity=1.5), "c": _row("10", quantity="lots")}, entity_types)
    assert build_wishlist_item(_row(""), entity_types) is None


def test_build_skips_missing_and_non_purchasable(entity_types):
    assert build_wishlist_item(_row("999"), entity_types) is None
    assert build_wishlist_item(_row("1", entity_type="product"), entity_types) is None

    item = build_wishlist_item(_row("10", quantity=0), entity_types)
    assert item.quantity == 1
    assert item.purchasable_entity.id == "10"
    assert build_wishlist_item(_row("10", quantity=5), entity_types).quantity == 5


def test_items_returned_in_payload_order(parts):
    items = _adder(parts).add_all([_row("11", quantity=2), _row("999"), _row("13")])
    assert [it.purchasable_entity_id for it in items] == ["11", "13"]
    assert [it.quantity for it in items] == [2, 1]
    assert all(combine is True for _, _, combine in parts["wishlist_manager"].added)


def test_same_type_and_store_reuses_wishlist(parts):
    items = _adder(parts).add_all([_row("10"), _row("11")])
    assert items[0].wishlist_id == items[1].wishlist_id
    assert parts["wishlist_provider"].created == 1


def test_different_stores_get_different_wishlists(parts):
    items = _adder(parts).add_all([_row("10"), _row("13")])
    provider = parts["wishlist_provider"]
    assert provider.created == 2
    assert provider.wishlists[("default", "us")].items == [items[0]]
    assert provider.wishlists[("default", "eu")].items == [items[1]]


def test_store_failure_aborts_without_rollback(parts):
    with pytest.raises(NoStoreAssigned):
        _adder(parts).add_all([_row("10"), _row("12"), _row("13")])
    added = [item.purchasable_entity_id for _, item, _ in parts["wishlist_manager"].added]
    assert added == ["10"]


def test_store_mismatch_aborts(parts):
    parts["current_store"] = FakeCurrentStore(Store(id="ca"))
    with pytest.raises(StoreMismatch):
        _adder(parts).add_all([_row("11")])
