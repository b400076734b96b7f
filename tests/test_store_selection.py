import pytest

from wishlist_api.models.product import ProductVariation
from wishlist_api.models.store import Store
from wishlist_api.services.store_selection import (
    NoStoreAssigned,
    StoreMismatch,
    StoreSelectionError,
    StoreSelector,
)


class FakeCurrentStore:
    def __init__(self, store):
        self.store = store
        self.calls = 0

    def get_store(self):
        self.calls += 1
        return self.store


US = Store(id="us", name="US")
EU = Store(id="eu", name="EU")
CA = Store(id="ca", name="CA")


def _variation(*stores):
    return ProductVariation(id="10", title="Lamp", stores=list(stores))


def test_single_store_wins_regardless_of_context():
    current = FakeCurrentStore(EU)
    assert StoreSelector(current).select(_variation(US)) == US
    # the current store is not even looked at
    assert current.calls == 0

    assert StoreSelector(FakeCurrentStore(None)).select(_variation(US)) == US


def test_no_store_raises():
    with pytest.raises(NoStoreAssigned):
        StoreSelector(FakeCurrentStore(US)).select(_variation())


def test_current_store_picked_among_several():
    selected = StoreSelector(FakeCurrentStore(Store(id="eu", name="another copy"))).select(_variation(US, EU))
    assert selected.id == "eu"


def test_current_store_not_among_several_raises():
    with pytest.raises(StoreMismatch):
        StoreSelector(FakeCurrentStore(CA)).select(_variation(US, EU))


def test_missing_current_store_is_a_mismatch():
    with pytest.raises(StoreSelectionError):
        StoreSelector(FakeCurrentStore(None)).select(_variation(US, EU))
