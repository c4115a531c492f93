import json

from zapstock.application.store import RecordStore
from zapstock.domain.models import OrderStatus, ProductStatus

def test_first_run_uses_seed_and_persists_it(blobs):
    store = RecordStore(blobs)
    assert store.seeded == {"customers", "products", "orders"}
    assert [c.name for c in store.customers] == ["Maria Silva", "João Santos"]
    assert store.get("products", "2").remaining_quantity == 85
    assert [o.id for o in store.orders] == ["101", "102"]
    assert blobs.get("zapstock_customers") is not None
    assert blobs.get("zapstock_orders") is not None

def test_snapshot_uses_camel_case_keys(blobs):
    RecordStore(blobs)
    products = json.loads(blobs.get("zapstock_products"))
    assert products[1]["remainingQuantity"] == 85
    assert products[1]["totalQuantity"] == 100
    assert products[1]["status"] == "active"
    orders = json.loads(blobs.get("zapstock_orders"))
    assert orders[0]["isPaid"] is True
    assert orders[0]["customerId"] == "1"
    assert orders[0]["status"] == "Pending"

def test_mutations_survive_reload(blobs):
    store = RecordStore(blobs)
    store.get("products", "2").status = ProductStatus.ARCHIVED
    store.changed("products")
    store.get("orders", "102").status = OrderStatus.SHIPPED
    store.changed("orders")

    reloaded = RecordStore(blobs)
    assert reloaded.seeded == set()
    assert reloaded.get("products", "2").status == ProductStatus.ARCHIVED
    assert reloaded.get("orders", "102").status == OrderStatus.SHIPPED

def test_malformed_snapshot_is_quarantined(blobs):
    blobs.put("zapstock_products", "{not json")
    store = RecordStore(blobs)
    assert "products" in store.seeded
    assert len(store.products) == 2
    assert blobs.get("zapstock_products.corrupt") == "{not json"
    assert json.loads(blobs.get("zapstock_products"))[0]["id"] == "1"

def test_snapshot_with_wrong_shape_is_quarantined(blobs):
    blobs.put("zapstock_orders", json.dumps([{"id": "x"}]))
    store = RecordStore(blobs)
    assert [o.id for o in store.orders] == ["101", "102"]
    assert blobs.get("zapstock_orders.corrupt") == json.dumps([{"id": "x"}])

def test_changed_notifies_listeners_with_full_collection(store):
    seen = []
    store.add_listener(lambda name, snapshot: seen.append((name, len(snapshot))))
    store.changed("customers")
    assert seen == [("customers", 2)]

def test_key_prefix(blobs):
    RecordStore(blobs, key_prefix="shop1_")
    assert blobs.get("shop1_products") is not None
    assert blobs.get("zapstock_products") is None

def test_new_id_is_unused(store):
    ids = {store.new_id("orders") for _ in range(20)}
    assert not ids & {"101", "102"}
