import pytest

from zapstock.application.errors import InsufficientStockError, DraftBusyError, DraftIncompleteError
from zapstock.application.inventory import InventoryService
from zapstock.application.orders import OrderService
from zapstock.application.schemas import OrderCreate, DraftOrder
from zapstock.domain.models import OrderStatus

def _assert_stock_bounds(store):
    for p in store.products:
        assert 0 <= p.remaining_quantity <= p.total_quantity

def test_place_order_consumes_stock(store):
    order = OrderService(store).place_order(OrderCreate(customer_id="2", product_id="2", quantity=5))
    assert store.get("products", "2").remaining_quantity == 80
    assert order.quantity == 5
    assert order.status == OrderStatus.PENDING
    assert order.is_paid is False
    assert store.orders[0] is order
    assert len(store.orders) == 3

def test_over_stock_order_is_rejected_without_side_effects(store):
    with pytest.raises(InsufficientStockError) as exc:
        OrderService(store).place_order(OrderCreate(customer_id="2", product_id="2", quantity=200))
    assert exc.value.available == 85
    assert store.get("products", "2").remaining_quantity == 85
    assert len(store.orders) == 2

def test_sold_out_lot_rejects_any_order(store):
    with pytest.raises(InsufficientStockError) as exc:
        OrderService(store).place_order(OrderCreate(customer_id="1", product_id="1", quantity=1))
    assert exc.value.available == 0

def test_order_can_take_the_last_units(store):
    OrderService(store).place_order(OrderCreate(customer_id="1", product_id="2", quantity=85))
    assert store.get("products", "2").remaining_quantity == 0
    _assert_stock_bounds(store)

def test_unknown_product_or_customer_is_noop(store):
    service = OrderService(store)
    assert service.place_order(OrderCreate(customer_id="1", product_id="missing", quantity=1)) is None
    assert service.place_order(OrderCreate(customer_id="missing", product_id="2", quantity=1)) is None
    assert len(store.orders) == 2
    assert store.get("products", "2").remaining_quantity == 85

def test_archived_lot_cannot_be_ordered(store, blobs):
    InventoryService(store).archive("2")
    saved = blobs.get("zapstock_orders")
    service = OrderService(store)
    assert service.place_order(OrderCreate(customer_id="2", product_id="2", quantity=5)) is None
    assert service.place_draft(DraftOrder(customer_id="2", product_id="2", quantity=1)) is None
    assert len(store.orders) == 2
    assert store.get("products", "2").remaining_quantity == 85
    assert blobs.get("zapstock_orders") == saved

def test_stock_bounds_hold_over_a_sequence(store):
    service = OrderService(store)
    for qty in (30, 30, 30, 20, 5, 1):
        try:
            service.place_order(OrderCreate(customer_id="1", product_id="2", quantity=qty))
        except InsufficientStockError:
            pass
        _assert_stock_bounds(store)
    assert store.get("products", "2").remaining_quantity == 0

def test_order_is_persisted(store, blobs):
    OrderService(store).place_order(OrderCreate(customer_id="2", product_id="2", quantity=5, notes="urgente"))
    assert '"notes":"urgente"' in blobs.get("zapstock_orders")
    assert '"remainingQuantity":80' in blobs.get("zapstock_products")

def test_set_status_allows_any_transition(store):
    service = OrderService(store)
    service.set_status("102", OrderStatus.SHIPPED)
    order = service.set_status("102", OrderStatus.PENDING)
    assert order.status == OrderStatus.PENDING

def test_set_status_is_idempotent(store):
    service = OrderService(store)
    service.set_status("102", OrderStatus.DELIVERED)
    once = service.get("102").model_dump()
    service.set_status("102", OrderStatus.DELIVERED)
    assert service.get("102").model_dump() == once

def test_paid_flag(store):
    service = OrderService(store)
    assert service.toggle_paid("102").is_paid is True
    assert service.toggle_paid("102").is_paid is False
    service.set_paid("102", True)
    service.set_paid("102", True)
    assert service.get("102").is_paid is True
    # independent of status
    assert service.get("102").status == OrderStatus.PENDING

def test_unknown_order_mutations_are_noops(store):
    service = OrderService(store)
    assert service.set_status("nope", OrderStatus.SHIPPED) is None
    assert service.toggle_paid("nope") is None

def test_tabs_and_ordering(store):
    service = OrderService(store)
    new = service.place_order(OrderCreate(customer_id="1", product_id="2", quantity=1))
    service.set_status("101", OrderStatus.SHIPPED)
    assert service.list()[0].id == new.id
    assert {o.id for o in service.list("pending")} == {new.id, "102"}
    assert [o.id for o in service.list("shipped")] == ["101"]
    with pytest.raises(ValueError):
        service.list("archived")

def test_views_resolve_archived_lots(store):
    InventoryService(store).archive("2")
    views = {v.id: v for v in OrderService(store).views()}
    assert views["102"].product_name == "Meias Esportivas (Caixa 02)"
    assert views["102"].product_archived is True
    assert views["102"].customer_name == "João Santos"
    assert views["102"].total == pytest.approx(62.5)

def test_views_skip_dangling_orders(store):
    store.orders[0].customer_id = "ghost"
    assert [v.id for v in OrderService(store).views()] == ["102"]

def test_place_draft_guards(store):
    service = OrderService(store)
    with pytest.raises(DraftBusyError):
        service.place_draft(DraftOrder(customer_id="1", product_id="2", busy=True))
    with pytest.raises(DraftIncompleteError) as exc:
        service.place_draft(DraftOrder(customer_id="1"))
    assert exc.value.missing == ["productId"]
    order = service.place_draft(DraftOrder(customer_id="1", product_id="2", quantity=2, notes=""))
    assert order.quantity == 2
    assert order.notes is None

def test_message_links(store):
    service = OrderService(store)
    link = service.message_link("102", "payment")
    assert link.url.startswith("https://wa.me/21988887777?text=")
    assert "Total: R$ 62.50" in link.text
    assert "Pagamento confirmado" in service.message_link("102", "label").text
    assert "enviado" in service.message_link("102", "shipped").text
    assert service.message_link("nope", "payment") is None
