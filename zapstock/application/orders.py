"""
Order workflow.

Statuses are advisory labels for the operator: ``set_status`` overwrites
whatever is there, backward moves included. Stock consumed by an order is
never returned; there is no cancellation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from zapstock.core import get_logger
from zapstock.domain.models import Order, OrderStatus
from .errors import InsufficientStockError, DraftBusyError, DraftIncompleteError
from .inventory import InventoryService
from .schemas import OrderCreate, DraftOrder, OrderView, MessageLink
from .store import RecordStore
from . import messaging

logger = get_logger(__name__)

ORDER_TABS = {
    "all": None,
    "pending": {OrderStatus.PENDING, OrderStatus.LABEL_GENERATED},
    "shipped": {OrderStatus.SHIPPED, OrderStatus.DELIVERED},
}

class OrderService:
    def __init__(self, store: RecordStore, inventory: Optional[InventoryService] = None):
        self.store = store
        self.inventory = inventory or InventoryService(store)

    def get(self, order_id: str) -> Optional[Order]:
        return self.store.get("orders", order_id)

    def list(self, tab: str = "all") -> list[Order]:
        if tab not in ORDER_TABS:
            raise ValueError(f"Unknown order tab: {tab}")
        statuses = ORDER_TABS[tab]
        orders = [o for o in self.store.orders if statuses is None or o.status in statuses]
        return sorted(orders, key=lambda o: o.date, reverse=True)

    def place_order(self, data: OrderCreate) -> Optional[Order]:
        """Create an order and consume its stock.

        Returns None when the customer or lot is unknown, or the lot is
        archived. Raises
        InsufficientStockError, without touching anything, when the lot
        holds fewer units than requested.
        """
        product = self.inventory.get(data.product_id)
        if not product:
            logger.warning(f"Order for unknown product {data.product_id} ignored")
            return None
        if not product.is_active:
            logger.warning(f"Order for archived product {data.product_id} ignored")
            return None
        if self.store.get("customers", data.customer_id) is None:
            logger.warning(f"Order for unknown customer {data.customer_id} ignored")
            return None
        if data.quantity > product.remaining_quantity:
            logger.warning(
                "Order rejected: insufficient stock",
                extra={'extra_fields': {
                    'product_id': product.id,
                    'requested': data.quantity,
                    'available': product.remaining_quantity,
                }}
            )
            raise InsufficientStockError(product.id, data.quantity, product.remaining_quantity)

        self.inventory.decrement(product.id, data.quantity)
        order = Order(
            id=self.store.new_id("orders"),
            customer_id=data.customer_id,
            product_id=data.product_id,
            quantity=data.quantity,
            status=OrderStatus.PENDING,
            notes=data.notes or None,
            date=datetime.utcnow(),
            is_paid=False,
        )
        self.store.orders.insert(0, order)
        self.store.changed("orders")
        logger.info(
            f"Order placed: {order.id}",
            extra={'extra_fields': {
                'order_id': order.id,
                'product_id': product.id,
                'quantity': order.quantity,
                'remaining': product.remaining_quantity,
            }}
        )
        return order

    def place_draft(self, draft: DraftOrder) -> Optional[Order]:
        if draft.busy:
            raise DraftBusyError()
        missing = [
            field for field, value in (("customerId", draft.customer_id), ("productId", draft.product_id))
            if not value
        ]
        if missing or draft.quantity < 1:
            raise DraftIncompleteError(missing or ["quantity"])
        return self.place_order(OrderCreate(
            customer_id=draft.customer_id,
            product_id=draft.product_id,
            quantity=draft.quantity,
            notes=draft.notes,
        ))

    def set_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        order = self.get(order_id)
        if not order:
            return None
        previous = order.status
        order.status = status
        self.store.changed("orders")
        logger.info(
            f"Order {order_id} status {previous.value} -> {status.value}",
            extra={'extra_fields': {'order_id': order_id, 'from': previous.value, 'to': status.value}}
        )
        return order

    def toggle_paid(self, order_id: str) -> Optional[Order]:
        order = self.get(order_id)
        if not order:
            return None
        return self.set_paid(order_id, not order.is_paid)

    def set_paid(self, order_id: str, is_paid: bool) -> Optional[Order]:
        order = self.get(order_id)
        if not order:
            return None
        order.is_paid = is_paid
        self.store.changed("orders")
        logger.info(f"Order {order_id} paid={is_paid}")
        return order

    def view(self, order: Order) -> Optional[OrderView]:
        customer = self.store.get("customers", order.customer_id)
        product = self.store.get("products", order.product_id)
        if not customer or not product:
            return None
        return OrderView(
            **order.model_dump(),
            customer_name=customer.name,
            customer_whatsapp=customer.whatsapp,
            product_name=product.name,
            product_archived=not product.is_active,
            total=messaging.order_total(order, product),
        )

    def views(self, tab: str = "all") -> list[OrderView]:
        """Display rows; orders with unresolvable references are skipped."""
        return [v for v in (self.view(o) for o in self.list(tab)) if v is not None]

    def message_link(self, order_id: str, kind: str) -> Optional[MessageLink]:
        order = self.get(order_id)
        if not order:
            return None
        customer = self.store.get("customers", order.customer_id)
        product = self.store.get("products", order.product_id)
        if not customer or not product:
            return None
        text = messaging.order_message(kind, customer, product, order)
        return MessageLink(text=text, url=messaging.whatsapp_link(customer.whatsapp, text))
