from zapstock.domain.models import OrderStatus
from .orders import OrderService
from .schemas import DashboardSummary, LowStockItem
from .store import RecordStore

RECENT_ORDERS = 5

def build_summary(store: RecordStore, low_stock_threshold: int = 10) -> DashboardSummary:
    orders = OrderService(store)
    active = orders.inventory.active()

    receivable = 0.0
    for order in store.orders:
        if order.is_paid:
            continue
        product = store.get("products", order.product_id)
        if product and product.price:
            receivable += product.price * order.quantity

    low_stock = [
        LowStockItem(
            id=p.id,
            name=p.name,
            remaining_quantity=p.remaining_quantity,
            sold_out=p.remaining_quantity == 0,
        )
        for p in active if p.remaining_quantity < low_stock_threshold
    ]

    recent = [v for v in (orders.view(o) for o in store.orders[:RECENT_ORDERS]) if v is not None]

    return DashboardSummary(
        pending_orders=sum(1 for o in store.orders if o.status == OrderStatus.PENDING),
        total_stock=sum(p.remaining_quantity for p in active),
        receivable=round(receivable, 2),
        customer_count=len(store.customers),
        low_stock=low_stock,
        recent_orders=recent,
    )
