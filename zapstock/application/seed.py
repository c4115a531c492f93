"""First-run dataset used when a collection has never been saved."""

from datetime import datetime
from zapstock.domain.models import Customer, Product, Order, OrderStatus

def seed_customers() -> list[Customer]:
    now = datetime.utcnow()
    return [
        Customer(id="1", name="Maria Silva", whatsapp="11999998888",
                 address="Rua das Flores, 123, SP", created_at=now),
        Customer(id="2", name="João Santos", whatsapp="21988887777",
                 address="Av Atlantica, 400, RJ", created_at=now),
    ]

def seed_products() -> list[Product]:
    return [
        # A sold-out box, kept to show a completed lot
        Product(id="1", name="Kit Camisetas Básicas (Caixa 01)", total_quantity=100,
                remaining_quantity=0, price=25.00),
        Product(id="2", name="Meias Esportivas (Caixa 02)", total_quantity=100,
                remaining_quantity=85, price=12.50),
    ]

def seed_orders() -> list[Order]:
    now = datetime.utcnow()
    return [
        Order(id="101", customer_id="1", product_id="1", quantity=10,
              status=OrderStatus.PENDING, date=now, is_paid=True),
        Order(id="102", customer_id="2", product_id="2", quantity=5,
              status=OrderStatus.PENDING, date=now, is_paid=False),
    ]

SEEDS = {
    "customers": seed_customers,
    "products": seed_products,
    "orders": seed_orders,
}
