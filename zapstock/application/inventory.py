from __future__ import annotations

from typing import Optional

from zapstock.core import get_logger
from zapstock.domain.models import Product, ProductStatus
from .schemas import ProductCreate
from .store import RecordStore
from . import messaging

logger = get_logger(__name__)

class InventoryService:
    """Inventory ledger: lot creation, stock consumption and archiving."""

    def __init__(self, store: RecordStore):
        self.store = store

    def list(self, status: Optional[ProductStatus] = None) -> list[Product]:
        if status is None:
            return list(self.store.products)
        return [p for p in self.store.products if p.status == status]

    def active(self) -> list[Product]:
        return self.list(ProductStatus.ACTIVE)

    def get(self, product_id: str) -> Optional[Product]:
        return self.store.get("products", product_id)

    def create(self, data: ProductCreate) -> Product:
        product = Product(
            id=self.store.new_id("products"),
            name=data.name,
            description=data.description,
            total_quantity=data.total_quantity,
            remaining_quantity=data.total_quantity,
            price=data.price,
            status=ProductStatus.ACTIVE,
        )
        self.store.products.append(product)
        self.store.changed("products")
        logger.info(
            f"Lot created: {product.id}",
            extra={'extra_fields': {'product_id': product.id, 'total_quantity': product.total_quantity}}
        )
        return product

    def archive(self, product_id: str) -> Optional[Product]:
        product = self.get(product_id)
        if not product:
            return None
        product.status = ProductStatus.ARCHIVED
        self.store.changed("products")
        logger.info(f"Lot archived: {product_id}")
        return product

    def decrement(self, product_id: str, amount: int) -> Optional[Product]:
        """Consume stock. The caller has already checked ``amount`` fits."""
        product = self.get(product_id)
        if not product:
            return None
        product.remaining_quantity -= amount
        self.store.changed("products")
        return product

    def find_active(self, keywords: str) -> Optional[Product]:
        """First active lot whose name contains ``keywords``, ignoring case."""
        needle = keywords.lower()
        return next((p for p in self.active() if needle in p.name.lower()), None)

    def broadcast_text(self) -> str:
        return messaging.stock_broadcast(self.active())
