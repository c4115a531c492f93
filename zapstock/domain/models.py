from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

class OrderStatus(str, Enum):
    # Advisory workflow labels; any status may be set from any other
    PENDING = "Pending"
    LABEL_GENERATED = "LabelGenerated"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"

class ProductStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"

def new_id() -> str:
    return uuid.uuid4().hex[:9]

class Record(BaseModel):
    """Base for persisted records; snapshots use camelCase keys."""
    class Config:
        alias_generator = to_camel
        populate_by_name = True

class Customer(Record):
    id: str
    name: str
    whatsapp: str
    address: str
    created_at: datetime

class Product(Record):
    """A lot: a finite batch tracked by original and remaining quantity."""
    id: str
    name: str
    description: Optional[str] = None
    total_quantity: int
    remaining_quantity: int
    price: Optional[float] = None
    status: ProductStatus = ProductStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

class Order(Record):
    id: str
    customer_id: str
    product_id: str
    quantity: int
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    date: datetime
    is_paid: bool = False
