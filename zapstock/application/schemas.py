from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional

from zapstock.domain.models import Customer, OrderStatus

class ApiModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True

class CustomerCreate(ApiModel):
    name: str = Field(min_length=1)
    whatsapp: str
    address: str

class ProductCreate(ApiModel):
    name: str = Field(min_length=1)
    total_quantity: int = Field(ge=1)
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None

class OrderCreate(ApiModel):
    customer_id: str
    product_id: str
    quantity: int = Field(ge=1)
    notes: Optional[str] = None

class OrderStatusUpdate(ApiModel):
    status: OrderStatus

class OrderPaidUpdate(ApiModel):
    is_paid: bool

class DraftOrder(ApiModel):
    """New-order form state, filled by hand or from a pasted message.

    Drafts are held by the client; the server keeps no draft state. ``busy``
    is set only for the length of a smart-fill call, and submission refuses a
    draft that arrives with it set.
    """
    customer_id: Optional[str] = None
    product_id: Optional[str] = None
    quantity: int = 1
    notes: str = ""
    busy: bool = False

class OrderHints(ApiModel):
    """Best-effort structured guess returned by the oracle."""
    customer_name: Optional[str] = None
    customer_address: Optional[str] = None
    customer_phone: Optional[str] = None
    product_keywords: Optional[str] = None
    quantity: Optional[int] = None

class SmartFillRequest(ApiModel):
    message: str
    draft: DraftOrder = Field(default_factory=DraftOrder)

class SmartFillResult(ApiModel):
    draft: DraftOrder
    error: Optional[str] = None
    created_customer: Optional[Customer] = None

class OrderView(ApiModel):
    """Order resolved against its customer and lot for display."""
    id: str
    customer_id: str
    product_id: str
    quantity: int
    status: OrderStatus
    notes: Optional[str] = None
    date: datetime
    is_paid: bool
    customer_name: str
    customer_whatsapp: str
    product_name: str
    product_archived: bool
    # None when the lot has no price
    total: Optional[float] = None

class LowStockItem(ApiModel):
    id: str
    name: str
    remaining_quantity: int
    sold_out: bool

class DashboardSummary(ApiModel):
    pending_orders: int
    total_stock: int
    receivable: float
    customer_count: int
    low_stock: list[LowStockItem]
    recent_orders: list[OrderView]

class MessageLink(ApiModel):
    text: str
    url: str
