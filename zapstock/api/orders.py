from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Literal

from zapstock.api.deps import get_store, get_oracle
from zapstock.application.customers import CustomerService
from zapstock.application.errors import InsufficientStockError, DraftBusyError, DraftIncompleteError
from zapstock.application.inventory import InventoryService
from zapstock.application.orders import OrderService
from zapstock.application.schemas import (
    DraftOrder, MessageLink, OrderCreate, OrderPaidUpdate, OrderStatusUpdate, OrderView,
    SmartFillRequest, SmartFillResult,
)
from zapstock.application.smart_fill import OrderOracle, SmartFillService
from zapstock.application.store import RecordStore
from zapstock.domain.models import Order

router = APIRouter(prefix="/orders", tags=["orders"])

def _insufficient_stock(e: InsufficientStockError) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={
            "message": f"Estoque insuficiente. Restam apenas {e.available} itens.",
            "available": e.available,
        },
    )

@router.get("/", response_model=list[OrderView])
async def list_orders(
    store: RecordStore = Depends(get_store),
    tab: Literal["all", "pending", "shipped"] = Query("all")
):
    """Orders newest first, resolved to customer and lot names."""
    return OrderService(store).views(tab)

@router.post("/", response_model=Order, status_code=201)
async def create_order(payload: OrderCreate, store: RecordStore = Depends(get_store)):
    try:
        order = OrderService(store).place_order(payload)
    except InsufficientStockError as e:
        raise _insufficient_stock(e)
    if not order:
        raise HTTPException(status_code=404, detail="Customer or active product not found")
    return order

@router.post("/draft", response_model=Order, status_code=201)
async def submit_draft(payload: DraftOrder, store: RecordStore = Depends(get_store)):
    try:
        order = OrderService(store).place_draft(payload)
    except DraftBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except DraftIncompleteError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InsufficientStockError as e:
        raise _insufficient_stock(e)
    if not order:
        raise HTTPException(status_code=404, detail="Customer or active product not found")
    return order

@router.post("/smart-fill", response_model=SmartFillResult)
async def smart_fill(
    payload: SmartFillRequest,
    store: RecordStore = Depends(get_store),
    oracle: OrderOracle = Depends(get_oracle),
):
    """Pre-fill a draft from a pasted WhatsApp message.

    Extraction failures are reported in ``error`` with the draft unchanged.
    """
    service = SmartFillService(oracle, CustomerService(store), InventoryService(store))
    try:
        return await service.fill(payload.draft, payload.message)
    except DraftBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

@router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str, store: RecordStore = Depends(get_store)):
    order = OrderService(store).get(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

@router.put("/{order_id}/status", response_model=Order)
async def update_order_status(order_id: str, payload: OrderStatusUpdate, store: RecordStore = Depends(get_store)):
    order = OrderService(store).set_status(order_id, payload.status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

@router.post("/{order_id}/toggle-paid", response_model=Order)
async def toggle_order_paid(order_id: str, store: RecordStore = Depends(get_store)):
    order = OrderService(store).toggle_paid(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

@router.put("/{order_id}/paid", response_model=Order)
async def set_order_paid(order_id: str, payload: OrderPaidUpdate, store: RecordStore = Depends(get_store)):
    order = OrderService(store).set_paid(order_id, payload.is_paid)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

@router.get("/{order_id}/whatsapp-link", response_model=MessageLink)
async def order_whatsapp_link(
    order_id: str,
    kind: Literal["payment", "label", "shipped"] = Query("payment"),
    store: RecordStore = Depends(get_store),
):
    link = OrderService(store).message_link(order_id, kind)
    if not link:
        raise HTTPException(status_code=404, detail="Order not found")
    return link
