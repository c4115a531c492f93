from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Literal

from zapstock.api.deps import get_store
from zapstock.application.inventory import InventoryService
from zapstock.application.schemas import ProductCreate, MessageLink
from zapstock.application.store import RecordStore
from zapstock.application import messaging
from zapstock.domain.models import Product, ProductStatus

router = APIRouter(prefix="/products", tags=["products"])

@router.get("/", response_model=list[Product])
async def list_products(
    store: RecordStore = Depends(get_store),
    status: Literal["active", "archived", "all"] = Query("active")
):
    service = InventoryService(store)
    if status == "all":
        return service.list()
    return service.list(ProductStatus(status))

@router.post("/", response_model=Product, status_code=201)
async def create_product(payload: ProductCreate, store: RecordStore = Depends(get_store)):
    return InventoryService(store).create(payload)

@router.get("/broadcast", response_model=MessageLink)
async def stock_broadcast(store: RecordStore = Depends(get_store)):
    """Stock list ready to paste or share into the sales group"""
    text = InventoryService(store).broadcast_text()
    return MessageLink(text=text, url=messaging.group_share_link(text))

@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, store: RecordStore = Depends(get_store)):
    product = InventoryService(store).get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.post("/{product_id}/archive", response_model=Product)
async def archive_product(product_id: str, store: RecordStore = Depends(get_store)):
    product = InventoryService(store).archive(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
