from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from zapstock.api.deps import get_store
from zapstock.application.customers import CustomerService
from zapstock.application.schemas import CustomerCreate, MessageLink
from zapstock.application.store import RecordStore
from zapstock.application import messaging
from zapstock.domain.models import Customer

router = APIRouter(prefix="/customers", tags=["customers"])

@router.get("/", response_model=list[Customer])
async def list_customers(
    store: RecordStore = Depends(get_store),
    q: Optional[str] = Query(None, max_length=100, description="Filter by name or WhatsApp number")
):
    return CustomerService(store).search(q)

@router.post("/", response_model=Customer, status_code=201)
async def create_customer(payload: CustomerCreate, store: RecordStore = Depends(get_store)):
    return CustomerService(store).create(payload)

@router.get("/{customer_id}", response_model=Customer)
async def get_customer(customer_id: str, store: RecordStore = Depends(get_store)):
    customer = CustomerService(store).get(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer

@router.get("/{customer_id}/whatsapp-link", response_model=MessageLink)
async def customer_whatsapp_link(customer_id: str, store: RecordStore = Depends(get_store)):
    customer = CustomerService(store).get(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    text = messaging.contact_message(customer)
    return MessageLink(text=text, url=messaging.whatsapp_link(customer.whatsapp, text))
