from __future__ import annotations

from datetime import datetime
from typing import Optional

from zapstock.core import get_logger
from zapstock.domain.models import Customer
from .schemas import CustomerCreate
from .store import RecordStore

logger = get_logger(__name__)

class CustomerService:
    """Customer directory: creation and name lookup."""

    def __init__(self, store: RecordStore):
        self.store = store

    def list(self) -> list[Customer]:
        return list(self.store.customers)

    def get(self, customer_id: str) -> Optional[Customer]:
        return self.store.get("customers", customer_id)

    def create(self, data: CustomerCreate) -> Customer:
        customer = Customer(
            id=self.store.new_id("customers"),
            name=data.name,
            whatsapp=data.whatsapp,
            address=data.address,
            created_at=datetime.utcnow(),
        )
        self.store.customers.append(customer)
        self.store.changed("customers")
        logger.info(f"Customer created: {customer.id}", extra={'extra_fields': {'customer_id': customer.id}})
        return customer

    def find(self, query: str) -> Optional[Customer]:
        """First customer whose name contains ``query``, ignoring case.

        Insertion order decides between several matches.
        """
        needle = query.lower()
        return next((c for c in self.store.customers if needle in c.name.lower()), None)

    def search(self, term: Optional[str] = None) -> list[Customer]:
        if not term:
            return self.list()
        needle = term.lower()
        return [
            c for c in self.store.customers
            if needle in c.name.lower() or term in c.whatsapp
        ]
