"""
In-memory record store mirrored into a blob store.

The three collections live as plain lists on the store. Services mutate them
in place and then call ``changed(name)``; every registered listener runs with
the full collection, and the first listener is ``save``, which overwrites the
collection's slot with a complete snapshot.
"""

from typing import Callable, Optional
from pydantic import TypeAdapter, ValidationError

from zapstock.core import get_logger
from zapstock.domain.models import Customer, Product, Order, new_id
from zapstock.infrastructure.blob_store import BlobStore
from .seed import SEEDS

logger = get_logger(__name__)

COLLECTIONS = {
    "customers": Customer,
    "products": Product,
    "orders": Order,
}

Listener = Callable[[str, list], None]

class RecordStore:
    def __init__(self, blobs: BlobStore, key_prefix: str = "zapstock_"):
        self.blobs = blobs
        self.key_prefix = key_prefix
        self._adapters = {name: TypeAdapter(list[model]) for name, model in COLLECTIONS.items()}
        self._listeners: list[Listener] = [self.save]
        self.seeded: set[str] = set()

        self.customers: list[Customer] = self.load("customers")
        self.products: list[Product] = self.load("products")
        self.orders: list[Order] = self.load("orders")

        for name in sorted(self.seeded):
            self.save(name, self.collection(name))

    def _key(self, name: str) -> str:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
        return f"{self.key_prefix}{name}"

    def collection(self, name: str) -> list:
        self._key(name)
        return getattr(self, name)

    def load(self, name: str) -> list:
        """Read a collection snapshot, falling back to its seed."""
        key = self._key(name)
        raw = self.blobs.get(key)
        if raw is None:
            logger.info(f"No snapshot for {name}; using seed data")
            self.seeded.add(name)
            return SEEDS[name]()
        try:
            return self._adapters[name].validate_json(raw)
        except ValidationError as e:
            # Keep the unreadable payload aside so it is not lost on next save
            self.blobs.put(f"{key}.corrupt", raw)
            logger.error(
                f"Malformed snapshot for {name}; quarantined and reseeded",
                extra={'extra_fields': {'collection': name, 'errors': e.error_count()}}
            )
            self.seeded.add(name)
            return SEEDS[name]()

    def save(self, name: str, snapshot: Optional[list] = None) -> None:
        """Overwrite the slot with the full collection."""
        if snapshot is None:
            snapshot = self.collection(name)
        payload = self._adapters[name].dump_json(snapshot, by_alias=True).decode("utf-8")
        self.blobs.put(self._key(name), payload)
        logger.debug(f"Saved {name} snapshot", extra={'extra_fields': {'records': len(snapshot)}})

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def changed(self, name: str) -> None:
        snapshot = self.collection(name)
        for listener in list(self._listeners):
            listener(name, snapshot)

    def get(self, name: str, record_id: str):
        return next((r for r in self.collection(name) if r.id == record_id), None)

    def new_id(self, name: str) -> str:
        """A random id not yet used in the collection."""
        while True:
            candidate = new_id()
            if self.get(name, candidate) is None:
                return candidate
