class ZapStockError(Exception):
    """Base class for domain errors."""

class InsufficientStockError(ZapStockError):
    def __init__(self, product_id: str, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"requested {requested}, only {available} left"
        )

class DraftBusyError(ZapStockError):
    def __init__(self):
        super().__init__("Draft is being filled from a message; wait for extraction to finish")

class DraftIncompleteError(ZapStockError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Draft is missing: {', '.join(missing)}")
