"""
Smart-fill: pre-populate an order draft from a pasted WhatsApp message.

The oracle's guess never selects anything by itself. A customer is selected
only through a directory match (or created when both name and phone were
extracted), and a lot only through a substring match against active lot
names, the same lookups the manual form relies on.
"""

from typing import Optional, Protocol

from zapstock.core import get_logger
from .customers import CustomerService
from .errors import DraftBusyError
from .inventory import InventoryService
from .schemas import CustomerCreate, DraftOrder, OrderHints, SmartFillResult

logger = get_logger(__name__)

NOT_UNDERSTOOD = "Não foi possível entender o pedido. Tente preencher manualmente."
PROCESSING_ERROR = "Erro ao processar com IA."
ADDRESS_PLACEHOLDER = "Endereço pendente"

class OrderOracle(Protocol):
    async def extract(self, message: str) -> Optional[OrderHints]: ...

class SmartFillService:
    def __init__(self, oracle: OrderOracle, customers: CustomerService, inventory: InventoryService):
        self.oracle = oracle
        self.customers = customers
        self.inventory = inventory

    async def extract(self, message: str) -> Optional[OrderHints]:
        return await self.oracle.extract(message)

    async def fill(self, draft: DraftOrder, message: str) -> SmartFillResult:
        """Ask the oracle about ``message`` and merge its guess into ``draft``.

        The draft is flagged busy while the oracle call is in flight. On any
        failure the draft comes back untouched along with a user-facing error.
        """
        if not message.strip():
            return SmartFillResult(draft=draft)
        if draft.busy:
            raise DraftBusyError()

        draft.busy = True
        try:
            hints = await self.extract(message)
        except Exception:
            logger.error("Smart-fill extraction crashed", exc_info=True)
            return SmartFillResult(draft=draft, error=PROCESSING_ERROR)
        finally:
            draft.busy = False

        if hints is None:
            return SmartFillResult(draft=draft, error=NOT_UNDERSTOOD)
        return self.apply(draft, hints)

    def apply(self, draft: DraftOrder, hints: OrderHints) -> SmartFillResult:
        filled = draft.model_copy()
        customer_id = None
        created = None

        if hints.customer_name:
            match = self.customers.find(hints.customer_name)
            if match:
                customer_id = match.id

        if not customer_id and hints.customer_name and hints.customer_phone:
            created = self.customers.create(CustomerCreate(
                name=hints.customer_name,
                whatsapp=hints.customer_phone,
                address=hints.customer_address or ADDRESS_PLACEHOLDER,
            ))
            customer_id = created.id

        if customer_id:
            filled.customer_id = customer_id

        product = None
        if hints.product_keywords:
            product = self.inventory.find_active(hints.product_keywords)
            if product:
                filled.product_id = product.id

        # Same lower bound as the manual form
        if hints.quantity and hints.quantity >= 1:
            filled.quantity = hints.quantity

        if hints.customer_address and not customer_id:
            filled.notes = f"Endereço extraído: {hints.customer_address}"

        logger.info(
            "Draft filled from message",
            extra={'extra_fields': {
                'customer_matched': customer_id is not None and created is None,
                'customer_created': created is not None,
                'product_matched': product is not None,
            }}
        )
        return SmartFillResult(draft=filled, created_customer=created)
