import pytest

from zapstock.application.customers import CustomerService
from zapstock.application.errors import DraftBusyError
from zapstock.application.inventory import InventoryService
from zapstock.application.schemas import DraftOrder, OrderHints
from zapstock.application.smart_fill import (
    SmartFillService, NOT_UNDERSTOOD, PROCESSING_ERROR, ADDRESS_PLACEHOLDER,
)

pytestmark = pytest.mark.anyio

def _service(store, oracle):
    return SmartFillService(oracle, CustomerService(store), InventoryService(store))

async def test_unknown_customer_without_phone_leaves_customer_empty(store, oracle):
    oracle.result = OrderHints(customer_name="Ana", product_keywords="meia", quantity=2)
    result = await _service(store, oracle).fill(DraftOrder(), "Quero 2 caixas de meia, sou a Ana")
    assert result.error is None
    assert result.draft.customer_id is None
    assert result.draft.product_id == "2"
    assert result.draft.quantity == 2
    assert result.created_customer is None
    assert len(store.customers) == 2

async def test_existing_customer_is_selected(store, oracle):
    oracle.result = OrderHints(customer_name="joão", customer_phone="999", quantity=1)
    result = await _service(store, oracle).fill(DraftOrder(), "msg")
    assert result.draft.customer_id == "2"
    assert result.created_customer is None

async def test_new_customer_created_when_name_and_phone_present(store, oracle):
    oracle.result = OrderHints(customer_name="Ana Paula", customer_phone="31 98888-1111", quantity=3)
    result = await _service(store, oracle).fill(DraftOrder(), "msg")
    created = result.created_customer
    assert created is not None
    assert created.address == ADDRESS_PLACEHOLDER
    assert result.draft.customer_id == created.id
    assert store.customers[-1].id == created.id
    assert result.draft.notes == ""

async def test_unmatched_address_becomes_note(store, oracle):
    oracle.result = OrderHints(customer_name="Ana", customer_address="Rua B, 5", quantity=1)
    result = await _service(store, oracle).fill(DraftOrder(notes="old"), "msg")
    assert result.draft.customer_id is None
    assert result.draft.notes == "Endereço extraído: Rua B, 5"

async def test_archived_lots_are_not_matched(store, oracle):
    InventoryService(store).archive("2")
    oracle.result = OrderHints(product_keywords="meias", quantity=1)
    result = await _service(store, oracle).fill(DraftOrder(product_id="1"), "msg")
    assert result.draft.product_id == "1"

async def test_invalid_quantity_is_ignored(store, oracle):
    oracle.result = OrderHints(quantity=0)
    result = await _service(store, oracle).fill(DraftOrder(quantity=4), "msg")
    assert result.draft.quantity == 4

async def test_oracle_without_answer_leaves_draft_untouched(store, oracle):
    draft = DraftOrder(customer_id="1", product_id="2", quantity=3, notes="n")
    before = draft.model_dump()
    result = await _service(store, oracle).fill(draft, "msg")
    assert result.error == NOT_UNDERSTOOD
    assert result.draft.model_dump() == before

async def test_oracle_crash_leaves_draft_untouched(store, oracle):
    oracle.error = RuntimeError("boom")
    draft = DraftOrder(customer_id="1", quantity=3)
    before = draft.model_dump()
    result = await _service(store, oracle).fill(draft, "msg")
    assert result.error == PROCESSING_ERROR
    assert result.draft.model_dump() == before

async def test_blank_message_skips_oracle(store, oracle):
    result = await _service(store, oracle).fill(DraftOrder(), "   ")
    assert oracle.calls == []
    assert result.error is None

async def test_draft_is_busy_during_extraction(store, oracle):
    draft = DraftOrder()
    observed = []
    oracle.on_call = lambda: observed.append(draft.busy)
    oracle.result = OrderHints(quantity=1)
    await _service(store, oracle).fill(draft, "msg")
    assert observed == [True]
    assert draft.busy is False

async def test_busy_draft_cannot_be_filled_again(store, oracle):
    with pytest.raises(DraftBusyError):
        await _service(store, oracle).fill(DraftOrder(busy=True), "msg")
    assert oracle.calls == []
