import pytest

from procurement_sync.schemas import EntityType, IntegrationConfigSchema
from procurement_sync.services.exceptions import NotFoundError
from procurement_sync.services.integration import EntityFetcher


def integration_config(**overrides):
    values = {
        "id": "int-1",
        "name": "Test ERP",
        "erp_type": "custom_rest",
        "base_url": "https://erp.example.com",
        "sync_invoices": True,
        "sync_purchase_orders": True,
        "is_active": True,
    }
    values.update(overrides)
    return IntegrationConfigSchema.model_validate(values)


@pytest.mark.asyncio
async def test_invoices_filtered_by_status_newest_first(db_session, make_invoice):
    await make_invoice(invoice_number="INV-A", status="approved")
    await make_invoice(invoice_number="INV-B", status="draft")
    await make_invoice(invoice_number="INV-C", status="paid")
    await make_invoice(invoice_number="INV-D", status="rejected")

    entities = await EntityFetcher(db_session).fetch_eligible(EntityType.INVOICE, integration_config())

    assert [entity["invoice_number"] for entity in entities] == ["INV-C", "INV-A"]


@pytest.mark.asyncio
async def test_purchase_order_statuses(db_session, make_purchase_order):
    for status in ("approved", "sent", "acknowledged", "draft", "closed"):
        await make_purchase_order(po_number=f"PO-{status}", status=status)

    entities = await EntityFetcher(db_session).fetch_eligible(EntityType.PURCHASE_ORDER, integration_config())

    assert {entity["po_number"] for entity in entities} == {"PO-approved", "PO-sent", "PO-acknowledged"}


@pytest.mark.asyncio
async def test_batch_limit(db_session, make_invoice):
    for _ in range(5):
        await make_invoice()

    entities = await EntityFetcher(db_session, batch_limit=3).fetch_eligible(EntityType.INVOICE, integration_config())

    assert [entity["invoice_number"] for entity in entities] == ["INV-0005", "INV-0004", "INV-0003"]


@pytest.mark.asyncio
async def test_disabled_scope_returns_empty(db_session, make_invoice):
    await make_invoice()
    config = integration_config(sync_invoices=False)

    assert await EntityFetcher(db_session).fetch_eligible(EntityType.INVOICE, config) == []


@pytest.mark.asyncio
async def test_snapshot_is_json_safe(db_session, make_invoice):
    invoice = await make_invoice()

    entity = await EntityFetcher(db_session).fetch_one(EntityType.INVOICE, invoice.id)

    assert entity["id"] == invoice.id
    assert entity["total_amount"] == 1100.0
    assert entity["invoice_date"] == "2026-01-15"
    assert isinstance(entity["created_at"], str)


@pytest.mark.asyncio
async def test_fetch_one_missing(db_session):
    with pytest.raises(NotFoundError):
        await EntityFetcher(db_session).fetch_one(EntityType.PURCHASE_ORDER, "does-not-exist")
