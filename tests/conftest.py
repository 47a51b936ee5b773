import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime, timedelta, date
from decimal import Decimal

import jwt
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from procurement_sync.config import settings
from procurement_sync.models import Base, ERPIntegration, Invoice, PurchaseOrder


class RecordingSleep:
    """Pengganti asyncio.sleep yang mencatat delay tanpa benar-benar menunggu"""
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def make_integration(db_session):
    async def _make(**overrides):
        values = dict(
            name="Test ERP",
            erp_type="custom_rest",
            base_url="https://erp.example.com",
            auth_type="bearer",
            auth_config={"bearer_token": "erp-token"},
            endpoint_mappings={
                "invoice": {"create": "/invoices", "update": "/invoices/{id}", "method": "POST"},
                "purchase_order": {"create": "/purchase-orders", "update": "/purchase-orders/{id}", "method": "POST"},
            },
            field_mappings={"invoice": {}, "purchase_order": {}},
            request_headers={},
            request_timeout_seconds=5,
            retry_attempts=0,
            sync_invoices=True,
            sync_purchase_orders=True,
            is_active=True,
        )
        values.update(overrides)
        integration = ERPIntegration(**values)
        db_session.add(integration)
        await db_session.commit()
        return integration
    return _make


@pytest.fixture
def make_invoice(db_session):
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        values = dict(
            invoice_number=f"INV-{counter['n']:04d}",
            vendor_id="vendor-1",
            vendor_name="Acme Supplies",
            invoice_date=date(2026, 1, 15),
            due_date=date(2026, 2, 14),
            subtotal=Decimal("1000.00"),
            tax_amount=Decimal("100.00"),
            total_amount=Decimal("1100.00"),
            currency="USD",
            status="approved",
            created_at=datetime(2026, 1, 1) + timedelta(minutes=counter["n"]),
        )
        values.update(overrides)
        invoice = Invoice(**values)
        db_session.add(invoice)
        await db_session.commit()
        return invoice
    return _make


@pytest.fixture
def make_purchase_order(db_session):
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        values = dict(
            po_number=f"PO-{counter['n']:04d}",
            vendor_id="vendor-1",
            vendor_name="Acme Supplies",
            order_date=date(2026, 1, 10),
            total_amount=Decimal("5000.00"),
            currency="USD",
            status="approved",
            created_at=datetime(2026, 1, 1) + timedelta(minutes=counter["n"]),
        )
        values.update(overrides)
        purchase_order = PurchaseOrder(**values)
        db_session.add(purchase_order)
        await db_session.commit()
        return purchase_order
    return _make


@pytest.fixture
def make_token():
    def _make(sub="user-123", expires_in=timedelta(hours=1)):
        payload = {"sub": sub, "exp": datetime.utcnow() + expires_in}
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return _make
