# procurement_sync/models/procurement.py
# Snapshot tabel Invoice dan Purchase Order yang dibaca oleh ERP sync engine.
# Lifecycle dan business rule entity ini dikelola oleh modul procurement lain.

from sqlalchemy import Column, String, Text, Date, Numeric, JSON

from .base import BaseModel


class PurchaseOrder(BaseModel):
    """Model untuk Purchase Order yang dikirim ke vendor"""
    __tablename__ = 'purchase_orders'

    po_number = Column(String(50), unique=True, nullable=False, index=True)

    # Vendor information
    vendor_id = Column(String(36), index=True)
    vendor_name = Column(String(200))

    # PO Details
    order_date = Column(Date)
    expected_delivery_date = Column(Date)
    subtotal = Column(Numeric(15, 2))
    tax_amount = Column(Numeric(15, 2))
    total_amount = Column(Numeric(15, 2))
    currency = Column(String(3), default='USD')

    # Status tracking
    status = Column(String(30), default='draft', nullable=False, index=True)
    # draft, pending_approval, approved, sent, acknowledged, received, closed, cancelled

    line_items = Column(JSON)
    notes = Column(Text)

    def __repr__(self):
        return f'<PurchaseOrder {self.po_number} - {self.status}>'


class Invoice(BaseModel):
    """Model untuk vendor Invoice"""
    __tablename__ = 'invoices'

    invoice_number = Column(String(50), unique=True, nullable=False, index=True)

    purchase_order_id = Column(String(36), index=True)
    vendor_id = Column(String(36), index=True)
    vendor_name = Column(String(200))

    # Invoice Details
    invoice_date = Column(Date)
    due_date = Column(Date)
    subtotal = Column(Numeric(15, 2))
    tax_amount = Column(Numeric(15, 2))
    total_amount = Column(Numeric(15, 2))
    currency = Column(String(3), default='USD')

    # Status tracking
    status = Column(String(30), default='draft', nullable=False, index=True)
    # draft, pending_approval, approved, rejected, paid, cancelled

    notes = Column(Text)

    def __repr__(self):
        return f'<Invoice {self.invoice_number} - {self.status}>'
