"""
Integration Models
==================

Models related to third-party integrations, such as ERP systems.
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from .base import BaseModel


def default_endpoint_mappings():
    return {
        'invoice': {'create': '/invoices', 'update': '/invoices/{id}', 'method': 'POST'},
        'purchase_order': {'create': '/purchase-orders', 'update': '/purchase-orders/{id}', 'method': 'POST'},
    }


def default_field_mappings():
    return {'invoice': {}, 'purchase_order': {}}


class ERPIntegration(BaseModel):
    """Konfigurasi koneksi ke satu instance ERP eksternal."""
    __tablename__ = 'erp_integrations'

    name = Column(String(100), nullable=False)
    erp_type = Column(String(50), nullable=False)
    description = Column(Text)

    # Connection settings
    base_url = Column(String(500), nullable=False)
    auth_type = Column(String(20), nullable=False, default='api_key')  # api_key, bearer, basic, oauth2
    auth_config = Column(JSON, default=dict)

    # Routing & transform (per entity type)
    endpoint_mappings = Column(JSON, default=default_endpoint_mappings)
    field_mappings = Column(JSON, default=default_field_mappings)

    # Scope flags
    sync_invoices = Column(Boolean, default=True)
    sync_purchase_orders = Column(Boolean, default=True)

    # Request policy
    request_headers = Column(JSON, default=dict)
    request_timeout_seconds = Column(Integer, default=30)
    retry_attempts = Column(Integer, default=3)

    # Status
    is_active = Column(Boolean, default=False, index=True)
    last_sync_at = Column(DateTime)
    last_sync_status = Column(String(20))  # success, partial, failed

    created_by = Column(String(36))

    sync_logs = relationship('ERPSyncLog', back_populates='integration')

    def __repr__(self):
        return f'<ERPIntegration {self.name} ({self.erp_type})>'


class ERPSyncLog(BaseModel):
    """Audit record untuk satu percobaan sync satu entity."""
    __tablename__ = 'erp_sync_logs'

    integration_id = Column(String(36), ForeignKey('erp_integrations.id'), nullable=False, index=True)
    integration = relationship('ERPIntegration', back_populates='sync_logs')

    # What was synced
    entity_type = Column(String(30), nullable=False, index=True)
    entity_id = Column(String(36), nullable=False, index=True)
    entity_reference = Column(String(100))  # Invoice number, PO number

    sync_direction = Column(String(10), nullable=False, default='outbound')
    status = Column(String(20), nullable=False, default='in_progress', index=True)

    # Request/Response data (no secrets)
    request_payload = Column(JSON)
    response_payload = Column(JSON)
    response_code = Column(Integer)

    # Error handling
    error_message = Column(Text)
    error_details = Column(JSON)
    retry_count = Column(Integer, default=0)

    # ERP reference
    erp_reference_id = Column(String(100))
    erp_reference_number = Column(String(100))

    # Timing
    started_at = Column(DateTime)
    completed_at = Column(DateTime)
    duration_ms = Column(Integer)

    triggered_by = Column(String(64))

    def __repr__(self):
        return f'<ERPSyncLog {self.entity_type}({self.entity_id}) - {self.status}>'
