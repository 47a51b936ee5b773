"""
Sync Domain Schemas
===================

Schemas untuk request/response endpoint ERP sync dan audit log
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, Any, Dict
from datetime import datetime

from .base import BaseSchema
from .enums import EntityType, SyncAction


class SyncRequestSchema(BaseModel):
    """Body dari POST /api/erp-sync"""
    integration_id: str = Field(..., alias='integrationId', min_length=1)
    action: SyncAction
    entity_type: Optional[EntityType] = Field(None, alias='entityType')
    entity_id: Optional[str] = Field(None, alias='entityId')

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    @model_validator(mode='after')
    def entity_required_for_single_sync(self):
        if self.action is SyncAction.SYNC_ENTITY and (not self.entity_type or not self.entity_id):
            raise ValueError('entityType and entityId are required for sync_entity')
        return self


class SyncResultSchema(BaseModel):
    """Tally hasil satu sync run"""
    success: bool = True
    synced: int = 0
    failed: int = 0


class SyncLogSchema(BaseSchema):
    """Schema untuk ERPSyncLog model"""
    integration_id: str
    integration_name: Optional[str] = None

    entity_type: str
    entity_id: str
    entity_reference: Optional[str] = None

    sync_direction: str = 'outbound'
    status: str

    request_payload: Optional[Any] = None
    response_payload: Optional[Any] = None
    response_code: Optional[int] = None

    error_message: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None
    retry_count: Optional[int] = None

    erp_reference_id: Optional[str] = None
    erp_reference_number: Optional[str] = None

    triggered_by: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_ms: Optional[int] = None

    @model_validator(mode='before')
    @classmethod
    def pull_integration_name(cls, data: Any) -> Any:
        """Ambil nama integration dari relationship kalau sudah di-load"""
        if isinstance(data, dict):
            return data
        integration = getattr(data, '__dict__', {}).get('integration')
        if integration is None:
            return data
        values = {column.key: getattr(data, column.key) for column in data.__table__.columns}
        values['integration_name'] = integration.name
        return values
