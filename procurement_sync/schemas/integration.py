"""
Integration Domain Schemas
==========================

Schemas untuk konfigurasi ERP integration yang dipakai sync engine.

Field yang dipakai semua entity (base_url, auth, policy) divalidasi saat
load. Endpoint dan field mapping disimpan mentah lalu divalidasi per entity
type lewat endpoint_for / field_mappings_for, jadi mapping purchase_order
yang rusak tidak menghalangi sync invoice.
"""

import logging
from pydantic import BaseModel, Field, TypeAdapter, field_validator
from typing import Any, Dict, Optional, Tuple
from datetime import datetime

from .base import BaseSchema
from .enums import AuthType, EntityType, ERPType, SyncStatus

logger = logging.getLogger(__name__)

_FIELD_MAPPING_ADAPTER = TypeAdapter(Dict[str, str])


class EndpointMappingSchema(BaseModel):
    """Routing satu entity type: create path, update path, dan HTTP method"""
    create: Optional[str] = None
    update: Optional[str] = None
    method: Optional[str] = 'POST'

    @field_validator('method')
    @classmethod
    def normalize_method(cls, v: Optional[str]) -> str:
        v = (v or 'POST').strip().upper()
        if not v.isalpha():
            raise ValueError(f"'{v}' is not an HTTP method name")
        return v


class IntegrationConfigSchema(BaseSchema):
    """Validated, read-only view dari satu baris erp_integrations"""
    name: str
    erp_type: ERPType = ERPType.CUSTOM_REST
    base_url: str

    auth_type: Optional[AuthType] = None
    auth_config: Dict[str, str] = Field(default_factory=dict)

    endpoint_mappings: Dict[str, Any] = Field(default_factory=dict)
    field_mappings: Dict[str, Any] = Field(default_factory=dict)

    request_headers: Dict[str, str] = Field(default_factory=dict)
    request_timeout_seconds: int = Field(30, gt=0)
    retry_attempts: int = Field(3, ge=0)

    sync_invoices: bool = True
    sync_purchase_orders: bool = True

    is_active: bool = False
    last_sync_at: Optional[datetime] = None
    last_sync_status: Optional[SyncStatus] = None

    @field_validator('auth_config', 'endpoint_mappings', 'field_mappings', 'request_headers', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        return {} if v is None else v

    @field_validator('sync_invoices', 'sync_purchase_orders', 'is_active', mode='before')
    @classmethod
    def none_as_false(cls, v):
        return False if v is None else v

    @field_validator('request_timeout_seconds', 'retry_attempts', mode='before')
    @classmethod
    def none_as_default(cls, v, info):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator('auth_type', mode='before')
    @classmethod
    def unknown_auth_type_as_none(cls, v):
        """Auth type yang tidak dikenal tidak menghasilkan auth header"""
        if v is None or isinstance(v, AuthType):
            return v
        try:
            return AuthType(str(v).strip().lower())
        except ValueError:
            logger.warning(f"Unknown auth_type '{v}', no auth header will be sent")
            return None

    @field_validator('erp_type', mode='before')
    @classmethod
    def unknown_erp_type_as_custom(cls, v):
        """ERP family yang tidak dikenal diperlakukan sebagai custom_rest"""
        if v is None or isinstance(v, ERPType):
            return v or ERPType.CUSTOM_REST
        try:
            return ERPType(str(v).strip().lower())
        except ValueError:
            logger.warning(f"Unknown erp_type '{v}', treated as custom_rest")
            return ERPType.CUSTOM_REST

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v:
            raise ValueError('base_url is required')
        return v.rstrip('/')

    def scope_enabled(self, entity_type: EntityType) -> bool:
        if entity_type is EntityType.INVOICE:
            return self.sync_invoices
        return self.sync_purchase_orders

    def endpoint_for(self, entity_type: EntityType) -> Tuple[str, str]:
        """
        Return (path, method); default /api/{entity_type}s dengan POST.
        Raise pydantic ValidationError kalau mapping entity type ini rusak.
        """
        raw = self.endpoint_mappings.get(entity_type.value)
        mapping = EndpointMappingSchema.model_validate(raw) if raw is not None else None
        path = mapping.create if mapping and mapping.create else f"/api/{entity_type.value}s"
        method = mapping.method if mapping else 'POST'
        return path, method

    def field_mappings_for(self, entity_type: EntityType) -> Dict[str, str]:
        """internal field -> ERP field path; raise pydantic ValidationError kalau bukan string map"""
        return _FIELD_MAPPING_ADAPTER.validate_python(self.field_mappings.get(entity_type.value) or {})
