"""
Integration Domain Services
===========================

Outbound ERP synchronization engine
"""

from .auth_strategy import resolve_auth_headers
from .field_mapper import FieldMapper
from .http_dispatcher import HttpDispatcher, DispatchResult
from .sync_logger import SyncLogger
from .entity_fetcher import EntityFetcher, SyncableEntity
from .integration_registry import IntegrationRegistry
from .erp_sync_service import ERPSyncService, run_status, extract_erp_reference

__all__ = [
    'resolve_auth_headers',
    'FieldMapper',
    'HttpDispatcher', 'DispatchResult',
    'SyncLogger',
    'EntityFetcher', 'SyncableEntity',
    'IntegrationRegistry',
    'ERPSyncService', 'run_status', 'extract_erp_reference',
]
