"""
ERP Sync Services Module
========================

Services layer untuk outbound ERP sync
Menggunakan dependency injection pattern untuk service management
"""

from .base import BaseService, transactional
from .exceptions import *

# Integration Domain
from .integration import (
    ERPSyncService, IntegrationRegistry, EntityFetcher, SyncLogger,
    HttpDispatcher, FieldMapper
)

__all__ = [
    # Base Classes
    'BaseService', 'transactional',

    # Integration Domain
    'ERPSyncService', 'IntegrationRegistry', 'EntityFetcher', 'SyncLogger',
    'HttpDispatcher', 'FieldMapper',

    'ServiceRegistry', 'create_service_registry',
]


class ServiceRegistry:
    """
    Service Registry untuk dependency injection
    Mengelola lifecycle dan dependencies antar services
    """

    def __init__(self, db_session, config: dict, current_user: str = None,
                 dispatcher: HttpDispatcher = None):
        self.db_session = db_session
        self.config = config
        self.current_user = current_user
        self._services = {}

        # Initialize core services first
        self._init_core_services(dispatcher)

        # Initialize domain services
        self._init_domain_services()

    def _init_core_services(self, dispatcher: HttpDispatcher = None):
        """Initialize core services yang diperlukan services lain"""

        self._services['integration_registry'] = IntegrationRegistry(
            db_session=self.db_session,
            current_user=self.current_user
        )

        self._services['entity_fetcher'] = EntityFetcher(
            db_session=self.db_session,
            current_user=self.current_user,
            batch_limit=self.config.get('ERP_SYNC_BATCH_LIMIT', 50)
        )

        self._services['sync_logger'] = SyncLogger(
            db_session=self.db_session,
            current_user=self.current_user
        )

        self._services['dispatcher'] = dispatcher or HttpDispatcher(
            user_agent=self.config.get('ERP_USER_AGENT')
        )

    def _init_domain_services(self):
        """Initialize domain services dengan dependencies"""

        self._services['erp_sync'] = ERPSyncService(
            db_session=self.db_session,
            current_user=self.current_user,
            integration_registry=self._services['integration_registry'],
            entity_fetcher=self._services['entity_fetcher'],
            sync_logger=self._services['sync_logger'],
            dispatcher=self._services['dispatcher'],
            field_mapper=FieldMapper()
        )

    # Convenience methods untuk frequently used services
    @property
    def erp_sync_service(self) -> ERPSyncService:
        """Get ERPSyncService"""
        return self._services['erp_sync']

    @property
    def sync_logger(self) -> SyncLogger:
        """Get SyncLogger"""
        return self._services['sync_logger']

    @property
    def integration_registry(self) -> IntegrationRegistry:
        """Get IntegrationRegistry"""
        return self._services['integration_registry']


# Factory function untuk easy service registry creation
def create_service_registry(db_session, config: dict, current_user: str = None,
                            dispatcher: HttpDispatcher = None) -> ServiceRegistry:
    """Factory function untuk membuat ServiceRegistry"""
    return ServiceRegistry(db_session, config, current_user, dispatcher)
