"""
Schemas Package
===============

Pydantic schemas untuk serialization dan validation
"""

from .base import (
    BaseSchema,
)

from .enums import (
    AuthType,
    EntityType,
    SyncAction,
    SyncStatus,
    ERPType,
    TERMINAL_LOG_STATUSES,
)

# ==================== INTEGRATION DOMAIN ====================
from .integration import (
    EndpointMappingSchema,
    IntegrationConfigSchema,
)

# ==================== SYNC DOMAIN ====================
from .sync import (
    SyncRequestSchema,
    SyncResultSchema,
    SyncLogSchema,
)

__all__ = [
    # Base
    'BaseSchema',

    # Enums
    'AuthType', 'EntityType', 'SyncAction', 'SyncStatus', 'ERPType',
    'TERMINAL_LOG_STATUSES',

    # Integration domain
    'EndpointMappingSchema', 'IntegrationConfigSchema',

    # Sync domain
    'SyncRequestSchema', 'SyncResultSchema', 'SyncLogSchema',
]
