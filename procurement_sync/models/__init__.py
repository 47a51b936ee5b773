"""
Procurement ERP Sync Models Package
===================================

This package contains the database models used by the outbound ERP
synchronization engine. Models are organized by domain.

Domain Structure:
- Core: Base model and declarative base
- Procurement: Invoice and Purchase Order snapshots (owned by the procurement app)
- Integration: ERP integration configuration and sync audit log
"""

# ==================== CORE IMPORTS ====================

from .base import Base, BaseModel

# ==================== PROCUREMENT DOMAIN ====================

from .procurement import (
    Invoice,
    PurchaseOrder,
)

# ==================== INTEGRATION DOMAIN ====================

from .integration import (
    ERPIntegration,
    ERPSyncLog,
)

# ==================== ALL MODEL EXPORTS ====================

__all__ = [
    # Core
    'Base', 'BaseModel',

    # Procurement domain
    'Invoice', 'PurchaseOrder',

    # Integration domain
    'ERPIntegration', 'ERPSyncLog',
]
