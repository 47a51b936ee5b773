"""
Integration Domain Routes
=========================

Routes untuk outbound ERP sync
"""

from .erp_sync_routes import router as erp_sync_router

__all__ = ['erp_sync_router']
