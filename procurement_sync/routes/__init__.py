"""
ERP Sync Routes Module
======================

API Routes untuk ERP sync application
FastAPI-based REST API dengan authentication dan validation
"""

from .integration import erp_sync_router

__all__ = ['erp_sync_router']
