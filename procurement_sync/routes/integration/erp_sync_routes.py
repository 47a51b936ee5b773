"""
ERP Sync Routes
===============

CRITICAL ROUTES untuk push Invoice dan Purchase Order ke ERP
"""

from fastapi import APIRouter, Depends, Query
from typing import Dict, Any, Optional

from ...dependencies import get_current_user, get_service_registry
from ...responses import APIResponse
from ...services import ServiceRegistry
from ...schemas import SyncRequestSchema, SyncResultSchema, SyncLogSchema, SyncStatus, EntityType

router = APIRouter()

@router.post("", response_model=SyncResultSchema)
async def run_erp_sync(
    sync_request: SyncRequestSchema,
    current_user: str = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Jalankan outbound sync ke ERP

    **Body:**
    - integrationId: ID integration yang aktif
    - action: sync_all | sync_entity
    - entityType / entityId: wajib untuk sync_entity

    Kegagalan per entity tidak menggagalkan request; detailnya ada di sync log.
    """
    result = await service_registry.erp_sync_service.run(sync_request, triggered_by=current_user)
    return APIResponse.sync_result(result['synced'], result['failed'])

@router.get("/logs", response_model=Dict[str, Any])
async def get_sync_logs(
    integration_id: Optional[str] = Query(None),
    status_filter: Optional[SyncStatus] = Query(None, alias="status"),
    entity_type: Optional[EntityType] = Query(None),
    limit: int = Query(100, ge=1, le=100),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Get sync logs terbaru

    **Query Parameters:**
    - integration_id: Filter by integration
    - status: in_progress, success, failed
    - entity_type: invoice, purchase_order
    - limit: max rows (default: 100, max: 100)
    """
    logs = await service_registry.sync_logger.list_logs(
        integration_id=integration_id,
        status=status_filter,
        entity_type=entity_type,
        limit=limit
    )
    return APIResponse.success(
        data=[SyncLogSchema.model_validate(log).model_dump(mode='json') for log in logs],
        message="Sync logs retrieved successfully"
    )
