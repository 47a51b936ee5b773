"""
ERP Sync Logger
===============

Durable audit trail: satu baris erp_sync_logs per percobaan sync entity.
Baris dibuat in_progress, lalu di-complete tepat satu kali ke success/failed.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..base import BaseService, transactional
from ..exceptions import SyncLogStateError
from ...models import ERPSyncLog
from ...schemas.enums import EntityType, SyncStatus, TERMINAL_LOG_STATUSES


class SyncLogger(BaseService):
    """Service untuk erp_sync_logs (append lalu complete, tidak pernah delete)"""

    @transactional
    async def begin(self, integration_id: str, entity_type: EntityType,
                    entity: Dict[str, Any], triggered_by: Optional[str] = None) -> str:
        """Insert baris in_progress dan return id-nya"""
        sync_log = ERPSyncLog(
            integration_id=integration_id,
            entity_type=entity_type.value,
            entity_id=str(entity.get('id')),
            entity_reference=entity.get(entity_type.reference_field),
            sync_direction='outbound',
            status=SyncStatus.IN_PROGRESS.value,
            retry_count=0,
            triggered_by=triggered_by,
            started_at=datetime.utcnow()
        )
        self.db_session.add(sync_log)
        await self.db_session.flush()
        return sync_log.id

    @transactional
    async def complete(self, log_id: str, status: SyncStatus,
                       request_payload: Any = None,
                       response_payload: Any = None,
                       response_code: Optional[int] = None,
                       error_message: Optional[str] = None,
                       error_details: Optional[Dict[str, Any]] = None,
                       retry_count: int = 0,
                       erp_reference_id: Optional[str] = None,
                       erp_reference_number: Optional[str] = None,
                       duration_ms: Optional[int] = None) -> ERPSyncLog:
        """Pindahkan baris ke status terminal; hanya boleh sekali"""
        status = SyncStatus(status)
        if status not in TERMINAL_LOG_STATUSES:
            raise SyncLogStateError(f"Sync log can only be completed as success or failed, got '{status.value}'", log_id)

        sync_log = await self._get_or_404(ERPSyncLog, log_id)
        if sync_log.status != SyncStatus.IN_PROGRESS.value:
            raise SyncLogStateError(f"Sync log {log_id} is already {sync_log.status}", log_id)

        sync_log.status = status.value
        sync_log.request_payload = request_payload
        sync_log.response_payload = response_payload
        sync_log.response_code = response_code
        sync_log.error_message = error_message
        sync_log.error_details = error_details
        sync_log.retry_count = retry_count
        sync_log.erp_reference_id = erp_reference_id
        sync_log.erp_reference_number = erp_reference_number
        sync_log.completed_at = datetime.utcnow()
        sync_log.duration_ms = duration_ms

        await self.db_session.flush()
        return sync_log

    async def list_logs(self, integration_id: Optional[str] = None,
                        status: Optional[SyncStatus] = None,
                        entity_type: Optional[EntityType] = None,
                        limit: int = 100) -> List[ERPSyncLog]:
        """Log terbaru dulu, lengkap dengan nama integration"""
        query = select(ERPSyncLog).options(selectinload(ERPSyncLog.integration))
        if integration_id:
            query = query.filter(ERPSyncLog.integration_id == integration_id)
        if status:
            query = query.filter(ERPSyncLog.status == SyncStatus(status).value)
        if entity_type:
            query = query.filter(ERPSyncLog.entity_type == EntityType(entity_type).value)
        query = query.order_by(ERPSyncLog.created_at.desc()).limit(limit)

        result = await self.db_session.execute(query)
        return list(result.scalars().all())
