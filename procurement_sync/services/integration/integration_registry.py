"""
ERP Integration Registry
========================

Load dan validasi konfigurasi integration yang aktif.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..base import BaseService, transactional
from ..exceptions import IntegrationConfigError
from ...models import ERPIntegration
from ...schemas.enums import SyncStatus
from ...schemas.integration import IntegrationConfigSchema


def validation_errors(error: PydanticValidationError) -> List[Dict[str, Any]]:
    """Ringkas pydantic errors jadi list {field, message}"""
    return [
        {'field': '.'.join(str(loc) for loc in item['loc']), 'message': item['msg']}
        for item in error.errors()
    ]


class IntegrationRegistry(BaseService):
    """Akses ke tabel erp_integrations"""

    async def load(self, integration_id: str) -> IntegrationConfigSchema:
        """
        Integration aktif by ID; NotFoundError kalau tidak ada atau inactive.
        IntegrationConfigError kalau field yang dipakai semua entity (base_url,
        auth, timeout, retry) tidak valid.
        """
        integration = await self._get_or_404(ERPIntegration, integration_id, ERPIntegration.is_active.is_(True))
        try:
            return IntegrationConfigSchema.model_validate(integration)
        except PydanticValidationError as e:
            errors = validation_errors(e)
            self.logger.error(f"Integration {integration_id} has invalid configuration: {errors}")
            raise IntegrationConfigError(
                f"Integration {integration_id} has invalid configuration",
                integration_id,
                details={'errors': errors}
            )

    @transactional
    async def record_run(self, integration_id: str, status: SyncStatus,
                         finished_at: Optional[datetime] = None) -> None:
        """Update last_sync_at / last_sync_status setelah satu sync run"""
        integration = await self._get_or_404(ERPIntegration, integration_id)
        integration.last_sync_at = finished_at or datetime.utcnow()
        integration.last_sync_status = SyncStatus(status).value
        await self.db_session.flush()
