"""
ERP Sync Service
================

CRITICAL SERVICE untuk outbound sync Invoice dan Purchase Order ke ERP.

Alur per entity:
    SyncLogger.begin -> FieldMapper -> endpoint & headers -> HttpDispatcher
    -> parse response -> SyncLogger.complete

Kegagalan satu entity (termasuk endpoint/field mapping yang rusak untuk
entity type itu) hanya dicatat di sync log dan dihitung sebagai failed;
batch tetap jalan. Error level request (integration tidak ada atau tidak
bisa dipakai, entity tidak ada) naik ke caller sebelum ada entity yang
disentuh.
"""

import time
import traceback
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..base import BaseService
from ..exceptions import FieldMappingError, IntegrationConfigError, SyncServiceException
from ...schemas.enums import EntityType, SyncAction, SyncStatus
from ...schemas.integration import IntegrationConfigSchema
from ...schemas.sync import SyncRequestSchema
from .auth_strategy import resolve_auth_headers
from .entity_fetcher import EntityFetcher, SyncableEntity
from .field_mapper import FieldMapper
from .http_dispatcher import HttpDispatcher
from .integration_registry import IntegrationRegistry, validation_errors
from .sync_logger import SyncLogger


def run_status(synced: int, failed: int) -> SyncStatus:
    """Status integration setelah satu run"""
    if failed == 0:
        return SyncStatus.SUCCESS
    if synced > 0:
        return SyncStatus.PARTIAL
    return SyncStatus.FAILED


def extract_erp_reference(response_payload: Any) -> Tuple[Optional[str], Optional[str]]:
    """Best-effort ambil (reference id, reference number) dari response ERP"""
    if not isinstance(response_payload, dict):
        return None, None
    data = response_payload.get('data')
    if not isinstance(data, dict):
        data = {}

    reference_id = response_payload.get('id') or response_payload.get('documentId') or data.get('id')
    reference_number = (response_payload.get('documentNumber') or response_payload.get('number')
                        or data.get('documentNumber'))
    return (
        str(reference_id) if reference_id is not None else None,
        str(reference_number) if reference_number is not None else None,
    )


def parse_response_payload(response: Optional[httpx.Response]) -> Any:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return {'raw': response.text}


class ERPSyncService(BaseService):
    """Coordinator untuk sync_all dan sync_entity"""

    def __init__(self, db_session, current_user: Optional[str] = None,
                 integration_registry: IntegrationRegistry = None,
                 entity_fetcher: EntityFetcher = None,
                 sync_logger: SyncLogger = None,
                 dispatcher: HttpDispatcher = None,
                 field_mapper: FieldMapper = None):
        super().__init__(db_session, current_user)
        self.integration_registry = integration_registry or IntegrationRegistry(db_session, current_user)
        self.entity_fetcher = entity_fetcher or EntityFetcher(db_session, current_user)
        self.sync_logger = sync_logger or SyncLogger(db_session, current_user)
        self.dispatcher = dispatcher or HttpDispatcher()
        self.field_mapper = field_mapper or FieldMapper()

    async def run(self, request: SyncRequestSchema, triggered_by: Optional[str] = None) -> Dict[str, int]:
        """Dispatch request yang sudah divalidasi ke sync_all / sync_entity"""
        triggered_by = triggered_by or self.current_user
        if request.action is SyncAction.SYNC_ALL:
            return await self.sync_all(request.integration_id, triggered_by)
        return await self.sync_entity(request.integration_id, request.entity_type,
                                      request.entity_id, triggered_by)

    async def sync_all(self, integration_id: str, triggered_by: Optional[str] = None) -> Dict[str, int]:
        """Sync semua Invoice dan PO yang eligible, sequential"""
        integration = await self.integration_registry.load(integration_id)
        self.logger.info(f"ERP sync_all started: integration={integration_id} ({integration.name}, {integration.erp_type.value})")

        synced = 0
        failed = 0
        for entity_type in EntityType:
            entities = await self.entity_fetcher.fetch_eligible(entity_type, integration)
            for entity in entities:
                if await self._sync_single_entity(integration, entity_type, entity, triggered_by):
                    synced += 1
                else:
                    failed += 1

        return await self._finish_run(integration_id, synced, failed)

    async def sync_entity(self, integration_id: str, entity_type: EntityType, entity_id: str,
                          triggered_by: Optional[str] = None) -> Dict[str, int]:
        """Sync satu entity by ID"""
        integration = await self.integration_registry.load(integration_id)
        entity_type = EntityType(entity_type)
        entity = await self.entity_fetcher.fetch_one(entity_type, entity_id)
        self.logger.info(f"ERP sync_entity started: integration={integration_id} {entity_type.value}={entity_id}")

        success = await self._sync_single_entity(integration, entity_type, entity, triggered_by)
        return await self._finish_run(integration_id, 1 if success else 0, 0 if success else 1)

    async def _finish_run(self, integration_id: str, synced: int, failed: int) -> Dict[str, int]:
        status = run_status(synced, failed)
        await self.integration_registry.record_run(integration_id, status)
        self.logger.info(f"ERP sync completed: integration={integration_id} synced={synced} "
                         f"failed={failed} status={status.value}")
        return {'synced': synced, 'failed': failed}

    async def _sync_single_entity(self, integration: IntegrationConfigSchema, entity_type: EntityType,
                                  entity: SyncableEntity, triggered_by: Optional[str]) -> bool:
        """Satu percobaan sync; tidak pernah raise setelah log dibuat"""
        log_id = await self.sync_logger.begin(integration.id, entity_type, entity, triggered_by)
        started = time.monotonic()
        payload = None

        try:
            mappings, endpoint, method = self._routing_for(integration, entity_type)
            payload = self.field_mapper.map_fields(entity, mappings)

            headers = {'Content-Type': 'application/json'}
            headers.update(integration.request_headers)
            headers.update(resolve_auth_headers(integration.auth_type, integration.auth_config))

            url = f"{integration.base_url}{endpoint}"
            self.logger.info(f"Syncing {entity_type.value} {entity.get('id')} to {method} {url}")

            result = await self.dispatcher.send(
                url, method, headers, payload,
                timeout_seconds=integration.request_timeout_seconds,
                retry_attempts=integration.retry_attempts
            )

            response_payload = parse_response_payload(result.response)
            erp_reference_id, erp_reference_number = extract_erp_reference(response_payload)
            error = result.error

            await self.sync_logger.complete(
                log_id,
                status=SyncStatus.SUCCESS if result.ok else SyncStatus.FAILED,
                request_payload=payload,
                response_payload=response_payload,
                response_code=result.response.status_code if result.response is not None else None,
                error_message=error.message if error else None,
                error_details={'message': error.message, **error.details} if error and error.details else None,
                retry_count=result.attempts,
                erp_reference_id=erp_reference_id,
                erp_reference_number=erp_reference_number,
                duration_ms=self._elapsed_ms(started)
            )
            if not result.ok:
                self.logger.warning(f"Sync {entity_type.value} {entity.get('id')} failed: {error.message}")
            return result.ok

        except Exception as e:
            self.logger.exception(f"Sync {entity_type.value} {entity.get('id')} failed")
            details = e.details if isinstance(e, SyncServiceException) else {}
            await self.sync_logger.complete(
                log_id,
                status=SyncStatus.FAILED,
                request_payload=payload,
                error_message=str(e),
                error_details={'message': str(e), **details, 'stack': traceback.format_exc()},
                duration_ms=self._elapsed_ms(started)
            )
            return False

    @staticmethod
    def _routing_for(integration: IntegrationConfigSchema,
                     entity_type: EntityType) -> Tuple[Dict[str, str], str, str]:
        """Field mapping dan (path, method) untuk satu entity type; error dicatat per entity"""
        try:
            mappings = integration.field_mappings_for(entity_type)
        except PydanticValidationError as e:
            raise FieldMappingError(
                f"Invalid {entity_type.value} field mapping for integration {integration.id}",
                details={'errors': validation_errors(e)}
            )
        try:
            endpoint, method = integration.endpoint_for(entity_type)
        except PydanticValidationError as e:
            raise IntegrationConfigError(
                f"Invalid {entity_type.value} endpoint mapping for integration {integration.id}",
                integration.id,
                details={'errors': validation_errors(e)}
            )
        return mappings, endpoint, method

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.monotonic() - started) * 1000)
