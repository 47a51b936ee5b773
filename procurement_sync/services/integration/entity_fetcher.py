"""
ERP Entity Fetcher
==================

Memilih Invoice / Purchase Order yang eligible untuk di-push ke ERP dan
mengubahnya menjadi snapshot dict yang JSON-safe.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic_core import to_jsonable_python
from sqlalchemy import select

from ..base import BaseService
from ...models import Invoice, PurchaseOrder
from ...schemas.enums import EntityType
from ...schemas.integration import IntegrationConfigSchema

SyncableEntity = Dict[str, Any]

DEFAULT_BATCH_LIMIT = 50


class EntityFetcher(BaseService):
    """Read-only akses ke tabel procurement untuk sync engine"""

    ELIGIBLE_STATUSES = {
        EntityType.INVOICE: ('approved', 'paid'),
        EntityType.PURCHASE_ORDER: ('approved', 'sent', 'acknowledged'),
    }

    def __init__(self, db_session, current_user: Optional[str] = None,
                 batch_limit: int = DEFAULT_BATCH_LIMIT):
        super().__init__(db_session, current_user)
        self.batch_limit = batch_limit

    @staticmethod
    def model_for(entity_type: EntityType):
        if entity_type is EntityType.INVOICE:
            return Invoice
        return PurchaseOrder

    async def fetch_eligible(self, entity_type: EntityType,
                             integration: IntegrationConfigSchema) -> List[SyncableEntity]:
        """Entity dengan status eligible, terbaru dulu, maksimal batch_limit"""
        if not integration.scope_enabled(entity_type):
            return []

        model_class = self.model_for(entity_type)
        query = (
            select(model_class)
            .filter(model_class.status.in_(self.ELIGIBLE_STATUSES[entity_type]))
            .order_by(model_class.created_at.desc())
            .limit(self.batch_limit)
        )
        result = await self.db_session.execute(query)
        return [self.to_snapshot(row) for row in result.scalars().all()]

    async def fetch_one(self, entity_type: EntityType, entity_id: str) -> SyncableEntity:
        """Satu entity by ID, tanpa filter status; NotFoundError kalau tidak ada"""
        entity = await self._get_or_404(self.model_for(entity_type), entity_id)
        return self.to_snapshot(entity)

    @staticmethod
    def to_snapshot(row) -> SyncableEntity:
        values = {column.key: getattr(row, column.key) for column in row.__table__.columns}
        # ERP menerima amount sebagai number, bukan string
        values = {key: float(value) if isinstance(value, Decimal) else value for key, value in values.items()}
        return to_jsonable_python(values)
