"""
Base Service Classes
====================

Base classes dan utilities untuk semua services
"""

from abc import ABC
from typing import Optional
from functools import wraps
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .exceptions import NotFoundError

logger = logging.getLogger(__name__)

def transactional(func):
    """Decorator untuk automatic transaction management"""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            result = await func(self, *args, **kwargs)
            if hasattr(self, 'db_session') and self.db_session:
                await self.db_session.commit()
            return result
        except Exception as e:
            if hasattr(self, 'db_session') and self.db_session:
                await self.db_session.rollback()
            logger.error(f"Transaction failed in {func.__name__}: {str(e)}")
            raise
    return wrapper

class BaseService(ABC):
    """Base service class dengan common functionality"""

    def __init__(self, db_session: AsyncSession, current_user: Optional[str] = None):
        self.db_session = db_session
        self.current_user = current_user
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _get_or_404(self, model_class, entity_id: str, *conditions):
        """Get entity by ID (plus optional extra filters) or raise 404 error"""
        query = select(model_class).filter(model_class.id == entity_id, *conditions)
        result = await self.db_session.execute(query)
        entity = result.scalars().first()
        if not entity:
            raise NotFoundError(model_class.__name__, entity_id)
        return entity
