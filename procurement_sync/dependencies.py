"""
API Dependencies
================

FastAPI dependencies for the ERP sync application.
"""

import logging
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import jwt

from .services import create_service_registry
from .database import get_db_session
from .config import settings
from .services.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# auto_error=False supaya request tanpa token selalu jadi 401, bukan 403
security = HTTPBearer(auto_error=False)


def verify_access_token(token: str) -> str:
    """Decode bearer token dan return user id pemanggil (claim sub / user_id)"""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={'verify_aud': False}
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid authentication credentials")

    user_id = payload.get('sub') or payload.get('user_id')
    if not user_id:
        raise AuthenticationError("Invalid authentication credentials")
    return str(user_id)


# Dependency untuk get current user
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """Get current authenticated user id"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Unauthorized")
    return verify_access_token(credentials.credentials)


# Dependency untuk get service registry
async def get_service_registry(
    db_session = Depends(get_db_session),
    current_user: str = Depends(get_current_user)
):
    """Get service registry dengan current user"""
    return create_service_registry(
        db_session=db_session,
        config=settings.model_dump(),
        current_user=current_user
    )
