"""
ERP Auth Strategy
=================

Membangun auth headers untuk request ke ERP berdasarkan auth_type dan
auth_config milik integration. Pure function, tanpa I/O.
"""

import base64
from typing import Dict, Mapping, Optional

from ...schemas.enums import AuthType


def resolve_auth_headers(auth_type: Optional[AuthType], auth_config: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Return header map untuk satu auth scheme.

    - api_key -> X-API-Key
    - bearer  -> Authorization: Bearer <bearer_token>
    - basic   -> Authorization: Basic base64(username:password)
    - oauth2  -> Authorization: Bearer <access_token> (token refresh tidak ditangani)

    Auth type yang tidak dikenal (None) tidak menghasilkan header apa pun.
    """
    config = auth_config or {}

    if auth_type is AuthType.API_KEY:
        return {'X-API-Key': config.get('api_key') or ''}
    elif auth_type is AuthType.BEARER:
        return {'Authorization': f"Bearer {config.get('bearer_token') or ''}"}
    elif auth_type is AuthType.BASIC:
        credentials = f"{config.get('username') or ''}:{config.get('password') or ''}"
        encoded = base64.b64encode(credentials.encode('utf-8')).decode('ascii')
        return {'Authorization': f"Basic {encoded}"}
    elif auth_type is AuthType.OAUTH2:
        return {'Authorization': f"Bearer {config.get('access_token') or ''}"}
    return {}
