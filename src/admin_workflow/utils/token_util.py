import logging
from typing import Any, Dict, Optional

import jwt

from admin_workflow.config import settings

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a token issued by the login service and return its claims, or
    None if the signature, expiry or format is wrong.
    """
    try:
        return jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected access token: {e}")
        return None
