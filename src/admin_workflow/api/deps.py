"""
Guards that run before the admin handlers.

Handlers never check privileges themselves: they declare one of these
dependencies and receive the verified caller id as a parameter.
"""

import logging
from typing import Optional

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from admin_workflow.errors import ForbiddenError, UnauthorizedError
from admin_workflow.models.db.user import User, UserRole
from admin_workflow.utils.token_util import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> PydanticObjectId:
    """Verify the bearer token and return the caller's account id."""
    if credentials is None:
        raise UnauthorizedError()

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError()

    raw_user_id = payload.get("sub") or payload.get("id")
    if not raw_user_id:
        raise UnauthorizedError()
    try:
        return PydanticObjectId(raw_user_id)
    except (InvalidId, TypeError):
        logger.warning(f"Token subject {raw_user_id!r} is not an account id")
        raise UnauthorizedError()


async def require_admin(
    caller_id: PydanticObjectId = Depends(get_current_user_id),
) -> PydanticObjectId:
    """Let the request through only if the caller's account has the admin role."""
    caller = await User.get(caller_id)
    if caller is None or caller.role != UserRole.ADMIN.value:
        logger.warning(f"Admin access denied for user {caller_id}")
        raise ForbiddenError()
    return caller_id
