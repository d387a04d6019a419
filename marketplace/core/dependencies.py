from typing import Optional
import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from marketplace.core.security import decode_token
from marketplace.utils.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """Resolve the authenticated user id from the bearer token.

    Only the id leaves this function; every core call receives it explicitly.
    """
    if not credentials:
        raise UnauthorizedError("Authentication required")

    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")

    user_id_str = payload.get("sub")
    if user_id_str is None:
        raise UnauthorizedError("Invalid token payload")

    try:
        return int(user_id_str)
    except (ValueError, TypeError):
        logger.warning(f"Rejected token with malformed subject: {user_id_str!r}")
        raise UnauthorizedError("Invalid token payload")
