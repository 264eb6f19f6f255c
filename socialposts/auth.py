import logging
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from . import config
from .errors import Unauthorized
from .models.user import CurrentUser

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> CurrentUser:
    """Verify a bearer token issued by the auth service and read the identity from it."""
    payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    user_id = payload.get("id")
    if not user_id:
        raise jwt.InvalidTokenError("Token has no id claim")
    return CurrentUser(
        id=str(user_id),
        name=payload.get("name"),
        avatar=payload.get("avatar"),
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    if credentials is None:
        raise Unauthorized("msg", "Invalid authorization header")
    try:
        return decode_token(credentials.credentials)
    except jwt.PyJWTError as e:
        logger.warning("Rejected bearer token: %s", e)
        raise Unauthorized("msg", "Invalid or expired token")
