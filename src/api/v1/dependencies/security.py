import logging
import sys
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from api.v1.utils.jwt_utils import extract_user_id, verify_jwt
from shared.config import get_config

logger = logging.getLogger(__name__)

# Set once at application startup
_JWT_SECRET: Optional[str] = None


def initialize_api_security(secret: Optional[str] = None):
    """Called at startup; loads the JWT secret from config unless given one."""
    global _JWT_SECRET
    secret = secret or get_config().auth.jwt_secret
    if not secret:
        logger.critical("Fatal: no JWT secret configured (auth.jwt_secret / JWT_SECRET)")
        logger.critical("Exiting")
        sys.exit(1)

    _JWT_SECRET = secret
    logger.info("API security initialized")


def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        return token or None
    return None


async def get_current_user_id(request: Request) -> Optional[int]:
    """
    Resolve the caller from the Authorization bearer token.

    Returns None when there is no token or it does not verify; routes with
    optional authentication simply continue anonymously.
    """
    if not _JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication is not initialized",
        )

    token = _bearer_token(request)
    if not token:
        return None

    payload = verify_jwt(token, _JWT_SECRET)
    if payload is None:
        logger.debug("Rejected bearer token")
        return None
    return extract_user_id(payload)


async def require_auth(
    user_id: Optional[int] = Depends(get_current_user_id),
) -> int:
    """
    Dependency for routes that need a caller identity.

    Raises 401 when the token is missing or invalid.
    """
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
