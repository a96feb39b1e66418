"""JWT bearer authentication for HTTP routes."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.application.dtos.base import DTO
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger

ADMIN_ROLE = "admin"

_bearer_scheme = HTTPBearer(auto_error=False)


class AuthenticatedUser(DTO):
    """Caller identity taken from a verified access token."""

    username: str
    roles: tuple[str, ...] = ()

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


def create_access_token(
    username: str,
    roles: tuple[str, ...] = (),
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        username: Token subject
        roles: Roles granted to the subject
        expires_delta: Token lifetime (defaults to the configured lifetime)

    Returns:
        Encoded JWT
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    claims = {
        "sub": username,
        "roles": list(roles),
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AuthenticatedUser:
    """
    Verify a token and extract the caller identity.

    Args:
        token: Encoded JWT

    Returns:
        AuthenticatedUser

    Raises:
        JWTError: If the token is invalid, expired or has no subject
    """
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    username = payload.get("sub")
    if not username:
        raise JWTError("Token has no subject")
    return AuthenticatedUser(username=username, roles=tuple(payload.get("roles") or ()))


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> AuthenticatedUser:
    """FastAPI dependency resolving the authenticated caller (401 otherwise)."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Rejected access token: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def require_admin(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
    """FastAPI dependency allowing only admins (403 otherwise)."""
    if not user.is_admin:
        logger.warning(f"User '{user.username}' attempted an admin operation")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return user
