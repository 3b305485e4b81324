"""FastAPI authentication dependencies for back-office route protection."""

import hmac

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from villa_booking.auth.jwt import ADMIN_SUBJECT, decode_token
from villa_booking.config import settings

# Optional bearer so a missing header yields 401 rather than 403
_bearer_scheme = HTTPBearer(auto_error=False)


def verify_admin_password(password: str) -> bool:
    """Constant-time check against ``settings.admin_password``.

    An unset admin password never matches, which disables admin login.
    """
    expected = settings.admin_password
    if not expected or not password:
        return False
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """Validate the admin Bearer token and return its subject.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired or not an admin token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise credentials_exception from None

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("sub") != ADMIN_SUBJECT or payload.get("role") != "admin":
        raise credentials_exception

    return ADMIN_SUBJECT
