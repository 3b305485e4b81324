"""JWT token creation and verification for back-office access tokens."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from villa_booking.config import settings

ADMIN_SUBJECT = "admin"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create an access token.

    Args:
        data: Payload data. Must include ``sub``.
        expires_delta: Custom expiration duration. Defaults to
            ``settings.jwt_access_token_expire_minutes`` minutes.

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes))
    to_encode.update({"exp": expire, "iat": now, "type": "access"})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_admin_token(expires_delta: timedelta | None = None) -> str:
    """Create the access token handed out after a successful admin login."""
    return create_access_token({"sub": ADMIN_SUBJECT, "role": "admin"}, expires_delta)


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises:
        jose.JWTError: If the token is invalid, expired, or malformed.
    """
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
